import base64
import io
import json

import pytest

from opencat.image import Image, encode_default
from opencat.utils import create_image, create_message, create_chat_request, create_speech_request


class FailingReader:
    """Reader that returns one chunk and then fails."""

    def __init__(self):
        self.calls = 0

    def read(self, size=-1):
        self.calls += 1
        if self.calls == 1:
            return b"partial"
        raise OSError("disk went away")


class TestImage:

    def test_bytes_to_json(self):
        assert Image(b"Hello").to_json() == '"data:image/jpeg;base64,SGVsbG8="'

    def test_stream_matches_standard_base64(self):
        data = bytes(range(256)) * 700
        assert Image(io.BytesIO(data)).to_data_uri() == "data:image/jpeg;base64," + base64.b64encode(data).decode()

    def test_bytes_reusable(self):
        image = Image(b"abc")
        assert image.to_data_uri() == image.to_data_uri()

    def test_single_pass_source_encodes_once(self):
        image = Image(io.BytesIO(b"abc"))
        assert image.to_data_uri() == "data:image/jpeg;base64,YWJj"
        with pytest.raises(RuntimeError, match="already consumed"):
            image.to_data_uri()

    def test_read_error_propagates(self):
        with pytest.raises(OSError, match="disk went away"):
            Image(FailingReader()).to_data_uri()

    def test_unsupported_source(self):
        with pytest.raises(TypeError):
            Image(12345)

    def test_json_default_hook(self):
        encoded = json.dumps({"images": [Image(b"abc")]}, default=encode_default)
        assert encoded == '{"images": ["data:image/jpeg;base64,YWJj"]}'

    def test_json_default_rejects_other_objects(self):
        with pytest.raises(TypeError):
            json.dumps({"x": object()}, default=encode_default)

    def test_from_path(self, tmp_path):
        path = tmp_path / "cat.jpg"
        path.write_bytes(b"image data")
        # "image data" in base64 is "aW1hZ2UgZGF0YQ=="
        assert Image.from_path(path).to_data_uri() == "data:image/jpeg;base64,aW1hZ2UgZGF0YQ=="

    def test_from_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Image.from_path(tmp_path / "missing.jpg")


class TestUtils:

    def test_create_message_text(self):
        msg = create_message("user", "Hello world")
        assert msg == {"role": "user", "content": "Hello world"}

    def test_create_message_with_images(self, tmp_path):
        path = tmp_path / "a.jpg"
        path.write_bytes(b"a")
        existing = Image(b"b")
        msg = create_message("user", "Look at this", images=[str(path), b"raw", existing])
        assert msg["role"] == "user"
        assert len(msg["images"]) == 3
        assert all(isinstance(img, Image) for img in msg["images"])
        assert msg["images"][2] is existing

    def test_create_image_from_file_object(self):
        image = create_image(io.BytesIO(b"abc"))
        assert not image.reusable

    def test_create_chat_request(self):
        request = create_chat_request("gpt-4", [create_message("user", "hi")], temperature=1, stream=True)
        assert request == {
            "model": "gpt-4",
            "temperature": 1,
            "max_tokens": 0,
            "stream": True,
            "messages": [{"role": "user", "content": "hi"}],
        }

    def test_create_speech_request(self):
        assert create_speech_request("hi", "alloy") == {"input": "hi", "voice": "alloy", "model": "tts-1"}
