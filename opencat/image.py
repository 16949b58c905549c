import base64
import json
from pathlib import Path
from typing import Any, BinaryIO, Union

DATA_URI_PREFIX = "data:image/jpeg;base64,"

# Multiple of 3 so chunks base64-encode without padding in between
_CHUNK_SIZE = 3 * 1024 * 16


class Image:
    """
    Image attached to a chat message.

    Holds a byte source and encodes it to a base64 data URI only when the
    request body is serialized. ``bytes`` sources can be encoded any number
    of times; a readable source (anything with ``read(n)``) is single-pass
    and can be encoded exactly once.
    """

    def __init__(self, source: Union[bytes, bytearray, BinaryIO]):
        if isinstance(source, (bytes, bytearray)):
            self._data = bytes(source)
            self._reader = None
        elif hasattr(source, "read"):
            self._data = None
            self._reader = source
        else:
            raise TypeError(f"Unsupported image source: {type(source).__name__}")
        self._consumed = False

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Image":
        """
        Load an image file into memory.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {path}")
        return cls(path.read_bytes())

    @property
    def reusable(self) -> bool:
        return self._data is not None

    def to_data_uri(self) -> str:
        """
        Encode the image as ``data:image/jpeg;base64,<encoded>``.

        Raises:
            RuntimeError: If a single-pass source was already encoded.
            OSError: Any error raised while reading the source.
        """
        if self._data is not None:
            return DATA_URI_PREFIX + base64.b64encode(self._data).decode("ascii")

        if self._consumed:
            raise RuntimeError("Image source already consumed; single-pass sources encode once")
        self._consumed = True

        parts = []
        pending = b""
        while True:
            chunk = self._reader.read(_CHUNK_SIZE)
            if not chunk:
                break
            pending += chunk
            cut = len(pending) - len(pending) % 3
            parts.append(base64.b64encode(pending[:cut]).decode("ascii"))
            pending = pending[cut:]
        parts.append(base64.b64encode(pending).decode("ascii"))
        return DATA_URI_PREFIX + "".join(parts)

    def to_json(self) -> str:
        """Encode the image as a quoted JSON string value."""
        return json.dumps(self.to_data_uri())

    def __repr__(self) -> str:
        kind = "bytes" if self.reusable else "stream"
        return f"Image(source={kind})"


def encode_default(obj: Any) -> Any:
    """
    ``default`` hook for ``json.dumps`` that serializes :class:`Image` values.
    """
    if isinstance(obj, Image):
        return obj.to_data_uri()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
