from pathlib import Path
from typing import Union, List, Optional, BinaryIO, Sequence

from .image import Image
from .types import ChatRequest, Message, Role, SpeechRequest

# =============================================================================
# Image Helpers
# =============================================================================

ImageSource = Union[Image, bytes, bytearray, str, Path, BinaryIO]


def create_image(source: ImageSource) -> Image:
    """
    Create an :class:`Image` from a supported source.

    Args:
        source: Can be:
            - An existing ``Image`` (returned as-is)
            - Raw image bytes
            - A local file path (``str`` or ``Path``)
            - A binary file object opened for reading (single-pass)

    Returns:
        Image: Image ready to attach to a message.

    Raises:
        FileNotFoundError: If a path is given and the file does not exist.
    """
    if isinstance(source, Image):
        return source
    if isinstance(source, (str, Path)):
        return Image.from_path(source)
    return Image(source)


# =============================================================================
# Message / Request Helpers
# =============================================================================

def create_message(
    role: Role,
    content: str,
    images: Optional[Sequence[ImageSource]] = None,
) -> Message:
    """
    Create a standardized Message object.

    Args:
        role (str): The role of the message sender ('system', 'user', 'assistant').
        content (str): The text of the message.
        images (Sequence, optional): Images to attach; each item is passed
                                     through :func:`create_image`.

    Returns:
        Message: A dictionary matching the Message type definition.
    """
    message: Message = {"role": role, "content": content}
    if images:
        message["images"] = [create_image(img) for img in images]
    return message


def create_chat_request(
    model: str,
    messages: List[Message],
    *,
    temperature: float = 0.0,
    max_tokens: int = 0,
    stream: bool = False,
) -> ChatRequest:
    """
    Create a canonical chat request.

    Zero ``temperature`` / ``max_tokens`` leave the choice to the gateway for
    OpenAI-compatible models.
    """
    return {
        "model": model,
        "temperature": temperature,
        "max_tokens": max_tokens,
        "stream": stream,
        "messages": list(messages),
    }


def create_speech_request(text: str, voice: str, model: str = "tts-1") -> SpeechRequest:
    return {"input": text, "voice": voice, "model": model}
