from .client import OpenCatClient
from .errors import OpenCatError, APIError, ProtocolMismatchError, StreamContentTypeError
from .image import Image
from .router import select_dialect, get_dialect
from .types import (
    Message, ChatRequest, ChatResponse, ChatResponseChoice, StreamEvent,
    ImageRequest, SpeechRequest, Usage, Dialect, AZURE_SPEECH_MODEL,
)
from .utils import create_message, create_image, create_chat_request, create_speech_request
from .rich_llm_printer import RichPrinter, RichStreamPrinter

__all__ = [
    "OpenCatClient",
    "OpenCatError",
    "APIError",
    "ProtocolMismatchError",
    "StreamContentTypeError",
    "Image",
    "select_dialect",
    "get_dialect",
    "Message",
    "ChatRequest",
    "ChatResponse",
    "ChatResponseChoice",
    "StreamEvent",
    "ImageRequest",
    "SpeechRequest",
    "Usage",
    "Dialect",
    "AZURE_SPEECH_MODEL",
    "create_message",
    "create_image",
    "create_chat_request",
    "create_speech_request",
    "RichPrinter",
    "RichStreamPrinter",
]
