from typing import Literal, List, Dict, Any, TypedDict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .image import Image

# =============================================================================
# Model Catalogs
# =============================================================================

# Wire dialects multiplexed behind the chat endpoint
Dialect = Literal["openai", "claude"]

Role = Literal["system", "user", "assistant"]

ChatModel = Literal[
    # OpenAI
    "gpt-3.5-turbo",
    "gpt-3.5-turbo-16k",
    "gpt-4",
    "gpt-4-32k",
    "gpt-4-1106-preview",
    "gpt-4-vision-preview",
    # Anthropic Claude
    "claude-instant-v1",
    "claude-2.1",
    # Google Gemini
    "gemini-pro",
    "gemini-pro-vision",
    # Baidu ERNIE
    "ERNIE-Bot",
    "ERNIE-Bot-Turbo",
    "ERNIE-Bot-4",
    # Alibaba Qwen
    "qwen-turbo",
    "qwen-plus",
    # iFlytek SparkDesk
    "SparkDesk-V1.5",
    "SparkDesk-V2.0",
    "SparkDesk-V3.0",
]

ImageModel = Literal["dall-e-2", "dall-e-3", "stable_diffusion_xl"]

SpeechModel = Literal["tts-1", "__azure"]

# Speech model sentinel that routes to the Azure SSML endpoint
AZURE_SPEECH_MODEL = "__azure"


# =============================================================================
# Chat Type Definitions
# =============================================================================

class Message(TypedDict, total=False):
    """
    Chat message with optional inline images.

    Images are only sent by the OpenAI-compatible dialect.
    """
    role: Role
    content: str
    images: List["Image"]


class ChatRequest(TypedDict, total=False):
    """
    Provider-agnostic chat request.

    The ``stream`` flag decides which client operation may be called:
    ``chat`` for False, ``stream_chat``/``astream`` for True.
    """
    model: str
    temperature: float
    max_tokens: int
    stream: bool
    messages: List[Message]


class ChoiceMessage(TypedDict):
    role: Role
    content: str


class ChatResponseChoice(TypedDict):
    index: int
    message: ChoiceMessage
    finish_reason: str


class Usage(TypedDict, total=False):
    """
    Usage record for one product of the account.
    """
    id: str
    limit: int
    product: str
    usage: Dict[str, float]


class ChatResponse(TypedDict, total=False):
    id: str
    object: str
    created: int
    model: str
    choices: List[ChatResponseChoice]
    usage: Optional[Dict[str, Any]]


class StreamEvent(TypedDict, total=False):
    """
    Canonical streaming event.

    - type='token': one delta of generated text, ``done`` is False.
    - type='done': terminal event, ``text`` is empty and ``done`` is True.
    """
    type: Literal["token", "done"]
    text: str
    done: bool
    model: str
    finish_reason: str


# =============================================================================
# Image / Speech Type Definitions
# =============================================================================

class DallEParams(TypedDict, total=False):
    quality: str
    style: str


class StableDiffusionXLParams(TypedDict, total=False):
    steps: int
    sampler: str
    style_preset: str
    scale: int


class ImageRequest(TypedDict, total=False):
    """
    Image generation request, sent verbatim as the JSON body.
    """
    width: int
    height: int
    num: int
    model: str
    prompt: str
    negativePrompt: str
    dallE: DallEParams
    stable_diffusion_xl: StableDiffusionXLParams


class SpeechRequest(TypedDict):
    input: str
    voice: str
    model: str
