import base64
import inspect
import json
import logging
from contextlib import aclosing
from typing import Optional, Dict, List, Any, Callable, AsyncIterator

import httpx

from . import config
from .errors import APIError, ProtocolMismatchError, StreamContentTypeError
from .providers.azure import azure_headers, build_ssml
from .providers.base import require_object
from .router import get_dialect
from .streaming import is_event_stream, iter_stream_events
from .types import (
    AZURE_SPEECH_MODEL, ChatRequest, ChatResponse, ImageRequest,
    SpeechRequest, StreamEvent, Usage,
)

logger = logging.getLogger(__name__)

DeltaCallback = Callable[[str, bool], Any]


class OpenCatClient:
    """
    Client for the OpenCat generative-AI gateway.

    One endpoint fronts several providers. Chat requests are routed by model
    name to the OpenAI-compatible or the Claude-compatible dialect; image,
    speech and usage calls are plain JSON pass-through operations.

    The client keeps no per-call state, so one instance can serve concurrent
    calls. Use it as an async context manager (or call :meth:`aclose`) to
    release the HTTP client it owns.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[httpx.Timeout] = None,
        azure_output_format: Optional[str] = None,
        azure_region: Optional[str] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Bearer token. Defaults to env var OPENCAT_TOKEN.
            base_url: Gateway URL. Defaults to env var OPENCAT_BASE_URL.
            user_agent: User-Agent header value.
            http_client: Transport to use. When omitted the client creates and
                         owns one.
            timeout: Timeout for the owned HTTP client.
            azure_output_format: Audio format for Azure speech synthesis.
            azure_region: Region header for Azure speech synthesis.

        Raises:
            ValueError: If no token is given or configured.
        """
        token = token or config.TOKEN
        if not token:
            raise ValueError("OpenCat token not configured (pass token= or set OPENCAT_TOKEN)")

        self.token = token
        self.base_url = (base_url or config.BASE_URL).rstrip("/")
        self.user_agent = user_agent or config.USER_AGENT
        self.azure_output_format = azure_output_format or config.AZURE_OUTPUT_FORMAT
        self.azure_region = azure_region or config.AZURE_REGION

        self._owns_http = http_client is None
        if http_client is None:
            timeout = timeout or httpx.Timeout(config.REQUEST_TIMEOUT, connect=config.CONNECT_TIMEOUT)
            http_client = httpx.AsyncClient(timeout=timeout)
        self.http = http_client

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "OpenCatClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ==========================================================================
    # Request Helpers
    # ==========================================================================

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.user_agent,
            "Accept": "*/*",
        }

    def _url(self, path: str) -> str:
        return self.base_url + path

    async def _send(
        self,
        method: str,
        path: str,
        *,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Send a buffered request and fail on any non-200 status.

        The response body is fully read and the connection released before
        this returns.
        """
        logger.debug("%s %s", method, path)
        response = await self.http.request(
            method,
            self._url(path),
            content=content,
            headers=headers or self._headers(),
        )
        if response.status_code != 200:
            raise await APIError.from_response(response)
        return response

    @staticmethod
    def _require_stream_flag(request: ChatRequest, expected: bool) -> None:
        if bool(request.get("stream", False)) == expected:
            return
        if expected:
            raise ProtocolMismatchError("stream=False request: use chat() for non-streaming chat instead")
        raise ProtocolMismatchError("stream=True request: use stream_chat() or astream() for streaming chat instead")

    # ==========================================================================
    # Chat
    # ==========================================================================

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """
        Send a non-streaming chat request.

        Args:
            request (ChatRequest): Canonical request with ``stream`` unset or False.

        Returns:
            ChatResponse: Canonical response; every current provider returns
                          exactly one choice.

        Raises:
            ProtocolMismatchError: If ``request["stream"]`` is True.
            APIError: If the gateway answers with a non-200 status.
            ValueError: If the response body is not a JSON object.
            httpx.HTTPError: On transport failures.
        """
        self._require_stream_flag(request, False)

        dialect = get_dialect(request.get("model", ""))
        logger.debug("chat model=%s dialect=%s", request.get("model"), dialect.name)
        response = await self._send("POST", dialect.path, content=dialect.encode(request))
        return dialect.decode(response.json())

    def astream(self, request: ChatRequest) -> AsyncIterator[StreamEvent]:
        """
        Stream a chat response as canonical events.

        The stream flag is checked immediately; the request itself is sent
        when iteration starts.

        Args:
            request (ChatRequest): Canonical request with ``stream=True``.

        Returns:
            AsyncIterator[StreamEvent]: Events in read order:
                - {'type': 'token', 'text': '...', 'done': False}
                - {'type': 'done', 'text': '', 'done': True} exactly once at the end

        Raises:
            ProtocolMismatchError: If ``request["stream"]`` is not True.
        """
        self._require_stream_flag(request, True)
        return self._stream_events(request)

    async def _stream_events(self, request: ChatRequest) -> AsyncIterator[StreamEvent]:
        dialect = get_dialect(request.get("model", ""))
        body = dialect.encode(request)
        logger.debug("stream model=%s dialect=%s", request.get("model"), dialect.name)

        async with self.http.stream(
            "POST",
            self._url(dialect.path),
            content=body,
            headers=self._headers(),
        ) as response:
            if response.status_code != 200:
                raise await APIError.from_response(response)
            if not is_event_stream(response.headers.get("content-type")):
                await response.aread()
                raise StreamContentTypeError(response.status_code, response.text, response.content)

            async with aclosing(iter_stream_events(response.aiter_lines())) as events:
                async for event in events:
                    yield event

    async def stream_chat(self, request: ChatRequest, on_delta: DeltaCallback) -> None:
        """
        Stream a chat response through a callback.

        ``on_delta(text, done)`` is called once per delta with ``done=False``
        and then once with ``("", True)``. The callback may be a coroutine
        function. If the stream fails, the final call never happens and the
        error is raised instead.

        Args:
            request (ChatRequest): Canonical request with ``stream=True``.
            on_delta (Callable[[str, bool], Any]): Delta callback.

        Raises:
            ProtocolMismatchError: If ``request["stream"]`` is not True, or the
                                   response is not an event stream.
            APIError: If the gateway answers with a non-200 status.
        """
        async with aclosing(self.astream(request)) as events:
            async for event in events:
                result = on_delta(event["text"], event["done"])
                if inspect.isawaitable(result):
                    await result

    # ==========================================================================
    # Image / Speech / Usage
    # ==========================================================================

    async def generate_image(self, request: ImageRequest) -> List[bytes]:
        """
        Generate images from a text prompt.

        Returns:
            List[bytes]: One decoded blob per generated image.

        Raises:
            ValueError: If the response is not an object or an entry is not
                        valid standard base64.
        """
        body = json.dumps(request).encode("utf-8")
        response = await self._send("POST", config.IMAGE_PATH, content=body)
        data = require_object(response.json(), "image response")
        return [base64.b64decode(item, validate=True) for item in data.get("image_data") or []]

    async def synthesize_speech(self, request: SpeechRequest) -> bytes:
        """
        Synthesize speech from text.

        The ``__azure`` model goes to the Azure endpoint with an SSML body;
        every other model is sent as JSON to the OpenAI-style speech endpoint.

        Returns:
            bytes: Raw audio as returned by the gateway.
        """
        if request.get("model") == AZURE_SPEECH_MODEL:
            return await self._azure_speech(request)

        body = json.dumps(request).encode("utf-8")
        response = await self._send("POST", config.SPEECH_PATH, content=body)
        return response.content

    async def _azure_speech(self, request: SpeechRequest) -> bytes:
        headers = self._headers()
        headers.update(azure_headers(self.azure_output_format, self.azure_region))
        response = await self._send(
            "POST",
            config.AZURE_SPEECH_PATH,
            content=build_ssml(request).encode("utf-8"),
            headers=headers,
        )
        return response.content

    async def usage(self) -> List[Usage]:
        """
        Fetch the account usage records.
        """
        response = await self._send("GET", config.USAGE_PATH)
        data = require_object(response.json(), "usage response")
        return [require_object(record, "usage record") for record in data.get("data") or []]
