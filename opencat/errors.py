from typing import Optional

import httpx


class OpenCatError(Exception):
    """
    Base class for errors raised by the OpenCat client.
    """


class ProtocolMismatchError(OpenCatError, ValueError):
    """
    Raised when a request is sent through the wrong operation, e.g. a
    ``stream=True`` request passed to ``chat``.
    """


class APIError(OpenCatError):
    """
    Non-200 response from the gateway.

    The body is kept verbatim since providers do not share an error schema.

    Attributes:
        status_code (int): HTTP status code returned upstream.
        body (str): Response body decoded as text.
        raw (bytes): Response body exactly as received.
    """

    def __init__(self, status_code: int, body: str, raw: Optional[bytes] = None):
        self.status_code = status_code
        self.body = body
        self.raw = raw if raw is not None else body.encode("utf-8")
        super().__init__(f"API returned error: code={status_code}, body={body}")

    @classmethod
    async def from_response(cls, response: httpx.Response) -> "APIError":
        """
        Build an error from a response, draining its body first.

        Works for both buffered and streaming responses; the caller remains
        responsible for closing a streaming response.
        """
        await response.aread()
        return cls(response.status_code, response.text, response.content)


class StreamContentTypeError(APIError, ProtocolMismatchError):
    """
    Streaming request answered with something other than ``text/event-stream``.
    """
