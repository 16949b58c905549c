import json
from abc import ABC, abstractmethod
from typing import Dict, Any

from ..image import encode_default
from ..types import ChatRequest, ChatResponse, Dialect


def require_object(payload: Any, what: str) -> Dict[str, Any]:
    """
    Check that a decoded JSON payload is an object.

    Raises:
        ValueError: If the payload is any other JSON value.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected {what} payload: expected a JSON object, got {type(payload).__name__}")
    return payload


class BaseDialect(ABC):
    """
    Abstract base class for chat wire dialects.

    A dialect knows the gateway path it talks to, how to turn a canonical
    ``ChatRequest`` into its wire body and how to turn its wire response back
    into a canonical ``ChatResponse``.
    """

    name: Dialect
    path: str

    @abstractmethod
    def build_body(self, request: ChatRequest) -> Dict[str, Any]:
        """
        Translate a canonical request into the dialect's JSON body.

        Args:
            request (ChatRequest): The canonical chat request.

        Returns:
            Dict[str, Any]: Wire body. May still hold ``Image`` values, which
            are encoded by :meth:`encode`.
        """
        pass

    @abstractmethod
    def decode(self, payload: Dict[str, Any]) -> ChatResponse:
        """
        Translate a non-streaming wire response into the canonical shape.

        Args:
            payload (Dict[str, Any]): Parsed JSON response body.

        Returns:
            ChatResponse: Canonical response.
        """
        pass

    def encode(self, request: ChatRequest) -> bytes:
        """
        Serialize the request body, encoding any images at this point.
        """
        body = self.build_body(request)
        return json.dumps(body, default=encode_default).encode("utf-8")
