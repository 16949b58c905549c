from typing import Dict, Any, List

from .base import BaseDialect, require_object
from .. import config
from ..types import ChatRequest, ChatResponse, ChatResponseChoice, Message

class OpenAIDialect(BaseDialect):
    """
    OpenAI-compatible dialect.

    The gateway accepts the canonical fields almost as-is and answers in the
    canonical response shape.
    """

    name = "openai"
    path = config.CHAT_PATH

    def build_body(self, request: ChatRequest) -> Dict[str, Any]:
        body: Dict[str, Any] = {"model": request.get("model", "")}

        # Zero values are left out of the body
        optional_params = {
            "temperature": request.get("temperature"),
            "maxTokens": request.get("max_tokens"),
            "stream": request.get("stream"),
        }
        body.update({k: v for k, v in optional_params.items() if v})

        body["messages"] = self._convert_messages(request.get("messages", []))
        return body

    def decode(self, payload: Dict[str, Any]) -> ChatResponse:
        payload = require_object(payload, "chat response")
        choices: List[ChatResponseChoice] = []
        for choice in payload.get("choices") or []:
            choice = require_object(choice, "chat choice")
            message = require_object(choice.get("message") or {}, "chat message")
            choices.append({
                "index": choice.get("index", 0),
                "message": {
                    "role": message.get("role", ""),
                    "content": message.get("content") or "",
                },
                "finish_reason": choice.get("finish_reason") or "",
            })

        return {
            "id": payload.get("id", ""),
            "object": payload.get("object", ""),
            "created": payload.get("created", 0),
            "model": payload.get("model", ""),
            "choices": choices,
            "usage": payload.get("usage"),
        }

    @staticmethod
    def _convert_messages(messages: List[Message]) -> List[Dict[str, Any]]:
        """
        Convert messages to the wire format.

        Images stay as ``Image`` objects here; they become data URIs when the
        body is serialized.
        """
        converted = []
        for msg in messages:
            wire = {
                "role": msg.get("role", "user"),
                "content": msg.get("content", ""),
            }
            images = msg.get("images")
            if images:
                wire["images"] = list(images)
            converted.append(wire)
        return converted
