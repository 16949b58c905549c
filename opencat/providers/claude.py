import logging
from typing import Dict, Any, List

from .base import BaseDialect, require_object
from .. import config
from ..types import ChatRequest, ChatResponse, Message

logger = logging.getLogger(__name__)

HUMAN_PREFIX = "\n\nHuman: "
ASSISTANT_PREFIX = "\n\nAssistant: "
ASSISTANT_CUE = "\n\nAssistant:"

class ClaudeDialect(BaseDialect):
    """
    Claude-compatible completion dialect.

    The completion endpoint has no message list, so the conversation is
    flattened into a single Human/Assistant prompt.
    """

    name = "claude"
    path = config.CLAUDE_COMPLETE_PATH

    def build_body(self, request: ChatRequest) -> Dict[str, Any]:
        return {
            "model": request.get("model", ""),
            "temperature": request.get("temperature", 0),
            "stream": request.get("stream", False),
            "max_tokens_to_sample": request.get("max_tokens", 0),
            "prompt": self.flatten_prompt(request.get("messages", [])),
        }

    def decode(self, payload: Dict[str, Any]) -> ChatResponse:
        """
        Map ``{type, id, model, completion, stop_reason}`` into a single
        assistant choice.
        """
        payload = require_object(payload, "completion")
        return {
            "id": payload.get("id", ""),
            "object": "chat.completion",
            "created": 0,
            "model": payload.get("model", ""),
            "choices": [
                {
                    "index": 0,
                    "message": {
                        "role": "assistant",
                        "content": payload.get("completion") or "",
                    },
                    "finish_reason": payload.get("stop_reason") or "",
                }
            ],
            "usage": None,
        }

    @staticmethod
    def flatten_prompt(messages: List[Message]) -> str:
        """
        Flatten messages into one prompt.

        System and user turns become ``Human:`` turns, assistant turns become
        ``Assistant:`` turns, and a trailing ``Assistant:`` cue is appended.

        Args:
            messages (List[Message]): Conversation history.

        Returns:
            str: The flattened prompt.
        """
        parts = []
        for msg in messages:
            role = msg.get("role")
            if role in ("system", "user"):
                parts.append(HUMAN_PREFIX)
            elif role == "assistant":
                parts.append(ASSISTANT_PREFIX)
            # Not supported by the completion endpoint
            if msg.get("images"):
                logger.debug("dropping %d image(s) from %s message", len(msg["images"]), role)
            parts.append(msg.get("content", ""))
        parts.append(ASSISTANT_CUE)
        return "".join(parts)
