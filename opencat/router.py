from typing import Dict

from .providers.base import BaseDialect
from .providers.claude import ClaudeDialect
from .providers.openai import OpenAIDialect
from .types import Dialect

CLAUDE_MODEL_PREFIX = "claude"

DIALECTS: Dict[Dialect, BaseDialect] = {
    "openai": OpenAIDialect(),
    "claude": ClaudeDialect(),
}


def select_dialect(model: str) -> Dialect:
    """
    Pick the wire dialect for a model identifier.

    Models starting with ``claude`` use the Claude completion dialect; every
    other model goes through the OpenAI-compatible chat endpoint.
    """
    if model.startswith(CLAUDE_MODEL_PREFIX):
        return "claude"
    return "openai"


def get_dialect(model: str) -> BaseDialect:
    return DIALECTS[select_dialect(model)]
