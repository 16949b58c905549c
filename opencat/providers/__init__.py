from .base import BaseDialect
from .openai import OpenAIDialect
from .claude import ClaudeDialect
from .azure import build_ssml, azure_headers

__all__ = ["BaseDialect", "OpenAIDialect", "ClaudeDialect", "build_ssml", "azure_headers"]
