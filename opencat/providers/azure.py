import html
from typing import Dict, Optional

from .. import config
from ..types import SpeechRequest

SSML_TEMPLATE = """
<speak version="1.0" xml:lang="en-US">
<voice xml:lang="en-US" name="{voice}">{text}</voice>
</speak>
"""


def build_ssml(request: SpeechRequest) -> str:
    """
    Build the SSML document for the Azure speech endpoint.

    Both the voice name and the input text are XML-escaped.
    """
    return SSML_TEMPLATE.format(
        voice=html.escape(request.get("voice", ""), quote=True),
        text=html.escape(request.get("input", ""), quote=True),
    )


def azure_headers(
    output_format: Optional[str] = None,
    region: Optional[str] = None,
) -> Dict[str, str]:
    """
    Headers added on top of the fixed header set for Azure speech requests.
    """
    return {
        "Content-Type": "application/ssml+xml",
        "X-Microsoft-OutputFormat": output_format or config.AZURE_OUTPUT_FORMAT,
        "X-Region": region or config.AZURE_REGION,
    }
