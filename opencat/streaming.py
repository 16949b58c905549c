"""
Server-sent event adapter for streaming chat.

Both dialects stream ``data: <json>`` lines through the same parser: OpenAI
style records carry ``delta`` while Claude style records carry
``completion``. Records with a ``type`` other than ``completion`` (pings and
the like) are skipped, and ``data: [DONE]`` ends the stream.
"""
import json
import logging
from typing import Any, AsyncIterable, AsyncIterator, Dict, Optional

from .types import StreamEvent

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


def parse_delta(payload: str) -> Optional[StreamEvent]:
    """
    Parse one ``data:`` payload into a token event.

    Args:
        payload (str): The line content after the ``data: `` prefix.

    Returns:
        Optional[StreamEvent]: The token event, or None when the record is
        not a completion record.

    Raises:
        json.JSONDecodeError: If the payload is not valid JSON.
        ValueError: If the payload is not a JSON object.
    """
    record = json.loads(payload)
    if not isinstance(record, dict):
        raise ValueError(f"Unexpected stream record: {payload[:50]}")

    record_type = _string_field(record, "type")
    if record_type and record_type != "completion":
        return None

    text = _string_field(record, "completion") or _string_field(record, "delta")
    event: StreamEvent = {"type": "token", "text": text, "done": False}

    model = _string_field(record, "model")
    if model:
        event["model"] = model
    finish_reason = _string_field(record, "finishReason")
    if finish_reason:
        event["finish_reason"] = finish_reason
    return event


async def iter_stream_events(lines: AsyncIterable[str]) -> AsyncIterator[StreamEvent]:
    """
    Turn SSE lines into canonical stream events.

    Yields one token event per accepted record, in read order, followed by
    exactly one ``done`` event once ``[DONE]`` is read or the lines run out.
    Errors from the line source or from decoding propagate and no ``done``
    event is produced.

    Args:
        lines (AsyncIterable[str]): Response body split into lines.

    Yields:
        StreamEvent: Token events, then the terminal event.
    """
    count = 0
    async for raw in lines:
        line = raw.strip()
        if not line.startswith(DATA_PREFIX):
            continue

        payload = line[len(DATA_PREFIX):]
        if payload == DONE_SENTINEL:
            logger.debug("stream terminated by sentinel after %d deltas", count)
            break

        event = parse_delta(payload)
        if event is None:
            continue
        count += 1
        yield event
    else:
        logger.debug("stream ended after %d deltas", count)

    yield {"type": "done", "text": "", "done": True}


def is_event_stream(content_type: Optional[str]) -> bool:
    return (content_type or "").startswith(EVENT_STREAM_CONTENT_TYPE)


def _string_field(record: Dict[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Stream record field '{key}' is not a string")
    return value
