"""
SSE Payload Extractor

Turns an upstream reply body into a JSON-RPC payload. The decode path is chosen
from the declared content type alone:

- application/json (or anything else): the body is the payload
- text/event-stream: the payload is carried in `data:` fields; consecutive
  data lines of one event are joined with newlines, and only the first event
  carrying data is used
"""

import re
from enum import Enum
from typing import Any, Optional

from stdio_bridge.bridge.framing import JSON_DECODE_ERRORS, strict_loads
from stdio_bridge.configs import EVENT_STREAM_CONTENT_TYPE
from stdio_bridge.exceptions import ProtocolError

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_DATA_FIELD = "data:"


class ResponseFormat(Enum):
    """Wire format of an upstream reply."""

    JSON = "json"
    EVENT_STREAM = "event-stream"


class _NoResponse:
    """Marker for replies that must not produce an output line."""

    def __repr__(self) -> str:
        return "NO_RESPONSE"


# Distinct from a JSON null payload
NO_RESPONSE = _NoResponse()


def response_format(content_type: Optional[str]) -> ResponseFormat:
    """Resolve the reply format from a Content-Type header value."""
    if content_type and EVENT_STREAM_CONTENT_TYPE in content_type.lower():
        return ResponseFormat.EVENT_STREAM
    return ResponseFormat.JSON


def extract_sse_data(text: str) -> Optional[str]:
    """
    Reassemble the data of the first event in an event-stream body.

    Returns:
        The newline-joined data lines, or None if no event carried data
    """
    data_lines: list[str] = []
    for line in _LINE_BREAK.split(text):
        if not line:
            # Blank line dispatches the event
            if data_lines:
                break
            continue
        if line.startswith(_DATA_FIELD):
            value = line[len(_DATA_FIELD):]
            if value.startswith(" "):
                value = value[1:]
            data_lines.append(value)

    if not data_lines:
        return None
    return "\n".join(data_lines)


def _decode(payload: str, source: str, content_type: Optional[str]) -> Any:
    try:
        return strict_loads(payload)
    except JSON_DECODE_ERRORS as e:
        raise ProtocolError(
            f"Invalid JSON in {source}: {e}", content_type=content_type
        ) from e


def extract(raw_body: str, content_type: Optional[str]) -> Any:
    """
    Decode an upstream reply body.

    Args:
        raw_body: Reply body text
        content_type: Declared Content-Type of the reply

    Returns:
        The decoded JSON value, or NO_RESPONSE when the body is empty

    Raises:
        ProtocolError: Event stream without data, or payload is not JSON
    """
    if not raw_body.strip():
        return NO_RESPONSE

    if response_format(content_type) is ResponseFormat.EVENT_STREAM:
        payload = extract_sse_data(raw_body)
        if payload is None or not payload.strip():
            raise ProtocolError(
                "No SSE data payload returned by server.", content_type=content_type
            )
        return _decode(payload, "SSE data payload", content_type)

    return _decode(raw_body, "response body", content_type)
