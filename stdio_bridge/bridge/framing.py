"""
Frame Reader

Splits the stdin stream into candidate JSON-RPC requests, one per line.
"""

import json
from typing import Any, Iterable, Iterator

from stdio_bridge.configs import JSON_SEPARATORS
from stdio_bridge.exceptions import FramingError

# Raised by json.loads for malformed input; RecursionError for absurd nesting
JSON_DECODE_ERRORS = (ValueError, RecursionError)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def strict_loads(text: str) -> Any:
    """Parse JSON, rejecting the NaN/Infinity extensions json.loads allows."""
    return json.loads(text, parse_constant=_reject_constant)


def compact_dumps(value: Any) -> str:
    """
    Serialize as compact JSON that is always encodable as UTF-8.

    Non-ASCII text is kept as-is, unless the value holds lone surrogates
    (legal as `\\ud800` escapes in JSON), in which case everything is escaped.
    """
    text = json.dumps(value, separators=JSON_SEPARATORS, ensure_ascii=False)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(value, separators=JSON_SEPARATORS)
    return text


def iter_frames(stream: Iterable[str]) -> Iterator[str]:
    """
    Yield each non-blank line of the stream, stripped of surrounding whitespace.

    Lines are handed off as soon as they are read; nothing is buffered.
    """
    for raw_line in stream:
        line = raw_line.strip()
        if line:
            yield line


def parse_frame(line: str) -> Any:
    """
    Decode one framed line into a request envelope.

    Raises:
        FramingError: The line is not valid JSON
    """
    try:
        return strict_loads(line)
    except JSON_DECODE_ERRORS as e:
        raise FramingError(f"Parse error: {e}") from e
