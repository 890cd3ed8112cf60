"""
Error Translator & Output Writer

Every input line ends in at most one stdout line: the upstream's reply, or a
JSON-RPC error envelope built here when any stage failed.
"""

import threading
from typing import Any, TextIO

from stdio_bridge.bridge.framing import JSON_DECODE_ERRORS, compact_dumps, strict_loads
from stdio_bridge.bridge.sse import NO_RESPONSE
from stdio_bridge.configs import BRIDGE_ERROR_CODE, JSONRPC_VERSION


def recover_id(line: str) -> Any:
    """
    Re-parse the original input line for its request id.

    Independent of whichever step failed; anything unparseable, or any
    document that is not an object, yields None.
    """
    try:
        parsed = strict_loads(line)
    except JSON_DECODE_ERRORS:
        return None
    if isinstance(parsed, dict):
        return parsed.get("id")
    return None


def error_response(line: str, error: BaseException) -> dict:
    """Build the JSON-RPC error envelope for a failed line."""
    message = str(error) or type(error).__name__
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": recover_id(line),
        "error": {"code": BRIDGE_ERROR_CODE, "message": message},
    }


def encode_line(payload: Any) -> str:
    """Serialize one payload as a newline-terminated compact JSON line."""
    return compact_dumps(payload) + "\n"


class OutputWriter:
    """Writes one JSON document per line to a text stream, flushing each."""

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._lock = threading.Lock()

    def write(self, payload: Any) -> bool:
        """
        Write a payload line.

        Returns:
            False if the payload was NO_RESPONSE and nothing was written
        """
        if payload is NO_RESPONSE:
            return False
        line = encode_line(payload)
        with self._lock:
            self._stream.write(line)
            self._stream.flush()
        return True
