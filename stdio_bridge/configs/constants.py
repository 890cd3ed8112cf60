"""
Bridge Constants

Wire-level values shared by the transport, the SSE extractor and the
error translator.
"""

# --- JSON-RPC ---

JSONRPC_VERSION = "2.0"

# Error code for every failure raised inside the bridge itself
BRIDGE_ERROR_CODE = -32000

# --- HTTP ---

DEFAULT_SESSION_HEADER = "mcp-session-id"

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

REQUEST_HEADERS = {
    "content-type": JSON_CONTENT_TYPE,
    "accept": f"{JSON_CONTENT_TYPE}, {EVENT_STREAM_CONTENT_TYPE}",
}

# --- Output ---

# Compact separators so forwarded replies keep their wire shape
JSON_SEPARATORS = (",", ":")
