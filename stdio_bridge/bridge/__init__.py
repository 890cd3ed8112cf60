"""
MCP Stdio-to-HTTP Bridge

Reads JSON-RPC messages from stdin, forwards them to an HTTP endpoint one at
a time, and writes the replies to stdout.
"""

from stdio_bridge.bridge.bridge import StdioBridge, main

__all__ = ["StdioBridge", "main"]
