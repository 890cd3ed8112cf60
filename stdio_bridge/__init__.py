"""
MCP Stdio Bridge

Lets a process that only speaks line-delimited JSON-RPC on stdio talk to a
JSON-RPC server reachable over HTTP (plain JSON or Server-Sent Events replies).
"""

__version__ = "1.0.0"
