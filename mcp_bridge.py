#!/usr/bin/env python3
"""
MCP Stdio-to-HTTP Bridge

Reads MCP JSON-RPC messages from stdin, forwards them to an MCP HTTP (SSE)
endpoint, and writes responses to stdout.

Usage: python3 mcp_bridge.py --url http://127.0.0.1:<port>/mcp
"""

import sys

from stdio_bridge.bridge import main

if __name__ == "__main__":
    sys.exit(main())
