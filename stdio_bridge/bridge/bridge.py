"""
MCP Stdio-to-HTTP Bridge

Reads JSON-RPC messages from stdin, forwards each to the upstream HTTP
endpoint, and writes the replies to stdout in the order the requests arrived.

Replies may come back as a plain JSON body or as a Server-Sent-Events stream.
Failures of any single line are answered with a JSON-RPC error and never stop
the bridge.
"""

import argparse
import io
import sys
from typing import Iterable, Optional

from stdio_bridge import __version__
from stdio_bridge.bridge.framing import iter_frames, parse_frame
from stdio_bridge.bridge.output import OutputWriter, error_response
from stdio_bridge.bridge.sequencer import Sequencer
from stdio_bridge.bridge.session import SessionTracker
from stdio_bridge.bridge.sse import NO_RESPONSE, extract
from stdio_bridge.bridge.transport import TransportClient
from stdio_bridge.configs import BridgeConfig, get_full_config, get_logger, setup_logging
from stdio_bridge.exceptions import ConfigurationError

logger = get_logger("bridge")

# Exit status for startup errors, matching argparse usage errors
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def describe(request) -> str:
    """Short label for a request envelope in log lines."""
    if isinstance(request, dict):
        method = request.get("method", "<reply>")
        if "id" in request:
            return f"{method} (id={request['id']})"
        return f"{method} (notification)"
    if isinstance(request, list):
        return f"batch of {len(request)}"
    return type(request).__name__


class StdioBridge:
    """
    One bridge instance: its own session, transport, output and sequencer.

    Usage:
        bridge = StdioBridge(config)
        bridge.run(sys.stdin)
    """

    def __init__(
        self,
        config: BridgeConfig,
        transport: Optional[TransportClient] = None,
        output: Optional[OutputWriter] = None,
    ):
        self.config = config
        if transport is None:
            self.session = SessionTracker()
            transport = TransportClient(
                config.url,
                self.session,
                session_header=config.session_header,
                timeout=config.timeout,
            )
        else:
            self.session = transport.session
        self.transport = transport
        self.output = output or OutputWriter(sys.stdout)
        self.sequencer = Sequencer(self.handle_line)

    def handle_line(self, line: str) -> None:
        """
        Forward one framed line and write its reply or error.

        Pipeline failures, including a reply that cannot be written, become
        error lines; only a broken output stream escapes.
        """
        try:
            request = parse_frame(line)
            logger.debug(f"Forwarding {describe(request)}")
            reply = self.transport.send(request)
            if reply.session_id:
                logger.debug(f"Reply {reply.status_code} in session {reply.session_id}")
            payload = extract(reply.body, reply.content_type)
            if payload is NO_RESPONSE:
                logger.debug(f"No reply body for {describe(request)}")
            self.output.write(payload)
        except Exception as e:
            logger.error(f"Request failed: {e}")
            self.output.write(error_response(line, e))

    def submit(self, line: str) -> None:
        """Queue a framed line behind every line submitted before it."""
        self.sequencer.submit(line)

    def run(self, stream: Iterable[str]) -> int:
        """
        Bridge the stream until end of input.

        Every line read before end of input is answered before returning.
        """
        logger.info(f"MCP bridge starting, upstream URL: {self.config.url}")
        self.sequencer.start()
        try:
            for line in iter_frames(stream):
                self.submit(line)
            self.sequencer.stop()
        finally:
            self.transport.close()
        logger.info("Input closed, bridge exiting")
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-stdio-bridge",
        description="Bridge line-delimited JSON-RPC on stdio to an MCP HTTP (SSE) endpoint",
    )
    parser.add_argument(
        "--url",
        required=True,
        help="Upstream endpoint, e.g. http://127.0.0.1:3845/mcp",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each upstream reply (default: wait indefinitely)",
    )
    parser.add_argument(
        "--session-header",
        default=None,
        help="Header carrying the upstream session id (default: mcp-session-id)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _use_utf8(stdin, stdout) -> None:
    # Undecodable input bytes become U+FFFD so the line fails alone as a parse error
    if isinstance(stdin, io.TextIOWrapper):
        stdin.reconfigure(encoding="utf-8", errors="replace")
    if isinstance(stdout, io.TextIOWrapper):
        stdout.reconfigure(encoding="utf-8")


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_full_config(
            url=args.url,
            timeout=args.timeout,
            session_header=args.session_header,
            debug=args.debug,
            log_file=args.log_file,
        )
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(debug=config.debug, log_file=config.log_file)
    _use_utf8(sys.stdin, sys.stdout)

    bridge = StdioBridge(config, output=OutputWriter(sys.stdout))
    try:
        return bridge.run(sys.stdin)
    except KeyboardInterrupt:
        logger.info("Bridge interrupted")
        return EXIT_INTERRUPTED
