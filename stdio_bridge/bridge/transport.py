"""
Transport Client

POSTs JSON-RPC envelopes to the upstream HTTP endpoint and keeps the session
identifier flowing in both directions.
"""

from dataclasses import dataclass
from typing import Any, Optional

import requests

from stdio_bridge.bridge.framing import compact_dumps
from stdio_bridge.bridge.session import SessionTracker
from stdio_bridge.configs import (
    DEFAULT_SESSION_HEADER,
    REQUEST_HEADERS,
    get_logger,
)
from stdio_bridge.exceptions import (
    TransportError,
    UpstreamConnectionError,
    UpstreamTimeoutError,
)

logger = get_logger("transport")


@dataclass
class UpstreamResponse:
    """Raw reply from the upstream, before payload extraction."""

    status_code: int
    content_type: str
    body: str
    session_id: Optional[str] = None


class TransportClient:
    """
    HTTP client for one upstream endpoint.

    Usage:
        with TransportClient(url, SessionTracker()) as client:
            reply = client.send({"jsonrpc": "2.0", "id": 1, "method": "ping"})
    """

    def __init__(
        self,
        url: str,
        session: SessionTracker,
        session_header: str = DEFAULT_SESSION_HEADER,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.url = url
        self.session = session
        self.session_header = session_header
        self.timeout = timeout
        self._http = http or requests.Session()

    def __enter__(self) -> "TransportClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def build_headers(self) -> dict[str, str]:
        """Request headers, including the tracked session when there is one."""
        headers = dict(REQUEST_HEADERS)
        session_id = self.session.session_id
        if session_id:
            headers[self.session_header] = session_id
        return headers

    def send(self, envelope: Any) -> UpstreamResponse:
        """
        POST one envelope to the upstream. Exactly one network call, no retries.

        HTTP error statuses are returned like any other reply.

        Raises:
            UpstreamTimeoutError: The request timed out
            UpstreamConnectionError: The endpoint could not be reached
            TransportError: Any other network-level failure
        """
        body = compact_dumps(envelope)

        try:
            response = self._http.post(
                self.url,
                data=body.encode("utf-8"),
                headers=self.build_headers(),
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise UpstreamTimeoutError(f"Upstream request timed out: {e}") from e
        except requests.ConnectionError as e:
            raise UpstreamConnectionError(f"Upstream connection failed: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Upstream request failed: {e}") from e

        # The upstream may issue a session on any reply; it always wins
        session_id = response.headers.get(self.session_header)
        self.session.adopt(session_id)

        content_type = response.headers.get("content-type", "")
        logger.debug(f"POST {self.url} -> {response.status_code} ({content_type or 'no content type'})")

        return UpstreamResponse(
            status_code=response.status_code,
            content_type=content_type,
            # Always UTF-8, whatever charset requests would guess for text/*
            body=response.content.decode("utf-8", errors="replace"),
            session_id=session_id or None,
        )
