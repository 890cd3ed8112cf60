"""
Bridge Exception Hierarchy

Centralized exception classes for structured error handling across the bridge.
All bridge-specific exceptions inherit from BridgeError.

Usage:
    from stdio_bridge.exceptions import BridgeError, TransportError

    try:
        transport.send(request)
    except TransportError as e:
        logger.error(f"Upstream unreachable: {e}")
"""


class BridgeError(Exception):
    """Base exception for all bridge errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(BridgeError):
    """Error in bridge configuration."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration value is missing."""

    pass


class InvalidConfigError(ConfigurationError):
    """Configuration value is present but unusable."""

    pass


# =============================================================================
# Framing Errors
# =============================================================================


class FramingError(BridgeError):
    """Input line is not a valid JSON document."""

    pass


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(BridgeError):
    """Base class for network failures talking to the upstream."""

    pass


class UpstreamConnectionError(TransportError):
    """Failed to connect to the upstream endpoint."""

    pass


class UpstreamTimeoutError(TransportError):
    """Upstream request timed out."""

    pass


# =============================================================================
# Protocol Errors
# =============================================================================


class ProtocolError(BridgeError):
    """Upstream reply could not be decoded into a JSON-RPC payload."""

    def __init__(
        self,
        message: str,
        content_type: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.content_type = content_type
        self.status_code = status_code


# =============================================================================
# Sequencer Errors
# =============================================================================


class SequencerClosedError(BridgeError):
    """Line submitted after the sequencer was stopped."""

    pass
