"""
Bridge Runtime Configuration

Merges defaults, the YAML config file, environment variables and
command-line flags into one BridgeConfig.

Priority (highest wins):
1. Command-line flags
2. Environment variables (BRIDGE_*)
3. YAML config file
4. Defaults
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

from stdio_bridge.configs.constants import DEFAULT_SESSION_HEADER
from stdio_bridge.configs.yaml_config import load_yaml_config
from stdio_bridge.exceptions import InvalidConfigError, MissingConfigError

TRUE_VALUES = ("true", "1", "yes")


@dataclass
class BridgeConfig:
    """Resolved settings for one bridge instance."""

    url: str
    timeout: Optional[float] = None  # None waits on the upstream indefinitely
    session_header: str = DEFAULT_SESSION_HEADER
    debug: bool = False
    log_file: Optional[str] = None


def validate_url(url: Optional[str]) -> str:
    """Require an absolute http(s) URL for the upstream endpoint."""
    if not url:
        raise MissingConfigError("Upstream URL is required (--url)")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidConfigError(
            "Upstream URL must be an absolute http(s) URL", {"url": url}
        )
    return url


def parse_timeout(value: Any) -> Optional[float]:
    """Parse a timeout in seconds; empty means no timeout."""
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigError("Timeout must be a number of seconds", {"timeout": value})
    if timeout <= 0:
        raise InvalidConfigError("Timeout must be positive", {"timeout": value})
    return timeout


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in TRUE_VALUES


def get_full_config(
    url: Optional[str],
    timeout: Optional[float] = None,
    session_header: Optional[str] = None,
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> BridgeConfig:
    """
    Build the bridge configuration.

    Args:
        url: Upstream endpoint (command line only)
        timeout: Request timeout override in seconds
        session_header: Session header name override
        debug: Debug logging override
        log_file: Log file override
        config_path: YAML file to read instead of the default location

    Returns:
        Resolved BridgeConfig

    Raises:
        MissingConfigError: No upstream URL was given
        InvalidConfigError: A value could not be used
    """
    url = validate_url(url)

    # Start with YAML
    settings: dict[str, Any] = {
        key: value
        for key, value in load_yaml_config(config_path).items()
        if key in ("timeout", "session_header", "debug", "log_file")
    }

    # Environment overrides
    if os.environ.get("BRIDGE_REQUEST_TIMEOUT"):
        settings["timeout"] = os.environ["BRIDGE_REQUEST_TIMEOUT"]
    if os.environ.get("BRIDGE_SESSION_HEADER"):
        settings["session_header"] = os.environ["BRIDGE_SESSION_HEADER"]
    if os.environ.get("BRIDGE_DEBUG"):
        settings["debug"] = os.environ["BRIDGE_DEBUG"]
    if os.environ.get("BRIDGE_LOG_FILE"):
        settings["log_file"] = os.environ["BRIDGE_LOG_FILE"]

    # Command-line overrides
    if timeout is not None:
        settings["timeout"] = timeout
    if session_header:
        settings["session_header"] = session_header
    if debug is not None:
        settings["debug"] = debug
    if log_file:
        settings["log_file"] = log_file

    header = str(settings.get("session_header") or DEFAULT_SESSION_HEADER).strip()
    if not header:
        header = DEFAULT_SESSION_HEADER

    return BridgeConfig(
        url=url,
        timeout=parse_timeout(settings.get("timeout")),
        session_header=header,
        debug=_parse_bool(settings.get("debug", False)),
        log_file=str(settings["log_file"]) if settings.get("log_file") else None,
    )
