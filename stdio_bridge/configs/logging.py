"""
Bridge Logging Configuration

Configures logging based on environment variables:
- BRIDGE_DEBUG: Enable debug logging (default: false)
- BRIDGE_LOG_FILE: Log file path (default: none, stderr only)

Stdout carries the JSON-RPC stream, so no handler ever writes there. In debug
mode the urllib3 connection log (the HTTP layer under requests) is routed to
the same handlers, so every upstream connect and response line is visible.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "bridge"
HTTP_LOGGER = "urllib3"

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _debug_from_env() -> bool:
    return os.environ.get("BRIDGE_DEBUG", "").lower() in ("true", "1", "yes")


def _build_handlers(level: int, log_file: Optional[str]) -> list[logging.Handler]:
    """Stderr handler, plus a file handler when a log file is configured."""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    # With a log file, stderr only carries what an operator must see
    stderr_handler.setLevel(logging.WARNING if log_file else level)
    handlers: list[logging.Handler] = [stderr_handler]

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _install(logger: logging.Logger, level: int, handlers: list[logging.Handler]) -> None:
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for the bridge.

    Args:
        debug: Enable debug level. Defaults to BRIDGE_DEBUG env var.
        log_file: Log file path. Defaults to BRIDGE_LOG_FILE env var.

    Returns:
        Root logger for the bridge
    """
    if debug is None:
        debug = _debug_from_env()
    if log_file is None:
        log_file = os.environ.get("BRIDGE_LOG_FILE") or None

    level = logging.DEBUG if debug else logging.INFO
    handlers = _build_handlers(level, log_file)

    logger = logging.getLogger(ROOT_LOGGER)
    _install(logger, level, handlers)

    if debug:
        _install(logging.getLogger(HTTP_LOGGER), logging.DEBUG, handlers)

    if log_file:
        logger.info(f"Logging to file: {Path(log_file).expanduser()}")
    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "transport", "sequencer")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
