"""
Bridge Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from stdio_bridge.configs.logging import get_logger, setup_logging

# Paths
from stdio_bridge.configs.paths import get_data_path

# Constants
from stdio_bridge.configs.constants import (
    BRIDGE_ERROR_CODE,
    DEFAULT_SESSION_HEADER,
    EVENT_STREAM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    JSON_SEPARATORS,
    JSONRPC_VERSION,
    REQUEST_HEADERS,
)

# YAML config
from stdio_bridge.configs.yaml_config import get_config_path, load_yaml_config

# Runtime
from stdio_bridge.configs.runtime import BridgeConfig, get_full_config

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Paths
    "get_data_path",
    # Constants
    "BRIDGE_ERROR_CODE",
    "DEFAULT_SESSION_HEADER",
    "EVENT_STREAM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "JSON_SEPARATORS",
    "JSONRPC_VERSION",
    "REQUEST_HEADERS",
    # YAML config
    "get_config_path",
    "load_yaml_config",
    # Runtime
    "BridgeConfig",
    "get_full_config",
]
