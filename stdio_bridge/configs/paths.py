"""
Bridge Data Paths

Locates the directory holding the optional config file.
"""

import os
from pathlib import Path

DEFAULT_DATA_PATH = Path.home() / ".mcp-stdio-bridge"


def get_data_path() -> Path:
    """Get the bridge data directory path.

    BRIDGE_DATA_PATH overrides the default of ~/.mcp-stdio-bridge.

    Returns:
        Path to the data directory
    """
    data_path = os.environ.get("BRIDGE_DATA_PATH")
    if data_path:
        return Path(data_path).expanduser()
    return DEFAULT_DATA_PATH
