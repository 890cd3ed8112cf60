"""
Bridge YAML Configuration

Loading for <data path>/config.yaml.
"""

from pathlib import Path

import yaml

from stdio_bridge.configs.logging import get_logger
from stdio_bridge.configs.paths import get_data_path

logger = get_logger("config")


def get_config_path() -> Path:
    """Get path to config.yaml."""
    return get_data_path() / "config.yaml"


def load_yaml_config(config_path: Path | None = None) -> dict:
    """
    Load configuration from config.yaml.

    Args:
        config_path: File to read. Defaults to get_config_path().

    Returns:
        Configuration dictionary (empty if file doesn't exist or is unusable)
    """
    if config_path is None:
        config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        loaded = yaml.safe_load(config_path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        return {}

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        logger.warning(f"Ignoring config {config_path}: top level is not a mapping")
        return {}
    return loaded
