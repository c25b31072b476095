"""XDG-compliant path management for pane."""

from pathlib import Path

from xdg_base_dirs import xdg_config_home

APP_NAME = "pane"
DEFAULT_CONFIG_FILE = "default.yaml"


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return xdg_config_home() / APP_NAME


def get_default_config_path() -> Path:
    """Get the default.yaml file path."""
    return get_config_dir() / DEFAULT_CONFIG_FILE


def ensure_directories() -> None:
    """Create the config directory if it doesn't exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
