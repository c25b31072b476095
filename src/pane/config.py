"""Configuration management for pane."""

from enum import StrEnum
from pathlib import Path
from typing import cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pane.errors import ConfigNotFoundError, ConfigParseError
from pane.xdg_paths import get_config_dir, get_default_config_path

DEFAULT_SESSION_NAME = "pane"
DEFAULT_ROOT = "~/"
DEFAULT_LAYOUT_NAME = "dev"

# Marker in a pane command replaced by the window's own command
COMMAND_PLACEHOLDER = "{command}"


class TemplateName(StrEnum):
    """Built-in pane arrangement templates."""

    SINGLE = "Single"  # One pane
    SPLIT_VERTICAL = "SplitVertical"  # Two panes side by side
    TOP_SPLIT_BOTTOM = "TopSplitBottom"  # Top 60% + two bottom panes
    QUAD = "Quad"  # 2x2 grid


class SplitDirection(StrEnum):
    """Direction for a pane split."""

    HORIZONTAL = "h"  # side-by-side (left/right)
    VERTICAL = "v"  # stacked (top/bottom)


class LayoutConfig(BaseModel):
    """A named layout: a template plus the commands to run in its panes."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    template: str
    # An empty or missing entry leaves the pane idle
    panes: dict[str, str | None] = {}
    commands: dict[str, str | None] = {}  # per-position overrides, take precedence over panes
    shell: str | None = None


class WindowConfig(BaseModel):
    """A single window of the session."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    label: str | None = None
    path: str | None = None  # relative to the session root
    command: str | None = None
    layout: str | None = None


class SessionConfig(BaseModel):
    """Normalized session configuration."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    session: str = DEFAULT_SESSION_NAME
    root: str = DEFAULT_ROOT
    default_layout: str = Field(default=DEFAULT_LAYOUT_NAME, alias="defaultLayout")
    layouts: dict[str, LayoutConfig] = {}
    windows: list[WindowConfig] = []

    # Where the config was loaded from; not part of the file format
    config_path: str | None = Field(default=None, exclude=True)


def builtin_layouts() -> dict[str, LayoutConfig]:
    """Return fresh copies of the layouts every session has available."""
    return {
        "dev": LayoutConfig(
            template=TemplateName.TOP_SPLIT_BOTTOM.value,
            panes={"top": "nvim .", "bottomLeft": "zsh", "bottomRight": "zsh"},
        ),
        "single": LayoutConfig(
            template=TemplateName.SINGLE.value,
            panes={"main": ""},
        ),
        "aiCoding": LayoutConfig(
            template=TemplateName.SPLIT_VERTICAL.value,
            panes={"left": "nvim .", "right": "claude code"},
        ),
    }


def resolve_config_path(config_name: str | None = None) -> Path:
    """Resolve a config name or file to a path.

    Lookup order:
    1. ``None`` selects ``default.yaml`` in the config directory.
    2. A bare name (no ``/`` and no ``.``) gets ``.yaml`` appended.
    3. The path as given (``~`` expanded, relative to the cwd).
    4. The same name inside the config directory.

    Args:
        config_name: Config name (e.g. ``myproject``) or file path.

    Returns:
        The first existing candidate, or the expanded path when none exists.
    """
    if config_name is None:
        return get_default_config_path()

    if "/" not in config_name and "." not in config_name:
        config_name = f"{config_name}.yaml"

    expanded = Path(config_name).expanduser().absolute()
    if expanded.exists():
        return expanded

    user_path = get_config_dir() / config_name
    if user_path.exists():
        return user_path

    return expanded


def _load_yaml_file(path: Path) -> dict[str, object]:
    """Load a YAML mapping from a file.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed mapping (empty for an empty file).

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigParseError: If the file cannot be read or parsed, or is not a mapping.
    """
    if not path.exists():
        raise ConfigNotFoundError(str(path))
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(str(path), f"YAML parse error: {e}") from e
    except OSError as e:
        raise ConfigParseError(str(path), f"File read error: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigParseError(str(path), "top level must be a mapping")
    return cast(dict[str, object], raw)


def normalize_config(config: SessionConfig) -> SessionConfig:
    """Apply defaults that depend on other fields.

    Fills in the built-in layouts (all three when the file defines none,
    otherwise only the missing ones) and gives every window a layout.

    Args:
        config: The validated configuration.

    Returns:
        A new normalized configuration.
    """
    layouts = dict(config.layouts)
    for name, layout in builtin_layouts().items():
        layouts.setdefault(name, layout)

    default_layout = config.default_layout or DEFAULT_LAYOUT_NAME
    windows = [
        window.model_copy(update={"layout": window.layout or default_layout}) for window in config.windows
    ]

    return config.model_copy(
        update={
            "default_layout": default_layout,
            "layouts": layouts,
            "windows": windows,
        }
    )


def parse_config(data: dict[str, object], source: str = "<memory>") -> SessionConfig:
    """Validate and normalize raw configuration data.

    Args:
        data: Mapping as read from YAML.
        source: Where the data came from, for error messages.

    Returns:
        The normalized configuration.

    Raises:
        ConfigParseError: If validation fails.
    """
    try:
        config = SessionConfig.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigParseError(source, details) from e
    return normalize_config(config)


def load_config(config_name: str | None = None) -> SessionConfig:
    """Load, validate and normalize a session configuration.

    Args:
        config_name: Config name or path, resolved by ``resolve_config_path``.

    Returns:
        The normalized configuration with ``config_path`` set.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigParseError: If the file is malformed.
    """
    path = resolve_config_path(config_name)
    data = _load_yaml_file(path)
    config = parse_config(data, source=str(path))
    return config.model_copy(update={"config_path": str(path)})


def config_to_dict(config: SessionConfig) -> dict[str, object]:
    """Convert a configuration to the YAML file format.

    Args:
        config: The configuration.

    Returns:
        Plain data with camelCase keys and no unset optional fields.
    """
    data = config.model_dump(by_alias=True, exclude_none=True)
    for layout in cast(dict[str, dict[str, object]], data["layouts"]).values():
        for key in ("panes", "commands"):
            entries = cast(dict[str, str | None], layout.get(key) or {})
            layout[key] = {position: command for position, command in entries.items() if command is not None}
        if not layout["commands"]:
            del layout["commands"]
    return data


def save_config(config: SessionConfig, config_path: Path | None = None) -> Path:
    """Save configuration to a YAML file.

    Args:
        config: The configuration to save.
        config_path: Optional target path. Uses the default config path if None.

    Returns:
        The path written to.
    """
    path = config_path or get_default_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        yaml.dump(config_to_dict(config), f, default_flow_style=False, sort_keys=False)
    return path


def get_example_config() -> SessionConfig:
    """Return the configuration written by ``pane init-config``."""
    return normalize_config(
        SessionConfig(
            windows=[
                WindowConfig(path=".", label="home"),
                WindowConfig(command="htop", layout="single"),
            ],
        )
    )
