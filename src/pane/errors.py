"""Exceptions raised by pane."""


class PaneError(Exception):
    """Base class for all pane errors."""


class ConfigNotFoundError(PaneError):
    """Raised when the configuration file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")
        self.path = path


class ConfigParseError(PaneError):
    """Raised when the configuration file is not valid YAML or fails validation."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to parse config file '{path}': {reason}")
        self.path = path
        self.reason = reason


class LayoutNotFoundError(PaneError):
    """Raised when a window names a layout that is neither configured nor built in."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Layout not found: {name}")
        self.name = name


class TemplateNotFoundError(PaneError):
    """Raised when a layout names an unknown template."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Template not found: {name}")
        self.name = name
