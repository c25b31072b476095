"""Apply named layouts to tmux windows."""

from pane.config import COMMAND_PLACEHOLDER, LayoutConfig, SessionConfig, builtin_layouts
from pane.errors import LayoutNotFoundError
from pane.templates import get_template
from pane.tmux_commands import send_keys
from pane.utils import detect_shell

# Layouts available even when the config does not define them
BUILTIN_LAYOUTS: dict[str, LayoutConfig] = builtin_layouts()

# Layout descriptions for the list command
LAYOUT_DESCRIPTIONS: dict[str, str] = {
    "dev": "Editor on top, two shells below",
    "single": "One pane",
    "aiCoding": "Editor left, Claude right",
}

_SPLIT_PREFIX = "tmux split-window"


def get_layout_config(config: SessionConfig | None, layout_name: str) -> LayoutConfig:
    """Find a layout by name.

    Layouts defined in the config win over the built-in ones.

    Args:
        config: The session configuration (may be None).
        layout_name: Name of the layout.

    Returns:
        The layout configuration.

    Raises:
        LayoutNotFoundError: If the name is neither configured nor built in.
    """
    if config is not None and layout_name in config.layouts:
        return config.layouts[layout_name]

    builtin = BUILTIN_LAYOUTS.get(layout_name)
    if builtin is None:
        raise LayoutNotFoundError(layout_name)
    return builtin


def resolve_shell(layout_config: LayoutConfig) -> str:
    """Return the shell new panes of a layout should start."""
    return layout_config.shell or detect_shell()


def with_shell(operation: str, shell: str) -> str:
    """Make a split operation start ``shell`` unless it already names a program.

    Args:
        operation: A command produced by a template.
        shell: The shell program.

    Returns:
        The operation, with the shell appended to bare split commands.
    """
    if operation.startswith(_SPLIT_PREFIX) and not operation.endswith("'"):
        return f"{operation} '{shell}'"
    return operation


def _pane_command(layout_config: LayoutConfig, position: str, window_command: str | None) -> tuple[str | None, bool]:
    """Return the command for a position and whether it holds the placeholder."""
    command = layout_config.commands.get(position) or layout_config.panes.get(position)
    if not command:
        return None, False
    if COMMAND_PLACEHOLDER not in command:
        return command, False
    if not window_command:
        return None, True
    return command.replace(COMMAND_PLACEHOLDER, window_command), True


def resolve_pane_command(layout_config: LayoutConfig, position: str, window_command: str | None = None) -> str | None:
    """Work out what to run in one pane position.

    Args:
        layout_config: The layout.
        position: Pane position name, e.g. ``"top"``.
        window_command: The window's own command, substituted for the placeholder.

    Returns:
        The command, or None if nothing should be typed into the pane.
    """
    return _pane_command(layout_config, position, window_command)[0]


def resolve_pane_commands(
    layout_config: LayoutConfig,
    positions: tuple[str, ...],
    window_command: str | None = None,
) -> tuple[dict[str, str], bool]:
    """Work out what to run in every pane position of a layout.

    A window command without a placeholder to fill runs in the first
    position when that position has nothing else to run.

    Args:
        layout_config: The layout.
        positions: The template's positions, in order.
        window_command: The window's own command.

    Returns:
        Tuple of (command per busy position, whether the window command is run).
    """
    resolved: dict[str, str] = {}
    placeholder_used = False
    for position in positions:
        command, has_placeholder = _pane_command(layout_config, position, window_command)
        placeholder_used = placeholder_used or has_placeholder
        if command is not None:
            resolved[position] = command

    if not window_command:
        return resolved, False
    if placeholder_used:
        return resolved, True

    first_position = positions[0]
    if first_position in resolved:
        return resolved, False
    resolved[first_position] = window_command
    return resolved, True


def window_command_dropped(layout_config: LayoutConfig, window_command: str | None) -> bool:
    """Check whether a layout leaves no pane to run a window's command.

    Raises:
        TemplateNotFoundError: If the layout names an unknown template.
    """
    if not window_command:
        return False
    template = get_template(layout_config.template)
    _, placed = resolve_pane_commands(layout_config, template.positions, window_command)
    return not placed


def apply_layout(
    window_target: str,
    cwd: str | None,
    layout_config: LayoutConfig,
    window_command: str | None = None,
    shell: str | None = None,
) -> list[str]:
    """Build every command that sets up a layout in a window.

    Structural operations (splits and selects) always come first so the
    panes exist before anything is typed into them.

    Args:
        window_target: The window, e.g. ``"demo:0"``.
        cwd: Working directory of the window.
        layout_config: The layout to apply.
        window_command: The window's own command, if any.
        shell: Shell for new panes. Resolved from the layout if None.

    Returns:
        The ordered list of commands.

    Raises:
        TemplateNotFoundError: If the layout names an unknown template.
    """
    template = get_template(layout_config.template)
    result = template.apply(window_target, cwd)

    pane_shell = shell or resolve_shell(layout_config)
    commands = [with_shell(operation, pane_shell) for operation in result.operations]

    resolved, _ = resolve_pane_commands(layout_config, template.positions, window_command)
    for position in template.positions:
        if position in resolved:
            commands.append(send_keys(resolved[position], target=result.pane_targets[position], cwd=cwd))

    return commands
