"""Generate the full tmux command list for a session."""

from dataclasses import dataclass

from pane.config import DEFAULT_LAYOUT_NAME, SessionConfig, WindowConfig
from pane.layouts import apply_layout, get_layout_config
from pane.tmux_commands import attach_session, new_session, new_window, select_window, session_exists
from pane.utils import resolve_window_dir

DEFAULT_WINDOW_LABEL = "window"


@dataclass(frozen=True)
class ResolvedWindow:
    """A window with its derived label, directory and target."""

    index: int
    label: str
    cwd: str
    layout_name: str
    target: str
    command: str | None = None


def get_window_label(window: WindowConfig) -> str:
    """Get the window label, from the config or derived from the window.

    Falls back to the last path segment, then the first word of the
    command. The command fallback is a whitespace split, not a shell parse.

    Args:
        window: The window configuration.

    Returns:
        The label.
    """
    if window.label:
        return window.label
    if window.path:
        segment = window.path.rstrip("/").split("/")[-1]
        if segment:
            return segment
    if window.command:
        words = window.command.split()
        if words:
            return words[0]
    return DEFAULT_WINDOW_LABEL


def resolve_window(config: SessionConfig, index: int, window: WindowConfig) -> ResolvedWindow:
    """Resolve the derived attributes of a window.

    Args:
        config: The session configuration.
        index: Position of the window in the config.
        window: The window configuration.

    Returns:
        The resolved window.
    """
    return ResolvedWindow(
        index=index,
        label=get_window_label(window),
        cwd=resolve_window_dir(config.root, window.path),
        layout_name=window.layout or config.default_layout or DEFAULT_LAYOUT_NAME,
        target=f"{config.session}:{index}",
        command=window.command,
    )


def resolve_windows(config: SessionConfig) -> list[ResolvedWindow]:
    """Resolve every window of a session, in config order."""
    return [resolve_window(config, index, window) for index, window in enumerate(config.windows)]


def generate_window_commands(config: SessionConfig, window: ResolvedWindow) -> list[str]:
    """Build the commands that create one window and lay out its panes.

    Args:
        config: The session configuration.
        window: The resolved window.

    Returns:
        The window's commands, creation command first.

    Raises:
        LayoutNotFoundError: If the window's layout is unknown.
        TemplateNotFoundError: If the layout's template is unknown.
    """
    layout_config = get_layout_config(config, window.layout_name)

    if window.index == 0:
        # The first window creates the session
        create_cmd = new_session(
            config.session,
            cwd=window.cwd,
            window_name=window.label,
            create_or_attach=True,
        )
    else:
        create_cmd = new_window(
            window.label,
            target_session=config.session,
            cwd=window.cwd,
            window_index=window.index,
        )

    return [create_cmd, *apply_layout(window.target, window.cwd, layout_config, window_command=window.command)]


def generate_commands(config: SessionConfig) -> list[str]:
    """Generate all tmux commands for a session.

    The first element is always the session existence check and the last
    is always the attach command; the executor relies on both positions.

    Args:
        config: The normalized session configuration.

    Returns:
        The ordered list of commands.

    Raises:
        LayoutNotFoundError: If a window's layout is unknown.
        TemplateNotFoundError: If a layout's template is unknown.
    """
    commands = [session_exists(config.session)]

    for window in resolve_windows(config):
        commands.extend(generate_window_commands(config, window))

    commands.append(select_window(f"{config.session}:0"))
    commands.append(attach_session(config.session))
    return commands
