"""Tmux command string builders.

Every function here is pure: it renders a single tmux operation as a
command line meant to be run through a POSIX shell. Optional flags are
left out when their value is not given.
"""

from pane.config import SplitDirection

# Keystroke that makes tmux "press enter" after typed text
ENTER_KEY = "C-m"


def _quote(value: str) -> str:
    """Wrap a value in double quotes."""
    return f'"{value}"'


def session_exists(session_name: str) -> str:
    """Build a command whose exit status tells whether a session exists.

    Args:
        session_name: The session name.

    Returns:
        A has-session command with stderr suppressed.
    """
    return f"tmux has-session -t {_quote(session_name)} 2>/dev/null"


def new_session(
    session_name: str,
    cwd: str | None = None,
    window_name: str | None = None,
    create_or_attach: bool = False,
) -> str:
    """Build a command that creates a detached session.

    Args:
        session_name: The session name.
        cwd: Working directory of the first window.
        window_name: Name of the first window.
        create_or_attach: Add ``-A`` so an existing session is reused.

    Returns:
        The new-session command.
    """
    options: list[str] = []
    if window_name:
        options.append(f"-n {_quote(window_name)}")
    if cwd:
        options.append(f"-c {_quote(cwd)}")
    if create_or_attach:
        options.append("-A")
    # Never attach here, attaching is always a separate step
    options.append("-d")
    return f"tmux new-session {' '.join(options)} -s {_quote(session_name)}"


def new_window(
    window_name: str,
    target_session: str,
    cwd: str | None = None,
    window_index: int | None = None,
) -> str:
    """Build a command that creates a detached window.

    With ``window_index`` the window is inserted right after window
    ``window_index - 1`` of the target session.

    Args:
        window_name: The window name.
        target_session: The session to add the window to.
        cwd: Working directory of the window.
        window_index: Requested position of the window.

    Returns:
        The new-window command.
    """
    options = [f"-t {_quote(target_session)}"]
    if window_index is not None:
        options.append(f"-a -t {_quote(f'{target_session}:{window_index - 1}')}")
    if cwd:
        options.append(f"-c {_quote(cwd)}")
    options.append("-d")
    return f"tmux new-window {' '.join(options)} -n {_quote(window_name)}"


def select_window(target: str) -> str:
    """Build a select-window command."""
    return f"tmux select-window -t {_quote(target)}"


def select_pane(target: str) -> str:
    """Build a select-pane command."""
    return f"tmux select-pane -t {_quote(target)}"


def split_pane(
    target: str,
    direction: SplitDirection,
    percentage: int | None = None,
    cwd: str | None = None,
    command: str | None = None,
) -> str:
    """Build a split-window command.

    Args:
        target: The pane to split.
        direction: ``HORIZONTAL`` for left/right, ``VERTICAL`` for top/bottom.
        percentage: Size of the new pane in percent.
        cwd: Working directory of the new pane.
        command: Program to start in the new pane instead of the default shell.

    Returns:
        The split-window command.
    """
    options = [f"-t {_quote(target)}", f"-{direction.value}"]
    if percentage:
        options.append(f"-p {percentage}")
    if cwd:
        options.append(f"-c {_quote(cwd)}")
    if command:
        options.append(f"'{command}'")
    return f"tmux split-window {' '.join(options)}"


def attach_session(target: str | None = None) -> str:
    """Build an attach-session command."""
    if target:
        return f"tmux attach-session -t {_quote(target)}"
    return "tmux attach-session"


def send_keys(text: str, target: str, cwd: str | None = None) -> str:
    """Build a command that types text into a pane and presses enter.

    When ``cwd`` is given the text is prefixed with a ``cd`` into it,
    unless the text already starts with ``cd ``. That check is a plain
    prefix test, not a parse of the command.

    Args:
        text: The command line to type.
        target: The pane to type into.
        cwd: Directory to change into first.

    Returns:
        The send-keys command.
    """
    command = text
    if cwd and not command.startswith("cd "):
        command = f'cd "{cwd}" && {command}'
    escaped = command.replace('"', '\\"')
    return f"tmux send-keys -t {_quote(target)} {_quote(escaped)} {ENTER_KEY}"


def list_sessions() -> str:
    """Build a list-sessions command."""
    return "tmux list-sessions"


def kill_session(target: str) -> str:
    """Build a kill-session command."""
    return f"tmux kill-session -t {_quote(target)}"


def set_option(option: str, value: str, target: str | None = None) -> str:
    """Build a session set-option command."""
    options = [f"-t {_quote(target)}"] if target else []
    return " ".join(["tmux set-option", *options, option, value])


def list_windows(target_session: str | None = None) -> str:
    """Build a list-windows command."""
    if target_session:
        return f"tmux list-windows -t {_quote(target_session)}"
    return "tmux list-windows"


def kill_window(target: str) -> str:
    """Build a kill-window command."""
    return f"tmux kill-window -t {_quote(target)}"


def set_window_option(option: str, value: str, target: str | None = None) -> str:
    """Build a set-window-option command."""
    options = [f"-t {_quote(target)}"] if target else []
    return " ".join(["tmux set-window-option", *options, option, value])


def kill_pane(target: str) -> str:
    """Build a kill-pane command."""
    return f"tmux kill-pane -t {_quote(target)}"


def select_layout(layout: str, target: str | None = None) -> str:
    """Build a select-layout command for one of tmux's own layouts."""
    options = [f"-t {_quote(target)}"] if target else []
    return " ".join(["tmux select-layout", *options, layout])


def next_layout(target: str | None = None) -> str:
    """Build a next-layout command."""
    if target:
        return f"tmux next-layout -t {_quote(target)}"
    return "tmux next-layout"


def previous_layout(target: str | None = None) -> str:
    """Build a previous-layout command."""
    if target:
        return f"tmux previous-layout -t {_quote(target)}"
    return "tmux previous-layout"
