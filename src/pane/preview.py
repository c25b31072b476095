"""Preview what pane would do, without changing anything."""

from rich.console import Console

from pane.command_generator import resolve_windows
from pane.config import SessionConfig
from pane.executor import check_session
from pane.utils import is_interactive_terminal, terminal_checks

# (check key, heading, equivalent shell probe)
_TERMINAL_PROBES: list[tuple[str, str, str]] = [
    ("stdin_is_tty", "is_tty_0?", "test -t 0"),
    ("has_tty_device", "has_tty_device?", 'tty | grep -v "not a tty" > /dev/null'),
    ("stdin_is_char_device", "is_stdin_char_device?", "test -c /dev/stdin"),
    ("has_term_env", "has_term_env?", '[ -n "$TERM" ]'),
]


def _status(value: bool) -> str:
    return "0 (0=true, 1=false)" if value else "1 (0=true, 1=false)"


def _section(console: Console, title: str) -> None:
    console.print(f"\n# {title}")
    console.print(f"# {'-' * len(title)}")


def render_preview(
    config: SessionConfig,
    commands: list[str],
    console: Console,
    no_attach: bool = False,
    checks: dict[str, bool] | None = None,
    session_running: bool | None = None,
) -> None:
    """Print the configuration, environment checks and commands.

    The existence check (first command) is actually run to report whether
    the session is already up; nothing else is executed.

    Args:
        config: The normalized session configuration.
        commands: Output of ``generate_commands``.
        console: Rich console to print to.
        no_attach: Whether --no-attach was given.
        checks: Precomputed terminal probe results.
        session_running: Precomputed existence check result.
    """
    if checks is None:
        checks = terminal_checks()
    interactive = is_interactive_terminal(checks)
    would_attach = interactive and not no_attach

    check_cmd = commands[0]
    attach_cmd = commands[-1]
    if session_running is None:
        session_running = check_session(check_cmd)

    out = Console(file=console.file, markup=False, emoji=False, highlight=False, soft_wrap=True)

    _section(out, "Configuration")
    out.print(f"# Session: {config.session}")
    out.print(f"# Config file: {config.config_path or '(none)'}")
    out.print(f"#   root: {config.root}")
    labels = ", ".join(window.label for window in resolve_windows(config))
    out.print(f"#   windows: [{labels}]")

    _section(out, "Terminal detection")
    for key, heading, probe in _TERMINAL_PROBES:
        out.print(f"# {heading}")
        out.print(probe)
        out.print(f"# result: {_status(checks.get(key, False))}")
        out.print()

    _section(out, "Flag processing")
    out.print(f"# --no-attach specified?: {str(no_attach).lower()}")
    out.print(f"# can_auto_attach?: {str(interactive).lower()}")
    out.print(f"# auto_attach_enabled?: {str(would_attach).lower()}")

    _section(out, "Session detection")
    out.print("# check for running session")
    out.print(check_cmd)
    out.print(f"# session_running?: {str(session_running).lower()}")

    _section(out, "TMux commands that would be executed")
    if session_running:
        out.print("# Session already exists, window creation would be skipped")
    else:
        out.print("# Creating new session")
    for cmd in commands[1:-1]:
        out.print(cmd)

    _section(out, "Auto attach command")
    if not would_attach:
        out.print("# Would not auto-attach (--no-attach specified or not in an interactive terminal)")
        out.print("# To manually attach, you would run:")
    out.print(attach_cmd)
