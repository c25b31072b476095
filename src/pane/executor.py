"""Run generated tmux commands against the tmux server."""

import subprocess
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from pane.command_generator import generate_commands, resolve_windows
from pane.config import SessionConfig
from pane.layouts import get_layout_config, window_command_dropped
from pane.tmux_commands import kill_session as kill_session_command
from pane.tmux_commands import list_sessions as list_sessions_command
from pane.tmux_commands import session_exists
from pane.utils import is_interactive_terminal


@dataclass
class RunResult:
    """Outcome of running a session's commands."""

    session_existed: bool
    executed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def run_shell_command(command: str) -> subprocess.CompletedProcess[str]:
    """Run one command line through the shell, capturing its output."""
    return subprocess.run(command, shell=True, capture_output=True, text=True, check=False)


def check_session(check_command: str) -> bool:
    """Run a session existence check.

    Args:
        check_command: The has-session command.

    Returns:
        True if the session exists.
    """
    return run_shell_command(check_command).returncode == 0


def run_commands(commands: list[str], console: Console | None = None, verbose: bool = False) -> RunResult:
    """Execute a generated command list.

    The first command is the existence check. If the session already
    exists nothing else runs. Otherwise every command between the first
    and the last (the attach command) runs in order; a failing command is
    reported as a warning and execution continues.

    Args:
        commands: Output of ``generate_commands``.
        console: Rich console for warnings and verbose output.
        verbose: Print each command before running it.

    Returns:
        The run result.
    """
    console = console or Console(stderr=True)
    check_cmd, *rest = commands

    if check_session(check_cmd):
        if verbose:
            console.print("[dim]Session already exists, skipping window creation[/]")
        return RunResult(session_existed=True)

    result = RunResult(session_existed=False)
    for cmd in rest[:-1]:
        if verbose:
            console.print(f"[dim]$ {escape(cmd)}[/]", highlight=False)
        completed = run_shell_command(cmd)
        result.executed.append(cmd)
        if completed.returncode != 0:
            result.failed.append(cmd)
            console.print(f"[yellow]Warning:[/] Command failed: {escape(cmd)}", highlight=False)
            error_text = (completed.stderr or "").strip()
            if error_text:
                console.print(f"[yellow]Error:[/] {escape(error_text)}", highlight=False)
    return result


def list_running_sessions() -> list[str]:
    """List the sessions of the tmux server, one description per line.

    Returns:
        Empty when no tmux server is running.
    """
    completed = run_shell_command(list_sessions_command())
    if completed.returncode != 0:
        return []
    return [line for line in completed.stdout.splitlines() if line.strip()]


def kill_session(session_name: str) -> bool:
    """Kill a session if it is running.

    Args:
        session_name: The session name.

    Returns:
        True if the session was running and tmux killed it.
    """
    if not check_session(session_exists(session_name)):
        return False
    return run_shell_command(kill_session_command(session_name)).returncode == 0


def attach_session(session_name: str) -> int:
    """Attach the current terminal to a session.

    Args:
        session_name: The session name to attach to.

    Returns:
        The exit status of tmux.
    """
    cmd = ["tmux", "attach-session", "-t", session_name]
    return subprocess.run(cmd, check=False).returncode


def print_attach_instructions(session_name: str, console: Console, reason: str | None = None) -> None:
    """Tell the user how to attach manually."""
    console.print(f"\nTmux session '{escape(session_name)}' is ready.")
    if reason:
        console.print(reason)
    console.print("To attach to this session, run the following command in your terminal:")
    console.print(f"  tmux attach -t {escape(session_name)}", highlight=False)


def run_session(
    config: SessionConfig,
    auto_attach: bool = True,
    console: Console | None = None,
    verbose: bool = False,
    err_console: Console | None = None,
) -> RunResult:
    """Create (if needed) and optionally attach to the configured session.

    Args:
        config: The normalized session configuration.
        auto_attach: Attach when running in an interactive terminal.
        console: Rich console for output.
        verbose: Print what is happening.
        err_console: Rich console for warnings about failed commands.

    Returns:
        The run result.

    Raises:
        LayoutNotFoundError: If a window's layout is unknown.
        TemplateNotFoundError: If a layout's template is unknown.
    """
    console = console or Console()
    err_console = err_console or Console(stderr=True)

    if verbose:
        for window in resolve_windows(config):
            kind = "first window" if window.index == 0 else "window"
            console.print(f"[dim]Creating {kind}: {escape(window.label)} (layout: {escape(window.layout_name)})[/]")
            if window_command_dropped(get_layout_config(config, window.layout_name), window.command):
                console.print(
                    f"[dim]  Command not run: {escape(window.command or '')} "
                    f"(the first pane of layout {escape(window.layout_name)} already runs a command)[/]"
                )

    commands = generate_commands(config)
    result = run_commands(commands, console=err_console, verbose=verbose)
    session_name = config.session

    if not auto_attach:
        print_attach_instructions(session_name, console)
        console.print("\nRun with --preview to see the full list of commands executed.")
        return result

    interactive = is_interactive_terminal()
    if verbose:
        console.print(f"[dim]Interactive terminal detection: {interactive}[/]")

    if interactive:
        console.print(f"\nAttaching to tmux session '{escape(session_name)}'...")
        attach_session(session_name)
    else:
        print_attach_instructions(
            session_name,
            console,
            reason="Cannot attach automatically - not running in an interactive terminal.",
        )
    return result
