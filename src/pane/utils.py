"""Utility functions for pane."""

import os
import stat
import subprocess
import sys
from pathlib import Path

PREFERRED_SHELL = "zsh"
PREFERRED_SHELL_PATH = Path("/bin/zsh")
FALLBACK_SHELL = "bash"


def is_inside_tmux() -> bool:
    """Check if we're running inside a tmux session."""
    return os.environ.get("TMUX") is not None


def detect_shell() -> str:
    """Pick the shell to start in new panes.

    Returns:
        ``zsh`` when it is installed at /bin/zsh, ``bash`` otherwise.
    """
    if PREFERRED_SHELL_PATH.exists():
        return PREFERRED_SHELL
    return FALLBACK_SHELL


def _stdin_is_tty() -> bool:
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def _has_tty_device() -> bool:
    """Check whether the ``tty`` command reports a terminal."""
    try:
        result = subprocess.run(["tty"], capture_output=True, text=True, check=False)
    except FileNotFoundError:
        return False
    return result.returncode == 0 and "not a tty" not in result.stdout


def _stdin_is_char_device() -> bool:
    try:
        return stat.S_ISCHR(os.fstat(sys.stdin.fileno()).st_mode)
    except (AttributeError, OSError, ValueError):
        return False


def _has_term_env() -> bool:
    return bool(os.environ.get("TERM"))


def terminal_checks() -> dict[str, bool]:
    """Run each interactive-terminal probe.

    Returns:
        Mapping of probe name to result.
    """
    return {
        "stdin_is_tty": _stdin_is_tty(),
        "has_tty_device": _has_tty_device(),
        "stdin_is_char_device": _stdin_is_char_device(),
        "has_term_env": _has_term_env(),
    }


def is_interactive_terminal(checks: dict[str, bool] | None = None) -> bool:
    """Check if we're running in an interactive terminal.

    Any single probe reporting a terminal is enough.

    Args:
        checks: Precomputed probe results. Runs the probes if None.

    Returns:
        True if any probe detects a terminal.
    """
    if checks is None:
        checks = terminal_checks()
    return any(checks.values())


def expand_home(path: str) -> str:
    """Expand a leading ``~`` to the user's home directory."""
    return str(Path(path).expanduser()) if path.startswith("~") else path


def resolve_window_dir(root: str, path: str | None = None) -> str:
    """Compute the absolute working directory of a window.

    Args:
        root: Session root, may start with ``~``.
        path: Window path relative to the root.

    Returns:
        The normalized absolute directory.
    """
    base = expand_home(root)
    if path:
        return os.path.abspath(os.path.join(base, expand_home(path)))
    return os.path.abspath(base)
