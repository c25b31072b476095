"""Tests for pane.utils module."""

import os
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pane.utils import (
    _has_term_env,
    _has_tty_device,
    detect_shell,
    expand_home,
    is_inside_tmux,
    is_interactive_terminal,
    resolve_window_dir,
    terminal_checks,
)

HOME = str(Path.home())


class TestIsInsideTmux:
    """Tests for is_inside_tmux function."""

    def test_inside_tmux(self) -> None:
        """Should return True when TMUX env var is set."""
        with patch.dict(os.environ, {"TMUX": "/tmp/tmux-1000/default,12345,0"}):
            assert is_inside_tmux() is True

    def test_outside_tmux(self) -> None:
        """Should return False when TMUX env var is not set."""
        env = os.environ.copy()
        env.pop("TMUX", None)
        with patch.dict(os.environ, env, clear=True):
            assert is_inside_tmux() is False


class TestDetectShell:
    """Tests for detect_shell function."""

    def test_zsh_when_installed(self) -> None:
        with patch("pane.utils.PREFERRED_SHELL_PATH") as mock_path:
            mock_path.exists.return_value = True
            assert detect_shell() == "zsh"

    def test_bash_fallback(self) -> None:
        with patch("pane.utils.PREFERRED_SHELL_PATH") as mock_path:
            mock_path.exists.return_value = False
            assert detect_shell() == "bash"


class TestTerminalProbes:
    """Tests for the interactive-terminal probes."""

    def test_tty_device_found(self) -> None:
        with patch("pane.utils.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="/dev/pts/3\n")
            assert _has_tty_device() is True
            mock_run.assert_called_once_with(["tty"], capture_output=True, text=True, check=False)

    def test_tty_device_missing(self) -> None:
        with patch("pane.utils.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="not a tty\n")
            assert _has_tty_device() is False

    def test_tty_command_not_installed(self) -> None:
        with patch("pane.utils.subprocess.run", side_effect=FileNotFoundError):
            assert _has_tty_device() is False

    def test_term_env(self) -> None:
        with patch.dict(os.environ, {"TERM": "xterm-256color"}):
            assert _has_term_env() is True
        with patch.dict(os.environ, {"TERM": ""}):
            assert _has_term_env() is False

    def test_terminal_checks_keys(self) -> None:
        with patch("pane.utils.subprocess.run", return_value=subprocess.CompletedProcess(["tty"], 1, "not a tty\n")):
            checks = terminal_checks()
        assert set(checks) == {"stdin_is_tty", "has_tty_device", "stdin_is_char_device", "has_term_env"}
        assert checks["has_tty_device"] is False


class TestIsInteractiveTerminal:
    """Tests for is_interactive_terminal function."""

    def test_any_probe_is_enough(self) -> None:
        checks = {"stdin_is_tty": False, "has_tty_device": False, "stdin_is_char_device": False, "has_term_env": True}
        assert is_interactive_terminal(checks) is True

    def test_no_probe(self) -> None:
        checks = dict.fromkeys(("stdin_is_tty", "has_tty_device", "stdin_is_char_device", "has_term_env"), False)
        assert is_interactive_terminal(checks) is False

    def test_runs_probes_when_not_given(self) -> None:
        with patch("pane.utils.terminal_checks", return_value={"stdin_is_tty": True}) as mock_checks:
            assert is_interactive_terminal() is True
            mock_checks.assert_called_once()


class TestPaths:
    """Tests for expand_home and resolve_window_dir."""

    def test_expand_home(self) -> None:
        assert expand_home("~/code") == os.path.join(HOME, "code")
        assert expand_home("/srv/code") == "/srv/code"

    @pytest.mark.parametrize(
        ("root", "path", "expected"),
        [
            ("/srv", None, "/srv"),
            ("/srv/", "api", "/srv/api"),
            ("/srv/apps", "../lib", "/srv/lib"),
            ("/srv", "/opt/tool", "/opt/tool"),
            ("/srv", "./api/", "/srv/api"),
        ],
    )
    def test_resolve_window_dir(self, root: str, path: str | None, expected: str) -> None:
        assert resolve_window_dir(root, path) == expected

    def test_resolve_window_dir_home_root(self) -> None:
        assert resolve_window_dir("~/", "proj") == os.path.join(HOME, "proj")
