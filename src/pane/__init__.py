"""pane - build reproducible tmux workspaces from a YAML description."""

__version__ = "0.1.0"
