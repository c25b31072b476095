"""Pane arrangement templates.

A template turns a freshly created window (which always starts with one
pane at index 0) into a fixed arrangement of panes. Tmux gives each new
pane the next unused index in the window, so the order of the splits,
not where the panes end up on screen, decides every pane's address.
Templates never query tmux; they predict addresses with ``PaneAllocator``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from pane.config import SplitDirection, TemplateName
from pane.errors import TemplateNotFoundError
from pane.tmux_commands import select_pane, split_pane


@dataclass
class TemplateResult:
    """Operations that build a template plus the address of each pane position."""

    operations: list[str] = field(default_factory=list)
    pane_targets: dict[str, str] = field(default_factory=dict)


class PaneAllocator:
    """Tracks pane creation order within one window.

    Args:
        window_target: The window the panes live in, e.g. ``"demo:1"``.
    """

    def __init__(self, window_target: str) -> None:
        self.window_target = window_target
        self._next_index = 1

    def address(self, index: int) -> str:
        """Return the address of the pane with the given index."""
        if index < 0 or index >= self._next_index:
            raise ValueError(f"Pane {index} has not been created in {self.window_target}")
        return f"{self.window_target}.{index}"

    @property
    def root(self) -> str:
        """Address of the pane the window was created with."""
        return self.address(0)

    @property
    def count(self) -> int:
        """Number of panes in the window so far."""
        return self._next_index

    def split(
        self,
        base: str,
        direction: SplitDirection,
        percentage: int,
        cwd: str | None = None,
    ) -> tuple[str, str]:
        """Split a pane and allocate the index of the new one.

        Args:
            base: Address of the pane to split.
            direction: Split direction.
            percentage: Size of the new pane in percent.
            cwd: Working directory of the new pane.

        Returns:
            Tuple of (split command, address of the new pane).
        """
        command = split_pane(base, direction, percentage=percentage, cwd=cwd)
        new_address = f"{self.window_target}.{self._next_index}"
        self._next_index += 1
        return command, new_address


class LayoutTemplate(ABC):
    """Base class for pane arrangement templates."""

    name: ClassVar[TemplateName]
    positions: ClassVar[tuple[str, ...]]
    description: ClassVar[str] = ""

    def pane_names(self) -> list[str]:
        """Return the pane position names this template defines."""
        return list(self.positions)

    @abstractmethod
    def apply(self, window_target: str, cwd: str | None, options: dict[str, str] | None = None) -> TemplateResult:
        """Build the template inside a window.

        Args:
            window_target: The window, e.g. ``"demo:0"``.
            cwd: Working directory for new panes.
            options: Extra per-window options (currently unused by built-ins).

        Returns:
            The split/select operations and the pane address of each position.
        """


class Single(LayoutTemplate):
    """One pane filling the whole window."""

    name = TemplateName.SINGLE
    positions = ("main",)
    description = "One pane filling the window"

    def apply(self, window_target: str, cwd: str | None, options: dict[str, str] | None = None) -> TemplateResult:
        panes = PaneAllocator(window_target)
        return TemplateResult(operations=[], pane_targets={"main": panes.root})


class SplitVertical(LayoutTemplate):
    """Two equal panes side by side.

    Layout:
    -----------------
    |       |       |
    | left  | right |
    |  50%  |  50%  |
    -----------------
    """

    name = TemplateName.SPLIT_VERTICAL
    positions = ("left", "right")
    description = "Two equal panes side by side"

    def apply(self, window_target: str, cwd: str | None, options: dict[str, str] | None = None) -> TemplateResult:
        panes = PaneAllocator(window_target)
        left = panes.root
        split_right, right = panes.split(left, SplitDirection.HORIZONTAL, 50, cwd)

        return TemplateResult(
            operations=[split_right],
            pane_targets={"left": left, "right": right},
        )


class TopSplitBottom(LayoutTemplate):
    """A large top pane over two equal bottom panes.

    Layout:
    ---------------------------
    |          top  60%       |
    |-------------------------|
    | bottomLeft | bottomRight|
    ---------------------------
    """

    name = TemplateName.TOP_SPLIT_BOTTOM
    positions = ("top", "bottomLeft", "bottomRight")
    description = "Top pane (60%) over two bottom panes"

    def apply(self, window_target: str, cwd: str | None, options: dict[str, str] | None = None) -> TemplateResult:
        panes = PaneAllocator(window_target)
        top = panes.root
        split_bottom, bottom_left = panes.split(top, SplitDirection.VERTICAL, 40, cwd)
        split_bottom_right, bottom_right = panes.split(bottom_left, SplitDirection.HORIZONTAL, 50, cwd)

        return TemplateResult(
            operations=[split_bottom, split_bottom_right, select_pane(top)],
            pane_targets={"top": top, "bottomLeft": bottom_left, "bottomRight": bottom_right},
        )


class Quad(LayoutTemplate):
    """Four equal panes in a 2x2 grid.

    The bottom half is created first, so bottomLeft is pane 1 and
    topRight is pane 2.

    Layout:
    ---------------------------------
    | topLeft    .0 | topRight    .2 |
    |---------------+---------------|
    | bottomLeft .1 | bottomRight .3 |
    ---------------------------------
    """

    name = TemplateName.QUAD
    positions = ("topLeft", "topRight", "bottomLeft", "bottomRight")
    description = "Four equal panes in a 2x2 grid"

    def apply(self, window_target: str, cwd: str | None, options: dict[str, str] | None = None) -> TemplateResult:
        panes = PaneAllocator(window_target)
        top_left = panes.root
        split_bottom, bottom_left = panes.split(top_left, SplitDirection.VERTICAL, 50, cwd)
        split_top_right, top_right = panes.split(top_left, SplitDirection.HORIZONTAL, 50, cwd)
        split_bottom_right, bottom_right = panes.split(bottom_left, SplitDirection.HORIZONTAL, 50, cwd)

        return TemplateResult(
            operations=[split_bottom, split_top_right, split_bottom_right, select_pane(top_left)],
            pane_targets={
                "topLeft": top_left,
                "topRight": top_right,
                "bottomLeft": bottom_left,
                "bottomRight": bottom_right,
            },
        )


# Registry of template singletons, in display order
TEMPLATES: dict[TemplateName, LayoutTemplate] = {
    TemplateName.SINGLE: Single(),
    TemplateName.SPLIT_VERTICAL: SplitVertical(),
    TemplateName.TOP_SPLIT_BOTTOM: TopSplitBottom(),
    TemplateName.QUAD: Quad(),
}

_TEMPLATES_BY_KEY: dict[str, LayoutTemplate] = {name.value.lower(): template for name, template in TEMPLATES.items()}


def get_template(name: str) -> LayoutTemplate:
    """Look up a template by name, ignoring case.

    Args:
        name: Template name, e.g. ``"TopSplitBottom"``.

    Returns:
        The template.

    Raises:
        TemplateNotFoundError: If no template has that name.
    """
    template = _TEMPLATES_BY_KEY.get(name.lower())
    if template is None:
        raise TemplateNotFoundError(name)
    return template


def list_templates() -> list[LayoutTemplate]:
    """Return all templates in registry order."""
    return list(TEMPLATES.values())
