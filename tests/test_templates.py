"""Tests for pane.templates module."""

import pytest

from pane.config import SplitDirection, TemplateName
from pane.errors import TemplateNotFoundError
from pane.templates import (
    TEMPLATES,
    LayoutTemplate,
    PaneAllocator,
    Quad,
    Single,
    SplitVertical,
    TopSplitBottom,
    get_template,
    list_templates,
)

WINDOW = "session:0"
CWD = "/home/user/project"


def _splits(operations: list[str]) -> list[str]:
    return [op for op in operations if op.startswith("tmux split-window")]


class TestPaneAllocator:
    """Tests for PaneAllocator."""

    def test_root_is_pane_zero(self) -> None:
        """Should start with the window's initial pane."""
        panes = PaneAllocator("demo:3")
        assert panes.root == "demo:3.0"
        assert panes.count == 1

    def test_split_allocates_sequential_indices(self) -> None:
        """Should give each split the next index regardless of the base pane."""
        panes = PaneAllocator("demo:0")
        _, first = panes.split(panes.root, SplitDirection.VERTICAL, 50)
        _, second = panes.split(panes.root, SplitDirection.HORIZONTAL, 50)
        _, third = panes.split(first, SplitDirection.HORIZONTAL, 50)
        assert (first, second, third) == ("demo:0.1", "demo:0.2", "demo:0.3")
        assert panes.count == 4

    def test_split_command_targets_base(self) -> None:
        """Should split the given base pane."""
        panes = PaneAllocator("demo:0")
        command, _ = panes.split("demo:0.0", SplitDirection.VERTICAL, 40, "/tmp")
        assert command == 'tmux split-window -t "demo:0.0" -v -p 40 -c "/tmp"'

    def test_address_rejects_unallocated(self) -> None:
        """Should refuse addresses of panes not created yet."""
        panes = PaneAllocator("demo:0")
        with pytest.raises(ValueError, match="has not been created"):
            panes.address(1)


class TestSingle:
    """Tests for the Single template."""

    def test_no_operations(self) -> None:
        """Should have no commands and one pane target."""
        result = Single().apply(WINDOW, CWD)
        assert result.operations == []
        assert result.pane_targets == {"main": "session:0.0"}


class TestSplitVertical:
    """Tests for the SplitVertical template."""

    def test_one_side_by_side_split(self) -> None:
        """Should split once, horizontally, at 50%."""
        result = SplitVertical().apply(WINDOW, CWD)
        assert len(result.operations) == 1
        assert result.operations[0] == f'tmux split-window -t "session:0.0" -h -p 50 -c "{CWD}"'
        assert result.pane_targets == {"left": "session:0.0", "right": "session:0.1"}


class TestTopSplitBottom:
    """Tests for the TopSplitBottom template."""

    def test_operations(self) -> None:
        """Should split vertically, then horizontally, then select the top."""
        result = TopSplitBottom().apply(WINDOW, CWD)
        assert len(result.operations) == 3
        assert result.operations[0] == f'tmux split-window -t "session:0.0" -v -p 40 -c "{CWD}"'
        assert result.operations[1] == f'tmux split-window -t "session:0.1" -h -p 50 -c "{CWD}"'
        assert result.operations[2] == 'tmux select-pane -t "session:0.0"'

    def test_pane_targets(self) -> None:
        result = TopSplitBottom().apply(WINDOW, CWD)
        assert result.pane_targets == {
            "top": "session:0.0",
            "bottomLeft": "session:0.1",
            "bottomRight": "session:0.2",
        }


class TestQuad:
    """Tests for the Quad template."""

    def test_operations(self) -> None:
        """Should split vertical, horizontal, horizontal and select top-left."""
        result = Quad().apply(WINDOW, CWD)
        assert len(result.operations) == 4
        splits = _splits(result.operations)
        assert len(splits) == 3
        assert '-t "session:0.0" -v' in splits[0]
        assert '-t "session:0.0" -h' in splits[1]
        assert '-t "session:0.1" -h' in splits[2]
        assert result.operations[3] == 'tmux select-pane -t "session:0.0"'

    def test_bottom_left_created_before_top_right(self) -> None:
        """Should number panes by creation order, not screen position."""
        result = Quad().apply(WINDOW, CWD)
        assert result.pane_targets == {
            "topLeft": "session:0.0",
            "topRight": "session:0.2",
            "bottomLeft": "session:0.1",
            "bottomRight": "session:0.3",
        }


class TestAllTemplates:
    """Properties shared by every template."""

    @pytest.mark.parametrize("template", list(TEMPLATES.values()), ids=lambda t: t.name.value)
    def test_targets_match_positions(self, template: LayoutTemplate) -> None:
        """Should map exactly the declared positions to addresses in the window."""
        result = template.apply("demo:4", "/tmp")
        assert list(result.pane_targets) == list(template.positions)
        assert template.pane_names() == list(template.positions)
        for address in result.pane_targets.values():
            window, index = address.rsplit(".", 1)
            assert window == "demo:4"
            assert int(index) >= 0

    @pytest.mark.parametrize("template", list(TEMPLATES.values()), ids=lambda t: t.name.value)
    def test_addresses_are_unique(self, template: LayoutTemplate) -> None:
        result = template.apply("demo:0", None)
        assert len(set(result.pane_targets.values())) == len(template.positions)

    def test_omits_cwd_when_none(self) -> None:
        result = SplitVertical().apply("demo:0", None)
        assert "-c" not in result.operations[0]


class TestRegistry:
    """Tests for get_template and list_templates."""

    def test_lookup_by_name(self) -> None:
        assert isinstance(get_template("TopSplitBottom"), TopSplitBottom)
        assert isinstance(get_template(TemplateName.QUAD), Quad)

    def test_lookup_ignores_case(self) -> None:
        assert isinstance(get_template("splitvertical"), SplitVertical)

    def test_returns_singletons(self) -> None:
        assert get_template("Single") is get_template("single")

    def test_unknown_template(self) -> None:
        with pytest.raises(TemplateNotFoundError, match="Hexagon"):
            get_template("Hexagon")

    def test_list_order(self) -> None:
        names = [template.name for template in list_templates()]
        assert names == [
            TemplateName.SINGLE,
            TemplateName.SPLIT_VERTICAL,
            TemplateName.TOP_SPLIT_BOTTOM,
            TemplateName.QUAD,
        ]


class TestLayoutTemplateContract:
    """Tests for the LayoutTemplate base class."""

    def test_base_cannot_be_created(self) -> None:
        with pytest.raises(TypeError):
            LayoutTemplate()

    def test_subclass_must_implement_apply(self) -> None:
        """Should reject a template that does not build anything."""

        class Incomplete(LayoutTemplate):
            name = TemplateName.SINGLE
            positions = ("main",)

        with pytest.raises(TypeError, match="apply"):
            Incomplete()
