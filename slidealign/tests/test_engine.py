"""Tests for the LayoutEngine facade."""

import pytest

from slidealign.anchor import InMemoryAnchorStore
from slidealign.engine import LayoutEngine
from slidealign.host.memory import InMemoryPage, InMemorySelection, InMemoryShape, InMemoryTable


@pytest.fixture
def selection(shapes) -> InMemorySelection:
    return InMemorySelection(shapes)


@pytest.fixture
def engine(selection, anchor_store, page, settings) -> LayoutEngine:
    return LayoutEngine(selection, anchor_store, page=page, settings=settings)


class TestAnchorManagement:
    """Tests for setting, clearing and describing the anchor."""

    def test_set_anchor_requires_one_object(self, engine, anchor_store):
        status = engine.set_anchor()

        assert status == "Set anchor: select exactly one object (currently 3 selected)."
        assert anchor_store.get() is None

    def test_set_anchor_with_nothing_selected(self, engine, selection, anchor_store):
        selection.select()
        assert "currently 0 selected" in engine.set_anchor()
        assert anchor_store.get() is None

    def test_set_and_use_anchor(self, engine, selection, shapes, anchor_store):
        selection.select(shapes[0])
        assert engine.set_anchor() == "Set anchor: a is now the anchor."
        assert anchor_store.get() == "a"

        selection.select(*shapes)
        engine.align_top()

        assert [s.top for s in shapes] == [10, 10, 10]

    def test_describe_anchor(self, engine, selection, shapes, anchor_store):
        assert engine.describe_anchor() == "Anchor: none set; the last selected object (c) is used."

        anchor_store.set("b")
        assert engine.describe_anchor() == "Anchor: b (in the current selection)."

        selection.select(shapes[0])
        assert engine.describe_anchor() == "Anchor: b is not selected; the last selected object (a) is used."

    def test_clear_anchor(self, engine, anchor_store):
        assert engine.clear_anchor() == "Clear anchor: no anchor was set."

        anchor_store.set("a")
        assert engine.clear_anchor() == "Clear anchor: anchor cleared."
        assert anchor_store.get() is None


class TestOperations:
    """Each facade method returns the engine's status line."""

    def test_alignment(self, engine, shapes):
        assert engine.align_left() == "Align left: moved 2 objects."
        assert [s.left for s in shapes] == [200, 200, 200]

        assert engine.align("center_y") == "Align vertical centers: moved 2 objects."

    def test_distribution(self, engine, shapes):
        status = engine.distribute_horizontal()
        assert status == "Distribute horizontally: moved 3 objects."

    def test_docking(self, engine, shapes):
        assert engine.dock_bottom() == "Dock bottom: moved 2 objects."
        assert shapes[0].top == 70
        assert shapes[1].top == 70

    def test_sizing(self, engine, shapes):
        assert engine.match_both() == "Match size: resized 2 objects."
        assert all((s.width, s.height) == (80, 40) for s in shapes)

        assert engine.magic_resize(50) == "Resize to 50%: resized 3 objects."
        assert engine.magic_resize(0).startswith("Resize: percentage must be greater than 0")

    def test_stretch_and_fill(self, anchor_store, page, settings):
        other = InMemoryShape("other", 0, 0, 50, 10)
        anchor = InMemoryShape("anchor", 100, 0, 50, 10)
        engine = LayoutEngine(InMemorySelection([other, anchor]), anchor_store, page, settings)

        assert engine.fill_right() == "Fill right: resized 1 object."
        assert other.width == 100
        assert engine.fill_right() == "Fill right: no gaps found between the selected objects and the anchor."

        assert engine.stretch("right") == "Stretch right: resized 1 object."
        assert other.width == 150

    def test_arrange_matrix_uses_configured_spacing(self, engine, shapes):
        status = engine.arrange_matrix(2, 2)

        assert status == "Arrange in grid: placed 3 objects (2 rows x 2 columns)."
        assert (shapes[0].left, shapes[0].top) == (10, 10)

    def test_rejections_are_strings(self, engine, selection):
        selection.select()
        assert engine.distribute_vertical() == (
            "Distribute vertically: select at least 3 objects (currently 0 selected)."
        )


class TestTableOperations:
    """Tests for table operations through the facade."""

    def test_align_in_table_cells(self, engine, selection, table):
        shape = InMemoryShape("s", 240, 160, 20, 10)
        selection.select(table, shape)

        status = engine.align_in_table_cells("left")

        assert status == "Align in table cells (left): aligned 1 object."
        # Padding from settings
        assert shape.left == 202
        assert table.left == 100

    def test_align_in_table_cells_without_table(self, selection, anchor_store, settings):
        engine = LayoutEngine(selection, anchor_store, page=InMemoryPage(), settings=settings)

        status = engine.align_in_table_cells()

        assert status.startswith("Align in table cells (center): no table found")

    def test_swap_rows_and_columns(self, engine, table):
        assert engine.swap_table_rows(1, 2) == (
            "Swap rows: swapped rows 1 and 2 (text only, formatting unchanged)."
        )
        assert table.cell(0, 0).get_text() == "A2"

        engine.swap_table_columns(1, 3, keep_formatting=True)
        assert table.cell(0, 0).get_text() == "C2"
        assert table.cell(0, 2).get_text() == "A2"

    def test_swap_on_ambiguous_page(self, selection, anchor_store, table, settings):
        page = InMemoryPage([table, InMemoryTable("other", 0, 0, [10], [10])])
        engine = LayoutEngine(selection, anchor_store, page=page, settings=settings)

        assert "found 2 tables" in engine.swap_table_rows(1, 2)
