"""Tests for table cell location, in-cell alignment and row/column swaps."""

import pytest

from slidealign.host.memory import InMemoryPage, InMemoryShape, InMemoryTable
from slidealign.model.schema import (
    CellAlignment,
    CellFill,
    ParagraphStyleRange,
    ParagraphStyleSnapshot,
    RgbColor,
    RunStyleRange,
    RunStyleSnapshot,
    ThemeColor,
)
from slidealign.tables import (
    CellContentSwapper,
    SwapAxis,
    TableCellLocator,
    TableSelectionError,
    apply_payload,
    capture_payload,
    cell_bounds,
    find_target_table,
    group_by_cell,
    locate,
    replace_text,
)


def texts(table):
    return [[table.cell(r, c).get_text() for c in range(table.num_cols)] for r in range(table.num_rows)]


def centered_at(shape_id, x, y, size=10):
    return InMemoryShape(shape_id, x - size / 2, y - size / 2, size, size)


class TestCellBounds:
    """Tests for cell geometry."""

    def test_prefix_sums(self, table):
        cells = cell_bounds(table)

        assert len(cells) == 9
        middle = cells[4]
        assert (middle.row, middle.col) == (1, 1)
        assert (middle.bounds.x, middle.bounds.y) == (200, 150)
        assert (middle.bounds.width, middle.bounds.height) == (200, 50)

        last = cells[-1]
        assert (last.bounds.right, last.bounds.bottom) == (500, 280)


class TestLocate:
    """Tests for center-point containment."""

    def test_center_inside_cell(self, table):
        cell = locate(centered_at("s", 250, 120), table)
        assert (cell.row, cell.col) == (0, 1)

    def test_shared_border_belongs_to_right_and_below(self, table):
        on_vertical_border = locate(centered_at("v", 200, 120), table)
        assert (on_vertical_border.row, on_vertical_border.col) == (0, 1)

        on_horizontal_border = locate(centered_at("h", 150, 150), table)
        assert (on_horizontal_border.row, on_horizontal_border.col) == (1, 0)

    def test_far_edges_are_outside(self, table):
        assert locate(centered_at("r", 500, 120), table) is None
        assert locate(centered_at("b", 150, 280), table) is None
        assert locate(centered_at("o", 10, 10), table) is None

    def test_large_shape_uses_center_only(self, table):
        # Overhangs three columns but its center is in the middle one.
        wide = InMemoryShape("wide", 120, 110, 300, 20)
        cell = locate(wide, table)
        assert (cell.row, cell.col) == (0, 1)


class TestGroupByCell:
    """Tests for grouping."""

    def test_groups_and_unlocated(self, table):
        first = centered_at("first", 150, 120)
        second = centered_at("second", 160, 130)
        other = centered_at("other", 300, 250)
        outside = centered_at("outside", 0, 0)

        groups, unlocated = group_by_cell([first, other, outside, second], table)

        assert [[s.id for s in g.shapes] for g in groups] == [["first", "second"], ["other"]]
        assert (groups[1].cell.row, groups[1].cell.col) == (2, 1)
        assert unlocated == [outside]


class TestTableCellLocator:
    """Tests for aligning objects inside cells."""

    def test_center_stack(self, table):
        top = InMemoryShape("top", 210, 100, 20, 10)
        bottom = InMemoryShape("bottom", 260, 120, 40, 20)

        result = TableCellLocator(stack_gap=5).align_in_cells(
            [top, bottom], table, CellAlignment.CENTER, padding=0
        )

        # Cell (0, 1): x 200..400, y 100..150; stack height 10 + 5 + 20 = 35
        assert result.succeeded == 2
        assert (top.left, top.top) == (290, 107.5)
        assert (bottom.left, bottom.top) == (280, 122.5)

    def test_left_and_right_with_padding(self, table):
        left = InMemoryShape("left", 240, 160, 20, 10)
        right = InMemoryShape("right", 440, 250, 20, 10)
        locator = TableCellLocator(stack_gap=5)

        locator.align_in_cells([left], table, CellAlignment.LEFT, padding=8)
        locator.align_in_cells([right], table, CellAlignment.RIGHT, padding=8)

        assert left.left == 208
        assert right.left == 500 - 20 - 8

    def test_negative_padding_is_zero(self, table):
        shape = InMemoryShape("s", 240, 160, 20, 10)
        TableCellLocator(stack_gap=5).align_in_cells([shape], table, CellAlignment.LEFT, padding=-30)
        assert shape.left == 200

    def test_nothing_in_a_cell(self, table):
        outside = InMemoryShape("outside", 0, 0, 10, 10)

        result = TableCellLocator(stack_gap=5).align_in_cells(
            [outside], table, CellAlignment.CENTER, padding=0
        )

        assert result.rejected
        assert (outside.left, outside.top) == (0, 0)
        assert "none of the selected objects is inside a table cell" in str(result)

    def test_unlocated_reported_as_skipped(self, table):
        inside = InMemoryShape("inside", 240, 160, 20, 10)
        outside = InMemoryShape("outside", 0, 0, 10, 10)

        result = TableCellLocator(stack_gap=5).align_in_cells(
            [inside, outside], table, CellAlignment.CENTER, padding=0
        )

        assert result.succeeded == 1
        assert result.skipped == 1
        assert str(result).endswith("aligned 1 object, 1 skipped.")


class TestFindTargetTable:
    """Tests for table selection."""

    def test_selected_table_wins(self, table):
        other = InMemoryTable("other", 0, 0, [10], [10])
        page = InMemoryPage([table, other])
        assert find_target_table([other], page) is other

    def test_single_table_on_page(self, table, page):
        assert find_target_table([], page) is table

    def test_no_table(self):
        with pytest.raises(TableSelectionError, match="no table found"):
            find_target_table([], InMemoryPage())

    def test_ambiguous(self, table):
        page = InMemoryPage([table, InMemoryTable("other", 0, 0, [10], [10])])
        with pytest.raises(TableSelectionError, match="found 2 tables"):
            find_target_table([], page)


class TestPayload:
    """Tests for capturing and applying cell payloads."""

    def test_capture_and_apply(self, table):
        source = table.cell(0, 0)
        source.set_text("Hello world")
        source.set_run_style(0, 5, RunStyleSnapshot(bold=True, foreground_color=RgbColor(hex="#FF0000")))
        source.set_paragraph_style(0, 11, ParagraphStyleSnapshot(alignment="center"))
        source.set_fill(CellFill(visible=True, color=ThemeColor(theme_id="ACCENT_1"), alpha=0.5))
        source.set_content_alignment("bottom")

        payload = capture_payload(source)
        target = table.cell(2, 2)
        apply_payload(target, payload)

        assert capture_payload(target) == payload

    def test_unset_attributes_are_not_written(self, table):
        target = table.cell(1, 1)
        target.set_content_alignment("top")

        apply_payload(target, capture_payload(table.cell(0, 0)))

        assert target.get_text() == "A1"
        assert target.get_content_alignment() is None
        assert target.get_run_styles() == []


class TestReplaceText:
    """Tests for replacing text while keeping a cell's own styles."""

    bold = RunStyleSnapshot(bold=True)
    italic = RunStyleSnapshot(italic=True)
    centered = ParagraphStyleSnapshot(alignment="center")

    def styled_cell(self, table):
        cell = table.cell(0, 0)
        cell.set_text("Hello world")
        cell.set_run_style(0, 5, self.bold)
        cell.set_run_style(6, 11, self.italic)
        cell.set_paragraph_style(0, 11, self.centered)
        return cell

    def test_longer_text_extends_ranges_at_the_end(self, table):
        cell = self.styled_cell(table)

        replace_text(cell, "Hello there, world")

        assert cell.get_text() == "Hello there, world"
        assert cell.get_run_styles() == [
            RunStyleRange(start=0, end=5, style=self.bold),
            RunStyleRange(start=6, end=18, style=self.italic),
        ]
        assert cell.get_paragraph_styles() == [ParagraphStyleRange(start=0, end=18, style=self.centered)]

    def test_shorter_text_clamps_and_drops_ranges(self, table):
        cell = self.styled_cell(table)

        replace_text(cell, "Hi")

        assert cell.get_run_styles() == [RunStyleRange(start=0, end=2, style=self.bold)]
        assert cell.get_paragraph_styles() == [ParagraphStyleRange(start=0, end=2, style=self.centered)]

    def test_empty_text_keeps_paragraph_style(self, table):
        cell = self.styled_cell(table)

        replace_text(cell, "")

        assert cell.get_run_styles() == []
        assert cell.get_paragraph_styles() == [ParagraphStyleRange(start=0, end=0, style=self.centered)]


class TestCellContentSwapper:
    """Tests for row and column swaps."""

    def test_swap_rows_text_only(self, table, page):
        table.cell(0, 0).set_fill(CellFill(visible=True, color=RgbColor(hex="#00FF00")))
        table.cell(0, 0).set_run_style(0, 2, RunStyleSnapshot(bold=True))
        table.cell(0, 0).set_paragraph_style(0, 2, ParagraphStyleSnapshot(alignment="right"))
        table.cell(2, 0).set_run_style(0, 1, RunStyleSnapshot(italic=True))
        top_runs = table.cell(0, 0).get_run_styles()
        top_paragraphs = table.cell(0, 0).get_paragraph_styles()
        bottom_runs = table.cell(2, 0).get_run_styles()

        result = CellContentSwapper().swap_rows([], page, 1, 3)

        assert texts(table) == [
            ["A3", "B3", "C3"],
            ["A2", "B2", "C2"],
            ["A1", "B1", "C1"],
        ]
        # Formatting stays with the cell
        assert table.cell(0, 0).get_fill().visible is True
        assert table.cell(2, 0).get_fill().visible is None
        assert table.cell(0, 0).get_run_styles() == top_runs
        assert table.cell(0, 0).get_paragraph_styles() == top_paragraphs
        assert table.cell(2, 0).get_run_styles() == bottom_runs
        assert table.cell(2, 0).get_paragraph_styles() == []
        assert result.succeeded == 3
        assert str(result) == "Swap rows: swapped rows 1 and 3 (text only, formatting unchanged)."

    def test_swap_columns_keeps_formatting(self, table, page):
        cell = table.cell(1, 0)
        cell.set_run_style(0, 2, RunStyleSnapshot(italic=True))
        cell.set_fill(CellFill(visible=False))
        before = capture_payload(cell)

        result = CellContentSwapper().swap_columns([table], page, 1, 2, keep_formatting=True)

        assert texts(table)[1] == ["B2", "A2", "C2"]
        assert capture_payload(table.cell(1, 1)) == before
        assert table.cell(1, 0).get_fill() == CellFill()
        assert "formatting preserved" in str(result)

    def test_double_swap_restores_payloads(self, table, page):
        table.cell(0, 1).set_run_style(0, 1, RunStyleSnapshot(underline=True, font_size=14))
        table.cell(2, 1).set_paragraph_style(0, 2, ParagraphStyleSnapshot(space_above=6))
        table.cell(2, 2).set_content_alignment("middle")
        original = [[capture_payload(table.cell(r, c)) for c in range(3)] for r in range(3)]

        swapper = CellContentSwapper()
        swapper.swap(list(), page, SwapAxis.ROW, 1, 3, keep_formatting=True)
        swapper.swap(list(), page, SwapAxis.ROW, 3, 1, keep_formatting=True)

        restored = [[capture_payload(table.cell(r, c)) for c in range(3)] for r in range(3)]
        assert restored == original

    def test_merged_cells_reject_without_changes(self, table, page):
        table.merge(2, 0, col_span=2)
        before = texts(table)

        result = CellContentSwapper().swap_rows([], page, 1, 3)

        assert result.rejected
        assert "contain merged cells" in str(result)
        assert texts(table) == before

    def test_merged_cells_elsewhere_do_not_block(self, table, page):
        table.merge(1, 0, col_span=2)

        result = CellContentSwapper().swap_rows([], page, 1, 3)

        assert not result.rejected
        assert texts(table)[0] == ["A3", "B3", "C3"]

    @pytest.mark.parametrize("first,second", [(0, 1), (1, 4), (-1, 2)])
    def test_index_out_of_range(self, table, page, first, second):
        before = texts(table)
        result = CellContentSwapper().swap_rows([], page, first, second)

        assert result.rejected
        assert "does not exist; the table has 3 rows" in str(result)
        assert texts(table) == before

    @pytest.mark.parametrize("bad", [1.5, "2", True])
    def test_index_must_be_whole_number(self, table, page, bad):
        result = CellContentSwapper().swap_columns([], page, bad, 1)

        assert result.rejected
        assert "must be whole numbers" in str(result)

    def test_equal_indices_is_a_no_op(self, table, page):
        before = texts(table)

        result = CellContentSwapper().swap_rows([], page, 2, 2)

        assert result.ok
        assert str(result) == "Swap rows: row 2 was given twice; nothing to swap."
        assert texts(table) == before

    def test_ambiguous_table(self, table):
        page = InMemoryPage([table, InMemoryTable("other", 0, 0, [10], [10])])

        result = CellContentSwapper().swap_rows([], page, 1, 2)

        assert result.rejected
        assert "found 2 tables on this slide" in str(result)
