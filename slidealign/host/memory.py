"""
memory.py — Plain-Python host objects.

Used as the host for scripted layouts and as test doubles. Behaviour
mirrors the python-pptx adapter closely enough for the engines not to
notice: setting a cell's text drops its styles, style writes only record
explicitly set attributes, and read-only shapes refuse every setter.
"""

from typing import List, Optional

from slidealign.errors import MutationError
from slidealign.host.base import HostCell, HostPage, HostShape, HostTable, SelectionSource
from slidealign.model.schema import (
    CellFill,
    MergeState,
    ParagraphStyleRange,
    ParagraphStyleSnapshot,
    RunStyleRange,
    RunStyleSnapshot,
)


class InMemoryShape(HostShape):
    """A rectangle whose geometry lives in memory."""

    def __init__(
        self,
        shape_id: str,
        left: float,
        top: float,
        width: float,
        height: float,
        read_only: bool = False,
    ) -> None:
        self._id = shape_id
        self._left = left
        self._top = top
        self._width = width
        self._height = height
        self.read_only = read_only

    @property
    def id(self) -> str:
        return self._id

    @property
    def left(self) -> float:
        return self._left

    @property
    def top(self) -> float:
        return self._top

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def set_left(self, value: float) -> None:
        self._check_writable()
        self._left = value

    def set_top(self, value: float) -> None:
        self._check_writable()
        self._top = value

    def set_width(self, value: float) -> None:
        self._check_writable()
        self._width = value

    def set_height(self, value: float) -> None:
        self._check_writable()
        self._height = value

    def _check_writable(self) -> None:
        if self.read_only:
            raise MutationError(self._id, "object does not support geometry changes")


class InMemoryCell(HostCell):
    """Table cell holding text, style ranges, fill and alignment."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._run_styles: List[RunStyleRange] = []
        self._paragraph_styles: List[ParagraphStyleRange] = []
        self._fill = CellFill()
        self._content_alignment: Optional[str] = None
        self._merge_state = MergeState.NORMAL

    @property
    def merge_state(self) -> MergeState:
        return self._merge_state

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self._run_styles = []
        self._paragraph_styles = []

    def get_run_styles(self) -> List[RunStyleRange]:
        return list(self._run_styles)

    def set_run_style(self, start: int, end: int, style: RunStyleSnapshot) -> None:
        self._check_range(start, end)
        if style.is_empty:
            return
        self._run_styles.append(RunStyleRange(start=start, end=end, style=style))

    def get_paragraph_styles(self) -> List[ParagraphStyleRange]:
        return list(self._paragraph_styles)

    def set_paragraph_style(self, start: int, end: int, style: ParagraphStyleSnapshot) -> None:
        self._check_range(start, end)
        if style.is_empty:
            return
        self._paragraph_styles.append(ParagraphStyleRange(start=start, end=end, style=style))

    def get_fill(self) -> CellFill:
        return self._fill

    def set_fill(self, fill: CellFill) -> None:
        self._fill = fill

    def get_content_alignment(self) -> Optional[str]:
        return self._content_alignment

    def set_content_alignment(self, alignment: Optional[str]) -> None:
        if alignment not in (None, "top", "middle", "bottom"):
            raise ValueError(f"Unknown content alignment: {alignment!r}")
        self._content_alignment = alignment

    def _check_range(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(f"Range {start}:{end} outside text of length {len(self._text)}")


class InMemoryTable(HostTable):
    """A table grid with explicit column widths and row heights."""

    def __init__(
        self,
        table_id: str,
        left: float,
        top: float,
        column_widths: List[float],
        row_heights: List[float],
    ) -> None:
        self._id = table_id
        self._left = left
        self._top = top
        self._column_widths = list(column_widths)
        self._row_heights = list(row_heights)
        self._cells = [
            [InMemoryCell() for _ in self._column_widths]
            for _ in self._row_heights
        ]

    @property
    def id(self) -> str:
        return self._id

    @property
    def left(self) -> float:
        return self._left

    @property
    def top(self) -> float:
        return self._top

    @property
    def width(self) -> float:
        return sum(self._column_widths)

    @property
    def height(self) -> float:
        return sum(self._row_heights)

    def set_left(self, value: float) -> None:
        self._left = value

    def set_top(self, value: float) -> None:
        self._top = value

    def set_width(self, value: float) -> None:
        raise MutationError(self._id, "table width follows its column widths")

    def set_height(self, value: float) -> None:
        raise MutationError(self._id, "table height follows its row heights")

    @property
    def num_rows(self) -> int:
        return len(self._row_heights)

    @property
    def num_cols(self) -> int:
        return len(self._column_widths)

    def column_widths(self) -> List[float]:
        return list(self._column_widths)

    def row_heights(self) -> List[float]:
        return list(self._row_heights)

    def cell(self, row: int, col: int) -> InMemoryCell:
        return self._cells[row][col]

    def merge(self, row: int, col: int, row_span: int = 1, col_span: int = 1) -> None:
        """Merge a block of cells; the top-left one becomes the head."""
        for r in range(row, row + row_span):
            for c in range(col, col + col_span):
                state = MergeState.HEAD if (r, c) == (row, col) else MergeState.MERGED
                self._cells[r][c]._merge_state = state

    def fill_text(self, rows: List[List[str]]) -> None:
        """Set cell text row by row."""
        for r, values in enumerate(rows):
            for c, value in enumerate(values):
                self._cells[r][c].set_text(value)


class InMemoryPage(HostPage):
    """A slide holding shapes and tables."""

    def __init__(self, shapes: Optional[List[HostShape]] = None) -> None:
        self.shapes: List[HostShape] = list(shapes or [])

    def add(self, shape: HostShape) -> HostShape:
        self.shapes.append(shape)
        return shape

    def tables(self) -> List[HostTable]:
        return [s for s in self.shapes if s.is_table]


class InMemorySelection(SelectionSource):
    """Selection held as an ordered list."""

    def __init__(self, shapes: Optional[List[HostShape]] = None) -> None:
        self._shapes: List[HostShape] = list(shapes or [])

    def select(self, *shapes: HostShape) -> None:
        self._shapes = list(shapes)

    def get_selection(self) -> List[HostShape]:
        return list(self._shapes)
