"""
swapper.py — Swap the contents of two table rows or two columns.

A swap request runs through fixed stages: find the one target table,
validate the 1-based indices, refuse tables with merged cells in either
line, then exchange the cells. Every refusal happens before the first
write, so a swap is applied completely or not at all.

A plain swap exchanges text only; each cell keeps its own run and
paragraph styles, fill and content alignment. With ``keep_formatting`` each pair of
cells is captured in full before either is written, then cross-applied.
Table borders are never touched.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from slidealign.constraints.results import OperationResult
from slidealign.host.base import HostCell, HostPage, HostShape, HostTable
from slidealign.model.schema import MergeState
from slidealign.tables.payload import apply_payload, capture_payload, replace_text

logger = logging.getLogger(__name__)


class SwapAxis(str, Enum):
    """What is being swapped."""

    ROW = "row"
    COLUMN = "column"


class TableSelectionError(Exception):
    """No single table could be identified for the operation."""


def find_target_table(selection: Sequence[HostShape], page: Optional[HostPage]) -> HostTable:
    """The table an operation applies to.

    A single selected table wins; otherwise the page must hold exactly one.

    Raises:
        TableSelectionError: When zero or several tables qualify.
    """
    selected = [shape for shape in selection if shape.is_table]
    if len(selected) == 1:
        return selected[0]

    on_page = page.tables() if page is not None else []
    if len(on_page) == 1:
        return on_page[0]

    if not on_page:
        raise TableSelectionError("no table found. Select a table or use a slide with one table.")
    raise TableSelectionError(
        f"found {len(on_page)} tables on this slide. Select the table you want to change."
    )


class CellContentSwapper:
    """Swaps rows or columns of the single target table."""

    def swap_rows(
        self,
        selection: Sequence[HostShape],
        page: Optional[HostPage],
        first: int,
        second: int,
        keep_formatting: bool = False,
    ) -> OperationResult:
        return self.swap(selection, page, SwapAxis.ROW, first, second, keep_formatting)

    def swap_columns(
        self,
        selection: Sequence[HostShape],
        page: Optional[HostPage],
        first: int,
        second: int,
        keep_formatting: bool = False,
    ) -> OperationResult:
        return self.swap(selection, page, SwapAxis.COLUMN, first, second, keep_formatting)

    def swap(
        self,
        selection: Sequence[HostShape],
        page: Optional[HostPage],
        axis: SwapAxis,
        first: int,
        second: int,
        keep_formatting: bool = False,
    ) -> OperationResult:
        """Swap two rows or columns.

        Args:
            selection: Current selection, searched for a table first.
            page: Current slide, searched when the selection holds no single table.
            axis: Rows or columns.
            first: 1-based index of the first line.
            second: 1-based index of the second line.
            keep_formatting: Carry styles, fill and alignment along with the text.

        Returns:
            Result describing the swap or why it was refused.
        """
        operation = f"Swap {axis.value}s"

        try:
            table = find_target_table(selection, page)
        except TableSelectionError as e:
            return OperationResult.reject(operation, str(e))

        count = table.num_rows if axis == SwapAxis.ROW else table.num_cols
        for index in (first, second):
            if isinstance(index, bool) or not isinstance(index, int):
                return OperationResult.reject(
                    operation, f"{axis.value} numbers must be whole numbers (got {index!r})."
                )
            if not 1 <= index <= count:
                return OperationResult.reject(
                    operation, f"{axis.value} {index} does not exist; the table has {count} {axis.value}s."
                )

        if first == second:
            return OperationResult(
                operation=operation,
                message=f"{axis.value} {first} was given twice; nothing to swap.",
            )

        pairs = self._cell_pairs(table, axis, first - 1, second - 1)
        for cell_a, cell_b in pairs:
            if cell_a.merge_state != MergeState.NORMAL or cell_b.merge_state != MergeState.NORMAL:
                logger.warning(f"{operation} refused on table {table.id}: merged cells")
                return OperationResult.reject(
                    operation,
                    f"{axis.value}s {first} and {second} contain merged cells. Unmerge them and try again.",
                )

        if keep_formatting:
            self._snapshot_swap(pairs)
        else:
            self._plain_swap(pairs)

        detail = "formatting preserved" if keep_formatting else "text only, formatting unchanged"
        logger.info(f"{operation} {first} and {second} on table {table.id} ({detail})")
        return OperationResult(
            operation=operation,
            verb="swapped",
            succeeded=len(pairs),
            message=f"swapped {axis.value}s {first} and {second} ({detail}).",
        )

    def _cell_pairs(
        self, table: HostTable, axis: SwapAxis, a: int, b: int
    ) -> List[tuple[HostCell, HostCell]]:
        if axis == SwapAxis.ROW:
            return [(table.cell(a, col), table.cell(b, col)) for col in range(table.num_cols)]
        return [(table.cell(row, a), table.cell(row, b)) for row in range(table.num_rows)]

    def _plain_swap(self, pairs: List[tuple[HostCell, HostCell]]) -> None:
        for cell_a, cell_b in pairs:
            text_a = cell_a.get_text()
            text_b = cell_b.get_text()
            replace_text(cell_a, text_b)
            replace_text(cell_b, text_a)

    def _snapshot_swap(self, pairs: List[tuple[HostCell, HostCell]]) -> None:
        for cell_a, cell_b in pairs:
            # Both sides are read before either is written.
            payload_a = capture_payload(cell_a)
            payload_b = capture_payload(cell_b)
            apply_payload(cell_b, payload_a)
            apply_payload(cell_a, payload_b)
