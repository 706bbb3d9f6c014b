"""Table cell location, in-cell alignment and row/column swapping."""

from slidealign.tables.locator import (
    CellGroup,
    TableCellLocator,
    align_within_cell,
    cell_bounds,
    group_by_cell,
    locate,
)
from slidealign.tables.payload import apply_payload, capture_payload, replace_text
from slidealign.tables.swapper import (
    CellContentSwapper,
    SwapAxis,
    TableSelectionError,
    find_target_table,
)

__all__ = [
    "CellGroup",
    "TableCellLocator",
    "align_within_cell",
    "cell_bounds",
    "group_by_cell",
    "locate",
    "apply_payload",
    "capture_payload",
    "replace_text",
    "CellContentSwapper",
    "SwapAxis",
    "TableSelectionError",
    "find_target_table",
]
