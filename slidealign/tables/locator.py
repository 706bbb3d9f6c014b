"""
locator.py — Which table cell an object sits in, and layout inside cells.

An object belongs to the cell containing its center point. Cell bounds are
derived from the table origin by prefix-summing column widths and row
heights, and use half-open ``[left, right) x [top, bottom)`` containment so
a center on a shared border belongs to the cell to its right / below.
"""

import logging
from dataclasses import dataclass, field
from itertools import accumulate
from typing import List, Optional, Sequence

from slidealign.constraints.results import MutationOutcome, OperationResult, attempt
from slidealign.host.base import HostShape, HostTable
from slidealign.model.schema import BoundingBox, CellAlignment, CellBounds

logger = logging.getLogger(__name__)


@dataclass
class CellGroup:
    """A cell and the objects whose centers fall inside it."""

    cell: CellBounds
    shapes: List[HostShape] = field(default_factory=list)


def cell_bounds(table: HostTable) -> List[CellBounds]:
    """Bounds of every cell, row-major."""
    widths = table.column_widths()
    heights = table.row_heights()
    col_lefts = [table.left + offset for offset in accumulate([0.0] + widths[:-1])]
    row_tops = [table.top + offset for offset in accumulate([0.0] + heights[:-1])]

    cells = []
    for row, (top, height) in enumerate(zip(row_tops, heights)):
        for col, (left, width) in enumerate(zip(col_lefts, widths)):
            cells.append(
                CellBounds(
                    row=row,
                    col=col,
                    bounds=BoundingBox(x=left, y=top, width=width, height=height),
                )
            )
    return cells


def locate(shape: HostShape, table: HostTable) -> Optional[CellBounds]:
    """Cell containing the center of ``shape``, or None when outside the grid."""
    return _locate_in(shape.bbox, cell_bounds(table))


def _locate_in(bbox: BoundingBox, cells: Sequence[CellBounds]) -> Optional[CellBounds]:
    for cell in cells:
        if cell.bounds.contains_point(bbox.center_x, bbox.center_y):
            return cell
    return None


def group_by_cell(
    shapes: Sequence[HostShape],
    table: HostTable,
) -> tuple[List[CellGroup], List[HostShape]]:
    """Group objects by the cell containing their center.

    Groups are keyed by cell bounds rather than grid index, so two lookups
    resolving to the same rectangle share a group. Order follows the first
    object seen in each cell.

    Returns:
        ``(groups, unlocated)`` where ``unlocated`` holds objects outside
        every cell.
    """
    cells = cell_bounds(table)
    groups: dict[BoundingBox, CellGroup] = {}
    unlocated: List[HostShape] = []

    for shape in shapes:
        cell = _locate_in(shape.bbox, cells)
        if cell is None:
            logger.debug(f"{shape.id} is not inside any cell of table {table.id}")
            unlocated.append(shape)
            continue
        groups.setdefault(cell.bounds, CellGroup(cell=cell)).shapes.append(shape)

    return list(groups.values()), unlocated


def align_within_cell(
    group: CellGroup,
    alignment: CellAlignment,
    padding: float,
    gap: float,
) -> List[MutationOutcome]:
    """Stack a group's objects vertically, centered in the cell.

    Args:
        group: Cell and its objects, stacked in list order.
        alignment: Horizontal placement of each object.
        padding: Inset from the cell's left/right border; negative is treated as 0.
        gap: Vertical space between stacked objects.

    Returns:
        One outcome per object.
    """
    padding = max(0.0, padding)
    cell = group.cell.bounds
    boxes = [shape.bbox for shape in group.shapes]

    stack_height = sum(b.height for b in boxes) + gap * max(0, len(boxes) - 1)
    top = cell.y + cell.height / 2 - stack_height / 2

    outcomes = []
    for shape, bbox in zip(group.shapes, boxes):
        if alignment == CellAlignment.LEFT:
            left = cell.x + padding
        elif alignment == CellAlignment.RIGHT:
            left = cell.x + cell.width - bbox.width - padding
        else:
            left = cell.x + cell.width / 2 - bbox.width / 2

        outcomes.append(attempt(shape, lambda: shape.set_left(left), lambda: shape.set_top(top)))
        top += bbox.height + gap

    return outcomes


class TableCellLocator:
    """Aligns objects inside the table cells they sit in."""

    def __init__(self, stack_gap: float) -> None:
        self.stack_gap = stack_gap

    def align_in_cells(
        self,
        shapes: Sequence[HostShape],
        table: HostTable,
        alignment: CellAlignment,
        padding: float,
    ) -> OperationResult:
        """Group ``shapes`` by cell and align each group within its cell."""
        operation = f"Align in table cells ({alignment.value})"
        groups, unlocated = group_by_cell(shapes, table)
        if not groups:
            return OperationResult.reject(operation, "none of the selected objects is inside a table cell.")

        outcomes: List[MutationOutcome] = []
        for group in groups:
            outcomes.extend(align_within_cell(group, alignment, padding, self.stack_gap))

        if unlocated:
            logger.info(f"{operation}: {len(unlocated)} objects outside the table were left alone")
        return OperationResult.fold(operation, outcomes, verb="aligned", skipped=len(unlocated))
