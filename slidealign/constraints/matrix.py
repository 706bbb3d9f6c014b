"""
matrix.py — Grid arrangement of selected objects.

Objects are placed left-to-right, top-to-bottom in selection order inside
the bounding box they currently occupy. Sizes are left alone; each object
is pinned to the top-left corner of its cell.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from slidealign.constraints.results import OperationResult, attempt
from slidealign.host.base import HostShape
from slidealign.model.schema import BoundingBox

logger = logging.getLogger(__name__)


@dataclass
class MatrixPlacement:
    """Outcome of a matrix arrangement."""

    result: OperationResult
    rows: int
    cols: int
    cell_width: float = 0.0
    cell_height: float = 0.0

    @property
    def placed(self) -> int:
        return self.result.succeeded

    def summary(self) -> str:
        text = self.result.summary()
        if self.result.rejected or self.result.message:
            return text
        return f"{text.rstrip('.')} ({self.rows} rows x {self.cols} columns)."


def solve_dimensions(count: int, requested_rows: int, requested_cols: int) -> tuple[int, int]:
    """Rows and columns actually used for ``count`` elements.

    The column count is kept and rows follow from it, which both drops
    empty trailing rows and adds rows when the elements overflow.

    Returns:
        ``(rows, cols)``.
    """
    if count <= 0:
        return 1, 1
    if requested_rows <= 0 or requested_cols <= 0:
        return 1, count
    return math.ceil(count / requested_cols), requested_cols


def grid_position(index: int, cols: int) -> tuple[int, int]:
    """``(row, col)`` of the element at ``index``."""
    return index // cols, index % cols


class MatrixArranger:
    """Arranges the whole selection into a grid; no anchor is involved."""

    def arrange(
        self,
        elements: Sequence[HostShape],
        requested_rows: int,
        requested_cols: int,
        spacing: float = 0,
    ) -> MatrixPlacement:
        """Place ``elements`` into a grid inside their current bounds.

        Args:
            elements: Objects to arrange, in placement order.
            requested_rows: Rows asked for by the user.
            requested_cols: Columns asked for by the user.
            spacing: Gap between cells, in host units.

        Returns:
            MatrixPlacement with counts and the grid actually used.
        """
        operation = "Arrange in grid"
        rows, cols = solve_dimensions(len(elements), requested_rows, requested_cols)
        if not elements:
            result = OperationResult(operation=operation, verb="placed", message="nothing to arrange.")
            return MatrixPlacement(result=result, rows=rows, cols=cols)

        if (rows, cols) != (requested_rows, requested_cols):
            logger.info(
                f"{operation}: {len(elements)} objects need {rows}x{cols} "
                f"instead of {requested_rows}x{requested_cols}"
            )

        boxes = [shape.bbox for shape in elements]
        bounds = BoundingBox.union(boxes)
        cell_width = (bounds.width - (cols - 1) * spacing) / cols
        cell_height = (bounds.height - (rows - 1) * spacing) / rows

        outcomes = []
        for i, shape in enumerate(elements):
            row, col = grid_position(i, cols)
            new_left = bounds.x + col * (cell_width + spacing)
            new_top = bounds.y + row * (cell_height + spacing)
            outcomes.append(
                attempt(shape, lambda: shape.set_left(new_left), lambda: shape.set_top(new_top))
            )

        result = OperationResult.fold(operation, outcomes, verb="placed")
        return MatrixPlacement(
            result=result,
            rows=rows,
            cols=cols,
            cell_width=cell_width,
            cell_height=cell_height,
        )
