"""Equal-gap distribution of selected objects."""

import logging
from enum import Enum
from typing import Sequence

from slidealign.constraints.results import OperationResult, attempt, require_selection
from slidealign.host.base import HostShape

logger = logging.getLogger(__name__)


class DistributeDirection(str, Enum):
    """Distribution axis."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class DistributionEngine:
    """Spaces objects with equal gaps between the outermost two.

    Works on the whole selection; no anchor is involved. Selection order is
    ignored: objects are sorted by position on a copy of the selection.
    """

    min_selection = 3

    def distribute(
        self,
        selection: Sequence[HostShape],
        direction: DistributeDirection,
    ) -> OperationResult:
        """Distribute objects along one axis.

        The first and last objects (by leading edge) stay put. If the objects
        are wider than the span between them the gap goes negative and they
        overlap; that is accepted.

        Args:
            selection: Selected objects, at least three.
            direction: Axis to distribute along.

        Returns:
            Result with moved and failed counts.
        """
        operation = f"Distribute {direction.value}ly"
        rejected = require_selection(operation, list(selection), self.min_selection)
        if rejected:
            return rejected

        horizontal = direction == DistributeDirection.HORIZONTAL
        boxes = [(shape, shape.bbox) for shape in selection]
        if horizontal:
            boxes.sort(key=lambda item: item[1].x)
            first = boxes[0][1].x
            total_space = boxes[-1][1].right - first
            total_size = sum(b.width for _, b in boxes)
        else:
            boxes.sort(key=lambda item: item[1].y)
            first = boxes[0][1].y
            total_space = boxes[-1][1].bottom - first
            total_size = sum(b.height for _, b in boxes)

        gap = (total_space - total_size) / (len(boxes) - 1)
        if gap < 0:
            logger.info(f"{operation}: objects do not fit, gap is {gap}")

        outcomes = []
        position = first
        for shape, bbox in boxes:
            if horizontal:
                outcomes.append(attempt(shape, lambda: shape.set_left(position)))
                position += bbox.width + gap
            else:
                outcomes.append(attempt(shape, lambda: shape.set_top(position)))
                position += bbox.height + gap

        return OperationResult.fold(operation, outcomes)

    def distribute_horizontal(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.distribute(selection, DistributeDirection.HORIZONTAL)

    def distribute_vertical(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.distribute(selection, DistributeDirection.VERTICAL)
