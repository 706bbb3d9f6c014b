"""Zero-gap docking against an edge of the anchor."""

import logging
from enum import Enum
from typing import Sequence

from slidealign.anchor.resolver import AnchorResolver
from slidealign.constraints.results import OperationResult, attempt, require_selection
from slidealign.host.base import HostShape

logger = logging.getLogger(__name__)


class DockSide(str, Enum):
    """Side of the anchor an object is docked to."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class DockingEngine:
    """Moves objects until they touch the anchor on one side.

    Only one axis changes. Several docked objects land on the same
    coordinate and stack on top of each other.
    """

    def __init__(self, resolver: AnchorResolver) -> None:
        self.resolver = resolver

    def dock(self, selection: Sequence[HostShape], side: DockSide) -> OperationResult:
        """Dock every non-anchor object to ``side`` of the anchor.

        Args:
            selection: Selected objects, at least two.
            side: Anchor side to dock against.

        Returns:
            Result with moved and failed counts.
        """
        operation = f"Dock {side.value}"
        rejected = require_selection(operation, list(selection), 2)
        if rejected:
            return rejected

        anchor = self.resolver.resolve(selection)
        a = anchor.bbox
        logger.debug(f"{operation} against anchor {anchor.id}")

        outcomes = []
        for shape in selection:
            if shape is anchor:
                continue
            bbox = shape.bbox
            if side == DockSide.LEFT:
                outcomes.append(attempt(shape, lambda: shape.set_left(a.x - bbox.width)))
            elif side == DockSide.RIGHT:
                outcomes.append(attempt(shape, lambda: shape.set_left(a.right)))
            elif side == DockSide.TOP:
                outcomes.append(attempt(shape, lambda: shape.set_top(a.y - bbox.height)))
            elif side == DockSide.BOTTOM:
                outcomes.append(attempt(shape, lambda: shape.set_top(a.bottom)))

        return OperationResult.fold(operation, outcomes)

    def dock_left(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.dock(selection, DockSide.LEFT)

    def dock_right(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.dock(selection, DockSide.RIGHT)

    def dock_top(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.dock(selection, DockSide.TOP)

    def dock_bottom(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.dock(selection, DockSide.BOTTOM)
