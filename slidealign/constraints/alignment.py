"""Edge and center alignment against the anchor."""

import logging
from enum import Enum
from typing import Sequence

from slidealign.anchor.resolver import AnchorResolver
from slidealign.constraints.results import OperationResult, attempt, require_selection
from slidealign.host.base import HostShape
from slidealign.model.schema import BoundingBox

logger = logging.getLogger(__name__)


class AlignType(str, Enum):
    """Alignment types."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    CENTER_X = "center_x"
    CENTER_Y = "center_y"


OPERATION_NAMES = {
    AlignType.LEFT: "Align left",
    AlignType.RIGHT: "Align right",
    AlignType.TOP: "Align top",
    AlignType.BOTTOM: "Align bottom",
    AlignType.CENTER_X: "Align horizontal centers",
    AlignType.CENTER_Y: "Align vertical centers",
}

HORIZONTAL = {AlignType.LEFT, AlignType.RIGHT, AlignType.CENTER_X}


def alignment_target(anchor: BoundingBox, align_type: AlignType) -> float:
    """Coordinate on the anchor that the other objects line up with."""
    if align_type == AlignType.LEFT:
        return anchor.x
    elif align_type == AlignType.RIGHT:
        return anchor.right
    elif align_type == AlignType.TOP:
        return anchor.y
    elif align_type == AlignType.BOTTOM:
        return anchor.bottom
    elif align_type == AlignType.CENTER_X:
        return anchor.center_x
    elif align_type == AlignType.CENTER_Y:
        return anchor.center_y
    raise ValueError(f"Unknown alignment: {align_type}")


def aligned_position(bbox: BoundingBox, align_type: AlignType, target: float) -> float:
    """New left (or top) that puts the object's matching edge or center on ``target``."""
    if align_type in (AlignType.LEFT, AlignType.TOP):
        return target
    elif align_type == AlignType.RIGHT:
        return target - bbox.width
    elif align_type == AlignType.BOTTOM:
        return target - bbox.height
    elif align_type == AlignType.CENTER_X:
        return target - bbox.width / 2
    elif align_type == AlignType.CENTER_Y:
        return target - bbox.height / 2
    raise ValueError(f"Unknown alignment: {align_type}")


class AlignmentEngine:
    """Aligns selected objects to an edge or center of the anchor."""

    def __init__(self, resolver: AnchorResolver) -> None:
        self.resolver = resolver

    def align(self, selection: Sequence[HostShape], align_type: AlignType) -> OperationResult:
        """Align every non-anchor object to the anchor.

        Args:
            selection: Selected objects, at least two.
            align_type: Edge or center to align.

        Returns:
            Result with moved and failed counts.
        """
        operation = OPERATION_NAMES[align_type]
        rejected = require_selection(operation, list(selection), 2)
        if rejected:
            return rejected

        anchor = self.resolver.resolve(selection)
        target = alignment_target(anchor.bbox, align_type)
        logger.debug(f"{operation} to {target} on anchor {anchor.id}")

        outcomes = []
        for shape in selection:
            if shape is anchor:
                continue
            new_position = aligned_position(shape.bbox, align_type, target)
            if align_type in HORIZONTAL:
                outcomes.append(attempt(shape, lambda: shape.set_left(new_position)))
            else:
                outcomes.append(attempt(shape, lambda: shape.set_top(new_position)))

        return OperationResult.fold(operation, outcomes)

    def align_left(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.align(selection, AlignType.LEFT)

    def align_right(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.align(selection, AlignType.RIGHT)

    def align_top(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.align(selection, AlignType.TOP)

    def align_bottom(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.align(selection, AlignType.BOTTOM)

    def align_center_x(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.align(selection, AlignType.CENTER_X)

    def align_center_y(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.align(selection, AlignType.CENTER_Y)
