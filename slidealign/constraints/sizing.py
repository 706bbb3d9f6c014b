"""Size transforms: matching, stretching, gap filling and proportional scaling."""

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from slidealign.anchor.resolver import AnchorResolver
from slidealign.constraints.results import (
    MutationOutcome,
    OperationResult,
    attempt,
    require_selection,
)
from slidealign.host.base import HostShape
from slidealign.model.schema import BoundingBox

logger = logging.getLogger(__name__)


class MatchType(str, Enum):
    """Which dimensions to copy from the anchor."""

    WIDTH = "width"
    HEIGHT = "height"
    BOTH = "both"


class Edge(str, Enum):
    """Edge of an object moved by a stretch or fill."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


# A planned edge move: (new position, new size) along the edge's axis.
EdgePlan = tuple[float, float]


def stretch_plan(bbox: BoundingBox, anchor: BoundingBox, edge: Edge) -> EdgePlan:
    """Move ``edge`` of ``bbox`` onto the same edge of the anchor.

    The opposite edge stays fixed. The returned size may be zero or
    negative; callers skip those.
    """
    if edge == Edge.LEFT:
        return anchor.x, bbox.right - anchor.x
    elif edge == Edge.RIGHT:
        return bbox.x, anchor.right - bbox.x
    elif edge == Edge.TOP:
        return anchor.y, bbox.bottom - anchor.y
    elif edge == Edge.BOTTOM:
        return bbox.y, anchor.bottom - bbox.y
    raise ValueError(f"Unknown edge: {edge}")


def fill_plan(bbox: BoundingBox, anchor: BoundingBox, edge: Edge) -> Optional[EdgePlan]:
    """Extend ``edge`` of ``bbox`` across the gap to the anchor's facing edge.

    Only a genuine gap qualifies: the object must lie strictly beyond the
    anchor's far edge. An object flush against the anchor has no gap.

    Returns:
        The planned move, or None when there is no gap.
    """
    if edge == Edge.LEFT:
        if bbox.x > anchor.right:
            return anchor.right, bbox.right - anchor.right
    elif edge == Edge.RIGHT:
        if bbox.right < anchor.x:
            return bbox.x, anchor.x - bbox.x
    elif edge == Edge.TOP:
        if bbox.y > anchor.bottom:
            return anchor.bottom, bbox.bottom - anchor.bottom
    elif edge == Edge.BOTTOM:
        if bbox.bottom < anchor.y:
            return bbox.y, anchor.y - bbox.y
    else:
        raise ValueError(f"Unknown edge: {edge}")
    return None


class SizeTransformEngine:
    """Resizes objects relative to the anchor, or proportionally."""

    def __init__(self, resolver: AnchorResolver) -> None:
        self.resolver = resolver

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def match(self, selection: Sequence[HostShape], match_type: MatchType) -> OperationResult:
        """Copy the anchor's width and/or height onto every other object."""
        operation = {
            MatchType.WIDTH: "Match width",
            MatchType.HEIGHT: "Match height",
            MatchType.BOTH: "Match size",
        }[match_type]
        rejected = require_selection(operation, list(selection), 2)
        if rejected:
            return rejected

        anchor = self.resolver.resolve(selection)
        a = anchor.bbox

        outcomes = []
        for shape in selection:
            if shape is anchor:
                continue
            mutations: List[Callable[[], None]] = []
            if match_type in (MatchType.WIDTH, MatchType.BOTH):
                mutations.append(lambda s=shape: s.set_width(a.width))
            if match_type in (MatchType.HEIGHT, MatchType.BOTH):
                mutations.append(lambda s=shape: s.set_height(a.height))
            outcomes.append(attempt(shape, *mutations))

        return OperationResult.fold(operation, outcomes, verb="resized")

    def match_width(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.match(selection, MatchType.WIDTH)

    def match_height(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.match(selection, MatchType.HEIGHT)

    def match_both(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.match(selection, MatchType.BOTH)

    # ------------------------------------------------------------------
    # Stretching and gap filling
    # ------------------------------------------------------------------

    def stretch(self, selection: Sequence[HostShape], edge: Edge) -> OperationResult:
        """Stretch one edge of each object to the anchor's matching edge.

        Objects whose new size would be zero or negative are skipped.
        """
        operation = f"Stretch {edge.value}"
        rejected = require_selection(operation, list(selection), 2)
        if rejected:
            return rejected

        anchor = self.resolver.resolve(selection)
        a = anchor.bbox

        outcomes = []
        skipped = 0
        for shape in selection:
            if shape is anchor:
                continue
            position, size = stretch_plan(shape.bbox, a, edge)
            if size <= 0:
                logger.debug(f"{operation}: skipping {shape.id}, size would be {size}")
                skipped += 1
                continue
            outcomes.append(self._apply_edge_plan(shape, edge, position, size))

        return OperationResult.fold(operation, outcomes, verb="resized", skipped=skipped)

    def fill(self, selection: Sequence[HostShape], edge: Edge) -> OperationResult:
        """Close the gap between each object and the anchor by moving ``edge``."""
        operation = f"Fill {edge.value}"
        rejected = require_selection(operation, list(selection), 2)
        if rejected:
            return rejected

        anchor = self.resolver.resolve(selection)
        a = anchor.bbox

        outcomes = []
        skipped = 0
        for shape in selection:
            if shape is anchor:
                continue
            plan = fill_plan(shape.bbox, a, edge)
            if plan is None:
                skipped += 1
                continue
            position, size = plan
            outcomes.append(self._apply_edge_plan(shape, edge, position, size))

        if not outcomes:
            return OperationResult(
                operation=operation,
                verb="resized",
                skipped=skipped,
                message="no gaps found between the selected objects and the anchor.",
            )
        return OperationResult.fold(operation, outcomes, verb="resized", skipped=skipped)

    def _apply_edge_plan(
        self, shape: HostShape, edge: Edge, position: float, size: float
    ) -> MutationOutcome:
        if edge in (Edge.LEFT, Edge.RIGHT):
            return attempt(shape, lambda: shape.set_left(position), lambda: shape.set_width(size))
        return attempt(shape, lambda: shape.set_top(position), lambda: shape.set_height(size))

    def stretch_left(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.stretch(selection, Edge.LEFT)

    def stretch_right(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.stretch(selection, Edge.RIGHT)

    def stretch_top(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.stretch(selection, Edge.TOP)

    def stretch_bottom(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.stretch(selection, Edge.BOTTOM)

    def fill_left(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.fill(selection, Edge.LEFT)

    def fill_right(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.fill(selection, Edge.RIGHT)

    def fill_top(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.fill(selection, Edge.TOP)

    def fill_bottom(self, selection: Sequence[HostShape]) -> OperationResult:
        return self.fill(selection, Edge.BOTTOM)

    # ------------------------------------------------------------------
    # Proportional scaling
    # ------------------------------------------------------------------

    def magic_resize(self, selection: Sequence[HostShape], percentage: float) -> OperationResult:
        """Scale every selected object by ``percentage``, keeping its top-left corner.

        Args:
            selection: Objects to scale, at least one.
            percentage: Scale in percent; must be positive.

        Returns:
            Result with resized and failed counts.
        """
        operation = "Resize"
        if percentage <= 0:
            return OperationResult.reject(
                operation, f"percentage must be greater than 0 (got {percentage})."
            )
        rejected = require_selection(operation, list(selection), 1)
        if rejected:
            return rejected

        factor = percentage / 100
        outcomes = []
        for shape in selection:
            bbox = shape.bbox
            outcomes.append(
                attempt(
                    shape,
                    lambda: shape.set_width(bbox.width * factor),
                    lambda: shape.set_height(bbox.height * factor),
                )
            )

        return OperationResult.fold(f"{operation} to {percentage:g}%", outcomes, verb="resized")
