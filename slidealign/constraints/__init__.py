"""Geometric transforms applied to a selection."""

from slidealign.constraints.alignment import AlignmentEngine, AlignType
from slidealign.constraints.docking import DockingEngine, DockSide
from slidealign.constraints.matrix import MatrixArranger, MatrixPlacement, solve_dimensions
from slidealign.constraints.results import MutationOutcome, OperationResult, attempt
from slidealign.constraints.sizing import Edge, MatchType, SizeTransformEngine
from slidealign.constraints.spacing import DistributeDirection, DistributionEngine

__all__ = [
    # Results
    "MutationOutcome",
    "OperationResult",
    "attempt",
    # Alignment
    "AlignmentEngine",
    "AlignType",
    # Distribution
    "DistributionEngine",
    "DistributeDirection",
    # Docking
    "DockingEngine",
    "DockSide",
    # Sizing
    "SizeTransformEngine",
    "MatchType",
    "Edge",
    # Matrix
    "MatrixArranger",
    "MatrixPlacement",
    "solve_dimensions",
]
