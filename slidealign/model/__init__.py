"""Data models for geometry, text styles and table cell payloads."""

from slidealign.model.schema import (
    BoundingBox,
    CellAlignment,
    CellBounds,
    CellFill,
    CellPayload,
    ColorSpec,
    MergeState,
    ParagraphStyleRange,
    ParagraphStyleSnapshot,
    RgbColor,
    RunStyleRange,
    RunStyleSnapshot,
    ThemeColor,
)

__all__ = [
    "BoundingBox",
    "CellAlignment",
    "CellBounds",
    "CellFill",
    "CellPayload",
    "ColorSpec",
    "MergeState",
    "ParagraphStyleRange",
    "ParagraphStyleSnapshot",
    "RgbColor",
    "RunStyleRange",
    "RunStyleSnapshot",
    "ThemeColor",
]
