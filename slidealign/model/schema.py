"""Pydantic v2 models shared by the layout engines.

Geometry is expressed in the host's linear unit (EMUs for PowerPoint,
1 inch = 914400 EMUs). Style snapshots record only attributes that were
explicitly set on the source; ``None`` always means "unset" and is never
written back to a destination.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Constants
EMU_PER_INCH = 914400
EMU_PER_POINT = 12700


class MergeState(str, Enum):
    """Merge state reported by a table cell."""

    NORMAL = "normal"
    HEAD = "head"
    MERGED = "merged"


class CellAlignment(str, Enum):
    """Horizontal placement of shapes inside a table cell."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# ============================================================================
# Geometry Models
# ============================================================================


class BoundingBox(BaseModel):
    """Axis-aligned rectangle."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="Left position")
    y: float = Field(description="Top position")
    width: float = Field(ge=0, description="Width")
    height: float = Field(ge=0, description="Height")

    @property
    def right(self) -> float:
        """Right edge position."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge position."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        """Horizontal center."""
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        """Vertical center."""
        return self.y + self.height / 2

    def contains_point(self, px: float, py: float) -> bool:
        """Half-open containment: ``[x, right) x [y, bottom)``."""
        return self.x <= px < self.right and self.y <= py < self.bottom

    @classmethod
    def union(cls, boxes: list["BoundingBox"]) -> Optional["BoundingBox"]:
        """Smallest box enclosing every box in ``boxes``.

        Returns:
            The enclosing box, or None for an empty list.
        """
        if not boxes:
            return None

        min_x = min(b.x for b in boxes)
        min_y = min(b.y for b in boxes)
        max_x = max(b.right for b in boxes)
        max_y = max(b.bottom for b in boxes)

        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


class CellBounds(BaseModel):
    """Bounds of one table cell, with its 0-based grid position."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=0)
    col: int = Field(ge=0)
    bounds: BoundingBox


# ============================================================================
# Color Models
# ============================================================================


class RgbColor(BaseModel):
    """Explicit RGB color."""

    model_config = ConfigDict(frozen=True)

    type: Literal["rgb"] = "rgb"
    hex: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$", description="RGB hex color (e.g., '#0D9488')")


class ThemeColor(BaseModel):
    """Reference to a theme color slot."""

    model_config = ConfigDict(frozen=True)

    type: Literal["theme"] = "theme"
    theme_id: str = Field(description="Theme color name (e.g., 'ACCENT_1')")


ColorSpec = Annotated[
    Union[RgbColor, ThemeColor],
    Field(discriminator="type"),
]


# ============================================================================
# Text Style Models
# ============================================================================


class RunStyleSnapshot(BaseModel):
    """Character-level style attributes of a text range."""

    model_config = ConfigDict(frozen=True)

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    small_caps: Optional[bool] = None
    font_family: Optional[str] = None
    font_size: Optional[float] = Field(default=None, description="Font size in points")
    font_weight: Optional[int] = None
    baseline_offset: Optional[int] = Field(
        default=None,
        description="Baseline shift in thousandths of a percent (superscript > 0)",
    )
    foreground_color: Optional[ColorSpec] = None
    background_color: Optional[ColorSpec] = None
    link_url: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """True when no attribute is explicitly set."""
        return all(value is None for value in self.model_dump().values())


class ParagraphStyleSnapshot(BaseModel):
    """Paragraph-level style attributes of a text range."""

    model_config = ConfigDict(frozen=True)

    alignment: Optional[Literal["left", "center", "right", "justify"]] = None
    line_spacing: Optional[float] = Field(default=None, description="Line spacing multiple")
    space_above: Optional[float] = Field(default=None, description="Space before, in points")
    space_below: Optional[float] = Field(default=None, description="Space after, in points")
    indent_start: Optional[int] = None
    indent_end: Optional[int] = None
    indent_first_line: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        """True when no attribute is explicitly set."""
        return all(value is None for value in self.model_dump().values())


class RunStyleRange(BaseModel):
    """A run style applied to ``text[start:end]``."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    style: RunStyleSnapshot


class ParagraphStyleRange(BaseModel):
    """A paragraph style applied to the paragraph spanning ``text[start:end]``."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    style: ParagraphStyleSnapshot


# ============================================================================
# Cell Models
# ============================================================================


class CellFill(BaseModel):
    """Background fill of a table cell.

    ``visible=None`` means the cell has no fill of its own and shows the
    table style's fill.
    """

    model_config = ConfigDict(frozen=True)

    visible: Optional[bool] = None
    color: Optional[ColorSpec] = None
    alpha: float = Field(default=1.0, ge=0.0, le=1.0, description="Opacity")


class CellPayload(BaseModel):
    """Full content and formatting state of one table cell.

    Offsets in ``run_styles`` and ``paragraph_styles`` are character offsets
    into ``text`` as it was at capture time.
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    run_styles: list[RunStyleRange] = Field(default_factory=list)
    paragraph_styles: list[ParagraphStyleRange] = Field(default_factory=list)
    fill: CellFill = Field(default_factory=CellFill)
    content_alignment: Optional[Literal["top", "middle", "bottom"]] = None
