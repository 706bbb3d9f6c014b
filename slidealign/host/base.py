"""
base.py — Abstract collaborators the engines talk to.

The engines never touch a document model directly. They read geometry and
cell content through these interfaces and issue one setter call per change.
Implementations live in ``memory.py`` (plain Python) and ``pptx_host.py``
(python-pptx).
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from slidealign.model.schema import (
    BoundingBox,
    CellFill,
    MergeState,
    ParagraphStyleRange,
    ParagraphStyleSnapshot,
    RunStyleRange,
    RunStyleSnapshot,
)


class HostShape(ABC):
    """A positionable rectangle on a slide.

    Setters raise ``MutationError`` when the host does not support the
    change for this kind of object.
    """

    is_table = False

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable, opaque object id."""

    @property
    @abstractmethod
    def left(self) -> float: ...

    @property
    @abstractmethod
    def top(self) -> float: ...

    @property
    @abstractmethod
    def width(self) -> float: ...

    @property
    @abstractmethod
    def height(self) -> float: ...

    @abstractmethod
    def set_left(self, value: float) -> None: ...

    @abstractmethod
    def set_top(self, value: float) -> None: ...

    @abstractmethod
    def set_width(self, value: float) -> None: ...

    @abstractmethod
    def set_height(self, value: float) -> None: ...

    @property
    def bbox(self) -> BoundingBox:
        """Snapshot of the current geometry."""
        return BoundingBox(x=self.left, y=self.top, width=self.width, height=self.height)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id!r}>"


class HostCell(ABC):
    """One cell of a table, with text, style, fill and alignment access."""

    @property
    @abstractmethod
    def merge_state(self) -> MergeState: ...

    @abstractmethod
    def get_text(self) -> str: ...

    @abstractmethod
    def set_text(self, text: str) -> None:
        """Replace the cell text. Existing character styles are discarded."""

    @abstractmethod
    def get_run_styles(self) -> List[RunStyleRange]:
        """Explicit run styles, as ranges over ``get_text()``."""

    @abstractmethod
    def set_run_style(self, start: int, end: int, style: RunStyleSnapshot) -> None:
        """Apply the set attributes of ``style`` to ``text[start:end]``."""

    @abstractmethod
    def get_paragraph_styles(self) -> List[ParagraphStyleRange]: ...

    @abstractmethod
    def set_paragraph_style(self, start: int, end: int, style: ParagraphStyleSnapshot) -> None: ...

    @abstractmethod
    def get_fill(self) -> CellFill: ...

    @abstractmethod
    def set_fill(self, fill: CellFill) -> None: ...

    @abstractmethod
    def get_content_alignment(self) -> Optional[str]:
        """Vertical content alignment: ``top``, ``middle``, ``bottom`` or None."""

    @abstractmethod
    def set_content_alignment(self, alignment: Optional[str]) -> None: ...


class HostTable(HostShape):
    """A table grid positioned on the slide."""

    is_table = True

    @property
    @abstractmethod
    def num_rows(self) -> int: ...

    @property
    @abstractmethod
    def num_cols(self) -> int: ...

    @abstractmethod
    def column_widths(self) -> List[float]: ...

    @abstractmethod
    def row_heights(self) -> List[float]: ...

    @abstractmethod
    def cell(self, row: int, col: int) -> HostCell:
        """Cell at 0-based ``(row, col)``."""


class HostPage(ABC):
    """The page (slide) currently shown to the user."""

    @abstractmethod
    def tables(self) -> List[HostTable]: ...


class SelectionSource(ABC):
    """Supplies the current selection in host-reported order."""

    @abstractmethod
    def get_selection(self) -> List[HostShape]:
        """Currently selected objects; empty when nothing is selected."""
