"""Host collaborators: the interfaces engines use and their implementations."""

from slidealign.host.base import HostCell, HostPage, HostShape, HostTable, SelectionSource
from slidealign.host.memory import (
    InMemoryCell,
    InMemoryPage,
    InMemorySelection,
    InMemoryShape,
    InMemoryTable,
)
from slidealign.host.pptx_host import (
    PptxCell,
    PptxPage,
    PptxSelection,
    PptxShape,
    PptxTable,
    wrap_shape,
)

__all__ = [
    "HostCell",
    "HostPage",
    "HostShape",
    "HostTable",
    "SelectionSource",
    "InMemoryCell",
    "InMemoryPage",
    "InMemorySelection",
    "InMemoryShape",
    "InMemoryTable",
    "PptxCell",
    "PptxPage",
    "PptxSelection",
    "PptxShape",
    "PptxTable",
    "wrap_shape",
]
