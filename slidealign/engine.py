"""
engine.py — One entry point wiring the layout engines to a host.

Each public method reads the current selection, runs one operation and
returns the status line to show the user. Nothing is cached between calls;
the anchor id lives in the injected store.
"""

import logging
from typing import Any, Optional, Sequence, Union

from slidealign.anchor.resolver import AnchorResolver
from slidealign.anchor.store import AnchorStore, InMemoryAnchorStore
from slidealign.config import Settings, get_settings
from slidealign.constraints.alignment import AlignmentEngine, AlignType
from slidealign.constraints.docking import DockingEngine, DockSide
from slidealign.constraints.matrix import MatrixArranger
from slidealign.constraints.results import OperationResult
from slidealign.constraints.sizing import Edge, MatchType, SizeTransformEngine
from slidealign.constraints.spacing import DistributeDirection, DistributionEngine
from slidealign.host.base import HostPage, HostShape, SelectionSource
from slidealign.host.pptx_host import PptxPage, PptxSelection
from slidealign.model.schema import CellAlignment
from slidealign.tables.locator import TableCellLocator
from slidealign.tables.swapper import CellContentSwapper, TableSelectionError, find_target_table

logger = logging.getLogger(__name__)


class LayoutEngine:
    """Layout operations on the current selection of one document."""

    def __init__(
        self,
        selection_source: SelectionSource,
        anchor_store: AnchorStore,
        page: Optional[HostPage] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.selection_source = selection_source
        self.anchor_store = anchor_store
        self.page = page
        self.settings = settings or get_settings()

        self.resolver = AnchorResolver(anchor_store)
        self.alignment = AlignmentEngine(self.resolver)
        self.distribution = DistributionEngine()
        self.docking = DockingEngine(self.resolver)
        self.sizing = SizeTransformEngine(self.resolver)
        self.matrix = MatrixArranger()
        self.cell_locator = TableCellLocator(self.settings.cell_stack_gap)
        self.swapper = CellContentSwapper()

    @classmethod
    def for_slide(
        cls,
        slide: Any,
        shape_ids: Sequence[Any],
        anchor_store: Optional[AnchorStore] = None,
        settings: Optional[Settings] = None,
    ) -> "LayoutEngine":
        """Build an engine over a python-pptx slide and an ordered list of selected shape ids."""
        return cls(
            selection_source=PptxSelection(slide, shape_ids),
            anchor_store=anchor_store or InMemoryAnchorStore(),
            page=PptxPage(slide),
            settings=settings,
        )

    def _selection(self) -> list[HostShape]:
        return self.selection_source.get_selection()

    # ------------------------------------------------------------------
    # Anchor management
    # ------------------------------------------------------------------

    def set_anchor(self) -> str:
        """Persist the single selected object as the anchor."""
        selection = self._selection()
        if len(selection) != 1:
            return str(
                OperationResult.reject(
                    "Set anchor",
                    f"select exactly one object (currently {len(selection)} selected).",
                )
            )

        anchor = selection[0]
        self.anchor_store.set(anchor.id)
        logger.info(f"Anchor set to {anchor.id}")
        return f"Set anchor: {anchor.id} is now the anchor."

    def clear_anchor(self) -> str:
        if self.anchor_store.delete():
            logger.info("Anchor cleared")
            return "Clear anchor: anchor cleared."
        return "Clear anchor: no anchor was set."

    def describe_anchor(self) -> str:
        """Which object operations will use as the anchor right now."""
        anchor_id = self.anchor_store.get()
        selection = self._selection()
        fallback = "the last selected object is used"
        if selection:
            fallback = f"the last selected object ({selection[-1].id}) is used"

        if anchor_id is None:
            return f"Anchor: none set; {fallback}."
        if any(shape.id == anchor_id for shape in selection):
            return f"Anchor: {anchor_id} (in the current selection)."
        return f"Anchor: {anchor_id} is not selected; {fallback}."

    # ------------------------------------------------------------------
    # Alignment
    # ------------------------------------------------------------------

    def align(self, align_type: Union[AlignType, str]) -> str:
        return str(self.alignment.align(self._selection(), AlignType(align_type)))

    def align_left(self) -> str:
        return self.align(AlignType.LEFT)

    def align_right(self) -> str:
        return self.align(AlignType.RIGHT)

    def align_top(self) -> str:
        return self.align(AlignType.TOP)

    def align_bottom(self) -> str:
        return self.align(AlignType.BOTTOM)

    def align_center_x(self) -> str:
        return self.align(AlignType.CENTER_X)

    def align_center_y(self) -> str:
        return self.align(AlignType.CENTER_Y)

    # ------------------------------------------------------------------
    # Distribution and docking
    # ------------------------------------------------------------------

    def distribute_horizontal(self) -> str:
        return str(self.distribution.distribute(self._selection(), DistributeDirection.HORIZONTAL))

    def distribute_vertical(self) -> str:
        return str(self.distribution.distribute(self._selection(), DistributeDirection.VERTICAL))

    def dock(self, side: Union[DockSide, str]) -> str:
        return str(self.docking.dock(self._selection(), DockSide(side)))

    def dock_left(self) -> str:
        return self.dock(DockSide.LEFT)

    def dock_right(self) -> str:
        return self.dock(DockSide.RIGHT)

    def dock_top(self) -> str:
        return self.dock(DockSide.TOP)

    def dock_bottom(self) -> str:
        return self.dock(DockSide.BOTTOM)

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------

    def match_width(self) -> str:
        return str(self.sizing.match(self._selection(), MatchType.WIDTH))

    def match_height(self) -> str:
        return str(self.sizing.match(self._selection(), MatchType.HEIGHT))

    def match_both(self) -> str:
        return str(self.sizing.match(self._selection(), MatchType.BOTH))

    def stretch(self, edge: Union[Edge, str]) -> str:
        return str(self.sizing.stretch(self._selection(), Edge(edge)))

    def stretch_left(self) -> str:
        return self.stretch(Edge.LEFT)

    def stretch_right(self) -> str:
        return self.stretch(Edge.RIGHT)

    def stretch_top(self) -> str:
        return self.stretch(Edge.TOP)

    def stretch_bottom(self) -> str:
        return self.stretch(Edge.BOTTOM)

    def fill(self, edge: Union[Edge, str]) -> str:
        return str(self.sizing.fill(self._selection(), Edge(edge)))

    def fill_left(self) -> str:
        return self.fill(Edge.LEFT)

    def fill_right(self) -> str:
        return self.fill(Edge.RIGHT)

    def fill_top(self) -> str:
        return self.fill(Edge.TOP)

    def fill_bottom(self) -> str:
        return self.fill(Edge.BOTTOM)

    def magic_resize(self, percentage: float) -> str:
        return str(self.sizing.magic_resize(self._selection(), percentage))

    # ------------------------------------------------------------------
    # Grid and tables
    # ------------------------------------------------------------------

    def arrange_matrix(self, rows: int, cols: int, spacing: Optional[float] = None) -> str:
        """Arrange the selection into a grid of ``rows`` x ``cols``."""
        if spacing is None:
            spacing = self.settings.default_matrix_spacing
        return self.matrix.arrange(self._selection(), rows, cols, spacing).summary()

    def align_in_table_cells(
        self,
        alignment: Union[CellAlignment, str] = CellAlignment.CENTER,
        padding: Optional[float] = None,
    ) -> str:
        """Align the selected objects inside the cells of the target table.

        The table is the one selected table, or the only table on the page.
        Every other selected object is grouped by the cell holding its center.
        """
        alignment = CellAlignment(alignment)
        if padding is None:
            padding = self.settings.default_cell_padding

        selection = self._selection()
        try:
            table = find_target_table(selection, self.page)
        except TableSelectionError as e:
            return str(OperationResult.reject(f"Align in table cells ({alignment.value})", str(e)))

        shapes = [shape for shape in selection if not shape.is_table]
        return str(self.cell_locator.align_in_cells(shapes, table, alignment, padding))

    def swap_table_rows(self, first: int, second: int, keep_formatting: bool = False) -> str:
        return str(self.swapper.swap_rows(self._selection(), self.page, first, second, keep_formatting))

    def swap_table_columns(self, first: int, second: int, keep_formatting: bool = False) -> str:
        return str(
            self.swapper.swap_columns(self._selection(), self.page, first, second, keep_formatting)
        )
