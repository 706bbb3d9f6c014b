"""
pptx_host.py — Host adapters over python-pptx.

Geometry is in EMUs. Character offsets follow ``_Cell.text``: paragraphs
are joined with "\\n" and a line break inside a paragraph counts as one
"\\v" character.

Attributes python-pptx has no API for (strikethrough, small caps, baseline,
highlight, fill alpha, paragraph indents) are read and written on the
DrawingML XML directly. PowerPoint has no numeric font weight, so
``font_weight`` always reads as unset and is not written.
"""

import copy
import logging
from typing import Any, Iterator, List, Optional, Sequence

from lxml import etree
from pptx.dml.color import RGBColor
from pptx.enum.dml import MSO_THEME_COLOR
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.oxml import parse_xml
from pptx.oxml.ns import nsdecls, qn
from pptx.slide import Slide
from pptx.text.text import _Paragraph, _Run
from pptx.util import Emu, Length, Pt

from slidealign.errors import MutationError
from slidealign.host.base import HostCell, HostPage, HostShape, HostTable, SelectionSource
from slidealign.model.schema import (
    CellFill,
    ColorSpec,
    MergeState,
    ParagraphStyleRange,
    ParagraphStyleSnapshot,
    RgbColor,
    RunStyleRange,
    RunStyleSnapshot,
    ThemeColor,
)

logger = logging.getLogger(__name__)


# Map snapshot alignment to PowerPoint
ALIGN_MAP = {
    "left": PP_ALIGN.LEFT,
    "center": PP_ALIGN.CENTER,
    "right": PP_ALIGN.RIGHT,
    "justify": PP_ALIGN.JUSTIFY,
}
ALIGN_REVERSE = {v: k for k, v in ALIGN_MAP.items()}

VERTICAL_ALIGN_MAP = {
    "top": MSO_ANCHOR.TOP,
    "middle": MSO_ANCHOR.MIDDLE,
    "bottom": MSO_ANCHOR.BOTTOM,
}
VERTICAL_ALIGN_REVERSE = {v: k for k, v in VERTICAL_ALIGN_MAP.items()}

FILL_TAGS = tuple(
    qn(tag) for tag in ("a:noFill", "a:solidFill", "a:gradFill", "a:blipFill", "a:pattFill", "a:grpFill")
)

# Children that must follow <a:highlight> inside <a:rPr>
HIGHLIGHT_SUCCESSORS = (
    "a:uLnTx", "a:uLn", "a:uFillTx", "a:uFill", "a:latin", "a:ea", "a:cs",
    "a:sym", "a:hlinkClick", "a:hlinkMouseOver", "a:rtl", "a:extLst",
)

# python-pptx raises these for values the XML schema or the shape type rejects
HOST_ERRORS = (ValueError, TypeError, AttributeError, NotImplementedError)


# ============================================================================
# Shapes
# ============================================================================


class PptxShape(HostShape):
    """A python-pptx shape seen through the host interface."""

    def __init__(self, shape: Any) -> None:
        self.shape = shape

    @property
    def id(self) -> str:
        return str(self.shape.shape_id)

    @property
    def left(self) -> float:
        return int(self.shape.left or 0)

    @property
    def top(self) -> float:
        return int(self.shape.top or 0)

    @property
    def width(self) -> float:
        return int(self.shape.width or 0)

    @property
    def height(self) -> float:
        return int(self.shape.height or 0)

    def set_left(self, value: float) -> None:
        self._set("left", value)

    def set_top(self, value: float) -> None:
        self._set("top", value)

    def set_width(self, value: float) -> None:
        self._set("width", value)

    def set_height(self, value: float) -> None:
        self._set("height", value)

    def _set(self, attribute: str, value: float) -> None:
        try:
            setattr(self.shape, attribute, Emu(int(round(value))))
        except HOST_ERRORS as e:
            raise MutationError(self.id, f"cannot set {attribute} to {value}: {e}") from e


class PptxTable(PptxShape, HostTable):
    """A graphic frame holding a table."""

    is_table = True

    def __init__(self, graphic_frame: Any) -> None:
        super().__init__(graphic_frame)
        self.table = graphic_frame.table

    def set_width(self, value: float) -> None:
        raise MutationError(self.id, "table width follows its column widths")

    def set_height(self, value: float) -> None:
        raise MutationError(self.id, "table height follows its row heights")

    @property
    def num_rows(self) -> int:
        return len(self.table.rows)

    @property
    def num_cols(self) -> int:
        return len(self.table.columns)

    def column_widths(self) -> List[float]:
        return [int(column.width) for column in self.table.columns]

    def row_heights(self) -> List[float]:
        return [int(row.height) for row in self.table.rows]

    def cell(self, row: int, col: int) -> "PptxCell":
        return PptxCell(self.table.cell(row, col))


def wrap_shape(shape: Any) -> PptxShape:
    """Wrap a python-pptx shape, recognising tables."""
    if getattr(shape, "has_table", False):
        return PptxTable(shape)
    return PptxShape(shape)


class PptxPage(HostPage):
    """A slide."""

    def __init__(self, slide: Slide) -> None:
        self.slide = slide

    def shapes(self) -> List[PptxShape]:
        return [wrap_shape(shape) for shape in self.slide.shapes]

    def tables(self) -> List[HostTable]:
        return [shape for shape in self.shapes() if shape.is_table]


def _unique_ids(shape_ids: Sequence[Any]) -> List[str]:
    """Ids as strings; a repeated id keeps its last position."""
    latest = dict.fromkeys(str(shape_id) for shape_id in reversed(shape_ids))
    return list(reversed(latest))


class PptxSelection(SelectionSource):
    """Selection given as shape ids on one slide, in the caller's order.

    python-pptx has no notion of a user selection; the embedding
    application supplies the ids.
    """

    def __init__(self, slide: Slide, shape_ids: Sequence[Any] = ()) -> None:
        self.slide = slide
        self.shape_ids = _unique_ids(shape_ids)

    def select(self, *shape_ids: Any) -> None:
        self.shape_ids = _unique_ids(shape_ids)

    def get_selection(self) -> List[HostShape]:
        by_id = {str(shape.shape_id): shape for shape in self.slide.shapes}
        selection: List[HostShape] = []
        for shape_id in self.shape_ids:
            shape = by_id.get(shape_id)
            if shape is None:
                logger.warning(f"Selected shape {shape_id} is not on the slide")
                continue
            selection.append(wrap_shape(shape))
        return selection


# ============================================================================
# Colors
# ============================================================================


def write_color_format(color: Any, spec: ColorSpec) -> None:
    """Write a ColorSpec onto a python-pptx ColorFormat."""
    if isinstance(spec, RgbColor):
        color.rgb = RGBColor.from_string(spec.hex[1:].upper())
    elif isinstance(spec, ThemeColor):
        color.theme_color = MSO_THEME_COLOR[spec.theme_id]
    else:
        raise TypeError(f"Unsupported color spec: {spec!r}")


def read_color_element(parent: Any) -> Optional[ColorSpec]:
    """Read the first srgbClr/schemeClr child of ``parent``."""
    srgb = parent.find(qn("a:srgbClr"))
    if srgb is not None:
        return RgbColor(hex=f"#{srgb.get('val').upper()}")
    scheme = parent.find(qn("a:schemeClr"))
    if scheme is not None:
        return ThemeColor(theme_id=MSO_THEME_COLOR.from_xml(scheme.get("val")).name)
    return None


def write_color_element(parent: Any, spec: ColorSpec) -> None:
    """Append a srgbClr/schemeClr child to ``parent``."""
    if isinstance(spec, RgbColor):
        etree.SubElement(parent, qn("a:srgbClr")).set("val", spec.hex[1:].upper())
    elif isinstance(spec, ThemeColor):
        etree.SubElement(parent, qn("a:schemeClr")).set(
            "val", MSO_THEME_COLOR.to_xml(MSO_THEME_COLOR[spec.theme_id])
        )
    else:
        raise TypeError(f"Unsupported color spec: {spec!r}")


# ============================================================================
# Cells
# ============================================================================


class PptxCell(HostCell):
    """A python-pptx table cell."""

    def __init__(self, cell: Any) -> None:
        self.cell = cell

    @property
    def merge_state(self) -> MergeState:
        if self.cell.is_merge_origin:
            return MergeState.HEAD
        if self.cell.is_spanned:
            return MergeState.MERGED
        return MergeState.NORMAL

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def get_text(self) -> str:
        return self.cell.text

    def set_text(self, text: str) -> None:
        self.cell.text = text

    def _paragraph_spans(self) -> Iterator[tuple[_Paragraph, int, int]]:
        """Each paragraph with its ``[start, end)`` range in ``get_text()``."""
        offset = 0
        for paragraph in self.cell.text_frame.paragraphs:
            end = offset + len(paragraph.text)
            yield paragraph, offset, end
            offset = end + 1

    def _run_spans(self, paragraph: _Paragraph, start: int) -> Iterator[tuple[Any, int, int]]:
        """Each run/break/field element of a paragraph with its character range."""
        offset = start
        for child in list(paragraph._p.content_children):
            if child.tag == qn("a:br"):
                length = 1
            else:
                length = len(child.text or "")
            yield child, offset, offset + length
            offset += length

    def get_run_styles(self) -> List[RunStyleRange]:
        ranges = []
        for paragraph, p_start, _ in self._paragraph_spans():
            for child, start, end in self._run_spans(paragraph, p_start):
                if child.tag != qn("a:r") or start == end:
                    continue
                style = read_run_style(_Run(child, paragraph))
                if not style.is_empty:
                    ranges.append(RunStyleRange(start=start, end=end, style=style))
        return ranges

    def set_run_style(self, start: int, end: int, style: RunStyleSnapshot) -> None:
        if not 0 <= start <= end <= len(self.get_text()):
            raise ValueError(f"Range {start}:{end} outside cell text")
        if style.is_empty:
            return

        for paragraph, p_start, p_end in self._paragraph_spans():
            if p_end <= start or p_start >= end:
                continue
            for child, r_start, r_end in self._run_spans(paragraph, p_start):
                if child.tag != qn("a:r") or r_end <= start or r_start >= end:
                    continue
                r = child
                if start > r_start:
                    r = _split_run(r, start - r_start)
                    r_start = start
                if end < r_end:
                    _split_run(r, end - r_start)
                write_run_style(_Run(r, paragraph), style)

    def get_paragraph_styles(self) -> List[ParagraphStyleRange]:
        ranges = []
        for paragraph, start, end in self._paragraph_spans():
            style = read_paragraph_style(paragraph)
            if not style.is_empty:
                ranges.append(ParagraphStyleRange(start=start, end=end, style=style))
        return ranges

    def set_paragraph_style(self, start: int, end: int, style: ParagraphStyleSnapshot) -> None:
        if style.is_empty:
            return
        for paragraph, p_start, p_end in self._paragraph_spans():
            # Empty paragraphs still own their start offset.
            if p_start <= start <= p_end or (p_start < end and p_end > start):
                write_paragraph_style(paragraph, style)

    # ------------------------------------------------------------------
    # Fill and alignment
    # ------------------------------------------------------------------

    def get_fill(self) -> CellFill:
        # Read the XML: _Cell.fill caches the fill it saw first.
        tcPr = self.cell._tc.tcPr
        if tcPr is None:
            return CellFill()
        if tcPr.find(qn("a:noFill")) is not None:
            return CellFill(visible=False)
        solid = tcPr.find(qn("a:solidFill"))
        if solid is None:
            return CellFill()

        alpha = 1.0
        if len(solid):
            alpha_elem = solid[0].find(qn("a:alpha"))
            if alpha_elem is not None:
                alpha = int(alpha_elem.get("val")) / 100000.0
        return CellFill(visible=True, color=read_color_element(solid), alpha=alpha)

    def set_fill(self, fill: CellFill) -> None:
        if fill.visible is None:
            tcPr = self.cell._tc.tcPr
            if tcPr is not None:
                for child in list(tcPr):
                    if child.tag in FILL_TAGS:
                        tcPr.remove(child)
            return

        if not fill.visible:
            self.cell.fill.background()
            return

        self.cell.fill.solid()
        if fill.color is not None:
            write_color_format(self.cell.fill.fore_color, fill.color)
        if fill.alpha < 1.0:
            solid = self.cell._tc.tcPr.find(qn("a:solidFill"))
            if len(solid):
                color_elem = solid[0]
                for existing in color_elem.findall(qn("a:alpha")):
                    color_elem.remove(existing)
                etree.SubElement(color_elem, qn("a:alpha")).set("val", str(int(round(fill.alpha * 100000))))

    def get_content_alignment(self) -> Optional[str]:
        return VERTICAL_ALIGN_REVERSE.get(self.cell.vertical_anchor)

    def set_content_alignment(self, alignment: Optional[str]) -> None:
        self.cell.vertical_anchor = VERTICAL_ALIGN_MAP[alignment] if alignment else None


def _split_run(r: Any, index: int) -> Any:
    """Split run element ``r`` at ``index``; returns the new right-hand run."""
    text = r.text
    right = copy.deepcopy(r)
    r.text = text[:index]
    right.text = text[index:]
    r.addnext(right)
    return right


# ============================================================================
# Run styles
# ============================================================================


def _bool_attr(value: Optional[str], true_values: tuple[str, ...], false_values: tuple[str, ...]) -> Optional[bool]:
    if value in true_values:
        return True
    if value in false_values:
        return False
    return None


def read_run_style(run: _Run) -> RunStyleSnapshot:
    """Explicitly set character attributes of a run."""
    rPr = run._r.rPr
    if rPr is None:
        return RunStyleSnapshot()

    font = run.font
    underline = font.underline
    if underline is not None and not isinstance(underline, bool):
        underline = True

    baseline = rPr.get("baseline")
    highlight = rPr.find(qn("a:highlight"))
    # Font.color would add an empty <a:solidFill>; read the XML instead.
    solid = rPr.find(qn("a:solidFill"))

    return RunStyleSnapshot(
        bold=font.bold,
        italic=font.italic,
        underline=underline,
        strikethrough=_bool_attr(rPr.get("strike"), ("sngStrike", "dblStrike"), ("noStrike",)),
        small_caps=_bool_attr(rPr.get("cap"), ("small",), ("none", "all")),
        font_family=font.name,
        font_size=font.size.pt if font.size is not None else None,
        baseline_offset=int(baseline) if baseline is not None else None,
        foreground_color=read_color_element(solid) if solid is not None else None,
        background_color=read_color_element(highlight) if highlight is not None else None,
        link_url=run.hyperlink.address,
    )


def write_run_style(run: _Run, style: RunStyleSnapshot) -> None:
    """Write the set attributes of ``style`` onto ``run``."""
    font = run.font
    rPr = run._r.get_or_add_rPr()

    if style.bold is not None:
        font.bold = style.bold
    if style.italic is not None:
        font.italic = style.italic
    if style.underline is not None:
        font.underline = style.underline
    if style.strikethrough is not None:
        rPr.set("strike", "sngStrike" if style.strikethrough else "noStrike")
    if style.small_caps is not None:
        rPr.set("cap", "small" if style.small_caps else "none")
    if style.font_family is not None:
        font.name = style.font_family
    if style.font_size is not None:
        font.size = Pt(style.font_size)
    if style.baseline_offset is not None:
        rPr.set("baseline", str(style.baseline_offset))
    if style.foreground_color is not None:
        write_color_format(font.color, style.foreground_color)
    if style.background_color is not None:
        existing = rPr.find(qn("a:highlight"))
        if existing is not None:
            rPr.remove(existing)
        highlight = parse_xml(f"<a:highlight {nsdecls('a')}/>")
        write_color_element(highlight, style.background_color)
        rPr.insert_element_before(highlight, *HIGHLIGHT_SUCCESSORS)
    if style.link_url is not None:
        run.hyperlink.address = style.link_url


# ============================================================================
# Paragraph styles
# ============================================================================


def read_paragraph_style(paragraph: _Paragraph) -> ParagraphStyleSnapshot:
    """Explicitly set paragraph attributes."""
    pPr = paragraph._p.pPr
    if pPr is None:
        return ParagraphStyleSnapshot()

    line_spacing = paragraph.line_spacing
    if isinstance(line_spacing, Length):
        # Exact point spacing has no line-multiple equivalent.
        line_spacing = None

    def _int_attr(name: str) -> Optional[int]:
        value = pPr.get(name)
        return int(value) if value is not None else None

    return ParagraphStyleSnapshot(
        alignment=ALIGN_REVERSE.get(paragraph.alignment),
        line_spacing=line_spacing,
        space_above=paragraph.space_before.pt if paragraph.space_before is not None else None,
        space_below=paragraph.space_after.pt if paragraph.space_after is not None else None,
        indent_start=_int_attr("marL"),
        indent_end=_int_attr("marR"),
        indent_first_line=_int_attr("indent"),
    )


def write_paragraph_style(paragraph: _Paragraph, style: ParagraphStyleSnapshot) -> None:
    """Write the set attributes of ``style`` onto ``paragraph``."""
    if style.alignment is not None:
        paragraph.alignment = ALIGN_MAP[style.alignment]
    if style.line_spacing is not None:
        paragraph.line_spacing = style.line_spacing
    if style.space_above is not None:
        paragraph.space_before = Pt(style.space_above)
    if style.space_below is not None:
        paragraph.space_after = Pt(style.space_below)

    pPr = paragraph._p.get_or_add_pPr()
    if style.indent_start is not None:
        pPr.set("marL", str(style.indent_start))
    if style.indent_end is not None:
        pPr.set("marR", str(style.indent_end))
    if style.indent_first_line is not None:
        pPr.set("indent", str(style.indent_first_line))
