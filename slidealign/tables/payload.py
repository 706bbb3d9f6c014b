"""Capture and re-apply the full content state of a table cell."""

from slidealign.host.base import HostCell
from slidealign.model.schema import CellPayload


def capture_payload(cell: HostCell) -> CellPayload:
    """Snapshot text, run styles, paragraph styles, fill and alignment of ``cell``."""
    return CellPayload(
        text=cell.get_text(),
        run_styles=cell.get_run_styles(),
        paragraph_styles=cell.get_paragraph_styles(),
        fill=cell.get_fill(),
        content_alignment=cell.get_content_alignment(),
    )


def apply_payload(cell: HostCell, payload: CellPayload) -> None:
    """Write ``payload`` into ``cell``.

    Text goes first since it resets character styles; paragraph styles are
    applied before run styles. Unset style attributes are left to the
    destination's defaults. Borders are never touched.
    """
    cell.set_text(payload.text)
    for paragraph in payload.paragraph_styles:
        if not paragraph.style.is_empty:
            cell.set_paragraph_style(paragraph.start, paragraph.end, paragraph.style)
    for run in payload.run_styles:
        if not run.style.is_empty and run.end > run.start:
            cell.set_run_style(run.start, run.end, run.style)
    cell.set_fill(payload.fill)
    cell.set_content_alignment(payload.content_alignment)


def _clamp(start: int, end: int, old_length: int, new_length: int) -> tuple[int, int]:
    # A range that reached the end of the old text reaches the end of the new one.
    if end >= old_length:
        end = new_length
    return min(start, new_length), min(end, new_length)


def replace_text(cell: HostCell, text: str) -> None:
    """Replace the text of ``cell`` but keep its own run and paragraph styles.

    Style ranges are clamped to the new text. Ranges that start past the
    new end are dropped, except paragraph styles at offset 0.
    """
    old_length = len(cell.get_text())
    new_length = len(text)
    run_styles = cell.get_run_styles()
    paragraph_styles = cell.get_paragraph_styles()

    cell.set_text(text)
    for paragraph in paragraph_styles:
        if paragraph.start > 0 and paragraph.start >= new_length:
            continue
        start, end = _clamp(paragraph.start, paragraph.end, old_length, new_length)
        cell.set_paragraph_style(start, end, paragraph.style)
    for run in run_styles:
        start, end = _clamp(run.start, run.end, old_length, new_length)
        if end > start:
            cell.set_run_style(start, end, run.style)
