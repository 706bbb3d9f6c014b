"""Anchor resolution: which selected object the others are laid out against."""

import logging
from typing import Optional, Sequence

from slidealign.anchor.store import AnchorStore
from slidealign.host.base import HostShape

logger = logging.getLogger(__name__)


def resolve_anchor(
    selection: Sequence[HostShape],
    persisted_anchor_id: Optional[str],
) -> Optional[HostShape]:
    """Pick the anchor from a selection.

    The persisted anchor wins wherever it sits in the selection. Otherwise
    the last selected object is used; selection order is whatever the host
    reports, so users wanting a predictable reference should set an anchor.

    Args:
        selection: Selected objects in host order.
        persisted_anchor_id: Stored anchor id, if any.

    Returns:
        The anchor, or None for an empty selection.
    """
    if persisted_anchor_id:
        for shape in selection:
            if shape.id == persisted_anchor_id:
                logger.debug(f"Using persisted anchor {shape.id}")
                return shape

    if not selection:
        return None

    anchor = selection[-1]
    logger.debug(f"No persisted anchor in selection, falling back to last selected {anchor.id}")
    return anchor


class AnchorResolver:
    """Resolves anchors against the persisted id of one document."""

    def __init__(self, store: AnchorStore) -> None:
        self.store = store

    def resolve(self, selection: Sequence[HostShape]) -> Optional[HostShape]:
        return resolve_anchor(selection, self.store.get())

    def is_persisted_anchor(self, shape: HostShape) -> bool:
        return self.store.get() == shape.id
