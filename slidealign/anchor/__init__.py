"""Anchor resolution and persistence."""

from slidealign.anchor.resolver import AnchorResolver, resolve_anchor
from slidealign.anchor.store import (
    AnchorStore,
    InMemoryAnchorStore,
    RedisAnchorStore,
    get_anchor_store,
)

__all__ = [
    "AnchorResolver",
    "resolve_anchor",
    "AnchorStore",
    "InMemoryAnchorStore",
    "RedisAnchorStore",
    "get_anchor_store",
]
