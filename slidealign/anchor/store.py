"""Document-scoped persistence of the anchor object id.

One string value per document, shared by every collaborator editing it.
Writes are last-writer-wins; no locking is attempted.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import redis

from slidealign.config import Settings, get_settings

logger = logging.getLogger(__name__)


class AnchorStore(ABC):
    """Key-value slot holding the anchor id of one document."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Stored anchor id, or None when unset."""

    @abstractmethod
    def set(self, object_id: str) -> None: ...

    @abstractmethod
    def delete(self) -> bool:
        """Clear the anchor. Returns True if a value was removed."""


class InMemoryAnchorStore(AnchorStore):
    """Anchor slot kept in process memory."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self._value = initial

    def get(self) -> Optional[str]:
        return self._value

    def set(self, object_id: str) -> None:
        self._value = object_id

    def delete(self) -> bool:
        had_value = self._value is not None
        self._value = None
        return had_value


class RedisAnchorStore(AnchorStore):
    """Anchor slot stored in Redis under ``<prefix>anchor:<document_id>``."""

    def __init__(
        self,
        document_id: str,
        settings: Optional[Settings] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        settings = settings or get_settings()
        self.document_id = document_id
        self.ttl = settings.anchor_ttl_seconds
        self._key = f"{settings.anchor_key_prefix}anchor:{document_id}"
        self._client = client or redis.from_url(
            settings.redis_url,
            decode_responses=True,
        )

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> Optional[str]:
        value = self._client.get(self._key)
        return value or None

    def set(self, object_id: str) -> None:
        if self.ttl:
            self._client.set(self._key, object_id, ex=self.ttl)
        else:
            self._client.set(self._key, object_id)

    def delete(self) -> bool:
        return bool(self._client.delete(self._key))

    def ping(self) -> bool:
        return bool(self._client.ping())


def get_anchor_store(document_id: str, settings: Optional[Settings] = None) -> AnchorStore:
    """Get the anchor store for a document.

    Returns a Redis-backed store if the server answers, otherwise an
    in-memory store (anchors then last only for this process).
    """
    settings = settings or get_settings()
    store = RedisAnchorStore(document_id, settings)
    try:
        store.ping()
    except redis.RedisError as e:
        logger.warning(f"Redis unavailable at {settings.redis_url}, keeping anchor in memory: {e}")
        return InMemoryAnchorStore()
    return store
