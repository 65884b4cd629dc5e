"""In-memory keyed stores for characters, items and combat sessions.

Each repository owns its entities outright and indexes them by a stable
key (character name, item id, combat id). Removal is explicit: a fled
combat is dropped, a finished one may be kept for later inspection.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

from combat_engine.core.exceptions import InvalidStateError, NotFoundError
from combat_engine.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class Repository(Generic[T]):
    """Keyed store with insertion-ordered iteration.

    Attributes:
        entity: Entity kind used in error messages (e.g. 'character').
        capacity: Maximum number of entities kept, or None.

    Example:
        >>> repo = Repository("item", key=lambda item: item.id)
        >>> repo.add(sword)
        >>> repo.get(sword.id) is sword
        True
    """

    def __init__(
        self,
        entity: str,
        *,
        key: Callable[[T], str],
        capacity: int | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            entity: Entity kind used in error messages.
            key: Extracts the lookup key from an entity.
            capacity: Maximum number of entities kept. When exceeded the
                oldest entries are evicted. None means unbounded.
        """
        self.entity = entity
        self.capacity = capacity
        self._key = key
        self._items: dict[str, T] = {}

    def add(self, obj: T) -> T:
        """Store an entity under its key.

        Raises:
            InvalidStateError: If the key is already taken.
        """
        key = self._key(obj)
        if key in self._items:
            raise InvalidStateError(
                f"{self.entity.capitalize()} '{key}' already exists",
                current_state="exists",
                details={"entity": self.entity, "key": key},
            )
        self._items[key] = obj
        logger.debug("Entity stored", entity=self.entity, key=key)
        self._evict()
        return obj

    def get(self, key: str) -> T:
        """Look up an entity by key.

        Raises:
            NotFoundError: If nothing is stored under the key.
        """
        try:
            return self._items[key]
        except KeyError:
            raise NotFoundError(
                f"{self.entity.capitalize()} '{key}' not found",
                entity=self.entity,
                key=key,
            ) from None

    def find(self, key: str) -> T | None:
        """Look up an entity, returning None when absent."""
        return self._items.get(key)

    def remove(self, key: str) -> T:
        """Drop an entity and hand it back.

        Raises:
            NotFoundError: If nothing is stored under the key.
        """
        obj = self.get(key)
        del self._items[key]
        logger.debug("Entity removed", entity=self.entity, key=key)
        return obj

    def _evict(self) -> None:
        if self.capacity is None:
            return
        while len(self._items) > self.capacity:
            oldest = next(iter(self._items))
            del self._items[oldest]
            logger.debug("Entity evicted", entity=self.entity, key=oldest)

    def list(self) -> list[T]:
        return list(self._items.values())

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))


__all__ = ["Repository"]
