"""Tests for keyed repositories."""

from __future__ import annotations

import pytest

from combat_engine.core.exceptions import InvalidStateError, NotFoundError
from combat_engine.models.equipment import Equipment, create_item
from combat_engine.storage.repository import Repository


@pytest.fixture
def items() -> Repository[Equipment]:
    return Repository("item", key=lambda item: item.id)


class TestRepository:
    """Tests for Repository behaviour."""

    def test_add_and_get(self, items: Repository[Equipment], broad_sword: Equipment) -> None:
        items.add(broad_sword)

        assert items.get(broad_sword.id) is broad_sword
        assert broad_sword.id in items
        assert len(items) == 1

    def test_duplicate_rejected(self, items: Repository[Equipment], broad_sword: Equipment) -> None:
        items.add(broad_sword)

        with pytest.raises(InvalidStateError):
            items.add(broad_sword)

    def test_missing_key(self, items: Repository[Equipment]) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            items.get("weapon-missing")

        assert exc_info.value.message == "Item 'weapon-missing' not found"
        assert items.find("weapon-missing") is None

    def test_remove(self, items: Repository[Equipment], broad_sword: Equipment) -> None:
        items.add(broad_sword)

        assert items.remove(broad_sword.id) is broad_sword
        assert broad_sword.id not in items

        with pytest.raises(NotFoundError):
            items.remove(broad_sword.id)

    def test_list_keeps_insertion_order(self, items: Repository[Equipment]) -> None:
        created = [create_item("BroadSword"), create_item("PlateArmor"), create_item("RingOfFire")]
        for item in created:
            items.add(item)

        assert items.list() == created
        assert list(items) == created


class TestRepositoryCapacity:
    """Tests for bounded repositories."""

    def test_oldest_evicted(self) -> None:
        items: Repository[Equipment] = Repository("item", key=lambda item: item.id, capacity=2)
        created = [create_item("BroadSword"), create_item("PlateArmor"), create_item("RingOfFire")]
        for item in created:
            items.add(item)

        assert len(items) == 2
        assert items.list() == created[1:]
        assert items.find(created[0].id) is None

    def test_zero_capacity_keeps_nothing(self, broad_sword: Equipment) -> None:
        items: Repository[Equipment] = Repository("item", key=lambda item: item.id, capacity=0)

        assert items.add(broad_sword) is broad_sword
        assert len(items) == 0

    def test_unbounded_by_default(self, items: Repository[Equipment]) -> None:
        for _ in range(20):
            items.add(create_item("BroadSword"))

        assert items.capacity is None
        assert len(items) == 20
