"""Component tests for the JSON file snapshot store."""

import json
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from restaurant_pos.adapters.json_file_persistence import JsonFileSnapshotStore
from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.order_models import Order
from restaurant_pos.models.snapshot_models import StoreSnapshot


@pytest.mark.component
class TestJsonFileSnapshotStore:
    """Test suite for JsonFileSnapshotStore."""

    @pytest.fixture
    def store(self, tmp_path: Path) -> JsonFileSnapshotStore:
        """Create a store writing into a nested temporary directory."""
        return JsonFileSnapshotStore(tmp_path / "data" / "pos-data.json")

    @pytest.fixture
    def snapshot(
        self,
        burger: FoodItem,
        cola: FoodItem,
        customer: Customer,
        now: datetime,
        order_factory: Callable[..., Order],
    ) -> StoreSnapshot:
        """Create a snapshot with items, a customer and a discounted order."""
        order = order_factory(customer, [(burger, 2), (cola, 1)], now, discount=10)
        return StoreSnapshot(food_items=(burger, cola), customers=(customer,), orders=(order,))

    def test_load_missing_file_returns_none(self, store: JsonFileSnapshotStore) -> None:
        """Test that nothing saved yet reads as None."""
        assert store.load() is None

    def test_save_and_load(self, store: JsonFileSnapshotStore, snapshot: StoreSnapshot) -> None:
        """Test that a saved snapshot is restored unchanged."""
        assert store.save(snapshot) is True

        restored = store.load()

        assert restored.model_dump() == snapshot.model_dump()
        assert restored.orders[0].total == Decimal("1710.00")
        assert restored.orders[0].created_at == snapshot.orders[0].created_at

    def test_save_writes_plain_json(
        self, store: JsonFileSnapshotStore, snapshot: StoreSnapshot
    ) -> None:
        """Test the on-disk document layout."""
        store.save(snapshot)

        document = json.loads(store.path.read_text(encoding="utf-8"))

        assert set(document) == {"food_items", "customers", "orders"}
        assert document["food_items"][0]["item_code"] == "BB001"
        assert list(store.path.parent.glob("*.tmp")) == []

    def test_save_replaces_previous_snapshot(
        self, store: JsonFileSnapshotStore, snapshot: StoreSnapshot
    ) -> None:
        """Test that each save overwrites the document."""
        store.save(snapshot)
        store.save(StoreSnapshot())

        assert store.load().model_dump() == StoreSnapshot().model_dump()

    def test_corrupt_file_returns_none(self, store: JsonFileSnapshotStore) -> None:
        """Test that unreadable JSON is reported as no snapshot."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")

        assert store.load() is None

    def test_invalid_records_return_none(self, store: JsonFileSnapshotStore) -> None:
        """Test that schema violations are reported as no snapshot."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"food_items": [{"id": "x"}]}), encoding="utf-8")

        assert store.load() is None

    def test_non_object_document_returns_none(self, store: JsonFileSnapshotStore) -> None:
        """Test that a JSON array is not accepted as a snapshot."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("[]", encoding="utf-8")

        assert store.load() is None

    def test_missing_collections_are_empty(self, store: JsonFileSnapshotStore) -> None:
        """Test that absent keys load as empty collections."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{}", encoding="utf-8")

        assert store.load().model_dump() == StoreSnapshot().model_dump()

    def test_save_failure_returns_false(
        self, store: JsonFileSnapshotStore, snapshot: StoreSnapshot
    ) -> None:
        """Test that an I/O failure is reported, not raised."""
        with patch(
            "restaurant_pos.adapters.json_file_persistence.os.replace",
            side_effect=OSError("disk full"),
        ):
            assert store.save(snapshot) is False

        assert not store.path.exists()
        assert list(store.path.parent.glob("*.tmp")) == []
