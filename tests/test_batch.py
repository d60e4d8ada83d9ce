"""
Unit tests for the draft batch.
"""

import pytest

from core.exceptions import BatchItemNotFoundError, DuplicateItemIdError
from models.configured_item import ConfiguredItem
from models.product import Product
from models.selection import FrozenSelection
from services.batch import Batch, ItemIdSequence


# Fixtures

@pytest.fixture
def kush():
    return Product(product_id=1, name="Red Apple Kush", price=420, category="Hybrid")


@pytest.fixture
def dream():
    return Product(product_id=2, name="Blue Dream Premium", price=380, category="Sativa")


@pytest.fixture
def batch():
    return Batch()


def _item(product, quantity=1):
    return ConfiguredItem(product=product, selection=FrozenSelection(media_refs=(0,), quantity=quantity))


class TestItemIdSequence:

    def test_monotonic_when_clock_stalls(self):
        sequence = ItemIdSequence(clock=lambda: 1000)
        assert [sequence.next_id() for _ in range(3)] == [1000, 1001, 1002]

    def test_never_goes_backwards(self):
        ticks = iter([5000, 4000, 6000])
        sequence = ItemIdSequence(clock=lambda: next(ticks))
        assert [sequence.next_id() for _ in range(3)] == [5000, 5001, 6000]


class TestBatchAdd:

    def test_add_assigns_unique_ids(self, batch, kush, dream):
        first = batch.add(_item(kush))
        second = batch.add(_item(dream))

        assert first.assigned_id is not None
        assert first.assigned_id != second.assigned_id
        assert [i.assigned_id for i in batch] == [first.assigned_id, second.assigned_id]

    def test_add_keeps_existing_id(self, batch, kush):
        item = batch.add(_item(kush).with_assigned_id(77))
        assert item.assigned_id == 77
        assert 77 in batch

    def test_duplicate_id_rejected(self, batch, kush, dream):
        batch.add(_item(kush).with_assigned_id(77))

        with pytest.raises(DuplicateItemIdError):
            batch.add(_item(dream).with_assigned_id(77))
        assert len(batch) == 1

    def test_ids_come_from_the_given_sequence(self, kush, dream):
        sequence = ItemIdSequence(clock=lambda: 500)
        first = Batch(sequence)
        second = Batch(sequence)

        assert first.add(_item(kush)).assigned_id == 500
        assert second.add(_item(dream)).assigned_id == 501
        assert first.add(_item(dream)).assigned_id == 502

    def test_commit_selection(self, batch, kush):
        item = batch.commit_selection(kush, FrozenSelection(media_refs=(1, 2)))
        assert item.product is kush
        assert batch.snapshot_items() == [item]


class TestBatchRemove:

    def test_remove_existing(self, batch, kush, dream):
        first = batch.add(_item(kush))
        second = batch.add(_item(dream))

        removed = batch.remove(first.assigned_id)

        assert removed == first
        assert batch.snapshot_items() == [second]

    def test_remove_missing_leaves_batch_unchanged(self, batch, kush):
        item = batch.add(_item(kush))
        before = batch.snapshot_items()

        with pytest.raises(BatchItemNotFoundError):
            batch.remove(item.assigned_id + 1)

        assert batch.snapshot_items() == before
        assert len(batch) == 1

    def test_remove_twice(self, batch, kush):
        item = batch.add(_item(kush))
        batch.remove(item.assigned_id)

        with pytest.raises(BatchItemNotFoundError):
            batch.remove(item.assigned_id)
        assert batch.is_empty()


class TestBatchTotals:

    def test_total_sums_unit_prices(self, batch, kush, dream):
        batch.add(_item(kush, quantity=3))
        batch.add(_item(dream, quantity=2))

        assert batch.total() == 800
        assert batch.quantity_total() == 420 * 3 + 380 * 2

    def test_empty_batch(self, batch):
        assert batch.is_empty()
        assert batch.total() == 0

    def test_clear(self, batch, kush, dream):
        batch.add(_item(kush))
        batch.add(_item(dream))

        assert batch.clear() == 2
        assert batch.is_empty()

    def test_snapshot_is_a_copy(self, batch, kush):
        batch.add(_item(kush))
        snapshot = batch.snapshot_items()
        snapshot.clear()
        assert len(batch) == 1
