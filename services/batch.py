"""
Draft batch of configured items awaiting submission.

The batch belongs to exactly one reseller's workflow. Committed sessions
add items; the reseller may remove items; a successful submission clears
it. Insertion order is kept for display.

Item ids:
    Ids come from an ItemIdSequence: a millisecond-clock seeded counter
    that never hands out the same value twice, even when the clock stalls
    or goes backwards. The owner of the batch passes the sequence in; a
    batch built without one gets a fresh sequence of its own.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Dict, Iterator, List, Optional

from core.exceptions import BatchItemNotFoundError, DuplicateItemIdError
from logging_config import get_logger
from models.configured_item import ConfiguredItem
from models.product import Product
from models.selection import FrozenSelection


logger = get_logger(__name__)


class ItemIdSequence:
    """
    Monotonic id source for configured items.

    A WorkflowRegistry hands one sequence to all of its workflows, so it
    is guarded by a lock.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            self._last = max(self._last + 1, int(self._clock()))
            return self._last


class Batch:
    """
    Ordered collection of ConfiguredItems for one reseller.

    Invariant: no two items share an assigned id.
    """

    def __init__(self, id_sequence: Optional[ItemIdSequence] = None):
        self._items: List[ConfiguredItem] = []
        self._ids = id_sequence if id_sequence is not None else ItemIdSequence()

    def commit_selection(self, product: Product, selection: FrozenSelection) -> ConfiguredItem:
        """Pair a product with a committed selection and add it."""
        return self.add(ConfiguredItem(product=product, selection=selection))

    def add(self, item: ConfiguredItem) -> ConfiguredItem:
        """
        Append an item, assigning an id when it has none.

        Returns:
            The stored item (with its assigned id)

        Raises:
            DuplicateItemIdError: If the id is already in the batch
        """
        if item.assigned_id is None:
            item = item.with_assigned_id(self._ids.next_id())
        if self._find(item.assigned_id) is not None:
            logger.error(f"Duplicate item id {item.assigned_id} rejected")
            raise DuplicateItemIdError(item.assigned_id)

        self._items.append(item)
        logger.debug(f"Added item {item.assigned_id} ({item.product.name}), batch size {len(self._items)}")
        return item

    def remove(self, assigned_id: int) -> ConfiguredItem:
        """
        Remove an item by id.

        Raises:
            BatchItemNotFoundError: If no item has this id (batch unchanged)
        """
        item = self._find(assigned_id)
        if item is None:
            raise BatchItemNotFoundError(assigned_id)
        self._items.remove(item)
        logger.debug(f"Removed item {assigned_id}, batch size {len(self._items)}")
        return item

    def _find(self, assigned_id: int) -> Optional[ConfiguredItem]:
        for item in self._items:
            if item.assigned_id == assigned_id:
                return item
        return None

    def total(self) -> int:
        """Sum of item unit prices; quantity does not multiply the total."""
        return sum(item.price for item in self._items)

    def quantity_total(self) -> int:
        """Sum of unit price times quantity. Display only."""
        return sum(item.line_total for item in self._items)

    def snapshot_items(self) -> List[ConfiguredItem]:
        """Copy of the items in insertion order."""
        return list(self._items)

    def clear(self) -> int:
        """
        Remove all items.

        Returns:
            Number of items removed
        """
        count = len(self._items)
        self._items.clear()
        return count

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ConfiguredItem]:
        return iter(list(self._items))

    def __contains__(self, assigned_id) -> bool:
        return self._find(assigned_id) is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "items": [item.to_dict() for item in self._items],
            "count": len(self._items),
            "total": self.total(),
            "quantity_total": self.quantity_total(),
        }
