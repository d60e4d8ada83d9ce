"""
Order history storage.

The history is append-only: submitted orders are added and listed, never
edited. The storage technology is swappable behind OrderHistoryStore; the
portal ships an in-memory store that lives as long as the process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from core.exceptions import DuplicateOrderIdError, OrderNotFoundError
from logging_config import get_logger
from models.order_record import OrderRecord


logger = get_logger(__name__)


class OrderHistoryStore(ABC):
    """Append/lookup contract over a reseller's order history."""

    @abstractmethod
    def append(self, record: OrderRecord) -> None:
        """Add a record. Records are never modified afterwards."""

    @abstractmethod
    def exists_id(self, order_id: str) -> bool:
        """Whether an order id is already taken."""

    @abstractmethod
    def list_all(self) -> List[OrderRecord]:
        """All records, most recent first."""

    @abstractmethod
    def rollback(self, record: OrderRecord) -> bool:
        """
        Undo the append of a record whose submission failed afterwards.

        Returns:
            Whether the record was removed (only the most recent one can be)
        """

    def get(self, order_id: str) -> OrderRecord:
        """
        Look up a record by id.

        Raises:
            OrderNotFoundError: If no record has this id
        """
        for record in self.list_all():
            if record.order_id == order_id:
                return record
        raise OrderNotFoundError(order_id)

    def __len__(self) -> int:
        return len(self.list_all())


class InMemoryOrderHistory(OrderHistoryStore):
    """
    Process-lifetime order history.

    Records are kept in append order; list_all() reverses it.
    """

    def __init__(self, records: Optional[List[OrderRecord]] = None):
        self._records: List[OrderRecord] = []
        self._ids: Dict[str, OrderRecord] = {}
        for record in records or []:
            self.append(record)

    def append(self, record: OrderRecord) -> None:
        if record.order_id in self._ids:
            logger.error(f"Duplicate order id {record.order_id} rejected")
            raise DuplicateOrderIdError(record.order_id)
        self._records.append(record)
        self._ids[record.order_id] = record
        logger.debug(f"Appended order {record.order_id}, history size {len(self._records)}")

    def exists_id(self, order_id: str) -> bool:
        return order_id in self._ids

    def list_all(self) -> List[OrderRecord]:
        return list(reversed(self._records))

    def get(self, order_id: str) -> OrderRecord:
        try:
            return self._ids[order_id]
        except KeyError:
            raise OrderNotFoundError(order_id) from None

    def rollback(self, record: OrderRecord) -> bool:
        if not self._records or self._records[-1] is not record:
            return False
        self._records.pop()
        del self._ids[record.order_id]
        logger.debug(f"Rolled back order {record.order_id}")
        return True

    def __len__(self) -> int:
        return len(self._records)


# Demonstration orders shown to a freshly logged-in reseller.
SEED_ORDERS = (
    {"id": "BCF-9055", "date": "2026-01-08", "status": "In Bagging", "total": 420, "items": 1},
    {"id": "BCF-9021", "date": "2026-01-05", "status": "Delivered", "total": 1250, "items": 3},
)


def seed_history(store: OrderHistoryStore, owner: Optional[str] = None) -> int:
    """
    Load the demonstration orders into an empty store.

    Returns:
        Number of records added (0 if the store already had records)
    """
    if len(store):
        return 0

    records = [OrderRecord.from_dict(data, owner=owner) for data in SEED_ORDERS]
    # Oldest first so list_all() shows the newest on top
    records.sort(key=lambda r: r.created_on)
    for record in records:
        store.append(record)
    logger.debug(f"Seeded {len(records)} demonstration orders")
    return len(records)
