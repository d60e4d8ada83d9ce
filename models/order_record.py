"""
Order record data models.

An OrderRecord is the immutable artifact produced when a reseller submits
the draft batch. One record aggregates the whole batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Any, Optional


class OrderStatus(Enum):
    """
    Status of a submitted order.

    Lifecycle:
        PENDING -> IN_BAGGING -> DELIVERED

    Only PENDING is ever set by the portal; later transitions belong to
    the fulfillment process.
    """

    PENDING = "Pending"
    """Submitted, waiting for staff."""

    IN_BAGGING = "In Bagging"
    """Being packaged."""

    DELIVERED = "Delivered"
    """Handed over to the reseller."""


@dataclass(frozen=True)
class OrderRecord:
    """
    A submitted order as kept in the order history.

    Never mutated after it has been appended to the history.
    """

    order_id: str
    """Human-legible order id (e.g., 'BCF-4821')."""

    created_on: date
    """Submission date."""

    status: OrderStatus
    """Fulfillment status."""

    total: int
    """Sum of item unit prices at submission time."""

    item_count: int
    """Number of configured items in the submitted batch."""

    owner: Optional[str] = None
    """Opaque token of the submitting user."""

    @classmethod
    def create_pending(
        cls,
        order_id: str,
        total: int,
        item_count: int,
        owner: Optional[str] = None,
        created_on: Optional[date] = None,
    ) -> "OrderRecord":
        """
        Create a freshly submitted order.

        Args:
            order_id: Unique order id
            total: Batch total
            item_count: Number of items in the batch
            owner: Opaque user token
            created_on: Submission date (default: today)

        Returns:
            OrderRecord in PENDING status
        """
        return cls(
            order_id=order_id,
            created_on=created_on or date.today(),
            status=OrderStatus.PENDING,
            total=total,
            item_count=item_count,
            owner=owner,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "id": self.order_id,
            "date": self.created_on.isoformat(),
            "status": self.status.value,
            "total": self.total,
            "items": self.item_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], owner: Optional[str] = None) -> "OrderRecord":
        """Create from dictionary."""
        date_str = data.get("date", "")
        created_on = date.fromisoformat(date_str) if date_str else date.today()

        status_str = data.get("status", OrderStatus.PENDING.value)
        try:
            status = OrderStatus(status_str)
        except ValueError:
            status = OrderStatus.PENDING

        return cls(
            order_id=data.get("id", ""),
            created_on=created_on,
            status=status,
            total=int(data.get("total", 0)),
            item_count=int(data.get("items", 0)),
            owner=owner,
        )
