"""
Configured item model.

A ConfiguredItem pairs a Product with the frozen Selection produced by a
committed configuration session. The batch assigns its id.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Any, Optional

from models.product import Product
from models.selection import FrozenSelection


@dataclass(frozen=True)
class ConfiguredItem:
    """One committed product configuration awaiting submission."""

    product: Product
    selection: FrozenSelection
    assigned_id: Optional[int] = None
    """Unique within the batch lifetime; None until the batch assigns it."""

    @property
    def price(self) -> int:
        """Unit price at commit time. Batch totals sum this value."""
        return self.product.price

    @property
    def quantity(self) -> int:
        return self.selection.quantity

    @property
    def line_total(self) -> int:
        """Unit price times quantity (informational)."""
        return self.product.price * self.selection.quantity

    def with_assigned_id(self, assigned_id: int) -> "ConfiguredItem":
        return replace(self, assigned_id=assigned_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "assigned_id": self.assigned_id,
            "product": self.product.to_dict(),
            "selection": self.selection.to_dict(),
            "price": self.price,
            "line_total": self.line_total,
        }
