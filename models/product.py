"""
Product data models.

Products are owned by the catalog and are read-only once handed to a
configuration session.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class StockStatus(Enum):
    """Stock label shown on the catalog card."""

    IN_STOCK = "In Stock"
    LIMITED = "Limited"
    NEW_ARRIVAL = "New Arrival"
    OUT_OF_STOCK = "Out of Stock"


@dataclass(frozen=True)
class Product:
    """
    A purchasable product from the wholesale catalog.

    Prices are whole currency units. The same unit is used everywhere
    (previews, batch totals, order records).
    """

    product_id: int
    """Unique catalog id."""

    name: str
    """Display name."""

    price: int
    """Unit price, non-negative."""

    category: str
    """Category label (e.g., 'Hybrid', 'Sativa')."""

    description: str = ""
    """Free-text description."""

    stock: StockStatus = StockStatus.IN_STOCK
    """Current stock label."""

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"Product price cannot be negative: {self.price}")

    @property
    def is_orderable(self) -> bool:
        """Whether a configuration session may be started for this product."""
        return self.stock is not StockStatus.OUT_OF_STOCK

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "id": self.product_id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "description": self.description,
            "stock": self.stock.value,
        }
