"""
Data models for the reseller order portal.

This module contains the dataclasses for:
- Product: Read-only catalog entry
- Selection: In-progress configuration values (mutable, one session)
- FrozenSelection: Immutable snapshot committed to the batch
- ConfiguredItem: Product + FrozenSelection with a batch-assigned id
- OrderRecord: Immutable history entry produced by submitting a batch
"""

from .product import Product, StockStatus
from .selection import (
    Selection,
    FrozenSelection,
    StyleChoice,
    ThemeChoice,
    TypographyChoice,
    PackagingChoice,
    MAX_MEDIA_REFS,
    parse_choice,
)
from .configured_item import ConfiguredItem
from .order_record import OrderRecord, OrderStatus

__all__ = [
    # Catalog models
    "Product",
    "StockStatus",
    # Selection models
    "Selection",
    "FrozenSelection",
    "StyleChoice",
    "ThemeChoice",
    "TypographyChoice",
    "PackagingChoice",
    "MAX_MEDIA_REFS",
    "parse_choice",
    # Batch models
    "ConfiguredItem",
    # Order models
    "OrderRecord",
    "OrderStatus",
]
