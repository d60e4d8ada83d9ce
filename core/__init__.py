"""
Core module for the reseller order portal.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
"""

from .exceptions import (
    OrderPortalError,
    NotFoundError,
    ProductNotFoundError,
    BatchItemNotFoundError,
    OrderNotFoundError,
    WorkflowError,
    EmptyBatchError,
    SessionClosedError,
    SessionAlreadyActiveError,
    NoActiveSessionError,
    ProductUnavailableError,
    InvalidChoiceError,
    InvariantViolation,
    DuplicateItemIdError,
    DuplicateOrderIdError,
    OrderIdCollisionError,
    QuantityInvariantError,
    MediaCapInvariantError,
)

__all__ = [
    "OrderPortalError",
    "NotFoundError",
    "ProductNotFoundError",
    "BatchItemNotFoundError",
    "OrderNotFoundError",
    "WorkflowError",
    "EmptyBatchError",
    "SessionClosedError",
    "SessionAlreadyActiveError",
    "NoActiveSessionError",
    "ProductUnavailableError",
    "InvalidChoiceError",
    "InvariantViolation",
    "DuplicateItemIdError",
    "DuplicateOrderIdError",
    "OrderIdCollisionError",
    "QuantityInvariantError",
    "MediaCapInvariantError",
]
