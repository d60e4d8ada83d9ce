"""
Custom exceptions for the reseller order portal.

Exception Hierarchy:
    OrderPortalError (base)
    ├── NotFoundError                 - Lookup missed (runtime, graceful)
    │   ├── ProductNotFoundError
    │   ├── BatchItemNotFoundError
    │   └── OrderNotFoundError
    ├── WorkflowError                 - Operation refused (runtime, graceful)
    │   ├── EmptyBatchError
    │   ├── SessionClosedError
    │   ├── SessionAlreadyActiveError
    │   ├── NoActiveSessionError
    │   ├── ProductUnavailableError
    │   └── InvalidChoiceError
    └── InvariantViolation            - Defect, fail loudly
        ├── DuplicateItemIdError
        ├── DuplicateOrderIdError
        ├── OrderIdCollisionError
        ├── QuantityInvariantError
        └── MediaCapInvariantError

Usage:
    Runtime errors leave all state untouched and are translated into
    user-facing messages by the routes.
    InvariantViolation subclasses indicate a bug; routes log them at ERROR
    and answer with a server error.

Step-guard failures (no media selected, media cap reached) are NOT
exceptions. They are reported as StepResult values by the session.
"""

from typing import Optional, Dict, Any


class OrderPortalError(Exception):
    """
    Base exception for all order portal errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    code = "portal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly error payload."""
        return {
            "error": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


# =============================================================================
# NOT FOUND - lookup misses, nothing was mutated
# =============================================================================

class NotFoundError(OrderPortalError):
    """A product, batch item or order id does not exist."""

    code = "not_found"


class ProductNotFoundError(NotFoundError):
    """The catalog has no product with the requested id."""

    code = "product_not_found"

    def __init__(self, product_id: Any):
        super().__init__(
            f"Product not found: {product_id}",
            {"product_id": product_id},
        )
        self.product_id = product_id


class BatchItemNotFoundError(NotFoundError):
    """The draft batch holds no item with the requested assigned id."""

    code = "batch_item_not_found"

    def __init__(self, assigned_id: Any):
        super().__init__(
            f"No item {assigned_id} in the current batch",
            {"assigned_id": assigned_id},
        )
        self.assigned_id = assigned_id


class OrderNotFoundError(NotFoundError):
    """The order history holds no record with the requested id."""

    code = "order_not_found"

    def __init__(self, order_id: str):
        super().__init__(f"Order not found: {order_id}", {"order_id": order_id})
        self.order_id = order_id


# =============================================================================
# WORKFLOW ERRORS - recoverable, caller re-prompts the user
# =============================================================================

class WorkflowError(OrderPortalError):
    """An operation was refused in the current workflow state."""

    code = "workflow_error"


class EmptyBatchError(WorkflowError):
    """
    Submission was requested for a batch with no items.

    An order must represent at least one configured item.
    """

    code = "empty_batch"

    def __init__(self, message: str = "Cannot submit an empty batch"):
        super().__init__(
            message,
            {"resolution": "Configure at least one product before submitting"},
        )


class SessionClosedError(WorkflowError):
    """
    An operation was attempted on a committed or abandoned session.

    Closed sessions are terminal; a new session must be started.
    """

    code = "session_closed"

    def __init__(self, product_id: Any, operation: str):
        super().__init__(
            f"Configuration session for product {product_id} is closed",
            {"product_id": product_id, "operation": operation},
        )
        self.operation = operation


class SessionAlreadyActiveError(WorkflowError):
    """A configuration session is already open for this user."""

    code = "session_active"

    def __init__(self, active_product_id: Any, requested_product_id: Any):
        super().__init__(
            "Finish or cancel the current configuration first",
            {
                "active_product_id": active_product_id,
                "requested_product_id": requested_product_id,
            },
        )
        self.active_product_id = active_product_id


class NoActiveSessionError(WorkflowError):
    """No configuration session is open for this user."""

    code = "no_active_session"

    def __init__(self, message: str = "No product is being configured"):
        super().__init__(message)


class ProductUnavailableError(WorkflowError):
    """The product exists but cannot be ordered (out of stock)."""

    code = "product_unavailable"

    def __init__(self, product_id: Any, stock: str):
        super().__init__(
            f"Product {product_id} is not available for ordering",
            {"product_id": product_id, "stock": stock},
        )
        self.product_id = product_id


class InvalidChoiceError(WorkflowError):
    """A configuration value is not a member of its closed enumeration."""

    code = "invalid_choice"

    def __init__(self, field_name: str, value: Any, allowed: Optional[list] = None):
        details: Dict[str, Any] = {"field": field_name, "value": value}
        if allowed is not None:
            details["allowed"] = allowed
        super().__init__(f"Invalid value for {field_name}: {value!r}", details)
        self.field_name = field_name
        self.value = value


# =============================================================================
# INVARIANT VIOLATIONS - defects, never coerced silently
# =============================================================================

class InvariantViolation(OrderPortalError):
    """
    Base class for broken invariants.

    These indicate a bug rather than a user-recoverable condition.
    The operation that detected it is aborted.
    """

    code = "invariant_violation"


class DuplicateItemIdError(InvariantViolation):
    """An item with the same assigned id is already in the batch."""

    code = "duplicate_item_id"

    def __init__(self, assigned_id: int):
        super().__init__(
            f"Duplicate batch item id: {assigned_id}",
            {"assigned_id": assigned_id},
        )
        self.assigned_id = assigned_id


class DuplicateOrderIdError(InvariantViolation):
    """An order id is already recorded in the history."""

    code = "duplicate_order_id"

    def __init__(self, order_id: str):
        super().__init__(f"Order id already recorded: {order_id}", {"order_id": order_id})
        self.order_id = order_id


class OrderIdCollisionError(InvariantViolation):
    """No unused order id was found within the retry budget."""

    code = "order_id_collision"

    def __init__(self, attempts: int, last_candidate: str):
        super().__init__(
            f"Could not generate a unique order id after {attempts} attempts",
            {"attempts": attempts, "last_candidate": last_candidate},
        )
        self.attempts = attempts


class QuantityInvariantError(InvariantViolation):
    """A frozen selection was observed with a quantity below one."""

    code = "quantity_invariant"

    def __init__(self, quantity: int):
        super().__init__(
            f"Quantity must be at least 1, got {quantity}",
            {"quantity": quantity},
        )
        self.quantity = quantity


class MediaCapInvariantError(InvariantViolation):
    """A frozen selection holds more media references than allowed."""

    code = "media_cap_invariant"

    def __init__(self, count: int, cap: int):
        super().__init__(
            f"Selection holds {count} media references, cap is {cap}",
            {"count": count, "cap": cap},
        )
        self.count = count
