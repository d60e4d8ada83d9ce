"""
Order submission: turn the whole draft batch into one OrderRecord.

Flow:
    1. Refuse an empty batch (EmptyBatchError, nothing mutated)
    2. Draw an order id that is not in the history yet
    3. Build a PENDING OrderRecord from the batch total and size
    4. Append it to the history
    5. Clear the batch
    6. Return the record

Everything that can fail (id generation, record construction) happens
before step 4. If clearing the batch fails anyway, the appended record
is rolled back so history and batch never disagree.

Usage:
    submitter = OrderSubmitter(history, OrderIdGenerator())
    record = submitter.submit(batch, owner=user_token)
"""

from __future__ import annotations

import secrets
from typing import Callable, Optional

from core.exceptions import EmptyBatchError, OrderIdCollisionError
from logging_config import get_logger
from models.order_record import OrderRecord
from services.batch import Batch
from services.order_history import OrderHistoryStore


logger = get_logger(__name__)


class OrderIdGenerator:
    """
    Random human-legible order ids such as "BCF-4821".

    The generator keeps no record of what it issued, so one instance can
    serve every workflow in the process. Uniqueness is decided by the
    history the id is drawn for: a candidate is retried while that
    history already holds it. Running out of retries is treated as a
    defect.
    """

    def __init__(self, prefix: str = "BCF", digits: int = 4, retry_budget: int = 32):
        if digits < 1:
            raise ValueError("digits must be at least 1")
        self.prefix = prefix
        self.digits = digits
        self.retry_budget = retry_budget
        self._low = 10 ** (digits - 1)
        self._span = 10 ** digits - self._low

    def _candidate(self) -> str:
        return f"{self.prefix}-{self._low + secrets.randbelow(self._span)}"

    def generate(self, exists: Optional[Callable[[str], bool]] = None) -> str:
        """
        Draw an unused order id.

        Args:
            exists: Lookup telling whether an id is already taken

        Raises:
            OrderIdCollisionError: If every draw within the budget collided
        """
        candidate = ""
        for attempt in range(1, self.retry_budget + 1):
            candidate = self._candidate()
            if exists is not None and exists(candidate):
                logger.debug(f"Order id collision on attempt {attempt}: {candidate}")
                continue
            return candidate

        logger.error(f"Order id space exhausted after {self.retry_budget} attempts")
        raise OrderIdCollisionError(self.retry_budget, candidate)


class OrderSubmitter:
    """Converts a batch into an OrderRecord appended to one history."""

    def __init__(self, history: OrderHistoryStore, id_generator: Optional[OrderIdGenerator] = None):
        self.history = history
        self.id_generator = id_generator or OrderIdGenerator()

    def submit(self, batch: Batch, owner: Optional[str] = None) -> OrderRecord:
        """
        Submit the whole batch as one order.

        Args:
            batch: The reseller's draft batch
            owner: Opaque user token recorded on the order

        Returns:
            The new PENDING OrderRecord

        Raises:
            EmptyBatchError: If the batch has no items
            OrderIdCollisionError: If no unused order id could be drawn
        """
        items = batch.snapshot_items()
        if not items:
            raise EmptyBatchError()

        order_id = self.id_generator.generate(self.history.exists_id)
        record = OrderRecord.create_pending(
            order_id=order_id,
            total=batch.total(),
            item_count=len(items),
            owner=owner,
        )

        self.history.append(record)
        try:
            batch.clear()
        except Exception:
            logger.error(f"Clearing batch failed, rolling back order {order_id}", exc_info=True)
            self.history.rollback(record)
            raise

        logger.info(f"Order {order_id} submitted: {record.item_count} items, total {record.total}")
        return record
