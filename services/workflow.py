"""
Per-reseller ordering workflow.

An OrderWorkflow is the explicit context object that ties together
everything one reseller is working on:

    OrderWorkflow (one per user token)
    ├── active ConfigurationSession (at most one)
    ├── Batch (draft items awaiting submission)
    └── OrderHistoryStore (submitted orders)

Hosts (Flask routes, tests, scripts) look workflows up in a
WorkflowRegistry by the opaque user token. Workflows never share state
with each other. The registry passes them its collaborators explicitly:
the read-only catalog, the order id generator (stateless) and the item id
sequence.

Usage:
    registry = WorkflowRegistry(ProductCatalog())
    workflow = registry.get_or_create(user_token)

    session = workflow.start_configuration(product_id=1)
    session.select_media(0)
    ...
    workflow.commit_active()
    record = workflow.submit_batch()
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional

from core.exceptions import NoActiveSessionError, ProductUnavailableError, SessionAlreadyActiveError
from logging_config import get_workflow_logger
from models.configured_item import ConfiguredItem
from models.order_record import OrderRecord
from modules.catalog import MEDIA_LIBRARY_SIZE, ProductCatalog
from services.batch import Batch, ItemIdSequence
from services.configuration_session import ConfigurationSession, StepResult
from services.order_history import InMemoryOrderHistory, OrderHistoryStore, seed_history
from services.order_submitter import OrderIdGenerator, OrderSubmitter


class OrderWorkflow:
    """
    Everything one reseller is configuring, batching and submitting.

    Attributes:
        user_token: Opaque authenticated-user token (never interpreted)
        batch: Draft batch
        history: Submitted orders
    """

    def __init__(
        self,
        user_token: str,
        catalog: ProductCatalog,
        history: Optional[OrderHistoryStore] = None,
        id_generator: Optional[OrderIdGenerator] = None,
        media_library_size: int = MEDIA_LIBRARY_SIZE,
        item_ids: Optional[ItemIdSequence] = None,
    ):
        self.user_token = user_token
        self.catalog = catalog
        self.history = history if history is not None else InMemoryOrderHistory()
        self.batch = Batch(item_ids)
        self.submitter = OrderSubmitter(self.history, id_generator)
        self.media_library_size = media_library_size
        self._session: Optional[ConfigurationSession] = None
        self.logger = get_workflow_logger(user_token, __name__)

    # ------------------------------------------------------------------
    # Configuration session
    # ------------------------------------------------------------------

    @property
    def active_session(self) -> Optional[ConfigurationSession]:
        if self._session is not None and self._session.is_closed:
            self._session = None
        return self._session

    def require_session(self) -> ConfigurationSession:
        session = self.active_session
        if session is None:
            raise NoActiveSessionError()
        return session

    def start_configuration(self, product_id, replace: bool = False) -> ConfigurationSession:
        """
        Open a configuration session for a product.

        Args:
            product_id: Catalog id
            replace: Abandon an open session instead of refusing

        Raises:
            ProductNotFoundError: If the catalog has no such product
            ProductUnavailableError: If the product is out of stock
            SessionAlreadyActiveError: If a session is open and replace is False
        """
        product = self.catalog.get_product(product_id)
        if not product.is_orderable:
            raise ProductUnavailableError(product.product_id, product.stock.value)

        current = self.active_session
        if current is not None:
            if not replace:
                raise SessionAlreadyActiveError(current.product.product_id, product.product_id)
            self.logger.info(f"Replacing open session for product {current.product.product_id}")
            current.abandon()

        self._session = ConfigurationSession(product, self.media_library_size)
        self.logger.info(f"Started configuring product {product.product_id} ({product.name})")
        return self._session

    def commit_active(self) -> StepResult:
        """Commit the open session into the batch."""
        session = self.require_session()
        result = session.commit(self.batch)
        if result.ok:
            self._session = None
        return result

    def abandon_active(self) -> None:
        """Discard the open session. The batch is not touched."""
        session = self.require_session()
        session.abandon()
        self._session = None
        self.logger.info(f"Abandoned configuration of product {session.product.product_id}")

    # ------------------------------------------------------------------
    # Batch and orders
    # ------------------------------------------------------------------

    def remove_item(self, assigned_id: int) -> ConfiguredItem:
        item = self.batch.remove(assigned_id)
        self.logger.info(f"Removed item {assigned_id} from batch")
        return item

    def submit_batch(self) -> OrderRecord:
        """Submit the whole batch as one order (see OrderSubmitter.submit)."""
        return self.submitter.submit(self.batch, owner=self.user_token)

    def list_orders(self) -> List[OrderRecord]:
        """Submitted orders, most recent first."""
        return self.history.list_all()

    def get_order(self, order_id: str) -> OrderRecord:
        return self.history.get(order_id)

    def summary(self) -> Dict[str, Any]:
        """Header data: batch badge count, batch total and the open session step."""
        session = self.active_session
        return {
            "batch_count": len(self.batch),
            "batch_total": self.batch.total(),
            "can_submit": not self.batch.is_empty(),
            "configuring": session.product.product_id if session else None,
            "step": session.step.name if session else None,
            "orders": len(self.history),
        }


class WorkflowRegistry:
    """
    Token -> OrderWorkflow lookup for a hosting application.

    Thread Safety:
        Request threads may look up workflows concurrently, so creation
        and removal go through a lock. Each workflow itself has a single
        writer: the requests of its own reseller.
    """

    def __init__(
        self,
        catalog: ProductCatalog,
        id_generator: Optional[OrderIdGenerator] = None,
        item_ids: Optional[ItemIdSequence] = None,
        media_library_size: int = MEDIA_LIBRARY_SIZE,
        seed_orders: bool = False,
        history_factory: Callable[[], OrderHistoryStore] = InMemoryOrderHistory,
    ):
        self.catalog = catalog
        self.id_generator = id_generator or OrderIdGenerator()
        self.item_ids = item_ids or ItemIdSequence()
        self.media_library_size = media_library_size
        self.seed_orders = seed_orders
        self.history_factory = history_factory
        self._workflows: Dict[str, OrderWorkflow] = {}
        self._lock = threading.Lock()

    def get_or_create(self, user_token: str) -> OrderWorkflow:
        with self._lock:
            workflow = self._workflows.get(user_token)
            if workflow is None:
                history = self.history_factory()
                if self.seed_orders:
                    seed_history(history, owner=user_token)
                workflow = OrderWorkflow(
                    user_token,
                    self.catalog,
                    history=history,
                    id_generator=self.id_generator,
                    media_library_size=self.media_library_size,
                    item_ids=self.item_ids,
                )
                self._workflows[user_token] = workflow
            return workflow

    def get(self, user_token: str) -> Optional[OrderWorkflow]:
        with self._lock:
            return self._workflows.get(user_token)

    def discard(self, user_token: str) -> bool:
        """Drop a reseller's workflow (logout). Returns whether one existed."""
        with self._lock:
            return self._workflows.pop(user_token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._workflows)
