"""
Services layer for the reseller order portal.

This module contains the ordering workflow:
- ConfigurationSession: Step state machine for one product
- Batch: Draft items awaiting submission
- OrderSubmitter: Batch -> OrderRecord
- OrderHistoryStore: Append-only order history
- OrderWorkflow / WorkflowRegistry: Per-reseller context, keyed by token

Ownership Model:
    WorkflowRegistry
    └── OrderWorkflow (one per user token)
        ├── ConfigurationSession (at most one open)
        ├── Batch
        └── OrderHistoryStore
"""

from .configuration_session import (
    ConfigurationSession,
    ConfigurationStep,
    StepResult,
    ValidationFailure,
)
from .batch import Batch, ItemIdSequence
from .order_history import OrderHistoryStore, InMemoryOrderHistory, seed_history
from .order_submitter import OrderSubmitter, OrderIdGenerator
from .workflow import OrderWorkflow, WorkflowRegistry

__all__ = [
    "ConfigurationSession",
    "ConfigurationStep",
    "StepResult",
    "ValidationFailure",
    "Batch",
    "ItemIdSequence",
    "OrderHistoryStore",
    "InMemoryOrderHistory",
    "seed_history",
    "OrderSubmitter",
    "OrderIdGenerator",
    "OrderWorkflow",
    "WorkflowRegistry",
]
