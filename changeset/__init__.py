"""Changeset - unit of work aggregation for Python.

Collect persistence operations and domain events while building a business
transaction, commit the operations atomically, then dispatch the events with
duplicates collapsed.
"""

from .changeset import Changeset, ChangesetState
from .configuration import ChangesetConfiguration
from .domain import (
    ChangesetError,
    Committable,
    Event,
    EventCatalog,
    InconsistencyError,
    InvalidStateError,
    MissingConfigurationError,
    NullEventCatalog,
    RoutedEventCatalog,
    UnknownEventError,
    dispatches,
)
from .events import EventCollection
from .lazy import LazyChangeset, LazyState
from .operations import OperationTree
from .transaction import (
    ContextManagerTransactionRunner,
    ImmediateTransactionRunner,
    TransactionRunner,
    WrappingTransactionRunner,
)

__all__ = [
    # Aggregate root
    "Changeset",
    "ChangesetState",
    "ChangesetConfiguration",
    # Building blocks
    "Event",
    "EventCollection",
    "OperationTree",
    "LazyChangeset",
    "LazyState",
    # Capabilities
    "Committable",
    "EventCatalog",
    "NullEventCatalog",
    "RoutedEventCatalog",
    "dispatches",
    "TransactionRunner",
    "ImmediateTransactionRunner",
    "ContextManagerTransactionRunner",
    "WrappingTransactionRunner",
    # Errors
    "ChangesetError",
    "InconsistencyError",
    "InvalidStateError",
    "MissingConfigurationError",
    "UnknownEventError",
]
