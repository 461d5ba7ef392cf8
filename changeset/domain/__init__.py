"""Domain primitives of the changeset package.

- Event: named, payload-bearing notification awaiting dispatch
- EventCatalog: capability validating event names and dispatching events
- Committable: capability of an operation handle
- Exceptions raised by the package
"""

from .catalog import EventCatalog, NullEventCatalog, RoutedEventCatalog, dispatches
from .event import Event
from .exceptions import (
    ChangesetError,
    InconsistencyError,
    InvalidStateError,
    MissingConfigurationError,
    UnknownEventError,
)
from .operation import Committable, OperationHandle, commit_operation

__all__ = [
    "Event",
    "EventCatalog",
    "NullEventCatalog",
    "RoutedEventCatalog",
    "dispatches",
    "Committable",
    "OperationHandle",
    "commit_operation",
    "ChangesetError",
    "InconsistencyError",
    "InvalidStateError",
    "MissingConfigurationError",
    "UnknownEventError",
]
