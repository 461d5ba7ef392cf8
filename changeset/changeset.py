"""The Changeset aggregate root and its push protocol."""

import logging
from enum import Enum
from typing import Any

from typing_extensions import Self
from ulid import ULID

from .configuration import ChangesetConfiguration
from .domain import Event, EventCatalog, InvalidStateError, OperationHandle, commit_operation
from .events import EventCollection
from .lazy import ChangesetProducer, LazyChangeset
from .operations import OperationTree

LOGGER = logging.getLogger(__name__)


class ChangesetState(str, Enum):
    """Lifecycle of a changeset. A changeset is pushed at most once."""

    BUILDING = "building"  # Operations, events and children may be added
    COMMITTING = "committing"
    DISPATCHING = "dispatching"
    PUSHED = "pushed"
    FAILED = "failed"


class Changeset:
    """Unit of work collecting operations and events for one transaction.

    A changeset gathers operation handles (persistence writes) and domain
    events while a business transaction is being built. ``push`` then commits
    every operation inside one transaction scope and, only once that
    succeeded, dispatches the events with duplicates collapsed.

    Changesets built independently can be merged into a parent:

    - ``merge_child`` merges a child that is already built.
    - ``merge_child_async`` merges a producer of the child. The producer runs
      when the parent's commit reaches the merge point, so it can read ids
      generated by the operations committed before it.

    Two changesets are equal when they would commit the same operations and
    dispatch the same events, however they were assembled.

    Attributes:
        id: Identifier used to correlate log records.
        catalog: Catalog validating and dispatching the events added here.
        configuration: Default configuration used by ``push``.
        state: Current lifecycle state.

    Examples:
        >>> changeset = (
        ...     Changeset(catalog, configuration=config)
        ...     .add_operation(insert_order)
        ...     .add_event("order_placed", lambda: {"id": order.id})
        ...     .merge_child_async(lambda: build_lines(order.id))
        ... )
        >>> changeset.push()
    """

    def __init__(
        self,
        catalog: EventCatalog | None = None,
        configuration: ChangesetConfiguration | None = None,
    ):
        self.id = ULID()
        self.catalog = catalog if catalog is not None else EventCatalog.null()
        self.configuration = configuration
        self.state = ChangesetState.BUILDING
        self._events = EventCollection()
        self._operations = OperationTree()

    @property
    def events(self) -> EventCollection:
        return self._events

    @property
    def operations(self) -> OperationTree:
        return self._operations

    def add_event(self, name: str, raw_payload: Any) -> Self:
        """Queue an event for dispatch after commit.

        Args:
            name: Event name, must be known by the catalog.
            raw_payload: The payload, or a zero-argument callable evaluated
                at dispatch time, after every operation was committed.

        Raises:
            UnknownEventError: If the catalog does not know the name.
        """
        self._ensure_building("add an event")
        self._events.add(name, raw_payload, self.catalog)
        return self

    def add_operation(self, handle: OperationHandle) -> Self:
        self._ensure_building("add an operation")
        self._operations.add(handle)
        return self

    def add_operations(self, *handles: OperationHandle) -> Self:
        for handle in handles:
            self.add_operation(handle)
        return self

    def merge_child(self, other: "Changeset") -> Self:
        """Merge an already built changeset.

        Afterwards this changeset is as if the child's operations and events
        had been added to it directly. Lazy children of ``other`` stay lazy.
        """
        self._ensure_building("merge a child")
        self._events.merge_eager(other.events)
        self._operations.merge_eager(other.operations)
        return self

    def merge_child_async(self, producer: ChangesetProducer) -> Self:
        """Merge a changeset that will be built later.

        ``producer`` is not called now. It is called once, when the commit
        phase reaches this point of the operation sequence, or when the
        events are first collected, whichever comes first.
        """
        self._ensure_building("merge a child")
        lazy = LazyChangeset(producer)
        self._events.merge_lazy(lazy)
        self._operations.merge_lazy(lazy)
        return self

    def push(self, configuration: ChangesetConfiguration | None = None) -> Self:
        """Commit every operation atomically, then dispatch the events.

        Args:
            configuration: Overrides the configuration given at creation.

        Raises:
            MissingConfigurationError: If no transaction runner is configured.
                Raised before any operation runs.
            InvalidStateError: If the changeset was already pushed.
            Exception: Failures of operations, lazy producers or event
                dispatch propagate unchanged. A dispatch failure does not
                undo the committed operations.
        """
        self._ensure_building("push")
        config = configuration if configuration is not None else self.configuration
        if config is None:
            config = ChangesetConfiguration()
        runner = config.resolve_transaction_runner()
        extra = {"changeset_id": str(self.id)}

        LOGGER.log(config.level, "Pushing changeset", extra=extra)
        try:
            self.state = ChangesetState.COMMITTING
            committed = runner.run(self._commit_operations)
            LOGGER.log(
                config.level, "Committed operations", extra={**extra, "operations": committed}
            )

            self.state = ChangesetState.DISPATCHING
            dispatched = self._dispatch_events()
            LOGGER.log(
                config.level, "Dispatched events", extra={**extra, "events": dispatched}
            )
        except Exception as e:
            LOGGER.warning(
                f"Push failed while {self.state.value}: {type(e).__name__}", extra=extra
            )
            self.state = ChangesetState.FAILED
            raise

        self.state = ChangesetState.PUSHED
        return self

    def dispatch_sequence(self) -> list[Event]:
        """Events that ``push`` would dispatch, deduplicated."""
        return self._events.dispatch_sequence()

    def commit_sequence(self) -> list[OperationHandle]:
        """Operation handles that ``push`` would commit, in order.

        This resolves every lazy child, so producers run now rather than
        during the commit.
        """
        return list(self._operations.commit_sequence())

    def _commit_operations(self) -> int:
        count = 0
        for handle in self._operations.commit_sequence():
            commit_operation(handle)
            count += 1
        return count

    def _dispatch_events(self) -> int:
        events = self._events.dispatch_sequence()
        for event in events:
            event.dispatch()
        return len(events)

    def _ensure_building(self, action: str) -> None:
        if self.state is not ChangesetState.BUILDING:
            raise InvalidStateError(f"Cannot {action}: changeset is {self.state.value}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Changeset):
            return NotImplemented
        return self._operations == other.operations and self._events == other.events

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Changeset(id={self.id}, state={self.state.value})"
