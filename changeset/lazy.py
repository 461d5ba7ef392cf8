"""Deferred, memoized construction of child changesets."""

import logging
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from .domain import InconsistencyError

if TYPE_CHECKING:
    from .changeset import Changeset
    from .events import EventCollection
    from .operations import OperationTree

LOGGER = logging.getLogger(__name__)

ChangesetProducer = Callable[[], "Changeset"]


class LazyState(str, Enum):
    """Resolution state of a LazyChangeset."""

    PENDING = "pending"  # Producer not invoked yet
    RESOLVED = "resolved"  # Producer returned a Changeset, now cached
    FAILED = "failed"  # Producer raised or returned something else


class LazyChangeset:
    """A child changeset built on first access.

    The producer is a zero-argument callable returning a Changeset. It is
    invoked at most once, the first time either the operations or the events
    of the child are needed. When the parent is pushed, that moment is the
    point in the commit sequence where the child was merged, so the producer
    can read values written by the operations committed before it.

    A producer that raises, or that returns anything but a Changeset, leaves
    the LazyChangeset failed: every later access raises the same error
    without invoking the producer again.

    Examples:
        >>> lazy = LazyChangeset(lambda: Changeset(catalog).add_operation(op))
        >>> lazy.state
        <LazyState.PENDING: 'pending'>
        >>> list(lazy.operations)
        [op]
        >>> lazy.state
        <LazyState.RESOLVED: 'resolved'>
    """

    def __init__(self, producer: ChangesetProducer):
        self.producer = producer
        self.state = LazyState.PENDING
        self._changeset: "Changeset | None" = None
        self._error: Exception | None = None

    @property
    def resolved(self) -> bool:
        return self.state is LazyState.RESOLVED

    def resolve(self) -> "Changeset":
        """Return the child changeset, invoking the producer on first call.

        Raises:
            InconsistencyError: If the producer did not return a Changeset.
            Exception: Whatever the producer raised, unchanged.
        """
        if self.state is LazyState.RESOLVED:
            assert self._changeset is not None
            return self._changeset
        if self.state is LazyState.FAILED:
            assert self._error is not None
            raise self._error

        from .changeset import Changeset  # Import here to avoid circular dependency

        try:
            result = self.producer()
        except Exception as e:
            self._fail(e)
            raise

        if not isinstance(result, Changeset):
            error = InconsistencyError(
                f"Lazy child producer returned {type(result).__name__}, expected Changeset"
            )
            self._fail(error)
            raise error

        LOGGER.debug("Resolved lazy child changeset", extra={"changeset_id": str(result.id)})
        self._changeset = result
        self.state = LazyState.RESOLVED
        return result

    @property
    def operations(self) -> "OperationTree":
        return self.resolve().operations

    @property
    def events(self) -> "EventCollection":
        return self.resolve().events

    def _fail(self, error: Exception) -> None:
        self._error = error
        self.state = LazyState.FAILED

    def __repr__(self) -> str:
        return f"LazyChangeset(state={self.state.value})"
