"""Grouped, deduplicated store of pending domain events."""

from typing import TYPE_CHECKING, Any

from .domain import Event, EventCatalog, UnknownEventError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .lazy import LazyChangeset


def unique_events(events: list[Event]) -> list[Event]:
    """Keep the first event of each unicity key, preserving order.

    Payloads are usually dicts, so keys are compared by equality rather than
    hashed.
    """
    seen: list[tuple[Any, ...]] = []
    unique: list[Event] = []
    for event in events:
        key = event.unicity_key
        if key in seen:
            continue
        seen.append(key)
        unique.append(event)
    return unique


class EventCollection:
    """Events of a changeset, grouped by name, plus pending lazy children.

    Groups are kept in the order in which each name was first added, and
    events keep their add order within a group. Lazily merged children are
    queued and only resolved when the dispatch sequence is computed, at which
    point their events are appended into the groups. A name first seen in a
    lazy child therefore comes after every name known before resolution.

    Examples:
        >>> events = EventCollection()
        >>> events.add("order_placed", {"id": 1}, catalog)
        >>> events.add("order_placed", {"id": 1}, catalog)
        >>> len(events.dispatch_sequence())
        1
    """

    def __init__(self) -> None:
        self._groups: dict[str, list[Event]] = {}
        self._pending: list["LazyChangeset"] = []

    @property
    def names(self) -> list[str]:
        """Event names in first-seen order."""
        return list(self._groups)

    @property
    def pending(self) -> list["LazyChangeset"]:
        """Lazy children whose events have not been collected yet."""
        return list(self._pending)

    def add(self, name: str, raw_payload: Any, catalog: EventCatalog) -> Event:
        """Create an event and append it to the group of its name.

        Raises:
            UnknownEventError: If the catalog does not know the name.
        """
        if not catalog.knows(name):
            raise UnknownEventError(f"unknown {name}")
        event = Event(name=name, raw_payload=raw_payload, catalog=catalog)
        self._append(event)
        return event

    def all_events(self) -> list[Event]:
        """Every event currently held, group by group, duplicates included."""
        return [event for events in self._groups.values() for event in events]

    def merge_eager(self, other: "EventCollection") -> None:
        """Copy the events of ``other`` and queue its pending lazy children.

        Pending children stay lazy: merging never forces them.
        """
        for event in other.all_events():
            self._append(event)
        self._pending.extend(other._pending)

    def merge_lazy(self, lazy: "LazyChangeset") -> None:
        self._pending.append(lazy)

    def dispatch_sequence(self) -> list[Event]:
        """Resolve pending children and return the events to dispatch.

        Each group is deduplicated by unicity key, keeping the first
        occurrence, and groups are concatenated in name order. Resolved
        children are removed from the queue, so computing the sequence again
        gives the same result.
        """
        self._collect_pending()
        sequence: list[Event] = []
        for events in self._groups.values():
            sequence.extend(unique_events(events))
        return sequence

    def _collect_pending(self) -> None:
        while self._pending:
            lazy = self._pending[0]
            child_events = lazy.events.dispatch_sequence()
            self._pending.pop(0)
            for event in child_events:
                self._append(event)

    def _append(self, event: Event) -> None:
        self._groups.setdefault(event.name, []).append(event)

    def __iter__(self) -> "Iterator[Event]":
        return iter(self.dispatch_sequence())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventCollection):
            return NotImplemented
        return self.dispatch_sequence() == other.dispatch_sequence()

    __hash__ = None  # type: ignore[assignment]
