"""Event catalogs validate event names and deliver events.

The changeset only relies on two capabilities of a catalog: ``knows`` to
reject unknown names as early as possible, and ``dispatch`` to deliver an
event once the operations have been committed. How a catalog resolves a name
to a handler is its own business; ``RoutedEventCatalog`` is provided for the
common case of one method per event name.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from .exceptions import UnknownEventError

if TYPE_CHECKING:
    from .event import Event

T = TypeVar("T")

_DISPATCHES_ATTR = "_dispatches_event_names"
_WANTS_EVENT_ATTR = "_wants_event"


class EventCatalog(ABC):
    """Capability to validate event names and to dispatch events.

    The catalog class is part of every event's unicity key, so the same
    name and payload added through two different catalog classes produce two
    distinct events.
    """

    @staticmethod
    def null() -> "EventCatalog":
        return NullEventCatalog()

    @abstractmethod
    def knows(self, name: str) -> bool: ...

    @abstractmethod
    def dispatch(self, event: "Event") -> None: ...


class NullEventCatalog(EventCatalog):
    """Catalog that knows no event and refuses every dispatch.

    Used when a Changeset is created without a catalog, so that it cannot
    silently accept events.
    """

    def knows(self, name: str) -> bool:
        return False

    def dispatch(self, event: "Event") -> None:
        raise UnknownEventError(f"No events in NullEventCatalog, cannot dispatch {event.name}")


def dispatches(*names: str, wants_event: bool = False) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator marking a method as the handler of one or more event names.

    By default the handler receives the evaluated payload. Pass
    ``wants_event=True`` to receive the ``Event`` itself.

    Example:
        >>> class OrderEvents(RoutedEventCatalog):
        ...     @dispatches("order_placed")
        ...     def order_placed(self, payload: dict) -> None:
        ...         self.worker.enqueue(payload)
    """
    if not names:
        raise ValueError("dispatches() requires at least one event name")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        setattr(func, _DISPATCHES_ATTR, names)
        setattr(func, _WANTS_EVENT_ATTR, wants_event)
        return func

    return decorator


class RoutedEventCatalog(EventCatalog):
    """Catalog routing events by name to methods decorated with ``@dispatches``.

    The routing table is built once per subclass, when the subclass is
    defined, by scanning its MRO for decorated methods. Subclasses may
    override handlers of their bases.

    Examples:
        >>> class PlanningEvents(RoutedEventCatalog):
        ...     def __init__(self, notifier):
        ...         self.notifier = notifier
        ...
        ...     @dispatches("planning_updated")
        ...     def planning_updated(self, payload):
        ...         self.notifier.call(payload)
        >>>
        >>> catalog = PlanningEvents(notifier)
        >>> catalog.knows("planning_updated")
        True
    """

    _routes: ClassVar[dict[str, tuple[Callable[..., Any], bool]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Set up name routing when a subclass is defined."""
        super().__init_subclass__(**kwargs)
        routes: dict[str, tuple[Callable[..., Any], bool]] = {}
        # Walk from the most generic class so that subclasses win
        for klass in reversed(cls.__mro__):
            for value in klass.__dict__.values():
                names = getattr(value, _DISPATCHES_ATTR, None)
                if not names:
                    continue
                for name in names:
                    routes[name] = (value, getattr(value, _WANTS_EVENT_ATTR, False))
        cls._routes = routes

    def knows(self, name: str) -> bool:
        return name in self._routes

    def dispatch(self, event: "Event") -> None:
        try:
            handler, wants_event = self._routes[event.name]
        except KeyError:
            raise UnknownEventError(
                f"{type(self).__name__} has no handler for event {event.name}"
            ) from None
        handler(self, event if wants_event else event.payload)
