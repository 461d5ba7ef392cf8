from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .catalog import EventCatalog


class Event(BaseModel):
    """Immutable record of a domain event waiting to be dispatched.

    An Event couples a name with a raw payload and the catalog that validated
    it. The raw payload is either the payload itself or a zero-argument
    producer. Producers let callers reference values that only exist once the
    changeset's operations have been committed, for example the database id
    of a row that has not been inserted yet.

    Events are deduplicated by their unicity key: the catalog identity, the
    name and the evaluated payload. Two events with equal keys are equal.

    Attributes:
        name: Event name, recognized by ``catalog``.
        raw_payload: Payload value, or a zero-argument callable producing it.
        catalog: Catalog which validated the name and will dispatch the event.

    Note:
        Events are created through ``Changeset.add_event`` which checks the
        name against the catalog first; constructing them directly skips that
        check.

    Examples:
        >>> event = Event(name="order_placed", raw_payload=lambda: {"id": order.id},
        ...               catalog=catalog)
        >>> event.payload  # evaluated now
        {'id': 42}
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(description="Event name recognized by the catalog")
    raw_payload: Any = Field(repr=False, description="Payload or zero-argument producer")
    catalog: EventCatalog = Field(repr=False, exclude=True)

    # Payloads are commonly dicts, so events are not hashable.
    __hash__ = None  # type: ignore[assignment]

    @property
    def catalog_identity(self) -> type[EventCatalog]:
        """Identity of the catalog, which is its class."""
        return type(self.catalog)

    @property
    def payload(self) -> Any:
        """Evaluate the payload.

        Producers are called on every access; the result is not cached.
        """
        if callable(self.raw_payload):
            return self.raw_payload()
        return self.raw_payload

    @property
    def unicity_key(self) -> tuple[type[EventCatalog], str, Any]:
        return (self.catalog_identity, self.name, self.payload)

    def dispatch(self) -> None:
        """Hand the event over to its catalog for delivery."""
        self.catalog.dispatch(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.unicity_key == other.unicity_key
