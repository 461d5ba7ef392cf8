"""Ordered tree of operation handles with lazily built subtrees."""

from collections.abc import Iterator

from .domain import OperationHandle
from .lazy import LazyChangeset


class OperationTree:
    """Operation handles of a changeset, in commit order.

    Elements are either operation handles or LazyChangesets. Flattening
    replaces each LazyChangeset by the flattened operations of the child it
    produces, recursively. The flattening is a generator: a child is only
    produced when the consumer pulls past every element before it, so the
    child's producer observes the side effects of the operations committed
    before it.

    Examples:
        >>> tree = OperationTree()
        >>> tree.add(insert_order)
        >>> tree.merge_lazy(LazyChangeset(lambda: build_lines(order.id)))
        >>> tree.add(update_stock)
        >>> for handle in tree.commit_sequence():
        ...     commit_operation(handle)  # build_lines runs after insert_order
    """

    def __init__(self) -> None:
        self._elements: list[OperationHandle | LazyChangeset] = []

    @property
    def elements(self) -> list[OperationHandle | LazyChangeset]:
        """Raw elements, lazy children left unresolved."""
        return list(self._elements)

    def add(self, handle: OperationHandle) -> None:
        self._elements.append(handle)

    def merge_eager(self, other: "OperationTree") -> None:
        """Append the elements of ``other`` without resolving its lazy children."""
        self._elements.extend(other._elements)

    def merge_lazy(self, lazy: LazyChangeset) -> None:
        self._elements.append(lazy)

    def commit_sequence(self) -> Iterator[OperationHandle]:
        """Yield operation handles depth-first, left to right."""
        for element in self._elements:
            if isinstance(element, LazyChangeset):
                yield from element.operations.commit_sequence()
            else:
                yield element

    def __iter__(self) -> Iterator[OperationHandle]:
        return self.commit_sequence()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OperationTree):
            return NotImplemented
        return list(self.commit_sequence()) == list(other.commit_sequence())

    __hash__ = None  # type: ignore[assignment]
