"""Transaction runners wrap the commit phase of a push in an atomic scope.

The changeset never talks to a database itself. It hands a block, which
commits every operation handle in order, to a TransactionRunner. The runner
is responsible for making that block all-or-nothing.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any, TypeVar

T = TypeVar("T")

Block = Callable[[], T]


class TransactionRunner(ABC):
    """Capability to run a block inside one atomic scope.

    Implementations must return the block's result, or let the block's
    exception propagate unchanged after rolling the scope back.
    """

    @abstractmethod
    def run(self, block: Block[T]) -> T: ...


class ImmediateTransactionRunner(TransactionRunner):
    """Runs the block directly, without any atomicity.

    Suitable for tests and for operations targeting in-memory stores.
    """

    def run(self, block: Block[T]) -> T:
        return block()


class ContextManagerTransactionRunner(TransactionRunner):
    """Runs the block inside a fresh context manager.

    The factory is called once per run. Rolling back on exception is left to
    the context manager, which receives the exception in ``__exit__``.

    Examples:
        With a SQLAlchemy session:

        >>> runner = ContextManagerTransactionRunner(session.begin)

        With a sqlite3 connection:

        >>> runner = ContextManagerTransactionRunner(lambda: connection)
    """

    def __init__(self, factory: Callable[[], AbstractContextManager[Any]]):
        self.factory = factory

    def run(self, block: Block[T]) -> T:
        with self.factory():
            return block()


class WrappingTransactionRunner(TransactionRunner):
    """Adapts a wrapper function taking the block and returning its result.

    Examples:
        >>> def in_transaction(block):
        ...     with connection:
        ...         return block()
        >>> runner = WrappingTransactionRunner(in_transaction)
    """

    def __init__(self, wrapper: Callable[[Block[Any]], Any]):
        self.wrapper = wrapper

    def run(self, block: Block[T]) -> T:
        return self.wrapper(block)
