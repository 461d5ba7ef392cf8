from collections.abc import Callable
from typing import Any, Protocol


class Committable(Protocol):
    """A unit of deferred mutation work with a single commit action.

    Operation handles are opaque to the changeset: it only ever commits
    them, in order, inside the transaction scope.
    """

    def commit(self) -> Any: ...


OperationHandle = Committable | Callable[[], Any]


def commit_operation(handle: OperationHandle) -> Any:
    """Execute an operation handle.

    Handles exposing a ``commit()`` method are committed; other callables
    are called with no arguments.

    Raises:
        TypeError: If the handle is neither committable nor callable.
    """
    commit = getattr(handle, "commit", None)
    if callable(commit):
        return commit()
    if callable(handle):
        return handle()
    raise TypeError(f"{type(handle).__name__} is not a committable operation handle")
