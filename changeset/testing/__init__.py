from .doubles import (
    FailingOperation,
    RecordingEventCatalog,
    RecordingOperation,
    RecordingTransactionRunner,
)
from .scenario import ChangesetScenario

__all__ = [
    "ChangesetScenario",
    "FailingOperation",
    "RecordingEventCatalog",
    "RecordingOperation",
    "RecordingTransactionRunner",
]
