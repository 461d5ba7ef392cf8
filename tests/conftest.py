"""Central test fixtures."""

from unittest.mock import Mock

import pytest

from changeset import Changeset, ChangesetConfiguration
from changeset.testing import RecordingTransactionRunner
from tests.fixtures.catalogs import PlanningEvents, WorkerEvents


@pytest.fixture
def journal() -> list[str]:
    """Shared journal for recording operations and scopes in order."""
    return []


@pytest.fixture
def runner(journal: list[str]) -> RecordingTransactionRunner:
    """Create a transaction runner journaling its scopes."""
    return RecordingTransactionRunner(journal)


@pytest.fixture
def configuration(runner: RecordingTransactionRunner) -> ChangesetConfiguration:
    """Create a configuration using the recording runner."""
    return ChangesetConfiguration(transaction_runner=runner)


@pytest.fixture
def tracker() -> Mock:
    """Parent mock whose children record calls in a single ordered list."""
    return Mock()


@pytest.fixture
def worker(tracker: Mock) -> Mock:
    return tracker.worker


@pytest.fixture
def worker_catalog(worker: Mock) -> WorkerEvents:
    return WorkerEvents(worker)


@pytest.fixture
def planning_catalog() -> PlanningEvents:
    return PlanningEvents()


@pytest.fixture
def changeset(
    worker_catalog: WorkerEvents, configuration: ChangesetConfiguration
) -> Changeset:
    """Create a changeset dispatching ``my_event`` to the worker."""
    return Changeset(worker_catalog, configuration=configuration)
