"""Tests for building and comparing changesets."""

import pytest

from changeset import (
    Changeset,
    ChangesetState,
    InvalidStateError,
    NullEventCatalog,
    UnknownEventError,
)
from tests.fixtures.catalogs import OtherPlanningEvents, Operation, PlanningEvents


@pytest.fixture
def changeset1() -> Changeset:
    return Changeset(PlanningEvents())


@pytest.fixture
def changeset2() -> Changeset:
    return Changeset(PlanningEvents())


class TestBuilding:
    def test_defaults_to_null_catalog(self):
        assert isinstance(Changeset().catalog, NullEventCatalog)

    def test_new_changeset_is_building(self):
        assert Changeset().state is ChangesetState.BUILDING

    def test_changesets_have_distinct_ids(self):
        assert Changeset().id != Changeset().id

    def test_builders_return_self(self, changeset1):
        assert changeset1.add_operation(Operation("a")) is changeset1
        assert changeset1.add_operations(Operation("b"), Operation("c")) is changeset1
        assert changeset1.add_event("planning_updated", {"foo": 1}) is changeset1
        assert changeset1.merge_child(Changeset()) is changeset1
        assert changeset1.merge_child_async(Changeset) is changeset1

    def test_add_operations_keeps_argument_order(self, changeset1):
        changeset1.add_operations(Operation("a"), Operation("b"))
        changeset1.add_operation(Operation("c"))

        assert changeset1.commit_sequence() == [Operation("a"), Operation("b"), Operation("c")]

    def test_unknown_event_fails_before_anything_is_queued(self, changeset1):
        with pytest.raises(UnknownEventError):
            changeset1.add_event("unknown", {"foo": 1})

        assert changeset1.events.all_events() == []

    def test_null_catalog_rejects_every_event(self):
        with pytest.raises(UnknownEventError):
            Changeset().add_event("planning_updated", {"foo": 1})

    def test_events_are_validated_by_the_changeset_catalog(self, changeset1):
        changeset1.add_event("planning_updated", {"foo": 1})

        (event,) = changeset1.dispatch_sequence()
        assert event.catalog is changeset1.catalog


class TestComparing:
    def test_empty_changesets_are_equal(self, changeset1, changeset2):
        assert changeset1 == changeset2

    def test_same_operations_are_equal(self, changeset1, changeset2):
        changeset1.add_operations(Operation("db_operation1"), Operation("db_operation2"))
        changeset2.add_operations(Operation("db_operation1"), Operation("db_operation2"))

        assert changeset1 == changeset2

    def test_operations_in_other_order_are_not_equal(self, changeset1, changeset2):
        changeset1.add_operations(Operation("db_operation1"), Operation("db_operation2"))
        changeset2.add_operations(Operation("db_operation2"), Operation("db_operation1"))

        assert changeset1 != changeset2

    def test_duplicate_events_are_collapsed(self, changeset1, changeset2):
        changeset1.add_event("planning_updated", {"foo": 1})
        changeset1.add_event("planning_updated", {"foo": 1})
        changeset2.add_event("planning_updated", {"foo": 1})

        assert changeset1 == changeset2

    def test_deferred_payloads_are_evaluated(self, changeset1, changeset2):
        changeset1.add_event("planning_updated", {"foo": 1})
        changeset2.add_event("planning_updated", lambda: {"foo": 1})

        assert changeset1 == changeset2

    def test_different_payloads_are_not_equal(self, changeset1, changeset2):
        changeset1.add_event("planning_updated", {"foo": 1})
        changeset2.add_event("planning_updated", {"foo": 2})

        assert changeset1 != changeset2

    def test_different_deferred_payloads_are_not_equal(self, changeset1, changeset2):
        changeset1.add_event("planning_updated", lambda: {"foo": 1})
        changeset2.add_event("planning_updated", lambda: {"foo": 2})

        assert changeset1 != changeset2

    def test_different_catalog_classes_are_not_equal(self, changeset1):
        changeset2 = Changeset(OtherPlanningEvents())
        changeset1.add_event("planning_updated", {"foo": 1})
        changeset2.add_event("planning_updated", {"foo": 1})

        assert changeset1 != changeset2

    def test_same_events_different_operations_are_not_equal(self, changeset1, changeset2):
        changeset1.add_event("planning_updated", {"foo": 1}).add_operation(Operation("a"))
        changeset2.add_event("planning_updated", {"foo": 1})

        assert changeset1 != changeset2

    def test_differently_merged_changesets_are_equal(self, changeset1, changeset2):
        changeset1.add_operations(Operation("a"), Operation("b"), Operation("c"))
        changeset1.add_event("planning_updated", {"foo": 1})

        child = Changeset(PlanningEvents()).add_operation(Operation("b"))
        changeset2.add_operation(Operation("a"))
        changeset2.merge_child(child)
        changeset2.merge_child_async(
            lambda: Changeset(PlanningEvents())
            .add_operation(Operation("c"))
            .add_event("planning_updated", lambda: {"foo": 1})
        )

        assert changeset1 == changeset2

    def test_not_equal_to_other_types(self, changeset1):
        assert changeset1 != object()


class TestLifecycle:
    def test_cannot_add_after_push(self, changeset1, configuration):
        changeset1.push(configuration=configuration)

        with pytest.raises(InvalidStateError):
            changeset1.add_operation(Operation("a"))
        with pytest.raises(InvalidStateError):
            changeset1.add_event("planning_updated", {"foo": 1})
        with pytest.raises(InvalidStateError):
            changeset1.merge_child(Changeset())
        with pytest.raises(InvalidStateError):
            changeset1.merge_child_async(Changeset)

    def test_cannot_push_twice(self, changeset1, configuration):
        changeset1.push(configuration=configuration)

        with pytest.raises(InvalidStateError):
            changeset1.push(configuration=configuration)

    def test_pushed_changeset_is_still_comparable(self, changeset1, changeset2, configuration):
        changeset1.add_operation(Operation("a")).push(configuration=configuration)
        changeset2.add_operation(Operation("a"))

        assert changeset1 == changeset2
