"""
Tests unitarios para DiffPlanner y el invariante de orden del Plan.
"""
from __future__ import annotations

import pytest

from classes_sync.application.services.diff_planner import DiffPlanner
from classes_sync.application.services.field_mapper import FieldMapper
from classes_sync.domain.entities.operations import (
    CreateOperation,
    DeleteOperation,
    Plan,
    UpdateOperation,
)
from classes_sync.shared.exceptions.sync import PlanOrderingError


def _kinds(plan: Plan) -> list[str]:
    return [op.kind for op in plan]


class TestDiffPlanner:
    """Tests para DiffPlanner.plan."""

    def test_reference_scenario(self, record_factory, item_factory) -> None:
        """Stale r9 se borra, r1 se actualiza, r2 se crea, en ese orden."""
        record_a = record_factory("r1", "Basic Safety")
        record_b = record_factory("r2", "Ladder Use")
        stale = item_factory("stale-item", "r9")
        existing = item_factory("r1-item", "r1", name="Old name")

        plan = DiffPlanner().plan([record_a, record_b], [stale, existing])

        mapper = FieldMapper()
        assert list(plan) == [
            DeleteOperation(target_item_id="stale-item", source_record_id="r9"),
            UpdateOperation(target_item_id="r1-item", fields=mapper.map(record_a)),
            CreateOperation(fields=mapper.map(record_b)),
        ]

    def test_every_delete_precedes_every_write(self, record_factory, item_factory) -> None:
        records = [record_factory(f"r{i}", f"Class {i}") for i in range(5)]
        items = [
            item_factory("keep-1", "r1"),
            item_factory("gone-1", "x1"),
            item_factory("keep-3", "r3"),
            item_factory("gone-2", "x2"),
        ]

        plan = DiffPlanner().plan(records, items)

        kinds = _kinds(plan)
        last_delete = max(i for i, k in enumerate(kinds) if k == "delete")
        first_write = min(i for i, k in enumerate(kinds) if k != "delete")
        assert last_delete < first_write
        assert plan.counts() == {"delete": 2, "update": 2, "create": 3}

    def test_writes_follow_source_order(self, record_factory, item_factory) -> None:
        records = [record_factory("r2", "B"), record_factory("r1", "A"), record_factory("r3", "C")]
        plan = DiffPlanner().plan(records, [item_factory("item-1", "r1")])

        assert [op.fields["sourceRecordId"] for op in plan.writes] == ["r2", "r1", "r3"]
        assert _kinds(plan) == ["create", "update", "create"]

    def test_items_without_back_reference_are_left_alone(self, record_factory, item_factory) -> None:
        plan = DiffPlanner().plan([record_factory("r1", "A")], [item_factory("manual", None, name="Hand made")])

        assert _kinds(plan) == ["create"]

    def test_empty_source_deletes_every_linked_item(self, item_factory) -> None:
        plan = DiffPlanner().plan([], [item_factory("i1", "r1"), item_factory("i2", "r2")])

        assert [op.target_item_id for op in plan.deletes] == ["i1", "i2"]
        assert plan.writes == []

    def test_empty_name_is_still_planned(self, record_factory) -> None:
        plan = DiffPlanner().plan([record_factory("r1")], [])

        assert _kinds(plan) == ["create"]
        assert plan[0].fields["slug"] == ""

    def test_duplicate_items_for_live_record_are_not_deleted(self, record_factory, item_factory) -> None:
        plan = DiffPlanner().plan(
            [record_factory("r1", "A")],
            [item_factory("first", "r1"), item_factory("second", "r1")],
        )

        assert _kinds(plan) == ["update"]
        assert plan[0].target_item_id == "first"
        assert [d.ignored_item_id for d in plan.duplicates] == ["second"]

    def test_duplicate_items_for_removed_record_are_all_deleted(self, item_factory) -> None:
        plan = DiffPlanner().plan([], [item_factory("first", "r9"), item_factory("second", "r9")])

        assert [op.target_item_id for op in plan.deletes] == ["first", "second"]

    def test_repeated_source_id_keeps_first_record(self, record_factory) -> None:
        plan = DiffPlanner().plan([record_factory("r1", "First"), record_factory("r1", "Second")], [])

        assert _kinds(plan) == ["create"]
        assert plan[0].fields["name"] == "First"
        assert plan.ignored_records == ["r1"]

    def test_repeated_source_id_updates_the_item_once(self, record_factory, item_factory) -> None:
        plan = DiffPlanner().plan(
            [record_factory("r1", "First"), record_factory("r1", "Second")],
            [item_factory("i1", "r1")],
        )

        assert [(op.kind, op.target_item_id) for op in plan] == [("update", "i1")]

    def test_record_without_id_is_not_planned(self, record_factory, item_factory) -> None:
        plan = DiffPlanner().plan(
            [record_factory("", "No id"), record_factory("r1", "A")],
            [item_factory("i1", "r1")],
        )

        assert _kinds(plan) == ["update"]
        assert plan.ignored_records == [""]

    def test_updates_are_unconditional_by_default(self, record_factory, item_factory) -> None:
        record = record_factory("r1", "A")
        current = FieldMapper().map(record)
        plan = DiffPlanner().plan([record], [item_factory("i1", None, **current)])

        assert _kinds(plan) == ["update"]
        assert plan.skipped == 0

    def test_skip_unchanged_omits_identical_updates(self, record_factory, item_factory) -> None:
        unchanged = record_factory("r1", "A")
        changed = record_factory("r2", "B")
        items = [
            item_factory("i1", None, **FieldMapper().map(unchanged), _archived=False),
            item_factory("i2", "r2", name="Old B"),
        ]

        plan = DiffPlanner(skip_unchanged=True).plan([unchanged, changed], items)

        assert _kinds(plan) == ["update"]
        assert plan[0].target_item_id == "i2"
        assert plan.skipped == 1

    def test_custom_id_field(self, record_factory) -> None:
        from classes_sync.domain.entities.records import TargetItem

        mapper = FieldMapper(id_field="airtablerecordid")
        items = [TargetItem(id="w1", field_data={"airtablerecordid": "r1"})]

        plan = DiffPlanner(mapper).plan([record_factory("r1", "A")], items)

        assert _kinds(plan) == ["update"]
        assert plan[0].fields["airtablerecordid"] == "r1"


class TestPlan:
    """Tests para el invariante de orden del Plan."""

    def test_delete_after_write_is_rejected(self) -> None:
        with pytest.raises(PlanOrderingError) as exc_info:
            Plan([CreateOperation(fields={"slug": "a"}), DeleteOperation(target_item_id="x")])

        assert exc_info.value.details == {"index": 1}

    def test_counts_and_phases(self) -> None:
        plan = Plan([
            DeleteOperation(target_item_id="d1"),
            UpdateOperation(target_item_id="u1", fields={}),
            CreateOperation(fields={}),
        ])

        assert len(plan) == 3
        assert plan.counts() == {"delete": 1, "update": 1, "create": 1}
        assert [op.kind for op in plan.deletes] == ["delete"]
        assert [op.kind for op in plan.writes] == ["update", "create"]
        assert not plan.is_empty()

    def test_to_list_is_json_friendly(self) -> None:
        plan = Plan([DeleteOperation(target_item_id="d1", source_record_id="r9")])

        assert plan.to_list() == [{"kind": "delete", "target_item_id": "d1", "source_record_id": "r9"}]
