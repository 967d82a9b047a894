#!/usr/bin/env python3
"""Tests for merging derived tasks into an existing schedule."""

from datetime import date

from maintenance import MaintenanceTask, TaskStatus, merge_schedule, upsert_task

TODAY = date(2025, 3, 15)


def make_task(title, due_mileage=None, category="Oil Change", **kwargs):
    kwargs.setdefault("status", TaskStatus.UPCOMING)
    kwargs.setdefault("creation_date", date(2025, 1, 1))
    return MaintenanceTask(title=title, category=category, due_mileage=due_mileage, **kwargs)


class TestMergeSchedule:
    """Tests for merge_schedule()."""

    def test_appends_new_tasks(self):
        existing = [make_task("Engine Oil", 5000)]
        derived = [make_task("Engine Oil", 10000), make_task("Air Filter", 15000, "Air Filter")]

        merged = merge_schedule(existing, derived)

        assert [(t.title, t.due_mileage) for t in merged] == [
            ("Engine Oil", 5000),
            ("Engine Oil", 10000),
            ("Air Filter", 15000),
        ]

    def test_skips_existing_key(self):
        """A derived task equal by key is dropped; the existing one is kept."""
        original = make_task("Engine Oil", 5000, status=TaskStatus.COMPLETED)
        duplicate = make_task("Engine Oil", 5000)

        merged = merge_schedule([original], [duplicate])

        assert merged == [original]
        assert merged[0] is original

    def test_same_title_other_category_is_new(self):
        merged = merge_schedule([make_task("Inspect", 5000, "Brakes")], [make_task("Inspect", 5000, "Tires")])
        assert len(merged) == 2

    def test_undated_tasks_dedupe_on_title_and_category(self):
        merged = merge_schedule([make_task("Check horn", None, "Safety")], [make_task("Check horn", None, "Safety")])
        assert len(merged) == 1

    def test_duplicates_within_derived(self):
        derived = [make_task("Engine Oil", 5000), make_task("Engine Oil", 5000)]
        assert len(merge_schedule([], derived)) == 1

    def test_idempotent(self):
        existing = [make_task("Engine Oil", 5000)]
        derived = [make_task("Engine Oil", 10000), make_task("Tire Rotation", 7500, "Tire Rotation")]

        once = merge_schedule(existing, derived)
        twice = merge_schedule(once, derived)

        assert twice == once

    def test_taken_id_gets_fresh_id(self):
        """A new key carrying an existing id is added under a new id."""
        existing = [make_task("Engine Oil", 55000, id="abc")]
        incoming = make_task("Engine Oil", 55000, "Other", id="abc")

        merged = merge_schedule(existing, [incoming])

        assert len(merged) == 2
        assert merged[0].id == "abc"
        assert merged[1].id != "abc"
        assert merged[1].category == "Other"
        assert incoming.id == "abc"

    def test_ids_unique_within_derived(self):
        derived = [
            make_task("Engine Oil", 5000, id="abc"),
            make_task("Engine Oil", 10000, id="abc"),
        ]
        merged = merge_schedule([], derived)
        assert len({t.id for t in merged}) == 2

    def test_inputs_not_modified(self):
        existing = [make_task("Engine Oil", 5000)]
        merge_schedule(existing, [make_task("Engine Oil", 10000)])
        assert len(existing) == 1


class TestUpsertTask:
    """Tests for upsert_task()."""

    def test_appends_new_task(self):
        existing = [make_task("Engine Oil", 5000)]
        added = make_task("Brake pads", None, "Brake Service", due_date=date(2025, 4, 1))

        result = upsert_task(existing, added, TODAY)

        assert len(result) == 2
        assert result[-1] is added

    def test_replaces_by_id_and_keeps_creation_date(self):
        current = make_task("Engine Oil", 5000, id="abc")
        edited = make_task("Engine Oil", 5500, id="abc", creation_date=TODAY)

        result = upsert_task([current], edited, TODAY)

        assert len(result) == 1
        assert result[0].due_mileage == 5500
        assert result[0].creation_date == date(2025, 1, 1)

    def test_assigns_missing_id(self):
        task = make_task("Engine Oil", 5000, id="")
        result = upsert_task([], task, TODAY)
        assert result[0].id

    def test_reclassifies_schedule(self):
        stale = make_task("Engine Oil", 5000, due_date=date(2025, 3, 1))
        result = upsert_task([stale], make_task("Wipers", None, "Wiper Blades"), TODAY)
        assert result[0].status == TaskStatus.OVERDUE
