#!/usr/bin/env python3
"""Tests for reading and writing vehicle YAML files."""

from datetime import date

import pytest
import yaml

from maintenance import (
    BaselineTask,
    Importance,
    MaintenanceTask,
    Policy,
    TaskStatus,
    Vehicle,
    VehicleRecord,
    create_record_file,
    load_record,
    save_current_mileage,
    save_tasks,
    task_from_dict,
    task_to_dict,
)

VEHICLE_YAML = """\
vehicle:
  make: Toyota
  model: Camry
  year: 2020
  currentMileage: 30000
  purchaseDate: "2020-06-01"
policy:
  annualDistance: 15000
catalog:
  - item: Engine Oil
    category: Oil Change
    intervalDistance: 5000
    intervalMonths: 6
    urgency: High
tasks:
  - id: 3f2a9c1b-0000-4000-8000-000000000001
    title: Engine Oil
    category: Oil Change
    status: Upcoming
    dueMileage: 35000
    dueDate: "2025-09-15"
    creationDate: "2025-03-15"
    isRecurring: true
    recurrenceInterval: 5000 mi / 6 months
    importance: Required
"""


@pytest.fixture
def vehicle_file(tmp_path):
    path = tmp_path / "camry.yaml"
    path.write_text(VEHICLE_YAML)
    return path


class TestLoadRecord:
    """Tests for load_record()."""

    def test_vehicle(self, vehicle_file):
        record = load_record(vehicle_file)
        assert record.vehicle.name == "2020 Toyota Camry"
        assert record.vehicle.current_mileage == 30000
        assert record.vehicle.purchase_date == date(2020, 6, 1)

    def test_policy(self, vehicle_file):
        record = load_record(vehicle_file)
        assert record.policy.annual_distance == 15000
        assert record.policy.horizon == 20000

    def test_catalog(self, vehicle_file):
        record = load_record(vehicle_file)
        assert len(record.catalog) == 1
        assert record.catalog[0].distance == 5000
        assert record.catalog[0].urgency == "High"

    def test_tasks(self, vehicle_file):
        task = load_record(vehicle_file).tasks[0]
        assert task.status == TaskStatus.UPCOMING
        assert task.due_date == date(2025, 9, 15)
        assert task.due_mileage == 35000
        assert task.is_recurring
        assert not task.is_forecast
        assert task.importance == Importance.REQUIRED

    def test_minimal_file(self, tmp_path):
        path = tmp_path / "minimal.yaml"
        path.write_text("vehicle:\n  make: Honda\n  model: Civic\n  year: 2018\n")

        record = load_record(path)

        assert record.vehicle.current_mileage == 0
        assert record.catalog == []
        assert record.tasks == []
        assert record.policy == Policy()

    def test_missing_ids_are_stable(self, tmp_path):
        """Ids assigned on load are written back and survive the next load."""
        path = tmp_path / "noid.yaml"
        path.write_text(
            "vehicle:\n  make: Honda\n  model: Civic\n  year: 2018\n"
            "tasks:\n  - title: Engine Oil\n    category: Oil Change\n    status: Upcoming\n"
        )

        first = load_record(path).tasks[0]
        second = load_record(path).tasks[0]

        assert first.id == second.id
        assert first.creation_date == second.creation_date
        assert yaml.safe_load(path.read_text())["tasks"][0]["id"] == first.id

    def test_complete_file_not_rewritten(self, vehicle_file):
        before = vehicle_file.read_text()
        load_record(vehicle_file)
        assert vehicle_file.read_text() == before

    def test_unknown_policy_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "vehicle:\n  make: Honda\n  model: Civic\n  year: 2018\npolicy:\n  speed: 3\n"
        )
        with pytest.raises(ValueError):
            load_record(path)


class TestTaskFromDict:
    """Tests for task_from_dict()."""

    def test_defaults(self):
        task = task_from_dict({"title": "Rattle", "category": "Other", "status": "in-progress"})
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.id
        assert task.creation_date == date.today()
        assert task.importance == Importance.RECOMMENDED

    def test_completed_date_dropped_unless_completed(self):
        task = task_from_dict(
            {
                "title": "Engine Oil",
                "category": "Oil Change",
                "status": "Upcoming",
                "completedDate": "2025-01-01",
            }
        )
        assert task.completed_date is None

    def test_datetime_strings_accepted(self):
        task = task_from_dict(
            {
                "title": "Engine Oil",
                "category": "Oil Change",
                "status": "Completed",
                "completedDate": "2025-03-15T10:30:00.000Z",
            }
        )
        assert task.completed_date == date(2025, 3, 15)

    def test_unknown_status(self):
        with pytest.raises(ValueError):
            task_from_dict({"title": "x", "category": "Other", "status": "Someday"})


class TestTaskToDict:
    def test_omits_empty_values(self):
        task = MaintenanceTask("Rattle", "Other", TaskStatus.IN_PROGRESS, date(2025, 3, 15), id="abc")
        assert task_to_dict(task) == {
            "id": "abc",
            "title": "Rattle",
            "category": "Other",
            "status": "In Progress",
            "creationDate": "2025-03-15",
            "importance": "Recommended",
        }

    def test_flags_and_dates(self):
        task = MaintenanceTask(
            "Engine Oil",
            "Oil Change",
            TaskStatus.COMPLETED,
            date(2025, 3, 15),
            due_mileage=55000,
            completed_date=date(2025, 3, 20),
            is_forecast=True,
            archived=True,
        )
        d = task_to_dict(task)
        assert d["completedDate"] == "2025-03-20"
        assert d["isForecast"] is True
        assert d["archived"] is True
        assert "isRecurring" not in d

    def test_reloads_equal(self):
        task = MaintenanceTask(
            "Engine Oil",
            "Oil Change",
            TaskStatus.UPCOMING,
            date(2025, 3, 15),
            due_date=date(2025, 9, 15),
            due_mileage=55000,
            is_recurring=True,
            recurrence_interval="5000 mi / 6 months",
            importance=Importance.REQUIRED,
            urgency="High",
            cost=49.99,
        )
        assert task_from_dict(task_to_dict(task)) == task


class TestSaving:
    """Tests for writing changes back to the file."""

    def test_save_tasks_keeps_other_sections(self, vehicle_file):
        record = load_record(vehicle_file)
        record.tasks[0].status = TaskStatus.COMPLETED
        record.tasks[0].completed_date = date(2025, 3, 20)

        save_tasks(vehicle_file, record.tasks)

        data = yaml.safe_load(vehicle_file.read_text())
        assert data["policy"] == {"annualDistance": 15000}
        assert data["catalog"][0]["item"] == "Engine Oil"
        assert data["tasks"][0]["status"] == "Completed"
        assert data["tasks"][0]["completedDate"] == "2025-03-20"

    def test_save_current_mileage(self, vehicle_file):
        save_current_mileage(vehicle_file, 31500)
        assert load_record(vehicle_file).vehicle.current_mileage == 31500

    def test_save_negative_mileage(self, vehicle_file):
        with pytest.raises(ValueError):
            save_current_mileage(vehicle_file, -1)

    def test_create_record_file(self, tmp_path):
        path = tmp_path / "new.yaml"
        record = VehicleRecord(
            Vehicle("Honda", "Civic", 2018, 42000, date(2019, 2, 1)),
            [BaselineTask("Engine Oil", "Oil Change", 7500, 12)],
            [MaintenanceTask("Rattle", "Other", TaskStatus.IN_PROGRESS, date(2025, 3, 15))],
            Policy(horizon=30000),
        )

        create_record_file(path, record)
        loaded = load_record(path)

        assert loaded.vehicle.purchase_date == date(2019, 2, 1)
        assert loaded.policy.horizon == 30000
        assert loaded.catalog[0].months == 12
        assert loaded.tasks == record.tasks
