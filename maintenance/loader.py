"""YAML loading and saving utilities for vehicle maintenance files."""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import yaml

from .baseline import BaselineTask
from .policy import Policy
from .record import VehicleRecord
from .status import Importance, TaskStatus
from .task import MaintenanceTask, new_task_id
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def _parse_date(value: Any) -> Optional[date]:
    """Accept ISO strings (date or datetime) and YAML-native dates."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def vehicle_from_dict(dct: Dict[str, Any]) -> Vehicle:
    return Vehicle(
        dct["make"],
        dct["model"],
        dct["year"],
        dct.get("currentMileage") or 0,
        _parse_date(dct.get("purchaseDate")),
    )


def vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "make": vehicle.make,
        "model": vehicle.model,
        "year": vehicle.year,
        "currentMileage": vehicle.current_mileage,
    }
    if vehicle.purchase_date is not None:
        d["purchaseDate"] = _format_date(vehicle.purchase_date)
    return d


def baseline_from_dict(dct: Dict[str, Any]) -> BaselineTask:
    return BaselineTask(
        dct["item"],
        dct.get("category"),
        dct.get("intervalDistance"),
        dct.get("intervalMonths"),
        dct.get("urgency"),
        dct.get("notes"),
    )


def baseline_to_dict(baseline: BaselineTask) -> Dict[str, Any]:
    d: Dict[str, Any] = {"item": baseline.item, "category": baseline.category}
    if baseline.interval_distance is not None:
        d["intervalDistance"] = baseline.interval_distance
    if baseline.interval_months is not None:
        d["intervalMonths"] = baseline.interval_months
    if baseline.urgency is not None:
        d["urgency"] = baseline.urgency
    if baseline.notes is not None:
        d["notes"] = baseline.notes
    return d


def task_from_dict(dct: Dict[str, Any]) -> MaintenanceTask:
    """
    Parse a camelCase task record.

    Records without an id get a fresh one; records without a creation date
    are stamped with today's date.
    """
    status = TaskStatus.parse(dct["status"])
    completed_date = _parse_date(dct.get("completedDate"))
    if status != TaskStatus.COMPLETED:
        completed_date = None
    return MaintenanceTask(
        id=dct.get("id") or new_task_id(),
        title=dct["title"],
        category=dct["category"],
        status=status,
        creation_date=_parse_date(dct.get("creationDate")) or date.today(),
        due_date=_parse_date(dct.get("dueDate")),
        due_mileage=dct.get("dueMileage"),
        completed_date=completed_date,
        is_recurring=bool(dct.get("isRecurring", False)),
        recurrence_interval=dct.get("recurrenceInterval"),
        is_forecast=bool(dct.get("isForecast", False)),
        archived=bool(dct.get("archived", False)),
        importance=Importance(dct.get("importance") or Importance.RECOMMENDED.value),
        urgency=dct.get("urgency"),
        notes=dct.get("notes"),
        cost=dct.get("cost"),
    )


def task_to_dict(task: MaintenanceTask) -> Dict[str, Any]:
    """Serialize a task, omitting empty values for cleaner YAML."""
    d: Dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "category": task.category,
        "status": task.status.value,
        "creationDate": _format_date(task.creation_date),
        "importance": task.importance.value,
    }
    optional = {
        "dueDate": _format_date(task.due_date),
        "dueMileage": task.due_mileage,
        "completedDate": _format_date(task.completed_date),
        "recurrenceInterval": task.recurrence_interval,
        "urgency": task.urgency,
        "notes": task.notes,
        "cost": task.cost,
    }
    d.update({k: v for k, v in optional.items() if v is not None})
    for key, flag in (
        ("isRecurring", task.is_recurring),
        ("isForecast", task.is_forecast),
        ("archived", task.archived),
    ):
        if flag:
            d[key] = True
    return d


def _read_yaml(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_yaml(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_record(filename: Union[str, Path]) -> VehicleRecord:
    """
    Load a vehicle, its catalog, schedule and policy from a YAML file.

    Task records missing an id or creation date are given one, and the file
    is rewritten so those values stay the same on the next load.
    """
    data = _read_yaml(filename)
    raw_tasks = data.get("tasks") or []
    record = VehicleRecord(
        vehicle_from_dict(data["vehicle"]),
        [baseline_from_dict(d) for d in data.get("catalog") or []],
        [task_from_dict(d) for d in raw_tasks],
        Policy.from_dict(data.get("policy")),
    )
    if any(not d.get("id") or not d.get("creationDate") for d in raw_tasks):
        logger.info("Assigning missing task ids in %s", filename)
        data["tasks"] = [task_to_dict(t) for t in record.tasks]
        _write_yaml(filename, data)
    return record


def save_tasks(filename: Union[str, Path], tasks: Sequence[MaintenanceTask]) -> None:
    """
    Replace the task list of a vehicle YAML file.

    Loads the raw YAML, swaps in the serialized tasks, and writes back
    to the file so other sections keep their layout.
    """
    data = _read_yaml(filename)
    data["tasks"] = [task_to_dict(t) for t in tasks]
    _write_yaml(filename, data)


def save_current_mileage(filename: Union[str, Path], mileage: int) -> None:
    """Update vehicle.currentMileage in a vehicle YAML file."""
    if mileage < 0:
        raise ValueError(f"Mileage must be >= 0, got {mileage}")
    data = _read_yaml(filename)
    data["vehicle"]["currentMileage"] = mileage
    _write_yaml(filename, data)


def create_record_file(filename: Union[str, Path], record: VehicleRecord) -> None:
    """Write a complete vehicle file for a record."""
    data: Dict[str, Any] = {"vehicle": vehicle_to_dict(record.vehicle)}
    policy = record.policy.to_dict()
    if policy:
        data["policy"] = policy
    data["catalog"] = [baseline_to_dict(b) for b in record.catalog]
    data["tasks"] = [task_to_dict(t) for t in record.tasks]
    _write_yaml(filename, data)

