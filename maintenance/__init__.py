"""
Vehicle maintenance forecasting and scheduling.

This package turns a baseline interval catalog into a maintenance schedule:
- Vehicle, BaselineTask, MaintenanceTask: the data the engine works on
- resolve_interval / derive_baseline_tasks: first due date and mileage
- apply_action with SetStatus / Toggle / Recompute: task status changes
- merge_schedule / upsert_task: schedule updates without duplicates
- generate_forecast: recurring placeholders up to the horizon
- smart_match_and_archive / complete_task: retire superseded placeholders
- forecast_or_fallback: external forecast with local synthesis as fallback
- load_record / save_tasks: YAML storage used by the CLI
"""

from .status import TaskStatus, Importance, importance_for
from .policy import Policy, DEFAULT_POLICY
from .vehicle import Vehicle
from .baseline import BaselineTask, usable_entries
from .task import MaintenanceTask, new_task_id
from .record import VehicleRecord
from .calculations import add_months, months_for_distance, is_past
from .catalog import (
    CANONICAL_CATEGORIES,
    map_category,
    catalog_key,
    generic_catalog,
    resolve_catalog,
)
from .classifier import (
    SetStatus,
    Toggle,
    Recompute,
    apply_action,
    classify_schedule,
    initial_status,
    new_task,
)
from .resolver import resolve_interval, derive_task, derive_baseline_tasks
from .merger import merge_schedule, upsert_task
from .forecast import forecast_item, generate_forecast
from .matching import smart_match_and_archive, complete_task, find_task
from .loader import (
    load_record,
    save_tasks,
    save_current_mileage,
    create_record_file,
    task_from_dict,
    task_to_dict,
    baseline_from_dict,
)
from .fallback import fetch_forecast, synthesize_fallback, forecast_or_fallback
from .views import (
    Reminder,
    active_tasks,
    archived_tasks,
    group_tasks,
    due_reminders,
    estimate_due_date,
)
from .validate import load_schema, validate_vehicle_file, validate_tasks

__all__ = [
    "TaskStatus",
    "Importance",
    "importance_for",
    "Policy",
    "DEFAULT_POLICY",
    "Vehicle",
    "BaselineTask",
    "usable_entries",
    "MaintenanceTask",
    "new_task_id",
    "VehicleRecord",
    "add_months",
    "months_for_distance",
    "is_past",
    "CANONICAL_CATEGORIES",
    "map_category",
    "catalog_key",
    "generic_catalog",
    "resolve_catalog",
    "SetStatus",
    "Toggle",
    "Recompute",
    "apply_action",
    "classify_schedule",
    "initial_status",
    "new_task",
    "resolve_interval",
    "derive_task",
    "derive_baseline_tasks",
    "merge_schedule",
    "upsert_task",
    "forecast_item",
    "generate_forecast",
    "smart_match_and_archive",
    "complete_task",
    "find_task",
    "load_record",
    "save_tasks",
    "save_current_mileage",
    "create_record_file",
    "task_from_dict",
    "task_to_dict",
    "baseline_from_dict",
    "fetch_forecast",
    "synthesize_fallback",
    "forecast_or_fallback",
    "Reminder",
    "active_tasks",
    "archived_tasks",
    "group_tasks",
    "due_reminders",
    "estimate_due_date",
    "load_schema",
    "validate_vehicle_file",
    "validate_tasks",
]
