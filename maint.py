#!/usr/bin/env python3
"""
Unified CLI for vehicle maintenance scheduling.

Commands:
  status         - Show overdue, upcoming and forecast tasks
  catalog        - List the baseline maintenance catalog
  plan           - Add next-occurrence tasks from the catalog
  forecast       - Add forecast placeholders up to the horizon
  complete       - Mark a task completed and archive matching placeholders
  toggle         - Flip a task between completed and active
  set-status     - Set a task's status explicitly
  reminders      - Show tasks that are overdue or coming up soon
  update-mileage - Update current vehicle mileage
  validate       - Check a vehicle file against the schema
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from maintenance import (
    MaintenanceTask,
    Reminder,
    SetStatus,
    TaskStatus,
    Toggle,
    VehicleRecord,
    apply_action,
    catalog_key,
    classify_schedule,
    derive_baseline_tasks,
    due_reminders,
    forecast_or_fallback,
    group_tasks,
    archived_tasks,
    load_record,
    merge_schedule,
    resolve_catalog,
    save_current_mileage,
    save_tasks,
    smart_match_and_archive,
    validate_vehicle_file,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_distance(distance: Optional[float]) -> str:
    """Format a mileage for display."""
    return f"{distance:,.0f}" if distance is not None else "-"


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else "-"


def short_id(task_id: str) -> str:
    return task_id[:8]


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_task_table(tasks: List[MaintenanceTask]) -> List[List[str]]:
    """Convert tasks to table rows."""
    rows = []
    for task in tasks:
        rows.append(
            [
                short_id(task.id),
                truncate(task.title),
                task.category,
                format_distance(task.due_mileage),
                format_date(task.due_date),
                task.importance.value,
                task.recurrence_interval or "-",
            ]
        )
    return rows


def make_reminder_table(reminders: List[Reminder], unit: str) -> List[List[str]]:
    """Convert reminders to table rows."""
    rows = []
    for reminder in reminders:
        remaining = "-"
        if reminder.distance_remaining is not None:
            remaining = f"{reminder.distance_remaining:,.0f} {unit}"
        rows.append(
            [
                reminder.kind.upper(),
                short_id(reminder.task.id),
                truncate(reminder.task.title),
                format_distance(reminder.task.due_mileage),
                format_date(reminder.task.due_date),
                remaining,
            ]
        )
    return rows


TASK_HEADERS = ["Id", "Task", "Category", "Due (dist)", "Due (date)", "Importance", "Interval"]


def print_header(record: VehicleRecord, today: date) -> None:
    vehicle = record.vehicle
    unit = record.policy.distance_unit
    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {vehicle.current_mileage:,.0f} {unit} (as of {today})")
    if vehicle.purchase_date:
        print(f"Purchased: {vehicle.purchase_date}")


def print_section(title: str, tasks: List[MaintenanceTask]) -> None:
    if not tasks:
        return
    print(f"{title}:")
    print(tabulate(make_task_table(tasks), headers=TASK_HEADERS, tablefmt="simple"))
    print()


def catalog_for(record: VehicleRecord):
    """The vehicle's own catalog, or the generic one when it has none."""
    vehicle = record.vehicle
    catalogs = {}
    if record.catalog:
        catalogs[catalog_key(vehicle.make, vehicle.model, vehicle.year)] = record.catalog
    return resolve_catalog(vehicle, catalogs)


def find_task_or_report(record: VehicleRecord, task_id: str) -> Optional[MaintenanceTask]:
    task = record.get_task(task_id)
    if task is None:
        print(f"Error: No task matching id '{task_id}'")
    return task


# =============================================================================
# Status command
# =============================================================================


def due_order(task: MaintenanceTask):
    """Sort key: due mileage, then due date, then title."""
    return (task.due_mileage or 0, task.due_date or date.max, task.title)


def cmd_status(args, today: date):
    """Show overdue, upcoming and forecast tasks."""
    record = load_record(args.vehicle_file)
    tasks = classify_schedule(record.tasks, today)

    print_header(record, today)
    print(f"Tasks: {len(tasks)}")
    if args.category:
        print(f"Filter: CATEGORY {args.category}")
    print()

    groups = group_tasks(tasks, category=args.category)
    in_progress = [
        t for t in tasks
        if t.status == TaskStatus.IN_PROGRESS
        and (args.category is None or t.category == args.category)
    ]
    skipped = [
        t for t in tasks
        if t.status == TaskStatus.SKIPPED
        and (args.category is None or t.category == args.category)
    ]

    print_section("OVERDUE", sorted(groups["overdue"], key=due_order))
    print_section(
        "UPCOMING",
        sorted([t for t in groups["upcoming"] if not t.is_forecast], key=due_order),
    )
    print_section("IN PROGRESS", in_progress)
    print_section(
        "FORECAST",
        sorted(
            [t for t in groups["forecasted"] if t.status == TaskStatus.UPCOMING],
            key=due_order,
        ),
    )
    if args.all:
        print_section("COMPLETED", groups["completed"])
        print_section("SKIPPED", skipped)
        print_section("ARCHIVED", archived_tasks(tasks))
    else:
        archived = len(archived_tasks(tasks))
        done = len(groups["completed"]) + len(skipped)
        if done or archived:
            print(f"({done} completed/skipped, {archived} archived; use --all to show)")

    return 0


# =============================================================================
# Catalog command
# =============================================================================


def cmd_catalog(args, today: date):
    """List the baseline maintenance catalog."""
    record = load_record(args.vehicle_file)
    catalog = catalog_for(record)

    print(f"Vehicle: {record.vehicle.name}")
    if not record.catalog:
        print("No catalog in file, showing generic catalog")
    print(f"Catalog entries: {len(catalog)}")
    print()

    unit = record.policy.distance_unit
    rows = []
    for entry in sorted(catalog, key=lambda e: (str(e.category), str(e.item))):
        problems = entry.problems()
        rows.append(
            [
                entry.item,
                entry.category,
                "-" if problems else entry.recurrence_interval(unit) or "-",
                entry.urgency or "-",
                "; ".join(problems) if problems else "",
            ]
        )
    headers = ["Item", "Category", "Interval", "Urgency", "Problems"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Plan and forecast commands
# =============================================================================


def _merge_and_save(args, record: VehicleRecord, derived: List[MaintenanceTask]):
    merged = merge_schedule(record.tasks, derived)
    added = merged[len(record.tasks):]

    if not added:
        print("Schedule already up to date.")
        return 0

    print(f"Adding {len(added)} task(s) to {args.vehicle_file}:")
    print(tabulate(make_task_table(added), headers=TASK_HEADERS, tablefmt="simple"))
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_tasks(args.vehicle_file, merged)
    print("Schedule saved.")
    return 0


def cmd_plan(args, today: date):
    """Add next-occurrence tasks derived from the catalog."""
    record = load_record(args.vehicle_file)
    derived = derive_baseline_tasks(record.vehicle, catalog_for(record), today, record.policy)
    return _merge_and_save(args, record, derived)


def cmd_forecast(args, today: date):
    """Add forecast placeholders up to the horizon."""
    record = load_record(args.vehicle_file)
    forecast = forecast_or_fallback(
        None,
        record.vehicle,
        record.completed_tasks,
        catalog_for(record),
        today,
        record.policy,
    )
    print(
        f"Forecast horizon: {record.policy.horizon:,.0f} {record.policy.distance_unit} "
        f"beyond {record.vehicle.current_mileage:,.0f}"
    )
    return _merge_and_save(args, record, forecast)


# =============================================================================
# Status change commands
# =============================================================================


def _apply_and_save(args, record: VehicleRecord, task: MaintenanceTask, action, today):
    old_status = task.status
    apply_action(task, action, today)
    archived = smart_match_and_archive(record.tasks, task, record.policy)

    print(f"Task: {task.title} ({short_id(task.id)})")
    print(f"Status: {old_status.value} -> {task.status.value}")
    if task.completed_date:
        print(f"Completed: {task.completed_date}")
    if archived:
        print(f"Archived {len(archived)} forecast placeholder(s):")
        for placeholder in archived:
            print(
                f"  {short_id(placeholder.id)} {placeholder.title} "
                f"@ {format_distance(placeholder.due_mileage)}"
            )
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_tasks(args.vehicle_file, record.tasks)
    print("Schedule saved.")
    return 0


def cmd_complete(args, today: date):
    """Mark a task completed and archive matching placeholders."""
    record = load_record(args.vehicle_file)
    task = find_task_or_report(record, args.task_id)
    if task is None:
        return 1
    return _apply_and_save(args, record, task, SetStatus(TaskStatus.COMPLETED), today)


def cmd_toggle(args, today: date):
    """Flip a task between completed and its active status."""
    record = load_record(args.vehicle_file)
    task = find_task_or_report(record, args.task_id)
    if task is None:
        return 1
    return _apply_and_save(args, record, task, Toggle(), today)


def cmd_set_status(args, today: date):
    """Set a task's status explicitly."""
    try:
        status = TaskStatus.parse(args.status)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    record = load_record(args.vehicle_file)
    task = find_task_or_report(record, args.task_id)
    if task is None:
        return 1
    return _apply_and_save(args, record, task, SetStatus(status), today)


# =============================================================================
# Reminders command
# =============================================================================


def cmd_reminders(args, today: date):
    """Show tasks that are overdue or coming up within the reminder window."""
    record = load_record(args.vehicle_file)
    tasks = classify_schedule(record.tasks, today)
    reminders = due_reminders(tasks, record.vehicle.current_mileage, record.policy)

    print_header(record, today)
    unit = record.policy.distance_unit
    print(f"Reminder window: {record.policy.reminder_window:,.0f} {unit}")
    print()

    if not reminders:
        print("Nothing due.")
        return 0

    headers = ["Kind", "Id", "Task", "Due (dist)", "Due (date)", "Remaining"]
    print(tabulate(make_reminder_table(reminders, unit), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Update Mileage command
# =============================================================================


def cmd_update_mileage(args, today: date):
    """Update current vehicle mileage."""
    record = load_record(args.vehicle_file)
    old_mileage = record.vehicle.current_mileage

    if args.mileage < 0:
        print("Error: mileage cannot be negative")
        return 1

    print(f"Vehicle: {record.vehicle.name}")
    print(f"Current mileage: {old_mileage:,.0f}")
    print(f"New mileage:     {args.mileage:,.0f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_current_mileage(args.vehicle_file, args.mileage)
    print("Mileage updated.")

    return 0


# =============================================================================
# Validate command
# =============================================================================


def cmd_validate(args, today: date):
    """Check a vehicle file against the schema."""
    errors = validate_vehicle_file(args.vehicle_file)
    if errors:
        print(f"FAIL: {args.vehicle_file}")
        for error in errors:
            print(f"  {error}")
        return 1
    print(f"OK: {args.vehicle_file}")
    return 0


# =============================================================================
# Main
# =============================================================================


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance scheduler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/camry.yaml status
  %(prog)s vehicles/camry.yaml status --all --category "Oil Change"
  %(prog)s vehicles/camry.yaml plan --dry-run
  %(prog)s vehicles/camry.yaml forecast
  %(prog)s vehicles/camry.yaml complete 3f2a9c1b
  %(prog)s vehicles/camry.yaml set-status 3f2a9c1b skipped
  %(prog)s vehicles/camry.yaml update-mileage 58000
  %(prog)s --today 2025-06-01 vehicles/camry.yaml reminders
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )
    parser.add_argument(
        "--today",
        type=parse_date,
        help="Treat this date (YYYY-MM-DD) as today",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log engine details",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    status_parser = subparsers.add_parser(
        "status", help="Show overdue, upcoming and forecast tasks"
    )
    status_parser.add_argument(
        "--all",
        action="store_true",
        help="Also show completed, skipped and archived tasks",
    )
    status_parser.add_argument(
        "--category",
        type=str,
        help="Only show tasks in this category (e.g., 'Oil Change')",
    )

    subparsers.add_parser("catalog", help="List the baseline maintenance catalog")

    plan_parser = subparsers.add_parser(
        "plan", help="Add next-occurrence tasks from the catalog"
    )
    forecast_parser = subparsers.add_parser(
        "forecast", help="Add forecast placeholders up to the horizon"
    )

    complete_parser = subparsers.add_parser(
        "complete", help="Mark a task completed and archive matching placeholders"
    )
    complete_parser.add_argument("task_id", type=str, help="Task id or unique prefix")

    toggle_parser = subparsers.add_parser(
        "toggle", help="Flip a task between completed and active"
    )
    toggle_parser.add_argument("task_id", type=str, help="Task id or unique prefix")

    set_status_parser = subparsers.add_parser(
        "set-status", help="Set a task's status explicitly"
    )
    set_status_parser.add_argument("task_id", type=str, help="Task id or unique prefix")
    set_status_parser.add_argument(
        "status",
        type=str,
        help="upcoming, overdue, completed, skipped or in-progress",
    )

    subparsers.add_parser(
        "reminders", help="Show tasks that are overdue or coming up soon"
    )

    update_mileage_parser = subparsers.add_parser(
        "update-mileage", help="Update current vehicle mileage"
    )
    update_mileage_parser.add_argument(
        "mileage",
        type=int,
        help="Current mileage",
    )

    for sub in (
        plan_parser,
        forecast_parser,
        complete_parser,
        toggle_parser,
        set_status_parser,
        update_mileage_parser,
    ):
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would change without saving",
        )

    subparsers.add_parser("validate", help="Check the file against the schema")

    return parser


COMMANDS = {
    "status": cmd_status,
    "catalog": cmd_catalog,
    "plan": cmd_plan,
    "forecast": cmd_forecast,
    "complete": cmd_complete,
    "toggle": cmd_toggle,
    "set-status": cmd_set_status,
    "reminders": cmd_reminders,
    "update-mileage": cmd_update_mileage,
    "validate": cmd_validate,
}


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate vehicle file exists
    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    today = args.today or date.today()
    return COMMANDS[args.command](args, today)


if __name__ == "__main__":
    sys.exit(main() or 0)
