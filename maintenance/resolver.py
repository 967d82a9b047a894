"""Turn baseline catalog intervals into concrete due dates and mileages."""

from datetime import date
from typing import List, Optional, Sequence, Tuple

from .baseline import BaselineTask, usable_entries
from .calculations import add_months, earlier, is_past, months_for_distance
from .catalog import map_category
from .classifier import initial_status
from .policy import DEFAULT_POLICY, Policy
from .status import importance_for
from .task import MaintenanceTask
from .vehicle import Vehicle, require_vehicle


def resolve_interval(
    baseline: BaselineTask,
    vehicle: Vehicle,
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> Tuple[Optional[date], Optional[float]]:
    """
    Calculate the first due date and due mileage for a catalog entry.

    - Distance not yet reached: due at the interval distance itself, dated by
      converting the remaining distance to months at the assumed usage rate;
      with a month interval too, whichever date comes first
    - Otherwise, with a month interval: due interval months after the
      reference date, and (with a distance interval) one interval from now
    - Neither interval: no due information

    A due date already in the past is pushed to one month from today when the
    vehicle has no purchase date or was purchased this calendar year.
    """
    reference = vehicle.reference_date(today)
    current = vehicle.current_mileage
    distance = baseline.distance
    months = baseline.months

    due_date: Optional[date] = None
    due_mileage: Optional[float] = None

    if distance is not None and current < distance:
        due_mileage = distance
        months_ahead = months_for_distance(distance - current, policy.annual_distance)
        due_date = add_months(reference, months_ahead)
        if months is not None:
            due_date = earlier(due_date, add_months(reference, months))
    elif months is not None:
        due_date = add_months(reference, months)
        if distance is not None:
            due_mileage = current + distance

    if is_past(due_date, today) and vehicle.purchased_in_year_of(today):
        due_date = add_months(today, policy.overdue_grace_months)

    return due_date, due_mileage


def derive_task(
    baseline: BaselineTask,
    vehicle: Vehicle,
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> MaintenanceTask:
    """Build the next-occurrence task for one catalog entry."""
    due_date, due_mileage = resolve_interval(baseline, vehicle, today, policy)
    return MaintenanceTask(
        title=baseline.item,
        category=map_category(baseline.category),
        status=initial_status(due_date, due_mileage, today),
        creation_date=today,
        due_date=due_date,
        due_mileage=due_mileage,
        is_recurring=baseline.is_recurring,
        recurrence_interval=baseline.recurrence_interval(policy.distance_unit),
        importance=importance_for(baseline.urgency),
        urgency=baseline.urgency,
        notes=baseline.notes,
    )


def derive_baseline_tasks(
    vehicle: Vehicle,
    catalog: Sequence[BaselineTask],
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> List[MaintenanceTask]:
    """Next-occurrence tasks for every usable entry of a catalog, in catalog order."""
    require_vehicle(vehicle)
    return [derive_task(entry, vehicle, today, policy) for entry in usable_entries(catalog)]
