"""Project future occurrences of recurring catalog items."""

import logging
from datetime import date
from typing import List, Sequence

from .baseline import BaselineTask, usable_entries
from .calculations import add_months
from .catalog import map_category
from .policy import DEFAULT_POLICY, Policy
from .status import TaskStatus, importance_for
from .task import MaintenanceTask
from .vehicle import Vehicle, require_vehicle

logger = logging.getLogger(__name__)


def forecast_item(
    baseline: BaselineTask,
    vehicle: Vehicle,
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> List[MaintenanceTask]:
    """
    Placeholders for one catalog item, every interval up to the horizon.

    Occurrence k is due at current mileage + k * distance and, when the item
    has a month interval, on today + k * months.
    """
    distance = baseline.distance
    if distance is None or distance <= 0:
        return []

    limit = vehicle.current_mileage + policy.horizon
    category = map_category(baseline.category)
    recurrence = baseline.recurrence_interval(policy.distance_unit)
    importance = importance_for(baseline.urgency)

    tasks = []
    occurrence = 1
    next_mileage = vehicle.current_mileage + distance
    while next_mileage <= limit:
        due_date = None
        if baseline.months is not None:
            due_date = add_months(today, baseline.months * occurrence)
        tasks.append(
            MaintenanceTask(
                title=baseline.item,
                category=category,
                status=TaskStatus.UPCOMING,
                creation_date=today,
                due_date=due_date,
                due_mileage=next_mileage,
                is_recurring=True,
                recurrence_interval=recurrence,
                is_forecast=True,
                importance=importance,
                urgency=baseline.urgency,
            )
        )
        occurrence += 1
        next_mileage += distance
    return tasks


def generate_forecast(
    vehicle: Vehicle,
    catalog: Sequence[BaselineTask],
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> List[MaintenanceTask]:
    """Forecast placeholders for every recurring catalog item within the horizon."""
    require_vehicle(vehicle)
    forecast = []
    for entry in usable_entries(catalog):
        placeholders = forecast_item(entry, vehicle, today, policy)
        logger.debug("Forecast %d occurrence(s) of %r", len(placeholders), entry.item)
        forecast.extend(placeholders)
    return forecast
