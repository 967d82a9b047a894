"""
Forecast pipeline with a local fallback.

Step one asks the external forecast service; any error, empty or invalid
answer yields None. Step two, only reached on None, synthesizes the
schedule locally from the baseline catalog with the same interval math.
"""

import logging
from datetime import date
from typing import Any, Callable, List, Optional, Sequence

from .baseline import BaselineTask, require_catalog
from .catalog import generic_catalog
from .forecast import generate_forecast
from .loader import task_from_dict
from .policy import DEFAULT_POLICY, Policy
from .task import MaintenanceTask
from .validate import validate_tasks
from .vehicle import Vehicle, require_vehicle

logger = logging.getLogger(__name__)

ForecastService = Callable[
    [Vehicle, Sequence[MaintenanceTask], Sequence[BaselineTask]], Any
]


def _to_tasks(response: Any) -> Optional[List[MaintenanceTask]]:
    """Convert a service answer into tasks, or None when it is unusable."""
    if not isinstance(response, (list, tuple)) or not response:
        logger.warning("Forecast service returned no schedule")
        return None
    if all(isinstance(item, MaintenanceTask) for item in response):
        return list(response)
    errors = validate_tasks(list(response))
    if errors:
        logger.warning("Forecast service returned an invalid schedule: %s", errors[0])
        return None
    return [task_from_dict(item) for item in response]


def fetch_forecast(
    service: Optional[ForecastService],
    vehicle: Vehicle,
    completed: Sequence[MaintenanceTask],
    catalog: Sequence[BaselineTask],
) -> Optional[List[MaintenanceTask]]:
    """Ask the forecast service for a schedule; None on any failure."""
    if service is None:
        return None
    try:
        response = service(vehicle, completed, catalog)
        return _to_tasks(response)
    except Exception:
        logger.warning("Forecast service failed for %s", vehicle.name, exc_info=True)
        return None


def synthesize_fallback(
    vehicle: Vehicle,
    catalog: Sequence[BaselineTask],
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> List[MaintenanceTask]:
    """
    Build the forecast locally from the catalog.

    When the catalog yields nothing to forecast, the generic catalog is used
    so the caller always gets a non-empty schedule.
    """
    tasks = generate_forecast(vehicle, catalog, today, policy)
    if not tasks:
        logger.info("Catalog for %s has nothing to forecast, using generic catalog", vehicle.name)
        tasks = generate_forecast(vehicle, generic_catalog(), today, policy)
    return tasks


def forecast_or_fallback(
    service: Optional[ForecastService],
    vehicle: Vehicle,
    completed: Sequence[MaintenanceTask],
    catalog: Sequence[BaselineTask],
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> List[MaintenanceTask]:
    """Forecast from the service when it answers, otherwise synthesize locally."""
    require_vehicle(vehicle)
    require_catalog(catalog)
    tasks = fetch_forecast(service, vehicle, completed, catalog)
    if tasks is None:
        logger.info("Using local forecast for %s", vehicle.name)
        tasks = synthesize_fallback(vehicle, catalog, today, policy)
    return tasks
