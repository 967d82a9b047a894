"""VehicleRecord - a vehicle's facts, catalog, schedule and policy together."""

from typing import List, Optional

from .baseline import BaselineTask
from .policy import DEFAULT_POLICY, Policy
from .status import TaskStatus
from .task import MaintenanceTask
from .vehicle import Vehicle


class VehicleRecord:
    """Everything stored for one vehicle."""

    def __init__(
        self,
        vehicle: Vehicle,
        catalog: Optional[List[BaselineTask]] = None,
        tasks: Optional[List[MaintenanceTask]] = None,
        policy: Optional[Policy] = None,
    ):
        self.vehicle = vehicle
        self.catalog = catalog or []
        self.tasks = tasks or []
        self.policy = policy or DEFAULT_POLICY
        seen = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"Duplicate task id '{task.id}'")
            seen.add(task.id)

    @property
    def completed_tasks(self) -> List[MaintenanceTask]:
        return [t for t in self.tasks if t.status == TaskStatus.COMPLETED]

    def get_task(self, task_id: str) -> Optional[MaintenanceTask]:
        """Find a task by id, or by a unique id prefix."""
        exact = [t for t in self.tasks if t.id == task_id]
        if exact:
            return exact[0]
        prefixed = [t for t in self.tasks if t.id.startswith(task_id)]
        if len(prefixed) == 1:
            return prefixed[0]
        return None
