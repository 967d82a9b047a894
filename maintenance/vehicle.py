"""Vehicle facts used by the scheduling engine."""

from datetime import date
from typing import Optional


class Vehicle:
    """Identification, odometer reading and purchase date of a vehicle."""

    def __init__(
        self,
        make: str,
        model: str,
        year: int,
        current_mileage: int = 0,
        purchase_date: Optional[date] = None,
    ):
        if current_mileage is None:
            current_mileage = 0
        if current_mileage < 0:
            raise ValueError(f"current_mileage must be >= 0, got {current_mileage}")
        self.make = make
        self.model = model
        self.year = year
        self.current_mileage = current_mileage
        self.purchase_date = purchase_date

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.make} {self.model}"

    def reference_date(self, today: date) -> date:
        """Date baseline intervals are counted from: purchase date, else today."""
        return self.purchase_date or today

    def purchased_in_year_of(self, today: date) -> bool:
        """True when there is no purchase date or it falls in today's calendar year."""
        return self.purchase_date is None or self.purchase_date.year == today.year


def require_vehicle(vehicle) -> Vehicle:
    """Fail fast when a caller passes something that is not vehicle facts."""
    if not isinstance(vehicle, Vehicle):
        raise TypeError(f"Expected Vehicle, got {type(vehicle).__name__}")
    return vehicle
