"""Baseline catalog lookup, category normalisation and the generic catalog."""

import logging
import re
from typing import Callable, List, MutableMapping, Optional, Sequence

from .baseline import BaselineTask, require_catalog
from .vehicle import Vehicle, require_vehicle

logger = logging.getLogger(__name__)

# Closed set of categories a task may carry
CANONICAL_CATEGORIES = (
    "Oil Change",
    "Tire Rotation",
    "Brake Service",
    "Fluid Check",
    "Battery Service",
    "Air Filter",
    "Wiper Blades",
    "Inspection",
    "Engine",
    "Engine/Air Intake",
    "Engine/Ignition",
    "Engine/Inspection",
    "Brakes",
    "Brakes/Fluids",
    "Tires",
    "Tires/Suspension",
    "Tires/Wheels",
    "Wheels/Tires",
    "Wheels & Tires",
    "Transmission",
    "Transmission/Fluids",
    "Transmission/Inspection",
    "Drivetrain",
    "Drivetrain/Inspection",
    "Suspension/Steering",
    "Suspension/Steering/Inspection",
    "Cooling System",
    "Cooling",
    "HVAC",
    "Electrical",
    "Electrical/Inspection",
    "Fuel System",
    "Exhaust",
    "Chassis",
    "Chassis/Suspension",
    "Chassis/Tires",
    "Exterior",
    "Filters",
    "Fluids",
    "Fluids/Inspection",
    "Safety",
    "General Inspection",
    "General",
    "Other",
)

_BY_FOLDED = {c.casefold(): c for c in CANONICAL_CATEGORIES}

CatalogProvider = Callable[[Vehicle], Sequence[BaselineTask]]


def map_category(name: Optional[str]) -> str:
    """Normalise a free-form catalog category onto the canonical set."""
    if not name:
        return "Other"
    folded = re.sub(r"\s+", " ", name.strip()).casefold()
    return _BY_FOLDED.get(folded, "Other")


def catalog_key(make: str, model: str, year: int) -> str:
    """Lookup key for a make/model/year catalog, e.g. 'toyota_camry_2020'."""
    return re.sub(r"\s+", "_", f"{make}_{model}_{year}".lower())


def generic_catalog() -> List[BaselineTask]:
    """Catalog used when no manufacturer catalog is available."""
    return [
        BaselineTask("Engine Oil & Filter", "Oil Change", 10000, 6, urgency="High"),
        BaselineTask("Tire Rotation", "Tire Rotation", 10000, 6, urgency="Medium"),
        BaselineTask("Air Filter Replacement", "Air Filter", 20000, 12, urgency="Medium"),
    ]


def is_exhausted(catalog: Sequence[BaselineTask], current_mileage: float) -> bool:
    """
    True when the vehicle has driven past every distance interval in the catalog.

    A catalog like that was written for a newer vehicle and is worth refreshing.
    """
    distances = [e.distance for e in catalog if isinstance(e, BaselineTask) and e.distance]
    return bool(distances) and current_mileage > max(distances)


def fetch_catalog(
    provider: Optional[CatalogProvider], vehicle: Vehicle
) -> Optional[List[BaselineTask]]:
    """Ask the catalog provider for entries; None when it fails or has nothing."""
    if provider is None:
        return None
    try:
        entries = provider(vehicle)
    except Exception:
        logger.warning("Catalog provider failed for %s", vehicle.name, exc_info=True)
        return None
    if not isinstance(entries, (list, tuple)) or not entries:
        logger.warning("Catalog provider returned no entries for %s", vehicle.name)
        return None
    return list(entries)


def resolve_catalog(
    vehicle: Vehicle,
    catalogs: MutableMapping[str, Sequence[BaselineTask]],
    provider: Optional[CatalogProvider] = None,
) -> List[BaselineTask]:
    """
    Pick the baseline catalog for a vehicle.

    - A cached catalog is used as-is unless the vehicle has outgrown it
    - Otherwise the provider is asked and its answer cached under catalog_key
    - If the provider fails, the cached catalog (if any) is still used
    - With nothing else available, the generic catalog is returned
    """
    require_vehicle(vehicle)
    key = catalog_key(vehicle.make, vehicle.model, vehicle.year)
    cached = catalogs.get(key)
    if cached is not None:
        require_catalog(cached)
        if cached and not is_exhausted(cached, vehicle.current_mileage):
            return list(cached)
        logger.info("Cached catalog for %s is insufficient, refreshing", key)

    fetched = fetch_catalog(provider, vehicle)
    if fetched is not None:
        catalogs[key] = fetched
        return fetched
    if cached:
        return list(cached)
    logger.info("No catalog for %s, using generic catalog", key)
    return generic_catalog()
