from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .catalog import candidate_types
from .categories import order_loads
from .models import InvalidInputError, Load, Placement, PlanningResult, VehicleTypeSpec, fits_within
from .selector import VehicleTypeSelector
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def vehicle_label(type_name: str, number: int) -> str:
    return f"{type_name} #{number}"


def validate_loads(loads: Sequence[Load]) -> None:
    if not loads:
        raise InvalidInputError("no loads to plan")
    seen = set()
    for load in loads:
        if not all(math.isfinite(d) and d > 0 for d in load.dimensions):
            raise InvalidInputError(
                f"load {load.id}: dimensions must be positive, got {load.dimensions}"
            )
        if not math.isfinite(load.weight) or load.weight <= 0:
            raise InvalidInputError(f"load {load.id}: weight must be positive, got {load.weight}")
        if load.id in seen:
            raise InvalidInputError(f"duplicate load id: {load.id}")
        seen.add(load.id)


def validate_types(types: Sequence[VehicleTypeSpec]) -> None:
    for spec in types:
        values = (spec.length, spec.width, spec.height, spec.max_weight)
        if not all(math.isfinite(v) and v > 0 for v in values):
            raise InvalidInputError(f"vehicle type {spec.name}: dimensions and max weight must be positive")


class Planner:
    """Single pass assignment of ordered loads to vehicle instances."""

    def __init__(self, types: Sequence[VehicleTypeSpec]) -> None:
        self.types = list(types)
        self.selector = VehicleTypeSelector(self.types)
        self.vehicles: List[Vehicle] = []
        self.unplaced: List[Load] = []
        self.counters: Dict[str, int] = {}

    def _new_vehicle(self, spec: VehicleTypeSpec) -> Vehicle:
        self.counters[spec.name] = self.counters.get(spec.name, 0) + 1
        return Vehicle(vehicle_label(spec.name, self.counters[spec.name]), spec)

    def place(self, load: Load) -> Optional[Placement]:
        for spec in self.selector.rank(load):
            for vehicle in self.vehicles:
                if vehicle.type_name != spec.name:
                    continue
                placement = vehicle.try_put(load)
                if placement is not None:
                    return placement

            if not fits_within(load, spec.length, spec.width, spec.height):
                logger.debug("Load %s cannot fit %s in any rotation", load.id, spec.name)
                continue

            vehicle = self._new_vehicle(spec)
            placement = vehicle.try_put(load)
            if placement is not None:
                self.vehicles.append(vehicle)
                return placement
            logger.debug("Load %s rejected by a new %s", load.id, spec.name)
        return None

    def run(self, loads: Iterable[Load]) -> PlanningResult:
        for load in order_loads(loads):
            if self.place(load) is None:
                logger.debug("Load %s left unplaced", load.id)
                self.unplaced.append(load)
        return PlanningResult(vehicles=cleanup_vehicles(self.vehicles), unplaced=self.unplaced)


def cleanup_vehicles(vehicles: Iterable[Vehicle]) -> List[Vehicle]:
    """Drop empty vehicles and renumber the rest per archetype."""
    kept = [vehicle for vehicle in vehicles if not vehicle.is_empty]
    counters: Dict[str, int] = {}
    for vehicle in kept:
        counters[vehicle.type_name] = counters.get(vehicle.type_name, 0) + 1
        vehicle.label = vehicle_label(vehicle.type_name, counters[vehicle.type_name])
    return kept


def plan(
    loads: Sequence[Load],
    catalog: Mapping[str, VehicleTypeSpec],
    trailers: Iterable[str] = (),
    containers: Iterable[str] = (),
) -> PlanningResult:
    """Assign ``loads`` to vehicles of the selected archetypes.

    Loads that fit no selected archetype end up in ``PlanningResult.unplaced``.
    Raises :class:`InvalidInputError` for an empty load list, non-positive
    load data or an empty or unknown vehicle selection.
    """
    loads = list(loads)
    validate_loads(loads)
    types = candidate_types(catalog, trailers, containers)
    validate_types(types)

    result = Planner(types).run(loads)
    logger.info(
        "Planned %d loads: %d vehicles, %d placed, %d unplaced",
        len(loads),
        len(result.vehicles),
        len(result.placements()),
        len(result.unplaced),
    )
    return result
