from __future__ import annotations

from dataclasses import dataclass

from .models import PlanningResult
from .vehicle import Vehicle


def weight_utilization(vehicle: Vehicle) -> float:
    if vehicle.max_weight <= 0:
        return 0.0
    return vehicle.total_weight / vehicle.max_weight * 100


def volume_utilization(vehicle: Vehicle) -> float:
    return vehicle.volume_utilization()


def floor_utilization(vehicle: Vehicle) -> float:
    """Share of the floor covered by the bottom shelf, in percent."""
    floor = vehicle.length * vehicle.width
    if not vehicle.shelves or floor <= 0:
        return 0.0
    return vehicle.shelves[0].used_area() / floor * 100


@dataclass
class PlanSummary:
    total_vehicles: int
    placed_loads: int
    unplaced_loads: int
    total_weight_used: float
    total_volume_used: float


def summarize(result: PlanningResult) -> PlanSummary:
    return PlanSummary(
        total_vehicles=len(result.vehicles),
        placed_loads=len(result.placements()),
        unplaced_loads=len(result.unplaced),
        total_weight_used=sum(v.total_weight for v in result.vehicles),
        total_volume_used=sum(v.used_volume() for v in result.vehicles),
    )
