from __future__ import annotations

from .models import PlanningResult


def vehicle_signature(vehicle) -> tuple:
    placements = tuple(
        (p.load_id, p.length, p.width, p.height, p.x, p.y, p.z, p.weight)
        for p in vehicle.placements
    )
    return (vehicle.label, vehicle.type_name, vehicle.total_weight, placements)


def plan_signature(result: PlanningResult) -> tuple:
    """Hashable snapshot of a plan; equal plans have equal signatures."""
    return (
        tuple(vehicle_signature(vehicle) for vehicle in result.vehicles),
        tuple(result.unplaced_load_ids()),
    )
