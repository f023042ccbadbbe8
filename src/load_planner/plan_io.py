from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from .models import Placement, PlanningResult
from .vehicle import Vehicle


def sorted_placements(vehicle: Vehicle) -> List[Placement]:
    """Placements in report order: bottom to top, then front to back."""
    return sorted(vehicle.placements, key=lambda p: (p.z, p.y, p.x))


def placement_to_payload(placement: Placement) -> Dict[str, Any]:
    return {
        "loadId": placement.load_id,
        "L": placement.length,
        "W": placement.width,
        "H": placement.height,
        "kg": placement.weight,
        "x": placement.x,
        "y": placement.y,
        "z": placement.z,
    }


def vehicle_to_payload(vehicle: Vehicle) -> Dict[str, Any]:
    return {
        "label": vehicle.label,
        "typeName": vehicle.type_name,
        "iL": vehicle.length,
        "iW": vehicle.width,
        "iH": vehicle.height,
        "maxKg": vehicle.max_weight,
        "totalKg": vehicle.total_weight,
        "placements": [placement_to_payload(p) for p in vehicle.placements],
    }


def plan_to_payload(result: PlanningResult) -> Dict[str, Any]:
    return {
        "vehicles": [vehicle_to_payload(vehicle) for vehicle in result.vehicles],
        "unplaced": result.unplaced_load_ids(),
    }


def save_plan(path: str | Path, result: PlanningResult) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(plan_to_payload(result), f, ensure_ascii=False, indent=2)


__all__ = [
    "placement_to_payload",
    "plan_to_payload",
    "save_plan",
    "sorted_placements",
    "vehicle_to_payload",
]
