"""Assign weighted boxes to trailers and containers, shelf by shelf."""

from .catalog import DEFAULT_CATALOG, VehicleCatalog, candidate_types
from .engine import Planner, plan
from .models import (
    ArchetypeKind,
    InvalidInputError,
    Load,
    Placement,
    PlanningResult,
    VehicleTypeSpec,
    can_support,
    preferred_rotations,
    rotations,
)
from .sanity import is_sane, plan_flags
from .selector import VehicleTypeSelector, rank_vehicle_types, score_vehicle_type
from .shelf import FreeRect, Shelf
from .vehicle import Vehicle

__all__ = [
    "ArchetypeKind",
    "DEFAULT_CATALOG",
    "FreeRect",
    "InvalidInputError",
    "Load",
    "Placement",
    "Planner",
    "PlanningResult",
    "Shelf",
    "Vehicle",
    "VehicleCatalog",
    "VehicleTypeSelector",
    "VehicleTypeSpec",
    "can_support",
    "candidate_types",
    "is_sane",
    "plan",
    "plan_flags",
    "preferred_rotations",
    "rank_vehicle_types",
    "rotations",
    "score_vehicle_type",
]
