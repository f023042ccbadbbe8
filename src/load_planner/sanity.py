from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional

from .models import Load, PlanningResult, rotations
from .shelf import rects_overlap
from .vehicle import Vehicle


@dataclass(frozen=True)
class SanityPolicy:
    eps: float = 1e-6


DEFAULT_SANITY_POLICY = SanityPolicy()


def vehicle_flags(vehicle: Vehicle, policy: Optional[SanityPolicy] = None) -> set[str]:
    if policy is None:
        policy = DEFAULT_SANITY_POLICY
    flags: set[str] = set()

    if vehicle.used_height > vehicle.height + policy.eps:
        flags.add("height_exceeded")
    if vehicle.total_weight > vehicle.max_weight + policy.eps:
        flags.add("weight_exceeded")
    placed_weight = sum(p.weight for p in vehicle.placements)
    if abs(placed_weight - vehicle.total_weight) > policy.eps:
        flags.add("weight_mismatch")

    for shelf in vehicle.shelves:
        # Checked at shelf creation only. Lowbeds open one shelf per load
        # whatever the loads below are, so they are never flagged here.
        if shelf.over_non_stackable and not vehicle.is_lowbed:
            flags.add("stacked_above_non_stackable")
        placements = shelf.placements
        for i, placement in enumerate(placements):
            if placement.rotation not in rotations(placement.load):
                flags.add("rotation_mismatch")
            x, y, z = placement.x, placement.y, placement.z
            if (
                x < -policy.eps
                or y < -policy.eps
                or x + placement.length > vehicle.length + policy.eps
                or y + placement.width > vehicle.width + policy.eps
                or z + placement.height > vehicle.height + policy.eps
                or placement.height > shelf.height + policy.eps
            ):
                flags.add("out_of_bounds")
            for other in placements[i + 1 :]:
                if rects_overlap(placement.footprint, other.footprint):
                    flags.add("shelf_overlap")
    return flags


def plan_flags(
    result: PlanningResult,
    loads: Optional[Iterable[Load]] = None,
    policy: Optional[SanityPolicy] = None,
) -> set[str]:
    """Collect invariant violations of a plan; empty means the plan is sound.

    When ``loads`` is given, every input load must appear exactly once
    among the placed and unplaced loads.
    """
    flags: set[str] = set()
    for vehicle in result.vehicles:
        flags |= vehicle_flags(vehicle, policy)

    if loads is not None:
        seen = Counter(result.placed_load_ids() + result.unplaced_load_ids())
        expected = Counter(load.id for load in loads)
        if any(count > 1 for count in seen.values()):
            flags.add("load_duplicated")
        if any(seen[load_id] == 0 for load_id in expected):
            flags.add("load_lost")
    return flags


def is_sane(
    result: PlanningResult,
    loads: Optional[Iterable[Load]] = None,
    policy: Optional[SanityPolicy] = None,
) -> bool:
    return not plan_flags(result, loads, policy)
