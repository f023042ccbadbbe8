from __future__ import annotations

from typing import List, Sequence, Tuple

from .models import Placement, can_support
from .vehicle import Vehicle

Footprint = Tuple[float, float, float, float]


def rect_area(rect: Footprint) -> float:
    _, _, w, l = rect
    return max(0.0, w) * max(0.0, l)


def rect_intersection_area(a: Footprint, b: Footprint) -> float:
    ax, ay, aw, al = a
    bx, by, bw, bl = b
    overlap_w = max(0.0, min(ax + aw, bx + bw) - max(ax, bx))
    overlap_l = max(0.0, min(ay + al, by + bl) - max(ay, by))
    return overlap_w * overlap_l


def support_fraction_per_box(
    above: Sequence[Placement], below: Sequence[Placement]
) -> List[float]:
    support_values: List[float] = []
    for box in above:
        area = rect_area(box.footprint)
        if area <= 0:
            support_values.append(0.0)
            continue
        supported_area = sum(
            rect_intersection_area(box.footprint, other.footprint) for other in below
        )
        support_values.append(min(1.0, supported_area / area))
    return support_values


def min_support_fraction(above: Sequence[Placement], below: Sequence[Placement]) -> float:
    support_values = support_fraction_per_box(above, below)
    return min(support_values) if support_values else 0.0


def weight_on_top(vehicle: Vehicle, placement: Placement) -> float:
    """Weight of every load above ``placement`` whose footprint overlaps it.

    Each load above is counted in full; no load spreading is modelled.
    """
    top = placement.z + placement.height
    return sum(
        other.weight
        for other in vehicle.placements
        if other.z >= top
        and rect_intersection_area(placement.footprint, other.footprint) > 0
    )


def overloaded_placements(vehicle: Vehicle) -> List[Placement]:
    """Placements carrying weight they could not support."""
    overloaded = []
    for placement in vehicle.placements:
        load_above = weight_on_top(vehicle, placement)
        if load_above > 0 and not can_support(placement.load, load_above):
            overloaded.append(placement)
    return overloaded
