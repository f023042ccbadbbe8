from __future__ import annotations

import enum
from typing import Dict, Iterable, List, NamedTuple

from .models import Load

# Volume thresholds in mm^3 (0.05, 0.2 and 1.0 m^3).
SIZE_THRESHOLDS = (50_000_000, 200_000_000, 1_000_000_000)
WEIGHT_THRESHOLDS = (50.0, 200.0)
DENSITY_THRESHOLDS = (200.0, 800.0)
LONG_RATIO = 4
RECT_RATIO = 2


class SizeClass(enum.Enum):
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


class WeightClass(enum.Enum):
    LIGHT = "Light"
    MEDIUM = "Medium"
    HEAVY = "Heavy"


class DensityClass(enum.Enum):
    LOW = "Low"
    MED = "Med"
    HIGH = "High"


class ShapeClass(enum.Enum):
    LONG = "Long"
    RECT = "Rect"
    SQUARE = "Square"


class CategoryKey(NamedTuple):
    size: SizeClass
    weight: WeightClass
    density: DensityClass
    shape: ShapeClass
    stackable: bool
    priority: int


def aspect_ratio(load: Load) -> float:
    dims = load.dimensions
    return max(dims) / max(min(dims), 1)


def size_class(load: Load) -> SizeClass:
    small, medium, large = SIZE_THRESHOLDS
    volume = load.volume
    if volume < small:
        return SizeClass.S
    if volume < medium:
        return SizeClass.M
    if volume < large:
        return SizeClass.L
    return SizeClass.XL


def weight_class(load: Load) -> WeightClass:
    light, medium = WEIGHT_THRESHOLDS
    if load.weight < light:
        return WeightClass.LIGHT
    if load.weight < medium:
        return WeightClass.MEDIUM
    return WeightClass.HEAVY


def density_class(load: Load) -> DensityClass:
    low, medium = DENSITY_THRESHOLDS
    if load.density < low:
        return DensityClass.LOW
    if load.density < medium:
        return DensityClass.MED
    return DensityClass.HIGH


def shape_class(load: Load) -> ShapeClass:
    ratio = aspect_ratio(load)
    if ratio > LONG_RATIO:
        return ShapeClass.LONG
    if ratio > RECT_RATIO:
        return ShapeClass.RECT
    return ShapeClass.SQUARE


def category_key(load: Load) -> CategoryKey:
    return CategoryKey(
        size=size_class(load),
        weight=weight_class(load),
        density=density_class(load),
        shape=shape_class(load),
        stackable=load.stackable,
        priority=load.priority,
    )


def group_loads(loads: Iterable[Load]) -> Dict[CategoryKey, List[Load]]:
    """Bucket loads by category, keeping first-seen group order."""
    groups: Dict[CategoryKey, List[Load]] = {}
    for load in loads:
        groups.setdefault(category_key(load), []).append(load)
    return groups


def _group_sort_key(item) -> tuple:
    key, members = item
    avg_weight = sum(load.weight for load in members) / len(members)
    avg_volume = sum(load.volume for load in members) / len(members)
    return (key.priority, key.stackable, -avg_weight, -avg_volume)


def order_loads(loads: Iterable[Load]) -> List[Load]:
    """Return loads in placement order.

    Groups go by priority, then non-stackable first, then heavier and
    larger groups first. Inside a group the largest load comes first and
    members stay adjacent.
    """
    groups = sorted(group_loads(loads).items(), key=_group_sort_key)
    ordered: List[Load] = []
    for _, members in groups:
        ordered.extend(sorted(members, key=lambda load: -load.volume))
    return ordered
