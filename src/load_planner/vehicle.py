from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .models import Load, Placement, VehicleTypeSpec, fits_within, preferred_rotations
from .shelf import Shelf
from .units import KG, MM

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CGBounds:
    """Allowed centre of gravity window in percent of length and width."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def contains(self, x_percent: float, y_percent: float) -> bool:
        return (
            self.x_min <= x_percent <= self.x_max
            and self.y_min <= y_percent <= self.y_max
        )


STANDARD_CG_BOUNDS = CGBounds(30, 70, 25, 75)
LOWBED_CG_BOUNDS = CGBounds(40, 60, 35, 65)
RELAXED_CG_BOUNDS = CGBounds(15, 85, 15, 85)

# Below either threshold the relaxed window applies.
RELAXED_CG_MAX_PLACEMENTS = 8
RELAXED_CG_MAX_WEIGHT = 1500.0


@dataclass(frozen=True)
class WeightPoint:
    x: float
    y: float
    z: float
    weight: KG


@dataclass(frozen=True)
class CGPreview:
    valid: bool
    x: float
    y: float
    z: float


def _name_tokens(name: str) -> set:
    return {token.lower() for token in name.split()}


def names_share_token(first: str, second: str) -> bool:
    return bool(_name_tokens(first) & _name_tokens(second))


class Vehicle:
    """A single vehicle instance holding a bottom-to-top stack of shelves."""

    def __init__(self, label: str, spec: VehicleTypeSpec) -> None:
        self.label = label
        self.spec = spec
        self.shelves: List[Shelf] = []
        self.total_weight: KG = 0.0
        self.center_of_gravity = (0.0, 0.0, 0.0)
        self.weight_distribution: List[WeightPoint] = []

    def __repr__(self) -> str:
        return (
            f"Vehicle({self.label!r}, shelves={len(self.shelves)}, "
            f"total_weight={self.total_weight})"
        )

    @property
    def type_name(self) -> str:
        return self.spec.name

    @property
    def length(self) -> MM:
        return self.spec.length

    @property
    def width(self) -> MM:
        return self.spec.width

    @property
    def height(self) -> MM:
        return self.spec.height

    @property
    def max_weight(self) -> KG:
        return self.spec.max_weight

    @property
    def is_lowbed(self) -> bool:
        return self.spec.is_lowbed

    @property
    def placements(self) -> List[Placement]:
        return [p for shelf in self.shelves for p in shelf.placements]

    @property
    def used_height(self) -> MM:
        return sum(shelf.height for shelf in self.shelves)

    @property
    def is_empty(self) -> bool:
        return all(shelf.is_empty for shelf in self.shelves)

    def ensure_shelf(self, height: MM, is_lowbed: bool = False) -> Optional[Shelf]:
        """Return a shelf able to take ``height``, creating one when allowed.

        Lowbeds get a fresh shelf for every request. Other vehicles reuse the
        first shelf that is tall enough and only open a new shelf while every
        existing shelf holds stackable loads only.
        """
        remaining = self.height - self.used_height
        if is_lowbed:
            if height > remaining:
                return None
            return self._add_shelf(height)

        for shelf in self.shelves:
            if height <= shelf.height:
                return shelf
        if height > remaining:
            return None
        if any(not shelf.all_stackable for shelf in self.shelves):
            return None
        return self._add_shelf(height)

    def _add_shelf(self, height: MM) -> Shelf:
        shelf = Shelf(
            self.used_height,
            height,
            over_non_stackable=any(not s.all_stackable for s in self.shelves),
        )
        self.shelves.append(shelf)
        return shelf

    def can_place_on_lowbed(self, load: Load) -> bool:
        existing = [p.load.name for p in self.placements]
        if not existing:
            return True
        return any(
            load.name == name or names_share_token(load.name, name) for name in existing
        )

    def try_put(self, load: Load) -> Optional[Placement]:
        if self.total_weight + load.weight > self.max_weight:
            return None
        is_lowbed = self.is_lowbed
        if is_lowbed and not self.can_place_on_lowbed(load):
            return None

        for rotation in preferred_rotations(load):
            length, width, height = rotation
            if length > self.length or width > self.width or height > self.height:
                continue

            if not is_lowbed:
                for shelf in self.shelves:
                    placement = shelf.try_place(load, self.length, self.width, rotation)
                    if placement is not None:
                        self._commit(placement)
                        return placement

            shelf_count = len(self.shelves)
            shelf = self.ensure_shelf(height, is_lowbed)
            if shelf is None:
                continue
            placement = shelf.try_place(load, self.length, self.width, rotation)
            if placement is not None:
                self._commit(placement)
                return placement
            if len(self.shelves) > shelf_count:
                self.shelves.pop()
        return None

    def _commit(self, placement: Placement) -> None:
        self.total_weight += placement.weight
        self._update_center_of_gravity(placement)
        logger.debug(
            "%s: placed %s at (%s, %s, %s) as %sx%sx%s",
            self.label,
            placement.load_id,
            placement.x,
            placement.y,
            placement.z,
            placement.length,
            placement.width,
            placement.height,
        )

    def _update_center_of_gravity(self, placement: Placement) -> None:
        if self.total_weight <= 0:
            return
        cx, cy, cz = placement.centre
        previous = self.total_weight - placement.weight
        if previous > 0:
            gx, gy, gz = self.center_of_gravity
            total = self.total_weight
            self.center_of_gravity = (
                (gx * previous + cx * placement.weight) / total,
                (gy * previous + cy * placement.weight) / total,
                (gz * previous + cz * placement.weight) / total,
            )
        else:
            self.center_of_gravity = (cx, cy, cz)
        self.weight_distribution.append(WeightPoint(cx, cy, cz, placement.weight))

    # Diagnostics below are not consulted by try_put.

    def cg_percent(self, x: float, y: float) -> Tuple[float, float]:
        return (x / self.length * 100, y / self.width * 100)

    def cg_bounds(self) -> CGBounds:
        return LOWBED_CG_BOUNDS if self.is_lowbed else STANDARD_CG_BOUNDS

    def is_center_of_gravity_valid(self) -> bool:
        gx, gy, _ = self.center_of_gravity
        return self.cg_bounds().contains(*self.cg_percent(gx, gy))

    def calculate_placement_score(self, placement: Placement) -> float:
        """Score 0-100 for how central the CG would stay after ``placement``."""
        total = self.total_weight + placement.weight
        if total <= 0:
            return 100.0
        cx, cy, _ = placement.centre
        gx, gy, _ = self.center_of_gravity
        new_x = (gx * self.total_weight + cx * placement.weight) / total
        new_y = (gy * self.total_weight + cy * placement.weight) / total
        ideal_x = self.length / 2
        ideal_y = self.width / 2
        deviation = abs(new_x - ideal_x) / ideal_x + abs(new_y - ideal_y) / ideal_y
        return max(0.0, min(100.0, 100 - deviation * 50))

    def uses_relaxed_cg(self) -> bool:
        return (
            len(self.placements) < RELAXED_CG_MAX_PLACEMENTS
            or self.total_weight < RELAXED_CG_MAX_WEIGHT
        )

    def relaxed_cg_bounds(self) -> CGBounds:
        if self.uses_relaxed_cg():
            return RELAXED_CG_BOUNDS
        return self.cg_bounds()

    def preview_center_of_gravity(self, placement: Placement) -> CGPreview:
        total = self.total_weight + placement.weight
        if total <= 0:
            return CGPreview(True, 0.0, 0.0, 0.0)
        cx, cy, cz = placement.centre
        gx, gy, gz = self.center_of_gravity
        x = (gx * self.total_weight + cx * placement.weight) / total
        y = (gy * self.total_weight + cy * placement.weight) / total
        z = (gz * self.total_weight + cz * placement.weight) / total
        valid = self.relaxed_cg_bounds().contains(*self.cg_percent(x, y))
        return CGPreview(valid, x, y, z)

    def used_volume(self) -> float:
        return sum(p.length * p.width * p.height for p in self.placements)

    def volume_utilization(self) -> float:
        total = self.spec.volume
        return self.used_volume() / total * 100 if total > 0 else 0.0

    def can_potentially_fit(self, load: Load) -> bool:
        if self.total_weight + load.weight > self.max_weight:
            return False
        return fits_within(load, self.length, self.width, self.height)

    def fit_score(self, load: Load) -> float:
        """Lower is better: unused volume after ``load`` plus overload penalty."""
        total = self.spec.volume
        estimated = (self.used_volume() + load.volume) / total * 100 if total > 0 else 0.0
        weight_pct = (
            (self.total_weight + load.weight) / self.max_weight * 100
            if self.max_weight > 0
            else 0.0
        )
        penalty = 10000.0 if weight_pct > 100 else 0.0
        return (100 - estimated) + penalty

