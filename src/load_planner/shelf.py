from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .models import Load, Placement, Rotation
from .units import MM

# Weight of the short leftover side in the best-short-side-fit score.
SHORT_SIDE_WEIGHT = 1000
# Preview scoring: short leftover side plus this much per mm from the origin.
DISTANCE_WEIGHT = 0.01
# Both leftovers must exceed this before a centred candidate is offered.
CENTRE_MIN_SLACK = 100


@dataclass(frozen=True)
class FreeRect:
    """Free floor region of a shelf; ``width`` runs along the vehicle length."""

    x: MM
    y: MM
    width: MM
    height: MM

    @property
    def area(self) -> float:
        return self.width * self.height

    def can_hold(self, width: MM, height: MM) -> bool:
        return self.width >= width and self.height >= height

    def contains(self, other: "FreeRect") -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.x + other.width <= self.x + self.width
            and other.y + other.height <= self.y + self.height
        )

    def overlaps(self, x: MM, y: MM, width: MM, height: MM) -> bool:
        return rects_overlap((self.x, self.y, self.width, self.height), (x, y, width, height))


def rects_overlap(
    a: Tuple[float, float, float, float], b: Tuple[float, float, float, float]
) -> bool:
    """True when two (x, y, w, h) rectangles share interior area."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return not (ax >= bx + bw or bx >= ax + aw or ay >= by + bh or by >= ay + ah)


def split_rect(rect: FreeRect, x: MM, y: MM, width: MM, height: MM) -> List[FreeRect]:
    """Cut the placed box out of ``rect`` as left/right/bottom/top slivers."""
    pieces: List[FreeRect] = []
    if x > rect.x:
        pieces.append(FreeRect(rect.x, rect.y, x - rect.x, rect.height))
    if x + width < rect.x + rect.width:
        pieces.append(
            FreeRect(x + width, rect.y, rect.x + rect.width - (x + width), rect.height)
        )
    if y > rect.y:
        pieces.append(FreeRect(rect.x, rect.y, rect.width, y - rect.y))
    if y + height < rect.y + rect.height:
        pieces.append(
            FreeRect(rect.x, y + height, rect.width, rect.y + rect.height - (y + height))
        )
    return pieces


def prune_free_rects(rects: List[FreeRect]) -> List[FreeRect]:
    """Drop empty rectangles and any rectangle contained in another one."""
    kept: List[FreeRect] = []
    for rect in rects:
        if rect.width <= 0 or rect.height <= 0:
            continue
        if any(existing.contains(rect) for existing in kept):
            continue
        kept = [existing for existing in kept if not rect.contains(existing)]
        kept.append(rect)
    return kept


def candidate_positions(rect: FreeRect, width: MM, height: MM) -> List[Tuple[MM, MM]]:
    """Corners of ``rect`` a box of the given size can sit in, plus its centre.

    The bottom-left corner always comes first.
    """
    extra_x = rect.width - width
    extra_y = rect.height - height
    positions = [(rect.x, rect.y)]
    if extra_x > 0:
        positions.append((rect.x + extra_x, rect.y))
    if extra_y > 0:
        positions.append((rect.x, rect.y + extra_y))
    if extra_x > 0 and extra_y > 0:
        positions.append((rect.x + extra_x, rect.y + extra_y))
        if extra_x > CENTRE_MIN_SLACK and extra_y > CENTRE_MIN_SLACK:
            positions.append((rect.x + int(extra_x // 2), rect.y + int(extra_y // 2)))
    return positions


class Shelf:
    """One horizontal height band of a vehicle packed as a 2D floor plan.

    Free space is a list of possibly overlapping free rectangles seeded with
    the whole vehicle floor on first use. Placement uses best short side fit
    at the bottom-left corner of the chosen rectangle.
    """

    def __init__(self, z0: MM, height: MM, over_non_stackable: bool = False) -> None:
        self.z0 = z0
        self.height = height
        # Set when the shelf was opened above a shelf holding a non-stackable load.
        self.over_non_stackable = over_non_stackable
        self.placements: List[Placement] = []
        self.free_rects: Optional[List[FreeRect]] = None
        self.all_stackable = True

    def __repr__(self) -> str:
        return (
            f"Shelf(z0={self.z0}, height={self.height}, "
            f"placements={len(self.placements)})"
        )

    @property
    def is_empty(self) -> bool:
        return not self.placements

    def _current_free_rects(self, vehicle_length: MM, vehicle_width: MM) -> List[FreeRect]:
        if self.free_rects is None:
            return [FreeRect(0, 0, vehicle_length, vehicle_width)]
        return self.free_rects

    def find_position(
        self, length: MM, width: MM, free_rects: List[FreeRect]
    ) -> Optional[Tuple[MM, MM]]:
        best_score = None
        best_pos = None
        for rect in free_rects:
            if not rect.can_hold(length, width):
                continue
            leftover_x = rect.width - length
            leftover_y = rect.height - width
            score = SHORT_SIDE_WEIGHT * min(leftover_x, leftover_y) + max(
                leftover_x, leftover_y
            )
            if best_score is None or score < best_score:
                best_score = score
                best_pos = (rect.x, rect.y)
        return best_pos

    def conflicts(self, x: MM, y: MM, length: MM, width: MM) -> bool:
        return any(
            rects_overlap((x, y, length, width), placement.footprint)
            for placement in self.placements
        )

    def try_place(
        self, load: Load, vehicle_length: MM, vehicle_width: MM, rotation: Rotation
    ) -> Optional[Placement]:
        length, width, height = rotation
        if height > self.height:
            return None

        free_rects = self._current_free_rects(vehicle_length, vehicle_width)
        position = self.find_position(length, width, free_rects)
        if position is None:
            return None
        x, y = position
        if self.conflicts(x, y, length, width):
            return None

        placement = Placement(
            load=load,
            length=length,
            width=width,
            height=height,
            x=x,
            y=y,
            z=self.z0,
            weight=load.weight,
        )
        self.placements.append(placement)
        self.all_stackable = self.all_stackable and load.stackable
        self.free_rects = self._split_free_rects(free_rects, x, y, length, width)
        return placement

    def find_preview_position(
        self, length: MM, width: MM, free_rects: List[FreeRect]
    ) -> Optional[Tuple[MM, MM]]:
        best_score = None
        best_pos = None
        for rect in free_rects:
            if not rect.can_hold(length, width):
                continue
            short_side = min(rect.width - length, rect.height - width)
            for x, y in candidate_positions(rect, length, width):
                if self.conflicts(x, y, length, width):
                    continue
                score = short_side + DISTANCE_WEIGHT * math.hypot(x, y)
                if best_score is None or score < best_score:
                    best_score = score
                    best_pos = (x, y)
        return best_pos

    def preview_placement(
        self, load: Load, vehicle_length: MM, vehicle_width: MM, rotation: Rotation
    ) -> Optional[Placement]:
        """Where ``load`` would go in ``rotation``, without placing it.

        Besides the bottom-left corner, the other corners and the centre of
        each free rectangle are considered. The shelf is left untouched.
        """
        length, width, height = rotation
        if height > self.height:
            return None
        free_rects = self._current_free_rects(vehicle_length, vehicle_width)
        position = self.find_preview_position(length, width, free_rects)
        if position is None:
            return None
        x, y = position
        return Placement(
            load=load,
            length=length,
            width=width,
            height=height,
            x=x,
            y=y,
            z=self.z0,
            weight=load.weight,
        )

    @staticmethod
    def _split_free_rects(
        free_rects: List[FreeRect], x: MM, y: MM, length: MM, width: MM
    ) -> List[FreeRect]:
        updated: List[FreeRect] = []
        for rect in free_rects:
            if rect.overlaps(x, y, length, width):
                updated.extend(split_rect(rect, x, y, length, width))
            else:
                updated.append(rect)
        return prune_free_rects(updated)

    def used_area(self) -> float:
        return sum(p.length * p.width for p in self.placements)

    def load_weight(self) -> float:
        return sum(p.weight for p in self.placements)
