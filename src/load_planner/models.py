from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Tuple

from .units import KG, MM

if TYPE_CHECKING:
    from .vehicle import Vehicle

Rotation = Tuple[int, int, int]

# Rough structural capacity of a stackable load's top face.
SUPPORT_KG_PER_M2 = 1000.0


class InvalidInputError(ValueError):
    """Raised before planning when loads or the vehicle selection are unusable."""


class ArchetypeKind(enum.Enum):
    ENCLOSED_TRAILER = "enclosed_trailer"
    FLATBED = "flatbed"
    LOWBED = "lowbed"
    CONTAINER = "container"


TRAILER_KINDS = (
    ArchetypeKind.ENCLOSED_TRAILER,
    ArchetypeKind.FLATBED,
    ArchetypeKind.LOWBED,
)


@dataclass(frozen=True)
class Load:
    """A rectangular weighted item to be transported.

    Dimensions are millimetres along the load's original orientation,
    ``weight`` is kilograms. ``priority`` runs from 1 (high) to 5 (low).
    """

    id: str
    name: str
    length: int
    width: int
    height: int
    weight: KG
    stackable: bool = True
    fragile: bool = False
    priority: int = 3

    @property
    def dimensions(self) -> Rotation:
        return (self.length, self.width, self.height)

    @property
    def volume(self) -> int:
        return self.length * self.width * self.height

    @property
    def density(self) -> float:
        """Weight per cubic metre, 0 for a degenerate load."""
        volume = self.volume
        if volume <= 0:
            return 0.0
        return self.weight / (volume / 1_000_000_000)

    @property
    def base_area_m2(self) -> float:
        return self.length * self.width / 1_000_000


def rotations(load: Load) -> List[Rotation]:
    """Return every distinct axis permutation of the load's dimensions."""
    length, width, height = load.dimensions
    candidates = [
        (length, width, height),
        (length, height, width),
        (width, length, height),
        (width, height, length),
        (height, length, width),
        (height, width, length),
    ]
    unique: List[Rotation] = []
    for rotation in candidates:
        if rotation not in unique:
            unique.append(rotation)
    return unique


def preferred_rotations(load: Load) -> List[Rotation]:
    """Order rotations by stability: low first, then wide, then original."""
    original = load.dimensions

    def sort_key(rotation: Rotation) -> Tuple[int, int, int]:
        length, width, height = rotation
        return (height, -(length * width), 0 if rotation == original else 1)

    return sorted(rotations(load), key=sort_key)


def fits_within(load: Load, length: MM, width: MM, height: MM) -> bool:
    return any(
        rl <= length and rw <= width and rh <= height
        for rl, rw, rh in rotations(load)
    )


def can_support(load: Load, weight_on_top: KG) -> bool:
    if not load.stackable:
        return False
    return weight_on_top <= load.base_area_m2 * SUPPORT_KG_PER_M2


@dataclass(frozen=True)
class Placement:
    load: Load
    length: int
    width: int
    height: int
    x: MM
    y: MM
    z: MM
    weight: KG

    @property
    def load_id(self) -> str:
        return self.load.id

    @property
    def rotation(self) -> Rotation:
        return (self.length, self.width, self.height)

    @property
    def footprint(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.length, self.width)

    @property
    def centre(self) -> Tuple[float, float, float]:
        return (
            self.x + self.length / 2,
            self.y + self.width / 2,
            self.z + self.height / 2,
        )


@dataclass(frozen=True)
class VehicleTypeSpec:
    """Internal cargo space and payload of a vehicle archetype."""

    name: str
    kind: ArchetypeKind
    length: MM
    width: MM
    height: MM
    max_weight: KG

    @property
    def is_trailer(self) -> bool:
        return self.kind in TRAILER_KINDS

    @property
    def is_lowbed(self) -> bool:
        return self.kind is ArchetypeKind.LOWBED

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


@dataclass
class PlanningResult:
    vehicles: List["Vehicle"] = field(default_factory=list)
    unplaced: List[Load] = field(default_factory=list)

    def placements(self) -> List[Placement]:
        return [p for vehicle in self.vehicles for p in vehicle.placements]

    def placed_load_ids(self) -> List[str]:
        return [p.load_id for p in self.placements()]

    def unplaced_load_ids(self) -> List[str]:
        return [load.id for load in self.unplaced]
