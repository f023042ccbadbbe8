from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping

from .models import ArchetypeKind, InvalidInputError, VehicleTypeSpec

TRAILER_PRIORITY = (
    ArchetypeKind.ENCLOSED_TRAILER,
    ArchetypeKind.FLATBED,
    ArchetypeKind.LOWBED,
)


class VehicleCatalog(Mapping[str, VehicleTypeSpec]):
    """Read-only mapping of archetype name to its VehicleTypeSpec."""

    def __init__(self, specs: Iterable[VehicleTypeSpec]) -> None:
        self._specs: Dict[str, VehicleTypeSpec] = {}
        for spec in specs:
            if spec.name in self._specs:
                raise ValueError(f"duplicate vehicle type: {spec.name}")
            self._specs[spec.name] = spec

    def __getitem__(self, name: str) -> VehicleTypeSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise KeyError(f"unknown vehicle type: {name}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"VehicleCatalog({list(self._specs)})"

    def trailers(self) -> List[VehicleTypeSpec]:
        return [spec for spec in self._specs.values() if spec.is_trailer]

    def containers(self) -> List[VehicleTypeSpec]:
        return [spec for spec in self._specs.values() if not spec.is_trailer]


DEFAULT_CATALOG = VehicleCatalog(
    [
        VehicleTypeSpec("Enclosed Trailer", ArchetypeKind.ENCLOSED_TRAILER, 13600, 2450, 2700, 24000),
        VehicleTypeSpec("Flatbed", ArchetypeKind.FLATBED, 13600, 2480, 2800, 25000),
        VehicleTypeSpec("Lowbed", ArchetypeKind.LOWBED, 25000, 2550, 3000, 35000),
        VehicleTypeSpec("20' DV Container", ArchetypeKind.CONTAINER, 5900, 2350, 2390, 28000),
        VehicleTypeSpec("40' DV Container", ArchetypeKind.CONTAINER, 12035, 2350, 2390, 30000),
    ]
)


def candidate_types(
    catalog: Mapping[str, VehicleTypeSpec],
    trailers: Iterable[str] = (),
    containers: Iterable[str] = (),
) -> List[VehicleTypeSpec]:
    """Resolve the caller's selection into the order archetypes are offered.

    Trailers follow the fixed enclosed/flatbed/lowbed priority, containers
    keep the caller's order. Repeated names are offered once.
    """
    trailer_specs = _resolve(catalog, trailers)
    container_specs = _resolve(catalog, containers)
    if not trailer_specs and not container_specs:
        raise InvalidInputError("no vehicle types selected")

    ordered: List[VehicleTypeSpec] = []
    for kind in TRAILER_PRIORITY:
        ordered.extend(spec for spec in trailer_specs if spec.kind is kind)
    ordered.extend(spec for spec in trailer_specs if spec.kind not in TRAILER_PRIORITY)
    ordered.extend(container_specs)

    unique: List[VehicleTypeSpec] = []
    for spec in ordered:
        if spec not in unique:
            unique.append(spec)
    return unique


def _resolve(catalog: Mapping[str, VehicleTypeSpec], names: Iterable[str]) -> List[VehicleTypeSpec]:
    specs = []
    for name in names:
        if name not in catalog:
            raise InvalidInputError(f"vehicle type not in catalog: {name}")
        specs.append(catalog[name])
    return specs
