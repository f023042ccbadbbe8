from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Tuple

import yaml

from .categories import aspect_ratio
from .models import ArchetypeKind, Load, VehicleTypeSpec, fits_within

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS = {
    "dimension_fit": 10.0,
    "weight_fit": 5.0,
}

ELIMINATED = -1000.0


def settings_path() -> str:
    return os.path.join(os.path.dirname(__file__), "settings.yaml")


@lru_cache(maxsize=None)
def load_weights() -> Dict[str, float]:
    """Load ranking bonus weights from ``settings.yaml`` when available."""

    path = settings_path()
    data: Dict[str, float] = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if isinstance(loaded, dict):
            data = loaded

    weights = DEFAULT_WEIGHTS.copy()
    for key in DEFAULT_WEIGHTS:
        if key in data:
            try:
                weights[key] = float(data[key])
            except (TypeError, ValueError):
                logger.warning("Ignoring non-numeric weight %s=%r", key, data[key])
    return weights


@dataclass(frozen=True)
class LoadProfile:
    """Load features the archetype rules look at."""

    volume: int
    weight: float
    density: float
    aspect_ratio: float
    height: int
    stackable: bool
    fragile: bool
    priority: int

    @classmethod
    def of(cls, load: Load) -> "LoadProfile":
        return cls(
            volume=load.volume,
            weight=load.weight,
            density=load.density,
            aspect_ratio=aspect_ratio(load),
            height=load.height,
            stackable=load.stackable,
            fragile=load.fragile,
            priority=load.priority,
        )


@dataclass(frozen=True)
class ScoreRule:
    name: str
    delta: float
    applies: Callable[[LoadProfile], bool]


@dataclass(frozen=True)
class ArchetypeScorer:
    base: float
    rules: Tuple[ScoreRule, ...] = ()

    def score(self, profile: LoadProfile) -> float:
        return self.base + sum(rule.delta for rule in self.rules if rule.applies(profile))

    def matched(self, profile: LoadProfile) -> List[str]:
        return [rule.name for rule in self.rules if rule.applies(profile)]


ENCLOSED_TRAILER_SCORER = ArchetypeScorer(
    base=50,
    rules=(
        ScoreRule("stackable", 20, lambda p: p.stackable),
        ScoreRule("fragile", 15, lambda p: p.fragile),
        ScoreRule("high_priority", 10, lambda p: p.priority <= 2),
        ScoreRule("medium_density", 10, lambda p: 200 <= p.density <= 800),
        ScoreRule("very_heavy", -15, lambda p: p.weight > 1000),
        ScoreRule("very_long", -10, lambda p: p.aspect_ratio > 5),
    ),
)

FLATBED_SCORER = ArchetypeScorer(
    base=60,
    rules=(
        ScoreRule("heavy", 25, lambda p: p.weight > 500),
        ScoreRule("long", 20, lambda p: p.aspect_ratio > 3),
        ScoreRule("dense", 15, lambda p: p.density > 800),
        ScoreRule("not_stackable", 15, lambda p: not p.stackable),
        ScoreRule("fragile", -20, lambda p: p.fragile),
        ScoreRule("light", -5, lambda p: p.weight < 100),
    ),
)

LOWBED_SCORER = ArchetypeScorer(
    base=40,
    rules=(
        ScoreRule("very_heavy", 30, lambda p: p.weight > 1000),
        ScoreRule("very_long", 25, lambda p: p.aspect_ratio > 6),
        ScoreRule("very_dense", 20, lambda p: p.density > 1000),
        ScoreRule("tall", 15, lambda p: p.height > 2000),
        ScoreRule(
            "machinery",
            15,
            lambda p: p.priority <= 2 and p.weight > 500 and not p.stackable,
        ),
        ScoreRule("light", -25, lambda p: p.weight < 200),
        # Under 0.1 m^3.
        ScoreRule("small", -15, lambda p: p.volume < 100_000_000),
    ),
)

CONTAINER_SCORER = ArchetypeScorer(base=0)

ARCHETYPE_SCORERS: Dict[ArchetypeKind, ArchetypeScorer] = {
    ArchetypeKind.ENCLOSED_TRAILER: ENCLOSED_TRAILER_SCORER,
    ArchetypeKind.FLATBED: FLATBED_SCORER,
    ArchetypeKind.LOWBED: LOWBED_SCORER,
    ArchetypeKind.CONTAINER: CONTAINER_SCORER,
}


def dimension_utilization(load: Load, spec: VehicleTypeSpec) -> float:
    return min(
        load.length / spec.length,
        load.width / spec.width,
        load.height / spec.height,
    )


def score_vehicle_type(load: Load, spec: VehicleTypeSpec) -> float:
    """Higher is a better archetype for ``load``; ELIMINATED when it cannot go."""
    if not fits_within(load, spec.length, spec.width, spec.height):
        return ELIMINATED
    if load.weight > spec.max_weight:
        return ELIMINATED
    weights = load_weights()
    score = ARCHETYPE_SCORERS[spec.kind].score(LoadProfile.of(load))
    score += weights["dimension_fit"] * dimension_utilization(load, spec)
    score += weights["weight_fit"] * load.weight / spec.max_weight
    return score


@dataclass
class TypeScore:
    spec: VehicleTypeSpec
    score: float
    rules: List[str] = field(default_factory=list)


class VehicleTypeSelector:
    """Rank the selected archetypes for one load at a time."""

    def __init__(self, types: Iterable[VehicleTypeSpec]) -> None:
        self.types = list(types)

    def score(self, load: Load) -> List[TypeScore]:
        profile = LoadProfile.of(load)
        return [
            TypeScore(
                spec=spec,
                score=score_vehicle_type(load, spec),
                rules=ARCHETYPE_SCORERS[spec.kind].matched(profile),
            )
            for spec in self.types
        ]

    def rank(self, load: Load) -> List[VehicleTypeSpec]:
        scored = sorted(self.score(load), key=lambda item: -item.score)
        return [item.spec for item in scored]


def rank_vehicle_types(load: Load, types: Iterable[VehicleTypeSpec]) -> List[VehicleTypeSpec]:
    return VehicleTypeSelector(types).rank(load)
