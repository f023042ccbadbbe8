from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

from load_planner.models import Load
from load_planner.units import parse_float, to_kg, to_mm

logger = logging.getLogger(__name__)

STACK_MODES = ("sheet", "yes", "no")
TRUE_WORDS = {"1", "true", "yes", "evet", "ja"}


@dataclass
class PlanningJob:
    loads: List[Load]
    trailers: List[str] = field(default_factory=list)
    containers: List[str] = field(default_factory=list)


def _number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return parse_float(str(value))


def stackable_from(row: Dict[str, Any], stack_mode: str) -> bool:
    """Resolve the stackable flag according to the job's stack mode.

    ``sheet`` reads the row's ``stackable`` value and treats a missing value
    as stackable; ``yes`` and ``no`` force the flag for every load.
    """
    if stack_mode == "yes":
        return True
    if stack_mode == "no":
        return False
    if "stackable" not in row or row["stackable"] is None:
        return True
    return str(row["stackable"]).strip().lower() in TRUE_WORDS


def load_from_row(
    row: Dict[str, Any],
    index: int,
    *,
    length_unit: str = "mm",
    weight_unit: str = "kg",
    stack_mode: str = "sheet",
) -> Load:
    try:
        return Load(
            id=str(row.get("id", index + 1)),
            name=str(row.get("name", "")),
            length=round(to_mm(_number(row["length"]), length_unit)),
            width=round(to_mm(_number(row["width"]), length_unit)),
            height=round(to_mm(_number(row["height"]), length_unit)),
            weight=to_kg(_number(row["weight"]), weight_unit),
            stackable=stackable_from(row, stack_mode),
            priority=int(row.get("priority", 3)),
        )
    except KeyError as e:
        raise ValueError(f"load #{index + 1}: missing field {e.args[0]}") from None
    except (TypeError, ValueError) as e:
        raise ValueError(f"load #{index + 1}: {e}") from None


def _names(data: Dict[str, Any], key: str) -> List[str]:
    names = data.get(key) or []
    if not isinstance(names, list):
        raise ValueError(f"{key} must be a list of vehicle type names")
    return [str(name) for name in names]


def job_from_dict(data: Dict[str, Any]) -> PlanningJob:
    stack_mode = str(data.get("stack_mode", "sheet")).lower()
    if stack_mode not in STACK_MODES:
        raise ValueError(f"stack_mode must be one of {STACK_MODES}, got {stack_mode!r}")
    length_unit = str(data.get("length_unit", "mm"))
    weight_unit = str(data.get("weight_unit", "kg"))

    rows = data.get("loads") or []
    if not isinstance(rows, list):
        raise ValueError("loads must be a list")
    loads = [
        load_from_row(
            row,
            index,
            length_unit=length_unit,
            weight_unit=weight_unit,
            stack_mode=stack_mode,
        )
        for index, row in enumerate(rows)
    ]
    return PlanningJob(
        loads=loads,
        trailers=_names(data, "trailers"),
        containers=_names(data, "containers"),
    )


def load_job(path: str) -> PlanningJob:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Missing file: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from None
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    job = job_from_dict(data)
    logger.info("Read %d loads from %s", len(job.loads), path)
    return job
