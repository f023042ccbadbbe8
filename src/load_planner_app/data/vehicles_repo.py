import os
import xml.etree.ElementTree as ET
from functools import lru_cache
from typing import Optional

from load_planner.catalog import VehicleCatalog
from load_planner.models import ArchetypeKind, VehicleTypeSpec

from .paths import vehicles_xml_path


def _load_xml(path: str) -> ET.Element:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Missing file: {path}")
    try:
        tree = ET.parse(path)
        return tree.getroot()
    except ET.ParseError as e:
        raise ValueError(f"Invalid XML in {path}: {e}")


def _parse_vehicle(vehicle: ET.Element) -> VehicleTypeSpec:
    try:
        return VehicleTypeSpec(
            name=vehicle.get("name"),
            kind=ArchetypeKind(vehicle.get("kind")),
            length=int(vehicle.get("l")),
            width=int(vehicle.get("w")),
            height=int(vehicle.get("h")),
            max_weight=float(vehicle.get("max_kg")),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid vehicle data '{vehicle.attrib}': {e}")


def load_catalog(path: Optional[str] = None) -> VehicleCatalog:
    """Read a vehicle catalog; the bundled ``vehicles.xml`` by default."""
    if path is None:
        return load_default_catalog()
    root = _load_xml(path)
    return VehicleCatalog(_parse_vehicle(vehicle) for vehicle in root.findall("vehicle"))


@lru_cache(maxsize=None)
def load_default_catalog() -> VehicleCatalog:
    root = _load_xml(vehicles_xml_path())
    return VehicleCatalog(_parse_vehicle(vehicle) for vehicle in root.findall("vehicle"))


def save_catalog(catalog: VehicleCatalog, path: str) -> None:
    root = ET.Element("vehicles")
    for spec in catalog.values():
        ET.SubElement(
            root,
            "vehicle",
            name=spec.name,
            kind=spec.kind.value,
            l=str(int(spec.length)),
            w=str(int(spec.width)),
            h=str(int(spec.height)),
            max_kg=str(spec.max_weight),
        )
    tree = ET.ElementTree(root)
    ET.indent(tree)
    tree.write(path, encoding="utf-8", xml_declaration=True)
