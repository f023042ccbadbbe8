import json

from load_planner.catalog import DEFAULT_CATALOG
from load_planner.engine import plan
from load_planner.models import Load
from load_planner.plan_io import plan_to_payload, save_plan, sorted_placements


def _result():
    loads = [
        Load(id="a", name="Crate", length=1000, width=1000, height=400, weight=80.0),
        Load(id="b", name="Crate", length=1000, width=1000, height=500, weight=60.0),
        Load(id="c", name="Crate", length=1000, width=1000, height=400, weight=40.0),
        Load(id="big", name="Tank", length=30000, width=3000, height=3000, weight=900.0),
    ]
    return plan(loads, DEFAULT_CATALOG, containers=["20' DV Container"])


def test_payload_shape():
    payload = plan_to_payload(_result())
    assert payload["unplaced"] == ["big"]
    (vehicle,) = payload["vehicles"]
    assert vehicle["label"] == "20' DV Container #1"
    assert vehicle["typeName"] == "20' DV Container"
    assert (vehicle["iL"], vehicle["iW"], vehicle["iH"]) == (5900, 2350, 2390)
    assert vehicle["totalKg"] == 180.0
    assert vehicle["placements"][0] == {
        "loadId": "a",
        "L": 1000,
        "W": 1000,
        "H": 400,
        "kg": 80.0,
        "x": 0,
        "y": 0,
        "z": 0,
    }


def test_sorted_placements_bottom_up():
    vehicle = _result().vehicles[0]
    ordered = sorted_placements(vehicle)
    assert [p.load_id for p in ordered] == ["a", "c", "b"]
    assert [(p.x, p.y, p.z) for p in ordered] == [(0, 0, 0), (0, 1000, 0), (0, 0, 400)]


def test_save_plan_writes_json(tmp_path):
    path = tmp_path / "out" / "plan.json"
    save_plan(path, _result())
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["unplaced"] == ["big"]
    assert len(data["vehicles"][0]["placements"]) == 3
