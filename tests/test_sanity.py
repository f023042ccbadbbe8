from load_planner.catalog import DEFAULT_CATALOG
from load_planner.engine import plan
from load_planner.models import Load, Placement, PlanningResult
from load_planner.sanity import DEFAULT_SANITY_POLICY, is_sane, plan_flags, vehicle_flags
from load_planner.shelf import Shelf
from load_planner.vehicle import Vehicle


def _load(load_id, stackable=True):
    return Load(
        id=load_id,
        name="Crate",
        length=1000,
        width=1000,
        height=500,
        weight=100.0,
        stackable=stackable,
    )


def _container_plan(loads):
    return plan(loads, DEFAULT_CATALOG, containers=["20' DV Container"])


def test_planned_result_is_sane():
    loads = [_load("1"), _load("2", stackable=False)]
    result = _container_plan(loads)
    assert plan_flags(result, loads) == set()
    assert is_sane(result, loads, DEFAULT_SANITY_POLICY)


def test_overlapping_placements_flagged():
    result = _container_plan([_load("1")])
    vehicle = result.vehicles[0]
    shelf = vehicle.shelves[0]
    shelf.placements.append(Placement(_load("2"), 1000, 1000, 500, 500, 0, 0, 100.0))
    vehicle.total_weight += 100.0

    assert vehicle_flags(vehicle) == {"shelf_overlap"}


def test_weight_and_bounds_flagged():
    vehicle = Vehicle("Box #1", DEFAULT_CATALOG["20' DV Container"])
    shelf = Shelf(0, 500)
    vehicle.shelves.append(shelf)
    heavy = Load(id="1", name="Anvil", length=1000, width=1000, height=500, weight=30000.0)
    shelf.placements.append(Placement(heavy, 1000, 1000, 500, 5000, 0, 0, 30000.0))
    vehicle.total_weight = 30000.0

    flags = vehicle_flags(vehicle)
    assert "weight_exceeded" in flags
    assert "out_of_bounds" in flags


def test_rotation_mismatch_flagged():
    vehicle = Vehicle("Box #1", DEFAULT_CATALOG["20' DV Container"])
    shelf = Shelf(0, 500)
    vehicle.shelves.append(shelf)
    shelf.placements.append(Placement(_load("1"), 1000, 900, 500, 0, 0, 0, 100.0))
    vehicle.total_weight = 100.0

    assert vehicle_flags(vehicle) == {"rotation_mismatch"}


def test_shelf_above_non_stackable_flagged():
    vehicle = Vehicle("Box #1", DEFAULT_CATALOG["20' DV Container"])
    vehicle.shelves.append(Shelf(0, 500))
    vehicle.shelves.append(Shelf(500, 500, over_non_stackable=True))
    assert "stacked_above_non_stackable" in vehicle_flags(vehicle)


def test_lost_and_duplicated_loads_flagged():
    loads = [_load("1"), _load("2")]
    result = _container_plan(loads[:1])
    assert plan_flags(result, loads) == {"load_lost"}

    duplicated = PlanningResult(vehicles=result.vehicles, unplaced=[loads[0]])
    assert "load_duplicated" in plan_flags(duplicated, loads[:1])


def test_lowbed_shelves_above_non_stackable_not_flagged():
    vehicle = Vehicle("Lowbed #1", DEFAULT_CATALOG["Lowbed"])
    vehicle.try_put(_load("1", stackable=False))
    second = vehicle.try_put(_load("2", stackable=False))

    assert second.z == 500
    assert vehicle.shelves[1].over_non_stackable
    assert "stacked_above_non_stackable" not in vehicle_flags(vehicle)
