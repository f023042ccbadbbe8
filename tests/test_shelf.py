from load_planner.models import Load, Placement
from load_planner.shelf import (
    FreeRect,
    Shelf,
    candidate_positions,
    prune_free_rects,
    rects_overlap,
    split_rect,
)


def _load(load_id="1", length=1000, width=1000, height=500, stackable=True):
    return Load(
        id=load_id,
        name="Crate",
        length=length,
        width=width,
        height=height,
        weight=100.0,
        stackable=stackable,
    )


def test_first_placement_at_origin_on_shelf_floor():
    shelf = Shelf(z0=700, height=500)
    placement = shelf.try_place(_load(), 13600, 2450, (1000, 1000, 500))
    assert (placement.x, placement.y, placement.z) == (0, 0, 700)
    assert shelf.free_rects == [
        FreeRect(1000, 0, 12600, 2450),
        FreeRect(0, 1000, 13600, 1450),
    ]


def test_best_short_side_fit_picks_tighter_rect():
    shelf = Shelf(z0=0, height=500)
    shelf.try_place(_load("1"), 13600, 2450, (1000, 1000, 500))
    second = shelf.try_place(_load("2"), 13600, 2450, (1000, 1000, 500))
    assert (second.x, second.y) == (0, 1000)
    assert not rects_overlap(shelf.placements[0].footprint, second.footprint)


def test_too_tall_rotation_rejected_without_mutation():
    shelf = Shelf(z0=0, height=400)
    assert shelf.try_place(_load(), 13600, 2450, (1000, 1000, 500)) is None
    assert shelf.placements == []
    assert shelf.free_rects is None


def test_no_free_rect_large_enough():
    shelf = Shelf(z0=0, height=500)
    assert shelf.try_place(_load(length=3000), 2000, 2000, (3000, 1000, 500)) is None
    assert shelf.is_empty


def test_full_floor_leaves_no_free_space():
    shelf = Shelf(z0=0, height=500)
    assert shelf.try_place(_load("1"), 1000, 1000, (1000, 1000, 500)) is not None
    assert shelf.free_rects == []
    assert shelf.try_place(_load("2", 10, 10), 1000, 1000, (10, 10, 500)) is None


def test_overlap_with_existing_placement_rejected():
    shelf = Shelf(z0=0, height=500)
    shelf.try_place(_load("1"), 5000, 5000, (1000, 1000, 500))
    stale = [FreeRect(500, 500, 2000, 2000)]
    shelf.free_rects = list(stale)

    assert shelf.try_place(_load("2"), 5000, 5000, (1000, 1000, 500)) is None
    assert len(shelf.placements) == 1
    assert shelf.free_rects == stale


def test_non_stackable_marks_shelf():
    shelf = Shelf(z0=0, height=500)
    shelf.try_place(_load("1"), 5000, 2000, (1000, 1000, 500))
    assert shelf.all_stackable
    shelf.try_place(_load("2", stackable=False), 5000, 2000, (1000, 1000, 500))
    assert not shelf.all_stackable


def test_split_rect_four_sides():
    pieces = split_rect(FreeRect(0, 0, 10, 10), 2, 3, 4, 5)
    assert pieces == [
        FreeRect(0, 0, 2, 10),
        FreeRect(6, 0, 4, 10),
        FreeRect(0, 0, 10, 3),
        FreeRect(0, 8, 10, 2),
    ]


def test_prune_drops_contained_and_empty_rects():
    rects = [
        FreeRect(0, 0, 10, 10),
        FreeRect(2, 2, 3, 3),
        FreeRect(0, 0, 0, 5),
        FreeRect(0, 0, 20, 20),
    ]
    assert prune_free_rects(rects) == [FreeRect(0, 0, 20, 20)]


def test_touching_rects_do_not_overlap():
    assert not rects_overlap((0, 0, 10, 10), (10, 0, 10, 10))
    assert rects_overlap((0, 0, 10, 10), (9, 9, 10, 10))


def test_used_area_and_weight():
    shelf = Shelf(z0=0, height=500)
    shelf.placements.append(Placement(_load(), 1000, 1000, 500, 0, 0, 0, 100.0))
    shelf.placements.append(Placement(_load("2"), 500, 200, 500, 1000, 0, 0, 50.0))
    assert shelf.used_area() == 1_100_000
    assert shelf.load_weight() == 150.0


def test_candidate_positions_corners_and_centre():
    assert candidate_positions(FreeRect(0, 0, 1000, 500), 400, 200) == [
        (0, 0),
        (600, 0),
        (0, 300),
        (600, 300),
        (300, 150),
    ]


def test_no_centre_candidate_with_little_slack():
    assert candidate_positions(FreeRect(10, 20, 450, 250), 400, 200) == [
        (10, 20),
        (60, 20),
        (10, 70),
        (60, 70),
    ]


def test_preview_leaves_shelf_unchanged():
    shelf = Shelf(z0=300, height=500)
    shelf.try_place(_load("1"), 13600, 2450, (1000, 1000, 500))
    free_rects = list(shelf.free_rects)

    preview = shelf.preview_placement(_load("2"), 13600, 2450, (1000, 1000, 500))

    assert (preview.x, preview.y, preview.z) == (0, 1000, 300)
    assert len(shelf.placements) == 1
    assert shelf.free_rects == free_rects
    assert shelf.all_stackable


def test_preview_on_fresh_shelf_keeps_lazy_seed():
    shelf = Shelf(z0=0, height=500)
    preview = shelf.preview_placement(_load(stackable=False), 13600, 2450, (1000, 1000, 500))
    assert (preview.x, preview.y) == (0, 0)
    assert shelf.free_rects is None
    assert shelf.all_stackable


def test_preview_rejects_too_tall_rotation():
    shelf = Shelf(z0=0, height=400)
    assert shelf.preview_placement(_load(), 13600, 2450, (1000, 1000, 500)) is None
