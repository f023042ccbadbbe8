import pytest

from load_planner.catalog import DEFAULT_CATALOG, VehicleCatalog, candidate_types
from load_planner.models import InvalidInputError


def test_default_catalog_split():
    assert [spec.name for spec in DEFAULT_CATALOG.trailers()] == [
        "Enclosed Trailer",
        "Flatbed",
        "Lowbed",
    ]
    assert len(DEFAULT_CATALOG.containers()) == 2


def test_trailers_in_priority_order_then_containers_as_given():
    types = candidate_types(
        DEFAULT_CATALOG,
        trailers=["Lowbed", "Enclosed Trailer"],
        containers=["40' DV Container", "20' DV Container"],
    )
    assert [spec.name for spec in types] == [
        "Enclosed Trailer",
        "Lowbed",
        "40' DV Container",
        "20' DV Container",
    ]


def test_repeated_names_offered_once():
    types = candidate_types(DEFAULT_CATALOG, containers=["20' DV Container"] * 2)
    assert len(types) == 1


def test_empty_selection_rejected():
    with pytest.raises(InvalidInputError):
        candidate_types(DEFAULT_CATALOG)


def test_unknown_name_rejected():
    with pytest.raises(InvalidInputError):
        candidate_types(DEFAULT_CATALOG, trailers=["Tanker"])


def test_unknown_lookup_raises_key_error():
    with pytest.raises(KeyError):
        DEFAULT_CATALOG["Tanker"]


def test_duplicate_specs_rejected():
    spec = DEFAULT_CATALOG["Flatbed"]
    with pytest.raises(ValueError):
        VehicleCatalog([spec, spec])
