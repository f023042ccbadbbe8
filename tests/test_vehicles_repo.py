import pytest

from load_planner.catalog import DEFAULT_CATALOG
from load_planner.models import ArchetypeKind
from load_planner_app.data import load_catalog, load_default_catalog, save_catalog


def test_bundled_catalog_matches_defaults():
    catalog = load_default_catalog()
    assert list(catalog) == list(DEFAULT_CATALOG)
    assert catalog["Lowbed"] == DEFAULT_CATALOG["Lowbed"]
    assert load_catalog() is catalog


def test_custom_catalog(tmp_path):
    path = tmp_path / "vehicles.xml"
    path.write_text(
        '<vehicles><vehicle name="Mega" kind="flatbed" l="13600" w="2480" h="3000" max_kg="24000"/></vehicles>',
        encoding="utf-8",
    )
    catalog = load_catalog(str(path))
    assert catalog["Mega"].kind is ArchetypeKind.FLATBED
    assert catalog["Mega"].height == 3000


def test_save_and_reload(tmp_path):
    path = tmp_path / "saved.xml"
    save_catalog(DEFAULT_CATALOG, str(path))
    assert dict(load_catalog(str(path))) == dict(DEFAULT_CATALOG)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog(str(tmp_path / "nope.xml"))


def test_invalid_xml(tmp_path):
    path = tmp_path / "broken.xml"
    path.write_text("<vehicles><vehicle", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(path))


def test_unknown_kind(tmp_path):
    path = tmp_path / "tanker.xml"
    path.write_text(
        '<vehicles><vehicle name="T" kind="tanker" l="1" w="1" h="1" max_kg="1"/></vehicles>',
        encoding="utf-8",
    )
    with pytest.raises(ValueError):
        load_catalog(str(path))
