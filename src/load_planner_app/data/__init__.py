from .paths import data_dir, vehicles_xml_path
from .vehicles_repo import load_catalog, load_default_catalog, save_catalog

__all__ = [
    "data_dir",
    "load_catalog",
    "load_default_catalog",
    "save_catalog",
    "vehicles_xml_path",
]
