import os

DATA_DIR = os.path.join(os.path.dirname(__file__))


def data_dir() -> str:
    return DATA_DIR


def vehicles_xml_path() -> str:
    return os.path.join(DATA_DIR, "vehicles.xml")
