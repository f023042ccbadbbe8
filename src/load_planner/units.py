MM = float
KG = float

LENGTH_FACTORS = {
    "mm": 1.0,
    "cm": 10.0,
    "m": 1000.0,
}

WEIGHT_FACTORS = {
    "kg": 1.0,
    "t": 1000.0,
    "lb": 0.45359237,
}


def parse_float(value: str) -> float:
    text = value.strip()
    if not text:
        raise ValueError("empty input")
    text = text.replace(",", ".")
    return float(text)


def to_mm(value: float, unit: str = "mm") -> MM:
    try:
        factor = LENGTH_FACTORS[unit.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown length unit: {unit!r}") from None
    return value * factor


def to_kg(value: float, unit: str = "kg") -> KG:
    try:
        factor = WEIGHT_FACTORS[unit.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown weight unit: {unit!r}") from None
    return value * factor
