from typing import Union

Number = Union[int, float]

UNITS_TO_INCHES = {
    "in": 1.0,
    "cm": 1 / 2.54,
    "mm": 1 / 25.4,
    "pt": 1 / 72.0,
}
INCHES_TO_UNITS = {
    "in": 1.0,
    "cm": 2.54,
    "mm": 25.4,
    "pt": 72.0,
}


def _normalize_unit(unit: str) -> str:
    u = str(unit).lower().replace('"', "in").strip()
    if u in ("inch", "inches"):
        return "in"
    if u in ("point", "points"):
        return "pt"
    if u not in UNITS_TO_INCHES:
        raise ValueError(f"Unsupported unit: {unit!r}")
    return u


def convert(value: Number, from_unit: str, to_unit: str) -> float:
    """
    Converts a physical measurement between units.
    Args:
        value (float): The measurement.
        from_unit (str): One of "in", "cm", "mm", "pt".
        to_unit (str): One of "in", "cm", "mm", "pt".
    Returns:
        float: The measurement expressed in ``to_unit``.
    Raises:
        ValueError: If either unit is not supported.
    """
    src = _normalize_unit(from_unit)
    dst = _normalize_unit(to_unit)
    if src == dst:
        return float(value)
    inches = float(value) * UNITS_TO_INCHES[src]
    return inches * INCHES_TO_UNITS[dst]


def to_points(value: Number, unit: str = "mm") -> float:
    return convert(value, unit, "pt")


def to_pixels(value: Number, unit: str, dpi: int) -> float:
    """
    Converts a physical measurement to pixels at ``dpi``.
    Raises:
        ValueError: If DPI is not positive.
    """
    if dpi <= 0:
        raise ValueError("DPI must be a positive value.")
    return convert(value, unit, "in") * dpi
