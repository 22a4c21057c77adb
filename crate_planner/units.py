from .config import UNIT_ALIASES

def to_meters(value: float, unit: str) -> float:
    """Centimeters are divided by 100, everything else is taken as meters."""
    return value / 100.0 if unit == "cm" else value

def normalize_unit(text) -> str:
    key = str(text).strip().lower()
    if key not in UNIT_ALIASES:
        raise ValueError(f"Unknown unit: {text!r}")
    return UNIT_ALIASES[key]
