from typing import Optional

from app.core.exceptions import MissingAreaError


ACRE_IN_HECTARES = 0.404686


def acres_to_hectares(acres: float) -> float:
    return acres * ACRE_IN_HECTARES


def farm_area_or_default(area: Optional[float], default: Optional[float] = 1.0) -> float:
    """
    Return a usable farm area.

    Zero, negative or missing areas are replaced by ``default``. Callers that
    would rather fail pass ``default=None`` and get a MissingAreaError.
    """
    if area is not None and area > 0:
        return float(area)

    if default is None:
        raise MissingAreaError(f"Farm area must be positive, got {area!r}")

    return float(default)
