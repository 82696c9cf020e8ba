"""Soil property breakpoints: [min, max) bands per element, last band open-ended."""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from app.schemas.enums import Nutrient, NutrientStatus


Band = Tuple[float, Optional[float], NutrientStatus]

_VL = NutrientStatus.VERY_LOW
_L = NutrientStatus.LOW
_M = NutrientStatus.MEDIUM
_H = NutrientStatus.HIGH


SOIL_BREAKPOINTS: Mapping[Nutrient, Tuple[Band, ...]] = MappingProxyType({
    Nutrient.NITROGEN: ((0, 11, _VL), (11, 26, _L), (26, 41, _M), (41, None, _H)),
    Nutrient.PHOSPHOROUS: ((0, 15, _VL), (15, 31, _L), (31, 51, _M), (51, None, _H)),
    Nutrient.POTASSIUM: ((0, 41, _VL), (41, 81, _L), (81, 121, _M), (121, None, _H)),
    Nutrient.MAGNESIUM: ((0, 11, _VL), (11, 31, _L), (31, 51, _M), (51, None, _H)),
    Nutrient.CALCIUM: ((0, 51, _L), (51, 151, _M), (151, None, _H)),
    Nutrient.SULPHUR: ((0, 6, _L), (6, 16, _M), (16, None, _H)),
    Nutrient.IRON: ((0, 16, _VL), (16, 51, _L), (51, 251, _M), (251, None, _H)),
})
