from enum import Enum
from typing import Optional


class VegetationStatus(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    VERY_POOR = "Very Poor"


class WaterStressStatus(str, Enum):
    HIGH = "High Stress"
    MODERATE = "Moderate Stress"
    LOW = "Low Stress"
    VERY_LOW = "Very Low Stress"


class NutrientStatus(str, Enum):
    VERY_LOW = "Very Low"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    UNKNOWN = "Unknown"

    @property
    def is_deficient(self) -> bool:
        return self in (NutrientStatus.VERY_LOW, NutrientStatus.LOW)


class Nutrient(str, Enum):
    NITROGEN = "nitrogen_total"
    PHOSPHOROUS = "phosphorous_extractable"
    POTASSIUM = "potassium_extractable"
    MAGNESIUM = "magnesium_extractable"
    CALCIUM = "calcium_extractable"
    SULPHUR = "sulphur_extractable"
    IRON = "iron_extractable"

    @property
    def display_name(self) -> str:
        # "nitrogen_total" -> "nitrogen"
        return self.value.split("_")[0]

    @classmethod
    def parse(cls, element: str) -> Optional["Nutrient"]:
        try:
            return cls(element.strip().lower())
        except ValueError:
            return None


class Crop(str, Enum):
    MAIZE = "maize"
    RICE = "rice"
    SORGHUM = "sorghum"
    WHEAT = "wheat"
    MILLET = "millet"
    OATS = "oats"
    BARLEY = "barley"
    RYE = "rye"
    CASSAVA = "cassava"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["Crop"]:
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None
