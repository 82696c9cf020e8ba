"""
Static fertilizer rule tables: per-crop dosages (kg/ha by soil status),
commercial product analyses and deficiency commentary.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from app.schemas.enums import Crop, Nutrient, NutrientStatus
from app.schemas.fertilizer import FertilizerProduct


RATED_STATUSES: Tuple[NutrientStatus, ...] = (
    NutrientStatus.VERY_LOW,
    NutrientStatus.LOW,
    NutrientStatus.MEDIUM,
    NutrientStatus.HIGH,
)


def _rates(very_low: float, low: float, medium: float, high: float) -> Mapping[NutrientStatus, float]:
    return MappingProxyType(dict(zip(RATED_STATUSES, (very_low, low, medium, high))))


CEREAL_DOSAGE: Mapping[Nutrient, Mapping[NutrientStatus, float]] = MappingProxyType({
    Nutrient.NITROGEN: _rates(140, 135, 120, 0),
    Nutrient.PHOSPHOROUS: _rates(50, 45, 30, 0),
    Nutrient.POTASSIUM: _rates(50, 45, 38, 0),
    Nutrient.MAGNESIUM: _rates(15, 13, 10, 0),
    Nutrient.CALCIUM: _rates(76, 72, 63, 0),
    Nutrient.SULPHUR: _rates(40, 35, 30, 0),
    Nutrient.IRON: _rates(1.7, 1.1, 1, 0),
})

DOSAGE_TABLES: Mapping[Crop, Mapping[Nutrient, Mapping[NutrientStatus, float]]] = MappingProxyType({
    crop: CEREAL_DOSAGE for crop in Crop
})


COMMERCIAL_FERTILIZERS: Tuple[FertilizerProduct, ...] = (
    FertilizerProduct(name="Urea", category="nitrogen", nitrogen=46),
    FertilizerProduct(name="Ammonium Sulfate", category="nitrogen", nitrogen=21, sulphur=24),
    FertilizerProduct(name="Single Super Phosphate", category="phosphorus", phosphorus=18, sulphur=12),
    FertilizerProduct(name="Triple Super Phosphate", category="phosphorus", phosphorus=46),
    FertilizerProduct(name="Muriate of Potash", category="potassium", potassium=60),
    FertilizerProduct(name="NPK 15-15-15", category="compound", nitrogen=15, phosphorus=15, potassium=15),
    FertilizerProduct(name="NPK 20-10-10", category="compound", nitrogen=20, phosphorus=10, potassium=10),
    FertilizerProduct(name="NPK 12-12-17", category="compound", nitrogen=12, phosphorus=12, potassium=17),
)


def find_product(name: str) -> FertilizerProduct:
    for product in COMMERCIAL_FERTILIZERS:
        if product.name == name:
            return product
    raise KeyError(name)


DEFICIENCY_COMMENTARY: Mapping[Nutrient, str] = MappingProxyType({
    Nutrient.NITROGEN: (
        "Slow growth and uniform yellowing of older leaves are usually the first symptoms of nitrogen (N) "
        "deficiency. Nitrogen-deficient plants produce smaller than normal fruit, leaves, and shoots and these "
        "can develop later than normal. Planting of cover crops and legumes like cowpea, soybean and Bambara "
        "will help increase Nitrogen where it's extremely low."
    ),
    Nutrient.PHOSPHOROUS: (
        "Phosphorus deficiency tends to inhibit or prevent shoot growth. Leaves turn dark, dull, blue-green, "
        "and may become pale in severe deficiency. Reddish, reddish-violet, or violet color develops from "
        "increased anthocyanin synthesis. Symptoms appear first on older parts of the plant. Recycling of "
        "on-farm organic materials such as composts, green manures and animal manures will increase "
        "phosphorus where low or extremely low."
    ),
    Nutrient.POTASSIUM: (
        "Potassium deficiency causes leaves to turn yellow and then brown at the tips and margins and between "
        "veins. Older leaves are affected first and can entirely discolor, crinkle, curl, roll along edges, or "
        "die and drop prematurely. Rich compost and well-rotted manure are two great options to boost soil "
        "with low or extremely low potassium."
    ),
    Nutrient.MAGNESIUM: (
        "Magnesium is the central core of the chlorophyll molecule in plant tissue. Thus, if Mg is deficient, "
        "the shortage of chlorophyll results in poor and stunted plant growth. Epsom salts and lime will "
        "increase Magnesium in soil with low quantity."
    ),
    Nutrient.CALCIUM: (
        "Calcium deficiency symptoms appear initially as localized tissue necrosis leading to stunted plant "
        "growth, necrotic leaf margins on young leaves or curling of the leaves, and eventual death of terminal "
        "buds and root tips. Generally, the new growth and rapidly growing tissues of the plant are affected "
        "first. Eggshells in your compost will improve calcium where low or extremely low."
    ),
    Nutrient.SULPHUR: (
        "Sulphur deficiency symptoms appear initially as localized tissue necrosis leading to stunted plant "
        "growth, necrotic leaf margins on young leaves or curling of the leaves, and eventual death of terminal "
        "buds and root tips. Generally, the new growth and rapidly growing tissues of the plant are affected "
        "first. Amending soil with compost will increase sulphur in soil."
    ),
    Nutrient.IRON: (
        "The primary symptom of iron deficiency is interveinal chlorosis, the development of a yellow leaf "
        "with a network of dark green veins. In severe cases, the entire leaf turns yellow or white and the "
        "outer edges may scorch and turn brown as the plant cells die. Leaving plant remains like vegetables "
        "in soil after harvesting will boost iron in soil."
    ),
})


def validate_tables() -> None:
    """Every crop must rate every nutrient at every soil status."""
    for crop in Crop:
        table = DOSAGE_TABLES.get(crop)
        if table is None:
            raise ValueError(f"Missing dosage table for crop {crop.value}")
        for nutrient in Nutrient:
            rates = table.get(nutrient)
            if rates is None:
                raise ValueError(f"Dosage table for {crop.value} is missing {nutrient.value}")
            missing = [status.value for status in RATED_STATUSES if status not in rates]
            if missing:
                raise ValueError(f"Dosage for {crop.value}/{nutrient.value} is missing {missing}")

    for nutrient in Nutrient:
        if nutrient not in DEFICIENCY_COMMENTARY:
            raise ValueError(f"Missing deficiency commentary for {nutrient.value}")


validate_tables()
