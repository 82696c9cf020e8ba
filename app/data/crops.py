"""Crop-specific application schedules and weekly water requirements."""

from types import MappingProxyType
from typing import Mapping, Tuple

from app.schemas.enums import Crop


Stage = Tuple[str, float]

DEFAULT_SCHEDULE: Tuple[Stage, ...] = (("Planting", 40), ("Vegetative", 60))

APPLICATION_SCHEDULES: Mapping[Crop, Tuple[Stage, ...]] = MappingProxyType({
    Crop.MAIZE: (("Planting", 40), ("Vegetative", 60)),
    Crop.RICE: (("Transplanting", 30), ("Tillering", 40), ("Panicle Initiation", 30)),
})


# mm per week
DEFAULT_WATER_REQUIREMENTS: Mapping[str, float] = MappingProxyType({
    "seedling": 15,
    "vegetative": 22,
    "flowering": 30,
    "grain_filling": 25,
    "maturity": 15,
})

CROP_WATER_REQUIREMENTS: Mapping[Crop, Mapping[str, float]] = MappingProxyType({
    Crop.MAIZE: MappingProxyType({
        "seedling": 15, "vegetative": 25, "flowering": 35, "grain_filling": 30, "maturity": 15,
    }),
    Crop.RICE: MappingProxyType({
        "seedling": 20, "vegetative": 30, "flowering": 40, "grain_filling": 35, "maturity": 20,
    }),
    Crop.CASSAVA: MappingProxyType({
        "seedling": 12, "vegetative": 20, "flowering": 25, "grain_filling": 20, "maturity": 10,
    }),
    Crop.SORGHUM: MappingProxyType({
        "seedling": 12, "vegetative": 20, "flowering": 30, "grain_filling": 25, "maturity": 12,
    }),
})

GROWTH_STAGE_ALIASES: Mapping[str, str] = MappingProxyType({
    "seedling": "seedling",
    "germination": "seedling",
    "vegetative": "vegetative",
    "growth": "vegetative",
    "flowering": "flowering",
    "reproductive": "flowering",
    "grain_filling": "grain_filling",
    "filling": "grain_filling",
    "maturity": "maturity",
    "harvest": "maturity",
})
