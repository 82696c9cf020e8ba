"""
Fertilizer rule engine.

Soil statuses are turned into per-nutrient requirements through the crop
dosage tables, optionally adjusted by NDVI vegetation health, then split into
an application schedule and commercial products.
"""

from typing import List, Mapping, Optional, Sequence, Tuple, Union

from app.data.crops import APPLICATION_SCHEDULES, DEFAULT_SCHEDULE
from app.data.fertilizer import DEFICIENCY_COMMENTARY, DOSAGE_TABLES, find_product
from app.schemas.analysis import IndexAnalysis, ZoneSummary
from app.schemas.enums import Crop, Nutrient, NutrientStatus, VegetationStatus
from app.schemas.fertilizer import (
    CommercialProduct,
    CompositionItem,
    FertilizerPlan,
    ScheduleStage,
    VegetationInsights,
    ZoneRecommendation,
)
from app.schemas.soil import NutrientReading
from app.services.area import farm_area_or_default
from app.services.ndvi_engine import get_overall_health_status, stressed_area_percentage


COMPOUND_PRODUCT = "NPK 15-15-15"
NITROGEN_PRODUCT = "Urea"

# Compound product never covers more than this share of the total
COMPOUND_SHARE_CAP = 0.7
# Nitrogen still needed after the compound product, topped up with urea
RESIDUAL_NITROGEN_SHARE = 0.4
MIN_PRODUCT_QUANTITY_KG = 10

NO_DEFICIENCY_COMMENTARY = (
    "No specific deficiencies detected. Follow standard fertilization practices for optimal crop growth."
)

ZONE_ADVICE = {
    VegetationStatus.VERY_POOR.value: (
        "High",
        "Immediate intervention required - apply nitrogen fertilizer and investigate drainage issues",
    ),
    VegetationStatus.POOR.value: (
        "High",
        "Apply balanced NPK fertilizer with emphasis on nitrogen for chlorophyll development",
    ),
    VegetationStatus.FAIR.value: (
        "Medium",
        "Monitor closely and consider targeted nutrient application",
    ),
    VegetationStatus.GOOD.value: (
        "Low",
        "Maintain current fertility levels with standard application rates",
    ),
    VegetationStatus.EXCELLENT.value: (
        "Low",
        "Maintain current fertility levels with standard application rates",
    ),
}

StatusInput = Union[NutrientStatus, str, NutrientReading]


# =========================
# VEGETATION ADJUSTMENT
# =========================
def calculate_vegetation_adjustment(
    vegetation: IndexAnalysis,
    nutrient: Nutrient,
) -> Tuple[float, str]:
    """Return (multiplier, reason) for a nutrient given NDVI health signals."""
    average_ndvi = vegetation.average_index
    stressed = stressed_area_percentage(vegetation.zones)

    if nutrient == Nutrient.NITROGEN:
        if average_ndvi < 0.4:
            return 1.3, "Low vegetation vigor detected - increased nitrogen recommended for chlorophyll synthesis"
        if average_ndvi < 0.6 and stressed > 25:
            return 1.15, "Moderate vegetation stress in some areas - slight nitrogen increase recommended"
        if average_ndvi > 0.8:
            return 0.9, "Excellent vegetation health - reduced nitrogen to avoid over-fertilization"

    elif nutrient == Nutrient.PHOSPHOROUS:
        if average_ndvi < 0.3:
            return 1.2, "Very poor vegetation development - increased phosphorus for root development"
        if stressed > 30:
            return 1.1, "Vegetation stress detected - phosphorus boost for plant energy"

    elif nutrient == Nutrient.POTASSIUM:
        if stressed > 20:
            return 1.15, "Plant stress indicators detected - increased potassium for stress tolerance"

    return 1.0, ""


def generate_zone_recommendations(zones: Sequence[ZoneSummary]) -> List[ZoneRecommendation]:
    recommendations = []

    for zone in zones:
        priority, advice = ZONE_ADVICE.get(zone.status, ("Low", ""))
        recommendations.append(
            ZoneRecommendation(
                zone_id=zone.zone_id,
                area_percentage=zone.area_percentage,
                area_hectares=zone.area_hectares,
                health_status=zone.status,
                recommendation=advice,
                priority=priority,
            )
        )

    return recommendations


def build_vegetation_insights(vegetation: IndexAnalysis) -> VegetationInsights:
    return VegetationInsights(
        overall_health_status=get_overall_health_status(vegetation.average_index),
        average_ndvi=vegetation.average_index,
        stressed_areas_percentage=stressed_area_percentage(vegetation.zones),
        zone_specific_recommendations=generate_zone_recommendations(vegetation.zones),
    )


# =========================
# SCHEDULE & PRODUCTS
# =========================
def calculate_application_schedule(
    total_quantity: float,
    crop_type: Union[Crop, str, None],
) -> List[ScheduleStage]:
    crop = crop_type if isinstance(crop_type, Crop) else Crop.parse(crop_type)
    stages = APPLICATION_SCHEDULES.get(crop, DEFAULT_SCHEDULE)

    schedule = []
    allocated = 0.0
    for position, (stage, percentage) in enumerate(stages, start=1):
        if position == len(stages):
            # Last stage takes the remainder so the split sums to the total
            quantity = round(total_quantity - allocated, 2)
        else:
            quantity = round(total_quantity * percentage / 100, 2)
            allocated += quantity

        schedule.append(ScheduleStage(stage=stage, percentage=percentage, quantity_kg=quantity))

    return schedule


def _required(composition: Sequence[CompositionItem], nutrient: Nutrient) -> float:
    label = nutrient.display_name
    for item in composition:
        if item.nutrient_type.lower() == label:
            return item.quantity_kg
    return 0.0


def generate_commercial_products(
    composition: Sequence[CompositionItem],
    total_quantity: float,
) -> List[CommercialProduct]:
    products = []

    nitrogen = _required(composition, Nutrient.NITROGEN)
    phosphorous = _required(composition, Nutrient.PHOSPHOROUS)
    potassium = _required(composition, Nutrient.POTASSIUM)

    if nitrogen > 0 or phosphorous > 0 or potassium > 0:
        compound = find_product(COMPOUND_PRODUCT)
        quantity = max(
            nitrogen / (compound.nitrogen / 100),
            phosphorous / (compound.phosphorus / 100),
            potassium / (compound.potassium / 100),
        )
        products.append(
            CommercialProduct(
                name=compound.name,
                quantity_kg=round(min(quantity, total_quantity * COMPOUND_SHARE_CAP), 2),
            )
        )

    if nitrogen > 0:
        straight = find_product(NITROGEN_PRODUCT)
        quantity = nitrogen * RESIDUAL_NITROGEN_SHARE / (straight.nitrogen / 100)
        if quantity > MIN_PRODUCT_QUANTITY_KG:
            products.append(CommercialProduct(name=straight.name, quantity_kg=round(quantity, 2)))

    return products


# =========================
# PLAN
# =========================
def _as_status(value: StatusInput) -> NutrientStatus:
    if isinstance(value, NutrientReading):
        return value.status
    try:
        return NutrientStatus(value)
    except ValueError:
        return NutrientStatus.UNKNOWN


def compute_fertilizer_plan(
    nutrient_statuses: Mapping[str, StatusInput],
    crop_type: Optional[str],
    farm_area_hectares: Optional[float],
    vegetation_analysis: Optional[IndexAnalysis] = None,
) -> FertilizerPlan:
    """
    Build a fertilizer plan for one farm.

    ``nutrient_statuses`` maps soil element keys (``nitrogen_total`` ...) to a
    status, a status label or a full NutrientReading. Elements outside the
    crop's dosage table and ``Unknown`` statuses are ignored. An unknown crop
    yields an empty plan whose commentary says so.
    """
    crop = Crop.parse(crop_type)
    if crop is None:
        return FertilizerPlan(
            total_quantity_kg=0,
            commentary=f"No fertilizer dosage data available for crop '{crop_type}'.",
        )

    area = farm_area_or_default(farm_area_hectares)
    dosage = DOSAGE_TABLES[crop]

    total = 0.0
    composition = []
    commentary = []

    for element, raw_status in nutrient_statuses.items():
        nutrient = Nutrient.parse(element)
        status = _as_status(raw_status)
        if nutrient is None or status == NutrientStatus.UNKNOWN:
            continue

        rate = dosage[nutrient][status]
        reason = ""
        if vegetation_analysis is not None:
            multiplier, reason = calculate_vegetation_adjustment(vegetation_analysis, nutrient)
            rate *= multiplier

        required = rate * area
        total += required
        if required <= 0:
            continue

        composition.append(
            CompositionItem(
                nutrient_type=nutrient.display_name.capitalize(),
                quantity_kg=round(required, 2),
                adjustment_reason=reason or None,
            )
        )
        if status.is_deficient:
            commentary.append(DEFICIENCY_COMMENTARY[nutrient])
        if reason:
            commentary.append(reason)

    total = round(total, 2)

    return FertilizerPlan(
        total_quantity_kg=total,
        composition=composition,
        commentary=" ".join(commentary) or NO_DEFICIENCY_COMMENTARY,
        application_schedule=calculate_application_schedule(total, crop),
        commercial_products=generate_commercial_products(composition, total),
        vegetation_insights=(
            build_vegetation_insights(vegetation_analysis) if vegetation_analysis is not None else None
        ),
    )
