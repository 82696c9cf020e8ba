from typing import List, Optional

from app.data.crops import (
    CROP_WATER_REQUIREMENTS,
    DEFAULT_WATER_REQUIREMENTS,
    GROWTH_STAGE_ALIASES,
)
from app.schemas.analysis import IndexAnalysis
from app.schemas.enums import Crop, WaterStressStatus
from app.schemas.irrigation import EfficiencyTips, IrrigationAction, WeatherSummary


STRESS_MULTIPLIERS = {
    WaterStressStatus.HIGH.value: (1.5, "High"),
    WaterStressStatus.MODERATE.value: (1.2, "Medium"),
}

MIN_IRRIGATION_MM = 5
CONSERVATION_ANOMALY_MM = -15

CROP_EFFICIENCY_TIPS = {
    Crop.RICE: "Maintain 2-5cm water depth in paddy fields during vegetative stage",
    Crop.MAIZE: "Critical irrigation periods: tasseling and grain filling stages",
    Crop.CASSAVA: "Reduce irrigation frequency but increase amount during dry season",
}


def get_crop_water_requirement(crop_type: Optional[str], growth_stage: Optional[str]) -> float:
    """Weekly water need in mm; unknown stages count as vegetative."""
    stage = GROWTH_STAGE_ALIASES.get((growth_stage or "vegetative").lower(), "vegetative")
    requirements = CROP_WATER_REQUIREMENTS.get(Crop.parse(crop_type), DEFAULT_WATER_REQUIREMENTS)
    return requirements[stage]


def generate_irrigation_recommendations(
    ndwi_analysis: IndexAnalysis,
    weather: WeatherSummary,
    crop_type: Optional[str],
    growth_stage: Optional[str],
) -> List[IrrigationAction]:
    recommendations = []

    weekly_need = get_crop_water_requirement(crop_type, growth_stage)
    deficit = max(0.0, weekly_need - weather.recent_rainfall_mm)

    for zone in ndwi_analysis.zones:
        if zone.status not in STRESS_MULTIPLIERS:
            continue

        multiplier, urgency = STRESS_MULTIPLIERS[zone.status]
        amount = deficit * multiplier
        if amount <= MIN_IRRIGATION_MM:
            continue

        recommendations.append(
            IrrigationAction(
                action="Irrigation",
                urgency=urgency,
                target_zones=[zone.zone_id],
                water_quantity=round(amount, 1),
                unit="mm",
                description=f"Apply {amount:.1f}mm of water to {zone.status.lower()} areas",
            )
        )

    high_stress = [
        zone.zone_id for zone in ndwi_analysis.zones if zone.status == WaterStressStatus.HIGH.value
    ]
    if high_stress:
        recommendations.append(
            IrrigationAction(
                action="Mulching",
                urgency="Low",
                target_zones=high_stress,
                description="Apply mulch to reduce water loss in high stress areas",
            )
        )

    if weather.rainfall_anomaly_mm < CONSERVATION_ANOMALY_MM:
        recommendations.append(
            IrrigationAction(
                action="Water Conservation",
                urgency="Medium",
                target_zones="all",
                description="Implement water conservation practices due to low recent rainfall",
            )
        )

    if recommendations:
        recommendations.append(
            IrrigationAction(
                action="Irrigation Timing",
                urgency="Low",
                target_zones="all",
                description=(
                    "Apply irrigation early morning (6-8 AM) or late evening (6-8 PM) to minimize evaporation"
                ),
            )
        )

    return recommendations


def irrigation_efficiency_tips(crop_type: Optional[str]) -> EfficiencyTips:
    tips = [
        "Use drip irrigation or micro-sprinklers for water efficiency",
        "Monitor soil moisture at 6-inch depth before irrigating",
        "Apply irrigation when soil moisture drops to 50% of field capacity",
        "Avoid irrigation during windy conditions to reduce evaporation",
    ]

    crop_tip = CROP_EFFICIENCY_TIPS.get(Crop.parse(crop_type))
    if crop_tip:
        tips.append(crop_tip)

    return EfficiencyTips(
        efficiency_tips=tips,
        recommended_method="Drip irrigation or controlled sprinkler systems",
    )


def mock_irrigation_recommendations() -> List[IrrigationAction]:
    return [
        IrrigationAction(
            action="Irrigation",
            urgency="Medium",
            target_zones=[2, 3],
            water_quantity=12.5,
            unit="mm",
            description="Apply 12.5mm of water to moderate and high stress areas",
        ),
        IrrigationAction(
            action="Mulching",
            urgency="Low",
            target_zones=[3],
            description="Apply mulch to reduce water loss in high stress areas",
        ),
    ]
