import math
from typing import List, Optional, Sequence

import numpy as np

from app.schemas.analysis import Alert, IndexAnalysis, ZoneSummary
from app.schemas.enums import VegetationStatus
from app.services.area import acres_to_hectares, farm_area_or_default
from app.services.satellite.aggregator import AREA_DECIMALS, aggregate
from app.services.satellite.classifier import (
    ALPHA_THRESHOLD,
    ColorLegendClassifier,
    IndexValueClassifier,
)
from app.services.satellite.legends import NDVI_LEGEND, NDVI_STATUS_ORDER
from app.services.satellite.raster_decoder import compute_index, decode_raster


NDVI_COLOR_TOLERANCE = 25

HEALTH_SCORES = {
    VegetationStatus.EXCELLENT.value: 90,
    VegetationStatus.GOOD.value: 75,
    VegetationStatus.FAIR.value: 50,
    VegetationStatus.POOR.value: 25,
    VegetationStatus.VERY_POOR.value: 10,
}

STRESSED_STATUSES = (
    VegetationStatus.FAIR.value,
    VegetationStatus.POOR.value,
    VegetationStatus.VERY_POOR.value,
)

# Compared against the reported zone percentages. Largest-remainder rounding
# can report a zone one tenth above its plain 1 dp value (20.04 -> 20.1
# next to 40.03 and 39.93), and the alert and fertilizer thresholds see that
# reported value.
STRESS_ALERT_THRESHOLD = 20


# =========================
# ANALYSIS
# =========================
def analyze_ndvi(
    raster_bytes: bytes,
    farm_size_acres: Optional[float],
    tolerance: int = NDVI_COLOR_TOLERANCE,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> IndexAnalysis:
    """
    Decode an NDVI image rendered with the RdYlGn ramp and summarise it
    into health zones. Raises RasterDecodeError on unreadable bytes.
    """
    raster = decode_raster(raster_bytes)
    return analyze_ndvi_raster(raster, farm_size_acres, tolerance, alpha_threshold)


def analyze_ndvi_raster(
    raster: np.ndarray,
    farm_size_acres: Optional[float],
    tolerance: int = NDVI_COLOR_TOLERANCE,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> IndexAnalysis:
    classifier = ColorLegendClassifier(NDVI_LEGEND, tolerance, alpha_threshold)
    hectares = acres_to_hectares(farm_area_or_default(farm_size_acres))
    return aggregate(raster, classifier, hectares, NDVI_STATUS_ORDER)


def analyze_ndvi_index(index_raster: np.ndarray, farm_size_acres: Optional[float]) -> IndexAnalysis:
    """Same zones computed from raw per-pixel NDVI values instead of colours."""
    classifier = IndexValueClassifier(NDVI_LEGEND)
    hectares = acres_to_hectares(farm_area_or_default(farm_size_acres))
    return aggregate(index_raster, classifier, hectares, NDVI_STATUS_ORDER)


def analyze_ndvi_bands(
    raster_bytes: bytes,
    farm_size_acres: Optional[float],
    red_band: int = 1,
    nir_band: int = 2,
) -> IndexAnalysis:
    """NDVI = (NIR - red) / (NIR + red) from a multispectral raster, bypassing the colour ramp."""
    return analyze_ndvi_index(compute_index(raster_bytes, nir_band, red_band), farm_size_acres)


def mock_ndvi_analysis(farm_size_acres: Optional[float]) -> IndexAnalysis:
    """Canned analysis served when imagery is unavailable."""
    hectares = acres_to_hectares(farm_area_or_default(farm_size_acres))
    canned = [
        (VegetationStatus.EXCELLENT.value, "0.75-0.85", 35.4),
        (VegetationStatus.GOOD.value, "0.6-0.75", 42.8),
        (VegetationStatus.FAIR.value, "0.45-0.6", 21.8),
    ]

    return IndexAnalysis(
        average_index=0.72,
        min_index=0.48,
        max_index=0.85,
        zones=[
            ZoneSummary(
                zone_id=zone_id,
                status=status,
                index_range=index_range,
                area_percentage=percentage,
                area_hectares=round(hectares * percentage / 100, AREA_DECIMALS),
            )
            for zone_id, (status, index_range, percentage) in enumerate(canned, start=1)
        ],
    )


# =========================
# SCORING
# =========================
def calculate_health_index(zones: Sequence[ZoneSummary]) -> int:
    total_score = 0.0
    total_area = 0.0

    for zone in zones:
        total_score += HEALTH_SCORES.get(zone.status, 0) * zone.area_percentage
        total_area += zone.area_percentage

    # Half values round up
    return int(math.floor(total_score / (total_area or 1) + 0.5))


def get_overall_status(health_index: float) -> str:
    if health_index >= 85:
        return VegetationStatus.EXCELLENT.value
    elif health_index >= 70:
        return VegetationStatus.GOOD.value
    elif health_index >= 50:
        return VegetationStatus.FAIR.value
    elif health_index >= 30:
        return VegetationStatus.POOR.value
    else:
        return VegetationStatus.VERY_POOR.value


def get_overall_health_status(average_ndvi: float) -> str:
    """Health label straight from the average NDVI value."""
    if average_ndvi >= 0.8:
        return VegetationStatus.EXCELLENT.value
    elif average_ndvi >= 0.6:
        return VegetationStatus.GOOD.value
    elif average_ndvi >= 0.4:
        return VegetationStatus.FAIR.value
    elif average_ndvi >= 0.2:
        return VegetationStatus.POOR.value
    else:
        return VegetationStatus.VERY_POOR.value


def stressed_area_percentage(zones: Sequence[ZoneSummary]) -> float:
    total = sum(zone.area_percentage for zone in zones if zone.status in STRESSED_STATUSES)
    return round(total, 1)


# =========================
# ALERTS & RECOMMENDATIONS
# =========================
def generate_alerts(zones: Sequence[ZoneSummary]) -> List[Alert]:
    alerts = []

    affected = stressed_area_percentage(zones)
    if affected > STRESS_ALERT_THRESHOLD:
        alerts.append(
            Alert(
                severity="medium",
                type="stress",
                description="Potential water stress in affected sections",
                affected_area_percentage=affected,
            )
        )

    return alerts


def generate_recommendations(
    alerts: Sequence[Alert],
    crop_type: Optional[str],
    growth_stage: Optional[str],
) -> List[str]:
    recommendations = []
    stage = (growth_stage or "").lower()

    for alert in alerts:
        if alert.type != "stress":
            continue
        recommendations.append("Inspect affected areas for water stress")
        recommendations.append("Consider supplemental irrigation for affected area")
        if stage == "vegetative":
            recommendations.append("Ensure adequate nitrogen application at this growth stage")

    if not recommendations:
        recommendations.append("Continue regular monitoring of crop health")
        if stage == "vegetative":
            recommendations.append("Maintain adequate soil moisture for optimal growth")
        elif stage == "reproductive":
            recommendations.append("Ensure sufficient nutrients for fruit/grain development")

    return recommendations
