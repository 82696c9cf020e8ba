from typing import Optional

import numpy as np

from app.schemas.analysis import IndexAnalysis, ZoneSummary
from app.schemas.enums import WaterStressStatus
from app.services.area import acres_to_hectares, farm_area_or_default
from app.services.satellite.aggregator import AREA_DECIMALS, aggregate
from app.services.satellite.classifier import (
    ALPHA_THRESHOLD,
    ColorLegendClassifier,
    IndexValueClassifier,
)
from app.services.satellite.legends import NDWI_LEGEND, NDWI_STATUS_ORDER
from app.services.satellite.raster_decoder import compute_index, decode_raster


# Narrower than the NDVI tolerance; overridable through settings
NDWI_COLOR_TOLERANCE = 10


def analyze_ndwi(
    raster_bytes: bytes,
    farm_size_acres: Optional[float],
    tolerance: int = NDWI_COLOR_TOLERANCE,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> IndexAnalysis:
    """
    Decode an NDWI image painted with the four-colour stress palette into
    water-stress zones. Raises RasterDecodeError on unreadable bytes.
    """
    raster = decode_raster(raster_bytes)
    return analyze_ndwi_raster(raster, farm_size_acres, tolerance, alpha_threshold)


def analyze_ndwi_raster(
    raster: np.ndarray,
    farm_size_acres: Optional[float],
    tolerance: int = NDWI_COLOR_TOLERANCE,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> IndexAnalysis:
    classifier = ColorLegendClassifier(NDWI_LEGEND, tolerance, alpha_threshold)
    hectares = acres_to_hectares(farm_area_or_default(farm_size_acres))
    return aggregate(raster, classifier, hectares, NDWI_STATUS_ORDER)


def analyze_ndwi_index(index_raster: np.ndarray, farm_size_acres: Optional[float]) -> IndexAnalysis:
    classifier = IndexValueClassifier(NDWI_LEGEND)
    hectares = acres_to_hectares(farm_area_or_default(farm_size_acres))
    return aggregate(index_raster, classifier, hectares, NDWI_STATUS_ORDER)


def analyze_ndwi_bands(
    raster_bytes: bytes,
    farm_size_acres: Optional[float],
    green_band: int = 1,
    nir_band: int = 2,
) -> IndexAnalysis:
    return analyze_ndwi_index(compute_index(raster_bytes, green_band, nir_band), farm_size_acres)


def get_overall_stress_level(average_ndwi: float) -> str:
    if average_ndwi < 0.1:
        return "High"
    elif average_ndwi < 0.2:
        return "Moderate"
    elif average_ndwi < 0.3:
        return "Low"
    else:
        return "Very Low"


def mock_ndwi_analysis(farm_size_acres: Optional[float]) -> IndexAnalysis:
    hectares = acres_to_hectares(farm_area_or_default(farm_size_acres))
    canned = [
        (WaterStressStatus.LOW.value, "0.2-0.3", 45.7),
        (WaterStressStatus.MODERATE.value, "0.1-0.2", 38.1),
        (WaterStressStatus.HIGH.value, "-0.1-0.1", 16.2),
    ]

    return IndexAnalysis(
        average_index=0.18,
        min_index=0.05,
        max_index=0.25,
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
