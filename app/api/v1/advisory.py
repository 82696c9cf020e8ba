import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from app.core.config import settings
from app.core.exceptions import RasterDecodeError
from app.schemas.advisory import (
    CropHealthResponse,
    FertilizerRequest,
    FertilizerResponse,
    WaterStressResponse,
)
from app.schemas.irrigation import WeatherSummary
from app.services.area import acres_to_hectares, farm_area_or_default
from app.services.fertilizer import compute_fertilizer_plan
from app.services.irrigation import (
    generate_irrigation_recommendations,
    irrigation_efficiency_tips,
    mock_irrigation_recommendations,
)
from app.services.ndvi_engine import (
    analyze_ndvi,
    calculate_health_index,
    generate_alerts,
    generate_recommendations,
    get_overall_status,
    mock_ndvi_analysis,
)
from app.services.ndwi_engine import analyze_ndwi, get_overall_stress_level, mock_ndwi_analysis
from app.services.soil import mock_soil_analysis, resolve_soil_analysis, statuses_of
from app.services.weather import MOCK_WEATHER, rainfall_anomaly

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/advisory", tags=["advisory"])


def _read_upload(image: UploadFile) -> bytes:
    raster_bytes = image.file.read()
    if not raster_bytes:
        raise HTTPException(status_code=400, detail="Uploaded image is empty")
    return raster_bytes


def _farm_size(farm_size_acres: Optional[float]) -> float:
    return farm_area_or_default(farm_size_acres, settings.DEFAULT_FARM_AREA_ACRES)


# =========================
# CROP HEALTH (NDVI)
# =========================
@router.post("/crop_health", response_model=CropHealthResponse)
def crop_health(
    image: UploadFile = File(...),
    farm_size_acres: Optional[float] = Form(None),
    crop: Optional[str] = Form(None),
    growth_stage: Optional[str] = Form(None),
):
    raster_bytes = _read_upload(image)
    acres = _farm_size(farm_size_acres)
    crop = crop or settings.DEFAULT_CROP
    growth_stage = growth_stage or settings.DEFAULT_GROWTH_STAGE

    data_source = "raster"
    error_message = None
    try:
        analysis = analyze_ndvi(
            raster_bytes,
            acres,
            tolerance=settings.NDVI_COLOR_TOLERANCE,
            alpha_threshold=settings.ALPHA_THRESHOLD,
        )
    except RasterDecodeError as exc:
        logger.warning("NDVI raster %r could not be decoded, serving mock analysis: %s", image.filename, exc)
        analysis = mock_ndvi_analysis(acres)
        data_source = "mock"
        error_message = str(exc)

    health_index = calculate_health_index(analysis.zones)
    alerts = generate_alerts(analysis.zones)

    logger.info(
        "Crop health for %s (%.2f acres): index=%d zones=%d alerts=%d",
        crop, acres, health_index, len(analysis.zones), len(alerts),
    )

    return CropHealthResponse(
        health_index=health_index,
        overall_status=get_overall_status(health_index),
        ndvi_analysis=analysis,
        alerts=alerts,
        recommendations=generate_recommendations(alerts, crop, growth_stage),
        data_source=data_source,
        error_message=error_message,
    )


# =========================
# WATER STRESS (NDWI)
# =========================
@router.post("/water_stress", response_model=WaterStressResponse)
def water_stress(
    image: UploadFile = File(...),
    farm_size_acres: Optional[float] = Form(None),
    crop: Optional[str] = Form(None),
    growth_stage: Optional[str] = Form(None),
    recent_rainfall_mm: Optional[float] = Form(None),
    rainfall_anomaly_mm: Optional[float] = Form(None),
    latitude: Optional[float] = Form(None),
):
    raster_bytes = _read_upload(image)
    acres = _farm_size(farm_size_acres)
    crop = crop or settings.DEFAULT_CROP
    growth_stage = growth_stage or settings.DEFAULT_GROWTH_STAGE

    data_source = "raster"
    error_message = None
    try:
        analysis = analyze_ndwi(
            raster_bytes,
            acres,
            tolerance=settings.NDWI_COLOR_TOLERANCE,
            alpha_threshold=settings.ALPHA_THRESHOLD,
        )
    except RasterDecodeError as exc:
        logger.warning("NDWI raster %r could not be decoded, serving mock analysis: %s", image.filename, exc)
        analysis = mock_ndwi_analysis(acres)
        data_source = "mock"
        error_message = str(exc)

    if recent_rainfall_mm is None:
        weather = MOCK_WEATHER
    else:
        if rainfall_anomaly_mm is None and latitude is not None:
            rainfall_anomaly_mm = rainfall_anomaly(recent_rainfall_mm, latitude)
        weather = WeatherSummary(
            recent_rainfall_mm=recent_rainfall_mm,
            rainfall_anomaly_mm=rainfall_anomaly_mm or 0.0,
        )

    if data_source == "mock":
        recommendations = mock_irrigation_recommendations()
    else:
        recommendations = generate_irrigation_recommendations(analysis, weather, crop, growth_stage)

    logger.info(
        "Water stress for %s (%.2f acres): avg_ndwi=%.2f actions=%d",
        crop, acres, analysis.average_index, len(recommendations),
    )

    return WaterStressResponse(
        ndwi_analysis=analysis,
        overall_stress_level=get_overall_stress_level(analysis.average_index),
        irrigation_recommendations=recommendations,
        irrigation_tips=irrigation_efficiency_tips(crop),
        recent_rainfall_mm=weather.recent_rainfall_mm,
        rainfall_anomaly_mm=weather.rainfall_anomaly_mm,
        data_source=data_source,
        error_message=error_message,
    )


# =========================
# FERTILIZER
# =========================
@router.post("/fertilizer", response_model=FertilizerResponse)
def fertilizer(payload: FertilizerRequest):
    crop = payload.crop or settings.DEFAULT_CROP
    hectares = acres_to_hectares(_farm_size(payload.farm_size_acres))

    if payload.soil_readings:
        soil_analysis = resolve_soil_analysis(payload.soil_readings)
        data_source = "soil_readings"
    else:
        logger.info("No soil readings supplied, using mock soil analysis")
        soil_analysis = mock_soil_analysis()
        data_source = "mock"

    defaulted = [element for element, reading in soil_analysis.items() if reading.provenance == "defaulted"]
    if defaulted:
        logger.warning("Soil readings defaulted to Medium for: %s", ", ".join(defaulted))

    plan = compute_fertilizer_plan(
        statuses_of(soil_analysis),
        crop,
        hectares,
        vegetation_analysis=payload.vegetation_analysis,
    )

    return FertilizerResponse(
        crop=crop,
        farm_size_hectares=round(hectares, 4),
        soil_analysis=soil_analysis,
        fertilizer_plan=plan,
        data_source=data_source,
    )
