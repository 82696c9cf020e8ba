from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from app.schemas.analysis import Alert, IndexAnalysis
from app.schemas.fertilizer import FertilizerPlan
from app.schemas.irrigation import EfficiencyTips, IrrigationAction
from app.schemas.soil import NutrientReading, SoilFetchResult


DataSource = Literal["raster", "mock"]


class CropHealthResponse(BaseModel):
    health_index: int
    overall_status: str
    ndvi_analysis: IndexAnalysis
    alerts: List[Alert]
    recommendations: List[str]
    data_source: DataSource
    error_message: Optional[str] = None


class WaterStressResponse(BaseModel):
    ndwi_analysis: IndexAnalysis
    overall_stress_level: str
    irrigation_recommendations: List[IrrigationAction]
    irrigation_tips: EfficiencyTips
    recent_rainfall_mm: float
    rainfall_anomaly_mm: float
    data_source: DataSource
    error_message: Optional[str] = None


class FertilizerRequest(BaseModel):
    crop: Optional[str] = None
    farm_size_acres: Optional[float] = None
    soil_readings: List[SoilFetchResult] = []
    vegetation_analysis: Optional[IndexAnalysis] = None


class FertilizerResponse(BaseModel):
    crop: str
    farm_size_hectares: float
    soil_analysis: Dict[str, NutrientReading]
    fertilizer_plan: FertilizerPlan
    data_source: Literal["soil_readings", "mock"]
