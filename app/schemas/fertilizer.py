from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CompositionItem(BaseModel):
    nutrient_type: str
    quantity_kg: float
    unit: str = "kg"
    adjustment_reason: Optional[str] = None


class ScheduleStage(BaseModel):
    stage: str
    percentage: float
    quantity_kg: float
    unit: str = "kg"


class CommercialProduct(BaseModel):
    name: str
    quantity_kg: float
    unit: str = "kg"


class ZoneRecommendation(BaseModel):
    zone_id: int
    area_percentage: float
    area_hectares: float
    health_status: str
    recommendation: str
    priority: str


class VegetationInsights(BaseModel):
    overall_health_status: str
    average_ndvi: float
    stressed_areas_percentage: float
    zone_specific_recommendations: List[ZoneRecommendation]


class FertilizerPlan(BaseModel):
    total_quantity_kg: float
    unit: str = "kg"
    composition: List[CompositionItem] = []
    commentary: str = ""
    application_schedule: List[ScheduleStage] = []
    commercial_products: List[CommercialProduct] = []
    vegetation_insights: Optional[VegetationInsights] = None


class FertilizerProduct(BaseModel):
    """A commercial product and its guaranteed analysis in percent by mass."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    nitrogen: float = 0
    phosphorus: float = 0
    potassium: float = 0
    sulphur: float = 0
