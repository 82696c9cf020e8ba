from typing import List, Literal, Optional, Union

from pydantic import BaseModel


class WeatherSummary(BaseModel):
    recent_rainfall_mm: float
    rainfall_anomaly_mm: float


class IrrigationAction(BaseModel):
    action: str
    urgency: str
    target_zones: Union[List[int], Literal["all"]]
    water_quantity: Optional[float] = None
    unit: Optional[str] = None
    description: str


class EfficiencyTips(BaseModel):
    efficiency_tips: List[str]
    recommended_method: str
