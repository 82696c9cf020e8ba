from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class LegendEntry(BaseModel):
    """One colour bucket of a rendered index ramp."""

    model_config = ConfigDict(frozen=True)

    rgb: Tuple[int, int, int]
    index_value: float
    status: str
    range_label: str
    # Half-open [index_min, index_max) interval, None means unbounded
    index_min: Optional[float] = None
    index_max: Optional[float] = None


class ZoneSummary(BaseModel):
    zone_id: int
    status: str
    index_range: str
    area_percentage: float
    area_hectares: float


class IndexAnalysis(BaseModel):
    average_index: float
    min_index: float
    max_index: float
    zones: List[ZoneSummary]


class Alert(BaseModel):
    severity: str
    type: str
    description: str
    affected_area_percentage: float
