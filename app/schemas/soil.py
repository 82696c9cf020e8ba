from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from app.schemas.enums import NutrientStatus


class NutrientClassification(BaseModel):
    status: NutrientStatus
    name: str


class NutrientReading(BaseModel):
    element: str
    name: str
    value: float
    unit: str = "mg/kg"
    status: NutrientStatus
    provenance: Literal["measured", "defaulted"] = "measured"


class ResolvedReading(BaseModel):
    kind: Literal["resolved"] = "resolved"
    element: str
    value: float
    unit: str = "mg/kg"


class DefaultedReading(BaseModel):
    """A soil fetch that failed upstream; ``reason`` carries the upstream error."""

    kind: Literal["defaulted"] = "defaulted"
    element: str
    reason: str = ""


SoilFetchResult = Annotated[
    Union[ResolvedReading, DefaultedReading],
    Field(discriminator="kind"),
]
