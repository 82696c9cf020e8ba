import math
from typing import Dict, Iterable, Mapping, Union

from app.data.soil import SOIL_BREAKPOINTS
from app.schemas.enums import Nutrient, NutrientStatus
from app.schemas.soil import (
    DefaultedReading,
    NutrientClassification,
    NutrientReading,
    ResolvedReading,
)


SOIL_ELEMENTS = tuple(nutrient.value for nutrient in Nutrient)

DEFAULT_UNIT = "mg/kg"


def classify_nutrient(element_name: str, value: float) -> NutrientClassification:
    """
    Map a soil property reading onto its status band.

    Unknown elements and NaN readings are reported as ``Unknown`` rather than
    raised. Negative readings land in the lowest band.
    """
    nutrient = Nutrient.parse(element_name)
    if nutrient is None or math.isnan(value):
        return NutrientClassification(
            status=NutrientStatus.UNKNOWN,
            name=element_name.split("_")[0],
        )

    bands = SOIL_BREAKPOINTS[nutrient]
    for lower, upper, status in bands:
        if value >= lower and (upper is None or value < upper):
            return NutrientClassification(status=status, name=nutrient.display_name)

    # Below the first band (negative readings) counts as the lowest status,
    # not as High
    return NutrientClassification(status=bands[0][2], name=nutrient.display_name)


def resolve_soil_analysis(
    results: Iterable[Union[ResolvedReading, DefaultedReading]],
) -> Dict[str, NutrientReading]:
    """
    Build the per-element analysis from upstream fetch results.

    Failed fetches keep the historical default (Medium, value 0) so the
    dosage rules see the same input as before, but carry
    ``provenance="defaulted"`` so callers can tell them apart.
    """
    analysis = {}

    for result in results:
        if isinstance(result, ResolvedReading):
            classification = classify_nutrient(result.element, result.value)
            analysis[result.element] = NutrientReading(
                element=result.element,
                name=classification.name,
                value=result.value,
                unit=result.unit,
                status=classification.status,
            )
        else:
            analysis[result.element] = NutrientReading(
                element=result.element,
                name=result.element.split("_")[0],
                value=0,
                unit=DEFAULT_UNIT,
                status=NutrientStatus.MEDIUM,
                provenance="defaulted",
            )

    return analysis


def statuses_of(analysis: Mapping[str, NutrientReading]) -> Dict[str, NutrientStatus]:
    return {element: reading.status for element, reading in analysis.items()}


def mock_soil_analysis() -> Dict[str, NutrientReading]:
    """Canned seven-nutrient analysis served when soil data is unavailable."""
    canned = {
        Nutrient.NITROGEN: 18.4,
        Nutrient.PHOSPHOROUS: 35.6,
        Nutrient.POTASSIUM: 156.2,
        Nutrient.MAGNESIUM: 42.1,
        Nutrient.CALCIUM: 112.8,
        Nutrient.SULPHUR: 4.6,
        Nutrient.IRON: 85.3,
    }

    return resolve_soil_analysis(
        ResolvedReading(element=nutrient.value, value=value, unit=DEFAULT_UNIT)
        for nutrient, value in canned.items()
    )
