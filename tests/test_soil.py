import math

import pytest
from pydantic import TypeAdapter

from app.schemas.enums import NutrientStatus
from app.schemas.soil import DefaultedReading, ResolvedReading, SoilFetchResult
from app.services.soil import (
    SOIL_ELEMENTS,
    classify_nutrient,
    mock_soil_analysis,
    resolve_soil_analysis,
    statuses_of,
)


def test_band_lower_bound_belongs_to_upper_band():
    assert classify_nutrient("nitrogen_total", 11).status == NutrientStatus.LOW
    assert classify_nutrient("nitrogen_total", 10.99).status == NutrientStatus.VERY_LOW


@pytest.mark.parametrize(
    "element, value, status",
    [
        ("nitrogen_total", 41, "High"),
        ("phosphorous_extractable", 50.9, "Medium"),
        ("potassium_extractable", 121, "High"),
        ("magnesium_extractable", 0, "Very Low"),
        ("calcium_extractable", 10, "Low"),
        ("sulphur_extractable", 6, "Medium"),
        ("iron_extractable", 1000, "High"),
    ],
)
def test_classify_each_element(element, value, status):
    assert classify_nutrient(element, value).status == status


def test_name_is_element_prefix():
    assert classify_nutrient("potassium_extractable", 50).name == "potassium"


def test_negative_reading_falls_in_lowest_band():
    assert classify_nutrient("nitrogen_total", -3).status == NutrientStatus.VERY_LOW
    assert classify_nutrient("calcium_extractable", -1).status == NutrientStatus.LOW


def test_unknown_element_and_nan_are_unknown():
    unknown = classify_nutrient("zinc_extractable", 10)
    assert unknown.status == NutrientStatus.UNKNOWN
    assert unknown.name == "zinc"

    assert classify_nutrient("nitrogen_total", math.nan).status == NutrientStatus.UNKNOWN


def test_resolve_keeps_provenance_of_defaulted_readings():
    analysis = resolve_soil_analysis(
        [
            ResolvedReading(element="nitrogen_total", value=18.4, unit="g/kg"),
            DefaultedReading(element="iron_extractable", reason="upstream timeout"),
        ]
    )

    nitrogen = analysis["nitrogen_total"]
    assert nitrogen.status == NutrientStatus.LOW
    assert nitrogen.unit == "g/kg"
    assert nitrogen.provenance == "measured"

    iron = analysis["iron_extractable"]
    assert iron.status == NutrientStatus.MEDIUM
    assert iron.value == 0
    assert iron.unit == "mg/kg"
    assert iron.provenance == "defaulted"


def test_fetch_results_parse_by_kind():
    adapter = TypeAdapter(SoilFetchResult)

    resolved = adapter.validate_python({"kind": "resolved", "element": "nitrogen_total", "value": 12})
    defaulted = adapter.validate_python({"kind": "defaulted", "element": "nitrogen_total"})

    assert isinstance(resolved, ResolvedReading)
    assert isinstance(defaulted, DefaultedReading)


def test_mock_analysis_covers_all_elements():
    analysis = mock_soil_analysis()

    assert set(analysis) == set(SOIL_ELEMENTS)
    statuses = statuses_of(analysis)
    assert statuses["nitrogen_total"] == NutrientStatus.LOW
    assert statuses["sulphur_extractable"] == NutrientStatus.LOW
    assert statuses["potassium_extractable"] == NutrientStatus.HIGH


@pytest.mark.parametrize("element", SOIL_ELEMENTS)
def test_negative_reading_is_never_high(element):
    assert classify_nutrient(element, -0.5).status != NutrientStatus.HIGH
