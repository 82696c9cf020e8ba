import numpy as np
import pytest

from app.core.exceptions import RasterDecodeError
from app.schemas.analysis import ZoneSummary
from app.services.ndvi_engine import (
    analyze_ndvi,
    analyze_ndvi_bands,
    analyze_ndvi_index,
    analyze_ndvi_raster,
    calculate_health_index,
    generate_alerts,
    generate_recommendations,
    get_overall_health_status,
    get_overall_status,
    mock_ndvi_analysis,
)
from app.services.satellite.legends import NDVI_LEGEND


def zone(zone_id, status, percentage):
    return ZoneSummary(
        zone_id=zone_id,
        status=status,
        index_range="",
        area_percentage=percentage,
        area_hectares=0,
    )


def test_area_conversion_from_acres(make_raster):
    analysis = analyze_ndvi_raster(make_raster((NDVI_LEGEND[0].rgb, 16)), farm_size_acres=2.5)

    assert len(analysis.zones) == 1
    assert analysis.zones[0].status == "Excellent"
    assert analysis.zones[0].index_range == "0.8-0.9"
    assert analysis.zones[0].area_percentage == 100.0
    assert analysis.zones[0].area_hectares == pytest.approx(1.011715, abs=1e-4)


def test_missing_area_defaults_to_one_acre(make_raster):
    analysis = analyze_ndvi_raster(make_raster((NDVI_LEGEND[0].rgb, 4)), farm_size_acres=None)
    assert analysis.zones[0].area_hectares == pytest.approx(0.4047)


def test_analyze_ndvi_decodes_geotiff(make_raster, encode_geotiff):
    raster = make_raster((NDVI_LEGEND[0].rgb, 6), (NDVI_LEGEND[6].rgb, 2))
    analysis = analyze_ndvi(encode_geotiff(raster), farm_size_acres=1)

    assert [z.status for z in analysis.zones] == ["Excellent", "Poor"]
    assert [z.area_percentage for z in analysis.zones] == [75.0, 25.0]


@pytest.mark.parametrize("payload", [b"", b"definitely not an image"])
def test_analyze_ndvi_rejects_unreadable_bytes(payload):
    with pytest.raises(RasterDecodeError):
        analyze_ndvi(payload, farm_size_acres=1)


def test_analyze_ndvi_index_from_raw_values():
    values = np.array([[0.85, 0.82], [0.55, np.nan]])
    analysis = analyze_ndvi_index(values, farm_size_acres=1)

    assert [z.status for z in analysis.zones] == ["Excellent", "Good"]
    assert analysis.zones[0].area_percentage == pytest.approx(66.7)


def test_health_index_weighted_by_area():
    zones = [zone(1, "Excellent", 60), zone(2, "Poor", 40)]
    index = calculate_health_index(zones)

    assert index == 64
    assert get_overall_status(index) == "Fair"


def test_health_index_rounds_half_up():
    zones = [zone(1, "Excellent", 50), zone(2, "Good", 50)]
    assert calculate_health_index(zones) == 83


def test_health_index_without_zones():
    assert calculate_health_index([]) == 0
    assert get_overall_status(0) == "Very Poor"


@pytest.mark.parametrize(
    "index, status",
    [(85, "Excellent"), (84, "Good"), (70, "Good"), (50, "Fair"), (30, "Poor"), (29, "Very Poor")],
)
def test_overall_status_thresholds(index, status):
    assert get_overall_status(index) == status


@pytest.mark.parametrize(
    "ndvi, status",
    [(0.8, "Excellent"), (0.6, "Good"), (0.45, "Fair"), (0.2, "Poor"), (0.1, "Very Poor")],
)
def test_overall_health_status_from_average_ndvi(ndvi, status):
    assert get_overall_health_status(ndvi) == status


def test_stress_alert_above_threshold():
    alerts = generate_alerts([zone(1, "Good", 79), zone(2, "Fair", 21)])

    assert len(alerts) == 1
    assert alerts[0].type == "stress"
    assert alerts[0].affected_area_percentage == 21.0


def test_no_alert_below_threshold():
    assert generate_alerts([zone(1, "Good", 81), zone(2, "Poor", 19)]) == []
    assert generate_alerts([zone(1, "Good", 80), zone(2, "Very Poor", 20)]) == []


def test_stressed_area_combines_all_stressed_statuses():
    alerts = generate_alerts(
        [zone(1, "Good", 79), zone(2, "Fair", 7), zone(3, "Poor", 7), zone(4, "Very Poor", 7)]
    )
    assert alerts[0].affected_area_percentage == 21.0


def test_recommendations_for_stress_alert():
    alerts = generate_alerts([zone(1, "Fair", 100)])
    recommendations = generate_recommendations(alerts, "maize", "Vegetative")

    assert recommendations == [
        "Inspect affected areas for water stress",
        "Consider supplemental irrigation for affected area",
        "Ensure adequate nitrogen application at this growth stage",
    ]


def test_recommendations_without_alerts():
    assert generate_recommendations([], "maize", "reproductive") == [
        "Continue regular monitoring of crop health",
        "Ensure sufficient nutrients for fruit/grain development",
    ]
    assert generate_recommendations([], "maize", None) == ["Continue regular monitoring of crop health"]


def test_mock_analysis_shape():
    analysis = mock_ndvi_analysis(2.0)

    assert analysis.average_index == 0.72
    assert [z.status for z in analysis.zones] == ["Excellent", "Good", "Fair"]
    assert sum(z.area_percentage for z in analysis.zones) == pytest.approx(100.0)
    assert analysis.zones[0].area_hectares == pytest.approx(2.0 * 0.404686 * 0.354, abs=1e-4)


def test_analyze_ndvi_bands_computes_ratio(encode_geotiff):
    red = np.array([[10, 40, 0]])
    nir = np.array([[90, 60, 0]])
    analysis = analyze_ndvi_bands(encode_geotiff(np.dstack([red, nir])), farm_size_acres=1)

    # (0, 0) pixel has no defined ratio and is skipped
    assert [z.status for z in analysis.zones] == ["Excellent", "Poor"]
    assert [z.area_percentage for z in analysis.zones] == [50.0, 50.0]


def test_analyze_ndvi_bands_rejects_missing_band(encode_geotiff):
    single = np.array([[10, 40]])
    with pytest.raises(RasterDecodeError):
        analyze_ndvi_bands(encode_geotiff(single), farm_size_acres=1)


def test_stress_alert_uses_reported_percentage():
    raster = np.concatenate(
        [
            np.repeat(np.array([[NDVI_LEGEND[0].rgb + (255,)]], dtype=np.uint8), 3993, axis=1),
            np.repeat(np.array([[NDVI_LEGEND[2].rgb + (255,)]], dtype=np.uint8), 4003, axis=1),
            np.repeat(np.array([[NDVI_LEGEND[4].rgb + (255,)]], dtype=np.uint8), 2004, axis=1),
        ],
        axis=1,
    )
    analysis = analyze_ndvi_raster(raster, farm_size_acres=1)

    # Fair is 20.04 % of the pixels but reported as 20.1
    assert [z.area_percentage for z in analysis.zones] == [39.9, 40.0, 20.1]
    assert len(generate_alerts(analysis.zones)) == 1
