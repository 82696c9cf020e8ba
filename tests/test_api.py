import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.satellite.legends import NDVI_LEGEND, NDWI_LEGEND


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "maize" in body["supported_crops"]
    assert body["color_tolerance"] == {"ndvi": 25, "ndwi": 10}


def test_crop_health_from_raster(client, make_raster, encode_geotiff):
    raster = make_raster((NDVI_LEGEND[0].rgb, 6), (NDVI_LEGEND[6].rgb, 4))

    response = client.post(
        "/api/v1/advisory/crop_health",
        files={"image": ("ndvi.tif", encode_geotiff(raster), "image/tiff")},
        data={"farm_size_acres": "2.5", "crop": "maize", "growth_stage": "vegetative"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data_source"] == "raster"
    assert body["error_message"] is None
    # (90 * 60 + 25 * 40) / 100
    assert body["health_index"] == 64
    assert body["overall_status"] == "Fair"
    assert [alert["type"] for alert in body["alerts"]] == ["stress"]


def test_crop_health_falls_back_to_mock(client):
    response = client.post(
        "/api/v1/advisory/crop_health",
        files={"image": ("broken.png", b"not an image", "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data_source"] == "mock"
    assert body["error_message"]
    assert body["ndvi_analysis"]["average_index"] == 0.72


def test_crop_health_rejects_empty_upload(client):
    response = client.post(
        "/api/v1/advisory/crop_health",
        files={"image": ("empty.png", b"", "image/png")},
    )
    assert response.status_code == 400


def test_water_stress(client, make_raster, encode_geotiff):
    raster = make_raster((NDWI_LEGEND[0].rgb, 5), (NDWI_LEGEND[2].rgb, 5))

    response = client.post(
        "/api/v1/advisory/water_stress",
        files={"image": ("ndwi.tif", encode_geotiff(raster), "image/tiff")},
        data={"crop": "rice", "recent_rainfall_mm": "4", "latitude": "12"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data_source"] == "raster"
    assert body["rainfall_anomaly_mm"] == -4.0
    assert body["overall_stress_level"] == "Moderate"
    actions = [action["action"] for action in body["irrigation_recommendations"]]
    assert actions[0] == "Irrigation"
    assert "Mulching" in actions
    assert len(body["irrigation_tips"]["efficiency_tips"]) == 5


def test_water_stress_uses_mock_weather_without_rainfall(client, make_raster, encode_geotiff):
    raster = make_raster((NDWI_LEGEND[3].rgb, 4))

    response = client.post(
        "/api/v1/advisory/water_stress",
        files={"image": ("ndwi.tif", encode_geotiff(raster), "image/tiff")},
    )

    body = response.json()
    assert body["recent_rainfall_mm"] == 12.4
    assert body["rainfall_anomaly_mm"] == -8.6
    assert body["irrigation_recommendations"] == []


def test_fertilizer_from_soil_readings(client):
    response = client.post(
        "/api/v1/advisory/fertilizer",
        json={
            "crop": "maize",
            "farm_size_acres": 2.5,
            "soil_readings": [
                {"kind": "resolved", "element": "nitrogen_total", "value": 15},
                {"kind": "defaulted", "element": "phosphorous_extractable", "reason": "timeout"},
            ],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data_source"] == "soil_readings"
    assert body["farm_size_hectares"] == pytest.approx(1.0117)
    assert body["soil_analysis"]["nitrogen_total"]["status"] == "Low"
    assert body["soil_analysis"]["phosphorous_extractable"]["provenance"] == "defaulted"

    composition = {item["nutrient_type"]: item["quantity_kg"] for item in body["fertilizer_plan"]["composition"]}
    assert composition["Nitrogen"] == pytest.approx(135 * 1.011715, abs=0.01)
    assert composition["Phosphorous"] == pytest.approx(30 * 1.011715, abs=0.01)


def test_fertilizer_without_readings_uses_mock_soil(client):
    response = client.post("/api/v1/advisory/fertilizer", json={"crop": "rice"})

    body = response.json()
    assert body["data_source"] == "mock"
    assert len(body["soil_analysis"]) == 7
    assert len(body["fertilizer_plan"]["application_schedule"]) == 3


def test_fertilizer_rejects_unknown_reading_kind(client):
    response = client.post(
        "/api/v1/advisory/fertilizer",
        json={"soil_readings": [{"kind": "guessed", "element": "nitrogen_total"}]},
    )
    assert response.status_code == 422


def test_water_stress_falls_back_to_mock_actions(client):
    response = client.post(
        "/api/v1/advisory/water_stress",
        files={"image": ("broken.png", b"not an image", "image/png")},
        data={"recent_rainfall_mm": "0", "rainfall_anomaly_mm": "-30"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data_source"] == "mock"
    assert body["error_message"]
    assert [a["action"] for a in body["irrigation_recommendations"]] == ["Irrigation", "Mulching"]
    assert body["irrigation_recommendations"][0]["water_quantity"] == 12.5


def test_crop_health_from_palette_png(client, make_raster, encode_palette):
    raster = make_raster((NDVI_LEGEND[0].rgb, 6), (NDVI_LEGEND[6].rgb, 4))

    response = client.post(
        "/api/v1/advisory/crop_health",
        files={"image": ("ndvi.png", encode_palette(raster, driver="PNG"), "image/png")},
    )

    body = response.json()
    assert body["data_source"] == "raster"
    assert [z["status"] for z in body["ndvi_analysis"]["zones"]] == ["Excellent", "Poor"]
    assert body["health_index"] == 64
