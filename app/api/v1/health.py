from fastapi import APIRouter

from app.core.config import settings
from app.schemas.enums import Crop

router = APIRouter()

@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "service": settings.PROJECT_NAME,
        "version": "v1",
        "supported_crops": [crop.value for crop in Crop],
        "color_tolerance": {
            "ndvi": settings.NDVI_COLOR_TOLERANCE,
            "ndwi": settings.NDWI_COLOR_TOLERANCE,
        },
    }
