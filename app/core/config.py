from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Farm Advisory Backend"
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]
    LOG_LEVEL: str = "INFO"

    # Colour matching against the rendered index ramps
    NDVI_COLOR_TOLERANCE: int = 25
    NDWI_COLOR_TOLERANCE: int = 10
    ALPHA_THRESHOLD: int = 128

    DEFAULT_CROP: str = "maize"
    DEFAULT_GROWTH_STAGE: str = "vegetative"
    DEFAULT_FARM_AREA_ACRES: float = 1.0

    class Config:
        env_file = ".env"


settings = Settings()
