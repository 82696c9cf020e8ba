from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.advisory import router as advisory_router
from app.api.v1.health import router as health_router
from app.core.config import settings
from app.core.logging import configure_logging


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,  # frontend
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix=settings.API_PREFIX)
app.include_router(advisory_router, prefix=settings.API_PREFIX)

@app.get("/")
def root():
    return {"status": f"{settings.PROJECT_NAME} running"}
