from fastapi import FastAPI

from medschedule.api.routes_medications import router as medications_router
from medschedule.api.routes_schedule import router as schedule_router
from medschedule.core.config import setup_logging

SERVICE_NAME = "Medication Schedule Service"

def create_app() -> FastAPI:
    setup_logging()
    api = FastAPI(title=SERVICE_NAME, version="1.0")
    api.include_router(schedule_router)
    api.include_router(medications_router)

    @api.get("/health")
    def health():
        return {"ok": True}

    @api.get("/")
    def root():
        return {"ok": True, "service": SERVICE_NAME, "routes": ["/schedule", "/medications"]}

    return api

app = create_app()
