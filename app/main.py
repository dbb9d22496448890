from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.pipeline import shutdown_default_pipeline


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    try:
        yield
    finally:
        shutdown_default_pipeline()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Local AQI Estimator",
        description="Distance-weighted PM2.5 air quality index from nearby PurpleAir sensors.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


app = create_app()
