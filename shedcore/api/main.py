"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shedcore.api.config import Settings
from shedcore.api.routes import router
from shedcore.utils import logging_config


def create_app() -> FastAPI:
    Settings.validate()
    logging_config.configure(Settings.LOG_LEVEL)

    app = FastAPI(
        title="Shed Core",
        description="Geometry and constraint core for parametric gabled sheds",
        version="0.1.0",
        debug=Settings.DEBUG,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    return app


app = create_app()
