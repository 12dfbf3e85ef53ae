"""CORS configuration."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guardian.core.config import settings


def configure_cors(app: FastAPI) -> None:
    origins = [o.strip() for o in (settings.BACKEND_CORS_ORIGINS or "").split(",") if o.strip()]
    if not origins:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
