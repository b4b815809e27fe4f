from __future__ import annotations
"""server/creomotion/main.py
~~~~~~~~~~~~~~~~~~~~~~~~
Point d'entrée FastAPI.
"""
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from creomotion.api.v1.router import api_router
from creomotion.core.config import settings
from creomotion.core.logging import setup_logging
from creomotion.core.middleware import install_global_middleware

app = FastAPI(title="CreoMotion API", version="0.1.0")

allow_origins: List[str] = []
if origins := getattr(settings, "CORS_ALLOW_ORIGINS", None):
    allow_origins = [o.strip() for o in origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# handlers d'exceptions {"error": ...}
install_global_middleware(app)


@app.on_event("startup")
async def startup() -> None:
    setup_logging()


app.include_router(api_router, prefix="/api/v1")
