from __future__ import annotations
"""server/creomotion/api/v1/router.py
~~~~~~~~~~~~~~~~~~~~~~~~
Router principal API v1.
"""
from fastapi import APIRouter
from creomotion.api.v1.endpoints import (
    auth,
    clients,
    deliverables,
    health,
    invoices,
    projects,
    tasks,
    time_entries,
)


api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(clients.router, tags=["clients"])
api_router.include_router(projects.router, tags=["projects"])
api_router.include_router(tasks.router, tags=["tasks"])
api_router.include_router(deliverables.router, tags=["deliverables"])
api_router.include_router(time_entries.router, tags=["time-entries"])
api_router.include_router(invoices.router, tags=["invoices"])
