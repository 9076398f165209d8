"""API v1 router."""

from fastapi import APIRouter

from jewelrydam.api.v1.endpoints import (
    assets,
    clients,
    health,
    projects,
    storage,
    uploads,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(assets.router, prefix="/assets", tags=["assets"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
api_router.include_router(storage.router, prefix="/storage", tags=["storage"])
