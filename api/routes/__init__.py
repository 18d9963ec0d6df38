from __future__ import annotations

from fastapi import APIRouter

from api.routes import stamps


def get_api_router() -> APIRouter:
    router = APIRouter()

    router.include_router(stamps.router, tags=["stamps"])

    return router
