"""
Aggregates all v1 API routers into a single APIRouter.
"""
from __future__ import annotations

from fastapi import APIRouter

from app.api.v1 import dashboard, tasks, users

api_router = APIRouter()

api_router.include_router(dashboard.router)
api_router.include_router(tasks.router)
api_router.include_router(users.router)
