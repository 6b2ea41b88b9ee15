"""
Task Pydantic schemas.
Includes create/update/read variants.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ── Create ────────────────────────────────────────────────────────────────────

class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=10000)


# ── Update ────────────────────────────────────────────────────────────────────

class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=10000)


# ── Read ──────────────────────────────────────────────────────────────────────

class TaskRead(BaseModel):
    id: str
    title: str | None
    description: str | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}
