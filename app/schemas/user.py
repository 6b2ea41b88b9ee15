"""
User Pydantic schemas.
Covers creation from the dashboard form, profile updates and reads.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


# ── Create ────────────────────────────────────────────────────────────────────

class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)


# ── Update ────────────────────────────────────────────────────────────────────

class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    image: str | None = Field(default=None, max_length=500)


# ── Read ──────────────────────────────────────────────────────────────────────

class UserRead(BaseModel):
    id: str
    name: str
    email: EmailStr
    email_verified: bool
    image: str | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}
