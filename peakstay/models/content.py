"""Pydantic schemas for reviews, concierge services and site settings."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AppTheme(str, Enum):
    NEW_YEAR = "NEW_YEAR"
    DIWALI = "DIWALI"
    HOLI = "HOLI"
    REPUBLIC_DAY = "REPUBLIC_DAY"
    WEEKEND_OFFER = "WEEKEND_OFFER"
    SUMMER_WEEKEND = "SUMMER_WEEKEND"
    DEFAULT = "DEFAULT"


class ReviewDraft(BaseModel):
    name: str = "Guest"
    content: str = ""
    rating: int = Field(5, ge=1, le=5)
    avatar: Optional[str] = None


class Review(ReviewDraft):
    id: str


class ConciergeServiceDraft(BaseModel):
    title: str = "Untitled Service"
    description: str = ""
    icon: str = "fa-concierge-bell"


class ConciergeService(ConciergeServiceDraft):
    id: str


class SiteSettings(BaseModel):
    active_theme: AppTheme = AppTheme.NEW_YEAR
    promo_text: str = "CELEBRATING 2025: USE CODE NY25 FOR EXCLUSIVE DISCOUNTS"
    whatsapp_number: str = ""


class SiteSettingsUpdate(BaseModel):
    active_theme: Optional[AppTheme] = None
    promo_text: Optional[str] = None
    whatsapp_number: Optional[str] = None


class DiagnosticResult(BaseModel):
    id: str
    name: str
    status: str
    message: str
    latency_ms: Optional[float] = None
