"""Pydantic schemas for WhatsApp inquiries and captured leads."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field

LeadStatus = Literal["new", "contacted", "booked", "lost"]
LeadSource = Literal["WhatsApp", "Direct Inquiry"]

LEAD_STATUSES = ("new", "contacted", "booked", "lost")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class LeadDraft(BaseModel):
    villa_id: str
    villa_name: str
    source: LeadSource = "WhatsApp"
    user_id: Optional[str] = None
    customer_name: Optional[str] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None


class Lead(LeadDraft):
    id: str
    timestamp: str = Field(default_factory=_utc_now)
    status: LeadStatus = "new"


class InquiryRequest(BaseModel):
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    user_id: Optional[str] = None
    customer_name: Optional[str] = None
    source: LeadSource = "WhatsApp"


class InquiryResponse(BaseModel):
    lead: Lead
    whatsapp_url: str
    message: str
    nights: Optional[int] = None


class LeadStatusUpdate(BaseModel):
    status: LeadStatus


class LeadSummary(BaseModel):
    total: int
    by_status: Dict[str, int]
