"""WhatsApp inquiry funnel: record the lead, then hand over a chat link."""

from __future__ import annotations

import re
from collections import Counter
from typing import List, Optional
from urllib.parse import quote

from ..db.base import Repository
from ..models.inquiry import LEAD_STATUSES, InquiryRequest, InquiryResponse, Lead, LeadDraft, LeadSummary
from ..models.listing import Listing
from ..utils.dates import parse_iso, stay_nights, to_iso
from ..utils.logging import get_logger

LOGGER = get_logger("services.inquiry")

WHATSAPP_BASE = "https://wa.me/"
# Characters JavaScript's encodeURIComponent leaves alone besides [A-Za-z0-9_.-~].
_URI_COMPONENT_SAFE = "!*'()"
FLEXIBLE = "flexible"


def build_whatsapp_url(number: str, message: str) -> str:
    digits = re.sub(r"\D", "", number or "")
    return f"{WHATSAPP_BASE}{digits}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"


def card_message(listing: Listing) -> str:
    return f"Jai Hind! I'm enquiring about {listing.name} for my next premium stay."


def stay_message(listing: Listing, check_in: Optional[str] = None, check_out: Optional[str] = None) -> str:
    return (
        f"Jai Hind! I'm interested in {listing.name} stay: "
        f"{check_in or FLEXIBLE} to {check_out or FLEXIBLE}. Please confirm."
    )


class InquiryService:
    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    def submit(self, listing: Listing, request: InquiryRequest) -> InquiryResponse:
        """Save a ``new`` lead for ``listing`` and build the WhatsApp hand-off.

        Dates are inquiry context only; malformed ones are dropped rather than
        rejected.
        """

        check_in = _clean_date(request.check_in)
        check_out = _clean_date(request.check_out)
        lead = self.repository.create_lead(
            LeadDraft(
                villa_id=listing.id,
                villa_name=listing.name,
                source=request.source,
                user_id=request.user_id,
                customer_name=request.customer_name,
                check_in=check_in,
                check_out=check_out,
            )
        )
        settings = self.repository.get_settings()
        message = stay_message(listing, check_in, check_out)
        LOGGER.info("lead_recorded id=%s villa_id=%s source=%s", lead.id, listing.id, lead.source)
        return InquiryResponse(
            lead=lead,
            whatsapp_url=build_whatsapp_url(settings.whatsapp_number, message),
            message=message,
            nights=stay_nights(check_in, check_out),
        )

    def leads(self, user_id: Optional[str] = None) -> List[Lead]:
        return self.repository.list_leads(user_id=user_id)

    def update_status(self, lead_id: str, status: str) -> Lead:
        if status not in LEAD_STATUSES:
            raise ValueError(f"Unknown lead status: {status}")
        lead = self.repository.update_lead_status(lead_id, status)
        LOGGER.info("lead_status id=%s status=%s", lead_id, status)
        return lead

    def delete(self, lead_id: str) -> None:
        self.repository.delete_lead(lead_id)

    def summary(self, user_id: Optional[str] = None) -> LeadSummary:
        leads = self.leads(user_id=user_id)
        counts = Counter(lead.status for lead in leads)
        return LeadSummary(total=len(leads), by_status={status: counts.get(status, 0) for status in LEAD_STATUSES})


def _clean_date(value: Optional[str]) -> Optional[str]:
    parsed = parse_iso(value)
    return to_iso(parsed) if parsed is not None else None
