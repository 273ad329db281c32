from typing import Any, Dict

from ..models.content import AppTheme, ConciergeService, ConciergeServiceDraft, Review, ReviewDraft, SiteSettings
from ..models.inquiry import LEAD_STATUSES, Lead
from ..models.listing import Listing, ListingDraft
from ..utils.coerce import to_bool, to_float, to_int, to_list, to_str

AVATAR_URL = "https://i.pravatar.cc/150?u={id}"


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def map_listing_row(r: Dict[str, Any]) -> Listing:
    return Listing(
        id=to_str(r.get("id")),
        name=to_str(r.get("name"), "Untitled Villa"),
        location=to_str(r.get("location")),
        price_per_night=max(0.0, to_float(r.get("price_per_night"), 0.0)),
        bedrooms=max(0, to_int(r.get("bedrooms"), 0)),
        bathrooms=max(0, to_int(r.get("bathrooms"), 0)),
        capacity=max(0, to_int(r.get("capacity"), 0)),
        description=to_str(r.get("description")),
        long_description=to_str(r.get("long_description")),
        image_urls=to_list(r.get("image_urls")),
        video_urls=to_list(r.get("video_urls")),
        amenities=to_list(r.get("amenities")),
        included_services=to_list(r.get("included_services")),
        is_featured=to_bool(r.get("is_featured")),
        rating=_clamp(to_float(r.get("rating"), 5.0), 0.0, 5.0),
        rating_count=max(0, to_int(r.get("rating_count"), 0)),
        num_rooms=max(0, to_int(r.get("num_rooms"), 0)),
        meals_available=to_bool(r.get("meals_available")),
        pet_friendly=to_bool(r.get("pet_friendly")),
        refund_policy=to_str(r.get("refund_policy")),
    )


def listing_to_row(draft: ListingDraft) -> Dict[str, Any]:
    return draft.model_dump(exclude={"id"})


def map_lead_row(r: Dict[str, Any]) -> Lead:
    status = to_str(r.get("status"), "new")
    source = to_str(r.get("source"), "WhatsApp")
    return Lead(
        id=to_str(r.get("id")),
        villa_id=to_str(r.get("villa_id")),
        villa_name=to_str(r.get("villa_name")),
        timestamp=to_str(r.get("created_at") or r.get("timestamp")),
        status=status if status in LEAD_STATUSES else "new",
        source=source if source in ("WhatsApp", "Direct Inquiry") else "WhatsApp",
        user_id=to_str(r.get("user_id")) or None,
        customer_name=to_str(r.get("customer_name")) or None,
        check_in=to_str(r.get("check_in")) or None,
        check_out=to_str(r.get("check_out")) or None,
    )


def lead_to_row(lead: Lead) -> Dict[str, Any]:
    row = lead.model_dump(exclude={"id", "timestamp"})
    row["created_at"] = lead.timestamp
    return row


def map_review_row(r: Dict[str, Any]) -> Review:
    review_id = to_str(r.get("id"))
    return Review(
        id=review_id,
        name=to_str(r.get("name"), "Guest"),
        content=to_str(r.get("content")),
        rating=int(_clamp(to_int(r.get("rating"), 5), 1, 5)),
        avatar=to_str(r.get("avatar")) or AVATAR_URL.format(id=review_id),
    )


def review_to_row(draft: ReviewDraft) -> Dict[str, Any]:
    return draft.model_dump(exclude={"id"})


def map_service_row(r: Dict[str, Any]) -> ConciergeService:
    return ConciergeService(
        id=to_str(r.get("id")),
        title=to_str(r.get("title"), "Untitled Service"),
        description=to_str(r.get("description")),
        icon=to_str(r.get("icon"), "fa-concierge-bell"),
    )


def service_to_row(draft: ConciergeServiceDraft) -> Dict[str, Any]:
    return draft.model_dump(exclude={"id"})


def map_settings_row(r: Dict[str, Any], defaults: SiteSettings) -> SiteSettings:
    theme = to_str(r.get("active_theme"))
    return SiteSettings(
        active_theme=AppTheme(theme) if theme in AppTheme.__members__ else defaults.active_theme,
        promo_text=to_str(r.get("promo_text"), defaults.promo_text),
        whatsapp_number=to_str(r.get("whatsapp_number"), defaults.whatsapp_number),
    )


def settings_to_row(settings: SiteSettings) -> Dict[str, Any]:
    return {
        "id": 1,
        "active_theme": settings.active_theme.value,
        "promo_text": settings.promo_text,
        "whatsapp_number": settings.whatsapp_number,
    }
