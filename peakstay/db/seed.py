"""Demo content shipped with the site, and a loader that pushes it into a store."""

from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv

from ..models.content import AppTheme, ConciergeService, Review, SiteSettings
from ..models.listing import Listing
from ..utils.io import load_records
from ..utils.logging import get_logger
from .mappers import map_listing_row, map_review_row, map_service_row

LOGGER = get_logger("db.seed")

LISTINGS_CSV = "villas.csv"
REVIEWS_CSV = "testimonials.csv"
SERVICES_CSV = "services.csv"

DEFAULT_WHATSAPP_NUMBER = os.getenv("WHATSAPP_NUMBER", "+919157928471")


def default_settings() -> SiteSettings:
    return SiteSettings(
        active_theme=AppTheme.NEW_YEAR,
        promo_text="CELEBRATING 2025: USE CODE NY25 FOR EXCLUSIVE DISCOUNTS",
        whatsapp_number=DEFAULT_WHATSAPP_NUMBER,
    )


def seed_listings() -> List[Listing]:
    return [map_listing_row(row) for row in load_records(LISTINGS_CSV)]


def seed_reviews() -> List[Review]:
    return [map_review_row(row) for row in load_records(REVIEWS_CSV)]


def seed_services() -> List[ConciergeService]:
    return [map_service_row(row) for row in load_records(SERVICES_CSV)]


def seed() -> None:
    """Replace the listings of the configured store with the demo catalog."""

    load_dotenv()
    from .repo import get_repository

    repository = get_repository()
    LOGGER.info("Seeding listings mode=%s", repository.mode)
    listings = repository.replace_listings(seed_listings())
    LOGGER.info("Seeded listings count=%d", len(listings))


if __name__ == "__main__":  # pragma: no cover
    seed()
