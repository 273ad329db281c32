import math

from peakstay.db.errors import handle_db_error
from peakstay.db.mappers import map_lead_row, map_listing_row, map_settings_row
from peakstay.db.seed import default_settings
from peakstay.models.content import AppTheme


def test_listing_row_coercion():
    listing = map_listing_row(
        {
            "id": 42,
            "name": "Cliff House",
            "location": "Konkan, MH",
            "price_per_night": "-10",
            "bedrooms": "3.0",
            "capacity": None,
            "rating": "7",
            "rating_count": float("nan"),
            "amenities": "Pool| Wi-Fi |",
            "image_urls": ["a.jpg", None],
            "is_featured": "TRUE",
        }
    )
    assert listing.id == "42"
    assert listing.price_per_night == 0
    assert listing.bedrooms == 3
    assert listing.capacity == 0
    assert listing.rating == 5
    assert listing.rating_count == 0
    assert listing.amenities == ["Pool", "Wi-Fi"]
    assert listing.image_urls == ["a.jpg"]
    assert listing.is_featured is True
    assert listing.primary_location == "Konkan"


def test_empty_gallery_uses_placeholder():
    listing = map_listing_row({"id": "x", "name": "Bare", "location": "Goa"})
    assert listing.image_urls == []
    assert listing.cover_image.startswith("https://")
    assert not math.isnan(listing.rating)


def test_lead_row_defaults():
    lead = map_lead_row({"id": "l1", "villa_id": "v", "villa_name": "V", "status": "archived", "created_at": "2025-01-01T00:00:00+00:00"})
    assert lead.status == "new"
    assert lead.source == "WhatsApp"
    assert lead.timestamp.startswith("2025-01-01")
    assert lead.check_in is None


def test_settings_row_ignores_unknown_theme():
    settings = map_settings_row({"active_theme": "HALLOWEEN", "promo_text": "Hi"}, default_settings())
    assert settings.active_theme is AppTheme.NEW_YEAR
    assert settings.promo_text == "Hi"


def test_schema_errors_carry_setup_hint():
    error = handle_db_error('relation "public.villas" does not exist', "villas")
    assert "villas" in str(error)
    assert "CREATE TABLE IF NOT EXISTS villas" in error.setup_hint

    other = handle_db_error(RuntimeError("timeout"), "leads")
    assert other.setup_hint == ""
    assert other.table == "leads"
