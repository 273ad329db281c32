"""Deterministic filtering and ordering of the villa catalog."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.listing import FilterCriteria, Listing, SortKey

# Seeded regions shown in the location picker before any listing mentions them.
HOTSPOT_LOCATIONS: Tuple[str, ...] = ("Anjuna", "Lonavala", "Karjat", "Khopoli", "Konkan", "Diveagar")

FEATURED_LIMIT = 6

# (key function, descending)
SORT_ORDERS: Dict[SortKey, Tuple[Callable[[Listing], float], bool]] = {
    SortKey.PRICE_LOW: (lambda listing: listing.price_per_night, False),
    SortKey.PRICE_HIGH: (lambda listing: listing.price_per_night, True),
    SortKey.RATING: (lambda listing: listing.rating, True),
    SortKey.POPULARITY: (lambda listing: listing.rating_count, True),
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def apply_filters(
    listings: Sequence[Listing],
    criteria: Optional[FilterCriteria] = None,
    sort_key: SortKey = SortKey.POPULARITY,
) -> List[Listing]:
    """Return the listings matching ``criteria`` in ``sort_key`` order.

    The input is never mutated. Check-in/check-out on the criteria are carried
    for the inquiry but never exclude a listing. The sort is stable, so equal
    keys keep their input order.
    """

    criteria = criteria or FilterCriteria()
    matched = [listing for listing in listings if matches(listing, criteria)]
    return sort_listings(matched, sort_key)


def matches(listing: Listing, criteria: FilterCriteria) -> bool:
    return (
        _matches_location(listing, criteria.location)
        and _within_price_band(listing, criteria.min_price, criteria.max_price)
        and (not criteria.bedrooms or listing.bedrooms >= criteria.bedrooms)
        and (not criteria.guests or listing.capacity >= criteria.guests)
    )


def sort_listings(listings: Iterable[Listing], sort_key: SortKey = SortKey.POPULARITY) -> List[Listing]:
    key, descending = SORT_ORDERS[_coerce_sort_key(sort_key)]
    return sorted(listings, key=key, reverse=descending)


def featured_listings(listings: Iterable[Listing], limit: int = FEATURED_LIMIT) -> List[Listing]:
    return [listing for listing in listings if listing.is_featured][:limit]


def known_locations(listings: Iterable[Listing]) -> List[str]:
    names = set(HOTSPOT_LOCATIONS)
    names.update(listing.primary_location for listing in listings if listing.primary_location)
    return sorted(names)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _coerce_sort_key(value) -> SortKey:
    try:
        return SortKey(value)
    except ValueError:
        return SortKey.POPULARITY


def _matches_location(listing: Listing, query: Optional[str]) -> bool:
    if not query:
        return True
    needle = query.lower()
    return needle in listing.location.lower() or needle in listing.name.lower()


def _within_price_band(listing: Listing, min_price: Optional[float], max_price: Optional[float]) -> bool:
    price = listing.price_per_night
    if min_price is not None and price < min_price:
        return False
    if max_price is not None and price > max_price:
        return False
    return True


__all__ = [
    "HOTSPOT_LOCATIONS",
    "apply_filters",
    "featured_listings",
    "known_locations",
    "matches",
    "sort_listings",
]
