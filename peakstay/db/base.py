"""Storage port shared by the local and Supabase repositories.

Concrete stores implement a handful of row-level primitives (``_fetch``,
``_get``, ``_insert``, ``_update``, ``_delete``, ``_upsert``,
``_replace_all``). Everything typed lives here so business code never cares
which store it talks to. After every write the affected table is re-read and
pushed to subscribers, which is how the catalog snapshot stays in sync.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..models.content import ConciergeService, ConciergeServiceDraft, Review, ReviewDraft, SiteSettings, SiteSettingsUpdate
from ..models.inquiry import Lead, LeadDraft
from ..models.listing import Listing, ListingDraft
from ..utils.logging import get_logger
from . import seed
from .errors import RecordNotFound, StorageError
from .mappers import (
    lead_to_row,
    listing_to_row,
    map_lead_row,
    map_listing_row,
    map_review_row,
    map_service_row,
    map_settings_row,
    review_to_row,
    service_to_row,
    settings_to_row,
)

LOGGER = get_logger("db.base")

T_LISTINGS = "villas"
T_LEADS = "leads"
T_REVIEWS = "testimonials"
T_SERVICES = "services"
T_SETTINGS = "site_settings"

SETTINGS_ROW_ID = 1

Row = Dict[str, Any]
Subscriber = Callable[[Any], None]


class Repository:
    mode = "abstract"
    remote = False

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)
        self._subscriber_lock = threading.Lock()
        self._loaders: Dict[str, Callable[[], Any]] = {
            T_LISTINGS: self.list_listings,
            T_LEADS: self.list_leads,
            T_REVIEWS: self.list_reviews,
            T_SERVICES: self.list_services,
            T_SETTINGS: self.get_settings,
        }

    # ------------------------------------------------------------------
    # Subscriptions
    def subscribe(self, table: str, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for fresh snapshots of ``table``.

        The callback fires once immediately with the current snapshot and again
        after every write. The returned function unsubscribes.
        """

        if table not in self._loaders:
            raise ValueError(f"Unknown table: {table}")
        with self._subscriber_lock:
            self._subscribers[table].append(callback)
        callback(self._loaders[table]())

        def unsubscribe() -> None:
            with self._subscriber_lock:
                if callback in self._subscribers[table]:
                    self._subscribers[table].remove(callback)

        return unsubscribe

    def resync(self, table: str) -> None:
        with self._subscriber_lock:
            callbacks = list(self._subscribers.get(table, []))
        if not callbacks:
            return
        snapshot = self._loaders[table]()
        LOGGER.debug("resync table=%s subscribers=%d", table, len(callbacks))
        for callback in callbacks:
            callback(snapshot)

    # ------------------------------------------------------------------
    # Listings
    def list_listings(self) -> List[Listing]:
        return [map_listing_row(row) for row in self._fetch(T_LISTINGS, order_by="name")]

    def get_listing(self, listing_id: str) -> Listing:
        row = self._get(T_LISTINGS, listing_id)
        if row is None:
            raise RecordNotFound(T_LISTINGS, listing_id)
        return map_listing_row(row)

    def create_listing(self, draft: ListingDraft) -> Listing:
        listing = map_listing_row(self._insert(T_LISTINGS, listing_to_row(draft)))
        self.resync(T_LISTINGS)
        return listing

    def update_listing(self, listing_id: str, draft: ListingDraft) -> Listing:
        listing = map_listing_row(self._update(T_LISTINGS, listing_id, listing_to_row(draft)))
        self.resync(T_LISTINGS)
        return listing

    def delete_listing(self, listing_id: str) -> None:
        self._delete(T_LISTINGS, listing_id)
        self.resync(T_LISTINGS)

    def replace_listings(self, drafts: Sequence[ListingDraft]) -> List[Listing]:
        rows = self._replace_all(T_LISTINGS, [listing_to_row(draft) for draft in drafts])
        self.resync(T_LISTINGS)
        return [map_listing_row(row) for row in rows]

    # ------------------------------------------------------------------
    # Leads
    def list_leads(self, user_id: Optional[str] = None) -> List[Lead]:
        leads = [map_lead_row(row) for row in self._fetch(T_LEADS, order_by="created_at", descending=True)]
        if user_id is not None:
            leads = [lead for lead in leads if lead.user_id == user_id]
        return leads

    def create_lead(self, draft: LeadDraft) -> Lead:
        pending = Lead(id="", **draft.model_dump())
        lead = map_lead_row(self._insert(T_LEADS, lead_to_row(pending)))
        self.resync(T_LEADS)
        return lead

    def update_lead_status(self, lead_id: str, status: str) -> Lead:
        lead = map_lead_row(self._update(T_LEADS, lead_id, {"status": status}))
        self.resync(T_LEADS)
        return lead

    def delete_lead(self, lead_id: str) -> None:
        self._delete(T_LEADS, lead_id)
        self.resync(T_LEADS)

    # ------------------------------------------------------------------
    # Reviews and concierge services fall back to the demo content when the
    # store cannot be read.
    def list_reviews(self) -> List[Review]:
        try:
            return [map_review_row(row) for row in self._fetch(T_REVIEWS)]
        except StorageError as exc:
            LOGGER.warning("reviews_unavailable error=%s; serving demo content", exc)
            return seed.seed_reviews()

    def create_review(self, draft: ReviewDraft) -> Review:
        review = map_review_row(self._insert(T_REVIEWS, review_to_row(draft)))
        self.resync(T_REVIEWS)
        return review

    def delete_review(self, review_id: str) -> None:
        self._delete(T_REVIEWS, review_id)
        self.resync(T_REVIEWS)

    def list_services(self) -> List[ConciergeService]:
        try:
            return [map_service_row(row) for row in self._fetch(T_SERVICES, order_by="created_at")]
        except StorageError as exc:
            LOGGER.warning("services_unavailable error=%s; serving demo content", exc)
            return seed.seed_services()

    def create_service(self, draft: ConciergeServiceDraft) -> ConciergeService:
        service = map_service_row(self._insert(T_SERVICES, service_to_row(draft)))
        self.resync(T_SERVICES)
        return service

    def update_service(self, service_id: str, draft: ConciergeServiceDraft) -> ConciergeService:
        service = map_service_row(self._update(T_SERVICES, service_id, service_to_row(draft)))
        self.resync(T_SERVICES)
        return service

    def delete_service(self, service_id: str) -> None:
        self._delete(T_SERVICES, service_id)
        self.resync(T_SERVICES)

    # ------------------------------------------------------------------
    # Site settings
    def get_settings(self) -> SiteSettings:
        defaults = seed.default_settings()
        try:
            row = self._get(T_SETTINGS, SETTINGS_ROW_ID)
        except StorageError as exc:
            LOGGER.warning("settings_unavailable error=%s; using defaults", exc)
            return defaults
        if row is None:
            return defaults
        return map_settings_row(row, defaults)

    def update_settings(self, patch: SiteSettingsUpdate) -> SiteSettings:
        current = self.get_settings()
        merged = current.model_copy(update=patch.model_dump(exclude_none=True))
        row = self._upsert(T_SETTINGS, settings_to_row(merged))
        self.resync(T_SETTINGS)
        return map_settings_row(row, seed.default_settings())

    # ------------------------------------------------------------------
    # Diagnostics
    def probe(self, table: str) -> int:
        """Touch ``table`` and return how many rows came back."""

        return len(self._fetch(table))

    # ------------------------------------------------------------------
    # Primitives implemented by concrete stores
    def _fetch(self, table: str, order_by: Optional[str] = None, descending: bool = False) -> List[Row]:
        raise NotImplementedError

    def _get(self, table: str, record_id: Any) -> Optional[Row]:
        raise NotImplementedError

    def _insert(self, table: str, row: Row) -> Row:
        raise NotImplementedError

    def _update(self, table: str, record_id: Any, patch: Row) -> Row:
        raise NotImplementedError

    def _delete(self, table: str, record_id: Any) -> None:
        raise NotImplementedError

    def _upsert(self, table: str, row: Row) -> Row:
        raise NotImplementedError

    def _replace_all(self, table: str, rows: List[Row]) -> List[Row]:
        raise NotImplementedError


__all__ = ["Repository", "T_LEADS", "T_LISTINGS", "T_REVIEWS", "T_SERVICES", "T_SETTINGS"]
