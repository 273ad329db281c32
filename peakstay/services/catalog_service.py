"""In-memory catalog snapshot kept in sync with the configured repository."""

from __future__ import annotations

import threading
from typing import List, Optional

from ..db.base import T_LISTINGS, Repository
from ..db.errors import RecordNotFound, StorageError
from ..db.seed import seed_listings
from ..models.listing import FilterCriteria, Listing, ListingDraft, SortKey
from ..utils.logging import get_logger
from .catalog import apply_filters, featured_listings, known_locations
from .recommender import DEFAULT_LIMIT, recommend

LOGGER = get_logger("services.catalog")


class CatalogService:
    """Serves catalog reads from a snapshot and writes through to the store.

    The repository pushes a fresh listing snapshot after every write, so reads
    never hit the store directly. Updates and deletes are applied to the
    snapshot before the write; if the write fails the snapshot is rebuilt from
    the store and the error propagates.
    """

    def __init__(self, repository: Repository) -> None:
        self.repository = repository
        self._lock = threading.Lock()
        self._listings: List[Listing] = []
        self._unsubscribe = repository.subscribe(T_LISTINGS, self._on_snapshot)

    def _on_snapshot(self, listings: List[Listing]) -> None:
        with self._lock:
            self._listings = list(listings)
        LOGGER.debug("catalog_snapshot count=%d", len(listings))

    # ------------------------------------------------------------------
    # Reads
    @property
    def listings(self) -> List[Listing]:
        with self._lock:
            return list(self._listings)

    def get(self, listing_id: str) -> Listing:
        for listing in self.listings:
            if listing.id == listing_id:
                return listing
        raise RecordNotFound(T_LISTINGS, listing_id)

    def search(self, criteria: Optional[FilterCriteria] = None, sort_key: SortKey = SortKey.POPULARITY) -> List[Listing]:
        return apply_filters(self.listings, criteria, sort_key)

    def similar(self, listing_id: str, limit: int = DEFAULT_LIMIT) -> List[Listing]:
        return recommend(self.get(listing_id), self.listings, limit)

    def featured(self) -> List[Listing]:
        return featured_listings(self.listings)

    def locations(self) -> List[str]:
        return known_locations(self.listings)

    # ------------------------------------------------------------------
    # Writes
    def add(self, draft: ListingDraft) -> Listing:
        try:
            listing = self.repository.create_listing(draft)
        except StorageError:
            self.refresh()
            raise
        with self._lock:
            if all(existing.id != listing.id for existing in self._listings):
                self._listings.append(listing)
        LOGGER.info("listing_created id=%s", listing.id)
        return listing

    def update(self, listing_id: str, draft: ListingDraft) -> Listing:
        self.get(listing_id)
        optimistic = Listing(id=listing_id, **draft.model_dump(exclude={"id"}))
        with self._lock:
            self._listings = [optimistic if item.id == listing_id else item for item in self._listings]
        try:
            listing = self.repository.update_listing(listing_id, draft)
        except (StorageError, RecordNotFound):
            self.refresh()
            raise
        LOGGER.info("listing_updated id=%s", listing_id)
        return listing

    def delete(self, listing_id: str) -> None:
        self.get(listing_id)
        with self._lock:
            self._listings = [item for item in self._listings if item.id != listing_id]
        try:
            self.repository.delete_listing(listing_id)
        except (StorageError, RecordNotFound):
            self.refresh()
            raise
        LOGGER.info("listing_deleted id=%s", listing_id)

    def restore_demo(self) -> List[Listing]:
        listings = self.repository.replace_listings(seed_listings())
        LOGGER.info("catalog_restored count=%d", len(listings))
        return self.listings

    def refresh(self) -> List[Listing]:
        self._on_snapshot(self.repository.list_listings())
        return self.listings

    def close(self) -> None:
        self._unsubscribe()


_catalog_singleton: CatalogService | None = None


def get_catalog() -> CatalogService:
    global _catalog_singleton
    if _catalog_singleton is None:
        from ..db.repo import get_repository

        _catalog_singleton = CatalogService(get_repository())
    return _catalog_singleton


def reset_catalog() -> None:
    global _catalog_singleton
    if _catalog_singleton is not None:
        _catalog_singleton.close()
    _catalog_singleton = None
