"""Pydantic models representing villa listings and catalog queries."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1566073771259-6a8506099945?auto=format&fit=crop&q=80&w=1200"


class ListingDraft(BaseModel):
    name: str
    location: str
    price_per_night: float = Field(0, ge=0)
    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    capacity: int = Field(0, ge=0)
    description: str = ""
    long_description: str = ""
    image_urls: List[str] = Field(default_factory=list)
    video_urls: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    included_services: List[str] = Field(default_factory=list)
    is_featured: bool = False
    rating: float = Field(5, ge=0, le=5)
    rating_count: int = Field(0, ge=0)
    num_rooms: int = Field(0, ge=0)
    meals_available: bool = False
    pet_friendly: bool = False
    refund_policy: str = ""

    @property
    def cover_image(self) -> str:
        return self.image_urls[0] if self.image_urls else PLACEHOLDER_IMAGE

    @property
    def primary_location(self) -> str:
        """Leading comma-separated segment of the location, e.g. ``Anjuna``."""

        return self.location.split(",")[0].strip()


class Listing(ListingDraft):
    id: str


class SortKey(str, Enum):
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    POPULARITY = "popularity"


class FilterCriteria(BaseModel):
    location: str = ""
    min_price: float = 0
    max_price: Optional[float] = None
    bedrooms: int = 0
    guests: Optional[int] = None
    # Inquiry context only; availability is not modelled.
    check_in: Optional[str] = None
    check_out: Optional[str] = None


class ListingListResponse(BaseModel):
    items: List[Listing]
    total: int


class ListingDetailResponse(BaseModel):
    listing: Listing
    similar: List[Listing]
