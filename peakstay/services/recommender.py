"""Similar-stay ranking used on the listing detail view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..models.listing import Listing

DEFAULT_LIMIT = 3


@dataclass(frozen=True)
class SimilarityWeights:
    """Points awarded per matching signal; the score is their plain sum."""

    same_location: int = 15
    price_close: int = 10
    capacity_close: int = 5
    same_bedrooms: int = 8
    price_tolerance: float = 0.25
    capacity_tolerance: int = 2


WEIGHTS = SimilarityWeights()


def similarity_score(target: Listing, candidate: Listing, weights: SimilarityWeights = WEIGHTS) -> int:
    score = 0
    if candidate.primary_location == target.primary_location:
        score += weights.same_location
    if abs(candidate.price_per_night - target.price_per_night) <= target.price_per_night * weights.price_tolerance:
        score += weights.price_close
    if abs(candidate.capacity - target.capacity) <= weights.capacity_tolerance:
        score += weights.capacity_close
    if candidate.bedrooms == target.bedrooms:
        score += weights.same_bedrooms
    return score


def recommend(target: Listing, candidates: Sequence[Listing], limit: int = DEFAULT_LIMIT) -> List[Listing]:
    """Rank ``candidates`` by similarity to ``target`` and keep the best ``limit``.

    The target itself is skipped. Ties keep candidate order, and no minimum
    score applies: in a small pool a zero-score listing can still be returned.
    """

    if limit <= 0:
        return []
    scored = [
        (similarity_score(target, candidate), candidate)
        for candidate in candidates
        if candidate.id != target.id
    ]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [candidate for _, candidate in scored[:limit]]


__all__ = ["DEFAULT_LIMIT", "SimilarityWeights", "recommend", "similarity_score"]
