"""Bench listing for the map: join community ratings and apply filters."""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from benchmap.db.models.bench import Bench, normalize_category
from benchmap.repositories import BenchRepository, ReviewRepository
from benchmap.services.geo import haversine_km
from benchmap.services.ratings import MAX_RATING, aggregate_community_ratings

logger = logging.getLogger(__name__)


def parse_number(raw: Optional[str]) -> Optional[float]:
    """Finite float from a query string value, None when blank or not a number."""
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


@dataclass
class ListingFilters:
    """Optional filters for the bench listing."""

    min_community_rating: Optional[float] = None
    max_distance_km: Optional[float] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @classmethod
    def from_query(
        cls,
        min_community_rating: Optional[str] = None,
        max_distance_km: Optional[str] = None,
        lat: Optional[str] = None,
        lng: Optional[str] = None,
    ) -> "ListingFilters":
        min_rating = parse_number(min_community_rating)
        if min_rating is not None:
            min_rating = max(0.0, min(float(MAX_RATING), min_rating))
        max_distance = parse_number(max_distance_km)
        if max_distance is not None:
            max_distance = max(0.0, max_distance)
        return cls(
            min_community_rating=min_rating,
            max_distance_km=max_distance,
            lat=parse_number(lat),
            lng=parse_number(lng),
        )

    @property
    def radius_enabled(self) -> bool:
        """The radius filter needs a distance and both reference coordinates."""
        return self.max_distance_km is not None and self.lat is not None and self.lng is not None


def shape_bench(bench: Bench, community_ratings: Dict[str, float]) -> Dict[str, Any]:
    """Response dict for a bench.

    "community_rating" is only present when the bench has reviews.
    """
    shaped = {
        "id": bench.id,
        "title": bench.title,
        "description": bench.description,
        "lat": bench.lat,
        "lng": bench.lng,
        "category": normalize_category(bench.category),
        "ratings": {
            "accessibility": bench.accessibility,
            "crowd": bench.crowd,
            "view": bench.view,
            "vibe": bench.vibe,
        },
        "created_at": bench.created_at,
        "user_id": bench.user_id,
        "created_by_name": bench.created_by_name,
    }
    if bench.id in community_ratings:
        shaped["community_rating"] = community_ratings[bench.id]
    return shaped


def apply_filters(benches: List[Dict[str, Any]], filters: ListingFilters) -> List[Dict[str, Any]]:
    """Keep the benches that pass every supplied filter.

    A bench without reviews counts as rated 0 for the minimum rating filter.
    The radius filter is skipped unless distance, lat and lng are all given.
    """
    result = benches
    if filters.min_community_rating is not None:
        result = [
            b for b in result
            if b.get("community_rating", 0) >= filters.min_community_rating
        ]
    if filters.radius_enabled:
        result = [
            b for b in result
            if haversine_km(filters.lat, filters.lng, b["lat"], b["lng"]) <= filters.max_distance_km
        ]
    return result


def list_benches(session: Session, filters: Optional[ListingFilters] = None) -> List[Dict[str, Any]]:
    """All benches, newest first, with community ratings and filters applied.

    Args:
        session: Database session
        filters: Optional listing filters

    Returns:
        List of bench response dicts
    """
    filters = filters or ListingFilters()

    benches = BenchRepository(session).list_newest_first()
    community_ratings = aggregate_community_ratings(ReviewRepository(session).list_ratings())

    shaped = [shape_bench(bench, community_ratings) for bench in benches]
    filtered = apply_filters(shaped, filters)

    logger.info(f"[BENCHES] Listing {len(filtered)} of {len(shaped)} benches ({filters})")
    return filtered
