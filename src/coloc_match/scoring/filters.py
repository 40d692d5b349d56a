"""Search filters that narrow a listing catalog before scoring."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel

from ..config import ScoringConfig
from ..data.schema import ListingProfile, SeekerProfile
from .compatibility import actual_roommate_count, age_within_band, lifestyle_compatibility, mean_age

logger = logging.getLogger("coloc_match")


class SearchFilters(BaseModel):
    """Every field is optional; unset fields do not filter."""

    text: Optional[str] = None
    neighborhoods: list[str] = []
    rent_min: Optional[float] = None
    rent_max: Optional[float] = None
    available_from: Optional[date] = None
    minimum_duration_months: Optional[int] = None
    property_type: Optional[str] = None
    furnished: Optional[bool] = None
    amenities: list[str] = []
    rules: list[str] = []
    roommate_count_min: Optional[int] = None
    roommate_count_max: Optional[int] = None
    # Both need a seeker to compare against
    age_compatibility: bool = False
    lifestyle_compatibility: bool = False


def _in_range(value, low, high) -> bool:
    if low is None and high is None:
        return True
    if value is None:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _matches_text(listing: ListingProfile, text: str) -> bool:
    needle = text.strip().lower()
    return needle in listing.title.lower() or needle in listing.neighborhood.lower()


def matches_filters(
    listing: ListingProfile,
    filters: SearchFilters,
    seeker: Optional[SeekerProfile] = None,
    cfg: Optional[ScoringConfig] = None,
) -> bool:
    """True when the listing is active and passes every set filter."""
    if not listing.is_active:
        return False

    if filters.text and not _matches_text(listing, filters.text):
        return False
    if filters.neighborhoods and listing.neighborhood not in filters.neighborhoods:
        return False
    if not _in_range(listing.rent_amount, filters.rent_min, filters.rent_max):
        return False
    if filters.property_type and listing.property_type != filters.property_type:
        return False
    if filters.furnished is not None and listing.furnished != filters.furnished:
        return False

    if filters.available_from is not None:
        if listing.available_from is None or listing.available_from < filters.available_from:
            return False
    # The seeker's stay must cover the listing's minimum duration
    if filters.minimum_duration_months is not None:
        if (
            listing.minimum_duration_months is not None
            and listing.minimum_duration_months > filters.minimum_duration_months
        ):
            return False

    if filters.amenities and not listing.amenities & set(filters.amenities):
        return False
    if filters.rules and not listing.rules & set(filters.rules):
        return False

    if not _in_range(
        actual_roommate_count(listing), filters.roommate_count_min, filters.roommate_count_max
    ):
        return False

    if filters.age_compatibility or filters.lifestyle_compatibility:
        if seeker is None:
            logger.debug("Compatibility filters requested without a seeker; ignoring them")
            return True
        if filters.age_compatibility and not _age_compatible(seeker, listing):
            return False
        if filters.lifestyle_compatibility and not _lifestyle_compatible(seeker, listing, cfg):
            return False

    return True


def _age_compatible(seeker: SeekerProfile, listing: ListingProfile) -> bool:
    avg = mean_age(listing.current_roommate_ages)
    if avg is None:
        return True
    return age_within_band(seeker, avg)


def _lifestyle_compatible(
    seeker: SeekerProfile, listing: ListingProfile, cfg: Optional[ScoringConfig]
) -> bool:
    cfg = cfg or ScoringConfig()
    points, _, _ = lifestyle_compatibility(seeker, listing, cfg)
    return points >= cfg.neutral_lifestyle


def apply_filters(
    listings: Iterable[ListingProfile],
    filters: Optional[SearchFilters] = None,
    seeker: Optional[SeekerProfile] = None,
    cfg: Optional[ScoringConfig] = None,
) -> list[ListingProfile]:
    """Keep the listings that pass ``filters``, preserving order."""
    filters = filters or SearchFilters()
    listings = list(listings)
    kept = [l for l in listings if matches_filters(l, filters, seeker, cfg)]
    logger.debug(f"Filters kept {len(kept)}/{len(listings)} listings")
    return kept
