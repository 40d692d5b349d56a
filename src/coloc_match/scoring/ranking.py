"""Score a listing catalog for one seeker and rank the results."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Collection, Optional, Sequence

from ..config import RankingConfig, ScoringConfig
from ..data.schema import ListingProfile, ListingRecommendation, ScoredListing, SeekerProfile
from .compatibility import compute_compatibility
from .filters import SearchFilters, apply_filters

logger = logging.getLogger("coloc_match")


def score_listings(
    seeker: SeekerProfile,
    listings: Sequence[ListingProfile],
    max_workers: Optional[int] = None,
    cfg: Optional[ScoringConfig] = None,
) -> list[ScoredListing]:
    """Score every listing against ``seeker``.

    Scoring fans out over a thread pool; results come back in input order,
    each tagged with its source index.
    """
    if not listings:
        return []

    def _score(item: tuple[int, ListingProfile]) -> ScoredListing:
        idx, listing = item
        return ScoredListing(idx, listing, compute_compatibility(seeker, listing, cfg))

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        scored = list(pool.map(_score, enumerate(listings)))

    logger.debug(f"Scored {len(scored)} listings for seeker {seeker.user_id or '<anonymous>'}")
    return scored


def rank_scored(
    scored: Sequence[ScoredListing],
    min_score: int = 0,
    limit: Optional[int] = None,
) -> list[ScoredListing]:
    """Best score first; equal scores keep their catalog order."""
    kept = [s for s in scored if s.compatibility.total_score >= min_score]
    kept.sort(key=lambda s: (-s.compatibility.total_score, s.index))
    if limit is not None:
        kept = kept[:limit]
    return kept


def rank_listings(
    seeker: SeekerProfile,
    listings: Sequence[ListingProfile],
    ranking: Optional[RankingConfig] = None,
    cfg: Optional[ScoringConfig] = None,
) -> list[ScoredListing]:
    ranking = ranking or RankingConfig()
    scored = score_listings(seeker, listings, max_workers=ranking.max_workers, cfg=cfg)
    return rank_scored(scored, min_score=ranking.min_score, limit=ranking.limit)


def recommend_listings(
    seeker: SeekerProfile,
    listings: Sequence[ListingProfile],
    filters: Optional[SearchFilters] = None,
    limit: int = 10,
    ranking: Optional[RankingConfig] = None,
    cfg: Optional[ScoringConfig] = None,
    exclude_listing_ids: Optional[Collection[str]] = None,
) -> list[ListingRecommendation]:
    """Filtered, ranked listings for a seeker, excluding their own.

    ``exclude_listing_ids`` drops listings the seeker has already swiped on,
    e.g. ``MatchRegistry.liked_listing_ids(seeker.user_id)``.
    """
    skip = set(exclude_listing_ids or ())
    candidates = [
        l for l in listings
        if not (seeker.user_id and l.landlord_id == seeker.user_id)
        and l.listing_id not in skip
    ]
    candidates = apply_filters(candidates, filters, seeker=seeker, cfg=cfg)

    ranking = ranking or RankingConfig()
    ranked = rank_scored(
        score_listings(seeker, candidates, max_workers=ranking.max_workers, cfg=cfg),
        min_score=ranking.min_score,
        limit=limit,
    )
    logger.info(
        f"Recommending {len(ranked)} of {len(candidates)} candidate listings "
        f"({len(listings)} in catalog)"
    )
    return [
        ListingRecommendation(
            listing=s.listing,
            compatibility=s.compatibility,
            match_reasons=s.compatibility.strengths,
        )
        for s in ranked
    ]
