"""Seeker/listing compatibility scoring.

The score is the sum of four capped stages:
    age (25) + lifestyle (35) + hobbies (20) + preferences (20) = 100

Every stage has a neutral fallback for missing data, so scoring never fails.
Strengths and issues are appended in stage order.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..config import ScoringConfig
from ..data.schema import (
    AGE_CAP,
    HOBBIES_CAP,
    LIFESTYLE_CAP,
    PREFERENCES_CAP,
    Breakdown,
    CompatibilityResult,
    ListingProfile,
    SeekerProfile,
)

# ── Explanations ─────────────────────────────────────────────────────────────

AGES_VERY_COMPATIBLE = "ages very compatible"
AGES_COMPATIBLE = "ages compatible"
NOTABLE_AGE_GAP = "notable age gap"
SIGNIFICANT_AGE_GAP = "significant age gap"

COMPATIBLE_COHABITATION = "compatible cohabitation style"
DIFFERENT_COHABITATION = "different cohabitation styles"
VERY_COMPATIBLE_LIFESTYLES = "very compatible lifestyles"
FAIRLY_COMPATIBLE_LIFESTYLES = "fairly compatible lifestyles"
DIFFERENT_LIFESTYLES = "different lifestyles"

SHARED_INTERESTS = "shared interests"
FEW_SHARED_INTERESTS = "a few shared interests"

IDEAL_ROOMMATE_COUNT = "ideal roommate count"
ROOMMATE_COUNT_NOT_IDEAL = "roommate count not ideal"
AGE_WITHIN_PREFERENCES = "age within preferences"
AGE_OUTSIDE_PREFERENCES = "age outside preferences"

StageResult = tuple[int, list[str], list[str]]

_DEFAULT_CFG = ScoringConfig()


def mean_age(ages: Sequence[int]) -> Optional[float]:
    """Average of the roommate ages, or None when there are none."""
    if len(ages) == 0:
        return None
    return float(np.mean(ages))


def age_compatibility(
    seeker: SeekerProfile, listing: ListingProfile, cfg: ScoringConfig = _DEFAULT_CFG
) -> StageResult:
    """Closeness of the seeker's age to the current roommates' average (0-25)."""
    avg = mean_age(listing.current_roommate_ages)
    if seeker.age is None or avg is None:
        return cfg.neutral_age, [], []

    diff = abs(seeker.age - avg)
    if diff <= 3:
        return 25, [AGES_VERY_COMPATIBLE], []
    if diff <= 7:
        return 18, [AGES_COMPATIBLE], []
    if diff <= 12:
        return 10, [], [NOTABLE_AGE_GAP]
    return 5, [], [SIGNIFICANT_AGE_GAP]


def _scale_points(a: int, b: int) -> int:
    # 10 for identical values, 2 fewer per step apart
    return max(0, 10 - abs(a - b) * 2)


def lifestyle_compatibility(
    seeker: SeekerProfile, listing: ListingProfile, cfg: ScoringConfig = _DEFAULT_CFG
) -> StageResult:
    """Lifestyle scales + cohabitation style (0-35)."""
    mine, theirs = seeker.lifestyle, listing.roommate_lifestyle
    if mine is None or theirs is None:
        return cfg.neutral_lifestyle, [], []

    strengths: list[str] = []
    issues: list[str] = []

    subtotal = (
        _scale_points(mine.social_level, theirs.social_level)
        + _scale_points(mine.cleanliness, theirs.cleanliness)
        + _scale_points(mine.noise_sensitivity, theirs.noise_sensitivity)
    )

    if mine.cohabitation_style == theirs.cohabitation_style:
        subtotal += 5
        strengths.append(COMPATIBLE_COHABITATION)
    else:
        issues.append(DIFFERENT_COHABITATION)

    # Narrative thresholds read the unclamped subtotal
    if subtotal >= 30:
        strengths.append(VERY_COMPATIBLE_LIFESTYLES)
    elif subtotal >= 20:
        strengths.append(FAIRLY_COMPATIBLE_LIFESTYLES)
    else:
        issues.append(DIFFERENT_LIFESTYLES)

    return min(subtotal, LIFESTYLE_CAP), strengths, issues


def hobbies_compatibility(
    seeker: SeekerProfile, listing: ListingProfile, cfg: ScoringConfig = _DEFAULT_CFG
) -> StageResult:
    """Shared hobbies with the landlord side (0-20).

    Neutral unless both hobby sets are known and non-empty.
    """
    theirs = listing.landlord_hobbies
    if not seeker.hobbies or not theirs:
        return cfg.neutral_hobbies, [], []

    shared = len(seeker.hobbies & theirs)
    score = min(shared * 7, HOBBIES_CAP)
    if score >= 15:
        return score, [SHARED_INTERESTS], []
    if score >= 10:
        return score, [FEW_SHARED_INTERESTS], []
    return score, [], []


def actual_roommate_count(listing: ListingProfile) -> Optional[int]:
    if listing.current_roommate_count is not None:
        return listing.current_roommate_count
    return listing.rooms


def _roommate_count_points(
    seeker: SeekerProfile, listing: ListingProfile, cfg: ScoringConfig
) -> StageResult:
    preferred = seeker.preferred_roommate_count
    actual = actual_roommate_count(listing)
    if preferred is None or actual is None:
        return cfg.neutral_preference, [], []
    if actual == preferred:
        return 10, [IDEAL_ROOMMATE_COUNT], []
    if abs(actual - preferred) <= 1:
        return 6, [], []
    return 0, [], [ROOMMATE_COUNT_NOT_IDEAL]


def age_within_band(seeker: SeekerProfile, avg_age: float) -> bool:
    """Inclusive check against whichever age bounds the seeker set."""
    if seeker.preferred_age_min is not None and avg_age < seeker.preferred_age_min:
        return False
    if seeker.preferred_age_max is not None and avg_age > seeker.preferred_age_max:
        return False
    return True


def _age_preference_points(
    seeker: SeekerProfile, listing: ListingProfile, cfg: ScoringConfig
) -> StageResult:
    if seeker.preferred_age_min is None and seeker.preferred_age_max is None:
        return cfg.neutral_preference, [], []

    avg = mean_age(listing.current_roommate_ages)
    if avg is None:
        avg = cfg.default_roommate_age
    if age_within_band(seeker, avg):
        return 10, [AGE_WITHIN_PREFERENCES], []
    return 0, [], [AGE_OUTSIDE_PREFERENCES]


def preferences_match(
    seeker: SeekerProfile, listing: ListingProfile, cfg: ScoringConfig = _DEFAULT_CFG
) -> StageResult:
    """Roommate-count and age-band preferences, 10 points each (0-20)."""
    count_pts, strengths, issues = _roommate_count_points(seeker, listing, cfg)
    age_pts, age_strengths, age_issues = _age_preference_points(seeker, listing, cfg)
    return (
        min(count_pts + age_pts, PREFERENCES_CAP),
        strengths + age_strengths,
        issues + age_issues,
    )


def _clamp(points: int, cap: int) -> int:
    return max(0, min(points, cap))


def compute_compatibility(
    seeker: SeekerProfile,
    listing: ListingProfile,
    cfg: Optional[ScoringConfig] = None,
) -> CompatibilityResult:
    """Score a seeker against a listing's current roommates (0-100).

    Pure and deterministic: identical inputs give identical results,
    including the order of strengths and issues.
    """
    cfg = cfg or _DEFAULT_CFG
    strengths: list[str] = []
    issues: list[str] = []

    points = []
    for stage in (age_compatibility, lifestyle_compatibility, hobbies_compatibility, preferences_match):
        pts, s, i = stage(seeker, listing, cfg)
        points.append(pts)
        strengths.extend(s)
        issues.extend(i)

    breakdown = Breakdown(
        age_compatibility=_clamp(points[0], AGE_CAP),
        lifestyle_compatibility=_clamp(points[1], LIFESTYLE_CAP),
        hobbies_compatibility=_clamp(points[2], HOBBIES_CAP),
        preferences_match=_clamp(points[3], PREFERENCES_CAP),
    )
    return CompatibilityResult(
        total_score=int(round(breakdown.total)),
        breakdown=breakdown,
        strengths=tuple(strengths),
        potential_issues=tuple(issues),
    )
