"""Seeker, listing and compatibility-result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class ProfileValidationError(ValueError):
    """Raised when a profile carries values outside their documented range."""


# ── Lifestyle enums ──────────────────────────────────────────────────────────

class SleepSchedule(str, Enum):
    EARLY = "early"
    NORMAL = "normal"
    LATE = "late"
    FLEXIBLE = "flexible"


class WeekendActivity(str, Enum):
    GO_OUT = "go_out"
    STAY_HOME = "stay_home"
    FLEXIBLE = "flexible"


class GuestFrequency(str, Enum):
    NEVER = "never"
    RARELY = "rarely"
    OFTEN = "often"
    FLEXIBLE = "flexible"


class CohabitationStyle(str, Enum):
    CLOSE_FRIENDS = "close_friends"
    INDEPENDENT = "independent"
    FAMILY_LIKE = "family_like"


SCALE_MIN = 1
SCALE_MAX = 5
SCALE_FIELDS = ("social_level", "cleanliness", "noise_sensitivity")


@dataclass(frozen=True)
class Lifestyle:
    """How someone lives day to day.

    The three scale fields run 1-5:
        social_level: 1 = calm, 5 = very social
        cleanliness: 1 = relaxed, 5 = meticulous
        noise_sensitivity: 1 = not sensitive, 5 = very sensitive
    """

    social_level: int = 3
    cleanliness: int = 3
    noise_sensitivity: int = 3
    sleep_schedule: SleepSchedule = SleepSchedule.NORMAL
    weekend_activity: WeekendActivity = WeekendActivity.FLEXIBLE
    guest_frequency: GuestFrequency = GuestFrequency.FLEXIBLE
    cohabitation_style: CohabitationStyle = CohabitationStyle.INDEPENDENT

    def __post_init__(self) -> None:
        for name in SCALE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ProfileValidationError(f"{name} must be an integer, got {value!r}")
            if not SCALE_MIN <= value <= SCALE_MAX:
                raise ProfileValidationError(
                    f"{name} must be within [{SCALE_MIN}, {SCALE_MAX}], got {value}"
                )


@dataclass(frozen=True)
class SeekerProfile:
    """A student looking for a room."""

    user_id: str = ""
    age: Optional[int] = None
    hobbies: frozenset[str] = frozenset()
    lifestyle: Optional[Lifestyle] = None

    # ── Cohabitation preferences ─────────────────────────────────────────
    preferred_roommate_count: Optional[int] = None
    preferred_age_min: Optional[int] = None  # inclusive
    preferred_age_max: Optional[int] = None  # inclusive

    def __post_init__(self) -> None:
        for name in ("age", "preferred_roommate_count", "preferred_age_min", "preferred_age_max"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ProfileValidationError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class ListingProfile:
    """A room offered by a landlord, with whoever already lives there."""

    listing_id: str = ""
    landlord_id: str = ""
    title: str = ""

    # ── Current roommates ────────────────────────────────────────────────
    current_roommate_count: Optional[int] = None
    current_roommate_ages: tuple[int, ...] = ()
    roommate_lifestyle: Optional[Lifestyle] = None
    # Legacy room count, stands in for current_roommate_count when unset
    rooms: Optional[int] = None
    landlord_hobbies: Optional[frozenset[str]] = None

    # ── Search metadata ──────────────────────────────────────────────────
    neighborhood: str = ""
    rent_amount: Optional[float] = None
    property_type: str = ""
    furnished: Optional[bool] = None
    available_from: Optional[date] = None
    minimum_duration_months: Optional[int] = None
    amenities: frozenset[str] = frozenset()
    rules: frozenset[str] = frozenset()
    is_active: bool = True

    def __post_init__(self) -> None:
        for name in ("current_roommate_count", "rooms", "minimum_duration_months"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ProfileValidationError(f"{name} must be >= 0, got {value}")
        if any(a < 0 for a in self.current_roommate_ages):
            raise ProfileValidationError(
                f"current_roommate_ages must be non-negative, got {list(self.current_roommate_ages)}"
            )
        if self.rent_amount is not None and self.rent_amount < 0:
            raise ProfileValidationError(f"rent_amount must be >= 0, got {self.rent_amount}")


# ── Engine output ────────────────────────────────────────────────────────────

AGE_CAP = 25
LIFESTYLE_CAP = 35
HOBBIES_CAP = 20
PREFERENCES_CAP = 20


@dataclass(frozen=True)
class Breakdown:
    age_compatibility: int = 0  # 0-25
    lifestyle_compatibility: int = 0  # 0-35
    hobbies_compatibility: int = 0  # 0-20
    preferences_match: int = 0  # 0-20

    @property
    def total(self) -> int:
        return (
            self.age_compatibility
            + self.lifestyle_compatibility
            + self.hobbies_compatibility
            + self.preferences_match
        )


@dataclass(frozen=True)
class CompatibilityResult:
    """Score for one (seeker, listing) pair, with the reasons behind it."""

    total_score: int
    breakdown: Breakdown
    strengths: tuple[str, ...] = ()
    potential_issues: tuple[str, ...] = ()

    @property
    def tier(self) -> str:
        if self.total_score >= 80:
            return "excellent"
        if self.total_score >= 60:
            return "good"
        return "moderate"

    def to_dict(self) -> dict:
        return {
            "total_score": self.total_score,
            "breakdown": {
                "age_compatibility": self.breakdown.age_compatibility,
                "lifestyle_compatibility": self.breakdown.lifestyle_compatibility,
                "hobbies_compatibility": self.breakdown.hobbies_compatibility,
                "preferences_match": self.breakdown.preferences_match,
            },
            "strengths": list(self.strengths),
            "potential_issues": list(self.potential_issues),
        }


@dataclass(frozen=True)
class ScoredListing:
    """Engine output paired with the listing's position in the input catalog."""

    index: int
    listing: ListingProfile
    compatibility: CompatibilityResult


@dataclass(frozen=True)
class ListingRecommendation:
    listing: ListingProfile
    compatibility: CompatibilityResult
    match_reasons: tuple[str, ...] = field(default_factory=tuple)
