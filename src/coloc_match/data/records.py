"""Row <-> profile conversion + JSON persistence.

Rows are the dicts returned by the hosted database. Older rows use legacy
field names (``price``, ``location``, ``available``, ``interests``) and
French enum values; both are folded into the canonical schema here.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar

from .schema import (
    CohabitationStyle,
    GuestFrequency,
    Lifestyle,
    ListingProfile,
    ProfileValidationError,
    SeekerProfile,
    SleepSchedule,
    WeekendActivity,
)


class RecordError(ValueError):
    """Raised when a row cannot be turned into a profile."""


E = TypeVar("E", bound=Enum)

# Values written by the first version of the app
LEGACY_ENUM_VALUES: dict[type, dict[str, str]] = {
    WeekendActivity: {"sortir": "go_out", "maison": "stay_home"},
    GuestFrequency: {"jamais": "never", "rarement": "rarely", "souvent": "often"},
    CohabitationStyle: {
        "amis": "close_friends",
        "indépendants": "independent",
        "independants": "independent",
        "familial": "family_like",
    },
}


def _enum(cls: Type[E], raw: Any, field_name: str) -> E:
    if isinstance(raw, cls):
        return raw
    value = str(raw).strip().lower()
    value = LEGACY_ENUM_VALUES.get(cls, {}).get(value, value)
    try:
        return cls(value)
    except ValueError as e:
        choices = ", ".join(m.value for m in cls)
        raise RecordError(f"{field_name}: unknown value {raw!r} (expected one of {choices})") from e


def _int(raw: Any, field_name: str) -> Optional[int]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise RecordError(f"{field_name}: expected an integer, got {raw!r}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise RecordError(f"{field_name}: expected an integer, got {raw!r}")
        return int(raw)
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise RecordError(f"{field_name}: expected an integer, got {raw!r}") from e


def _float(raw: Any, field_name: str) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise RecordError(f"{field_name}: expected a number, got {raw!r}") from e


_TRUE = {"true", "t", "yes", "y", "1"}
_FALSE = {"false", "f", "no", "n", "0"}


def _bool(raw: Any, field_name: str) -> Optional[bool]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str):
        token = raw.strip().lower()
        if token in _TRUE:
            return True
        if token in _FALSE:
            return False
    raise RecordError(f"{field_name}: expected a boolean, got {raw!r}")


def _date(raw: Any, field_name: str) -> Optional[date]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return datetime.fromisoformat(str(raw).replace("Z", "+00:00")).date()
    except ValueError as e:
        raise RecordError(f"{field_name}: expected an ISO date, got {raw!r}") from e


def _tags(raw: Any) -> frozenset[str]:
    if not raw:
        return frozenset()
    if isinstance(raw, str):
        raw = raw.split(",")
    return frozenset(str(t).strip().lower() for t in raw if str(t).strip())


def _first(row: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if row.get(name) is not None:
            return row[name]
    return None


# ── Rows -> profiles ─────────────────────────────────────────────────────────

def lifestyle_from_record(raw: Optional[Mapping[str, Any]]) -> Optional[Lifestyle]:
    """Build a Lifestyle, or None when the row has no lifestyle data."""
    if not raw:
        return None
    try:
        kwargs: dict[str, Any] = {}
        for name in ("social_level", "cleanliness", "noise_sensitivity"):
            value = _int(raw.get(name), name)
            if value is not None:
                kwargs[name] = value
        for name, cls in (
            ("sleep_schedule", SleepSchedule),
            ("weekend_activity", WeekendActivity),
            ("guest_frequency", GuestFrequency),
            ("cohabitation_style", CohabitationStyle),
        ):
            if raw.get(name) is not None:
                kwargs[name] = _enum(cls, raw[name], name)
        return Lifestyle(**kwargs)
    except ProfileValidationError as e:
        raise RecordError(str(e)) from e


def seeker_from_record(row: Mapping[str, Any]) -> SeekerProfile:
    try:
        return SeekerProfile(
            user_id=str(row.get("id") or ""),
            age=_int(row.get("age"), "age"),
            hobbies=_tags(_first(row, "hobbies", "interests")),
            lifestyle=lifestyle_from_record(row.get("lifestyle")),
            preferred_roommate_count=_int(row.get("preferred_roommate_count"), "preferred_roommate_count"),
            preferred_age_min=_int(row.get("preferred_age_min"), "preferred_age_min"),
            preferred_age_max=_int(row.get("preferred_age_max"), "preferred_age_max"),
        )
    except ProfileValidationError as e:
        raise RecordError(f"seeker {row.get('id')!r}: {e}") from e


def listing_from_record(row: Mapping[str, Any]) -> ListingProfile:
    landlord = row.get("landlord") or {}
    landlord_hobbies = _first(landlord, "hobbies", "interests") if landlord else row.get("landlord_hobbies")
    active = _bool(row.get("is_active"), "is_active")
    ages = [_int(a, "current_roommate_ages") for a in row.get("current_roommate_ages") or []]
    try:
        return ListingProfile(
            listing_id=str(row.get("id") or ""),
            landlord_id=str(_first(row, "landlord_id", "landlordId") or landlord.get("id") or ""),
            title=str(row.get("title") or ""),
            current_roommate_count=_int(row.get("current_roommate_count"), "current_roommate_count"),
            current_roommate_ages=tuple(a for a in ages if a is not None),
            roommate_lifestyle=lifestyle_from_record(row.get("roommate_lifestyle")),
            rooms=_int(_first(row, "rooms", "total_rooms"), "rooms"),
            landlord_hobbies=_tags(landlord_hobbies) if landlord_hobbies is not None else None,
            neighborhood=str(_first(row, "neighborhood", "location") or ""),
            rent_amount=_float(_first(row, "rent_amount", "price"), "rent_amount"),
            property_type=str(row.get("property_type") or ""),
            furnished=_bool(row.get("furnished"), "furnished"),
            available_from=_date(_first(row, "available_from", "available"), "available_from"),
            minimum_duration_months=_int(row.get("minimum_duration_months"), "minimum_duration_months"),
            amenities=_tags(row.get("amenities")),
            rules=_tags(row.get("rules")),
            is_active=True if active is None else active,
        )
    except ProfileValidationError as e:
        raise RecordError(f"listing {row.get('id')!r}: {e}") from e


# ── Profiles -> rows ─────────────────────────────────────────────────────────

def lifestyle_to_record(lifestyle: Optional[Lifestyle]) -> Optional[dict]:
    if lifestyle is None:
        return None
    return {
        "social_level": lifestyle.social_level,
        "cleanliness": lifestyle.cleanliness,
        "noise_sensitivity": lifestyle.noise_sensitivity,
        "sleep_schedule": lifestyle.sleep_schedule.value,
        "weekend_activity": lifestyle.weekend_activity.value,
        "guest_frequency": lifestyle.guest_frequency.value,
        "cohabitation_style": lifestyle.cohabitation_style.value,
    }


def seeker_to_record(seeker: SeekerProfile) -> dict:
    return {
        "id": seeker.user_id,
        "age": seeker.age,
        "hobbies": sorted(seeker.hobbies),
        "lifestyle": lifestyle_to_record(seeker.lifestyle),
        "preferred_roommate_count": seeker.preferred_roommate_count,
        "preferred_age_min": seeker.preferred_age_min,
        "preferred_age_max": seeker.preferred_age_max,
    }


def listing_to_record(listing: ListingProfile) -> dict:
    return {
        "id": listing.listing_id,
        "landlord_id": listing.landlord_id,
        "title": listing.title,
        "current_roommate_count": listing.current_roommate_count,
        "current_roommate_ages": list(listing.current_roommate_ages),
        "roommate_lifestyle": lifestyle_to_record(listing.roommate_lifestyle),
        "rooms": listing.rooms,
        "landlord_hobbies": sorted(listing.landlord_hobbies) if listing.landlord_hobbies is not None else None,
        "neighborhood": listing.neighborhood,
        "rent_amount": listing.rent_amount,
        "property_type": listing.property_type,
        "furnished": listing.furnished,
        "available_from": listing.available_from.isoformat() if listing.available_from else None,
        "minimum_duration_months": listing.minimum_duration_months,
        "amenities": sorted(listing.amenities),
        "rules": sorted(listing.rules),
        "is_active": listing.is_active,
    }


# ── Disk ─────────────────────────────────────────────────────────────────────

def save_generated_data(
    output_dir: str | Path,
    seekers: list[SeekerProfile],
    listings: list[ListingProfile],
) -> None:
    """Save seekers and listings as JSON rows."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    with open(out / "seekers.json", "w") as f:
        json.dump([seeker_to_record(s) for s in seekers], f, indent=2)
    with open(out / "listings.json", "w") as f:
        json.dump([listing_to_record(l) for l in listings], f, indent=2)


def load_generated_data(data_dir: str | Path) -> dict[str, Any]:
    """Load seekers and listings saved by save_generated_data (or exported rows)."""
    d = Path(data_dir)
    with open(d / "seekers.json") as f:
        seekers = [seeker_from_record(r) for r in json.load(f)]
    with open(d / "listings.json") as f:
        listings = [listing_from_record(r) for r in json.load(f)]

    return {
        "seekers": seekers,
        "listings": listings,
    }
