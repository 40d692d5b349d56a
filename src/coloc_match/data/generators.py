"""Synthetic seekers and listings for demos, benchmarks and tests.

Generation is coherent rather than uniform:
1. Roommate ages cluster around a listing's "house age" (student flats vs young professionals)
2. Listings with no current roommates carry no roommate lifestyle
3. Some records deliberately omit data so neutral fallbacks get exercised
"""

from __future__ import annotations

import random
from dataclasses import replace
from datetime import date, timedelta
from typing import Optional, Sequence

from .schema import (
    CohabitationStyle,
    GuestFrequency,
    Lifestyle,
    ListingProfile,
    SeekerProfile,
    SleepSchedule,
    WeekendActivity,
)

# ── Attribute pools ──────────────────────────────────────────────────────────

HOBBIES = [
    "sport", "music", "reading", "nature", "cooking", "travel",
    "cinema", "photography", "gaming", "art", "dance", "yoga",
    "diy", "gardening", "fashion", "technology",
]

AMENITIES = [
    "washing_machine", "dishwasher", "balcony", "garden", "parking",
    "elevator", "air_conditioning", "fireplace", "cellar", "fiber_wifi",
    "gym", "pool", "concierge", "intercom",
]

RULES = [
    "non_smoking", "pets_ok", "quiet_required", "parties_ok",
    "friends_ok", "couples_ok", "students_ok", "professionals_ok",
]

NEIGHBORHOODS = [
    "1er arrondissement", "5ème arrondissement", "6ème arrondissement",
    "10ème arrondissement", "11ème arrondissement", "13ème arrondissement",
    "14ème arrondissement", "15ème arrondissement", "18ème arrondissement",
    "20ème arrondissement", "Boulogne-Billancourt", "Vincennes",
    "Montreuil", "Saint-Denis", "Levallois-Perret",
]

PROPERTY_TYPES = ["apartment", "house", "studio", "loft"]

TITLE_TEMPLATES = [
    "Bright room in {n}",
    "Shared flat near {n}",
    "Cosy room, {n}",
    "Large room in friendly flatshare ({n})",
    "Room available in {n}",
]

# Share of records generated without the corresponding data
MISSING_AGE_RATE = 0.1
MISSING_LIFESTYLE_RATE = 0.15
MISSING_HOBBIES_RATE = 0.3


def _sample(pool: Sequence[str], k: int, rng: random.Random) -> list[str]:
    return rng.sample(list(pool), min(k, len(pool)))


def _near(center: int, rng: random.Random, spread: int = 1) -> int:
    """Integer near ``center`` kept on the 1-5 scale."""
    return max(1, min(5, center + rng.randint(-spread, spread)))


def generate_lifestyle(rng: random.Random, base: Optional[Lifestyle] = None) -> Lifestyle:
    """Random lifestyle, or a small perturbation of ``base``."""
    if base is None:
        return Lifestyle(
            social_level=rng.randint(1, 5),
            cleanliness=rng.randint(1, 5),
            noise_sensitivity=rng.randint(1, 5),
            sleep_schedule=rng.choice(list(SleepSchedule)),
            weekend_activity=rng.choice(list(WeekendActivity)),
            guest_frequency=rng.choice(list(GuestFrequency)),
            cohabitation_style=rng.choice(list(CohabitationStyle)),
        )
    return Lifestyle(
        social_level=_near(base.social_level, rng),
        cleanliness=_near(base.cleanliness, rng),
        noise_sensitivity=_near(base.noise_sensitivity, rng),
        sleep_schedule=base.sleep_schedule if rng.random() < 0.7 else rng.choice(list(SleepSchedule)),
        weekend_activity=base.weekend_activity,
        guest_frequency=base.guest_frequency,
        cohabitation_style=base.cohabitation_style if rng.random() < 0.6 else rng.choice(list(CohabitationStyle)),
    )


def generate_seeker(user_id: int, rng: random.Random) -> SeekerProfile:
    age = None if rng.random() < MISSING_AGE_RATE else rng.randint(18, 30)

    age_min = age_max = None
    if age is not None and rng.random() < 0.6:
        age_min = max(18, age - rng.randint(2, 5))
        age_max = age + rng.randint(2, 6)

    return SeekerProfile(
        user_id=f"seeker-{user_id}",
        age=age,
        hobbies=frozenset(_sample(HOBBIES, rng.randint(2, 6), rng)),
        lifestyle=None if rng.random() < MISSING_LIFESTYLE_RATE else generate_lifestyle(rng),
        preferred_roommate_count=rng.choice([None, 1, 2, 2, 3, 4]),
        preferred_age_min=age_min,
        preferred_age_max=age_max,
    )


def generate_listing(listing_id: int, rng: random.Random, start: date = date(2025, 9, 1)) -> ListingProfile:
    rooms = rng.randint(2, 6)
    count = rng.randint(0, rooms - 1)
    house_age = rng.choice([20, 22, 24, 27, 31])
    ages = tuple(max(18, house_age + rng.randint(-3, 3)) for _ in range(count))

    neighborhood = rng.choice(NEIGHBORHOODS)
    landlord_id = f"landlord-{rng.randint(0, max(1, listing_id // 3))}"

    return ListingProfile(
        listing_id=f"listing-{listing_id}",
        landlord_id=landlord_id,
        title=rng.choice(TITLE_TEMPLATES).format(n=neighborhood),
        # Legacy rows only carry the room count
        current_roommate_count=None if rng.random() < 0.1 else count,
        current_roommate_ages=ages,
        roommate_lifestyle=None if count == 0 or rng.random() < MISSING_LIFESTYLE_RATE else generate_lifestyle(rng),
        rooms=rooms,
        landlord_hobbies=None if rng.random() < MISSING_HOBBIES_RATE else frozenset(_sample(HOBBIES, rng.randint(1, 5), rng)),
        neighborhood=neighborhood,
        rent_amount=float(rng.randrange(450, 1300, 10)),
        property_type=rng.choice(PROPERTY_TYPES),
        furnished=rng.random() < 0.7,
        available_from=start + timedelta(days=rng.randint(0, 120)),
        minimum_duration_months=rng.choice([1, 3, 6, 6, 12, 12]),
        amenities=frozenset(_sample(AMENITIES, rng.randint(1, 6), rng)),
        rules=frozenset(_sample(RULES, rng.randint(1, 3), rng)),
        is_active=rng.random() < 0.95,
    )


def generate_seekers(n: int, seed: int = 42) -> list[SeekerProfile]:
    rng = random.Random(seed)
    return [generate_seeker(i, rng) for i in range(n)]


def generate_listings(n: int, seed: int = 42) -> list[ListingProfile]:
    # Offset so seekers and listings don't share a stream for the same seed
    rng = random.Random(seed + 10_000)
    return [generate_listing(i, rng) for i in range(n)]


# ── Tailored listings ────────────────────────────────────────────────────────

def generate_good_fit(seeker: SeekerProfile, listing_id: int, rng: random.Random) -> ListingProfile:
    """A listing built around ``seeker``: similar ages, nearby lifestyle, some shared hobbies."""
    listing = generate_listing(listing_id, rng)
    count = seeker.preferred_roommate_count or rng.randint(1, 3)
    age = seeker.age if seeker.age is not None else 22
    shared = _sample(sorted(seeker.hobbies), 3, rng)
    return replace(
        listing,
        current_roommate_count=count,
        current_roommate_ages=tuple(max(18, age + rng.randint(-2, 2)) for _ in range(count)),
        roommate_lifestyle=generate_lifestyle(rng, base=seeker.lifestyle) if seeker.lifestyle else None,
        rooms=count + 1,
        landlord_hobbies=frozenset(shared) or None,
        is_active=True,
    )
