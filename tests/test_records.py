"""Tests for row adapters, validation and JSON persistence."""

from datetime import date

import pytest

from coloc_match.data.generators import generate_listings, generate_seekers
from coloc_match.data.records import (
    RecordError,
    lifestyle_from_record,
    listing_from_record,
    load_generated_data,
    save_generated_data,
    seeker_from_record,
)
from coloc_match.data.schema import (
    CohabitationStyle,
    GuestFrequency,
    Lifestyle,
    ListingProfile,
    ProfileValidationError,
    SeekerProfile,
    WeekendActivity,
)
from coloc_match.scoring.filters import SearchFilters, matches_filters


class TestValidation:
    @pytest.mark.parametrize("value", [0, 6, -1])
    def test_scale_out_of_range(self, value):
        with pytest.raises(ProfileValidationError):
            Lifestyle(social_level=value)

    def test_scale_must_be_int(self):
        with pytest.raises(ProfileValidationError):
            Lifestyle(cleanliness=2.5)

    def test_negative_counts_rejected(self):
        with pytest.raises(ProfileValidationError):
            ListingProfile(current_roommate_count=-1)
        with pytest.raises(ProfileValidationError):
            ListingProfile(current_roommate_ages=(22, -3))
        with pytest.raises(ProfileValidationError):
            SeekerProfile(age=-5)


class TestRows:
    def test_lifestyle_legacy_values(self):
        ls = lifestyle_from_record({
            "social_level": 4,
            "cleanliness": "2",
            "noise_sensitivity": 3,
            "sleep_schedule": "late",
            "weekend_activity": "sortir",
            "guest_frequency": "souvent",
            "cohabitation_style": "indépendants",
        })
        assert ls.cleanliness == 2
        assert ls.weekend_activity == WeekendActivity.GO_OUT
        assert ls.guest_frequency == GuestFrequency.OFTEN
        assert ls.cohabitation_style == CohabitationStyle.INDEPENDENT

    def test_empty_lifestyle_is_none(self):
        assert lifestyle_from_record(None) is None
        assert lifestyle_from_record({}) is None

    def test_unknown_enum_value(self):
        with pytest.raises(RecordError, match="cohabitation_style"):
            lifestyle_from_record({"cohabitation_style": "roommates"})

    def test_out_of_range_row_rejected(self):
        with pytest.raises(RecordError):
            seeker_from_record({"id": "u1", "lifestyle": {"social_level": 9}})

    def test_seeker_legacy_interests(self):
        seeker = seeker_from_record({"id": "u1", "age": 23, "interests": ["Music", " yoga "]})
        assert seeker.user_id == "u1"
        assert seeker.age == 23
        assert seeker.hobbies == frozenset({"music", "yoga"})
        assert seeker.lifestyle is None

    def test_listing_current_row(self):
        listing = listing_from_record({
            "id": "l1",
            "landlord_id": "owner",
            "neighborhood": "Vincennes",
            "rent_amount": "720",
            "available_from": "2025-09-15T00:00:00Z",
            "current_roommate_count": 2,
            "current_roommate_ages": [21, 24],
            "roommate_lifestyle": {"social_level": 3, "cohabitation_style": "amis"},
            "landlord": {"id": "owner", "hobbies": ["cooking"]},
            "amenities": ["balcony"],
        })
        assert listing.rent_amount == 720.0
        assert listing.available_from == date(2025, 9, 15)
        assert listing.current_roommate_ages == (21, 24)
        assert listing.roommate_lifestyle.cohabitation_style == CohabitationStyle.CLOSE_FRIENDS
        assert listing.landlord_hobbies == frozenset({"cooking"})
        assert listing.is_active

    def test_listing_legacy_row(self):
        listing = listing_from_record({
            "id": "old",
            "landlordId": "owner",
            "price": 650,
            "location": "Montreuil",
            "available": "2025-10-01",
            "rooms": 3,
        })
        assert listing.landlord_id == "owner"
        assert listing.rent_amount == 650.0
        assert listing.neighborhood == "Montreuil"
        assert listing.current_roommate_count is None
        assert listing.rooms == 3
        assert listing.landlord_hobbies is None

    def test_bad_number(self):
        with pytest.raises(RecordError, match="rent_amount"):
            listing_from_record({"id": "x", "rent_amount": "cheap"})


class TestPersistence:
    def test_save_load(self, tmp_path):
        seekers = generate_seekers(10, seed=4)
        listings = generate_listings(15, seed=4)
        save_generated_data(tmp_path, seekers, listings)
        assert (tmp_path / "seekers.json").exists()
        data = load_generated_data(tmp_path)
        assert data["seekers"] == seekers
        assert data["listings"] == listings


class TestBooleanFields:
    @pytest.mark.parametrize("raw,expected", [
        (True, True), (False, False), ("false", False), ("TRUE", True),
        ("no", False), ("1", True), (0, False), (None, None), ("", None),
    ])
    def test_furnished_parsed(self, raw, expected):
        assert listing_from_record({"id": "x", "furnished": raw}).furnished is expected

    def test_null_is_active_defaults_to_active(self):
        assert listing_from_record({"id": "x", "is_active": None}).is_active is True
        assert listing_from_record({"id": "x"}).is_active is True

    def test_string_is_active(self):
        assert listing_from_record({"id": "x", "is_active": "false"}).is_active is False
        assert listing_from_record({"id": "x", "is_active": "true"}).is_active is True

    @pytest.mark.parametrize("field", ["furnished", "is_active"])
    @pytest.mark.parametrize("raw", ["maybe", 2, [True]])
    def test_invalid_boolean_rejected(self, field, raw):
        with pytest.raises(RecordError, match=field):
            listing_from_record({"id": "x", field: raw})

    def test_string_false_excluded_by_furnished_filter(self):
        listing = listing_from_record({"id": "x", "furnished": "false"})
        assert not matches_filters(listing, SearchFilters(furnished=True))
        assert matches_filters(listing, SearchFilters(furnished=False))
