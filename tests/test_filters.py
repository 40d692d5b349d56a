"""Tests for the pre-scoring search filters."""

from datetime import date

import pytest

from coloc_match.data.schema import CohabitationStyle, Lifestyle, ListingProfile, SeekerProfile
from coloc_match.scoring.filters import SearchFilters, apply_filters, matches_filters


@pytest.fixture
def catalog():
    return [
        ListingProfile(
            listing_id="a",
            title="Bright room in Montreuil",
            neighborhood="Montreuil",
            rent_amount=600.0,
            property_type="apartment",
            furnished=True,
            available_from=date(2025, 9, 1),
            minimum_duration_months=6,
            amenities=frozenset({"balcony", "dishwasher"}),
            rules=frozenset({"non_smoking"}),
            current_roommate_count=2,
            current_roommate_ages=(21, 23),
        ),
        ListingProfile(
            listing_id="b",
            title="Large loft",
            neighborhood="Vincennes",
            rent_amount=950.0,
            property_type="loft",
            furnished=False,
            available_from=date(2025, 11, 1),
            minimum_duration_months=12,
            amenities=frozenset({"parking"}),
            rules=frozenset({"pets_ok"}),
            rooms=4,
            current_roommate_ages=(30, 34),
        ),
        ListingProfile(listing_id="c", neighborhood="Montreuil", rent_amount=500.0, is_active=False),
    ]


def ids(listings):
    return [l.listing_id for l in listings]


class TestSearchFilters:
    def test_no_filters_drops_only_inactive(self, catalog):
        assert ids(apply_filters(catalog)) == ["a", "b"]

    def test_text_search(self, catalog):
        assert ids(apply_filters(catalog, SearchFilters(text="LOFT"))) == ["b"]
        assert ids(apply_filters(catalog, SearchFilters(text="montreuil"))) == ["a"]

    def test_neighborhoods(self, catalog):
        assert ids(apply_filters(catalog, SearchFilters(neighborhoods=["Vincennes"]))) == ["b"]

    def test_rent_range(self, catalog):
        assert ids(apply_filters(catalog, SearchFilters(rent_max=700))) == ["a"]
        assert ids(apply_filters(catalog, SearchFilters(rent_min=700, rent_max=1000))) == ["b"]

    def test_rent_filter_excludes_unknown_rent(self):
        listing = ListingProfile(listing_id="x")
        assert not matches_filters(listing, SearchFilters(rent_max=1000))

    def test_property_type_and_furnished(self, catalog):
        assert ids(apply_filters(catalog, SearchFilters(property_type="loft"))) == ["b"]
        assert ids(apply_filters(catalog, SearchFilters(furnished=True))) == ["a"]
        assert ids(apply_filters(catalog, SearchFilters(furnished=False))) == ["b"]

    def test_available_from(self, catalog):
        assert ids(apply_filters(catalog, SearchFilters(available_from=date(2025, 10, 1)))) == ["b"]

    def test_minimum_duration(self, catalog):
        assert ids(apply_filters(catalog, SearchFilters(minimum_duration_months=6))) == ["a"]

    def test_amenities_and_rules_overlap(self, catalog):
        assert ids(apply_filters(catalog, SearchFilters(amenities=["parking", "gym"]))) == ["b"]
        assert ids(apply_filters(catalog, SearchFilters(rules=["non_smoking"]))) == ["a"]

    def test_roommate_count_uses_rooms_fallback(self, catalog):
        assert ids(apply_filters(catalog, SearchFilters(roommate_count_min=3))) == ["b"]
        assert ids(apply_filters(catalog, SearchFilters(roommate_count_max=2))) == ["a"]

    def test_roommate_count_precedence(self):
        listings = [
            ListingProfile(listing_id="empty", current_roommate_count=0, rooms=3),
            ListingProfile(listing_id="rooms-only", rooms=1),
            ListingProfile(listing_id="unknown"),
        ]
        # A zero count is real and wins over rooms; with neither, range filters drop the listing
        assert ids(apply_filters(listings, SearchFilters(roommate_count_max=1))) == ["empty", "rooms-only"]
        assert ids(apply_filters(listings, SearchFilters(roommate_count_min=2))) == []
        assert ids(apply_filters(listings, SearchFilters())) == ["empty", "rooms-only", "unknown"]


class TestCompatibilityFilters:
    def test_age_compatibility(self, catalog):
        seeker = SeekerProfile(age=22, preferred_age_min=19, preferred_age_max=25)
        kept = apply_filters(catalog, SearchFilters(age_compatibility=True), seeker=seeker)
        assert ids(kept) == ["a"]

    def test_age_compatibility_keeps_listings_without_ages(self):
        seeker = SeekerProfile(preferred_age_max=20)
        assert matches_filters(ListingProfile(), SearchFilters(age_compatibility=True), seeker)

    def test_lifestyle_compatibility(self):
        calm = Lifestyle(1, 5, 5, cohabitation_style=CohabitationStyle.INDEPENDENT)
        party = Lifestyle(5, 1, 1, cohabitation_style=CohabitationStyle.CLOSE_FRIENDS)
        seeker = SeekerProfile(lifestyle=calm)
        filters = SearchFilters(lifestyle_compatibility=True)
        assert matches_filters(ListingProfile(roommate_lifestyle=calm), filters, seeker)
        assert not matches_filters(ListingProfile(roommate_lifestyle=party), filters, seeker)
        # No roommate lifestyle scores neutral, which passes
        assert matches_filters(ListingProfile(), filters, seeker)

    def test_compatibility_filters_ignored_without_seeker(self, catalog):
        kept = apply_filters(catalog, SearchFilters(age_compatibility=True, lifestyle_compatibility=True))
        assert ids(kept) == ["a", "b"]
