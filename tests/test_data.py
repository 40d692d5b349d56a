"""Tests for synthetic data generation + config loading."""

import random

import pytest
from pydantic import ValidationError

from coloc_match.config import AppConfig, RankingConfig, load_config
from coloc_match.data.generators import (
    generate_good_fit,
    generate_listings,
    generate_seekers,
)
from coloc_match.scoring.compatibility import compute_compatibility


class TestGenerators:
    def test_deterministic_generation(self):
        assert generate_seekers(10, seed=42) == generate_seekers(10, seed=42)
        assert generate_listings(10, seed=42) == generate_listings(10, seed=42)

    def test_independent_of_global_random_state(self):
        random.seed(1)
        first = generate_listings(10, seed=42)
        random.seed(2)
        random.random()
        assert generate_listings(10, seed=42) == first

    def test_different_seeds_differ(self):
        a = generate_listings(20, seed=42)
        b = generate_listings(20, seed=99)
        assert sum(x.rent_amount != y.rent_amount for x, y in zip(a, b)) > 0

    def test_generate_correct_count(self):
        assert len(generate_seekers(50, seed=42)) == 50
        assert len(generate_listings(30, seed=42)) == 30

    def test_ids_sequential(self):
        assert [s.user_id for s in generate_seekers(5)] == [f"seeker-{i}" for i in range(5)]
        assert [l.listing_id for l in generate_listings(5)] == [f"listing-{i}" for i in range(5)]

    def test_listings_consistent(self):
        for l in generate_listings(100, seed=1):
            assert l.rooms >= 2
            if l.current_roommate_count is not None:
                assert l.current_roommate_count == len(l.current_roommate_ages)
                assert l.current_roommate_count < l.rooms
            if not l.current_roommate_ages:
                assert l.roommate_lifestyle is None

    def test_some_data_missing(self):
        seekers = generate_seekers(200, seed=42)
        assert any(s.lifestyle is None for s in seekers)
        assert any(s.age is None for s in seekers)
        assert any(l.landlord_hobbies is None for l in generate_listings(200, seed=42))

    def test_good_fit_scores_well(self):
        rng = random.Random(0)
        for seeker in generate_seekers(30, seed=8):
            listing = generate_good_fit(seeker, 0, rng)
            result = compute_compatibility(seeker, listing)
            if seeker.age is not None:
                assert result.breakdown.age_compatibility == 25
            if seeker.preferred_roommate_count:
                assert "ideal roommate count" in result.strengths


class TestConfig:
    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.scoring.neutral_lifestyle == 20
        assert cfg.scoring.default_roommate_age == 25.0

    def test_partial_yaml_merges_defaults(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("name: custom\nranking:\n  limit: 5\nscoring:\n  neutral_age: 12\n")
        cfg = load_config(path)
        assert cfg.name == "custom"
        assert cfg.ranking.limit == 5
        assert cfg.ranking.min_score == 0
        assert cfg.scoring.neutral_age == 12
        assert cfg.scoring.neutral_hobbies == 10

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == AppConfig()

    def test_negative_neutral_score_in_yaml_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("scoring:\n  neutral_age: -30\n  neutral_lifestyle: -40\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_ranking_bounds(self):
        with pytest.raises(ValidationError):
            RankingConfig(max_workers=0)
        with pytest.raises(ValidationError):
            RankingConfig(min_score=101)
