"""Pydantic config models + YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class ScoringConfig(BaseModel):
    # Neutral scores used when a stage lacks data on either side
    neutral_age: int = Field(15, ge=0, le=25)
    neutral_lifestyle: int = Field(20, ge=0, le=35)
    neutral_hobbies: int = Field(10, ge=0, le=20)
    # Per preference sub-check; two of them share the 20-point stage
    neutral_preference: int = Field(5, ge=0, le=10)
    # Assumed roommate age when a listing lists no ages
    default_roommate_age: float = Field(25.0, ge=0)


class RankingConfig(BaseModel):
    max_workers: Optional[int] = Field(None, ge=1)
    min_score: int = Field(0, ge=0, le=100)
    limit: Optional[int] = Field(None, ge=0)


class DataConfig(BaseModel):
    n_seekers: int = 50
    n_listings: int = 200
    output_dir: str = "data"


class AppConfig(BaseModel):
    name: str = "base"
    scoring: ScoringConfig = ScoringConfig()
    ranking: RankingConfig = RankingConfig()
    data: DataConfig = DataConfig()
    results_dir: str = "results"


def load_config(path: str | Path) -> AppConfig:
    """Load config from YAML, merging with defaults."""
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig(**raw)
