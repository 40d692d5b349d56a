"""Catalog-level statistics over scored listings."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

import numpy as np

from ..data.schema import ScoredListing

COMPONENTS = (
    "age_compatibility",
    "lifestyle_compatibility",
    "hobbies_compatibility",
    "preferences_match",
)


def score_distribution(scored: Sequence[ScoredListing]) -> dict[str, float]:
    """Mean/median/spread of total scores plus per-component means."""
    if not scored:
        return {}
    totals = np.array([s.compatibility.total_score for s in scored], dtype=float)
    results = {
        "count": float(len(totals)),
        "mean": float(totals.mean()),
        "median": float(np.median(totals)),
        "std": float(totals.std()),
        "min": float(totals.min()),
        "max": float(totals.max()),
        "p90": float(np.percentile(totals, 90)),
    }
    for name in COMPONENTS:
        values = np.array([getattr(s.compatibility.breakdown, name) for s in scored], dtype=float)
        results[f"mean_{name}"] = float(values.mean())
    return results


def tier_counts(scored: Sequence[ScoredListing]) -> dict[str, int]:
    counts = Counter(s.compatibility.tier for s in scored)
    return {tier: counts.get(tier, 0) for tier in ("excellent", "good", "moderate")}


def top_explanations(scored: Sequence[ScoredListing], k: int = 5) -> dict[str, list[tuple[str, int]]]:
    """Most frequent strengths and issues across the catalog."""
    strengths = Counter(x for s in scored for x in s.compatibility.strengths)
    issues = Counter(x for s in scored for x in s.compatibility.potential_issues)
    return {
        "strengths": strengths.most_common(k),
        "potential_issues": issues.most_common(k),
    }
