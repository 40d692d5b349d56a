"""Console + markdown table formatting for ranked listings."""

from __future__ import annotations

from typing import Sequence

from tabulate import tabulate

from ..data.schema import ScoredListing

HEADERS = ["#", "Listing", "Neighborhood", "Rent", "Score", "Age", "Life", "Hobby", "Pref", "Tier"]


def _rows(scored: Sequence[ScoredListing]) -> list[list]:
    rows = []
    for rank, s in enumerate(scored, start=1):
        b = s.compatibility.breakdown
        rent = f"{s.listing.rent_amount:.0f}" if s.listing.rent_amount is not None else "-"
        rows.append([
            rank,
            s.listing.listing_id,
            s.listing.neighborhood or "-",
            rent,
            s.compatibility.total_score,
            b.age_compatibility,
            b.lifestyle_compatibility,
            b.hobbies_compatibility,
            b.preferences_match,
            s.compatibility.tier,
        ])
    return rows


def format_console_table(scored: Sequence[ScoredListing]) -> str:
    return tabulate(_rows(scored), headers=HEADERS, tablefmt="grid")


def format_markdown_table(scored: Sequence[ScoredListing]) -> str:
    return tabulate(_rows(scored), headers=HEADERS, tablefmt="github")


def format_summary_table(summary: dict[str, float]) -> str:
    """Two-column table of score statistics."""
    rows = [[k, f"{v:.2f}"] for k, v in summary.items()]
    return tabulate(rows, headers=["Metric", "Value"], tablefmt="grid")


def format_explanation(scored: ScoredListing) -> str:
    """Multi-line text for one listing: score, strengths and issues."""
    c = scored.compatibility
    lines = [f"{scored.listing.listing_id}: {c.total_score}% ({c.tier})"]
    lines.extend(f"  + {s}" for s in c.strengths)
    lines.extend(f"  - {i}" for i in c.potential_issues)
    return "\n".join(lines)
