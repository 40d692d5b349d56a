#!/usr/bin/env python3
"""End-to-end: generate data -> rank the catalog for every seeker -> print summary."""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from coloc_match.config import load_config
from coloc_match.data.generators import generate_listings, generate_seekers
from coloc_match.data.records import save_generated_data
from coloc_match.evaluation.metrics import score_distribution, tier_counts, top_explanations
from coloc_match.evaluation.tables import format_markdown_table, format_summary_table
from coloc_match.scoring.filters import apply_filters
from coloc_match.scoring.ranking import rank_scored, score_listings
from coloc_match.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Score the whole synthetic catalog")
    parser.add_argument("--config", type=str, default="configs/base.yaml")
    args = parser.parse_args()

    log = setup_logging()
    cfg = load_config(args.config)

    # Step 1: Generate data
    seekers = generate_seekers(cfg.data.n_seekers, seed=cfg.data.seed)
    listings = generate_listings(cfg.data.n_listings, seed=cfg.data.seed)
    save_generated_data(cfg.data.output_dir, seekers, listings)
    log.info(f"Generated {len(seekers)} seekers, {len(listings)} listings -> {cfg.data.output_dir}/")

    # Step 2: Score every active listing for every seeker
    active = apply_filters(listings)
    all_scored = []
    per_seeker = {}
    for seeker in seekers:
        scored = score_listings(seeker, active, max_workers=cfg.ranking.max_workers, cfg=cfg.scoring)
        all_scored.extend(scored)
        top = rank_scored(scored, min_score=cfg.ranking.min_score, limit=cfg.ranking.limit)
        per_seeker[seeker.user_id] = [
            {"listing_id": s.listing.listing_id, **s.compatibility.to_dict()} for s in top
        ]

    # Step 3: Summarize
    summary = score_distribution(all_scored)
    log.info("\n" + "=" * 60)
    log.info("SCORE SUMMARY")
    log.info("=" * 60 + "\n")
    print(format_summary_table(summary))
    print()
    log.info(f"Tiers: {tier_counts(all_scored)}")
    for kind, common in top_explanations(all_scored).items():
        log.info(f"Most common {kind}: {common}")

    results_dir = Path(cfg.results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    with open(results_dir / "all_rankings.json", "w") as f:
        json.dump(per_seeker, f, indent=2)
    with open(results_dir / "summary.json", "w") as f:
        json.dump(summary, f, indent=2)

    first = seekers[0]
    first_top = rank_scored(
        score_listings(first, active, cfg=cfg.scoring), limit=cfg.ranking.limit
    )
    with open(results_dir / f"{first.user_id}_ranking.md", "w") as f:
        f.write(format_markdown_table(first_top) + "\n")
    log.info(f"Results saved to {results_dir}/")


if __name__ == "__main__":
    main()
