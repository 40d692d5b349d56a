#!/usr/bin/env python3
"""Rank listings for one seeker and print the table."""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from coloc_match.config import load_config
from coloc_match.data.records import load_generated_data
from coloc_match.data.schema import ScoredListing
from coloc_match.evaluation.tables import format_console_table, format_explanation
from coloc_match.scoring.filters import SearchFilters
from coloc_match.scoring.ranking import recommend_listings
from coloc_match.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Rank listings for a seeker")
    parser.add_argument("--config", type=str, default="configs/base.yaml")
    parser.add_argument("--data-dir", type=str, default="data")
    parser.add_argument("--seeker", type=str, required=True, help="Seeker user id")
    parser.add_argument("--rent-max", type=float, default=None)
    parser.add_argument("--neighborhood", action="append", default=[])
    parser.add_argument("--age-compatible", action="store_true")
    parser.add_argument("--lifestyle-compatible", action="store_true")
    parser.add_argument("--explain", type=int, default=3, help="Explain the top N listings")
    args = parser.parse_args()

    log = setup_logging()
    cfg = load_config(args.config)

    data = load_generated_data(args.data_dir)
    seekers = {s.user_id: s for s in data["seekers"]}
    if args.seeker not in seekers:
        log.error(f"Unknown seeker {args.seeker!r} in {args.data_dir}")
        sys.exit(1)
    seeker = seekers[args.seeker]

    filters = SearchFilters(
        rent_max=args.rent_max,
        neighborhoods=args.neighborhood,
        age_compatibility=args.age_compatible,
        lifestyle_compatibility=args.lifestyle_compatible,
    )
    recs = recommend_listings(
        seeker,
        data["listings"],
        filters=filters,
        limit=cfg.ranking.limit or 10,
        ranking=cfg.ranking,
        cfg=cfg.scoring,
    )
    if not recs:
        log.warning("No listing passed the filters")
        return

    scored = [ScoredListing(i, r.listing, r.compatibility) for i, r in enumerate(recs)]
    print(format_console_table(scored))
    print()
    for s in scored[: args.explain]:
        print(format_explanation(s))
        print()

    results_dir = Path(cfg.results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    out_path = results_dir / f"{seeker.user_id}_ranking.json"
    with open(out_path, "w") as f:
        json.dump(
            [{"listing_id": r.listing.listing_id, **r.compatibility.to_dict()} for r in recs],
            f,
            indent=2,
        )
    log.info(f"Results saved to {out_path}")


if __name__ == "__main__":
    main()
