#!/usr/bin/env python3
"""Generate synthetic seekers and listings."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from coloc_match.config import load_config
from coloc_match.data.generators import generate_listings, generate_seekers
from coloc_match.data.records import save_generated_data
from coloc_match.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Generate synthetic seekers and listings")
    parser.add_argument("--config", type=str, default="configs/base.yaml")
    parser.add_argument("--output-dir", type=str, default=None)
    args = parser.parse_args()

    log = setup_logging()
    cfg = load_config(args.config)
    output_dir = args.output_dir or cfg.data.output_dir

    log.info(f"Generating {cfg.data.n_seekers} seekers with seed={cfg.data.seed}")
    seekers = generate_seekers(cfg.data.n_seekers, seed=cfg.data.seed)

    log.info(f"Generating {cfg.data.n_listings} listings...")
    listings = generate_listings(cfg.data.n_listings, seed=cfg.data.seed)
    n_active = sum(l.is_active for l in listings)
    log.info(f"  Active: {n_active}, inactive: {len(listings) - n_active}")

    log.info(f"Saving to {output_dir}/")
    save_generated_data(output_dir, seekers, listings)
    log.info("Data generation complete.")


if __name__ == "__main__":
    main()
