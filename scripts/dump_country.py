#!/usr/bin/env python3
"""
scripts/dump_country.py
Prints the dashboard tables for one country (time series, top products,
partner ranks, year-pair shares) to stdout.

Usage: python scripts/dump_country.py CHN [glob]
"""
import sys
from pathlib import Path

import pandas as pd

# Setup paths
HERE = Path(__file__).resolve()
ROOT = HERE.parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from trade_dash.config import DashboardConfig  # noqa: E402
from trade_dash.dashboard import build_country_dashboard  # noqa: E402
from trade_dash.loader import load_records  # noqa: E402
from trade_dash.logging_config import setup_logging  # noqa: E402
from trade_dash.models import as_frame  # noqa: E402

DEFAULT_GLOB = "data_raw/*.csv"


def dump(country: str, pattern: str):
    records = load_records(pattern)
    if records.empty:
        print(f"No records found under {pattern}")
        return

    config = DashboardConfig.from_env()
    series = build_country_dashboard(records, country, config)

    with pd.option_context("display.max_rows", 200, "display.width", 160):
        print(f"\n=== TIME SERIES: {country} ({config.start_year}-{config.end_year}) ===")
        print(as_frame(series["time_series"]).to_string(index=False))

        print(f"\n=== TOP PRODUCTS {config.end_year} ===")
        print(as_frame(series["product_treemap"]).head(15).to_string(index=False))

        print("\n=== PARTNER RANKS (rank by year) ===")
        ranks = as_frame(series["partner_ranks"])
        if not ranks.empty:
            print(ranks.pivot(index="partner", columns="year", values="rank").to_string())

        for name in ("slope_share_exports", "slope_share_imports"):
            print(f"\n=== {name.upper()} {config.start_year} vs {config.end_year} ===")
            print(as_frame(series[name]).to_string(index=False))


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    setup_logging("WARNING")
    dump(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else DEFAULT_GLOB)
