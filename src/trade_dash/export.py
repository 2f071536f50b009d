#!/usr/bin/env python3
"""
trade_dash.export — write dashboard series for one or more countries

Inputs:
  raw trade-flow CSV/parquet files (glob, default data_raw/*.csv)

Outputs (in outputs/ by default), per country:
  <country>_dashboard.json        every series, see trade_dash.dashboard.SERIES_NAMES
  <country>_<series>.csv          one long table per series (rank series flattened per year)
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path

from trade_dash.config import DashboardConfig
from trade_dash.dashboard import build_country_dashboard, dashboard_payload
from trade_dash.loader import load_records
from trade_dash.logging_config import setup_logging
from trade_dash.models import as_frame
from trade_dash.paths import DATA_RAW, OUTPUTS
from trade_dash.records import available_countries, to_frame

logger = logging.getLogger(__name__)


def write_country(records, country: str, config: DashboardConfig, outdir: Path) -> Path:
    """Write the JSON bundle and per-series CSVs for `country`; returns the JSON path."""
    outdir.mkdir(parents=True, exist_ok=True)
    series = build_country_dashboard(records, country, config)

    json_path = outdir / f"{country}_dashboard.json"
    with json_path.open("w", encoding="utf-8") as fh:
        json.dump(dashboard_payload(series, country, config), fh, indent=2)
    logger.info("wrote %s", json_path)

    for name, items in series.items():
        table = as_frame(items)
        if table.empty:
            logger.info("skip %s_%s.csv (no rows)", country, name)
            continue
        csv_path = outdir / f"{country}_{name}.csv"
        table.to_csv(csv_path, index=False)
        logger.info("wrote %s rows: %d", csv_path, len(table))
    return json_path


def _parser() -> argparse.ArgumentParser:
    defaults = DashboardConfig.from_env()
    ap = argparse.ArgumentParser(description=__doc__.split("\n")[1])
    ap.add_argument(
        "--in-glob",
        default=str(DATA_RAW / "*.csv"),
        help="glob of raw trade-flow CSV/parquet files",
    )
    ap.add_argument(
        "--country",
        action="append",
        help="reporter code to export (repeatable; default: every reporter in the data)",
    )
    ap.add_argument("--outdir", default=str(OUTPUTS), help="output directory (default: outputs/)")
    ap.add_argument("--start-year", type=int, default=defaults.start_year)
    ap.add_argument("--end-year", type=int, default=defaults.end_year)
    ap.add_argument("--top-n", type=int, default=defaults.top_n)
    ap.add_argument("--log-level", default="INFO")
    ap.add_argument("--log-file", default=None, help="optional rotating log file")
    return ap


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    config = replace(
        DashboardConfig.from_env(),
        start_year=args.start_year,
        end_year=args.end_year,
        top_n=args.top_n,
    )
    records = to_frame(load_records(args.in_glob))
    if records.empty:
        logger.warning("No trade records found; nothing to do.")
        return 1

    countries = args.country or available_countries(records)
    outdir = Path(args.outdir)
    for country in countries:
        write_country(records, country, config, outdir)
    logger.info("exported %d countr%s to %s", len(countries), "y" if len(countries) == 1 else "ies", outdir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
