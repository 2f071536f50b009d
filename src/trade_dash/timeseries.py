# src/trade_dash/timeseries.py
from __future__ import annotations

import logging
from typing import List, Optional

from trade_dash.config import DashboardConfig
from trade_dash.models import TimeSeriesData
from trade_dash.records import aggregate, filter_records, zero_fill

logger = logging.getLogger(__name__)

__all__ = ["build_time_series"]


def build_time_series(
    records,
    country: str,
    config: Optional[DashboardConfig] = None,
) -> List[TimeSeriesData]:
    """
    Exports, imports and balance for `country`, one row per configured year.

    A record counts as an export when the country is the reporter and as an
    import when it is the partner. Years without records are zero rows.
    """
    cfg = config or DashboardConfig()
    years = list(cfg.years)

    df = filter_records(
        records,
        cfg.export_indicator,
        year_range=(cfg.start_year, cfg.end_year),
        country=country,
    )

    exports = zero_fill(aggregate(df[df["reporter"] == country], "year_num"), years)
    imports = zero_fill(aggregate(df[df["partner"] == country], "year_num"), years)

    logger.debug("time series for %s: %d rows from %d records", country, len(years), len(df))
    return [
        TimeSeriesData(
            year=y,
            exports=exports[y],
            imports=imports[y],
            balance=exports[y] - imports[y],
        )
        for y in years
    ]
