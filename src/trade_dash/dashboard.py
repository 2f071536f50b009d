# src/trade_dash/dashboard.py
from __future__ import annotations

import logging
from typing import Dict, Optional

from trade_dash.config import DashboardConfig
from trade_dash.models import as_dicts
from trade_dash.products import product_data_for_year, product_trend_data, product_treemap_data
from trade_dash.ranks import build_partner_rank_series
from trade_dash.records import to_frame
from trade_dash.slope import build_slope_data, build_slope_share_data
from trade_dash.timeseries import build_time_series

logger = logging.getLogger(__name__)

__all__ = ["SERIES_NAMES", "build_country_dashboard", "dashboard_payload"]

SERIES_NAMES = (
    "time_series",
    "products",
    "product_trend",
    "product_treemap",
    "partner_ranks",
    "slope",
    "slope_share_exports",
    "slope_share_imports",
)


def build_country_dashboard(
    records,
    country: str,
    config: Optional[DashboardConfig] = None,
) -> Dict[str, list]:
    """
    Every dashboard series for one country, keyed by SERIES_NAMES.

    The product views use config.end_year as the latest year; the slope views
    compare config.start_year with config.end_year.
    """
    cfg = config or DashboardConfig()
    df = to_frame(records)
    first, last = cfg.start_year, cfg.end_year

    series = {
        "time_series": build_time_series(df, country, cfg),
        "products": product_data_for_year(df, country, last, cfg),
        "product_trend": product_trend_data(df, country, cfg),
        "product_treemap": product_treemap_data(df, country, last, cfg),
        "partner_ranks": build_partner_rank_series(df, country, config=cfg),
        "slope": build_slope_data(df, country, first, last, config=cfg),
        "slope_share_exports": build_slope_share_data(df, country, first, last, mode="exports", config=cfg),
        "slope_share_imports": build_slope_share_data(df, country, first, last, mode="imports", config=cfg),
    }
    logger.info(
        "built dashboard for %s (%s-%s): %s",
        country,
        first,
        last,
        ", ".join(f"{k}={len(v)}" for k, v in series.items()),
    )
    return series


def dashboard_payload(series: Dict[str, list], country: str, config: DashboardConfig) -> dict:
    """JSON-ready form of build_country_dashboard output."""
    return {
        "country": country,
        "start_year": config.start_year,
        "end_year": config.end_year,
        "top_n": config.top_n,
        **{name: as_dicts(items) for name, items in series.items()},
    }
