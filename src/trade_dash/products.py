#!/usr/bin/env python3
"""
trade_dash.products — product composition of a country's exports

  product_data_for_year  one year, share of that year's total, largest first
  product_trend_data     every observed (product, year) with year-over-year growth (%)
  product_treemap_data   one year's breakdown annotated with growth vs. the previous calendar year

Growth is 0 whenever there is no positive previous value to compare against.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np
import pandas as pd

from trade_dash.config import DashboardConfig
from trade_dash.models import ProductData, ProductTreemapData, ProductTrendData
from trade_dash.records import filter_records, parse_year, sum_by

logger = logging.getLogger(__name__)

__all__ = ["product_data_for_year", "product_trend_data", "product_treemap_data"]


def _growth_pct(curr, prev):
    """(curr - prev) / prev * 100 where prev > 0, else 0. Works on scalars and Series."""
    if isinstance(prev, pd.Series):
        positive = prev.gt(0)
        return pd.Series(
            np.where(positive, (curr - prev) / prev.where(positive) * 100, 0.0),
            index=prev.index,
        )
    return (curr - prev) / prev * 100 if prev > 0 else 0.0


def product_data_for_year(
    records,
    country: str,
    year,
    config: Optional[DashboardConfig] = None,
) -> List[ProductData]:
    """
    Products the country exported in `year`, largest first.

    Years match on their parsed integer, so a record year of "2020x" falls in
    2020 like "2020" does.
    """
    cfg = config or DashboardConfig()
    df = filter_records(records, cfg.export_indicator, years=[year], reporter=country)

    g = sum_by(df, "product")
    total = float(g["value"].sum())
    g["share"] = g["value"] / total if total > 0 else 0.0
    g = g.sort_values("value", ascending=False, kind="stable")

    return [
        ProductData(product=p, value=float(v), share=float(s))
        for p, v, s in zip(g["product"], g["value"], g["share"])
    ]


def product_trend_data(
    records,
    country: str,
    config: Optional[DashboardConfig] = None,
) -> List[ProductTrendData]:
    """
    One row per (product, year) the country exported, across all years present.

    Products keep their first-appearance order; years ascend within a product.
    Growth compares against the product's previous *observed* year, so a gap
    year is skipped rather than treated as zero.
    """
    cfg = config or DashboardConfig()
    df = filter_records(records, cfg.export_indicator, reporter=country)
    if df.empty:
        return []

    g = sum_by(df, ["product", "year_num"])
    g["_order"] = g.groupby("product", sort=False).ngroup()
    g = g.sort_values(["_order", "year_num"], kind="stable").reset_index(drop=True)

    prev = g.groupby("product", sort=False)["value"].shift(1)
    g["growth"] = _growth_pct(g["value"], prev)

    return [
        ProductTrendData(product=p, year=int(y), value=float(v), growth=float(gr))
        for p, y, v, gr in zip(g["product"], g["year_num"], g["value"], g["growth"])
    ]


def product_treemap_data(
    records,
    country: str,
    latest_year,
    config: Optional[DashboardConfig] = None,
) -> List[ProductTreemapData]:
    year = parse_year(latest_year)
    current = product_data_for_year(records, country, year, config)
    previous = {d.product: d.value for d in product_data_for_year(records, country, year - 1, config)}

    logger.debug(
        "treemap %s %s: %d products, %d in previous year", country, year, len(current), len(previous)
    )
    return [
        ProductTreemapData(
            product=d.product,
            value=d.value,
            share=d.share,
            growth=_growth_pct(d.value, previous.get(d.product, 0.0)),
        )
        for d in current
    ]
