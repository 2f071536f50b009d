#!/usr/bin/env python3
"""
trade_dash.ranks — partner rank over time (bump chart data)

The partner set is fixed once, from export value summed over the whole year
window, and every year ranks only that set. A partner that is large in a
single year but outside the window-wide top K never appears.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from trade_dash.config import DashboardConfig
from trade_dash.models import PartnerRankPoint, PartnerRankSeries
from trade_dash.records import aggregate, filter_records, zero_fill

logger = logging.getLogger(__name__)

__all__ = ["build_partner_rank_series", "top_partners"]


def top_partners(totals: dict, k: int) -> list:
    """Keys of `totals` by descending value; ties keep their incoming order. k is clamped to >= 1."""
    k = max(1, int(k))
    return [p for p, _ in sorted(totals.items(), key=lambda kv: kv[1], reverse=True)[:k]]


def build_partner_rank_series(
    records,
    reporter: str,
    top_k: Optional[int] = None,
    config: Optional[DashboardConfig] = None,
) -> List[PartnerRankSeries]:
    """
    One series per top partner, one point per year in the configured window.

    top_k defaults to config.top_n. Within a year partners are ranked by that
    year's value (0 when absent), rank 1 being the largest; equal values keep
    the window-wide order.
    """
    cfg = config or DashboardConfig()
    years = list(cfg.years)
    k = cfg.top_n if top_k is None else top_k

    df = filter_records(
        records,
        cfg.export_indicator,
        reporter=reporter,
        year_range=(cfg.start_year, cfg.end_year),
    )
    partners = top_partners(aggregate(df, "partner"), k)
    if not partners:
        return []

    by_year = zero_fill(
        aggregate(df[df["partner"].isin(partners)], ("year_num", "partner")),
        [(y, p) for y in years for p in partners],
    )

    points: dict[str, list[PartnerRankPoint]] = {p: [] for p in partners}
    for y in years:
        ranked = sorted(partners, key=lambda p: by_year[(y, p)], reverse=True)
        for rank, p in enumerate(ranked, start=1):
            points[p].append(PartnerRankPoint(year=y, rank=rank, value=by_year[(y, p)]))

    logger.debug("rank series for %s: %d partners x %d years", reporter, len(partners), len(years))
    return [PartnerRankSeries(partner=p, series=tuple(points[p])) for p in partners]
