#!/usr/bin/env python3
"""
trade_dash.slope — two-year partner comparisons (slope chart data)

  build_slope_data        raw export value to each top partner in year1 and year2
  build_slope_share_data  share of the reporter-wide total per top partner, with the
                          trade-balance sign, plus a synthetic "ROW" entry for
                          everything outside the top set

Partners are ranked by their year2 value; the literal partner code "ROW" is
never a candidate for the top set.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import pandas as pd

from trade_dash.config import MODES, ROW, DashboardConfig
from trade_dash.models import SlopeDatum, SlopeShare, SlopeShareDatum, SlopeShareValueDatum
from trade_dash.ranks import top_partners
from trade_dash.records import aggregate, filter_records, parse_year

logger = logging.getLogger(__name__)

__all__ = ["build_slope_data", "build_slope_share_data"]


def build_slope_data(
    records,
    reporter: str,
    year1,
    year2,
    top_n: Optional[int] = None,
    config: Optional[DashboardConfig] = None,
) -> List[SlopeDatum]:
    cfg = config or DashboardConfig()
    y1, y2 = parse_year(year1), parse_year(year2)
    n = cfg.top_n if top_n is None else top_n

    df = filter_records(records, cfg.export_indicator, reporter=reporter, years=[y1, y2])
    df = df[df["partner"] != ROW]

    values = aggregate(df, ("partner", "year_num"))
    candidates = {p: values.get((p, y2), 0.0) for p in df["partner"].unique()}

    return [
        SlopeDatum(partner=p, v1=values.get((p, y1), 0.0), v2=values.get((p, y2), 0.0))
        for p in top_partners(candidates, n)
    ]


def _flows(df: pd.DataFrame, reporter: str) -> pd.DataFrame:
    """Exports keyed by destination and imports keyed by origin, in one long frame."""
    exports = df[df["reporter"] == reporter]
    imports = df[df["partner"] == reporter]
    return pd.concat(
        [
            exports.assign(flow="exports", counterpart=exports["partner"]),
            imports.assign(flow="imports", counterpart=imports["reporter"]),
        ],
        ignore_index=True,
    )


def build_slope_share_data(
    records,
    reporter: str,
    year1,
    year2,
    top_n: Optional[int] = None,
    mode: str = "exports",
    with_values: bool = True,
    config: Optional[DashboardConfig] = None,
) -> List[SlopeShare]:
    """
    Share-of-total comparison between two years for the reporter's top partners.

    mode picks the flow ("exports" or "imports") used for ranking, shares and
    values. The balance flags b1/b2 are True when exports to the partner are at
    least the imports from it. Counterparts outside the top set, a literal
    "ROW" counterpart included, are summed into a trailing "ROW" entry; the
    entry is present only when there is at least one such counterpart.

    with_values=False returns SlopeShareDatum (shares and balance only);
    otherwise SlopeShareValueDatum, which also carries v1/v2 and total1/total2.
    """
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")

    cfg = config or DashboardConfig()
    y1, y2 = parse_year(year1), parse_year(year2)
    n = cfg.top_n if top_n is None else top_n

    df = filter_records(records, cfg.export_indicator, country=reporter, years=[y1, y2])
    flows = _flows(df, reporter)

    sums = aggregate(flows, ("flow", "counterpart", "year_num"))
    totals = aggregate(flows, ("flow", "year_num"))
    total1 = totals.get((mode, y1), 0.0)
    total2 = totals.get((mode, y2), 0.0)

    counterparts = list(flows["counterpart"].unique())
    candidates = {c: sums.get((mode, c, y2), 0.0) for c in counterparts if c != ROW}
    top = top_partners(candidates, n) if candidates else []
    rest = [c for c in counterparts if c not in set(top)]

    def flow_sum(flow: str, parts: list, year: int) -> float:
        return sum(sums.get((flow, c, year), 0.0) for c in parts)

    def datum(partner: str, parts: list) -> SlopeShare:
        e1, e2 = flow_sum("exports", parts, y1), flow_sum("exports", parts, y2)
        i1, i2 = flow_sum("imports", parts, y1), flow_sum("imports", parts, y2)
        v1, v2 = (e1, e2) if mode == "exports" else (i1, i2)
        shares = dict(
            partner=partner,
            s1=v1 / total1 if total1 > 0 else 0.0,
            s2=v2 / total2 if total2 > 0 else 0.0,
            b1=e1 - i1 >= 0,
            b2=e2 - i2 >= 0,
        )
        if not with_values:
            return SlopeShareDatum(**shares)
        return SlopeShareValueDatum(**shares, v1=v1, v2=v2, total1=total1, total2=total2)

    out = [datum(c, [c]) for c in top]
    if rest:
        out.append(datum(ROW, rest))

    logger.debug(
        "slope shares for %s %s/%s (%s): %d top, %d folded into %s",
        reporter,
        y1,
        y2,
        mode,
        len(top),
        len(rest),
        ROW,
    )
    return out
