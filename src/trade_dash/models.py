# src/trade_dash/models.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, List, Literal, Tuple, Union

import pandas as pd

__all__ = [
    "PartnerRankPoint",
    "PartnerRankSeries",
    "ProductData",
    "ProductTreemapData",
    "ProductTrendData",
    "SlopeDatum",
    "SlopeShare",
    "SlopeShareDatum",
    "SlopeShareValueDatum",
    "TimeSeriesData",
    "TradeRecord",
    "as_dicts",
    "as_frame",
]


@dataclass(frozen=True)
class TradeRecord:
    """One bilateral flow as delivered by the loader. Numbers stay string-encoded."""

    year: str
    reporter: str
    partner: str
    product: str
    indicator: str
    value: str


@dataclass(frozen=True)
class ProductData:
    product: str
    value: float
    share: float


@dataclass(frozen=True)
class ProductTrendData:
    product: str
    year: int
    value: float
    growth: float  # percent vs. the product's previous observed year


@dataclass(frozen=True)
class ProductTreemapData:
    product: str
    value: float
    share: float
    growth: float  # percent vs. the previous calendar year


@dataclass(frozen=True)
class TimeSeriesData:
    year: int
    exports: float
    imports: float
    balance: float


@dataclass(frozen=True)
class PartnerRankPoint:
    year: int
    rank: int
    value: float


@dataclass(frozen=True)
class PartnerRankSeries:
    partner: str
    series: Tuple[PartnerRankPoint, ...]


@dataclass(frozen=True)
class SlopeDatum:
    partner: str
    v1: float
    v2: float


@dataclass(frozen=True)
class SlopeShareDatum:
    """Share of the reporter-wide total and balance sign (True = surplus) in both years."""

    partner: str
    s1: float
    s2: float
    b1: bool
    b2: bool
    kind: Literal["shares"] = "shares"


@dataclass(frozen=True)
class SlopeShareValueDatum:
    """SlopeShareDatum plus the raw values and totals behind the shares."""

    partner: str
    s1: float
    s2: float
    b1: bool
    b2: bool
    v1: float
    v2: float
    total1: float
    total2: float
    kind: Literal["values"] = "values"


SlopeShare = Union[SlopeShareDatum, SlopeShareValueDatum]


def as_dicts(items: Iterable) -> List[dict]:
    """Plain dicts for JSON; nested dataclasses (rank series points) are expanded too."""
    return [asdict(i) for i in items]


def as_frame(items: Iterable) -> pd.DataFrame:
    """
    Long table for CSV export. PartnerRankSeries is flattened to one row per
    (partner, year); every other result type maps one item to one row.
    """
    rows: list[dict] = []
    for item in items:
        if isinstance(item, PartnerRankSeries):
            rows.extend({"partner": item.partner, **asdict(p)} for p in item.series)
        else:
            rows.append(asdict(item))
    return pd.DataFrame(rows)
