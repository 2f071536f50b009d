#!/usr/bin/env python3
"""
trade_dash.records — normalize, filter, group and look up trade records

Every builder goes through the same three stages:
  to_frame        any record collection -> string-typed DataFrame plus two derived columns:
                    year_num (int, lenient parse, 0 when unparsable)
                    amount   (float, lenient parse x 1000, 0 when unparsable)
  filter_records  indicator / year / reporter / partner selection, original order kept
  sum_by          group by one or more columns and sum `amount`; absent keys never appear

zero_fill is kept as its own step; callers that need dense output (time series,
rank series) apply it after aggregation.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, is_dataclass
from typing import Hashable, Iterable, Optional, Sequence, Tuple, Union

import pandas as pd

from trade_dash.config import EXPORT_INDICATOR, VALUE_SCALE

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ("year", "reporter", "partner", "product", "indicator", "value")

# leading number, the way a lenient float/int parse reads "12.5abc" as 12.5
_FLOAT_RE = r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
_INT_RE = r"^\s*([+-]?\d+)"

Key = Union[str, Sequence[str]]


# ---------- parsing ----------


def _lenient_series(s: pd.Series, pattern: str) -> pd.Series:
    lead = s.astype(str).str.extract(pattern, expand=False)
    return pd.to_numeric(lead, errors="coerce").fillna(0)


def parse_year(value) -> int:
    """Integer year from a string/number; 0 when it does not start with digits."""
    m = re.match(_INT_RE, str(value))
    return int(m.group(1)) if m else 0


def parse_value(value) -> float:
    """Absolute value (thousands x 1000) from a string/number; 0 when unparsable."""
    m = re.match(_FLOAT_RE, str(value))
    return float(m.group(1)) * VALUE_SCALE if m else 0.0


def to_frame(records) -> pd.DataFrame:
    """
    Normalize a record collection into the frame every transform works on.

    Accepts a DataFrame, or an iterable of TradeRecord / mappings. The caller's
    object is never modified; missing columns become empty strings.
    """
    if isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        rows = [asdict(r) if is_dataclass(r) else dict(r) for r in records]
        df = pd.DataFrame(rows, columns=list(RECORD_COLUMNS))

    for c in RECORD_COLUMNS:
        if c not in df.columns:
            df[c] = ""

    df = df[list(RECORD_COLUMNS)].fillna("").astype(str).reset_index(drop=True)
    df["year_num"] = _lenient_series(df["year"], _INT_RE).astype("int64")
    df["amount"] = _lenient_series(df["value"], _FLOAT_RE).astype("float64") * VALUE_SCALE
    return df


# ---------- filter ----------


def filter_records(
    records,
    indicator: Optional[str] = EXPORT_INDICATOR,
    *,
    years: Optional[Iterable] = None,
    year_range: Optional[Tuple[int, int]] = None,
    reporter: Optional[str] = None,
    partner: Optional[str] = None,
    country: Optional[str] = None,
) -> pd.DataFrame:
    """
    Rows satisfying every given condition, in their original order.

    years: explicit set of years; year_range: inclusive (start, end);
    country: matches either side of the flow. indicator=None disables the
    indicator check.
    """
    df = to_frame(records)
    mask = pd.Series(True, index=df.index)

    if indicator is not None:
        mask &= df["indicator"] == indicator
    if year_range is not None:
        start, end = year_range
        mask &= df["year_num"].between(start, end)
    if years is not None:
        mask &= df["year_num"].isin([parse_year(y) for y in years])
    if reporter is not None:
        mask &= df["reporter"] == reporter
    if partner is not None:
        mask &= df["partner"] == partner
    if country is not None:
        mask &= (df["reporter"] == country) | (df["partner"] == country)

    out = df[mask]
    logger.debug("filter_records kept %d of %d rows", len(out), len(df))
    return out


# ---------- aggregation ----------


def _key_cols(key: Key) -> list[str]:
    return [key] if isinstance(key, str) else list(key)


def sum_by(frame: pd.DataFrame, key: Key) -> pd.DataFrame:
    """
    Group `frame` by the key column(s) and sum `amount` into a `value` column.
    Groups come out in first-appearance order.
    """
    cols = _key_cols(key)
    if frame.empty:
        return pd.DataFrame({**{c: pd.Series(dtype=frame[c].dtype) for c in cols}, "value": pd.Series(dtype="float64")})
    return (
        frame.groupby(cols, sort=False)["amount"]
        .sum()
        .rename("value")
        .reset_index()
    )


def _py(v):
    return v.item() if hasattr(v, "item") else v


def aggregate(frame: pd.DataFrame, key: Key) -> dict:
    """
    Mapping of group key -> summed amount.

    A string key yields scalar dict keys; a sequence of columns yields tuples.
    """
    cols = _key_cols(key)
    g = sum_by(frame, cols)
    if isinstance(key, str):
        return {_py(k): float(v) for k, v in zip(g[key], g["value"])}
    return {
        tuple(_py(x) for x in k): float(v)
        for k, v in zip(g[cols].itertuples(index=False, name=None), g["value"])
    }


def zero_fill(sums: dict, keys: Iterable[Hashable]) -> dict:
    """`sums` with 0 for every missing key; the given keys come first, in order."""
    out = {k: float(sums.get(k, 0.0)) for k in keys}
    for k, v in sums.items():
        out.setdefault(k, v)
    return out


# ---------- lookups ----------


def distinct_values(records, field: str) -> list[str]:
    """Sorted distinct values of one record field (across all indicators)."""
    if field not in RECORD_COLUMNS:
        raise ValueError(f"Unknown record field {field!r}; expected one of {RECORD_COLUMNS}")
    df = to_frame(records)
    return sorted(df[field].unique().tolist())


def available_countries(records) -> list[str]:
    return distinct_values(records, "reporter")


def available_years(records) -> list[str]:
    return distinct_values(records, "year")


def available_products(records) -> list[str]:
    return distinct_values(records, "product")
