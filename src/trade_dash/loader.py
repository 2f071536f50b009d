#!/usr/bin/env python3
"""
trade_dash.loader — read raw trade-flow files into the record frame

Inputs: CSV or parquet files matched by a glob, with (any spelling of) the columns
  year, reporter, partner, product, indicator, value
Common source headers such as "Reporter ISO3", "Product Code", "Indicator Code"
or "Trade Value" are mapped onto those names. All columns are read as strings;
numeric coercion happens later in trade_dash.records.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import pandas as pd

from trade_dash.records import RECORD_COLUMNS

logger = logging.getLogger(__name__)

__all__ = ["load_records", "normalize_columns"]

_ALIASES = {
    "year": "year",
    "period": "year",
    "reporter": "reporter",
    "reporteriso3": "reporter",
    "reportercode": "reporter",
    "partner": "partner",
    "partneriso3": "partner",
    "partnercode": "partner",
    "product": "product",
    "productcode": "product",
    "cmdcode": "product",
    "indicator": "indicator",
    "indicatorcode": "indicator",
    "value": "value",
    "tradevalue": "value",
    "primaryvalue": "value",
}


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Pick one source column per record field and return them under the field names.

    A header that already spells a field name ("Year", "value") wins over an
    alias ("period", "Trade Value"); otherwise the first matching alias is used.
    """
    norms = [_norm(c) for c in df.columns]
    src: dict[str, int] = {}
    for i, n in enumerate(norms):
        if n in RECORD_COLUMNS:
            src.setdefault(n, i)
    for i, n in enumerate(norms):
        target = _ALIASES.get(n)
        if target is not None:
            src.setdefault(target, i)

    out = pd.DataFrame({f: df.iloc[:, src[f]] for f in RECORD_COLUMNS if f in src}, index=df.index)
    missing = [c for c in RECORD_COLUMNS if c not in out.columns]
    if missing:
        logger.warning("missing record columns %s; filling with empty strings", missing)
        for c in missing:
            out[c] = ""
    return out[list(RECORD_COLUMNS)].fillna("").astype(str)


def _read_one(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".parquet":
        return pd.read_parquet(path)
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def load_records(pattern) -> pd.DataFrame:
    """Concatenate every readable, non-empty file matching `pattern`; skips bad files."""
    p = Path(pattern)
    files = sorted(p.parent.glob(p.name))
    frames: list[pd.DataFrame] = []
    for f in files:
        try:
            df = _read_one(f)
        except Exception as exc:
            logger.warning("skipping unreadable file %s: %s", f, exc)
            continue
        if df is None or df.empty or len(df.columns) == 0:
            logger.info("skipping empty file %s", f)
            continue
        frames.append(normalize_columns(df))

    if not frames:
        logger.warning("no records found for %s", pattern)
        return pd.DataFrame({c: pd.Series(dtype=str) for c in RECORD_COLUMNS})

    out = pd.concat(frames, ignore_index=True)
    logger.info("loaded %d records from %d file(s)", len(out), len(frames))
    return out
