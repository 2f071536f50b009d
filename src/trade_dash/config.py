# src/trade_dash/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

__all__ = [
    "DashboardConfig",
    "EXPORT_INDICATOR",
    "MODES",
    "ROW",
    "VALUE_SCALE",
]

EXPORT_INDICATOR = "XPRT-TRD-VL"  # export trade value, in thousands
VALUE_SCALE = 1000
ROW = "ROW"  # rest of world
MODES = ("exports", "imports")

_DEFAULT_START_YEAR = 2002
_DEFAULT_END_YEAR = 2022
_DEFAULT_TOP_N = 10


@dataclass(frozen=True)
class DashboardConfig:
    """
    Dashboard-wide defaults handed to the builders by the caller.

    start_year / end_year: inclusive year window used by the time series and
        rank series builders.
    top_n: number of partners kept by the rank and slope builders.
    export_indicator: indicator tag of the records that take part.
    """

    start_year: int = _DEFAULT_START_YEAR
    end_year: int = _DEFAULT_END_YEAR
    top_n: int = _DEFAULT_TOP_N
    export_indicator: str = EXPORT_INDICATOR

    @property
    def years(self) -> range:
        return range(self.start_year, self.end_year + 1)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DashboardConfig":
        env = os.environ if environ is None else environ
        return cls(
            start_year=_int_env(env, "TRADE_DASH_START_YEAR", _DEFAULT_START_YEAR),
            end_year=_int_env(env, "TRADE_DASH_END_YEAR", _DEFAULT_END_YEAR),
            top_n=_int_env(env, "TRADE_DASH_TOP_N", _DEFAULT_TOP_N),
            export_indicator=env.get("TRADE_DASH_INDICATOR", EXPORT_INDICATOR),
        )


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer); using %s", name, raw, default)
        return default
