import logging

from trade_dash.config import EXPORT_INDICATOR, DashboardConfig


def test_defaults():
    cfg = DashboardConfig()
    assert (cfg.start_year, cfg.end_year, cfg.top_n) == (2002, 2022, 10)
    assert cfg.export_indicator == EXPORT_INDICATOR == "XPRT-TRD-VL"
    assert len(cfg.years) == 21


def test_from_env_overrides_and_falls_back(caplog):
    env = {"TRADE_DASH_START_YEAR": "2010", "TRADE_DASH_TOP_N": "five", "TRADE_DASH_END_YEAR": ""}
    with caplog.at_level(logging.WARNING, logger="trade_dash.config"):
        cfg = DashboardConfig.from_env(env)
    assert cfg.start_year == 2010
    assert cfg.end_year == 2022
    assert cfg.top_n == 10
    assert "TRADE_DASH_TOP_N" in caplog.text


def test_from_env_indicator():
    assert DashboardConfig.from_env({"TRADE_DASH_INDICATOR": "MPRT-TRD-VL"}).export_indicator == "MPRT-TRD-VL"
    assert DashboardConfig.from_env({}).export_indicator == EXPORT_INDICATOR
