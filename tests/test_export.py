import json

import pandas as pd

from trade_dash.dashboard import SERIES_NAMES, build_country_dashboard
from trade_dash.export import main
from trade_dash.loader import load_records, normalize_columns
from trade_dash.models import PartnerRankSeries, as_frame
from trade_dash.ranks import build_partner_rank_series
from trade_dash.records import to_frame


def _write_csv(path, rows):
    pd.DataFrame(rows).to_csv(path, index=False)


RAW = [
    {"Year": 2020, "Reporter ISO3": "A", "Partner ISO3": "B", "Product Code": "X", "Indicator Code": "XPRT-TRD-VL", "Value": 10},
    {"Year": 2021, "Reporter ISO3": "A", "Partner ISO3": "B", "Product Code": "X", "Indicator Code": "XPRT-TRD-VL", "Value": 20},
    {"Year": 2021, "Reporter ISO3": "B", "Partner ISO3": "A", "Product Code": "Y", "Indicator Code": "XPRT-TRD-VL", "Value": 5},
]


def test_normalize_columns_maps_aliases():
    df = normalize_columns(pd.DataFrame(RAW))
    assert list(df.columns) == ["year", "reporter", "partner", "product", "indicator", "value"]
    assert df.loc[0, "year"] == "2020"


def test_load_records_skips_bad_files(tmp_path):
    _write_csv(tmp_path / "a.csv", RAW[:2])
    _write_csv(tmp_path / "b.csv", RAW[2:])
    (tmp_path / "c.csv").write_text("")
    df = load_records(tmp_path / "*.csv")
    assert len(df) == 3
    assert df["reporter"].tolist() == ["A", "A", "B"]


def test_load_records_no_match(tmp_path):
    df = load_records(tmp_path / "*.csv")
    assert df.empty
    assert "value" in df.columns


def test_dashboard_has_every_series(two_year_records):
    series = build_country_dashboard(two_year_records, "A")
    assert tuple(series) == SERIES_NAMES
    assert len(series["time_series"]) == 21
    assert [s.partner for s in series["partner_ranks"]] == ["B"]


def test_as_frame_flattens_rank_series(partner_records):
    out = build_partner_rank_series(partner_records, "A", top_k=2)
    assert isinstance(out[0], PartnerRankSeries)
    table = as_frame(out)
    assert list(table.columns) == ["partner", "year", "rank", "value"]
    assert len(table) == 2 * 21


def test_cli_writes_json_and_csv(tmp_path):
    raw = tmp_path / "raw"
    raw.mkdir()
    _write_csv(raw / "flows.csv", RAW)
    outdir = tmp_path / "out"

    rc = main(
        [
            "--in-glob", str(raw / "*.csv"),
            "--outdir", str(outdir),
            "--country", "A",
            "--start-year", "2020",
            "--end-year", "2021",
            "--log-level", "WARNING",
        ]
    )

    assert rc == 0
    payload = json.loads((outdir / "A_dashboard.json").read_text())
    assert payload["country"] == "A"
    ts = {r["year"]: r for r in payload["time_series"]}
    assert ts[2021]["exports"] == 20000.0
    assert ts[2021]["imports"] == 5000.0
    assert (outdir / "A_time_series.csv").exists()
    assert payload["slope_share_exports"][0]["kind"] == "values"


def test_cli_without_records(tmp_path):
    assert main(["--in-glob", str(tmp_path / "*.csv"), "--outdir", str(tmp_path), "--log-level", "ERROR"]) == 1


def test_normalize_columns_prefers_exact_field_over_alias():
    raw = pd.DataFrame(
        {
            "period": ["202001"],
            "year": ["2020"],
            "Reporter": ["A"],
            "partner": ["B"],
            "product": ["X"],
            "indicator": ["XPRT-TRD-VL"],
            "Trade Value": ["7"],
            "Value": ["3"],
        }
    )
    df = normalize_columns(raw)
    assert list(df.columns) == ["year", "reporter", "partner", "product", "indicator", "value"]
    assert df.loc[0, "year"] == "2020"
    assert df.loc[0, "value"] == "3"

    frame = to_frame(df)
    assert frame.loc[0, "year_num"] == 2020
    assert frame.loc[0, "amount"] == 3000.0


def test_load_records_with_period_and_year_headers(tmp_path):
    rows = [{**r, "period": f"{r['Year']}01"} for r in RAW]
    _write_csv(tmp_path / "flows.csv", rows)
    df = load_records(tmp_path / "*.csv")
    assert df["year"].tolist() == ["2020", "2021", "2021"]
