import pytest

from trade_dash.models import SlopeDatum, SlopeShareDatum, SlopeShareValueDatum
from trade_dash.slope import build_slope_data, build_slope_share_data

from conftest import rec


def test_slope_data_top_by_second_year(partner_records):
    out = build_slope_data(partner_records, "A", "2020", "2021", top_n=2)
    assert out == [
        SlopeDatum(partner="B", v1=25000.0, v2=30000.0),
        SlopeDatum(partner="C", v1=15000.0, v2=20000.0),
    ]


def test_slope_data_excludes_literal_row_and_zero_fills():
    records = [
        rec(2021, "A", "ROW", 1000),
        rec(2020, "A", "B", 5),
        rec(2021, "A", "C", 3),
    ]
    out = build_slope_data(records, "A", 2020, 2021, top_n=5)
    assert out == [
        SlopeDatum(partner="C", v1=0.0, v2=3000.0),
        SlopeDatum(partner="B", v1=5000.0, v2=0.0),
    ]


def test_slope_data_top_n_clamped(partner_records):
    assert len(build_slope_data(partner_records, "A", 2020, 2021, top_n=0)) == 1
    assert build_slope_data([], "A", 2020, 2021) == []


def test_share_row_entry_holds_excluded_partner(partner_records):
    out = build_slope_share_data(partner_records, "A", 2020, 2021, top_n=2)
    assert [d.partner for d in out] == ["B", "C", "ROW"]
    row = out[-1]
    assert isinstance(row, SlopeShareValueDatum)
    assert row.v1 == 10000.0
    assert row.v2 == 10000.0
    assert row.total1 == 50000.0
    assert row.total2 == 60000.0


def test_share_values_and_balance(partner_records):
    b, c, _ = build_slope_share_data(partner_records, "A", 2020, 2021, top_n=2)
    assert b.s1 == pytest.approx(0.5)
    assert b.s2 == pytest.approx(0.5)
    assert b.b1 is False  # 25 out vs 40 in
    assert b.b2 is True
    assert c.b1 is True and c.b2 is True
    assert c.kind == "values"


def test_shares_sum_to_one_with_row(partner_records):
    out = build_slope_share_data(partner_records, "A", 2020, 2021, top_n=1)
    assert sum(d.s1 for d in out) == pytest.approx(1.0)
    assert sum(d.s2 for d in out) == pytest.approx(1.0)


def test_no_row_when_everything_fits(partner_records):
    out = build_slope_share_data(partner_records, "A", 2020, 2021, top_n=10)
    assert [d.partner for d in out] == ["B", "C", "D"]


def test_literal_row_counterpart_folds_into_residual(partner_records):
    records = partner_records + [rec(2021, "A", "ROW", 40)]
    out = build_slope_share_data(records, "A", 2020, 2021, top_n=3)
    assert [d.partner for d in out] == ["B", "C", "D", "ROW"]
    assert out[-1].v2 == 40000.0
    assert sum(d.s2 for d in out) == pytest.approx(1.0)


def test_imports_mode(partner_records):
    out = build_slope_share_data(partner_records, "A", 2020, 2021, top_n=2, mode="imports")
    assert [d.partner for d in out] == ["B", "C", "ROW"]
    b = out[0]
    assert b.v1 == 40000.0 and b.v2 == 20000.0
    assert b.total2 == 25000.0
    assert b.s2 == pytest.approx(0.8)
    assert out[-1].v2 == 0.0


def test_shares_only_variant(partner_records):
    out = build_slope_share_data(partner_records, "A", 2020, 2021, top_n=2, with_values=False)
    assert all(isinstance(d, SlopeShareDatum) for d in out)
    assert {d.kind for d in out} == {"shares"}
    assert not hasattr(out[0], "v1")


def test_zero_totals_give_zero_shares():
    out = build_slope_share_data([rec(2021, "A", "B", "x")], "A", 2020, 2021)
    assert len(out) == 1
    assert out[0].s1 == 0.0 and out[0].s2 == 0.0
    assert build_slope_share_data([], "A", 2020, 2021) == []


def test_invalid_mode():
    with pytest.raises(ValueError):
        build_slope_share_data([], "A", 2020, 2021, mode="balance")
