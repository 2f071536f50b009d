import pytest

from trade_dash.models import TradeRecord

X = "XPRT-TRD-VL"


def rec(year, reporter, partner, value, product="X", indicator=X):
    return TradeRecord(
        year=str(year),
        reporter=reporter,
        partner=partner,
        product=product,
        indicator=indicator,
        value=str(value),
    )


@pytest.fixture
def two_year_records():
    return [
        {"year": "2020", "reporter": "A", "partner": "B", "product": "X", "indicator": X, "value": "10"},
        {"year": "2021", "reporter": "A", "partner": "B", "product": "X", "indicator": X, "value": "20"},
    ]


@pytest.fixture
def partner_records():
    """A exports to B, C, D in 2020 and 2021; B and C also export back to A."""
    return [
        rec(2020, "A", "B", 25),
        rec(2020, "A", "C", 15),
        rec(2020, "A", "D", 10),
        rec(2021, "A", "B", 30),
        rec(2021, "A", "C", 20),
        rec(2021, "A", "D", 10),
        rec(2020, "B", "A", 40),
        rec(2021, "B", "A", 20),
        rec(2021, "C", "A", 5),
        # ignored: other indicator
        rec(2021, "A", "B", 999, indicator="MPRT-TRD-VL"),
    ]
