import pytest

from bond_valuation.engine import value_bond
from bond_valuation.report import (
    equation_text,
    format_currency,
    format_percent,
    render_summary,
    render_table,
    results_summary,
)


@pytest.fixture(scope="module")
def premium():
    return value_bond(100.0, 8.0, 6.0, 5, 2)


@pytest.fixture(scope="module")
def discount():
    return value_bond(100.0, 4.0, 6.0, 5, 2)


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-95.234) == "($95.23)"
    assert format_currency(-95.234, parentheses=False) == "-$95.23"
    assert format_currency(-0.001) == "$0.00"


def test_format_percent():
    assert format_percent(6) == "6.00%"
    assert format_percent(3.14159, decimals=3) == "3.142%"


def test_summary_premium(premium):
    s = results_summary(premium, 8.0, 6.0)
    assert s["title"] == "Premium bond"
    assert s["comparison"] == ["Trading $8.53 above par", "c (8.00%) > r (6.00%)"]
    assert s["breakdown"].startswith("PV = coupon ($34.12) + face ($74.41)")


def test_summary_discount(discount):
    s = results_summary(discount, 4.0, 6.0)
    assert s["title"] == "Discount bond"
    assert s["comparison"] == ["Trading $8.53 below par", "r (6.00%) > c (4.00%)"]


def test_summary_par():
    s = results_summary(value_bond(100.0, 6.0, 6.0, 5, 2), 6.0, 6.0)
    assert s["comparison"] == ["Trading at par: c = r (6.00%)"]
    assert "PV bond price: $100.00" in render_summary(value_bond(100.0, 6.0, 6.0, 5, 2), 6.0, 6.0)


def test_equation_text(premium):
    eq = equation_text(premium, 100.0)
    assert eq == "PV = $4.00 / 3.00% × [1 − 1 / (1 + 3.00%)^10] + $100.00 / (1 + 3.00%)^10 = $108.53"


def test_equation_text_zero_yield():
    eq = equation_text(value_bond(100.0, 6.0, 0.0, 5, 2), 100.0)
    assert eq == "PV = $3.00 × 10 + $100.00 = $130.00"


def test_render_table(premium):
    text = render_table(premium, 6.0)
    lines = text.splitlines()
    assert "Coupon payment (PMT)" in lines[0]
    assert len(lines) == 1 + 11 + 1
    assert "($108.53)" in lines[1]
    assert lines[-1] == "Present value of bond (PV): $108.53"
