"""
Plain-text renderers over a ValuationResult.

Nothing here recomputes prices; values are only formatted.
"""
from __future__ import annotations

from typing import Dict, List

from .cashflows import cashflow_table
from .engine import ValuationResult, PREMIUM


def format_currency(value: float, parentheses: bool = True) -> str:
    """$1,234.56; negatives as ($1,234.56) or -$1,234.56."""
    text = f"${abs(value):,.2f}"
    if value < 0 and round(abs(value), 2) != 0:
        return f"({text})" if parentheses else f"-{text}"
    return text


def format_percent(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def results_summary(result: ValuationResult, coupon_rate: float, ytm: float) -> Dict[str, object]:
    """
    Title, comparison lines and the PV breakdown for the analysis box.
    coupon_rate and ytm are annual percent.
    """
    bt = result.bond_type
    c, r = format_percent(coupon_rate), format_percent(ytm)

    if bt.is_par:
        comparison: List[str] = [f"Trading at par: c = r ({r})"]
    elif bt.kind == PREMIUM:
        comparison = [f"Trading {format_currency(bt.difference)} above par", f"c ({c}) > r ({r})"]
    else:
        comparison = [f"Trading {format_currency(bt.difference)} below par", f"r ({r}) > c ({c})"]

    breakdown = (
        f"PV = coupon ({format_currency(result.pv_coupons)}) "
        f"+ face ({format_currency(result.pv_face_value)})"
    )

    return {
        "title": bt.description,
        "bond_price": format_currency(result.bond_price),
        "comparison": comparison,
        "breakdown": breakdown,
    }


def render_summary(result: ValuationResult, coupon_rate: float, ytm: float) -> str:
    s = results_summary(result, coupon_rate, ytm)
    lines = [str(s["title"]), f"PV bond price: {s['bond_price']}"]
    lines.extend(s["comparison"])
    lines.append(str(s["breakdown"]))
    return "\n".join(lines)


def equation_text(result: ValuationResult, face_value: float) -> str:
    """
    Annuity form of the price with the actual values:

      PV = PMT / r x [1 - 1 / (1 + r)^N] + FV / (1 + r)^N = price

    With r = 0 the annuity factor collapses to N, shown as PMT x N.
    """
    pmt = format_currency(result.periodic_coupon)
    fv = format_currency(face_value)
    pv = format_currency(result.bond_price)
    n = result.periods
    r = format_percent(result.periodic_yield * 100.0)

    if result.periodic_yield == 0:
        return f"PV = {pmt} × {n} + {fv} = {pv}"

    return (
        f"PV = {pmt} / {r} × [1 − 1 / (1 + {r})^{n}]"
        f" + {fv} / (1 + {r})^{n} = {pv}"
    )


def render_table(result: ValuationResult, ytm: float) -> str:
    """Fixed-width cash-flow table with the bond price as footer."""
    cf = cashflow_table(result, ytm)

    body = cf.drop(columns=["period"]).rename(
        columns={
            "year": "Year",
            "ytm": "Yield-to-maturity (r)",
            "coupon_payment": "Coupon payment (PMT)",
            "principal_payment": "Principal repayment (FV)",
            "total_cash_flow": "Total cash flow",
        }
    )

    text = body.to_string(
        index=False,
        formatters={
            "Year": lambda v: f"{v:.1f}",
            "Yield-to-maturity (r)": format_percent,
            "Coupon payment (PMT)": format_currency,
            "Principal repayment (FV)": format_currency,
            "Total cash flow": format_currency,
        },
    )
    footer = f"Present value of bond (PV): {format_currency(result.bond_price)}"
    return f"{text}\n{footer}"
