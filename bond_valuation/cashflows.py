from __future__ import annotations

import numpy as np
import pandas as pd

from .engine import ValuationResult
from .utils import discount_factors


def cashflow_table(result: ValuationResult, ytm: float) -> pd.DataFrame:
    """One row per period, purchase at period 0. ytm is the annual rate in percent."""
    rows = [
        (cf.period, cf.year_label, ytm, cf.coupon_payment, cf.principal_payment, cf.total_cash_flow)
        for cf in result.cash_flows
    ]
    return pd.DataFrame(
        rows,
        columns=["period", "year", "ytm", "coupon_payment", "principal_payment", "total_cash_flow"],
    )


def discounted_cashflow_table(result: ValuationResult) -> pd.DataFrame:
    """
    Present value of every future cash flow (periods 1..N).

    Column sums reconcile to the result:
      pv_coupon -> pv_coupons, pv_principal -> pv_face_value, pv_total -> bond_price
    """
    cf = cashflow_table(result, ytm=np.nan).iloc[1:].reset_index(drop=True)

    cf["discount_factor"] = 1.0 / discount_factors(result.periodic_yield, result.periods)
    cf["pv_coupon"] = cf["coupon_payment"] * cf["discount_factor"]
    cf["pv_principal"] = cf["principal_payment"] * cf["discount_factor"]
    cf["pv_total"] = cf["pv_coupon"] + cf["pv_principal"]

    return cf[["period", "year", "discount_factor", "pv_coupon", "pv_principal", "pv_total"]]


def chart_series(result: ValuationResult, ytm: float) -> pd.DataFrame:
    """
    Stacked-bar data: principal under coupon, with the bar total for labels
    and a flat ytm line for the secondary axis.
    """
    cf = cashflow_table(result, ytm)
    return pd.DataFrame(
        {
            "year": cf["year"],
            "principal": cf["principal_payment"],
            "coupon": cf["coupon_payment"],
            "total": cf["total_cash_flow"],
            "ytm": cf["ytm"],
        }
    )
