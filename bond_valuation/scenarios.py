from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

import pandas as pd

from .engine import BondInputs, value


def price_yield_grid(inputs: BondInputs, ytms: Iterable[float]) -> pd.DataFrame:
    rows = []
    for y in ytms:
        res = value(replace(inputs, ytm=float(y)))
        rows.append({"ytm": float(y), "bond_price": res.bond_price, "bond_type": res.bond_type.kind})
    return pd.DataFrame(rows, columns=["ytm", "bond_price", "bond_type"])


def run_yield_scenarios(
    inputs: BondInputs,
    shocks_bp: Sequence[float] = (-100, -50, -25, 25, 50, 100),
) -> pd.DataFrame:
    """
    Reprice under parallel yield shocks. PnL is per unit of face as priced,
    relative to the unshocked price. Shocked yields are floored at zero.
    """
    base = value(inputs).bond_price

    rows = [{"scenario": "BASE", "ytm": inputs.ytm, "bond_price": base, "pnl": 0.0}]
    for bp in shocks_bp:
        y = max(inputs.ytm + bp / 100.0, 0.0)
        px = value(replace(inputs, ytm=y)).bond_price
        rows.append({"scenario": f"YTM_{bp:+g}bp", "ytm": y, "bond_price": px, "pnl": px - base})

    return pd.DataFrame(rows, columns=["scenario", "ytm", "bond_price", "pnl"])


def run_combined_yield_coupon_scenarios(
    inputs: BondInputs,
    ytm_shocks_bp: Sequence[float] = (-50, -25, 0, 25, 50),
    coupon_shocks_bp: Sequence[float] = (-50, 0, 50),
) -> pd.DataFrame:
    base = value(inputs).bond_price

    rows = []
    for y_bp in ytm_shocks_bp:
        y = max(inputs.ytm + y_bp / 100.0, 0.0)
        for c_bp in coupon_shocks_bp:
            c = max(inputs.coupon_rate + c_bp / 100.0, 0.0)
            px = value(replace(inputs, ytm=y, coupon_rate=c)).bond_price
            rows.append(
                {
                    "ytm_shock_bp": y_bp,
                    "coupon_shock_bp": c_bp,
                    "ytm": y,
                    "coupon_rate": c,
                    "bond_price_base": base,
                    "bond_price": px,
                    "pnl": px - base,
                }
            )

    out = pd.DataFrame(rows)
    return out.sort_values(["ytm_shock_bp", "coupon_shock_bp"]).reset_index(drop=True)
