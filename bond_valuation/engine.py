from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy.optimize import brentq

from .config import EngineConfig
from .utils import period_count, discount_factors

logger = logging.getLogger(__name__)

PAR = "par"
PREMIUM = "premium"
DISCOUNT = "discount"

_DESCRIPTIONS = {
    PAR: "Par bond",
    PREMIUM: "Premium bond",
    DISCOUNT: "Discount bond",
}

DEFAULT_PAR_TOLERANCE = 0.005


@dataclass(frozen=True)
class BondInputs:
    """
    Validated engine inputs. Rates are annual, in percent.

    Construction enforces the engine's structural domain only; the calculator's
    tighter range table lives in bond_valuation.validation.
    """
    face_value: float
    coupon_rate: float
    ytm: float
    years: float
    frequency: int = 2

    def __post_init__(self) -> None:
        for name in ("face_value", "coupon_rate", "ytm", "years"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
                raise ValueError(f"{name} must be numeric, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")

        if isinstance(self.frequency, bool) or int(self.frequency) != self.frequency or self.frequency < 1:
            raise ValueError(f"frequency must be a positive integer, got {self.frequency!r}")
        if self.face_value <= 0:
            raise ValueError("face_value must be positive.")
        if self.coupon_rate < 0:
            raise ValueError("coupon_rate must be non-negative.")
        if self.years <= 0:
            raise ValueError("years must be positive.")
        if 1.0 + self.periodic_yield <= 0.0:
            raise ValueError("ytm implies a periodic yield at or below -100%.")
        if self.periods < 1:
            raise ValueError("years * frequency must cover at least one period.")

    @property
    def periods(self) -> int:
        return period_count(self.years, int(self.frequency))

    @property
    def periodic_coupon(self) -> float:
        return self.face_value * (self.coupon_rate / 100.0) / int(self.frequency)

    @property
    def periodic_yield(self) -> float:
        return (self.ytm / 100.0) / int(self.frequency)


@dataclass(frozen=True)
class CashFlow:
    period: int
    year_label: float
    coupon_payment: float
    principal_payment: float
    total_cash_flow: float


@dataclass(frozen=True)
class BondType:
    kind: str
    description: str
    difference: float = 0.0

    @property
    def is_par(self) -> bool:
        return self.kind == PAR


@dataclass(frozen=True)
class ValuationResult:
    bond_price: float
    cash_flows: Tuple[CashFlow, ...]
    periods: int
    periodic_coupon: float
    periodic_yield: float
    bond_type: BondType
    pv_coupons: float
    pv_face_value: float


def classify_bond_type(bond_price: float, face_value: float, tolerance: float = DEFAULT_PAR_TOLERANCE) -> BondType:
    """Par within +/- tolerance of face, otherwise premium or discount with the absolute gap."""
    gap = bond_price - face_value
    if abs(gap) <= tolerance:
        return BondType(PAR, _DESCRIPTIONS[PAR], 0.0)
    if gap > 0:
        return BondType(PREMIUM, _DESCRIPTIONS[PREMIUM], gap)
    return BondType(DISCOUNT, _DESCRIPTIONS[DISCOUNT], -gap)


def build_cash_flows(
    bond_price: float,
    periodic_coupon: float,
    face_value: float,
    periods: int,
    frequency: int,
) -> Tuple[CashFlow, ...]:
    """
    Period 0 is the purchase (-price); periods 1..N pay the coupon and the
    last one also returns face value.
    """
    flows = [CashFlow(0, 0.0, 0.0, -bond_price, -bond_price)]
    for i in range(1, periods + 1):
        principal = face_value if i == periods else 0.0
        flows.append(
            CashFlow(
                period=i,
                year_label=i / frequency,
                coupon_payment=periodic_coupon,
                principal_payment=principal,
                total_cash_flow=periodic_coupon + principal,
            )
        )
    return tuple(flows)


def present_values(inputs: BondInputs) -> Tuple[float, float]:
    """Returns (pv_coupons, pv_face_value)."""
    periods = inputs.periods
    dfs = discount_factors(inputs.periodic_yield, periods)

    pv_coupons = float(np.sum(inputs.periodic_coupon / dfs))
    pv_face = float(inputs.face_value / dfs[-1])
    return pv_coupons, pv_face


def value(inputs: BondInputs, par_tolerance: Optional[float] = None) -> ValuationResult:
    """
    Price a bond and lay out its cash flows.

    bond_price = sum_{i=1..N} C / (1 + y)^i + F / (1 + y)^N
    with C the periodic coupon, y the periodic yield and N = years * frequency.
    """
    if par_tolerance is None:
        par_tolerance = DEFAULT_PAR_TOLERANCE

    periods = inputs.periods
    frequency = int(inputs.frequency)

    pv_coupons, pv_face = present_values(inputs)
    bond_price = pv_coupons + pv_face

    result = ValuationResult(
        bond_price=bond_price,
        cash_flows=build_cash_flows(bond_price, inputs.periodic_coupon, inputs.face_value, periods, frequency),
        periods=periods,
        periodic_coupon=inputs.periodic_coupon,
        periodic_yield=inputs.periodic_yield,
        bond_type=classify_bond_type(bond_price, inputs.face_value, par_tolerance),
        pv_coupons=pv_coupons,
        pv_face_value=pv_face,
    )
    logger.debug(
        "valued bond c=%.4f%% y=%.4f%% n=%d -> price=%.6f (%s)",
        inputs.coupon_rate, inputs.ytm, periods, bond_price, result.bond_type.kind,
    )
    return result


def value_bond(
    face_value: float,
    coupon_rate: float,
    ytm: float,
    years: float,
    frequency: int = 2,
    par_tolerance: Optional[float] = None,
) -> ValuationResult:
    return value(BondInputs(face_value, coupon_rate, ytm, years, frequency), par_tolerance)


def solve_yield(
    price: float,
    face_value: float,
    coupon_rate: float,
    years: float,
    frequency: int = 2,
    bracket: Tuple[float, float] = (-50.0, 100.0),
) -> float:
    """
    Annual yield-to-maturity (percent) that reprices the bond to `price`.

    Price is strictly decreasing in yield, so a sign change across the bracket
    guarantees a unique root.
    """
    if not price > 0:
        raise ValueError("price must be positive.")

    def residual(ytm: float) -> float:
        inputs = BondInputs(face_value, coupon_rate, ytm, years, frequency)
        pv_coupons, pv_face = present_values(inputs)
        return pv_coupons + pv_face - price

    lo, hi = bracket
    # keep the lower end strictly above a -100% periodic yield
    lo = max(lo, -100.0 * frequency + 1e-6)

    f_lo, f_hi = residual(lo), residual(hi)
    if f_lo * f_hi > 0:
        raise ValueError(f"Yield not bracketed in [{lo}, {hi}] for price {price}.")

    return float(brentq(residual, lo, hi, maxiter=300, xtol=1e-12))


class BondValuationEngine:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def inputs(
        self,
        coupon_rate: float,
        ytm: float,
        years: float,
        face_value: Optional[float] = None,
        frequency: Optional[int] = None,
    ) -> BondInputs:
        return BondInputs(
            face_value=self.config.face_value if face_value is None else face_value,
            coupon_rate=coupon_rate,
            ytm=ytm,
            years=years,
            frequency=self.config.frequency if frequency is None else frequency,
        )

    def value(self, inputs: BondInputs) -> ValuationResult:
        return value(inputs, self.config.par_tolerance)

    def solve_yield(self, price: float, inputs: BondInputs) -> float:
        return solve_yield(
            price,
            inputs.face_value,
            inputs.coupon_rate,
            inputs.years,
            inputs.frequency,
            bracket=self.config.yield_bracket,
        )
