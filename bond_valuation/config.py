"""
Engine defaults and tolerances.

Every field reads a BOND_VALUATION_* environment variable at class definition
time, so a deployment can move defaults without touching code.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EngineConfig:
    face_value: float = float(os.getenv("BOND_VALUATION_FACE_VALUE", "100"))
    frequency: int = int(os.getenv("BOND_VALUATION_FREQUENCY", "2"))

    # starting inputs for a fresh calculator session (percent / years)
    coupon_rate: float = float(os.getenv("BOND_VALUATION_COUPON_RATE", "5"))
    ytm: float = float(os.getenv("BOND_VALUATION_YTM", "6"))
    years: int = int(os.getenv("BOND_VALUATION_YEARS", "5"))

    # |price - face| at or below this is classified as par
    par_tolerance: float = float(os.getenv("BOND_VALUATION_PAR_TOLERANCE", "0.005"))

    # annual yield bracket in percent for the implied yield solver
    yield_bracket: Tuple[float, float] = (-50.0, 100.0)

    log_level: str = os.getenv("BOND_VALUATION_LOG_LEVEL", "WARNING")


def load_config(**overrides) -> EngineConfig:
    """Build a config from the environment defaults, with keyword overrides."""
    base = EngineConfig()
    if not overrides:
        return base
    return EngineConfig(**{**base.__dict__, **overrides})
