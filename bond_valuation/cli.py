from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import EngineConfig
from .engine import value
from .report import render_summary, render_table, equation_text
from .utils import configure_logging
from .validation import InvalidInputsError, validated_inputs

logger = logging.getLogger(__name__)


def build_parser(config: EngineConfig) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bond-valuation",
        description="Price a fixed-coupon bond and show its cash-flow schedule.",
    )
    p.add_argument("--coupon-rate", default=config.coupon_rate, help="annual coupon rate, percent [0, 10]")
    p.add_argument("--ytm", default=config.ytm, help="annual yield-to-maturity, percent [0, 10]")
    p.add_argument("--years", default=config.years, help="years to maturity, whole number [1, 5]")
    p.add_argument("--face-value", default=config.face_value, help="face (par) value")
    p.add_argument("--frequency", default=config.frequency, help="coupon payments per year")
    p.add_argument("--view", choices=["summary", "table", "equation", "all"], default="all")
    p.add_argument("--log-level", default=config.log_level)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    config = EngineConfig()
    args = build_parser(config).parse_args(argv)
    configure_logging(args.log_level)

    raw = {
        "coupon_rate": args.coupon_rate,
        "ytm": args.ytm,
        "years": args.years,
        "face_value": args.face_value,
        "frequency": args.frequency,
    }
    try:
        inputs = validated_inputs(raw)
    except InvalidInputsError as e:
        n = len(e.errors)
        print(f"Please correct the following {n} {'error' if n == 1 else 'errors'}:", file=sys.stderr)
        for msg in e.errors.values():
            print(f"  - {msg}", file=sys.stderr)
        return 2

    result = value(inputs, config.par_tolerance)
    logger.info("bond price %.6f over %d periods", result.bond_price, result.periods)

    sections = []
    if args.view in ("summary", "all"):
        sections.append(render_summary(result, inputs.coupon_rate, inputs.ytm))
    if args.view in ("equation", "all"):
        sections.append(equation_text(result, inputs.face_value))
    if args.view in ("table", "all"):
        sections.append(render_table(result, inputs.ytm))

    print("\n\n".join(sections))
    return 0


if __name__ == "__main__":
    sys.exit(main())
