"""
Calculator input validation.

Each field is range-checked against a static rule table. The result of
validate_inputs is a field -> message mapping; the engine is only invoked
when that mapping is empty.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .engine import BondInputs


class InputError(ValueError):
    """A single field failed validation."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class RequiredError(InputError):
    """Missing, empty or non-numeric value."""


class RangeError(InputError):
    """Numeric value outside the field's bounds."""


class InvalidInputsError(ValueError):
    def __init__(self, errors: Mapping[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


@dataclass(frozen=True)
class Rule:
    label: str
    min: Optional[float] = None
    max: Optional[float] = None
    unit: str = ""
    min_exclusive: bool = False
    integer: bool = False


VALIDATION_RULES: Dict[str, Rule] = {
    "coupon_rate": Rule("Coupon rate", min=0, max=10, unit="%"),
    "ytm": Rule("Yield-to-maturity", min=0, max=10, unit="%"),
    "years": Rule("Years-to-maturity", min=1, max=5, integer=True),
    "face_value": Rule("Face value", min=0, min_exclusive=True),
    "frequency": Rule("Payment frequency", min=1, max=12, integer=True),
}


def _fmt(x: float) -> str:
    return f"{x:g}"


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        x = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(x):
        return None
    return x


def _range_message(rule: Rule) -> str:
    if rule.min is not None and rule.max is not None:
        return (
            f"{rule.label} must be between {_fmt(rule.min)}{rule.unit} "
            f"and {_fmt(rule.max)}{rule.unit}, inclusive"
        )
    if rule.min is not None:
        if rule.min_exclusive:
            return f"{rule.label} must be greater than {_fmt(rule.min)}{rule.unit}"
        return f"{rule.label} must be at least {_fmt(rule.min)}{rule.unit}"
    return f"{rule.label} must be at most {_fmt(rule.max)}{rule.unit}"


def check_field(field: str, value: Any) -> float:
    """
    Parse and range-check one field.

    Returns the numeric value, raises RequiredError or RangeError.
    Unknown fields raise KeyError.
    """
    rule = VALIDATION_RULES[field]

    x = _to_number(value)
    if x is None:
        raise RequiredError(field, f"{rule.label} is required")

    if rule.min is not None:
        if x < rule.min or (rule.min_exclusive and x == rule.min):
            raise RangeError(field, _range_message(rule))
    if rule.max is not None and x > rule.max:
        raise RangeError(field, _range_message(rule))
    if not math.isfinite(x):
        raise RangeError(field, _range_message(rule))

    if rule.integer and not float(x).is_integer():
        raise RangeError(field, f"{rule.label} must be a whole number")

    return x


def validate_field(field: str, value: Any) -> Optional[str]:
    """Error message for one field, or None. Fields without a rule always pass."""
    if field not in VALIDATION_RULES:
        return None
    try:
        check_field(field, value)
    except InputError as e:
        return e.message
    return None


def validate_inputs(inputs: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for field in VALIDATION_RULES:
        msg = validate_field(field, inputs.get(field))
        if msg:
            errors[field] = msg
    return errors


def has_errors(errors: Mapping[str, str]) -> bool:
    return len(errors) > 0


def validated_inputs(inputs: Mapping[str, Any]) -> BondInputs:
    """
    Turn raw calculator inputs into BondInputs, or raise InvalidInputsError
    carrying every field message.
    """
    errors = validate_inputs(inputs)
    if has_errors(errors):
        raise InvalidInputsError(errors)

    return BondInputs(
        face_value=check_field("face_value", inputs["face_value"]),
        coupon_rate=check_field("coupon_rate", inputs["coupon_rate"]),
        ytm=check_field("ytm", inputs["ytm"]),
        years=int(check_field("years", inputs["years"])),
        frequency=int(check_field("frequency", inputs["frequency"])),
    )
