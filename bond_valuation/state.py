"""
Calculator application state.

State is an immutable snapshot; every change goes through a transition
function that returns a new snapshot. CalculatorSession is the single
dispatcher that owns the current snapshot and notifies listeners.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional

from .config import EngineConfig
from .engine import DEFAULT_PAR_TOLERANCE, ValuationResult, value
from .validation import VALIDATION_RULES, validate_field, validated_inputs, has_errors

logger = logging.getLogger(__name__)

VIEW_MODES = ("chart", "table")
INPUT_FIELDS = ("face_value", "coupon_rate", "ytm", "years", "frequency")


@dataclass(frozen=True)
class CalculatorState:
    face_value: Any
    coupon_rate: Any
    ytm: Any
    years: Any
    frequency: Any
    errors: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    result: Optional[ValuationResult] = None
    view_mode: str = "chart"
    par_tolerance: float = DEFAULT_PAR_TOLERANCE

    def inputs(self) -> dict:
        return {f: getattr(self, f) for f in INPUT_FIELDS}

    @property
    def is_valid(self) -> bool:
        return not has_errors(self.errors)


def _evaluate(state: CalculatorState) -> CalculatorState:
    if not state.is_valid:
        return replace(state, result=None)
    result = value(validated_inputs(state.inputs()), state.par_tolerance)
    return replace(state, result=result)


def initial_state(config: Optional[EngineConfig] = None) -> CalculatorState:
    config = config or EngineConfig()
    state = CalculatorState(
        face_value=config.face_value,
        coupon_rate=config.coupon_rate,
        ytm=config.ytm,
        years=config.years,
        frequency=config.frequency,
        par_tolerance=config.par_tolerance,
    )
    errors = {}
    for f in INPUT_FIELDS:
        msg = validate_field(f, getattr(state, f))
        if msg:
            errors[f] = msg
    return _evaluate(replace(state, errors=MappingProxyType(errors)))


def apply_input(state: CalculatorState, field_name: str, new_value: Any) -> CalculatorState:
    """
    Set one input, re-validate it and re-value the bond if no field is in error.
    While any error remains the result is cleared.
    """
    if field_name not in VALIDATION_RULES:
        raise KeyError(f"Unknown input field: {field_name}")

    errors = dict(state.errors)
    msg = validate_field(field_name, new_value)
    if msg:
        errors[field_name] = msg
    else:
        errors.pop(field_name, None)

    updated = replace(state, **{field_name: new_value, "errors": MappingProxyType(errors)})
    return _evaluate(updated)


def set_view_mode(state: CalculatorState, mode: str, force_table: bool = False) -> CalculatorState:
    """Switch between chart and table; force_table (narrow display) pins the table view."""
    if mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode: {mode!r} (expected one of {VIEW_MODES})")
    if force_table:
        mode = "table"
    if mode == state.view_mode:
        return state
    return replace(state, view_mode=mode)


Listener = Callable[[CalculatorState], None]


class CalculatorSession:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.state = initial_state(config)
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, new_state: CalculatorState) -> CalculatorState:
        if new_state is self.state:
            return new_state
        self.state = new_state
        if not new_state.is_valid:
            n = len(new_state.errors)
            logger.info("Calculations paused. %d input %s detected.", n, "error" if n == 1 else "errors")
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    def update_input(self, field_name: str, new_value: Any) -> CalculatorState:
        return self._commit(apply_input(self.state, field_name, new_value))

    def set_view_mode(self, mode: str, force_table: bool = False) -> CalculatorState:
        return self._commit(set_view_mode(self.state, mode, force_table))
