import pytest

from bond_valuation.config import load_config
from bond_valuation.engine import DEFAULT_PAR_TOLERANCE
from bond_valuation.state import CalculatorSession, CalculatorState, apply_input, initial_state, set_view_mode


@pytest.fixture
def config():
    return load_config(face_value=100.0, frequency=2, coupon_rate=8.0, ytm=6.0, years=5, par_tolerance=0.005)


def test_initial_state_is_valued(config):
    state = initial_state(config)
    assert state.is_valid
    assert state.result is not None
    assert state.result.bond_type.kind == "premium"
    assert state.view_mode == "chart"


def test_invalid_input_clears_result_and_correction_restores_it(config):
    state = initial_state(config)

    bad = apply_input(state, "years", 7)
    assert bad.result is None
    assert bad.errors == {"years": "Years-to-maturity must be between 1 and 5, inclusive"}
    assert state.result is not None, "previous snapshot must not change"

    fixed = apply_input(bad, "years", 3)
    assert fixed.is_valid
    assert fixed.result is not None
    assert fixed.result.periods == 6


def test_result_stays_cleared_until_every_field_is_fixed(config):
    state = apply_input(initial_state(config), "years", 7)
    state = apply_input(state, "ytm", 12)
    state = apply_input(state, "years", 4)
    assert state.result is None
    assert set(state.errors) == {"ytm"}

    state = apply_input(state, "ytm", 8.0)
    assert state.result.bond_type.kind == "par"


def test_apply_input_unknown_field(config):
    with pytest.raises(KeyError):
        apply_input(initial_state(config), "price", 100)


def test_set_view_mode(config):
    state = initial_state(config)
    assert set_view_mode(state, "table").view_mode == "table"
    assert set_view_mode(state, "chart", force_table=True).view_mode == "table"
    assert set_view_mode(state, "chart") is state
    with pytest.raises(ValueError):
        set_view_mode(state, "pie")


def test_session_notifies_subscribers(config):
    session = CalculatorSession(config)
    seen = []
    unsubscribe = session.subscribe(seen.append)

    session.update_input("coupon_rate", 4.0)
    session.set_view_mode("table")
    session.set_view_mode("table")  # no change, no notification

    assert len(seen) == 2
    assert seen[0].result.bond_type.kind == "discount"
    assert seen[1].view_mode == "table"
    assert session.state is seen[-1]

    unsubscribe()
    session.update_input("coupon_rate", 6.0)
    assert len(seen) == 2
    assert session.state.result.bond_type.kind == "par"


def test_state_default_tolerance_follows_engine():
    state = CalculatorState(face_value=100.0, coupon_rate=6.0, ytm=6.0, years=5, frequency=2)
    assert state.par_tolerance == DEFAULT_PAR_TOLERANCE
