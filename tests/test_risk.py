"""Tests for the Greeks façade (bump and reprice)."""

import math

import pytest

from sensitivity.config import config_override
from sensitivity.curves import CurveTenor
from sensitivity.errors import InvalidBumpMagnitude, UnknownTerm
from sensitivity.flags import BumpFlags
from sensitivity.handlers import YieldHandler
from sensitivity.risk import (
    Delta,
    PricerTermQuote,
    TenorTarget,
    TermTarget,
    bump_quote,
    bumped,
    cs01_parallel,
    delta,
    gamma,
    pv01_parallel,
    vega,
)


def _d1(spot: float, strike: float, expiry: float, rate: float, vol: float) -> float:
    return (math.log(spot / strike) + (rate + 0.5 * vol * vol) * expiry) / (vol * math.sqrt(expiry))


def _pdf(x: float) -> float:
    return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)


def test_option_delta_matches_black_scholes(option) -> None:
    """Central difference on Spot ~ N(d1)."""
    d1 = _d1(100.0, 100.0, 1.0, 0.03, 0.2)
    expected = 0.5 * (1.0 + math.erf(d1 / math.sqrt(2.0)))
    assert abs(delta(option, "Spot", bump_size=0.01) - expected) < 1e-6
    assert option.get_term("Spot") == 100.0


def test_option_gamma_matches_black_scholes(option) -> None:
    d1 = _d1(100.0, 100.0, 1.0, 0.03, 0.2)
    expected = _pdf(d1) / (100.0 * 0.2)
    assert abs(gamma(option, "Spot", bump_size=0.5) - expected) < 1e-4 * expected + 1e-8
    assert option.get_term("Spot") == 100.0


def test_option_vega_per_vol_point(option) -> None:
    """Vega is dV/dvol scaled to a 0.01 move: S * pdf(d1) * sqrt(T) * 0.01."""
    d1 = _d1(100.0, 100.0, 1.0, 0.03, 0.2)
    expected = 100.0 * _pdf(d1) * 0.01
    assert abs(vega(option) - expected) < 1e-4
    assert option.get_term("Volatility") == 0.2


def test_one_sided_delta_close_to_central(option) -> None:
    central = delta(option, "Spot", bump_size=0.01, central=True)
    one_sided = delta(option, "Spot", bump_size=0.01, central=False)
    assert abs(central - one_sided) < 1e-3


def test_config_selects_difference_scheme(option) -> None:
    """central=None follows the pricer config."""
    one_sided = Delta(TermTarget("Spot"), 0.01, central=False).compute(option)
    with config_override(option, central_difference=False):
        assert delta(option, "Spot", bump_size=0.01) == one_sided
    assert option.config.central_difference is True


def test_bond_yield_delta_is_minus_duration_times_pv(bond) -> None:
    """dPV/dy = -D * PV for continuous compounding; bump 1bp through YieldHandler."""
    target = TermTarget("BondYield", YieldHandler())
    expected = -bond.measure("Duration") * bond.pv()
    assert abs(delta(bond, target, bump_size=1.0) - expected) < 1e-6 * abs(expected)
    assert bond.get_term("BondYield") == 0.0117


def test_relative_delta_uses_applied_amounts(bond) -> None:
    """Relative bumps are asymmetric; dividing by applied amounts still gives dPV/dy."""
    target = TermTarget("BondYield")
    expected = -bond.measure("Duration") * bond.pv()
    result = delta(bond, target, bump_size=0.01, flags=BumpFlags.BUMP_RELATIVE)
    assert abs(result - expected) < 1e-5 * abs(expected)


def test_pv01_parallel_swap(swap, usd_curve) -> None:
    """Receive float / pay fixed gains when rates rise; quotes are restored."""
    base_quotes = usd_curve.quotes()
    base_pv = swap.pv()
    pv01 = pv01_parallel(swap, "USD_DISC", bump_bp=1.0)
    assert pv01 > 0
    assert usd_curve.quotes() == base_quotes
    assert swap.pv() == base_pv


def test_pv01_uses_config_default_bump(swap) -> None:
    one = pv01_parallel(swap, "USD_DISC", bump_bp=1.0)
    with config_override(swap, default_bump_bp=2.0):
        two = pv01_parallel(swap, "USD_DISC")
    assert abs(two - 2.0 * one) < 1e-3 * abs(one)


def test_cs01_protection_buyer_positive(cds, corp_curve) -> None:
    """For protection buyer: spreads up => more default => PV up => CS01 > 0."""
    base_quotes = corp_curve.quotes()
    cs01 = cs01_parallel(cds, "CORP", bump_bp=1.0)
    assert cs01 > 0
    assert corp_curve.quotes() == base_quotes


def test_tenor_target_delta(cds) -> None:
    """Delta to one tenor is smaller than to all tenors together."""
    one = delta(cds, TenorTarget("CORP", ("2Y",)), bump_size=1.0)
    all_tenors = delta(cds, TenorTarget("CORP"), bump_size=1.0)
    assert 0 < one < all_tenors


def test_bumped_restores_on_error(bond) -> None:
    holders = TermTarget("BondYield", YieldHandler()).holders(bond)
    with pytest.raises(RuntimeError, match="boom"):
        with bumped(bond, holders, 10.0) as amount:
            assert abs(amount - 0.001) < 1e-15
            assert abs(bond.bond_yield - 0.0127) < 1e-15
            raise RuntimeError("boom")
    assert bond.get_term("BondYield") == 0.0117


def test_unknown_term_target(bond) -> None:
    with pytest.raises(UnknownTerm):
        delta(bond, "Spread")
    assert bond.get_term("BondYield") == 0.0117


def test_zero_bump_rejected_for_delta(bond) -> None:
    with pytest.raises(InvalidBumpMagnitude, match="changed nothing"):
        delta(bond, "BondYield", bump_size=0.0)


def test_bump_quote_on_term_and_tenor(bond) -> None:
    holder = PricerTermQuote(bond, "Coupon")
    assert holder.name == "Coupon"
    assert abs(bump_quote(holder, 0.005) - 0.005) < 1e-15
    assert abs(bond.bond.coupon - 0.02) < 1e-15
    tenor = CurveTenor("1Y", 1.0, 0.04, YieldHandler())
    assert abs(bump_quote(tenor, 2.0, BumpFlags.BUMP_DOWN) + 0.0002) < 1e-15


def test_default_bump_is_one_basis_point(bond) -> None:
    """Without a size a raw term moves by 1bp (1e-4), not by one whole unit."""
    expected = -bond.measure("Duration") * bond.pv()
    assert abs(delta(bond, "BondYield") - expected) < 1e-6 * abs(expected)
    assert bond.get_term("BondYield") == 0.0117


def test_default_bump_follows_config_and_handler_units(cds) -> None:
    """bp-quoted tenors bump by default_bump_bp in their own units."""
    assert delta(cds, TenorTarget("CORP")) == delta(cds, TenorTarget("CORP"), bump_size=1.0)
    with config_override(cds, default_bump_bp=2.0):
        assert delta(cds, TenorTarget("CORP")) == delta(cds, TenorTarget("CORP"), bump_size=2.0)
