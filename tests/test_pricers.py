"""Tests for the reference pricers and their term/measure maps."""

import math

import pytest

from sensitivity.config import config_override
from sensitivity.errors import UnknownMeasure, UnknownTerm
from sensitivity.pricers import BondPricer, OptionPricer
from sensitivity.pricers.option_pricer import black_scholes_price
from sensitivity.products import EuropeanOption, FixedRateBond


def test_bond_pv_formula() -> None:
    """PV = sum of coupons and redemption discounted at exp(-y t)."""
    pricer = BondPricer(FixedRateBond(notional=100.0, coupon=0.04, maturity=1.0), bond_yield=0.05)
    expected = 2.0 * math.exp(-0.025) + 102.0 * math.exp(-0.05)
    assert abs(pricer.pv() - expected) < 1e-12
    assert abs(pricer.measure("ProductPv") - expected / 100.0) < 1e-14


def test_bond_accrued_on_stub() -> None:
    """A short first period means part of the coupon has accrued."""
    regular = BondPricer(FixedRateBond(notional=100.0, coupon=0.04, maturity=1.0), bond_yield=0.05)
    assert regular.measure("Accrued") == 0.0
    stub = BondPricer(FixedRateBond(notional=100.0, coupon=0.04, maturity=0.75), bond_yield=0.05)
    assert stub.bond.pay_times() == [0.25, 0.75]
    assert abs(stub.measure("Accrued") - 100.0 * 0.04 * 0.25) < 1e-12


def test_bond_duration_of_zero_coupon_is_maturity() -> None:
    pricer = BondPricer(FixedRateBond(notional=100.0, coupon=0.0, maturity=3.0, frequency=1), bond_yield=0.02)
    assert abs(pricer.measure("Duration") - 3.0) < 1e-12


def test_terms_read_and_write(bond) -> None:
    assert bond.term_names == ["BondYield", "Coupon", "Notional"]
    assert bond.get_term("BondYield") == 0.0117
    bond.set_term("BondYield", 0.02)
    assert bond.bond_yield == 0.02


def test_unknown_term_and_measure(bond) -> None:
    with pytest.raises(UnknownTerm, match="Unknown term 'Spread' on pricer 'BOND'"):
        bond.get_term("Spread")
    with pytest.raises(UnknownTerm):
        bond.set_term("Spread", 0.01)
    with pytest.raises(UnknownMeasure, match="Available measures"):
        bond.measure("Theta")


def test_cds_at_break_even_premium_near_zero_pv(cds) -> None:
    """When the premium equals the break-even premium, NPV is zero (protection buyer)."""
    cds.set_term("Premium", cds.measure("BreakEvenPremium"))
    assert abs(cds.pv()) < 1e-6 * cds.notional


def test_cds_pv_is_protection_minus_fee(cds) -> None:
    assert abs(cds.pv() - (cds.measure("ProtectionPv") - cds.measure("FeePv"))) < 1e-8
    cds.cds.protection_buyer = False
    assert abs(cds.pv() + (cds.measure("ProtectionPv") - cds.measure("FeePv"))) < 1e-8


def test_cds_accrued_on_default_toggle(cds) -> None:
    """Accrued premium on default adds to the fee leg; config_override is scoped."""
    with_accrued = cds.measure("FeePv")
    with config_override(cds, include_accrued_on_default=False):
        without_accrued = cds.measure("FeePv")
    assert without_accrued < with_accrued
    assert cds.config.include_accrued_on_default is True
    assert cds.measure("FeePv") == with_accrued


def test_cds_recovery_term_validated(cds) -> None:
    with pytest.raises(ValueError, match="recovery"):
        cds.set_term("Recovery", 1.5)
    assert cds.get_term("Recovery") == 0.4


def test_cds_curves(cds, usd_curve, corp_curve) -> None:
    assert cds.curves() == (usd_curve, corp_curve)
    assert cds.curve("CORP") is corp_curve
    with pytest.raises(KeyError, match="Available curves"):
        cds.curve("EUR_DISC")


def test_swap_at_par_rate_zero_pv(swap) -> None:
    swap.set_term("FixedRate", swap.measure("ParRate"))
    assert abs(swap.pv()) < 1e-6


def test_option_put_call_parity() -> None:
    """C - P = S - K exp(-rT)."""
    call = black_scholes_price(100.0, 95.0, 0.5, 0.03, 0.25, True)
    put = black_scholes_price(100.0, 95.0, 0.5, 0.03, 0.25, False)
    assert abs((call - put) - (100.0 - 95.0 * math.exp(-0.015))) < 1e-10


def test_option_pv_scales_with_notional() -> None:
    option = OptionPricer(EuropeanOption(strike=100.0, expiry=1.0, notional=10.0), 100.0, 0.2, 0.03)
    assert abs(option.pv() - 10.0 * option.measure("ModelPrice")) < 1e-12
    assert abs(option.measure("ProductPv") - option.measure("ModelPrice")) < 1e-12


def test_option_spot_must_be_positive(option) -> None:
    with pytest.raises(ValueError, match="spot"):
        option.set_term("Spot", 0.0)
