"""Shared fixtures: small curves and one pricer of each kind."""

import pytest

from sensitivity.curves import DiscountCurve, SurvivalCurve
from sensitivity.pricers import BondPricer, CDSPricer, OptionPricer, SwapPricer
from sensitivity.products import CDS, EuropeanOption, FixedFloatSwap, FixedRateBond


@pytest.fixture
def usd_curve() -> DiscountCurve:
    return DiscountCurve.from_yields("USD_DISC", [0.5, 1.0, 2.0, 5.0], [0.045, 0.043, 0.040, 0.038])


@pytest.fixture
def corp_curve() -> SurvivalCurve:
    return SurvivalCurve.from_spreads("CORP", [0.5, 1.0, 2.0, 5.0], [0.006, 0.007, 0.008, 0.010], recovery=0.4)


@pytest.fixture
def bond() -> BondPricer:
    return BondPricer(FixedRateBond(notional=1_000_000, coupon=0.015, maturity=5.0), bond_yield=0.0117, name="BOND")


@pytest.fixture
def swap(usd_curve: DiscountCurve) -> SwapPricer:
    return SwapPricer(
        FixedFloatSwap(notional=10_000_000, fixed_rate=0.04, pay_times=[0.5, 1.0, 1.5, 2.0]),
        usd_curve,
        name="SWAP",
    )


@pytest.fixture
def cds(usd_curve: DiscountCurve, corp_curve: SurvivalCurve) -> CDSPricer:
    return CDSPricer(
        CDS(notional=10_000_000, premium=0.005, pay_times=[0.5, 1.0, 1.5, 2.0], recovery=0.4),
        usd_curve,
        corp_curve,
        name="CDS",
    )


@pytest.fixture
def option() -> OptionPricer:
    return OptionPricer(EuropeanOption(strike=100.0, expiry=1.0), spot=100.0, volatility=0.2, rate=0.03, name="CALL")
