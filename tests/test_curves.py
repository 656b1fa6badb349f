"""Tests for quote-driven curves and batch tenor bumping."""

import math

import pytest

from sensitivity.curves import DiscountCurve, SurvivalCurve, bump_quotes
from sensitivity.errors import InvalidBumpMagnitude
from sensitivity.flags import BumpFlags


def test_curve_interpolation_endpoints() -> None:
    """Endpoints: rate at first/last pillar equals the tenor quote."""
    curve = DiscountCurve.from_yields("C", [0.5, 1.0, 2.0, 5.0], [0.05, 0.04, 0.035, 0.03])
    assert curve.zero_rate_cc(0.5) == 0.05
    assert curve.zero_rate_cc(5.0) == 0.03


def test_curve_interpolation_midpoint() -> None:
    """Midpoint: linear interp between two pillars."""
    curve = DiscountCurve.from_yields("C", [0.0, 2.0], [0.04, 0.06])
    assert abs(curve.zero_rate_cc(1.0) - 0.05) < 1e-10


def test_curve_flat_extrapolation() -> None:
    curve = DiscountCurve.from_yields("C", [0.5, 1.0], [0.05, 0.04])
    assert curve.zero_rate_cc(0.25) == 0.05
    assert curve.zero_rate_cc(2.0) == 0.04


def test_df_formula() -> None:
    """DF(t) = exp(-r(t)*t)."""
    curve = DiscountCurve.from_yields("C", [1.0], [0.05])
    assert abs(curve.df(1.0) - math.exp(-0.05)) < 1e-10


def test_tenor_names_and_lookup() -> None:
    curve = DiscountCurve.from_yields("USD", [0.5, 1.0, 10.0], [0.04, 0.04, 0.04])
    assert [t.name for t in curve.tenors] == ["0.5Y", "1Y", "10Y"]
    assert curve.tenor("10Y").maturity == 10.0
    with pytest.raises(KeyError, match="Available tenors"):
        curve.tenor("3Y")


def test_validate_pillars_strictly_increasing() -> None:
    with pytest.raises(ValueError, match="strictly increasing"):
        DiscountCurve.from_yields("C", [1.0, 1.0], [0.04, 0.04])
    with pytest.raises(ValueError, match="strictly increasing"):
        DiscountCurve.from_yields("C", [2.0, 1.0], [0.04, 0.04])


def test_validate_same_length() -> None:
    with pytest.raises(ValueError, match="same length"):
        DiscountCurve.from_yields("C", [1.0, 2.0], [0.04])


def test_zero_rate_t_negative_raises() -> None:
    curve = DiscountCurve.from_yields("C", [1.0], [0.04])
    with pytest.raises(ValueError, match="t must be >= 0"):
        curve.zero_rate_cc(-0.1)


def test_bumped_quote_needs_refit() -> None:
    """A tenor bump only moves df once the curve is refitted."""
    curve = DiscountCurve.from_yields("C", [1.0], [0.04])
    curve.tenor("1Y").bump(100.0)
    assert abs(curve.df(1.0) - math.exp(-0.04)) < 1e-15
    curve.refit()
    assert abs(curve.df(1.0) - math.exp(-0.05)) < 1e-12


def test_survival_curve_flat_spread() -> None:
    """Flat spread s with recovery R gives S(t) = exp(-s/(1-R) t)."""
    curve = SurvivalCurve.from_spreads("CORP", [1.0, 5.0], [0.006, 0.006], recovery=0.4)
    assert abs(curve.hazard_rate(3.0) - 0.01) < 1e-15
    assert abs(curve.df(3.0) - math.exp(-0.03)) < 1e-12
    assert abs(curve.df(7.0) - math.exp(-0.07)) < 1e-12
    assert curve.df(0.0) == 1.0


def test_survival_curve_piecewise_hazard() -> None:
    curve = SurvivalCurve.from_spreads("CORP", [1.0, 2.0], [0.006, 0.012], recovery=0.4)
    assert abs(curve.hazard_rate(0.5) - 0.01) < 1e-15
    assert abs(curve.hazard_rate(1.5) - 0.02) < 1e-15
    assert abs(curve.df(1.5) - math.exp(-(0.01 + 0.02 * 0.5))) < 1e-12


def test_save_and_restore_quotes() -> None:
    curve = DiscountCurve.from_yields("C", [1.0, 2.0], [0.04, 0.05])
    saved = curve.save_quotes()
    df_before = curve.df(1.5)
    bump_quotes([curve], None, [25.0], BumpFlags.REFIT_CURVE)
    assert curve.df(1.5) != df_before
    curve.restore_quotes(saved)
    assert curve.quotes() == [0.04, 0.05]
    assert curve.df(1.5) == df_before
    with pytest.raises(ValueError, match="saved quotes"):
        curve.restore_quotes([0.04])


def test_bump_quotes_returns_average_per_curve() -> None:
    """One size for all tenors or one per tenor; includes mask curves."""
    a = DiscountCurve.from_yields("A", [1.0, 2.0], [0.04, 0.04])
    b = DiscountCurve.from_yields("B", [1.0, 2.0], [0.03, 0.03])
    averages = bump_quotes([a, b], ["1Y", "2Y"], [1.0, 3.0], includes=[True, False])
    assert abs(averages[0] - 2e-4) < 1e-15
    assert averages[1] == 0.0
    assert b.quotes() == [0.03, 0.03]
    assert abs(a.tenor("2Y").quote - 0.0403) < 1e-15


def test_bump_quotes_refit_flag() -> None:
    curve = DiscountCurve.from_yields("C", [1.0], [0.04])
    bump_quotes([curve], None, [1.0])
    assert abs(curve.df(1.0) - math.exp(-0.04)) < 1e-15
    bump_quotes([curve], None, [1.0], BumpFlags.REFIT_CURVE)
    assert abs(curve.zero_rate_cc(1.0) - 0.0402) < 1e-15


@pytest.mark.parametrize(
    "tenors, sizes, includes, message",
    [
        (None, [], None, "No bump sizes"),
        (None, [1.0, 2.0], None, "all tenors"),
        (["1Y", "2Y"], [1.0, 2.0, 3.0], None, "number of tenors"),
        (None, [1.0], [True, False], "includes"),
    ],
)
def test_bump_quotes_validation(tenors, sizes, includes, message) -> None:
    curve = DiscountCurve.from_yields("C", [1.0, 2.0], [0.04, 0.04])
    with pytest.raises(ValueError, match=message):
        bump_quotes([curve], tenors, sizes, includes=includes)
    assert curve.quotes() == [0.04, 0.04]


def test_bump_quotes_requires_curves() -> None:
    with pytest.raises(ValueError, match="No curves"):
        bump_quotes([], None, [1.0])


def test_bump_quotes_is_all_or_nothing() -> None:
    """A bump failing partway through puts every earlier bump back."""
    a = DiscountCurve.from_yields("A", [1.0, 2.0], [0.04, 0.05])
    b = DiscountCurve.from_yields("B", [1.0, 2.0], [0.04, -0.2])
    df_before = a.df(1.5)
    flags = BumpFlags.BUMP_RELATIVE | BumpFlags.BUMP_DOWN | BumpFlags.REFIT_CURVE
    with pytest.raises(InvalidBumpMagnitude):
        bump_quotes([a, b], None, [1.0], flags)
    assert a.quotes() == [0.04, 0.05]
    assert b.quotes() == [0.04, -0.2]
    assert a.df(1.5) == df_before


def test_bump_quotes_unknown_tenor_restores() -> None:
    a = DiscountCurve.from_yields("A", [1.0, 2.0], [0.04, 0.05])
    b = DiscountCurve.from_yields("B", [1.0, 3.0], [0.04, 0.05])
    with pytest.raises(KeyError, match="2Y"):
        bump_quotes([a, b], ["2Y"], [1.0])
    assert a.quotes() == [0.04, 0.05]
