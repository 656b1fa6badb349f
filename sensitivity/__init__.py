"""Sensitivity engine: quote handlers, curves, scenarios, scenario driver and Greeks."""

from sensitivity.calc import calc_scenario, calc_scenario_delta, calc_scenario_deltas
from sensitivity.config import SensitivityConfig, config_override, configure_logging
from sensitivity.curves import CurveTenor, DiscountCurve, QuotedCurve, SurvivalCurve, bump_quotes
from sensitivity.engine import ScenarioEngine
from sensitivity.errors import (
    InvalidBumpMagnitude,
    MeasureEvaluationFailure,
    QuoteTypeNotSupported,
    RestorationFailure,
    SensitivityError,
    UnknownMeasure,
    UnknownTerm,
)
from sensitivity.flags import BumpFlags, QuotingConvention, bump_flags
from sensitivity.interfaces import Curve, Pricer, QuoteHandler, QuoteHolder
from sensitivity.pricers import BasePricer, BondPricer, CDSPricer, OptionPricer, SwapPricer
from sensitivity.registry import QuoteHandlerRegistry, create_default_registry, default_registry
from sensitivity.risk import (
    CS01Parallel,
    Delta,
    Gamma,
    PV01Parallel,
    Vega,
    bump_quote,
    bumped,
    cs01_parallel,
    delta,
    gamma,
    pv01_parallel,
    vega,
)
from sensitivity.scenarios import (
    Scenario,
    ScenarioShift,
    ScenarioShiftCurves,
    ScenarioShiftPricerTerms,
    ScenarioShiftType,
    ScenarioValueShift,
    bump_value,
)

__all__ = [
    "BasePricer",
    "BondPricer",
    "BumpFlags",
    "CDSPricer",
    "CS01Parallel",
    "Curve",
    "CurveTenor",
    "Delta",
    "DiscountCurve",
    "Gamma",
    "InvalidBumpMagnitude",
    "MeasureEvaluationFailure",
    "OptionPricer",
    "PV01Parallel",
    "Pricer",
    "QuoteHandler",
    "QuoteHandlerRegistry",
    "QuoteHolder",
    "QuoteTypeNotSupported",
    "QuotedCurve",
    "QuotingConvention",
    "RestorationFailure",
    "Scenario",
    "ScenarioEngine",
    "ScenarioShift",
    "ScenarioShiftCurves",
    "ScenarioShiftPricerTerms",
    "ScenarioShiftType",
    "ScenarioValueShift",
    "SensitivityConfig",
    "SensitivityError",
    "SurvivalCurve",
    "SwapPricer",
    "UnknownMeasure",
    "UnknownTerm",
    "Vega",
    "bump_flags",
    "bump_quote",
    "bump_quotes",
    "bump_value",
    "bumped",
    "calc_scenario",
    "calc_scenario_delta",
    "calc_scenario_deltas",
    "config_override",
    "configure_logging",
    "create_default_registry",
    "cs01_parallel",
    "default_registry",
    "delta",
    "gamma",
    "pv01_parallel",
    "vega",
]
