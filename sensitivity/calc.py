"""Functional entry points over ScenarioEngine."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pandas as pd

from sensitivity.engine import MeasureCache, ScenarioEngine
from sensitivity.interfaces import Pricer
from sensitivity.scenarios import Scenario, ScenarioShift


def calc_scenario(
    pricers: Sequence[Pricer],
    measures: Sequence[str],
    scenarios: Sequence[Scenario | ScenarioShift],
    reevaluate_curves: bool = False,
    include_delta: bool = True,
    cache: MeasureCache | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> pd.DataFrame:
    """
    Evaluate `measures` for every pricer under every scenario.

    Returns one row per (pricer, scenario) pair with bumped values, optional
    "<measure> Delta" columns (bumped - base) and an Error column. Base values
    are in `df.attrs["base"]`.
    """
    engine = ScenarioEngine(
        reevaluate_curves=reevaluate_curves,
        include_delta=include_delta,
        cache=cache,
        should_stop=should_stop,
    )
    return engine.run(pricers, measures, scenarios)


def calc_scenario_deltas(
    pricers: Sequence[Pricer],
    measure: str,
    scenario: Scenario | ScenarioShift,
    reevaluate_curves: bool = False,
    cache: MeasureCache | None = None,
) -> list[float]:
    """Bumped minus base value of one measure per pricer; shift errors propagate."""
    engine = ScenarioEngine(reevaluate_curves=reevaluate_curves, cache=cache, strict=True)
    df = engine.run(pricers, [measure], [scenario])
    return [float(v) for v in df[f"{measure} Delta"]]


def calc_scenario_delta(
    pricer: Pricer,
    measure: str,
    scenario: Scenario | ScenarioShift,
    reevaluate_curves: bool = False,
    cache: MeasureCache | None = None,
) -> float:
    return calc_scenario_deltas([pricer], measure, scenario, reevaluate_curves, cache)[0]
