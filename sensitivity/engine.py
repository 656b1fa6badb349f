"""
Scenario engine: evaluates measures for every (pricer, scenario) pair.

Design intent:
- Scenarios run in declared order as a single-threaded loop, so no tenor or
  term is ever mutated by two scenarios at once.
- Each shift is applied through its scoped `applied()` form inside an
  `ExitStack`; the stack unwinds in reverse order on every exit path, which
  puts pricer terms and curve quotes back to their exact saved values.
- Errors local to one scenario mark that row as failed and the batch goes on.
  A `RestorationFailure` stops the batch because shared state may be corrupt.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, MutableMapping, Sequence
from contextlib import ExitStack
from typing import Any

import pandas as pd

from sensitivity.errors import MeasureEvaluationFailure, RestorationFailure, SensitivityError
from sensitivity.interfaces import Pricer
from sensitivity.scenarios import Scenario, ScenarioShift

logger = logging.getLogger(__name__)

MeasureCache = MutableMapping[tuple[str, str], float]


def evaluate_measure(pricer: Pricer, measure: str) -> float:
    """Evaluate one measure, wrapping pricing errors in MeasureEvaluationFailure."""
    try:
        return float(pricer.measure(measure))
    except SensitivityError:
        raise
    except Exception as exc:
        raise MeasureEvaluationFailure(pricer.name, measure, str(exc)) from exc


def as_scenario(scenario: Scenario | ScenarioShift) -> Scenario:
    return scenario if isinstance(scenario, Scenario) else Scenario([scenario])


class ScenarioEngine:
    """
    Batch driver turning scenarios into a sensitivity table.

    `cache` maps (pricer name, measure) to base values; it is read first and
    filled with any base value that had to be computed. `should_stop` is
    polled between scenarios. Pricer names must be unique within a run.
    Any error other than `RestorationFailure` raised while a scenario is
    applied fails only that row; with `strict=True` it propagates instead.
    """

    def __init__(
        self,
        reevaluate_curves: bool = False,
        include_delta: bool = True,
        cache: MeasureCache | None = None,
        should_stop: Callable[[], bool] | None = None,
        strict: bool = False,
    ) -> None:
        self.reevaluate_curves = reevaluate_curves
        self.include_delta = include_delta
        self.cache: MeasureCache = cache if cache is not None else {}
        self.should_stop = should_stop
        self.strict = strict

    def base_values(self, pricers: Sequence[Pricer], measures: Sequence[str]) -> dict[tuple[str, str], float]:
        base: dict[tuple[str, str], float] = {}
        for pricer in pricers:
            for measure in measures:
                key = (pricer.name, measure)
                if key in self.cache:
                    base[key] = self.cache[key]
                    continue
                try:
                    value = evaluate_measure(pricer, measure)
                except MeasureEvaluationFailure as exc:
                    logger.warning("Base value unavailable: %s", exc)
                    base[key] = math.nan
                    continue
                self.cache[key] = value
                base[key] = value
        return base

    def run(
        self,
        pricers: Sequence[Pricer],
        measures: Sequence[str],
        scenarios: Sequence[Scenario | ScenarioShift],
    ) -> pd.DataFrame:
        if not measures:
            raise ValueError("No measures specified")
        names = [p.name for p in pricers]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            # Base values and the cache are keyed by pricer name.
            raise ValueError(f"Duplicate pricer names {duplicates}; give each pricer a unique name")
        start = time.perf_counter()
        base = self.base_values(pricers, measures)
        rows: list[dict[str, Any]] = []
        cancelled = False
        for index, item in enumerate(scenarios):
            if self.should_stop is not None and self.should_stop():
                logger.info("Scenario run cancelled after %d of %d scenarios", index, len(scenarios))
                cancelled = True
                break
            scenario = as_scenario(item)
            for pricer in pricers:
                rows.append(self._run_one(pricer, index, scenario, measures, base))
        logger.info(
            "Evaluated %d row(s) for %d pricer(s) in %.4fs",
            len(rows), len(pricers), time.perf_counter() - start,
        )
        return self._table(rows, measures, base, cancelled)

    def _run_one(
        self,
        pricer: Pricer,
        index: int,
        scenario: Scenario,
        measures: Sequence[str],
        base: dict[tuple[str, str], float],
    ) -> dict[str, Any]:
        row: dict[str, Any] = {"Pricer": pricer.name, "Scenario": index, "ScenarioName": scenario.name}
        values = {m: math.nan for m in measures}
        errors: list[str] = []
        try:
            scenario.validate()
            with ExitStack() as stack:
                if self.reevaluate_curves:
                    # Runs last on unwind, after every shift is restored.
                    stack.callback(pricer.reset)
                for shift in scenario.shifts:
                    stack.enter_context(shift.applied(pricer))
                for shift in scenario.shifts:
                    shift.perform_refit(pricer)
                if self.reevaluate_curves:
                    pricer.reset()
                for measure in measures:
                    try:
                        values[measure] = evaluate_measure(pricer, measure)
                    except MeasureEvaluationFailure as exc:
                        logger.warning("Scenario '%s': %s", scenario.name, exc)
                        errors.append(str(exc))
        except RestorationFailure:
            logger.error("Restoration failed for pricer '%s' in scenario '%s'", pricer.name, scenario.name)
            raise
        except Exception as exc:
            if self.strict:
                raise
            logger.warning("Scenario '%s' failed on pricer '%s': %s", scenario.name, pricer.name, exc)
            values = {m: math.nan for m in measures}
            errors = [str(exc)]

        row.update(values)
        if self.include_delta:
            for measure in measures:
                row[f"{measure} Delta"] = values[measure] - base[(pricer.name, measure)]
        row["Error"] = "; ".join(errors) if errors else None
        return row

    def _table(
        self,
        rows: list[dict[str, Any]],
        measures: Sequence[str],
        base: dict[tuple[str, str], float],
        cancelled: bool,
    ) -> pd.DataFrame:
        columns = ["Pricer", "Scenario", "ScenarioName", *measures]
        if self.include_delta:
            columns += [f"{m} Delta" for m in measures]
        columns.append("Error")
        df = pd.DataFrame(rows, columns=columns)
        df.attrs["base"] = dict(base)
        df.attrs["cancelled"] = cancelled
        return df
