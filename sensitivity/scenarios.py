"""
Scenario descriptors: declarative perturbations of pricer terms and curve quotes.

A shift never mutates anything on construction. The scenario driver applies
it through `applied(pricer)`, which saves the affected state, performs the
shift and writes the exact saved values back on every exit path.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from sensitivity.curves import QuotedCurve, bump_quotes
from sensitivity.errors import InvalidBumpMagnitude, RestorationFailure
from sensitivity.flags import BumpFlags
from sensitivity.handlers import relative_bump
from sensitivity.interfaces import Pricer

logger = logging.getLogger(__name__)


class ScenarioShiftType(Enum):
    NONE = "None"
    ABSOLUTE = "Absolute"
    RELATIVE = "Relative"
    SPECIFIED = "Specified"


def bump_value(current: float, shift_type: ScenarioShiftType, magnitude: float) -> float:
    """
    Value of a term after a shift.

    NONE keeps the value, ABSOLUTE adds `magnitude`, SPECIFIED replaces the
    value and RELATIVE applies the sign-aware relative rule used by quote
    handlers (a negative magnitude is a relative decrease).
    """
    if not math.isfinite(magnitude):
        raise InvalidBumpMagnitude(f"Shift magnitude must be finite, got {magnitude}")
    if shift_type is ScenarioShiftType.NONE:
        return current
    if shift_type is ScenarioShiftType.ABSOLUTE:
        return current + magnitude
    if shift_type is ScenarioShiftType.SPECIFIED:
        return magnitude
    if shift_type is ScenarioShiftType.RELATIVE:
        if magnitude == 0.0:
            return current
        return relative_bump(current, abs(magnitude), up=magnitude > 0)
    raise ValueError(f"Unsupported shift type: {shift_type}")


@dataclass(frozen=True)
class ScenarioValueShift:
    """A shift of one value: how (`shift_type`) and by how much (`magnitude`)."""

    shift_type: ScenarioShiftType
    magnitude: float

    def apply(self, current: float) -> float:
        return bump_value(current, self.shift_type, self.magnitude)

    @classmethod
    def absolute(cls, magnitude: float) -> "ScenarioValueShift":
        return cls(ScenarioShiftType.ABSOLUTE, magnitude)

    @classmethod
    def relative(cls, magnitude: float) -> "ScenarioValueShift":
        return cls(ScenarioShiftType.RELATIVE, magnitude)

    @classmethod
    def specified(cls, value: float) -> "ScenarioValueShift":
        return cls(ScenarioShiftType.SPECIFIED, value)


TermValue = Union[ScenarioValueShift, float]


class ScenarioShift(ABC):
    """Base class for one perturbation applied to a pricer.

    Saved state is a stack per pricer, so one shift object can be reused
    across the pricers of a batch and even applied twice in one scenario.
    """

    name: str

    def __init__(self) -> None:
        self._saved: dict[int, list[Any]] = {}

    def _push_saved(self, pricer: Pricer, state: Any) -> None:
        self._saved.setdefault(id(pricer), []).append(state)

    def _peek_saved(self, pricer: Pricer) -> Any:
        return self._saved[id(pricer)][-1]

    def _pop_saved(self, pricer: Pricer) -> Any:
        stack = self._saved.get(id(pricer))
        if not stack:
            return None
        state = stack.pop()
        if not stack:
            del self._saved[id(pricer)]
        return state

    @abstractmethod
    def validate(self) -> None:
        """Raise ValueError if the shift is malformed."""
        ...

    @abstractmethod
    def save_state(self, pricer: Pricer) -> None:
        ...

    @abstractmethod
    def perform_shift(self, pricer: Pricer) -> None:
        ...

    def perform_refit(self, pricer: Pricer) -> None:
        """Rebuild state derived from shifted inputs (no-op by default)."""

    @abstractmethod
    def restore_state(self, pricer: Pricer) -> None:
        """Write saved state back; raises RestorationFailure if that fails."""
        ...

    @contextmanager
    def applied(self, pricer: Pricer) -> Iterator[None]:
        """Apply the shift for the duration of the block, then roll it back."""
        self.validate()
        self.save_state(pricer)
        try:
            self.perform_shift(pricer)
            yield
        finally:
            self.restore_state(pricer)


class ScenarioShiftPricerTerms(ScenarioShift):
    """
    Shift named pricer terms.

    `values` holds one entry per term: a `ScenarioValueShift`, or a plain
    number meaning "set the term to this value". A single name may list
    several terms separated by ``;`` and a single value is broadcast to every
    term.
    """

    def __init__(
        self,
        term_names: str | Sequence[str],
        values: TermValue | Sequence[TermValue],
        name: str | None = None,
    ) -> None:
        super().__init__()
        names = [term_names] if isinstance(term_names, str) else list(term_names)
        if len(names) == 1 and ";" in names[0]:
            names = [n.strip() for n in names[0].split(";")]
        vals = list(values) if isinstance(values, (list, tuple)) else [values]
        if len(vals) == 1 and len(names) > 1:
            vals = vals * len(names)
        self.term_names: tuple[str, ...] = tuple(names)
        self.values: tuple[TermValue, ...] = tuple(vals)
        self.name = name or ";".join(self.term_names)

    def __repr__(self) -> str:
        return f"ScenarioShiftPricerTerms(term_names={list(self.term_names)!r}, values={list(self.values)!r})"

    def validate(self) -> None:
        if len(self.term_names) != len(self.values):
            raise ValueError(
                f"Scenario '{self.name}' has {len(self.term_names)} term names "
                f"but {len(self.values)} values"
            )
        if not self.term_names:
            raise ValueError("No pricer terms specified for scenario")
        seen: set[str] = set()
        for term in self.term_names:
            if not term or not term.strip():
                raise ValueError(f"Scenario '{self.name}' has an empty term name")
            if term in seen:
                raise ValueError(f"Term '{term}' appears more than once in scenario '{self.name}'")
            seen.add(term)
        for value in self.values:
            if not isinstance(value, (ScenarioValueShift, int, float)):
                raise ValueError(f"Unsupported scenario value {value!r} in '{self.name}'")

    def save_state(self, pricer: Pricer) -> None:
        # Reading every term first means an unknown term fails before any mutation.
        self._push_saved(pricer, [(term, pricer.get_term(term)) for term in self.term_names])

    def perform_shift(self, pricer: Pricer) -> None:
        for term, value in zip(self.term_names, self.values):
            current = pricer.get_term(term)
            new = value.apply(current) if isinstance(value, ScenarioValueShift) else float(value)
            logger.debug("Scenario '%s': %s.%s %s -> %s", self.name, pricer.name, term, current, new)
            pricer.set_term(term, new)

    def restore_state(self, pricer: Pricer) -> None:
        saved = self._pop_saved(pricer)
        if saved is None:
            return
        failures: list[str] = []
        first_cause: Exception | None = None
        for term, value in reversed(saved):
            try:
                pricer.set_term(term, value)
                restored = pricer.get_term(term)
            except Exception as exc:
                failures.append(f"{term}: {exc}")
                first_cause = first_cause or exc
                continue
            if restored != value:
                failures.append(f"{term}: expected {value}, read back {restored}")
        if failures:
            raise RestorationFailure(
                f"Could not restore terms on pricer '{pricer.name}' after scenario "
                f"'{self.name}': {'; '.join(failures)}"
            ) from first_cause


class ScenarioShiftCurves(ScenarioShift):
    """
    Shift tenor quotes of curves through their quote handlers, then refit.

    `curves` are curve objects or names resolved on the pricer with
    `pricer.curve(name)`. ABSOLUTE sizes are in handler units (bp for
    spread/yield conventions), RELATIVE sizes are fractions. `shifts` is one
    size for every selected tenor or one size per entry of `tenors`.
    """

    def __init__(
        self,
        curves: Sequence[QuotedCurve | str],
        shifts: float | Sequence[float],
        shift_type: ScenarioShiftType = ScenarioShiftType.ABSOLUTE,
        tenors: Sequence[str] | None = None,
        refit: bool = True,
        name: str | None = None,
    ) -> None:
        super().__init__()
        self.curves = list(curves)
        self.shifts = [float(s) for s in shifts] if isinstance(shifts, (list, tuple)) else [float(shifts)]
        self.shift_type = shift_type
        self.tenors = list(tenors) if tenors else None
        self.refit = refit
        self.name = name or "Curves " + ";".join(c if isinstance(c, str) else c.name for c in self.curves)

    def __repr__(self) -> str:
        return f"ScenarioShiftCurves(name={self.name!r}, shifts={self.shifts!r}, shift_type={self.shift_type})"

    def validate(self) -> None:
        if not self.curves:
            raise ValueError(f"Scenario '{self.name}' has no curves to shift")
        if self.shift_type is ScenarioShiftType.SPECIFIED:
            raise ValueError("Curve scenarios support NONE, ABSOLUTE and RELATIVE shifts only")
        if not self.shifts:
            raise ValueError(f"Scenario '{self.name}' has no shift sizes")
        if not self.tenors and len(self.shifts) != 1:
            raise ValueError("Exactly one shift is allowed when every tenor is shifted")
        if self.tenors and len(self.shifts) not in (1, len(self.tenors)):
            raise ValueError("Number of shifts must be one or match the number of tenors")

    def _resolve(self, pricer: Pricer) -> list[QuotedCurve]:
        return [pricer.curve(c) if isinstance(c, str) else c for c in self.curves]

    def save_state(self, pricer: Pricer) -> None:
        curves = self._resolve(pricer)
        if self.tenors:
            for curve in curves:
                for tenor in self.tenors:
                    curve.tenor(tenor)
        self._push_saved(pricer, [(curve, curve.save_quotes()) for curve in curves])

    def perform_shift(self, pricer: Pricer) -> None:
        if self.shift_type is ScenarioShiftType.NONE:
            return
        flags = BumpFlags.BUMP_RELATIVE if self.shift_type is ScenarioShiftType.RELATIVE else BumpFlags.NONE
        curves = [curve for curve, _ in self._peek_saved(pricer)]
        bump_quotes(curves, self.tenors, self.shifts, flags)

    def perform_refit(self, pricer: Pricer) -> None:
        if not self.refit:
            return
        for curve, _ in self._peek_saved(pricer):
            curve.refit()

    def restore_state(self, pricer: Pricer) -> None:
        saved = self._pop_saved(pricer)
        if saved is None:
            return
        failures: list[str] = []
        first_cause: Exception | None = None
        for curve, quotes in reversed(saved):
            try:
                curve.restore_quotes(quotes)
            except Exception as exc:
                failures.append(f"{curve.name}: {exc}")
                first_cause = first_cause or exc
                continue
            if curve.quotes() != list(quotes):
                failures.append(f"{curve.name}: quotes differ after restore")
        if failures:
            raise RestorationFailure(
                f"Could not restore curves after scenario '{self.name}': {'; '.join(failures)}"
            ) from first_cause


class Scenario:
    """A named, ordered group of shifts applied together."""

    def __init__(self, shifts: ScenarioShift | Sequence[ScenarioShift], name: str | None = None) -> None:
        self.shifts: list[ScenarioShift] = [shifts] if isinstance(shifts, ScenarioShift) else list(shifts)
        self.name = name or " & ".join(s.name for s in self.shifts)

    def __repr__(self) -> str:
        return f"Scenario(name={self.name!r}, shifts={self.shifts!r})"

    def validate(self) -> None:
        if not self.shifts:
            raise ValueError(f"Scenario '{self.name}' has no shifts")
        for shift in self.shifts:
            shift.validate()
