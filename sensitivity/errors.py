"""
Error kinds raised by the bump and scenario machinery.

Per-scenario errors (bad magnitudes, unknown terms, failing measures) are
caught by the scenario driver and reported in the result table. A
`RestorationFailure` is never caught: it means shared pricer/curve state may
be corrupted, so the whole batch stops.
"""

from __future__ import annotations


class SensitivityError(Exception):
    """Base class for all errors raised by this library."""


class InvalidBumpMagnitude(SensitivityError, ValueError):
    """A bump size cannot be applied (e.g. relative divisor would be <= 0)."""


class UnknownTerm(SensitivityError, LookupError):
    """A pricer does not expose the named term."""

    def __init__(self, term: str, pricer_name: str = "", available: list[str] | None = None) -> None:
        self.term = term
        self.pricer_name = pricer_name
        self.available = list(available or [])
        msg = f"Unknown term '{term}'"
        if pricer_name:
            msg += f" on pricer '{pricer_name}'"
        if self.available:
            msg += f". Available terms: {self.available}"
        super().__init__(msg)

    def __str__(self) -> str:
        # LookupError would otherwise repr() the message like KeyError does.
        return self.args[0]


class UnknownMeasure(SensitivityError, LookupError):
    """A pricer does not expose the named measure."""

    def __init__(self, measure: str, pricer_name: str = "", available: list[str] | None = None) -> None:
        self.measure = measure
        self.pricer_name = pricer_name
        self.available = list(available or [])
        msg = f"Unknown measure '{measure}'"
        if pricer_name:
            msg += f" on pricer '{pricer_name}'"
        if self.available:
            msg += f". Available measures: {self.available}"
        super().__init__(msg)

    def __str__(self) -> str:
        return self.args[0]


class QuoteTypeNotSupported(SensitivityError, ValueError):
    """No quote handler is registered for a quoting convention."""


class RestorationFailure(SensitivityError, RuntimeError):
    """Saved state could not be written back after a bump or scenario."""


class MeasureEvaluationFailure(SensitivityError):
    """A pricer measure accessor raised; the original error is the __cause__."""

    def __init__(self, pricer_name: str, measure: str, reason: str = "") -> None:
        self.pricer_name = pricer_name
        self.measure = measure
        msg = f"Evaluating '{measure}' on pricer '{pricer_name}' failed"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
