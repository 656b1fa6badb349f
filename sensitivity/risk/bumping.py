"""
Scoped bump-and-reprice primitives shared by the Greeks.

Anything bumped here is a `QuoteHolder` carrying a `handler`: curve tenors
directly, and pricer terms through `PricerTermQuote`. `bumped()` always
writes the saved quotes back and resets the pricer, whatever happens inside
the block.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from sensitivity.errors import RestorationFailure
from sensitivity.flags import BumpFlags
from sensitivity.handlers import PointHandler
from sensitivity.interfaces import Pricer, QuoteHandler

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PricerTermQuote:
    """A pricer term viewed as a quote, so handlers can bump it."""

    pricer: Pricer
    term: str
    handler: QuoteHandler = field(default_factory=PointHandler)

    @property
    def name(self) -> str:
        return self.term

    @property
    def quote(self) -> float:
        return self.pricer.get_term(self.term)

    @quote.setter
    def quote(self, value: float) -> None:
        self.pricer.set_term(self.term, value)


def bump_quote(holder: Any, size: float, flags: BumpFlags = BumpFlags.NONE) -> float:
    """Bump one holder through its own handler; returns the applied amount."""
    return holder.handler.bump_quote(holder, size, flags)


@dataclass(frozen=True)
class TermTarget:
    """Bump one pricer term (PointHandler, i.e. term units, unless given)."""

    term: str
    handler: QuoteHandler | None = None

    @property
    def label(self) -> str:
        return self.term

    def holders(self, pricer: Pricer) -> list[PricerTermQuote]:
        handler = self.handler if self.handler is not None else PointHandler()
        return [PricerTermQuote(pricer, self.term, handler)]


@dataclass(frozen=True)
class TenorTarget:
    """Bump tenors of a pricer curve (every tenor when `tenors` is None)."""

    curve_name: str
    tenors: tuple[str, ...] | None = None

    @property
    def label(self) -> str:
        if self.tenors:
            return f"{self.curve_name}[{','.join(self.tenors)}]"
        return self.curve_name

    def holders(self, pricer: Pricer) -> list[Any]:
        curve = pricer.curve(self.curve_name)
        if self.tenors:
            return [curve.tenor(name) for name in self.tenors]
        return list(curve.tenors)


def _restore(pricer: Pricer, holders: Sequence[Any], saved: Sequence[float]) -> None:
    failures: list[str] = []
    first_cause: Exception | None = None
    for holder, value in zip(reversed(holders), reversed(saved)):
        try:
            holder.quote = value
        except Exception as exc:
            failures.append(f"{holder.name}: {exc}")
            first_cause = first_cause or exc
    pricer.reset()
    if failures:
        raise RestorationFailure(
            f"Could not restore bumped quotes on pricer '{pricer.name}': {'; '.join(failures)}"
        ) from first_cause


@contextmanager
def bumped(
    pricer: Pricer,
    holders: Sequence[Any],
    size: float,
    flags: BumpFlags = BumpFlags.NONE,
) -> Iterator[float]:
    """
    Bump every holder by `size`, reset the pricer and yield the average
    applied amount. Quotes are restored and the pricer reset on exit.
    """
    holders = list(holders)
    saved = [h.quote for h in holders]
    try:
        amounts = [bump_quote(h, size, flags) for h in holders]
        pricer.reset()
        average = sum(amounts) / len(amounts) if amounts else 0.0
        logger.debug("Bumped %d quote(s) on '%s' by %s (average applied %s)", len(holders), pricer.name, size, average)
        yield average
    finally:
        _restore(pricer, holders, saved)


def bumped_measure(
    pricer: Pricer,
    holders: Sequence[Any],
    size: float,
    flags: BumpFlags,
    measure: str,
) -> tuple[float, float]:
    """(measure value, average applied amount) under a scoped bump."""
    with bumped(pricer, holders, size, flags) as amount:
        return pricer.measure(measure), amount
