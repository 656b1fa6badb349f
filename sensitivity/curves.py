"""
Curve tenors and quote-driven curves.

This module deliberately keeps curve math minimal and explicit:
- Times are **year fractions** (e.g. 2.0 = 2Y from the curve reference).
- Each curve point is a `CurveTenor` holding one market quote and the
  `QuoteHandler` that knows how to bump it.
- A curve's *fitted* state (pillars/rates used by `df`) is rebuilt from the
  tenor quotes by `refit()`. Bumping a tenor alone does not move `df` until
  the curve is refitted; that is the hook the scenario driver's
  `reevaluate_curves` option and the `REFIT_CURVE` flag use.
- DiscountCurve: quotes are continuously compounded zero yields, linear
  interpolation in rates, flat extrapolation.
- SurvivalCurve: quotes are credit spreads, turned into piecewise-constant
  hazard rates h = s / (1 - R); `df(t)` returns survival probability S(t).

There is no bootstrapping here; the quote -> rate maps are closed form.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from sensitivity.flags import BumpFlags, QuotingConvention
from sensitivity.handlers import CreditSpreadHandler, PointHandler, YieldHandler
from sensitivity.interfaces import QuoteHandler

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class CurveTenor:
    """
    A named point on a term structure: one mutable quote plus its handler.

    The quote is the only mutable field and all bumps flow through the
    handler. Tenors compare by identity so two points with equal quotes are
    never confused with each other.
    """

    name: str
    maturity: float
    quote: float
    handler: QuoteHandler = field(default_factory=PointHandler)
    product: str = ""

    @classmethod
    def from_convention(
        cls,
        name: str,
        maturity: float,
        quote: float,
        convention: QuotingConvention,
        registry: Any = None,
        product: str = "",
        **reference_data: Any,
    ) -> "CurveTenor":
        """Build a tenor whose handler is resolved from a handler registry."""
        if registry is None:
            from sensitivity.registry import default_registry as registry
        handler = registry.create(convention, **reference_data)
        return cls(name=name, maturity=maturity, quote=quote, handler=handler, product=product)

    @property
    def quote_type(self) -> QuotingConvention:
        return self.handler.convention

    def bump(self, size: float, flags: BumpFlags = BumpFlags.NONE) -> float:
        """Bump the quote through the handler; returns the applied amount."""
        return self.handler.bump_quote(self, size, flags)

    def snapshot(self) -> float:
        return self.quote

    def restore(self, value: float) -> None:
        self.quote = value


def _tenor_label(t: float) -> str:
    return f"{t:g}Y"


class QuotedCurve:
    """Base class for curves whose fitted state derives from tenor quotes."""

    def __init__(self, name: str, tenors: Sequence[CurveTenor], t0: float = 0.0) -> None:
        self.name = name
        self.t0 = t0
        self._tenors: list[CurveTenor] = list(tenors)
        self._validate()
        self._pillars: list[float] = []
        self._rates: list[float] = []
        self.refit()

    def _validate(self) -> None:
        if not self._tenors:
            raise ValueError("curve has no tenors")
        for i in range(1, len(self._tenors)):
            if self._tenors[i].maturity <= self._tenors[i - 1].maturity:
                raise ValueError("tenor maturities must be strictly increasing")

    @property
    def tenors(self) -> tuple[CurveTenor, ...]:
        return tuple(self._tenors)

    def tenor(self, name: str) -> CurveTenor:
        """Return tenor by name. Raises KeyError if not found."""
        for tenor in self._tenors:
            if tenor.name == name:
                return tenor
        raise KeyError(
            f"Tenor '{name}' not found on curve '{self.name}'. "
            f"Available tenors: {[t.name for t in self._tenors]}"
        )

    def _rate_from_tenor(self, tenor: CurveTenor) -> float:
        return tenor.quote

    def refit(self) -> None:
        """Rebuild pillars/rates from the current tenor quotes."""
        self._pillars = [t.maturity for t in self._tenors]
        self._rates = [self._rate_from_tenor(t) for t in self._tenors]

    def quotes(self) -> list[float]:
        return [t.quote for t in self._tenors]

    def save_quotes(self) -> list[float]:
        return [t.snapshot() for t in self._tenors]

    def restore_quotes(self, saved: Sequence[float]) -> None:
        """Put saved quotes back and refit."""
        if len(saved) != len(self._tenors):
            raise ValueError(
                f"curve '{self.name}' has {len(self._tenors)} tenors, got {len(saved)} saved quotes"
            )
        for tenor, value in zip(self._tenors, saved):
            tenor.restore(value)
        self.refit()

    def df(self, t: float) -> float:
        raise NotImplementedError


class DiscountCurve(QuotedCurve):
    """Zero yield curve (continuously compounded) with linear interpolation."""

    @classmethod
    def from_yields(cls, name: str, pillars: Sequence[float], yields: Sequence[float], t0: float = 0.0) -> "DiscountCurve":
        if len(pillars) != len(yields):
            raise ValueError("pillars and yields must have the same length")
        handler = YieldHandler()
        tenors = [
            CurveTenor(name=_tenor_label(p), maturity=p, quote=y, handler=handler, product=f"{name} {_tenor_label(p)}")
            for p, y in zip(pillars, yields)
        ]
        return cls(name, tenors, t0=t0)

    def zero_rate_cc(self, t: float) -> float:
        """
        Continuously compounded zero rate at time t (year-fraction).
        Linear interpolation in zero rates. t must be >= 0.
        """
        if t < 0:
            raise ValueError("t must be >= 0")
        pillars, rates = self._pillars, self._rates
        if t <= pillars[0]:
            return rates[0]
        if t >= pillars[-1]:
            return rates[-1]
        for i in range(len(pillars) - 1):
            if pillars[i] <= t <= pillars[i + 1]:
                t0, t1 = pillars[i], pillars[i + 1]
                r0, r1 = rates[i], rates[i + 1]
                return r0 + (r1 - r0) * (t - t0) / (t1 - t0)
        return rates[-1]

    def df(self, t: float) -> float:
        """Discount factor DF(t) = exp(-r(t)*t)."""
        return math.exp(-self.zero_rate_cc(t) * t)


class SurvivalCurve(QuotedCurve):
    """
    Survival curve with piecewise-constant hazard between tenor maturities.

    Hazard on [prev, maturity_i] is spread_i / (1 - R_i), where R_i is the
    recovery carried by the tenor's credit spread handler (or the curve's
    `recovery` when the handler has none).
    """

    def __init__(self, name: str, tenors: Sequence[CurveTenor], t0: float = 0.0, recovery: float = 0.4) -> None:
        self.recovery = recovery
        super().__init__(name, tenors, t0=t0)

    @classmethod
    def from_spreads(
        cls,
        name: str,
        pillars: Sequence[float],
        spreads: Sequence[float],
        recovery: float = 0.4,
        allow_negative: bool = True,
        t0: float = 0.0,
    ) -> "SurvivalCurve":
        if len(pillars) != len(spreads):
            raise ValueError("pillars and spreads must have the same length")
        handler = CreditSpreadHandler(recovery=recovery, allow_negative=allow_negative)
        tenors = [
            CurveTenor(name=_tenor_label(p), maturity=p, quote=s, handler=handler, product=f"{name} CDS {_tenor_label(p)}")
            for p, s in zip(pillars, spreads)
        ]
        return cls(name, tenors, t0=t0, recovery=recovery)

    def _rate_from_tenor(self, tenor: CurveTenor) -> float:
        recovery = getattr(tenor.handler, "recovery", self.recovery)
        return tenor.quote / (1.0 - recovery)

    def hazard_rate(self, t: float) -> float:
        """Piecewise-constant hazard at time t. Flat extrapolation beyond endpoints."""
        if t < 0:
            raise ValueError("t must be >= 0")
        pillars, rates = self._pillars, self._rates
        if t <= pillars[0]:
            return rates[0]
        for i in range(1, len(pillars)):
            if t <= pillars[i]:
                return rates[i]
        return rates[-1]

    def df(self, t: float) -> float:
        """Survival probability S(t) = exp(-integral_0^t h(u) du)."""
        if t <= 0:
            return 1.0
        integral = 0.0
        prev = self.t0
        for pillar, hazard in zip(self._pillars, self._rates):
            t_end = min(pillar, t)
            if t_end > prev:
                integral += hazard * (t_end - prev)
            prev = pillar
            if prev >= t:
                break
        if t > self._pillars[-1]:
            integral += self._rates[-1] * (t - self._pillars[-1])
        return math.exp(-integral)


def bump_quotes(
    curves: Sequence[QuotedCurve],
    tenors: Sequence[str] | None,
    sizes: Sequence[float],
    flags: BumpFlags = BumpFlags.NONE,
    includes: Sequence[bool] | None = None,
) -> list[float]:
    """
    Bump tenor quotes on a set of curves; return the average applied amount per curve.

    - `tenors=None` bumps every tenor; then exactly one size is allowed.
    - One size is applied to all named tenors, or one size per tenor.
    - `includes` optionally masks curves (excluded curves report 0.0).
    - With `BumpFlags.REFIT_CURVE` each bumped curve is refitted.
    - If any bump raises, every quote is put back before the error propagates.
    """
    if not curves:
        raise ValueError("No curves specified to bump")
    if not sizes:
        raise ValueError("No bump sizes specified")
    if not tenors and len(sizes) != 1:
        raise ValueError(
            "Multiple bumps have been specified for curve bumping when all tenors are to be bumped"
        )
    if tenors and len(sizes) != 1 and len(tenors) != len(sizes):
        raise ValueError(
            "If specific tenors are to be bumped, one bump must be specified "
            "or the number of tenors must match the number of bumps"
        )
    if includes and len(includes) != len(curves):
        raise ValueError("Number of includes must match number of curves")

    start = time.perf_counter()
    logger.debug(
        "Bumping tenors (%s...) for curves %s... by %s %s",
        tenors[0] if tenors else "all",
        curves[0].name,
        "factor" if flags.relative else "size",
        sizes[0],
    )
    saved = [(curve, curve.save_quotes()) for curve in curves]
    refitted: list[QuotedCurve] = []
    averages: list[float] = []
    try:
        for j, curve in enumerate(curves):
            if includes and not includes[j]:
                averages.append(0.0)
                continue
            selected = [curve.tenor(n) for n in tenors] if tenors else list(curve.tenors)
            amounts = [
                tenor.bump(sizes[0] if len(sizes) == 1 else sizes[i], flags)
                for i, tenor in enumerate(selected)
            ]
            averages.append(sum(amounts) / len(amounts) if amounts else 0.0)
            if flags & BumpFlags.REFIT_CURVE:
                curve.refit()
                refitted.append(curve)
    except Exception:
        # All or nothing: put every quote back before propagating.
        for curve, quotes in saved:
            for tenor, value in zip(curve.tenors, quotes):
                tenor.restore(value)
        for curve in refitted:
            curve.refit()
        raise
    logger.info("Completed bump of %d curve(s) in %.4fs", len(curves), time.perf_counter() - start)
    return averages
