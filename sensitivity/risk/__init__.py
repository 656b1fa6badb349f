"""
Greeks implemented via "bump and reprice".

The measure classes (Delta, Gamma, Vega, PV01Parallel, CS01Parallel) compose;
the functions below are one-call shortcuts over them.
"""

from __future__ import annotations

from sensitivity.flags import BumpFlags
from sensitivity.interfaces import Pricer
from sensitivity.risk.base import BaseRiskMeasure
from sensitivity.risk.bumping import (
    PricerTermQuote,
    TenorTarget,
    TermTarget,
    bump_quote,
    bumped,
    bumped_measure,
)
from sensitivity.risk.greeks import Delta, Gamma, Vega
from sensitivity.risk.parallel import CS01Parallel, PV01Parallel


def _target(target: str | TermTarget | TenorTarget) -> TermTarget | TenorTarget:
    return TermTarget(target) if isinstance(target, str) else target


def delta(
    pricer: Pricer,
    target: str | TermTarget | TenorTarget,
    bump_size: float | None = None,
    flags: BumpFlags = BumpFlags.NONE,
    central: bool | None = None,
    measure: str = "Pv",
) -> float:
    """
    dV/dq for a pricer term (given by name) or curve tenors.
    Central difference unless `central=False` or the pricer config says otherwise.
    Without `bump_size` the quote moves by `config.default_bump_bp` basis points.
    """
    return Delta(_target(target), bump_size, flags, central, measure).compute(pricer)


def gamma(
    pricer: Pricer,
    target: str | TermTarget | TenorTarget,
    bump_size: float | None = None,
    flags: BumpFlags = BumpFlags.NONE,
    measure: str = "Pv",
) -> float:
    return Gamma(_target(target), bump_size, flags, measure).compute(pricer)


def vega(pricer: Pricer, term: str = "Volatility", bump_size: float = 0.01, measure: str = "Pv") -> float:
    """Change in `measure` per one vol point (0.01), central difference."""
    return Vega(term, bump_size, measure).compute(pricer)


def pv01_parallel(pricer: Pricer, curve_name: str, bump_bp: float | None = None, measure: str = "Pv") -> float:
    """
    PV01: change in PV when every tenor of the yield curve is bumped by
    bump_bp basis points (config default when None). Returns PV(bumped) - PV(base).
    """
    return PV01Parallel(curve_name, bump_bp, measure).compute(pricer)


def cs01_parallel(pricer: Pricer, curve_name: str, bump_bp: float | None = None, measure: str = "Pv") -> float:
    """
    CS01: change in PV when every credit spread tenor is bumped by bump_bp
    basis points. Returns PV(bumped) - PV(base).
    """
    return CS01Parallel(curve_name, bump_bp, measure).compute(pricer)


__all__ = [
    "BaseRiskMeasure",
    "CS01Parallel",
    "Delta",
    "Gamma",
    "PV01Parallel",
    "PricerTermQuote",
    "TenorTarget",
    "TermTarget",
    "Vega",
    "bump_quote",
    "bumped",
    "bumped_measure",
    "cs01_parallel",
    "delta",
    "gamma",
    "pv01_parallel",
    "vega",
]
