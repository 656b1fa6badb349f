"""Finite-difference Greeks: Delta, Gamma, Vega."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sensitivity.errors import InvalidBumpMagnitude
from sensitivity.flags import BumpFlags
from sensitivity.handlers import BASIS_POINT, VolatilityHandler
from sensitivity.interfaces import Pricer
from sensitivity.risk.base import BaseRiskMeasure
from sensitivity.risk.bumping import TenorTarget, TermTarget, bumped_measure

Target = TermTarget | TenorTarget


def _central_default(pricer: Pricer) -> bool:
    config = getattr(pricer, "config", None)
    return config.central_difference if config is not None else True


def default_bump_size(pricer: Pricer, holders: Sequence[Any]) -> float:
    """
    `config.default_bump_bp` basis points of the quote, in the handler's units.

    A bp-quoted handler bumps by `default_bump_bp`; a raw-unit handler
    (PointHandler) bumps by `default_bump_bp * 1e-4`.
    """
    config = getattr(pricer, "config", None)
    bump_bp = config.default_bump_bp if config is not None else 1.0
    unit = holders[0].handler.unit if holders else 1.0
    return bump_bp * BASIS_POINT / unit


@dataclass
class Delta(BaseRiskMeasure):
    """dV/dq by bump and reprice; q is the target quote in its own units.

    Central: (V_up - V_down) / (a_up - a_down). One-sided: (V_up - V_0) / a_up.
    `central=None` takes the pricer's configured default; `bump_size=None`
    bumps by the configured default number of basis points.
    """

    target: Target
    bump_size: float | None = None
    flags: BumpFlags = BumpFlags.NONE
    central: bool | None = None
    measure: str = "Pv"

    @property
    def name(self) -> str:
        return f"Delta_{self.target.label}"

    def compute(self, pricer: Pricer) -> float:
        central = self.central if self.central is not None else _central_default(pricer)
        holders = self.target.holders(pricer)
        size = self.bump_size if self.bump_size is not None else default_bump_size(pricer, holders)
        v_up, a_up = bumped_measure(pricer, holders, size, self.flags, self.measure)
        if central:
            v_down, a_down = bumped_measure(pricer, holders, -size, self.flags, self.measure)
        else:
            v_down, a_down = pricer.measure(self.measure), 0.0
        if a_up == a_down:
            raise InvalidBumpMagnitude(f"Bump of {size} on '{self.target.label}' changed nothing")
        return (v_up - v_down) / (a_up - a_down)


@dataclass
class Gamma(BaseRiskMeasure):
    """d2V/dq2 from up, base and down values (non-uniform second difference)."""

    target: Target
    bump_size: float | None = None
    flags: BumpFlags = BumpFlags.NONE
    measure: str = "Pv"

    @property
    def name(self) -> str:
        return f"Gamma_{self.target.label}"

    def compute(self, pricer: Pricer) -> float:
        holders = self.target.holders(pricer)
        size = self.bump_size if self.bump_size is not None else default_bump_size(pricer, holders)
        v0 = pricer.measure(self.measure)
        v_up, a_up = bumped_measure(pricer, holders, size, self.flags, self.measure)
        v_down, a_down = bumped_measure(pricer, holders, -size, self.flags, self.measure)
        if a_up == 0.0 or a_down == 0.0 or a_up == a_down:
            raise InvalidBumpMagnitude(f"Bump of {size} on '{self.target.label}' changed nothing")
        slope_up = (v_up - v0) / a_up
        slope_down = (v0 - v_down) / -a_down
        return 2.0 * (slope_up - slope_down) / (a_up - a_down)


@dataclass
class Vega(BaseRiskMeasure):
    """Central dV/dvol scaled to a one vol point (0.01) move."""

    term: str = "Volatility"
    bump_size: float = 0.01
    measure: str = "Pv"

    @property
    def name(self) -> str:
        return f"Vega_{self.term}"

    def compute(self, pricer: Pricer) -> float:
        target = TermTarget(self.term, VolatilityHandler())
        sensitivity = Delta(target, self.bump_size, central=True, measure=self.measure).compute(pricer)
        return sensitivity * 0.01
