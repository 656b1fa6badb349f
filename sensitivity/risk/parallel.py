"""Parallel PV01 / CS01 (bump every curve tenor and reprice)."""

from __future__ import annotations

from dataclasses import dataclass

from sensitivity.flags import BumpFlags
from sensitivity.interfaces import Pricer
from sensitivity.risk.base import BaseRiskMeasure
from sensitivity.risk.bumping import TenorTarget, bumped_measure


def _parallel_change(pricer: Pricer, curve_name: str, bump_bp: float | None, measure: str) -> float:
    """measure(bumped) - measure(base) for an absolute bump of every tenor."""
    if bump_bp is None:
        config = getattr(pricer, "config", None)
        bump_bp = config.default_bump_bp if config is not None else 1.0
    holders = TenorTarget(curve_name).holders(pricer)
    base = pricer.measure(measure)
    # bumped() resets the pricer, which refits its curves.
    bumped_value, _ = bumped_measure(pricer, holders, bump_bp, BumpFlags.NONE, measure)
    return bumped_value - base


@dataclass
class PV01Parallel(BaseRiskMeasure):
    """Parallel PV01: change in PV for a parallel yield curve shift."""

    curve_name: str
    bump_bp: float | None = None
    measure: str = "Pv"

    @property
    def name(self) -> str:
        return f"PV01_{self.curve_name}"

    def compute(self, pricer: Pricer) -> float:
        """PV(bumped) - PV(base); tenors are bumped in handler units (bp)."""
        return _parallel_change(pricer, self.curve_name, self.bump_bp, self.measure)


@dataclass
class CS01Parallel(BaseRiskMeasure):
    """Parallel CS01: change in PV for a parallel credit spread shift."""

    curve_name: str
    bump_bp: float | None = None
    measure: str = "Pv"

    @property
    def name(self) -> str:
        return f"CS01_{self.curve_name}"

    def compute(self, pricer: Pricer) -> float:
        return _parallel_change(pricer, self.curve_name, self.bump_bp, self.measure)
