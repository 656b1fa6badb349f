"""Bump flags and quoting conventions shared by handlers, curves and scenarios."""

from __future__ import annotations

from enum import Enum, Flag, auto


class BumpFlags(Flag):
    """
    Independent facets of a bump request (combine with `|`).

    The empty set (`NONE`) means an absolute, upward bump. A negative bump
    size flips the requested direction.
    """

    NONE = 0
    BUMP_RELATIVE = auto()
    BUMP_DOWN = auto()
    # Opt-in guards: a bump that would cross zero is replaced by half the
    # distance to zero.
    FORBID_DOWN_CROSSING_ZERO = auto()
    FORBID_UP_CROSSING_ZERO = auto()
    # Refit the owning curve after its tenors were bumped.
    REFIT_CURVE = auto()

    @property
    def relative(self) -> bool:
        return bool(self & BumpFlags.BUMP_RELATIVE)

    @property
    def up(self) -> bool:
        return not self & BumpFlags.BUMP_DOWN


def bump_flags(up: bool = True, relative: bool = False) -> BumpFlags:
    """Build flags from the two primary facets."""
    flags = BumpFlags.NONE
    if relative:
        flags |= BumpFlags.BUMP_RELATIVE
    if not up:
        flags |= BumpFlags.BUMP_DOWN
    return flags


class QuotingConvention(Enum):
    """How a market quote stored on a tenor is expressed."""

    NONE = "None"
    CREDIT_SPREAD = "CreditSpread"
    UPFRONT = "Upfront"
    YIELD = "Yield"
    YIELD_SPREAD = "YieldSpread"
    FLAT_PRICE = "FlatPrice"
    VOLATILITY = "Volatility"
