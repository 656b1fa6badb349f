"""Handlers for credit quotes: par spreads and upfront fees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sensitivity.flags import BumpFlags, QuotingConvention
from sensitivity.handlers.base import BASIS_POINT, BaseQuoteHandler


@dataclass(frozen=True)
class CreditSpreadHandler(BaseQuoteHandler):
    """
    CDS par spread quoted in decimal (100bp = 0.01); absolute bumps in bp.

    `recovery` is the reference recovery rate used to turn spreads into
    hazard rates. With `allow_negative=False` a down bump never takes a
    positive spread below zero (it is halved instead).
    """

    convention: ClassVar[QuotingConvention] = QuotingConvention.CREDIT_SPREAD
    unit: ClassVar[float] = BASIS_POINT

    recovery: float = 0.4
    allow_negative: bool = True

    def __post_init__(self) -> None:
        if not 0.0 <= self.recovery < 1.0:
            raise ValueError("recovery must be in [0, 1)")

    def effective_flags(self, flags: BumpFlags) -> BumpFlags:
        if not self.allow_negative:
            return flags | BumpFlags.FORBID_DOWN_CROSSING_ZERO
        return flags


@dataclass(frozen=True)
class UpfrontHandler(BaseQuoteHandler):
    """Upfront fee as a fraction of notional, running coupon fixed; bumps in bp."""

    convention: ClassVar[QuotingConvention] = QuotingConvention.UPFRONT
    unit: ClassVar[float] = BASIS_POINT

    running_premium: float = 0.01
