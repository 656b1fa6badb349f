"""Handlers for price-like and model-parameter quotes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sensitivity.flags import QuotingConvention
from sensitivity.handlers.base import BASIS_POINT, BaseQuoteHandler


@dataclass(frozen=True)
class PriceHandler(BaseQuoteHandler):
    """Flat price as a fraction of par (1.0 = 100%); absolute bumps in bp of par."""

    convention: ClassVar[QuotingConvention] = QuotingConvention.FLAT_PRICE
    unit: ClassVar[float] = BASIS_POINT


@dataclass(frozen=True)
class VolatilityHandler(BaseQuoteHandler):
    """Volatility in decimal (0.2 = 20%); absolute bumps in the same units."""

    convention: ClassVar[QuotingConvention] = QuotingConvention.VOLATILITY
    unit: ClassVar[float] = 1.0


@dataclass(frozen=True)
class PointHandler(BaseQuoteHandler):
    """Raw numeric point with no market convention; bumps in the quote's own units."""

    convention: ClassVar[QuotingConvention] = QuotingConvention.NONE
    unit: ClassVar[float] = 1.0
