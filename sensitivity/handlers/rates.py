"""Handlers for rate quotes: yields and spreads over an index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sensitivity.flags import QuotingConvention
from sensitivity.handlers.base import BASIS_POINT, BaseQuoteHandler


@dataclass(frozen=True)
class YieldHandler(BaseQuoteHandler):
    """Continuously compounded yield in decimal; absolute bumps in bp."""

    convention: ClassVar[QuotingConvention] = QuotingConvention.YIELD
    unit: ClassVar[float] = BASIS_POINT


@dataclass(frozen=True)
class YieldSpreadHandler(BaseQuoteHandler):
    """Spread over a floating index in decimal; absolute bumps in bp."""

    convention: ClassVar[QuotingConvention] = QuotingConvention.YIELD_SPREAD
    unit: ClassVar[float] = BASIS_POINT

    index: str = ""
