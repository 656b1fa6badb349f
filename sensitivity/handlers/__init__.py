"""Quote handlers: bump arithmetic per quoting convention."""

from sensitivity.handlers.base import (
    BASIS_POINT,
    BaseQuoteHandler,
    adjust_for_zero_crossing,
    relative_bump,
)
from sensitivity.handlers.credit import CreditSpreadHandler, UpfrontHandler
from sensitivity.handlers.price import PointHandler, PriceHandler, VolatilityHandler
from sensitivity.handlers.rates import YieldHandler, YieldSpreadHandler

__all__ = [
    "BASIS_POINT",
    "BaseQuoteHandler",
    "CreditSpreadHandler",
    "PointHandler",
    "PriceHandler",
    "UpfrontHandler",
    "VolatilityHandler",
    "YieldHandler",
    "YieldSpreadHandler",
    "adjust_for_zero_crossing",
    "relative_bump",
]
