"""
Quote handler registry: quoting convention -> handler factory.

Design intent:
- Curve tenors carry a handler instance; the registry is how callers resolve
  *which* bump arithmetic applies to a convention.
- New conventions are added with `register()`, without modifying the scenario
  driver or the Greeks façade (Open/Closed Principle).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sensitivity.errors import QuoteTypeNotSupported
from sensitivity.flags import QuotingConvention
from sensitivity.interfaces import QuoteHandler

HandlerFactory = Callable[..., QuoteHandler]


class QuoteHandlerRegistry:
    """
    Registry of handler factories keyed by quoting convention.

    Registering a convention twice replaces the earlier factory, which lets a
    caller swap in a custom handler for a built-in convention.
    """

    def __init__(self) -> None:
        self._factories: dict[QuotingConvention, HandlerFactory] = {}

    def register(self, convention: QuotingConvention, factory: HandlerFactory) -> None:
        """Register a handler factory (a handler class works) for a convention."""
        self._factories[convention] = factory

    def __contains__(self, convention: object) -> bool:
        return convention in self._factories

    @property
    def conventions(self) -> list[QuotingConvention]:
        return list(self._factories)

    def create(self, convention: QuotingConvention, **reference_data: Any) -> QuoteHandler:
        """Build a handler for `convention` with its auxiliary reference data."""
        try:
            factory = self._factories[convention]
        except KeyError:
            raise QuoteTypeNotSupported(
                f"No quote handler registered for {convention}. "
                "Register one with registry.register(convention, factory)."
            ) from None
        return factory(**reference_data)

    def resolve(self, convention: QuotingConvention) -> QuoteHandler:
        """Handler with default reference data."""
        return self.create(convention)


def create_default_registry() -> QuoteHandlerRegistry:
    """Factory for a registry with all built-in handlers registered."""
    from sensitivity.handlers import (
        CreditSpreadHandler,
        PointHandler,
        PriceHandler,
        UpfrontHandler,
        VolatilityHandler,
        YieldHandler,
        YieldSpreadHandler,
    )

    registry = QuoteHandlerRegistry()
    registry.register(QuotingConvention.CREDIT_SPREAD, CreditSpreadHandler)
    registry.register(QuotingConvention.UPFRONT, UpfrontHandler)
    registry.register(QuotingConvention.YIELD, YieldHandler)
    registry.register(QuotingConvention.YIELD_SPREAD, YieldSpreadHandler)
    registry.register(QuotingConvention.FLAT_PRICE, PriceHandler)
    registry.register(QuotingConvention.VOLATILITY, VolatilityHandler)
    registry.register(QuotingConvention.NONE, PointHandler)
    return registry


default_registry = create_default_registry()
