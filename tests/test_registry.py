"""Tests for the quote handler registry."""

import pytest

from sensitivity.curves import CurveTenor
from sensitivity.errors import QuoteTypeNotSupported
from sensitivity.flags import QuotingConvention
from sensitivity.handlers import CreditSpreadHandler, PointHandler
from sensitivity.registry import QuoteHandlerRegistry, create_default_registry


def test_default_registry_covers_all_conventions() -> None:
    registry = create_default_registry()
    for convention in QuotingConvention:
        assert convention in registry
        assert registry.resolve(convention).convention is convention


def test_create_passes_reference_data() -> None:
    """Reference data (e.g. recovery) is forwarded to the handler factory."""
    handler = create_default_registry().create(QuotingConvention.CREDIT_SPREAD, recovery=0.25)
    assert isinstance(handler, CreditSpreadHandler)
    assert handler.recovery == 0.25


def test_unregistered_convention_raises() -> None:
    registry = QuoteHandlerRegistry()
    with pytest.raises(QuoteTypeNotSupported, match="No quote handler registered"):
        registry.create(QuotingConvention.UPFRONT)


def test_custom_handler_registration() -> None:
    """A convention can be re-registered with a custom handler without touching callers."""

    class TenthHandler(PointHandler):
        unit = 0.1

    registry = QuoteHandlerRegistry()
    registry.register(QuotingConvention.NONE, TenthHandler)
    tenor = CurveTenor.from_convention("P", 1.0, 5.0, QuotingConvention.NONE, registry=registry)
    amount = tenor.bump(2.0)
    assert abs(amount - 0.2) < 1e-12
    assert tenor.quote_type is QuotingConvention.NONE


def test_tenor_from_convention_uses_default_registry() -> None:
    tenor = CurveTenor.from_convention("5Y", 5.0, 0.01, QuotingConvention.CREDIT_SPREAD, recovery=0.3)
    assert tenor.quote_type is QuotingConvention.CREDIT_SPREAD
    assert tenor.handler.recovery == 0.3
