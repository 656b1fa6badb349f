"""
Protocol-based interfaces for the collaborators the bump engine works with.

Using typing.Protocol enables structural subtyping: any class that implements
the required members satisfies the protocol without explicit inheritance.
The engine only ever talks to these capability sets; it never inspects
pricer or curve internals.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sensitivity.flags import BumpFlags, QuotingConvention


@runtime_checkable
class QuoteHolder(Protocol):
    """Anything carrying a single mutable market quote (curve tenor, pricer term)."""

    name: str
    quote: float


@runtime_checkable
class QuoteHandler(Protocol):
    """Bump arithmetic for one quoting convention.

    `bump_quote` mutates `holder.quote` and returns the applied amount
    (new quote minus old quote).
    """

    convention: QuotingConvention
    unit: float

    def bump_quote(self, holder: QuoteHolder, size: float, flags: BumpFlags) -> float:
        ...

    def displayed(self, amount: float) -> float:
        """Express an applied amount in the convention's display unit."""
        ...


@runtime_checkable
class Curve(Protocol):
    """Protocol for quote-driven curves.

    `df(t)` reads the fitted state; `refit()` rebuilds it from tenor quotes.
    """

    name: str

    @property
    def tenors(self) -> Sequence[QuoteHolder]:
        ...

    def df(self, t: float) -> float:
        """Discount factor (or survival probability) to time t."""
        ...

    def refit(self) -> None:
        ...


class Pricer(Protocol):
    """Capability set the scenario driver and Greeks façade require.

    Terms are named numeric inputs (e.g. "BondYield") readable and settable by
    name; measures are named numeric outputs (e.g. "Pv", "ProductPv").
    """

    name: str

    def get_term(self, name: str) -> float:
        ...

    def set_term(self, name: str, value: float) -> None:
        ...

    def reset(self) -> None:
        """Refresh any dependent cached state (e.g. refit owned curves)."""
        ...

    def measure(self, name: str) -> float:
        ...

    def curves(self) -> Sequence[Curve]:
        ...

    def curve(self, name: str) -> Curve:
        """Owned curve by name; raises KeyError if absent."""
        ...

    def pv(self) -> float:
        ...

    def product_pv(self) -> float:
        ...
