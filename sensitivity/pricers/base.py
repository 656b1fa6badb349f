"""
Base pricer: explicit named terms and measures.

Terms (e.g. "BondYield") and measures (e.g. "Pv") are registered at
construction as typed accessor pairs, so the scenario driver and the Greeks
façade can read/write inputs by name without reflection. A name that was not
registered raises `UnknownTerm` / `UnknownMeasure`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import NamedTuple

from sensitivity.config import SensitivityConfig
from sensitivity.curves import QuotedCurve
from sensitivity.errors import UnknownMeasure, UnknownTerm


class TermAccessor(NamedTuple):
    """Getter/setter pair for one named pricer term."""

    getter: Callable[[], float]
    setter: Callable[[float], None]


class BasePricer(ABC):
    """Abstract base class for pricers driven by the bump engine.

    Subclasses implement pv(), register their terms/measures in __init__ and
    override curves() when they own quote-driven curves.
    """

    def __init__(self, name: str | None = None, config: SensitivityConfig | None = None) -> None:
        self.name = name or type(self).__name__
        self.config = config or SensitivityConfig()
        self._terms: dict[str, TermAccessor] = {}
        self._measures: dict[str, Callable[[], float]] = {}
        self.register_measure("Pv", self.pv)
        self.register_measure("ProductPv", self.product_pv)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    # -- terms -------------------------------------------------------------

    def register_term(self, name: str, getter: Callable[[], float], setter: Callable[[float], None]) -> None:
        self._terms[name] = TermAccessor(getter, setter)

    @property
    def term_names(self) -> list[str]:
        return list(self._terms)

    def has_term(self, name: str) -> bool:
        return name in self._terms

    def _accessor(self, name: str) -> TermAccessor:
        try:
            return self._terms[name]
        except KeyError:
            raise UnknownTerm(name, self.name, self.term_names) from None

    def get_term(self, name: str) -> float:
        return self._accessor(name).getter()

    def set_term(self, name: str, value: float) -> None:
        self._accessor(name).setter(value)

    # -- measures ----------------------------------------------------------

    def register_measure(self, name: str, fn: Callable[[], float]) -> None:
        self._measures[name] = fn

    @property
    def measure_names(self) -> list[str]:
        return list(self._measures)

    def measure(self, name: str) -> float:
        try:
            fn = self._measures[name]
        except KeyError:
            raise UnknownMeasure(name, self.name, self.measure_names) from None
        return fn()

    # -- state -------------------------------------------------------------

    def curves(self) -> Sequence[QuotedCurve]:
        """Quote-driven curves this pricer reads (empty by default)."""
        return ()

    def curve(self, name: str) -> QuotedCurve:
        """Return an owned curve by name. Raises KeyError if not found."""
        for c in self.curves():
            if c.name == name:
                return c
        raise KeyError(
            f"Curve '{name}' not found on pricer '{self.name}'. "
            f"Available curves: {[c.name for c in self.curves()]}"
        )

    def reset(self) -> None:
        """Refit owned curves so they reflect current tenor quotes."""
        for c in self.curves():
            c.refit()

    @property
    @abstractmethod
    def notional(self) -> float:
        ...

    @abstractmethod
    def pv(self) -> float:
        """Present value in currency units."""
        ...

    def product_pv(self) -> float:
        """Present value per unit notional."""
        return self.pv() / self.notional
