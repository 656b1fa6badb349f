"""Base class for risk measure implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sensitivity.interfaces import Pricer


class BaseRiskMeasure(ABC):
    """Base class for risk measure implementations."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""
        ...

    @abstractmethod
    def compute(self, pricer: Pricer) -> float:
        """Compute the risk measure value."""
        ...
