"""Pricer for fixed-rate bonds quoted by yield."""

from __future__ import annotations

import math

from sensitivity.config import SensitivityConfig
from sensitivity.pricers.base import BasePricer
from sensitivity.products.bond import FixedRateBond


class BondPricer(BasePricer):
    """Yield-to-maturity pricer for fixed-rate bullet bonds (continuous compounding).

    Terms: BondYield, Coupon, Notional.
    Measures: Pv, ProductPv, Accrued, CleanPrice, Duration.
    """

    def __init__(
        self,
        bond: FixedRateBond,
        bond_yield: float,
        name: str | None = None,
        config: SensitivityConfig | None = None,
    ) -> None:
        super().__init__(name=name, config=config)
        self.bond = bond
        self.bond_yield = bond_yield
        self.register_term("BondYield", lambda: self.bond_yield, self._set_yield)
        self.register_term("Coupon", lambda: self.bond.coupon, self._set_coupon)
        self.register_term("Notional", lambda: self.bond.notional, self._set_notional)
        self.register_measure("Accrued", self.accrued)
        self.register_measure("CleanPrice", self.clean_price)
        self.register_measure("Duration", self.duration)

    def _set_yield(self, value: float) -> None:
        self.bond_yield = value

    def _set_coupon(self, value: float) -> None:
        self.bond.coupon = value

    def _set_notional(self, value: float) -> None:
        self.bond.notional = value

    @property
    def notional(self) -> float:
        return self.bond.notional

    def _cashflows(self) -> list[tuple[float, float]]:
        """(time, amount) pairs including the final redemption."""
        b = self.bond
        cpn = b.notional * b.coupon / b.frequency
        flows = [(t, cpn) for t in b.pay_times()]
        t_last, amt_last = flows[-1]
        flows[-1] = (t_last, amt_last + b.notional)
        return flows

    def pv(self) -> float:
        """Dirty PV = sum_i CF_i * exp(-y * t_i)."""
        y = self.bond_yield
        return sum(cf * math.exp(-y * t) for t, cf in self._cashflows())

    def accrued(self) -> float:
        """Coupon accrued since the start of the current period."""
        b = self.bond
        step = 1.0 / b.frequency
        first = b.pay_times()[0]
        elapsed = max(step - first, 0.0)
        return b.notional * b.coupon * elapsed

    def clean_price(self) -> float:
        """Clean price per unit notional."""
        return (self.pv() - self.accrued()) / self.notional

    def duration(self) -> float:
        """Macaulay duration in years."""
        y = self.bond_yield
        pv = self.pv()
        if pv == 0:
            return 0.0
        return sum(t * cf * math.exp(-y * t) for t, cf in self._cashflows()) / pv
