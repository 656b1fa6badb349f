"""Pricer for fixed-float interest rate swaps (single curve)."""

from __future__ import annotations

from collections.abc import Sequence

from sensitivity.config import SensitivityConfig
from sensitivity.curves import DiscountCurve, QuotedCurve
from sensitivity.pricers.base import BasePricer
from sensitivity.products.swap import FixedFloatSwap


class SwapPricer(BasePricer):
    """Pricer for fixed-float interest rate swaps (single curve).

    Terms: FixedRate, Notional.
    Measures: Pv, ProductPv, ParRate.
    """

    def __init__(
        self,
        swap: FixedFloatSwap,
        discount_curve: DiscountCurve,
        name: str | None = None,
        config: SensitivityConfig | None = None,
    ) -> None:
        super().__init__(name=name, config=config)
        self.swap = swap
        self.discount_curve = discount_curve
        self.register_term("FixedRate", lambda: self.swap.fixed_rate, self._set_fixed_rate)
        self.register_term("Notional", lambda: self.swap.notional, self._set_notional)
        self.register_measure("ParRate", self.par_rate)

    def _set_fixed_rate(self, value: float) -> None:
        self.swap.fixed_rate = value

    def _set_notional(self, value: float) -> None:
        self.swap.notional = value

    @property
    def notional(self) -> float:
        return self.swap.notional

    def curves(self) -> Sequence[QuotedCurve]:
        return (self.discount_curve,)

    def pv(self) -> float:
        """Receive float, pay fixed: PV = PV(float leg) - PV(fixed leg)."""
        return self._pv_float_leg() - self.swap.fixed_rate * self._annuity()

    def _annuity(self) -> float:
        """sum_i notional * accrual_i * DF(t_i)."""
        c = self.discount_curve
        pv = 0.0
        prev = self.swap.t0
        for t in self.swap.pay_times:
            pv += self.swap.notional * (t - prev) * c.df(t)
            prev = t
        return pv

    def _pv_float_leg(self) -> float:
        """
        Float leg PV (single-curve).
        Forward rate from discount factors: f = (DF(prev)/DF(t) - 1) / accrual.
        """
        c = self.discount_curve
        pv = 0.0
        prev = self.swap.t0
        df_prev = c.df(prev)
        for t in self.swap.pay_times:
            accrual = t - prev
            df_t = c.df(t)
            fwd = (df_prev / df_t - 1.0) / accrual if accrual > 0 else 0.0
            pv += self.swap.notional * fwd * accrual * df_t
            prev = t
            df_prev = df_t
        return pv

    def par_rate(self) -> float:
        """Fixed rate that sets PV to zero."""
        annuity = self._annuity()
        if annuity <= 0:
            return 0.0
        return self._pv_float_leg() / annuity
