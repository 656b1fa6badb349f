"""Pricer for single-name CDS on quote-driven discount and survival curves."""

from __future__ import annotations

from collections.abc import Sequence

from sensitivity.config import SensitivityConfig
from sensitivity.curves import DiscountCurve, QuotedCurve, SurvivalCurve
from sensitivity.pricers.base import BasePricer
from sensitivity.products.cds import CDS


class CDSPricer(BasePricer):
    """Pricer for single-name CDS (premium + protection legs, discrete default).

    Terms: Premium, Recovery, Notional.
    Measures: Pv, ProductPv, ProtectionPv, FeePv, BreakEvenPremium.
    Premium accrued at default is included in the fee leg when
    `config.include_accrued_on_default` is set.
    """

    def __init__(
        self,
        cds: CDS,
        discount_curve: DiscountCurve,
        survival_curve: SurvivalCurve,
        name: str | None = None,
        config: SensitivityConfig | None = None,
    ) -> None:
        super().__init__(name=name, config=config)
        self.cds = cds
        self.discount_curve = discount_curve
        self.survival_curve = survival_curve
        self.register_term("Premium", lambda: self.cds.premium, self._set_premium)
        self.register_term("Recovery", lambda: self.cds.recovery, self._set_recovery)
        self.register_term("Notional", lambda: self.cds.notional, self._set_notional)
        self.register_measure("ProtectionPv", self.protection_pv)
        self.register_measure("FeePv", self.fee_pv)
        self.register_measure("BreakEvenPremium", self.break_even_premium)

    def _set_premium(self, value: float) -> None:
        self.cds.premium = value

    def _set_recovery(self, value: float) -> None:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"recovery must be in [0, 1], got {value}")
        self.cds.recovery = value

    def _set_notional(self, value: float) -> None:
        self.cds.notional = value

    @property
    def notional(self) -> float:
        return self.cds.notional

    def curves(self) -> Sequence[QuotedCurve]:
        return (self.discount_curve, self.survival_curve)

    def pv(self) -> float:
        """
        CDS NPV for protection buyer: pv_protection - pv_premium.
        Flip sign if protection_buyer=False.
        """
        npv = self.protection_pv() - self.fee_pv()
        return npv if self.cds.protection_buyer else -npv

    def _risky_annuity(self) -> float:
        """Fee leg PV per unit premium."""
        cds = self.cds
        disc, surv = self.discount_curve, self.survival_curve
        include_accrued = self.config.include_accrued_on_default
        annuity = 0.0
        prev = cds.t0
        s_prev = surv.df(prev)
        for t in cds.pay_times:
            accrual = t - prev
            s_t = surv.df(t)
            annuity += cds.notional * accrual * disc.df(t) * s_t
            if include_accrued:
                # Half a period accrued on average when default happens mid-period.
                annuity += cds.notional * 0.5 * accrual * disc.df((prev + t) / 2.0) * (s_prev - s_t)
            prev = t
            s_prev = s_t
        return annuity

    def fee_pv(self) -> float:
        """Premium leg: premium * risky annuity."""
        return self.cds.premium * self._risky_annuity()

    def protection_pv(self) -> float:
        """Protection leg (discrete): sum_i N(1-R) * DF(t_mid) * (S(t_{i-1}) - S(t_i))."""
        cds = self.cds
        disc, surv = self.discount_curve, self.survival_curve
        pv = 0.0
        prev = cds.t0
        s_prev = surv.df(prev)
        for t in cds.pay_times:
            s_t = surv.df(t)
            pv += cds.notional * (1.0 - cds.recovery) * disc.df((prev + t) / 2.0) * (s_prev - s_t)
            prev = t
            s_prev = s_t
        return pv

    def break_even_premium(self) -> float:
        """Premium s* such that NPV=0: s* = pv_protection / risky_annuity."""
        annuity = self._risky_annuity()
        if annuity <= 0:
            return 0.0
        return self.protection_pv() / annuity
