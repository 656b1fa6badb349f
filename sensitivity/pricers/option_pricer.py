"""Black-Scholes pricer for European options."""

from __future__ import annotations

import math

from sensitivity.config import SensitivityConfig
from sensitivity.pricers.base import BasePricer
from sensitivity.products.option import EuropeanOption


def norm_cdf(x: float) -> float:
    return 0.5 * (1.0 + math.erf(x / math.sqrt(2.0)))


def black_scholes_price(spot: float, strike: float, expiry: float, rate: float, vol: float, is_call: bool) -> float:
    """Undiscounted-dividend Black-Scholes price of one option."""
    if expiry <= 0 or vol <= 0:
        intrinsic = spot - strike * math.exp(-rate * max(expiry, 0.0))
        return max(intrinsic, 0.0) if is_call else max(-intrinsic, 0.0)
    sqrt_t = math.sqrt(expiry)
    d1 = (math.log(spot / strike) + (rate + 0.5 * vol * vol) * expiry) / (vol * sqrt_t)
    d2 = d1 - vol * sqrt_t
    df = math.exp(-rate * expiry)
    if is_call:
        return spot * norm_cdf(d1) - strike * df * norm_cdf(d2)
    return strike * df * norm_cdf(-d2) - spot * norm_cdf(-d1)


class OptionPricer(BasePricer):
    """Pricer for European options under Black-Scholes.

    Terms: Spot, Volatility, Rate, Strike.
    Measures: Pv, ProductPv, ModelPrice (price of one option).
    """

    def __init__(
        self,
        option: EuropeanOption,
        spot: float,
        volatility: float,
        rate: float,
        name: str | None = None,
        config: SensitivityConfig | None = None,
    ) -> None:
        super().__init__(name=name, config=config)
        self.option = option
        self.spot = spot
        self.volatility = volatility
        self.rate = rate
        self.register_term("Spot", lambda: self.spot, self._set_spot)
        self.register_term("Volatility", lambda: self.volatility, self._set_volatility)
        self.register_term("Rate", lambda: self.rate, self._set_rate)
        self.register_term("Strike", lambda: self.option.strike, self._set_strike)
        self.register_measure("ModelPrice", self.model_price)

    def _set_spot(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"spot must be positive, got {value}")
        self.spot = value

    def _set_volatility(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"volatility must be non-negative, got {value}")
        self.volatility = value

    def _set_rate(self, value: float) -> None:
        self.rate = value

    def _set_strike(self, value: float) -> None:
        self.option.strike = value

    @property
    def notional(self) -> float:
        return self.option.notional

    def model_price(self) -> float:
        o = self.option
        return black_scholes_price(self.spot, o.strike, o.expiry, self.rate, self.volatility, o.is_call)

    def pv(self) -> float:
        return self.option.notional * self.model_price()
