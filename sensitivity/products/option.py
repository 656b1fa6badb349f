"""European option product (instrument data only; pricing via OptionPricer)."""

from dataclasses import dataclass


@dataclass
class EuropeanOption:
    """European call or put on a non-dividend-paying underlying."""

    strike: float
    expiry: float
    is_call: bool = True
    notional: float = 1.0
