"""Fixed-float interest rate swap (instrument data only; pricing via SwapPricer)."""

from dataclasses import dataclass


@dataclass
class FixedFloatSwap:
    """
    Fixed-float swap: receive float, pay fixed (single curve).
    Fixed CF_i = notional * fixed_rate * accrual_i; float leg projected from the same curve.
    """

    notional: float
    fixed_rate: float
    pay_times: list[float]
    t0: float = 0.0
