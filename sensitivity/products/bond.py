"""Fixed-rate bond product (instrument data only; pricing via BondPricer)."""

import math
from dataclasses import dataclass


@dataclass
class FixedRateBond:
    """
    Fixed-coupon bullet bond.
    Coupons of `coupon / frequency` per unit notional are paid every
    `1 / frequency` years up to `maturity`, with the notional repaid at maturity.
    """

    notional: float
    coupon: float
    maturity: float
    frequency: int = 2

    def pay_times(self) -> list[float]:
        """Coupon dates as year fractions, the last one equal to maturity."""
        if self.frequency <= 0:
            raise ValueError("frequency must be positive")
        step = 1.0 / self.frequency
        # Roll back from maturity; a short first period absorbs any stub.
        n = math.ceil(self.maturity * self.frequency - 1e-9)
        return [self.maturity - k * step for k in reversed(range(n))]
