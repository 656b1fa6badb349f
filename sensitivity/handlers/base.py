"""
Base quote handler: the bump arithmetic shared by every quoting convention.

Bump contract (`BaseQuoteHandler.bump_quote`):

- The effective direction is "up" XOR (size < 0); formulas use |size|.
- **Absolute**: quote += ±|size| * unit (unit converts e.g. bp to decimal).
- **Relative**: direction means algebraic increase/decrease of the *signed*
  quote, which makes an up bump followed by a down bump of the same size an
  exact inverse for either sign of the quote:

  ============  ==================  ==================
  direction     quote >= 0          quote < 0
  ============  ==================  ==================
  increase      q * (1 + m)         q * (1 - m)
  decrease      q / (1 + m)         q / (1 - m)
  ============  ==================  ==================

- The new quote is written back to the holder; the applied amount
  (new - old) is returned.
"""

from __future__ import annotations

import logging
import math
from typing import ClassVar

from sensitivity.errors import InvalidBumpMagnitude
from sensitivity.flags import BumpFlags, QuotingConvention
from sensitivity.interfaces import QuoteHolder

logger = logging.getLogger(__name__)

BASIS_POINT = 1e-4


def relative_bump(quote: float, magnitude: float, up: bool) -> float:
    """Return the quote after a sign-aware relative bump of `magnitude` (>= 0)."""
    if up:
        return quote * (1.0 + magnitude) if quote >= 0 else quote * (1.0 - magnitude)
    if quote >= 0:
        return quote / (1.0 + magnitude)
    if magnitude >= 1.0:
        raise InvalidBumpMagnitude(
            f"Relative down bump of {magnitude} on negative quote {quote} "
            "needs a magnitude below 1"
        )
    return quote / (1.0 - magnitude)


def adjust_for_zero_crossing(quote: float, amount: float, flags: BumpFlags, label: str = "") -> float:
    """Replace a forbidden zero-crossing bump by half the distance to zero."""
    crosses_down = quote > 0 and quote + amount < 0
    crosses_up = quote < 0 and quote + amount > 0
    if (crosses_down and flags & BumpFlags.FORBID_DOWN_CROSSING_ZERO) or (
        crosses_up and flags & BumpFlags.FORBID_UP_CROSSING_ZERO
    ):
        logger.debug(
            "Unable to bump '%s' with quote %s by %s, bump by %s instead",
            label, quote, amount, -quote / 2.0,
        )
        return -quote / 2.0
    return amount


class BaseQuoteHandler:
    """Base class for quote handlers.

    Subclasses set `convention` and `unit` and may tighten `effective_flags`;
    they are frozen dataclasses so one handler can safely be shared.
    """

    convention: ClassVar[QuotingConvention] = QuotingConvention.NONE
    unit: ClassVar[float] = 1.0

    def effective_flags(self, flags: BumpFlags) -> BumpFlags:
        """Flags actually applied; subclasses may add convention-specific guards."""
        return flags

    def bumped_value(self, quote: float, size: float, flags: BumpFlags = BumpFlags.NONE, label: str = "") -> float:
        """Compute the bumped quote without mutating anything."""
        if not math.isfinite(size):
            raise InvalidBumpMagnitude(f"Bump size must be finite, got {size}")
        if size == 0.0:
            return quote
        flags = self.effective_flags(flags)
        up = flags.up != (size < 0)
        magnitude = abs(size)
        if flags.relative:
            new = relative_bump(quote, magnitude, up)
        else:
            step = magnitude * self.unit
            new = quote + (step if up else -step)
        amount = adjust_for_zero_crossing(quote, new - quote, flags, label)
        return new if amount == new - quote else quote + amount

    def bump_quote(self, holder: QuoteHolder, size: float, flags: BumpFlags = BumpFlags.NONE) -> float:
        """Bump `holder.quote` in place and return the applied amount (new - old)."""
        old = holder.quote
        new = self.bumped_value(old, size, flags, label=holder.name)
        if new == old:
            return 0.0
        holder.quote = new
        return new - old

    def displayed(self, amount: float) -> float:
        """Applied amount in display units (bp for bp-quoted conventions)."""
        return amount / self.unit
