"""Product definitions (data only)."""

from sensitivity.products.bond import FixedRateBond
from sensitivity.products.cds import CDS
from sensitivity.products.option import EuropeanOption
from sensitivity.products.swap import FixedFloatSwap

__all__ = ["CDS", "EuropeanOption", "FixedFloatSwap", "FixedRateBond"]
