"""Pricer implementations exposing named terms and measures."""

from sensitivity.pricers.base import BasePricer, TermAccessor
from sensitivity.pricers.bond_pricer import BondPricer
from sensitivity.pricers.cds_pricer import CDSPricer
from sensitivity.pricers.option_pricer import OptionPricer
from sensitivity.pricers.swap_pricer import SwapPricer

__all__ = [
    "BasePricer",
    "BondPricer",
    "CDSPricer",
    "OptionPricer",
    "SwapPricer",
    "TermAccessor",
]
