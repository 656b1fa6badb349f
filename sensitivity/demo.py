"""Demo: sample curves, price a bond, swap, CDS and option, then run scenarios and Greeks."""

from sensitivity.calc import calc_scenario
from sensitivity.config import configure_logging
from sensitivity.curves import DiscountCurve, SurvivalCurve
from sensitivity.pricers import BondPricer, CDSPricer, OptionPricer, SwapPricer
from sensitivity.products import CDS, EuropeanOption, FixedFloatSwap, FixedRateBond
from sensitivity.risk import cs01_parallel, delta, gamma, pv01_parallel, vega
from sensitivity.scenarios import (
    Scenario,
    ScenarioShiftCurves,
    ScenarioShiftPricerTerms,
    ScenarioShiftType,
    ScenarioValueShift,
)


def main() -> None:
    configure_logging()

    pillars = [0.5, 1.0, 2.0, 5.0, 10.0]
    usd_curve = DiscountCurve.from_yields("USD_DISC", pillars, [0.045, 0.043, 0.040, 0.038, 0.037])
    corp_curve = SurvivalCurve.from_spreads("CORP", pillars, [0.006, 0.007, 0.008, 0.010, 0.011], recovery=0.4)

    # 1) 5Y 1.5% semiannual bond at 1.17% yield
    bond = BondPricer(FixedRateBond(notional=1_000_000, coupon=0.015, maturity=5.0), bond_yield=0.0117, name="BOND_5Y")

    # 2) Swap 2Y semiannual notional 10,000,000 fixed 4%
    swap = SwapPricer(
        FixedFloatSwap(notional=10_000_000, fixed_rate=0.04, pay_times=[0.5, 1.0, 1.5, 2.0]),
        usd_curve,
        name="SWAP_2Y",
    )

    # 3) CDS 5Y 10,000,000 notional 100bp premium
    cds = CDSPricer(
        CDS(notional=10_000_000, premium=0.01, pay_times=[0.5 * i for i in range(1, 11)], recovery=0.4),
        usd_curve,
        corp_curve,
        name="CDS_5Y",
    )

    # 4) 1Y ATM call on 1,000 units
    option = OptionPricer(
        EuropeanOption(strike=100.0, expiry=1.0, notional=1_000),
        spot=100.0,
        volatility=0.2,
        rate=0.03,
        name="CALL_1Y",
    )

    print("=== Sensitivity Demo ===\n")
    print("1) Fixed-rate bond (5Y, 1M, 1.5% coupon, 1.17% yield)")
    print(f"   PV       = {bond.pv():,.2f}")
    print(f"   Duration = {bond.measure('Duration'):,.4f}")
    print(f"   dPV/dy   = {delta(bond, 'BondYield', bump_size=1e-4):,.2f}\n")
    print("2) Fixed-float swap (2Y semiannual, 10M notional, 4% fixed)")
    print(f"   PV       = {swap.pv():,.2f}")
    print(f"   ParRate  = {swap.measure('ParRate'):.6f}")
    print(f"   PV01     = {pv01_parallel(swap, 'USD_DISC', bump_bp=1.0):,.2f}\n")
    print("3) CDS (5Y, 10M notional, 100bp premium, protection buyer)")
    print(f"   PV       = {cds.pv():,.2f}")
    print(f"   BE prem  = {cds.measure('BreakEvenPremium'):.6f}")
    print(f"   CS01     = {cs01_parallel(cds, 'CORP', bump_bp=1.0):,.2f}\n")
    print("4) European call (1Y, ATM, 20% vol)")
    print(f"   PV       = {option.pv():,.2f}")
    print(f"   Delta    = {delta(option, 'Spot', bump_size=0.01):,.4f}")
    print(f"   Gamma    = {gamma(option, 'Spot', bump_size=0.5):,.4f}")
    print(f"   Vega     = {vega(option):,.4f}\n")

    bond_table = calc_scenario(
        [bond],
        ["Pv", "ProductPv"],
        [Scenario(ScenarioShiftPricerTerms("BondYield", ScenarioValueShift.relative(0.01)), name="Yield +1%")],
    )
    rates_table = calc_scenario(
        [swap, cds],
        ["Pv", "ProductPv"],
        [Scenario(ScenarioShiftCurves(["USD_DISC"], 10.0, ScenarioShiftType.ABSOLUTE), name="USD +10bp")],
    )
    credit_table = calc_scenario(
        [cds],
        ["Pv", "BreakEvenPremium"],
        [Scenario(ScenarioShiftCurves(["CORP"], 0.1, ScenarioShiftType.RELATIVE), name="Spreads x1.1")],
    )
    print("5) Scenario table")
    print(bond_table.to_string(index=False))
    print(rates_table.to_string(index=False))
    print(credit_table.to_string(index=False))
    print("\nDone.")


if __name__ == "__main__":
    main()
