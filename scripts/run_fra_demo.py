#!/usr/bin/env python
"""
FRA Valuation Demo Script

This script walks through the life of a forward rate agreement:
1. Build a flat forwarding curve and a term SOFR index
2. Price the same FRA three ways (index fixing, par approximation, curve only)
3. Move the market and the evaluation date and reprice

Usage:
    python run_fra_demo.py [--rate RATE] [--strike STRIKE] [--verbose]
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

import pandas as pd

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fralib import (
    DayCount,
    FlatForward,
    ForwardRateAgreement,
    IborIndex,
    Position,
    RelinkableHandle,
    Settings,
)


def build_market(valuation_date: date, rate: float):
    """Build a relinkable forwarding curve and a 3M term SOFR index on it."""
    curve = FlatForward(rate, DayCount.ACT_365, reference_date=valuation_date)
    handle = RelinkableHandle(curve)
    index = IborIndex.term_sofr("3M", handle)
    return curve, handle, index


def build_fras(value_date: date, strike: float, notional: float, index, handle):
    """The same contract under each way of obtaining the forward rate."""
    maturity = index.maturity_date(value_date)
    return {
        "indexed": ForwardRateAgreement.from_index_tenor(
            value_date, Position.LONG, strike, notional, index
        ),
        "par": ForwardRateAgreement.from_index_tenor(
            value_date, Position.LONG, strike, notional, index, use_indexed_coupon=False
        ),
        "curve_only": ForwardRateAgreement.from_discount_curve(
            value_date, maturity, Position.LONG, strike, notional, handle, fixing_days=2
        ),
    }


def report(fras) -> pd.DataFrame:
    """Summary table, one column per FRA."""
    return pd.DataFrame({name: fra.summary() for name, fra in fras.items()})


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="FRA Valuation Demo")
    parser.add_argument("--rate", type=float, default=0.05, help="Flat curve rate (decimal)")
    parser.add_argument("--strike", type=float, default=0.05, help="FRA strike (decimal)")
    parser.add_argument("--notional", type=float, default=10_000_000, help="FRA notional")
    parser.add_argument("--verbose", action="store_true", help="Log recalculations")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    valuation_date = date(2024, 1, 15)
    value_date = date(2024, 3, 1)
    settings = Settings.instance()
    settings.evaluation_date = valuation_date

    print("=" * 60)
    print("FRA VALUATION DEMO")
    print(f"Valuation Date: {valuation_date}")
    print("=" * 60)

    curve, handle, index = build_market(valuation_date, args.rate)
    fras = build_fras(value_date, args.strike, args.notional, index, handle)

    print("\nInitial valuation:")
    print(report(fras).to_string())

    print("\nCurve +25bp:")
    curve.set_rate(args.rate + 0.0025)
    print(report(fras).to_string())

    print("\nRelink to a 3% curve:")
    handle.link_to(FlatForward(0.03, DayCount.ACT_365, reference_date=valuation_date))
    print(report(fras).to_string())

    print(f"\nPublish fixing and move to {value_date}:")
    fixing_date = index.fixing_date(value_date)
    index.add_fixing(fixing_date, 0.0535)
    settings.evaluation_date = value_date
    print(report(fras).to_string())

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
