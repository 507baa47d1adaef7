"""
Package efficiency analysis

Efficiency is expressed as RP received per 1,000 of price. Savings compare a
tier against the least efficient tier for a fixed RP amount.
"""

import math
import numpy as np
import pandas as pd
from typing import Sequence
from .domain import Denomination
from .exceptions import InvalidInput
from .valuation import format_money

SAVINGS_REFERENCE_UNITS = 10000

def tier_efficiency(tier: Denomination) -> float:
    """RP per 1,000 of price"""
    return tier.amount / (tier.price / 1000)

def tier_price_per_unit(tier: Denomination) -> float:
    return tier.price / tier.amount

def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)

def efficiency_table(tiers: Sequence[Denomination], base_tier_id: int = None,
                     reference_units: int = SAVINGS_REFERENCE_UNITS) -> pd.DataFrame:
    """
    Build the efficiency comparison table, most efficient tier first

    Args:
        tiers: Catalog tiers (custom prices already applied)
        base_tier_id: Tier flagged as the valuation base
        reference_units: RP amount the savings column is computed for

    Returns:
        DataFrame with one row per tier
    """
    if not tiers:
        raise InvalidInput("Catalog has no tiers")

    df = pd.DataFrame([{
        'id': tier.id,
        'amount': tier.amount,
        'price': tier.price,
        'efficiency': tier_efficiency(tier),
        'price_per_unit': tier_price_per_unit(tier),
    } for tier in tiers])

    # Stable sort keeps catalog order among equally efficient tiers
    df = df.sort_values('efficiency', ascending=False, kind='mergesort').reset_index(drop=True)

    max_eff = df['efficiency'].iloc[0]
    min_eff = df['efficiency'].iloc[-1]
    if max_eff > min_eff:
        df['efficiency_percent'] = (df['efficiency'] - min_eff) / (max_eff - min_eff) * 100
    else:
        df['efficiency_percent'] = 100.0

    worst_price_per_unit = df['price_per_unit'].iloc[-1]
    df['savings'] = [
        _round_half_up(reference_units * worst_price_per_unit - reference_units * ppu)
        for ppu in df['price_per_unit']
    ]

    df['is_best'] = np.arange(len(df)) == 0
    df['is_base'] = df['id'] == base_tier_id

    return df[['id', 'amount', 'price', 'efficiency', 'price_per_unit',
               'is_best', 'is_base', 'efficiency_percent', 'savings']]

def best_efficiency_tier(tiers: Sequence[Denomination]) -> Denomination:
    """Most RP per price; the earliest tier wins a tie"""
    if not tiers:
        raise InvalidInput("Catalog has no tiers")
    best = tiers[0]
    for tier in tiers[1:]:
        if tier_efficiency(tier) > tier_efficiency(best):
            best = tier
    return best

def efficiency_spread(tiers: Sequence[Denomination]) -> float:
    """Percentage by which the best tier out-performs the worst"""
    efficiencies = [tier_efficiency(t) for t in tiers]
    if not efficiencies:
        raise InvalidInput("Catalog has no tiers")
    return (max(efficiencies) / min(efficiencies) - 1) * 100

def max_savings(tiers: Sequence[Denomination], units: int = SAVINGS_REFERENCE_UNITS) -> int:
    """Cash difference between buying units at the worst and at the best per-RP price"""
    prices = [tier_price_per_unit(t) for t in tiers]
    if not prices:
        raise InvalidInput("Catalog has no tiers")
    return _round_half_up(units * max(prices) - units * min(prices))

def print_efficiency_summary(tiers: Sequence[Denomination], base_tier_id: int = None):
    """Print the efficiency table the way the comparison screen lists it"""
    df = efficiency_table(tiers, base_tier_id)

    print(f"{'RP':>8} {'Price':>9} {'RP/1K':>7} {'Price/RP':>9}  Notes")
    for row in df.itertuples(index=False):
        notes = []
        if row.is_best:
            notes.append("BEST")
        elif row.is_base:
            notes.append("BASE")
        if not row.is_best and row.savings > 0:
            notes.append(f"loses {row.savings:,} per {SAVINGS_REFERENCE_UNITS:,} RP")
        print(f"{row.amount:>8,} {format_money(row.price):>9} {row.efficiency:>7.1f} {row.price_per_unit:>9.2f}  {' '.join(notes)}")

    print(f"Best tier is {efficiency_spread(tiers):.1f}% more efficient than the worst")
    print(f"Up to {max_savings(tiers):,} difference when buying {SAVINGS_REFERENCE_UNITS:,} RP")
