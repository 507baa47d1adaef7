import math
from .domain import Denomination
from .exceptions import InvalidInput

def price_per_unit(base_tier: Denomination) -> float:
    """Cash cost of a single RP at the base tier's rate"""
    return base_tier.price / base_tier.amount

def cash_value(units: float, base_tier: Denomination) -> int:
    """Cash value of units, rounded to the nearest whole currency unit (halves round up)"""
    if math.isnan(units):
        return 0
    if math.isinf(units):
        raise InvalidInput(f"Cannot value an infinite RP amount ({units})")
    return math.floor(units * price_per_unit(base_tier) + 0.5)

def parse_units(text: str) -> float:
    """Leniently read a unit amount typed by a user; anything unparsable counts as 0"""
    try:
        value = float(text)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value

def format_money(value: float) -> str:
    """Thousands-separated, without decimals for whole amounts"""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"

def describe_rate(base_tier: Denomination) -> str:
    return f"1 RP = {price_per_unit(base_tier):.2f} (base: {base_tier.amount:,} RP = {format_money(base_tier.price)})"
