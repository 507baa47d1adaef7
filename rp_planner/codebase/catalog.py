from dataclasses import replace
from typing import Dict, List, Sequence
from .domain import Denomination, CatalogSettings
from .exceptions import InvalidInput

# Store packages as sold (RP granted, price in KRW)
DEFAULT_RP_TIERS: List[Denomination] = [
    Denomination(id=1, amount=480, price=4900),
    Denomination(id=2, amount=980, price=9900),
    Denomination(id=3, amount=1425, price=14000),
    Denomination(id=4, amount=3700, price=35000),
    Denomination(id=5, amount=7200, price=65000),
    Denomination(id=6, amount=11800, price=99900),
]

DEFAULT_BASE_TIER_ID = 6

# Common skin prices in RP, used as plan targets
SKIN_PRESETS: Dict[str, int] = {
    'legendary': 1820,
    'epic': 1350,
    'super': 975,
    'legacy': 520,
    'champion': 975,
    'ultimate': 3250,
}

QUICK_VALUE_PRESETS = [1350, 1820, 975, 3250]

def default_settings() -> CatalogSettings:
    return CatalogSettings(base_tier_id=DEFAULT_BASE_TIER_ID, custom_prices={})

def reset_settings() -> CatalogSettings:
    """Drop every override and go back to the default base tier"""
    return default_settings()

def apply_custom_prices(tiers: Sequence[Denomination], settings: CatalogSettings) -> List[Denomination]:
    """Return the tiers with user price overrides applied (tiers themselves are untouched)"""
    priced = []
    for tier in tiers:
        override = settings.price_override(tier.id)
        priced.append(tier if override is None else replace(tier, price=override))
    return priced

def resolve_base_tier(tiers: Sequence[Denomination], settings: CatalogSettings) -> Denomination:
    """Tier used for cash valuation; unknown ids fall back to the last tier"""
    if not tiers:
        raise InvalidInput("Catalog has no tiers")
    for tier in tiers:
        if tier.id == settings.base_tier_id:
            return tier
    return tiers[-1]

def find_tier(tiers: Sequence[Denomination], tier_id: int) -> Denomination:
    for tier in tiers:
        if tier.id == tier_id:
            return tier
    raise InvalidInput(f"Unknown tier id {tier_id}")

def with_base_tier(settings: CatalogSettings, tier_id: int) -> CatalogSettings:
    return replace(settings, base_tier_id=tier_id)

def with_custom_price(settings: CatalogSettings, tier_id: int, price: float) -> CatalogSettings:
    """Record a price override; the stored mapping is copied, never mutated"""
    if not price > 0:
        raise InvalidInput(f"Price for tier {tier_id} must be positive, got {price!r}")
    custom_prices = dict(settings.custom_prices)
    custom_prices[tier_id] = price
    return replace(settings, custom_prices=custom_prices)

def is_price_modified(tier: Denomination, defaults: Sequence[Denomination] = DEFAULT_RP_TIERS) -> bool:
    """True when the tier's price differs from the catalog default"""
    for default in defaults:
        if default.id == tier.id:
            return tier.price != default.price
    return False

def current_tiers(settings: CatalogSettings) -> List[Denomination]:
    """Default catalog with the settings' overrides applied"""
    return apply_custom_prices(DEFAULT_RP_TIERS, settings)

def resolve_preset(name: str) -> int:
    key = name.strip().lower()
    if key not in SKIN_PRESETS:
        raise InvalidInput(f"Unknown preset '{name}' (choose from {', '.join(SKIN_PRESETS)})")
    return SKIN_PRESETS[key]
