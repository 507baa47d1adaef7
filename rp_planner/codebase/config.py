"""Settings file loading for the command line."""

from pathlib import Path
from typing import Any, Dict
import yaml
from .domain import CatalogSettings
from .catalog import default_settings, with_base_tier, with_custom_price
from .exceptions import InvalidInput
from .logging_utils import get_logger

logger = get_logger(__name__)

_ALLOWED_KEYS = {'base_tier_id', 'custom_prices'}

def settings_from_mapping(data: Dict[str, Any]) -> CatalogSettings:
    """
    Build CatalogSettings from a parsed mapping

    Example:
        base_tier_id: 4
        custom_prices:
          1: 5000
          6: 98000
    """
    if data is None:
        return default_settings()
    if not isinstance(data, dict):
        raise InvalidInput(f"Settings must be a mapping, got {type(data).__name__}")

    unknown = set(data) - _ALLOWED_KEYS
    if unknown:
        raise InvalidInput(f"Unknown settings keys: {', '.join(sorted(map(str, unknown)))}")

    settings = default_settings()

    if 'base_tier_id' in data:
        try:
            settings = with_base_tier(settings, int(data['base_tier_id']))
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"base_tier_id must be an integer: {e}") from e

    custom_prices = data.get('custom_prices') or {}
    if not isinstance(custom_prices, dict):
        raise InvalidInput("custom_prices must map tier ids to prices")

    for tier_id, price in custom_prices.items():
        try:
            tier_id, price = int(tier_id), float(price)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Invalid custom price for tier {tier_id!r}: {e}") from e
        settings = with_custom_price(settings, tier_id, price)

    return settings

def load_settings(path=None) -> CatalogSettings:
    """Load settings from a YAML file; a missing path yields the defaults"""
    if path is None:
        return default_settings()

    path = Path(path)
    if not path.exists():
        logger.info("Settings file %s not found, using defaults", path)
        return default_settings()

    with path.open('r', encoding='utf-8') as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise InvalidInput(f"Could not parse settings file {path}: {e}") from e

    return settings_from_mapping(data)

def dump_settings(settings: CatalogSettings, path) -> Path:
    path = Path(path)
    payload = {
        'base_tier_id': settings.base_tier_id,
        'custom_prices': {int(k): v for k, v in settings.custom_prices.items()},
    }
    with path.open('w', encoding='utf-8') as fh:
        yaml.safe_dump(payload, fh, sort_keys=True)
    return path
