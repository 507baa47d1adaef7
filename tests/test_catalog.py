import pytest

from rp_planner.codebase.catalog import (
    DEFAULT_RP_TIERS,
    apply_custom_prices,
    current_tiers,
    default_settings,
    find_tier,
    is_price_modified,
    reset_settings,
    resolve_base_tier,
    resolve_preset,
    with_base_tier,
    with_custom_price,
)
from rp_planner.codebase.domain import CatalogSettings
from rp_planner.codebase.exceptions import InvalidInput


def test_default_settings_use_largest_tier_as_base() -> None:
    settings = default_settings()

    base = resolve_base_tier(current_tiers(settings), settings)

    assert base.amount == 11800
    assert base.price == 99900


def test_unknown_base_tier_falls_back_to_last() -> None:
    settings = with_base_tier(default_settings(), 99)

    assert resolve_base_tier(DEFAULT_RP_TIERS, settings).id == 6


def test_custom_price_overrides_only_its_tier() -> None:
    settings = with_custom_price(default_settings(), 3, 15000)

    tiers = apply_custom_prices(DEFAULT_RP_TIERS, settings)

    assert find_tier(tiers, 3).price == 15000
    assert find_tier(tiers, 2).price == 9900
    assert find_tier(DEFAULT_RP_TIERS, 3).price == 14000
    assert is_price_modified(find_tier(tiers, 3))
    assert not is_price_modified(find_tier(tiers, 2))


def test_custom_price_update_does_not_mutate_previous_settings() -> None:
    first = with_custom_price(default_settings(), 1, 5000)
    second = with_custom_price(first, 2, 10000)

    assert first.custom_prices == {1: 5000}
    assert second.custom_prices == {1: 5000, 2: 10000}


@pytest.mark.parametrize("price", [0, -100, float("nan")])
def test_non_positive_custom_price_is_rejected(price) -> None:
    with pytest.raises(InvalidInput):
        with_custom_price(default_settings(), 1, price)


def test_reset_drops_overrides() -> None:
    assert reset_settings() == CatalogSettings()


def test_presets_are_case_insensitive() -> None:
    assert resolve_preset("Legendary") == 1820
    assert resolve_preset(" ultimate ") == 3250


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(InvalidInput):
        resolve_preset("mythic")


def test_find_tier_rejects_unknown_id() -> None:
    with pytest.raises(InvalidInput):
        find_tier(DEFAULT_RP_TIERS, 42)
