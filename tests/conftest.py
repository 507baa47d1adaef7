import pytest

from rp_planner.codebase.domain import Denomination


@pytest.fixture
def skin_tiers() -> list[Denomination]:
    return [
        Denomination(id=1, amount=480, price=4900),
        Denomination(id=2, amount=980, price=9900),
        Denomination(id=3, amount=1425, price=14000),
    ]


@pytest.fixture
def single_tier() -> list[Denomination]:
    return [Denomination(id=7, amount=100, price=10)]
