from dataclasses import dataclass, field
from typing import List, Dict, Optional
import numpy as np

@dataclass(frozen=True)
class Denomination:
    id: int  # Stable catalog identity
    amount: int  # Currency units granted per purchase
    price: float  # Cost of one purchase

@dataclass
class CostTable:
    """Cheapest known price for every amount in 0..ceiling, with back-pointers"""
    denominations: tuple  # Snapshot the table was built from
    target: int
    ceiling: int
    min_price: np.ndarray  # amount -> price, +inf when unreachable
    via: np.ndarray  # amount -> index into denominations, -1 when none
    predecessor: np.ndarray  # amount -> previous amount, -1 when none

    def is_reachable(self, amount: int) -> bool:
        return bool(np.isfinite(self.min_price[amount]))

@dataclass(frozen=True)
class PlanItem:
    denomination: Denomination
    count: int  # >= 1

    @property
    def subtotal(self) -> float:
        return self.denomination.price * self.count

@dataclass
class PlanResult:
    denominations_used: List[Denomination]  # flat multiset, in reconstruction order
    items: List[PlanItem]  # grouped for display
    total_amount: int
    total_price: float

    @classmethod
    def empty(cls) -> "PlanResult":
        return cls(denominations_used=[], items=[], total_amount=0, total_price=0)

    @property
    def is_empty(self) -> bool:
        return not self.denominations_used

    def overshoot(self, target: int) -> int:
        """Units left over after covering target (0 for the empty plan)"""
        if self.is_empty:
            return 0
        return self.total_amount - target

    def count_for(self, denomination_id: int) -> int:
        for item in self.items:
            if item.denomination.id == denomination_id:
                return item.count
        return 0

@dataclass(frozen=True)
class CatalogSettings:
    """User choices layered on top of the default catalog"""
    base_tier_id: int = 6
    custom_prices: Dict[int, float] = field(default_factory=dict)  # tier id -> price override

    def price_override(self, tier_id: int) -> Optional[float]:
        return self.custom_prices.get(tier_id)
