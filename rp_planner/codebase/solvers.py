import numpy as np
import itertools
from collections import Counter
from numbers import Integral
from typing import Iterable, List, Sequence, Tuple
from .domain import Denomination, CostTable, PlanItem, PlanResult
from .exceptions import InvalidInput, InternalInvariant
from .logging_utils import get_logger

logger = get_logger(__name__)

def validate_denominations(denominations: Iterable[Denomination]) -> Tuple[Denomination, ...]:
    """Snapshot the caller's denominations and reject anything the solver can't use"""
    snapshot = tuple(denominations)
    if not snapshot:
        raise InvalidInput("At least one denomination is required")

    for denomination in snapshot:
        amount = denomination.amount
        if isinstance(amount, bool) or not isinstance(amount, Integral) or amount <= 0:
            raise InvalidInput(f"Denomination {denomination.id} must grant a positive integer amount, got {amount!r}")
        # `not >` also rejects NaN
        if not denomination.price > 0:
            raise InvalidInput(f"Denomination {denomination.id} must have a positive price, got {denomination.price!r}")

    return snapshot

def validate_target(target) -> int:
    """Targets are whole RP amounts; bools and floats are rejected"""
    if isinstance(target, bool) or not isinstance(target, Integral):
        raise InvalidInput(f"Target must be an integer amount, got {target!r}")
    return int(target)

def search_ceiling(denominations: Sequence[Denomination], target: int) -> int:
    """Largest amount worth exploring: target plus one copy of the biggest denomination"""
    return target + max(d.amount for d in denominations)

def build_cost_table(denominations: Iterable[Denomination], target: int) -> CostTable:
    """
    Fill the minimum price for every amount in 0..ceiling (unbounded copies per denomination)

    Args:
        denominations: Non-empty set of purchasable packages
        target: Positive unit amount the plan has to reach

    Returns:
        CostTable with prices and back-pointers for every amount up to the ceiling
    """
    snapshot = validate_denominations(denominations)
    target = validate_target(target)
    if target <= 0:
        raise InvalidInput(f"Cost table needs a positive target, got {target}")

    ceiling = search_ceiling(snapshot, target)

    min_price = np.full(ceiling + 1, np.inf)
    via = np.full(ceiling + 1, -1, dtype=np.int64)
    predecessor = np.full(ceiling + 1, -1, dtype=np.int64)
    min_price[0] = 0.0

    amounts = [int(d.amount) for d in snapshot]
    prices = [float(d.price) for d in snapshot]

    for i in range(ceiling):
        current = min_price[i]
        if current == np.inf:
            continue

        for k in range(len(snapshot)):
            j = i + amounts[k]
            if j > ceiling:
                continue

            # Strict comparison keeps the first path recorded among equal prices
            candidate = current + prices[k]
            if candidate < min_price[j]:
                min_price[j] = candidate
                via[j] = k
                predecessor[j] = i

    logger.debug("Built cost table for target %d up to ceiling %d (%d denominations)",
                 target, ceiling, len(snapshot))

    return CostTable(
        denominations=snapshot,
        target=target,
        ceiling=ceiling,
        min_price=min_price,
        via=via,
        predecessor=predecessor
    )

def select_best_amount(table: CostTable) -> Tuple[int, float]:
    """Cheapest reachable amount in [target, ceiling]; the smallest one wins among equal prices"""
    window = table.min_price[table.target:table.ceiling + 1]

    # argmin reports the first occurrence of the minimum
    offset = int(np.argmin(window))
    best_price = window[offset]

    if not np.isfinite(best_price):
        raise InternalInvariant(
            f"No reachable amount between {table.target} and {table.ceiling}"
        )

    return table.target + offset, float(best_price)

def reconstruct_plan(table: CostTable, best_amount: int) -> List[Denomination]:
    """Walk back-pointers from best_amount down to 0, collecting one denomination per step"""
    used = []
    current = best_amount

    while current > 0:
        k = int(table.via[current])
        if k < 0:
            raise InternalInvariant(f"Amount {current} was selected but has no predecessor")
        used.append(table.denominations[k])
        current = int(table.predecessor[current])

    return used

def aggregate_denominations(used: Sequence[Denomination],
                            catalog: Sequence[Denomination]) -> List[PlanItem]:
    """Group a flat multiset drawn from catalog into (denomination, count) pairs in catalog order"""
    counts = Counter(used)
    items = []

    for denomination in catalog:
        count = counts.pop(denomination, 0)
        if count:
            items.append(PlanItem(denomination=denomination, count=count))

    return items

def solve(denominations: Iterable[Denomination], target: int) -> PlanResult:
    """
    Cheapest multiset of denominations whose combined amount is at least target

    Ties on price are resolved in favour of the smallest total amount.
    Non-positive targets return the empty plan without searching.
    """
    target = validate_target(target)
    if target <= 0:
        return PlanResult.empty()

    table = build_cost_table(denominations, target)
    best_amount, best_price = select_best_amount(table)
    used = reconstruct_plan(table, best_amount)

    logger.debug("Best amount %d at price %s using %d purchases",
                 best_amount, best_price, len(used))

    return PlanResult(
        denominations_used=used,
        items=aggregate_denominations(used, table.denominations),
        total_amount=best_amount,
        total_price=best_price
    )

def solve_by_enumeration(denominations: Iterable[Denomination], target: int) -> PlanResult:
    """Solve by enumerating every count vector up to the ceiling (for small problems)"""
    target = validate_target(target)
    if target <= 0:
        return PlanResult.empty()

    snapshot = validate_denominations(denominations)
    ceiling = search_ceiling(snapshot, target)

    best_counts = None
    best_key = (float('inf'), float('inf'))

    count_ranges = [range(ceiling // d.amount + 1) for d in snapshot]
    for counts in itertools.product(*count_ranges):
        total_amount = sum(c * d.amount for c, d in zip(counts, snapshot))
        if total_amount < target or total_amount > ceiling:
            continue

        total_price = sum(c * d.price for c, d in zip(counts, snapshot))
        if (total_price, total_amount) < best_key:
            best_key = (total_price, total_amount)
            best_counts = counts

    if best_counts is None:
        raise InternalInvariant(f"Enumeration found no plan between {target} and {ceiling}")

    used = [d for c, d in zip(best_counts, snapshot) for _ in range(c)]
    return PlanResult(
        denominations_used=used,
        items=aggregate_denominations(used, snapshot),
        total_amount=int(best_key[1]),
        total_price=best_key[0]
    )
