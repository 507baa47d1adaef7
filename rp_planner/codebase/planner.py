from typing import Dict, List, Sequence, Tuple
from .domain import CatalogSettings, Denomination, PlanResult
from .catalog import current_tiers, default_settings
from .solvers import solve
from .converter import save_to_docplex, save_to_excel
from .valuation import format_money

def generate_plan(target: int, settings: CatalogSettings = None,
                  excel_path=None, lp_path=None) -> PlanResult:
    """Plan the cheapest purchase of target RP from the (price-adjusted) default catalog"""
    settings = settings or default_settings()
    tiers = current_tiers(settings)

    plan = solve(tiers, target)

    # Save to files if requested
    if excel_path is not None:
        save_to_excel(plan, target, excel_path)

    if lp_path is not None and target > 0:
        save_to_docplex(tiers, target, lp_path)

    return plan

def evaluate_plan(plan: PlanResult, denominations: Sequence[Denomination],
                  target: int) -> Tuple[float, bool, Dict]:
    """
    Check a proposed plan against the purchase rules

    Returns:
        - total_price: Price recomputed from the plan's items
        - is_feasible: Whether the plan is internally consistent and covers the target
        - diagnostics: Dict with detailed checks
    """
    known_ids = {d.id for d in denominations}

    item_price = sum(item.denomination.price * item.count for item in plan.items)
    item_amount = sum(item.denomination.amount * item.count for item in plan.items)
    flat_price = sum(d.price for d in plan.denominations_used)
    flat_amount = sum(d.amount for d in plan.denominations_used)

    diagnostics = {'constraints': {}}

    # 1. Target coverage (the empty plan is only valid for non-positive targets)
    covers_target = plan.total_amount >= target if target > 0 else plan.is_empty
    diagnostics['constraints']['target'] = {
        'satisfied': covers_target,
        'actual': plan.total_amount,
        'required': max(target, 0)
    }

    # 2. Totals agree with both the flat multiset and the grouped items
    totals_ok = (
        item_amount == flat_amount == plan.total_amount
        and abs(item_price - plan.total_price) < 1e-6
        and abs(flat_price - plan.total_price) < 1e-6
    )
    diagnostics['constraints']['totals'] = {
        'satisfied': totals_ok,
        'item_price': item_price,
        'item_amount': item_amount,
        'reported_price': plan.total_price,
        'reported_amount': plan.total_amount
    }

    # 3. Every package comes from the catalog and is bought at least once
    unknown = [item.denomination.id for item in plan.items if item.denomination.id not in known_ids]
    counts_ok = all(item.count >= 1 for item in plan.items)
    diagnostics['constraints']['packages'] = {
        'satisfied': not unknown and counts_ok,
        'unknown_ids': unknown
    }

    is_feasible = all(c['satisfied'] for c in diagnostics['constraints'].values())

    return item_price, is_feasible, diagnostics

def plan_lines(plan: PlanResult) -> List[str]:
    return [
        f"{item.count} x {item.denomination.amount:,} RP @ {format_money(item.denomination.price)} = {format_money(item.subtotal)}"
        for item in plan.items
    ]

def print_plan_summary(plan: PlanResult, target: int):
    """Print a summary of the purchase plan"""
    if plan.is_empty:
        print(f"Nothing to buy for target {target}")
        return

    print(f"Target: {target:,} RP")
    print(f"Total price: {format_money(plan.total_price)}")
    print(f"RP received: {plan.total_amount:,}")
    if plan.overshoot(target) > 0:
        print(f"Leftover RP: +{plan.overshoot(target):,}")

    print(f"Purchases ({len(plan.denominations_used)}):")
    for line in plan_lines(plan):
        print(f"  {line}")
