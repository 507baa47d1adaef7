"""
Docplex Purchase Model Converter

This module expresses a purchase-planning instance as an integer program with
docplex, handles LP export and optional CPLEX solving, and writes finished
plans to Excel/CSV with pandas.
"""

from docplex.mp.model import Model
from pathlib import Path
from typing import Dict, Sequence
from .domain import Denomination, PlanResult
from .solvers import validate_denominations, validate_target
from .exceptions import InvalidInput
import pandas as pd

def create_docplex_model(denominations: Sequence[Denomination], target: int, name: str = None) -> Model:
    """
    Convert a purchase-planning instance to a docplex Model

    Args:
        denominations: Packages that may be bought any number of times
        target: Minimum RP the purchase has to reach
        name: Optional model name

    Returns:
        docplex Model object ready to solve
    """
    snapshot = validate_denominations(denominations)
    target = validate_target(target)
    if target <= 0:
        raise InvalidInput(f"Model needs a positive target, got {target}")

    model = Model(name=name or f"RPPurchase_{target}")

    # Decision variables - number of copies bought per denomination
    n = model.integer_var_list(len(snapshot), lb=0, name="n")

    model.add_constraint(
        model.sum(d.amount * n[k] for k, d in enumerate(snapshot)) >= target,
        ctname="reach_target"
    )

    model.minimize(model.sum(d.price * n[k] for k, d in enumerate(snapshot)))

    return model

def solve_with_docplex(denominations: Sequence[Denomination], target: int, verbose: bool = True):
    """
    Create and solve the purchase model with CPLEX

    Returns:
        Tuple of (counts per denomination, objective value), or (None, None) when no solution
    """
    snapshot = validate_denominations(denominations)
    model = create_docplex_model(snapshot, target)

    if verbose:
        print("Solving purchase model with CPLEX...")

    solution = model.solve()

    if solution is None:
        if verbose:
            print("No solution found!")
        return None, None

    counts = [int(round(solution.get_value(f"n_{k}"))) for k in range(len(snapshot))]
    objective_value = solution.get_objective_value()

    if verbose:
        total_amount = sum(c * d.amount for c, d in zip(counts, snapshot))
        print(f"Counts: {counts}")
        print(f"Objective value: {objective_value:,.2f}")
        print(f"RP reached: {total_amount:,} (target {target:,})")

    return counts, objective_value

def compare_solutions(denominations: Sequence[Denomination], target: int,
                      plan: PlanResult, verbose: bool = True) -> Dict:
    """
    Compare the dynamic-programming plan against the CPLEX optimum

    Only prices are compared: both solvers may legitimately return different
    package mixes at the same price.
    """
    snapshot = validate_denominations(denominations)
    docplex_counts, docplex_obj = solve_with_docplex(snapshot, target, verbose=False)

    if docplex_counts is None:
        return {"error": "Docplex could not find solution"}

    plan_counts = [plan.count_for(d.id) for d in snapshot]
    results = {
        "plan_counts": plan_counts,
        "docplex_counts": docplex_counts,
        "plan_price": plan.total_price,
        "docplex_price": docplex_obj,
        "counts_match": plan_counts == docplex_counts,
        "prices_match": abs(plan.total_price - docplex_obj) < 1e-6
    }

    if verbose:
        print("\n" + "="*60)
        print("PURCHASE PLAN COMPARISON")
        print("="*60)
        print(f"Plan counts:    {plan_counts}")
        print(f"Docplex counts: {docplex_counts}")
        print(f"Counts match:   {results['counts_match']}")
        print(f"Plan price:     {plan.total_price:,.2f}")
        print(f"Docplex price:  {docplex_obj:,.2f}")
        print(f"Prices match:   {results['prices_match']}")

    return results

def save_to_docplex(denominations: Sequence[Denomination], target: int, path=None, verbose: bool = True):
    """Export the purchase model as an LP file"""
    model = create_docplex_model(denominations, target)
    lp_path = Path(path) if path is not None else Path(f"rp_purchase_{target}.lp")
    model.export_as_lp(str(lp_path))

    if verbose:
        print(f"Purchase model saved to {lp_path}")

    return model

def plan_to_frame(plan: PlanResult) -> pd.DataFrame:
    """One row per purchased package"""
    rows = [{
        'tier_id': item.denomination.id,
        'rp': item.denomination.amount,
        'price': item.denomination.price,
        'count': item.count,
        'rp_total': item.denomination.amount * item.count,
        'subtotal': item.subtotal,
    } for item in plan.items]
    return pd.DataFrame(rows, columns=['tier_id', 'rp', 'price', 'count', 'rp_total', 'subtotal'])

def save_to_excel(plan: PlanResult, target: int, path, verbose: bool = True) -> Path:
    """Save a plan with its packages and totals to an Excel workbook"""
    filename = Path(path)

    with pd.ExcelWriter(filename, engine='openpyxl') as writer:
        plan_to_frame(plan).to_excel(writer, sheet_name='Packages', index=False)

        totals = pd.DataFrame([
            {'parameter': 'target_rp', 'value': target},
            {'parameter': 'total_rp', 'value': plan.total_amount},
            {'parameter': 'leftover_rp', 'value': plan.overshoot(target)},
            {'parameter': 'total_price', 'value': plan.total_price},
        ])
        totals.to_excel(writer, sheet_name='Totals', index=False)

    if verbose:
        print(f"Plan saved to {filename}")

    return filename

def save_to_csv(plan: PlanResult, path, verbose: bool = True) -> Path:
    filename = Path(path)
    plan_to_frame(plan).to_csv(filename, index=False)

    if verbose:
        print(f"Plan saved to {filename}")

    return filename
