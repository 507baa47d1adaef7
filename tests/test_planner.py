from rp_planner.codebase.catalog import DEFAULT_RP_TIERS, with_custom_price, default_settings
from rp_planner.codebase.domain import Denomination, PlanItem, PlanResult
from rp_planner.codebase.planner import evaluate_plan, generate_plan, print_plan_summary


def test_generate_plan_uses_price_overrides() -> None:
    settings = with_custom_price(default_settings(), 3, 20000)

    plan = generate_plan(1820, settings)

    assert plan.total_price == 19600
    assert plan.count_for(1) == 4


def test_generate_plan_writes_requested_files(tmp_path) -> None:
    excel = tmp_path / "plan.xlsx"
    lp = tmp_path / "plan.lp"

    generate_plan(975, excel_path=excel, lp_path=lp)

    assert excel.exists()
    assert lp.exists()


def test_evaluate_flags_plan_below_target() -> None:
    tier = DEFAULT_RP_TIERS[0]
    plan = PlanResult(denominations_used=[tier], items=[PlanItem(tier, 1)], total_amount=480, total_price=4900)

    _, feasible, diagnostics = evaluate_plan(plan, DEFAULT_RP_TIERS, 1000)

    assert not feasible
    assert not diagnostics["constraints"]["target"]["satisfied"]
    assert diagnostics["constraints"]["totals"]["satisfied"]


def test_evaluate_flags_inconsistent_totals_and_unknown_packages() -> None:
    stranger = Denomination(id=99, amount=500, price=1)
    plan = PlanResult(denominations_used=[stranger], items=[PlanItem(stranger, 1)], total_amount=500, total_price=2)

    _, feasible, diagnostics = evaluate_plan(plan, DEFAULT_RP_TIERS, 500)

    assert not feasible
    assert not diagnostics["constraints"]["totals"]["satisfied"]
    assert diagnostics["constraints"]["packages"]["unknown_ids"] == [99]


def test_empty_plan_is_valid_only_for_non_positive_target() -> None:
    assert evaluate_plan(PlanResult.empty(), DEFAULT_RP_TIERS, 0)[1]
    assert not evaluate_plan(PlanResult.empty(), DEFAULT_RP_TIERS, 10)[1]


def test_summary_lists_purchases(capsys) -> None:
    plan = generate_plan(1820)

    print_plan_summary(plan, 1820)

    out = capsys.readouterr().out
    assert "1 x 480 RP @ 4,900 = 4,900" in out
    assert "1 x 1,425 RP @ 14,000 = 14,000" in out
