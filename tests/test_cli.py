from rp_planner.codebase.cli import EXIT_INVALID_INPUT, main


def test_plan_command_prints_cheapest_total(capsys) -> None:
    assert main(["plan", "1820"]) == 0

    out = capsys.readouterr().out
    assert "Total price: 18,900" in out
    assert "Leftover RP: +85" in out


def test_plan_command_accepts_preset(capsys) -> None:
    assert main(["plan", "--preset", "legendary"]) == 0

    assert "Target: 1,820 RP" in capsys.readouterr().out


def test_plan_command_without_target_fails(capsys) -> None:
    assert main(["plan"]) == EXIT_INVALID_INPUT

    assert "error:" in capsys.readouterr().err


def test_plan_with_zero_target_buys_nothing(capsys) -> None:
    assert main(["plan", "0"]) == 0

    assert "Nothing to buy" in capsys.readouterr().out


def test_value_command(capsys) -> None:
    assert main(["value", "1820"]) == 0

    assert "1820 RP = 15,408" in capsys.readouterr().out


def test_config_price_override_changes_plan(tmp_path, capsys) -> None:
    config = tmp_path / "settings.yaml"
    config.write_text("custom_prices:\n  3: 20000\n")

    assert main(["--config", str(config), "plan", "1820"]) == 0

    assert "Total price: 19,600" in capsys.readouterr().out


def test_bad_config_exits_with_invalid_input(tmp_path) -> None:
    config = tmp_path / "settings.yaml"
    config.write_text("colour: blue\n")

    assert main(["--config", str(config), "efficiency"]) == EXIT_INVALID_INPUT


def test_efficiency_command(capsys) -> None:
    assert main(["efficiency"]) == 0

    assert "BEST" in capsys.readouterr().out


def test_export_command_writes_csv(tmp_path) -> None:
    out = tmp_path / "plan.csv"

    assert main(["export", "1820", "--out", str(out)]) == 0
    assert out.exists()


def test_export_with_zero_target_skips_lp_model(tmp_path, capsys) -> None:
    out = tmp_path / "plan.csv"
    lp = tmp_path / "model.lp"

    assert main(["export", "0", "--out", str(out), "--lp", str(lp)]) == 0

    assert out.exists()
    assert not lp.exists()
    assert "Skipping LP export" in capsys.readouterr().out


def test_export_with_target_writes_lp_model(tmp_path) -> None:
    out = tmp_path / "plan.csv"
    lp = tmp_path / "model.lp"

    assert main(["export", "975", "--out", str(out), "--lp", str(lp)]) == 0

    assert lp.exists()
