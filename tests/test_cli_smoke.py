"""Smoke tests for the command-line entry points."""

import sys

import pytest
from portfolio_projection import chart_cli, cli


def _run(monkeypatch, module, *argv):
    monkeypatch.setattr(sys, "argv", [module.__name__, *argv])
    module.main()


@pytest.fixture(autouse=True)
def _no_local_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_report_to_stdout(monkeypatch, capsys):
    _run(monkeypatch, cli, "--start-year", "2025", "--investment-years", "2", "--payout-years", "2")
    out = capsys.readouterr().out
    assert "Portfolio projection 2025-2028" in out
    assert "Yearly projection" in out


def test_summary_only(monkeypatch, capsys):
    _run(monkeypatch, cli, "--start-year", "2025", "--summary-only")
    out = capsys.readouterr().out
    assert "Totals" in out
    assert "Yearly projection" not in out


def test_report_to_file(tmp_path, monkeypatch):
    output = tmp_path / "out" / "report.txt"
    _run(monkeypatch, cli, "--start-year", "2025", "--output", str(output))
    assert "Final value" in output.read_text(encoding="utf-8")


def test_goal_seek_and_scenarios(monkeypatch, capsys):
    _run(
        monkeypatch, cli, "--start-year", "2025", "--initial-portfolio-value", "1000000",
        "--invested-capital", "0", "--goal-seek", "--scenarios",
    )
    out = capsys.readouterr().out
    assert "Goal-seek" in out
    assert "Minimal annual savings" in out
    assert "standard" in out


def test_missing_config_file_uses_defaults(tmp_path, monkeypatch, capsys):
    _run(monkeypatch, cli, "--config", str(tmp_path / "nope.toml"), "--start-year", "2025")
    assert "5,000,000" in capsys.readouterr().out


def test_invalid_configuration_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, cli, "--initial-stock-allocation-pct", "150")
    assert exc.value.code == 2
    assert "outside 0-100%" in capsys.readouterr().err


def test_invalid_investor_type_exits(monkeypatch):
    with pytest.raises(SystemExit):
        _run(monkeypatch, cli, "--investor-type", "trust")


def test_chart_cli_writes_pngs(tmp_path, monkeypatch):
    out = tmp_path / "charts"
    _run(
        monkeypatch, chart_cli, "--start-year", "2025", "--output", str(out),
        "--tapering-policy", "5%",
    )
    assert (out / "projection.png").exists()
    assert (out / "allocation.png").exists()
    assert (out / "invested_capital.png").exists()
