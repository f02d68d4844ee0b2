"""Tests for the command line entry point."""
import json
import pytest

from main import build_parser, main


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep default log files inside a temporary directory."""
    monkeypatch.chdir(tmp_path)


class TestMain:
    """Test cases for main()."""

    def test_single_leg_analysis(self, capsys):
        """Test analyzing a long call from the command line."""
        exit_code = main([
            "--strategy", "long_call", "--current-price", "100",
            "--strike", "100", "--premium", "5",
            "--iv", "0.3", "--dte", "30", "--no-curve",
        ])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["strategy_type"] == "long_call"
        assert output["metrics"]["net_cost"] == 500.0
        assert output["metrics"]["max_profit"] is None
        assert output["metrics"]["break_even_points"] == [105.0]
        assert output["metrics"]["profit_probability"] is not None
        assert output["curve"] == []

    def test_spread_analysis(self, capsys):
        """Test analyzing a bull put spread with its curve."""
        exit_code = main([
            "--strategy", "bull_put_spread", "--current-price", "102",
            "--short-strike", "100", "--short-premium", "3",
            "--long-strike", "95", "--long-premium", "1",
            "--quantity", "2",
        ])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["metrics"]["max_profit"] == 400.0
        assert output["metrics"]["max_loss"] == 600.0
        assert len(output["curve"]) == 101

    def test_invalid_spread_returns_2(self, capsys):
        """Test that validation failures exit with status 2."""
        exit_code = main([
            "--strategy", "bear_call_spread", "--current-price", "100",
            "--short-strike", "105", "--short-premium", "3",
            "--long-strike", "100", "--long-premium", "1",
        ])

        assert exit_code == 2
        assert "Short strike must be less than long strike" in capsys.readouterr().err

    def test_missing_leg_fields_returns_2(self):
        """Test that a single-leg strategy without a strike is rejected."""
        assert main(["--strategy", "short_put", "--current-price", "100"]) == 2

    def test_missing_config_returns_1(self):
        """Test that a missing configuration file exits with status 1."""
        exit_code = main([
            "--config", "nonexistent_config.json",
            "--strategy", "long_call", "--current-price", "100",
            "--strike", "100", "--premium", "5",
        ])

        assert exit_code == 1

    def test_unknown_strategy_rejected_by_parser(self):
        """Test that argparse rejects unsupported strategies."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--strategy", "iron_condor", "--current-price", "100"])
