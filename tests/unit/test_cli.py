"""Unit tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from token_analyzer import cli
from token_analyzer.config.settings import Settings


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    """Keep the CLI from reconfiguring loguru and use fast polling."""
    monkeypatch.setattr(cli, "setup_logging", lambda settings=None: None)
    monkeypatch.setattr(
        cli, "get_settings", lambda: Settings(subscription_interval_seconds=0.01)
    )


@pytest.fixture
def data_dir(tmp_path, hourly_series):
    document = {
        "series": [point.model_dump() for point in hourly_series],
        "depth": {"100": 1000, "105": 500, "110": 250},
    }
    (tmp_path / "0xtoken.json").write_text(json.dumps(document))
    return tmp_path


class TestCli:
    """Test CLI commands against a JSON data directory."""

    def test_analyze(self, runner, data_dir, tmp_path):
        """Test analyze prints a report and writes camelCase JSON."""
        output = tmp_path / "result.json"

        result = runner.invoke(
            cli.app,
            ["analyze", "0xtoken", "--data-dir", str(data_dir), "--output", str(output)],
        )

        assert result.exit_code == 0, result.output
        assert "Technical Analysis" in result.output

        payload = json.loads(output.read_text())
        assert payload["identifier"] == "0xtoken"
        assert payload["dataPoints"] == 72
        assert "valueAreas" in payload["volume"]
        assert "historicalVolatility" in payload["volatility"]

    def test_analyze_missing_data(self, runner, data_dir):
        """Test analyze exits non-zero without data."""
        result = runner.invoke(cli.app, ["analyze", "0xmissing", "--data-dir", str(data_dir)])

        assert result.exit_code == 1
        assert "No historical data available" in result.output

    def test_missing_data_directory(self, runner, tmp_path):
        """Test every command rejects a data directory that does not exist."""
        missing = str(tmp_path / "nowhere")

        commands = [
            ["analyze", "0xtoken", "--data-dir", missing],
            ["history", "0xtoken", "--start", "2024-01-01", "--end", "2024-01-02",
             "--data-dir", missing],
            ["watch", "0xtoken", "--data-dir", missing],
        ]
        for args in commands:
            result = runner.invoke(cli.app, args)
            assert result.exit_code == 1
            assert "Data directory does not exist" in result.output

    def test_history(self, runner, data_dir):
        """Test history prints one row per interval."""
        result = runner.invoke(
            cli.app,
            [
                "history", "0xtoken",
                "--start", "2024-01-01",
                "--end", "2024-01-03",
                "--data-dir", str(data_dir),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "3 intervals" in result.output

    def test_history_without_data(self, runner, data_dir):
        """Test history on an empty range."""
        result = runner.invoke(
            cli.app,
            [
                "history", "0xtoken",
                "--start", "2020-01-01",
                "--end", "2020-01-02",
                "--data-dir", str(data_dir),
            ],
        )

        assert result.exit_code == 0
        assert "No historical analysis available" in result.output

    def test_watch(self, runner, data_dir):
        """Test watch stops after the requested number of updates."""
        result = runner.invoke(
            cli.app,
            ["watch", "0xtoken", "--data-dir", str(data_dir), "--count", "2"],
        )

        assert result.exit_code == 0, result.output
        assert result.output.count("RSI") >= 2
