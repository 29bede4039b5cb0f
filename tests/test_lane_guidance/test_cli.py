"""
Tests for the command-line interface.

setup_logging and the browser/export helpers are patched so tests never
touch the real log directory or open a browser. TestMainLogging runs the
real logging setup against a temporary log directory.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from src.lane_guidance.aggregator import ManeuverRecord, aggregate
from src.lane_guidance.cli import format_report, main
from src.lane_guidance.validator import validate
from src.logging_config import setup_logging


@pytest.fixture(autouse=True)
def quiet_environment(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    monkeypatch.delenv("LANE_GUIDANCE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LANE_GUIDANCE_LOG_DIR", str(tmp_path / "logs"))
    with patch("src.lane_guidance.config.load_dotenv"), \
            patch("src.lane_guidance.cli.setup_logging") as mock_setup:
        yield mock_setup


class TestFormatReport:
    """Tests for format_report."""

    def test_valid_report(self, five_lane_records):
        aggregates = aggregate(five_lane_records)
        report = format_report(aggregates, validate(aggregates))

        assert "Lane 2: ← Left turn + ↑ Straight (angles: 10, 1) links: 2001, 2002" in report
        assert report.endswith("Validation passed")

    def test_invalid_report(self, misordered_records):
        aggregates = aggregate(misordered_records)
        report = format_report(aggregates, validate(aggregates))

        assert "Validation failed:" in report
        assert "  - Lane 2:" in report

    def test_no_lanes(self):
        report = format_report({}, validate({}))
        assert "No lanes referenced" in report


class TestMain:
    """Tests for the main entry point."""

    def test_valid_file(self, write_records, capsys, quiet_environment):
        path = write_records([{"bits": [1, 1, 0], "angle": 10}, {"bits": [0, 1, 1], "angle": 4}])

        assert main([path]) == 0
        assert "Validation passed" in capsys.readouterr().out
        quiet_environment.assert_called_once()

    def test_invalid_lanes_exit_zero_without_strict(self, write_records, capsys):
        path = write_records([{"bits": [0, 1, 1], "angle": 1}])

        assert main([path]) == 0
        assert "start at lane 1" in capsys.readouterr().out

    def test_strict_fails_on_invalid_lanes(self, write_records):
        path = write_records([{"bits": [1, 0, 0, 1], "angle": 1}])
        assert main([path, "--strict"]) == 1

    def test_strict_passes_valid_lanes(self, write_records):
        path = write_records([{"bits": [1, 1], "angle": 1}])
        assert main([path, "--strict"]) == 0

    def test_json_output(self, write_records, capsys):
        path = write_records([
            {"bits": [1, 0], "angle": 4},
            {"bits": [0, 1], "angle": 10, "link_id": 7},
        ])

        assert main([path, "--json"]) == 0
        report = json.loads(capsys.readouterr().out)

        assert report["is_valid"] is False
        assert report["lanes"][0] == {
            "lane": 1,
            "directions": ["RIGHT_TURN"],
            "angles": [4],
            "link_ids": [],
        }
        assert report["lanes"][1]["link_ids"] == [7]
        assert len(report["errors"]) == 1

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "Error: Record file not found" in capsys.readouterr().err

    def test_malformed_record(self, write_records, capsys):
        path = write_records([{"angle": 1}])
        assert main([path]) == 1
        assert "missing required field 'bits'" in capsys.readouterr().err

    def test_invalid_angle_code(self, write_records, capsys):
        path = write_records([{"bits": [1], "angle": 13}])
        assert main([path]) == 1
        assert "Invalid angle code 13" in capsys.readouterr().err

    def test_unknown_log_level(self, write_records, monkeypatch, capsys):
        monkeypatch.setenv("LANE_GUIDANCE_LOG_LEVEL", "CHATTY")
        path = write_records([{"bits": [1], "angle": 1}])

        assert main([path]) == 1
        assert "Unknown log level" in capsys.readouterr().err

    def test_export(self, write_records, tmp_path, capsys):
        path = write_records([{"bits": [1], "angle": 1, "link_id": 3}])
        output = str(tmp_path / "out.html")

        with patch("src.lane_guidance.cli.export_html") as mock_export, \
                patch("src.lane_guidance.cli.create_figure") as mock_create:
            mock_create.return_value = MagicMock()
            assert main([path, "--export", output, "--highlight", "3", "--title", "T"]) == 0

        mock_create.assert_called_once()
        _, kwargs = mock_create.call_args
        assert kwargs["highlight_links"] == [3]
        assert kwargs["title"] == "T"
        assert kwargs["show_input_grid"] is True
        mock_export.assert_called_once_with(mock_create.return_value, output)
        assert f"Exported to {output}" in capsys.readouterr().out

    def test_show(self, write_records):
        path = write_records([{"bits": [1], "angle": 1}])

        with patch("src.lane_guidance.cli.show_figure") as mock_show, \
                patch("src.lane_guidance.cli.create_figure") as mock_create:
            assert main([path, "--show", "--no-grid"]) == 0

        mock_show.assert_called_once_with(mock_create.return_value)
        assert mock_create.call_args.kwargs["show_input_grid"] is False

    def test_no_figure_by_default(self, write_records):
        path = write_records([{"bits": [1], "angle": 1}])

        with patch("src.lane_guidance.cli.create_figure") as mock_create:
            assert main([path]) == 0
        mock_create.assert_not_called()

    def test_records_passed_to_figure(self, write_records):
        path = write_records([{"bits": [1, 1], "angle": 10}])

        with patch("src.lane_guidance.cli.show_figure"), \
                patch("src.lane_guidance.cli.create_figure") as mock_create:
            main([path, "--show"])

        records = mock_create.call_args.args[0]
        assert records == [ManeuverRecord((1, 1), angle_code=10)]


class TestMainLogging:
    """main() with the real logging setup: logs must stay off stdout."""

    @pytest.fixture(autouse=True)
    def real_logging(self, quiet_environment, restore_logging):
        quiet_environment.side_effect = setup_logging

    def test_json_output_is_parseable(self, write_records, capsys):
        path = write_records([{"bits": [1, 1, 0], "angle": 10}, {"bits": [0, 1, 1], "angle": 4}])

        assert main([path, "--json"]) == 0
        captured = capsys.readouterr()

        report = json.loads(captured.out)
        assert report["is_valid"] is True
        assert "Loading records from" in captured.err

    def test_verbose_shows_debug_lines(self, write_records, capsys):
        path = write_records([{"bits": [1], "angle": 1}])

        assert main([path, "-v"]) == 0
        assert "Aggregated 1 records into 1 lanes" in capsys.readouterr().err

    def test_debug_lines_hidden_without_verbose(self, write_records, capsys):
        path = write_records([{"bits": [1], "angle": 1}])

        assert main([path]) == 0
        assert "Aggregated 1 records" not in capsys.readouterr().err
