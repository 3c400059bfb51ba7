"""Command-line entry point, driven through typer's test runner."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from main import app

runner = CliRunner()

DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"


def test_rich_frontend_runs_headless() -> None:
    result = runner.invoke(
        app,
        ["-f", "rich", "-l", str(DATA_DIR / "two_blocks.json"), "--frames", "10", "--seed", "1"],
    )
    assert result.exit_code == 0, result.output
    assert "Configurations" in result.output


def test_overlapping_layout_reports_error(tmp_path: Path) -> None:
    path = tmp_path / "overlap.json"
    path.write_text(
        json.dumps(
            {
                "size": 3,
                "blocks": [
                    {"x": 0, "y": 0, "isHorizontal": True, "length": 2},
                    {"x": 1, "y": 0, "isHorizontal": False, "length": 2},
                ],
            }
        )
    )
    result = runner.invoke(app, ["-f", "rich", "-l", str(path)])
    assert result.exit_code == 1
    assert "overlap" in result.output


def test_state_limit_reports_error() -> None:
    result = runner.invoke(
        app,
        ["-f", "rich", "-l", str(DATA_DIR / "two_blocks.json"), "--max-states", "3"],
    )
    assert result.exit_code == 1
    assert "limit" in result.output


def test_bad_damping_reports_error() -> None:
    result = runner.invoke(app, ["-f", "rich", "--damping", "1.5"])
    assert result.exit_code == 1
    assert "damping" in result.output


def test_bundled_layout_found_by_file_name() -> None:
    result = runner.invoke(app, ["-f", "rich", "-l", "two_blocks.json", "--frames", "5", "--seed", "1"])
    assert result.exit_code == 0, result.output
    assert "18" in result.output


def test_bundled_layout_found_by_stem() -> None:
    result = runner.invoke(app, ["-f", "rich", "-l", "two_blocks", "--frames", "5", "--seed", "1"])
    assert result.exit_code == 0, result.output


def test_missing_layout_is_a_usage_error() -> None:
    result = runner.invoke(app, ["-f", "rich", "-l", "no_such_layout"])
    assert result.exit_code == 2
    assert "no_such_layout" in result.output


def test_frames_help_mentions_pygame() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "pygame" in result.output
