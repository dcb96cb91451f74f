"""
Minimal smoke tests for the lift-coach CLI.

Tests basic functionality:
- App runs and shows help
- Maxes are saved and reused
- Schedules render as tables and JSON
- Workouts are logged with PR and milestone reporting
"""

import json

import pytest
from typer.testing import CliRunner

from lift_coach.cli.main import app

runner = CliRunner()

MAX_ARGS = ["--squat", "300", "--bench", "200", "--deadlift", "400"]


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point settings and default history at a temporary directory."""
    monkeypatch.setenv("LIFT_COACH_HOME", str(tmp_path))
    return tmp_path


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "lift-coach" in result.output or "Heavy/Light/Medium" in result.output

    def test_targets(self):
        result = runner.invoke(app, ["targets", "--json"])
        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert [r["week"] for r in rows] == list(range(1, 9))

    def test_week_json(self, home):
        result = runner.invoke(app, ["week", "1", *MAX_ARGS, "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["phase"] == "Strength"
        assert data["days"][1]["lifts"][0]["weight"] == 190

    def test_week_without_maxes_fails(self, home):
        result = runner.invoke(app, ["week", "1"])
        assert result.exit_code == 1
        assert "No saved maxes" in result.output

    def test_saved_maxes_are_reused(self, home):
        result = runner.invoke(app, ["maxes", *MAX_ARGS])
        assert result.exit_code == 0
        assert (home / "settings.yaml").exists()

        result = runner.invoke(app, ["week", "8", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["days"][0]["lifts"][0]["weight"] == 300

        result = runner.invoke(app, ["maxes"])
        assert "SQ 300" in result.output

    def test_program_table(self, home):
        result = runner.invoke(app, ["program", *MAX_ARGS])
        assert result.exit_code == 0
        assert "Program" in result.output

    def test_program_json(self, home):
        result = runner.invoke(app, ["program", *MAX_ARGS, "--json"])
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 8

    def test_warmups(self):
        result = runner.invoke(app, ["warmups", "240"])
        assert result.exit_code == 0
        assert "215" in result.output

    def test_plates(self):
        result = runner.invoke(app, ["plates", "315", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["per_side"] == [{"plate": 45, "count": 3}]

    def test_one_rep_max(self):
        result = runner.invoke(app, ["1rm", "225", "5"])
        assert result.exit_code == 0
        assert "255" in result.output

    def test_log_workout_reports_prs_and_milestones(self, home):
        data_file = home / "history.json"
        result = runner.invoke(app, [
            "log-workout",
            "--data-file", str(data_file),
            "--date", "2026-03-02",
            "--user", "alex",
            "-e", "Squat:135x5w,3@245x5",
            "--json",
        ])
        assert result.exit_code == 0, result.output
        out = json.loads(result.output)
        assert out["prs"] == [
            {"exercise": "Squat", "weight": 245.0, "reps": 5, "previous_best": None}
        ]
        assert [m["type"] for m in out["milestones"]] == ["first_pr", "first_workout"]

        result = runner.invoke(app, [
            "log-workout",
            "--data-file", str(data_file),
            "--date", "2026-03-04",
            "--user", "alex",
            "-e", "Squat:3@240x5",
            "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["prs"] == []

    def test_log_workout_bad_sets(self, home):
        result = runner.invoke(app, ["log-workout", "-e", "Squat:heavy"])
        assert result.exit_code == 1
        assert "Invalid set format" in result.output

    def test_log_meal_and_celebrate(self, home):
        data_file = home / "history.json"
        result = runner.invoke(app, ["log-meal", "--data-file", str(data_file), "--date", "2026-03-02"])
        assert result.exit_code == 0
        assert "FIRST FOOD LOGGED" in result.output

        result = runner.invoke(app, [
            "milestones", "--data-file", str(data_file), "--date", "2026-03-02", "--celebrate",
        ])
        assert result.exit_code == 0

        result = runner.invoke(app, [
            "milestones", "--data-file", str(data_file), "--date", "2026-03-02", "--json",
        ])
        assert json.loads(result.output) == []

    @pytest.mark.parametrize("command", ["milestones", "streak"])
    def test_malformed_history_reports_error(self, home, command):
        data_file = home / "history.json"
        data_file.write_text(json.dumps({"workouts": [{"id": "a", "user_id": "local"}]}))
        result = runner.invoke(app, [command, "--data-file", str(data_file)])
        assert result.exit_code == 1
        assert "missing date" in " ".join(result.output.split())

    def test_streak(self, home):
        data_file = home / "history.json"
        for day in ("2026-03-01", "2026-03-02", "2026-03-04"):
            runner.invoke(app, [
                "log-workout", "--data-file", str(data_file), "--date", day, "-e", "Squat:225x5",
            ])
        result = runner.invoke(app, ["streak", "--data-file", str(data_file), "--date", "2026-03-04"])
        assert result.exit_code == 0
        assert "3" in result.output
