"""Smoke tests for CLI command structure - high value, low maintenance."""

import pytest
from typer.testing import CliRunner

from src.infrastructure.cli.app import app


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


class TestCommandStructure:
    """Test that command structure exists and is accessible."""

    def test_main_help_shows_commands(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("match", "normalize", "distance", "version"):
            assert command in result.stdout

    def test_version_command_works(self, runner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "tagmatch" in result.stdout

    def test_match_help(self, runner):
        result = runner.invoke(app, ["match", "--help"])
        assert result.exit_code == 0
        assert "--search-concurrency" in result.stdout


class TestUtilityCommands:
    def test_normalize_title(self, runner):
        result = runner.invoke(app, ["normalize", "title", "Song (Extended Mix)"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "song"

    def test_normalize_artist(self, runner):
        result = runner.invoke(app, ["normalize", "artist", "A feat. B & C"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "a b c"

    def test_normalize_rejects_unknown_field(self, runner):
        result = runner.invoke(app, ["normalize", "album", "Discovery"])
        assert result.exit_code != 0

    def test_distance_exact(self, runner):
        result = runner.invoke(
            app, ["distance", "Daft Punk - One More Time", "Daft Punk - One More Time"]
        )

        assert result.exit_code == 0
        assert result.stdout.strip() == "0 GOOD"

    def test_distance_custom_thresholds(self, runner):
        result = runner.invoke(
            app,
            [
                "distance",
                "Daft Punk - One More Time",
                "Daft Punk - One More Tim",
                "--good-below",
                "1",
                "--fair-below",
                "2",
            ],
        )

        assert result.exit_code == 0
        assert result.stdout.strip() == "1 FAIR"


class TestMatchCommand:
    def test_no_audio_files_exits_with_error(self, runner, tmp_path):
        result = runner.invoke(app, ["match", str(tmp_path)])

        assert result.exit_code == 1
        assert "No audio files found" in result.stdout
