"""Tests for the command-line entry points."""

import io

import pytest

from bonus_rush import main as game_cli
from bonus_rush import validate as validate_cli
from bonus_rush.puzzle.models import TierName


class TestValidateCli:
    """Test python -m bonus_rush.validate."""

    def test_bundled_content_passes(self, capsys):
        assert validate_cli.main([]) == 0
        assert "validation passed (4 puzzles, 12 tiers checked)" in capsys.readouterr().out

    def test_invalid_content_fails(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "puzzles:\n"
            "  - id: 1\n"
            "    wheel_letters: RNAB\n"
            "    tiers:\n"
            "      Bronze:\n"
            "        grid: [BAR]\n"
            "        crossword_words: [BAR, NAB]\n"
            "        allowed_words: [BAR, NAB]\n"
        )
        assert validate_cli.main([str(path)]) == 1
        err = capsys.readouterr().err
        assert "[CROSSWORD_NO_SLOT]" in err
        assert "Puzzle 1 Bronze" in err

    def test_unreadable_content(self, tmp_path, capsys):
        assert validate_cli.main([str(tmp_path / "missing.yaml")]) == 1
        assert "not found" in capsys.readouterr().err


class TestGameCli:
    """Test python -m bonus_rush.main."""

    def test_inventory(self, tmp_path, capsys):
        assert game_cli.main(["inventory", "--store", str(tmp_path / "save.json")]) == 0
        assert "coins: 500" in capsys.readouterr().out

    def test_ladder_demo_mode(self, tmp_path, capsys):
        store = str(tmp_path / "save.json")
        assert game_cli.main(["ladder", "--store", store, "--demo", "on"]) == 0
        out = capsys.readouterr().out
        assert "1. Barn: open" in out
        assert "4. Sight: open" in out

    def test_reset(self, tmp_path, capsys):
        assert game_cli.main(["reset", "--store", str(tmp_path / "save.json")]) == 0
        out = capsys.readouterr().out
        assert "Progress reset." in out
        assert "coins: 1000" in out

    def test_play_requires_puzzle(self):
        with pytest.raises(SystemExit):
            game_cli.main(["play"])

    def test_play_unknown_tier(self):
        with pytest.raises(SystemExit):
            game_cli.main(["play", "1", "Platinum"])

    def test_play_unknown_puzzle(self, tmp_path, capsys):
        assert game_cli.main(["play", "99", "--store", str(tmp_path / "save.json")]) == 1
        assert "Puzzle 99 not found" in capsys.readouterr().err

    def test_play_session(self, service):
        session = service.start_run(1, TierName.BRONZE)
        out = io.StringIO()
        assert game_cli.play(session, ["bar\n", "\n", "xyz\n", "ban\n", "!video\n", "bra\n", "nab\n"], out) == 0

        text = out.getvalue()
        assert "✓ BAR (crossword) 1/4" in text
        assert "✗ Word is not in this puzzle's list." in text
        assert "Watched a reward video: 90s left" in text
        assert "=== Run Summary ===" in text
        assert "Puzzle 1 Bronze: 4/4 words, 3 stars" in text
        assert "Reward: +100 coins, +1 hint" in text

    def test_play_stops_when_time_is_up(self, service, clock):
        session = service.start_run(1, TierName.BRONZE)
        clock.advance(seconds=120)
        out = io.StringIO()
        game_cli.play(session, ["bar\n", "ban\n"], out)
        text = out.getvalue()
        assert "Time is up." in text
        assert "0/4 words, 0 stars" in text
