"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["WIDTH", "HEIGHT", "MAX_MOVES", "MAX_CONCURRENCY", "LOG_LEVEL", "AI_DELAY"]:
        monkeypatch.delenv("DRAUGHTSIM_" + name, raising=False)


class TestSimulateCommand:

    def test_json_summary(self, capsys):
        main(["simulate", "--games", "3", "--seed", "1", "--max-moves", "5000", "--json"])

        summary = json.loads(capsys.readouterr().out)
        assert summary["red"] == "random"
        assert summary["blue"] == "random"
        assert len(summary["games"]) == 3
        assert summary["red_wins"] + summary["blue_wins"] + summary["undecided"] == 3
        assert all(g["moves"] >= 1 for g in summary["games"])

    def test_seed_is_reproducible(self, capsys):
        argv = ["simulate", "-n", "2", "--seed", "7", "--max-moves", "5000", "--json"]
        main(argv)
        first = capsys.readouterr().out
        main(argv)
        assert capsys.readouterr().out == first

    def test_text_output(self, capsys):
        main(["simulate", "--width", "4", "--height", "7", "--seed", "3", "--max-moves", "5000"])

        out = capsys.readouterr().out
        assert "Game 1: winner=" in out
        assert "Average moves:" in out

    def test_move_limit_reported_as_undecided(self, capsys):
        main(["simulate", "--games", "2", "--max-moves", "1", "--json"])

        summary = json.loads(capsys.readouterr().out)
        assert summary["undecided"] == 2
        assert [g["winner"] for g in summary["games"]] == [None, None]


class TestErrors:

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1

    def test_human_in_headless_simulation(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["simulate", "--red", "human"])
        assert exc.value.code == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_most_kills_reports_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["simulate", "--blue", "most-kills", "--seed", "2"])
        assert exc.value.code == 1
        assert "not implemented" in capsys.readouterr().out

    def test_invalid_board_size(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["simulate", "--width", "0"])
        assert exc.value.code == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_unknown_policy_rejected_by_parser(self):
        with pytest.raises(SystemExit) as exc:
            main(["simulate", "--red", "minimax"])
        assert exc.value.code == 2
