from __future__ import annotations

import json
import os
from pathlib import Path

from mazerun.state import LEADERBOARD_SIZE, Leaderboard, critical_log_path, leaderboard_path, state_dir


def test_state_dir_env_override(tmp_path: Path) -> None:
    prev = os.environ.get("MAZERUN_STATE_DIR")
    os.environ["MAZERUN_STATE_DIR"] = str(tmp_path / "state")
    try:
        assert state_dir() == tmp_path / "state"
        assert leaderboard_path() == tmp_path / "state" / "leaderboard.json"
        assert critical_log_path() == tmp_path / "state" / "critical.log"

        board = Leaderboard()
        board.add_score("Easy", 12.5)
        assert (tmp_path / "state" / "leaderboard.json").exists()
    finally:
        if prev is None:
            os.environ.pop("MAZERUN_STATE_DIR", None)
        else:
            os.environ["MAZERUN_STATE_DIR"] = prev


def test_leaderboard_keeps_five_fastest_sorted(tmp_path: Path) -> None:
    board = Leaderboard(path=tmp_path / "leaderboard.json")
    for seconds in (30.0, 12.0, 45.5, 9.75, 20.0, 11.0, 60.0):
        board.add_score("Medium", seconds)

    scores = board.get_scores("Medium")
    assert len(scores) == LEADERBOARD_SIZE
    assert scores == [9.75, 11.0, 12.0, 20.0, 30.0]
    assert board.get_scores("Hard") == []


def test_leaderboard_persists_between_instances(tmp_path: Path) -> None:
    p = tmp_path / "leaderboard.json"
    Leaderboard(path=p).add_score("Easy", 14.25)
    Leaderboard(path=p).add_score("Easy", 13.0)

    assert Leaderboard(path=p).get_scores("Easy") == [13.0, 14.25]
    assert not list(tmp_path.glob("*.tmp"))


def test_leaderboard_ignores_invalid_times(tmp_path: Path) -> None:
    board = Leaderboard(path=tmp_path / "leaderboard.json")
    board.add_score("Easy", float("nan"))
    board.add_score("Easy", float("inf"))
    board.add_score("Easy", -1.0)
    assert board.get_scores("Easy") == []


def test_corrupt_leaderboard_reads_as_empty(tmp_path: Path) -> None:
    p = tmp_path / "leaderboard.json"
    p.write_text("{not json", encoding="utf-8")
    board = Leaderboard(path=p)
    assert board.get_scores("Easy") == []

    board.add_score("Easy", 8.0)
    assert json.loads(p.read_text(encoding="utf-8")) == {"Easy": [8.0]}


def test_leaderboard_drops_bad_entries_on_load(tmp_path: Path) -> None:
    p = tmp_path / "leaderboard.json"
    p.write_text(json.dumps({"Easy": [5, "x", -2, True, 3.5], "": [1.0], "Hard": "fast"}), encoding="utf-8")
    board = Leaderboard(path=p)
    assert board.get_scores("Easy") == [3.5, 5.0]
    assert board.get_scores("Hard") == []


def test_unwritable_leaderboard_keeps_scores_in_memory(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    board = Leaderboard(path=blocker / "leaderboard.json")

    board.add_score("Easy", 10.0)

    assert board.get_scores("Easy") == [10.0]


def test_clear_and_listing(tmp_path: Path) -> None:
    board = Leaderboard(path=tmp_path / "leaderboard.json")
    board.add_score("Easy", 12.0)
    board.add_score("Easy", 10.5)

    assert board.format_listing(["Easy", "Medium"]) == "\n".join(
        [
            "Leaderboard",
            "",
            "Easy",
            "  1. 10.50 seconds",
            "  2. 12.00 seconds",
            "",
            "Medium",
        ]
    )

    board.clear()
    assert board.get_scores("Easy") == []
    assert Leaderboard(path=tmp_path / "leaderboard.json").get_scores("Easy") == []
