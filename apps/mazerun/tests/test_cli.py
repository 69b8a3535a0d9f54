from __future__ import annotations

import os
from pathlib import Path

import pytest

from mazerun.__main__ import main
from mazerun.app_config import LEVELS, Level, RunConfig
from mazerun.state import Leaderboard


@pytest.fixture
def state_dir(tmp_path: Path):
    prev = os.environ.get("MAZERUN_STATE_DIR")
    os.environ["MAZERUN_STATE_DIR"] = str(tmp_path / "state")
    try:
        yield tmp_path / "state"
    finally:
        if prev is None:
            os.environ.pop("MAZERUN_STATE_DIR", None)
        else:
            os.environ["MAZERUN_STATE_DIR"] = prev


def test_print_leaderboard(state_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    Leaderboard().add_score("Hard", 61.5)

    main(["--print-leaderboard"])

    out = capsys.readouterr().out
    assert out.startswith("Leaderboard\n")
    assert "Hard\n  1. 61.50 seconds" in out


def test_clear_leaderboard(state_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    Leaderboard().add_score("Easy", 9.0)

    main(["--clear-leaderboard"])

    assert "seconds" not in capsys.readouterr().out
    assert Leaderboard().get_scores("Easy") == []


def test_run_config_level_table() -> None:
    assert RunConfig().level_table() == LEVELS
    custom = (Level(name="Only", asset_ref="/tmp/only.json"),)
    assert RunConfig(levels=custom).level_table() == custom
    assert [lvl.name for lvl in LEVELS] == ["Easy", "Medium", "Hard"]
