from __future__ import annotations

import json
import logging
import math
import os
import secrets
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

# Best times kept per level.
LEADERBOARD_SIZE = 5


def state_dir() -> Path:
    """
    Directory for small persistent user state.

    Override for tests/dev via `MAZERUN_STATE_DIR`.
    """

    override = os.environ.get("MAZERUN_STATE_DIR")
    if override:
        return Path(override)
    return Path.home() / ".irun" / "mazerun"


def leaderboard_path() -> Path:
    return state_dir() / "leaderboard.json"


def critical_log_path() -> Path:
    return state_dir() / "critical.log"


def _clean_times(raw: object) -> list[float]:
    if not isinstance(raw, list):
        return []
    out: list[float] = []
    for value in raw:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        v = float(value)
        if math.isfinite(v) and v >= 0.0:
            out.append(v)
    out.sort()
    return out[:LEADERBOARD_SIZE]


class Leaderboard:
    """
    Per-level best times (lowest first), persisted as JSON.

    The store is best-effort: a missing or corrupt file reads as empty and a failed
    write is logged and dropped. Callers never see an exception from here.
    """

    def __init__(self, *, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else leaderboard_path()
        self._scores: dict[str, list[float]] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, list[float]]:
        p = self._path
        if not p.exists():
            return {}
        try:
            payload = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("leaderboard unreadable, starting empty: %s", p)
            return {}
        if not isinstance(payload, dict):
            return {}
        scores: dict[str, list[float]] = {}
        for name, times in payload.items():
            if not isinstance(name, str) or not name.strip():
                continue
            cleaned = _clean_times(times)
            if cleaned:
                scores[name] = cleaned
        return scores

    def _save(self) -> None:
        p = self._path
        # Unique tmp name so two game instances never write the same temp file.
        tmp = p.with_name(f"{p.name}.{os.getpid()}.{secrets.token_hex(6)}.tmp")
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._scores, indent=2, sort_keys=True) + "\n", encoding="utf-8")
            tmp.replace(p)
        except OSError:
            logger.warning("leaderboard not saved: %s", p)
            try:
                tmp.unlink()
            except OSError:
                pass

    def add_score(self, level_name: str, seconds: float) -> None:
        try:
            value = float(seconds)
        except (TypeError, ValueError):
            return
        if not math.isfinite(value) or value < 0.0:
            return
        times = list(self._scores.get(level_name, []))
        times.append(value)
        times.sort()
        self._scores[level_name] = times[:LEADERBOARD_SIZE]
        self._save()

    def get_scores(self, level_name: str) -> list[float]:
        return list(self._scores.get(level_name, []))

    def clear(self) -> None:
        self._scores = {}
        self._save()

    def format_listing(self, level_names: Iterable[str]) -> str:
        lines = ["Leaderboard"]
        for name in level_names:
            lines.append("")
            lines.append(name)
            for rank, seconds in enumerate(self.get_scores(name), start=1):
                lines.append(f"  {rank}. {seconds:.2f} seconds")
        return "\n".join(lines)
