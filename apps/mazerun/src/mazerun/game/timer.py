from __future__ import annotations


class ElapsedTimer:
    """Level stopwatch on an external clock; frozen while paused."""

    def __init__(self) -> None:
        self._started_at: float | None = None
        self._paused_at: float | None = None
        self._paused_total = 0.0

    def is_running(self) -> bool:
        return self._started_at is not None and self._paused_at is None

    def is_paused(self) -> bool:
        return self._paused_at is not None

    def start(self, now: float) -> None:
        self._started_at = float(now)
        self._paused_at = None
        self._paused_total = 0.0

    def reset(self) -> None:
        self._started_at = None
        self._paused_at = None
        self._paused_total = 0.0

    def pause(self, now: float) -> None:
        if self._started_at is None or self._paused_at is not None:
            return
        self._paused_at = float(now)

    def resume(self, now: float) -> None:
        if self._paused_at is None:
            return
        self._paused_total += max(0.0, float(now) - self._paused_at)
        self._paused_at = None

    def elapsed(self, now: float) -> float:
        if self._started_at is None:
            return 0.0
        end = self._paused_at if self._paused_at is not None else float(now)
        return max(0.0, end - self._started_at - self._paused_total)
