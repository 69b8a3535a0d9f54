from __future__ import annotations

import logging
import time
import traceback
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("mazerun")


@dataclass
class ErrorEntry:
    ts: float
    context: str
    message: str
    tb: str | None
    count: int = 1

    def summary_line(self) -> str:
        line = f"{self.context}: {self.message}".strip()
        if self.count > 1:
            line += f" (x{self.count})"
        return line


class ErrorLog:
    """
    Recent-failure feed shown on the HUD and mirrored to the `mazerun` logger.

    A failure that repeats every frame collapses into one entry with a counter, and the
    feed keeps only the newest `max_items` entries. Writing the log never raises.
    """

    def __init__(self, *, max_items: int = 20, persist_path: Path | None = None) -> None:
        self._max_items = max(1, int(max_items))
        self._entries: list[ErrorEntry] = []
        self._persist_path = Path(persist_path) if persist_path is not None else None

    def entries(self) -> list[ErrorEntry]:
        return list(self._entries)

    def latest(self) -> ErrorEntry | None:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def log_message(self, *, context: str, message: str) -> None:
        context = str(context or "unknown")
        message = str(message or "").strip() or "Unknown error"
        if self._record(context=context, message=message, tb=None):
            self._persist(context=context, message=message, tb=None)
        logger.error("%s: %s", context, message)

    def log_exception(self, *, context: str, exc: BaseException) -> None:
        context = str(context or "unknown")
        message = f"{type(exc).__name__}: {exc}".strip()
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        if self._record(context=context, message=message, tb=tb):
            self._persist(context=context, message=message, tb=tb)
        logger.error("%s: %s\n%s", context, message, tb.rstrip())

    def _record(self, *, context: str, message: str, tb: str | None) -> bool:
        # Returns True when a new entry was appended.
        now = time.time()
        last = self._entries[-1] if self._entries else None
        if last is not None and last.context == context and last.message == message:
            last.ts = now
            last.count += 1
            return False

        self._entries.append(ErrorEntry(ts=now, context=context, message=message, tb=tb))
        if len(self._entries) > self._max_items:
            del self._entries[: len(self._entries) - self._max_items]
        return True

    def _persist(self, *, context: str, message: str, tb: str | None) -> None:
        p = self._persist_path
        if p is None:
            return
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        lines = [f"[{stamp}] {context}: {message}"]
        if tb:
            lines.append(tb.rstrip())
        lines.append("")
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            with p.open("a", encoding="utf-8") as fh:
                fh.write("\n".join(lines))
        except OSError:
            logger.warning("could not append to %s", p)
