from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator, Union

from mazerun.maps.maze_loader import LevelGeometry


@dataclass(frozen=True)
class KeyDown:
    key: str


@dataclass(frozen=True)
class KeyUp:
    key: str


@dataclass(frozen=True)
class LookEvent:
    dx: float


@dataclass(frozen=True)
class StartRequested:
    pass


@dataclass(frozen=True)
class ResumeRequested:
    pass


@dataclass(frozen=True)
class RestartRequested:
    pass


@dataclass(frozen=True)
class AssetLoaded:
    level_index: int
    geometry: LevelGeometry


@dataclass(frozen=True)
class AssetFailed:
    level_index: int
    path: str
    message: str


GameEvent = Union[
    KeyDown,
    KeyUp,
    LookEvent,
    StartRequested,
    ResumeRequested,
    RestartRequested,
    AssetLoaded,
    AssetFailed,
]


class EventQueue:
    """
    FIFO of typed events drained once per frame by the frame loop.

    Collaborators (key handlers, menu buttons, the loader thread) only post; nothing
    acts on an event until the next drain. deque append/popleft are atomic, so the
    loader thread can post without a lock.
    """

    def __init__(self) -> None:
        self._items: deque[GameEvent] = deque()

    def post(self, event: GameEvent) -> None:
        self._items.append(event)

    def __len__(self) -> int:
        return len(self._items)

    def drain(self) -> Iterator[GameEvent]:
        # Events posted while draining wait for the next frame.
        for _ in range(len(self._items)):
            yield self._items.popleft()
