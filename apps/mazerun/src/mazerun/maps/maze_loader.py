from __future__ import annotations

import json
import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from panda3d.core import LVector3f

from mazerun.app_config import Level
from mazerun.common.aabb import AABB, aabb_from_json
from mazerun.paths import assets_root

logger = logging.getLogger(__name__)


class MazeFormatError(ValueError):
    pass


@dataclass(frozen=True)
class LevelGeometry:
    """Tagged geometry of one maze: collidable walls, optional exit point, spawn."""

    walls: tuple[AABB, ...]
    exit_point: LVector3f | None = None
    spawn_xy: tuple[float, float] = (0.0, 0.0)
    source: str = ""
    floor_half_size: float = 0.0


def _vec3(raw: object) -> LVector3f | None:
    if not (isinstance(raw, list) and len(raw) == 3):
        return None
    try:
        x, y, z = (float(v) for v in raw)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return None
    return LVector3f(x, y, z)


def parse_maze_payload(payload: object, *, source: str = "") -> LevelGeometry:
    """
    Build level geometry from a decoded maze JSON document.

    Format:
      {"walls": [{"min": [x, y, z], "max": [x, y, z]}, ...],
       "exit": [x, y, z] | null,
       "spawn": [x, y]}

    Individual malformed walls are skipped. A document without a `walls` list is
    rejected so a broken file never turns into an empty, playable level.
    """

    if not isinstance(payload, dict):
        raise MazeFormatError("maze document must be a JSON object")
    raw_walls = payload.get("walls")
    if not isinstance(raw_walls, list):
        raise MazeFormatError("maze document has no 'walls' list")

    walls: list[AABB] = []
    for i, raw in enumerate(raw_walls):
        box = aabb_from_json(raw)
        if box is None:
            logger.warning("%s: skipping malformed wall #%d", source or "<maze>", i)
            continue
        walls.append(box)

    exit_point = _vec3(payload.get("exit"))

    spawn_xy = (0.0, 0.0)
    raw_spawn = payload.get("spawn")
    if isinstance(raw_spawn, list) and len(raw_spawn) == 2:
        try:
            spawn_xy = (float(raw_spawn[0]), float(raw_spawn[1]))
        except (TypeError, ValueError):
            spawn_xy = (0.0, 0.0)

    extent = 0.0
    for box in walls:
        extent = max(extent, abs(box.minimum.x), abs(box.maximum.x), abs(box.minimum.y), abs(box.maximum.y))

    return LevelGeometry(
        walls=tuple(walls),
        exit_point=exit_point,
        spawn_xy=spawn_xy,
        source=source,
        floor_half_size=extent,
    )


def resolve_asset_path(asset_ref: str) -> Path:
    p = Path(asset_ref)
    if p.is_absolute():
        return p
    return assets_root() / p


def load_maze_file(path: Path) -> LevelGeometry:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise MazeFormatError(f"cannot read {path}: {e}") from e
    except ValueError as e:
        raise MazeFormatError(f"invalid JSON in {path}: {e}") from e
    return parse_maze_payload(payload, source=str(path))


LoadedCallback = Callable[[int, LevelGeometry], None]
FailedCallback = Callable[[int, str, str], None]


class MazeLoader:
    """
    Loads maze files off the frame thread and reports through callbacks.

    Exactly one of `on_loaded(level_index, geometry)` / `on_failed(level_index, path,
    message)` fires per request. Failed loads are not retried.
    """

    def __init__(self, *, on_loaded: LoadedCallback, on_failed: FailedCallback, threaded: bool = True) -> None:
        self._on_loaded = on_loaded
        self._on_failed = on_failed
        self._threaded = bool(threaded)
        self._thread: threading.Thread | None = None

    def request(self, level_index: int, level: Level) -> None:
        path = resolve_asset_path(level.asset_ref)
        logger.info("loading level %d (%s) from %s", level_index + 1, level.name, path)
        if not self._threaded:
            self._load(level_index, path)
            return
        self._thread = threading.Thread(target=self._load, args=(level_index, path), daemon=True)
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _load(self, level_index: int, path: Path) -> None:
        try:
            geometry = load_maze_file(path)
        except MazeFormatError as e:
            self._on_failed(level_index, str(path), str(e))
            return
        self._on_loaded(level_index, geometry)
