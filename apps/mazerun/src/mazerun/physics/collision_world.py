from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f

from mazerun.common.aabb import AABB

# Probe order matters: the first direction with a close hit decides which axis is zeroed.
PROBE_DIRECTIONS: tuple[tuple[str, float, float], ...] = (
    ("x", 1.0, 0.0),
    ("x", -1.0, 0.0),
    ("y", 0.0, 1.0),
    ("y", 0.0, -1.0),
)


@dataclass(frozen=True)
class CollisionProbeResult:
    blocked: bool = False
    zeroed_axes: frozenset[str] = frozenset()

    def apply(self, vel: LVector3f) -> None:
        if "x" in self.zeroed_axes:
            vel.x = 0.0
        if "y" in self.zeroed_axes:
            vel.y = 0.0


NO_COLLISION = CollisionProbeResult()


class CollisionWorld:
    """Static maze walls used for per-frame cardinal ray probes."""

    def __init__(self, *, walls: list[AABB], collision_distance: float) -> None:
        self.walls = list(walls)
        self.collision_distance = float(collision_distance)

    def ray_closest(self, *, origin: LVector3f, dx: float, dy: float) -> float | None:
        best: float | None = None
        for wall in self.walls:
            d = wall.ray_distance_xy(origin=origin, dx=dx, dy=dy)
            if d is not None and (best is None or d < best):
                best = d
        return best

    def probe(self, *, pos: LVector3f, vel: LVector3f, dt: float) -> CollisionProbeResult:
        """
        Probe around the position the player is about to move to.

        Rays start at `pos + vel * dt` (horizontal components only) and run along
        +x, -x, +y, -y. The first direction with a wall closer than `collision_distance`
        blocks the whole horizontal move for this frame and zeroes that axis.
        """

        if not self.walls:
            return NO_COLLISION

        origin = LVector3f(pos.x + vel.x * dt, pos.y + vel.y * dt, pos.z)
        for axis, dx, dy in PROBE_DIRECTIONS:
            d = self.ray_closest(origin=origin, dx=dx, dy=dy)
            if d is not None and d < self.collision_distance:
                return CollisionProbeResult(blocked=True, zeroed_axes=frozenset({axis}))
        return NO_COLLISION
