from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f


@dataclass(frozen=True)
class AABB:
    minimum: LVector3f
    maximum: LVector3f

    def center(self) -> LVector3f:
        return (self.minimum + self.maximum) * 0.5

    def half_extents(self) -> LVector3f:
        return (self.maximum - self.minimum) * 0.5

    def contains_z(self, z: float) -> bool:
        return float(self.minimum.z) <= float(z) <= float(self.maximum.z)

    def ray_distance_xy(self, *, origin: LVector3f, dx: float, dy: float) -> float | None:
        """
        Distance along a horizontal ray to the first face it enters, or None.

        `(dx, dy)` must be a unit direction. The ray height is `origin.z`; boxes that do
        not span that height are never hit. Origins inside the box report no hit (only
        faces in front of the origin count, like front-face raycasting).
        """

        if not self.contains_z(origin.z):
            return None

        t_near = float("-inf")
        t_far = float("inf")
        for o, d, lo, hi in (
            (float(origin.x), float(dx), float(self.minimum.x), float(self.maximum.x)),
            (float(origin.y), float(dy), float(self.minimum.y), float(self.maximum.y)),
        ):
            if abs(d) < 1e-12:
                if o < lo or o > hi:
                    return None
                continue
            t0 = (lo - o) / d
            t1 = (hi - o) / d
            if t0 > t1:
                t0, t1 = t1, t0
            t_near = max(t_near, t0)
            t_far = min(t_far, t1)
            if t_near > t_far:
                return None

        if t_far < 0.0 or t_near < 0.0:
            return None
        return t_near


def aabb_from_json(obj: object) -> AABB | None:
    if not isinstance(obj, dict):
        return None
    mn = obj.get("min")
    mx = obj.get("max")
    if not (isinstance(mn, list) and isinstance(mx, list) and len(mn) == 3 and len(mx) == 3):
        return None
    try:
        lo = [float(v) for v in mn]
        hi = [float(v) for v in mx]
    except (TypeError, ValueError):
        return None
    # Accept corners in any order.
    return AABB(
        minimum=LVector3f(min(lo[0], hi[0]), min(lo[1], hi[1]), min(lo[2], hi[2])),
        maximum=LVector3f(max(lo[0], hi[0]), max(lo[1], hi[1]), max(lo[2], hi[2])),
    )


def aabb_to_json(box: AABB) -> dict:
    mn = box.minimum
    mx = box.maximum
    return {"min": [float(mn.x), float(mn.y), float(mn.z)], "max": [float(mx.x), float(mx.y), float(mx.z)]}
