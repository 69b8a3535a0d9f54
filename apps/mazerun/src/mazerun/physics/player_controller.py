from __future__ import annotations

import math
from dataclasses import dataclass, field

from panda3d.core import LVector3f

from mazerun.game.input_system import IntentState
from mazerun.physics.collision_world import NO_COLLISION, CollisionProbeResult, CollisionWorld
from mazerun.physics.tuning import PhysicsTuning


@dataclass
class PlayerKinematics:
    # Eye position; z is up.
    pos: LVector3f = field(default_factory=lambda: LVector3f(0, 0, 0))
    vel: LVector3f = field(default_factory=lambda: LVector3f(0, 0, 0))
    eye_height: float = 1.8
    grounded: bool = False
    yaw_deg: float = 0.0

    def body_center(self) -> LVector3f:
        return LVector3f(self.pos.x, self.pos.y, self.pos.z - self.eye_height * 0.5)

    def horizontal_speed(self) -> float:
        return math.sqrt(self.vel.x * self.vel.x + self.vel.y * self.vel.y)


class PlayerController:
    """
    Semi-implicit Euler player integrator: damping, gravity, intent acceleration,
    jump, wall probe, then a flat floor clamp at eye height.
    """

    def __init__(self, *, tuning: PhysicsTuning, collision: CollisionWorld | None = None) -> None:
        self.tuning = tuning
        self.collision = collision

    def spawn(self, kin: PlayerKinematics, *, x: float = 0.0, y: float = 0.0) -> None:
        kin.eye_height = float(self.tuning.eye_height)
        kin.pos = LVector3f(float(x), float(y), kin.eye_height)
        kin.vel = LVector3f(0, 0, 0)
        kin.grounded = True
        kin.yaw_deg = 0.0

    def wish_dir(self, intent: IntentState, *, yaw_deg: float) -> LVector3f:
        fwd, right = intent.move_axes()
        local = LVector3f(float(right), float(fwd), 0.0)
        if local.lengthSquared() <= 1e-12:
            return LVector3f(0, 0, 0)
        local.normalize()
        # Same heading convention as the camera: forward = (-sin(h), cos(h)).
        h = math.radians(float(yaw_deg))
        c = math.cos(h)
        s = math.sin(h)
        return LVector3f(local.x * c - local.y * s, local.x * s + local.y * c, 0.0)

    def step(self, kin: PlayerKinematics, intent: IntentState, *, dt: float) -> CollisionProbeResult:
        dt = max(0.0, float(dt))
        t = self.tuning

        look_dx = intent.consume_look_dx()
        if look_dx:
            kin.yaw_deg = (kin.yaw_deg - look_dx * float(t.mouse_sensitivity)) % 360.0

        # Clamped so one step can slow the player to a stop but never reverse them.
        decay = min(1.0, float(t.damping) * dt)
        kin.vel.x -= kin.vel.x * decay
        kin.vel.y -= kin.vel.y * decay
        kin.vel.z -= float(t.gravity) * dt

        if intent.has_move_intent():
            wish = self.wish_dir(intent, yaw_deg=kin.yaw_deg)
            kin.vel.x += wish.x * float(t.move_force) * dt
            kin.vel.y += wish.y * float(t.move_force) * dt

        if intent.consume_jump() and kin.grounded:
            kin.vel.z += float(t.jump_impulse)
            kin.grounded = False

        result = NO_COLLISION
        if self.collision is not None:
            result = self.collision.probe(pos=kin.pos, vel=kin.vel, dt=dt)

        if not result.blocked:
            kin.pos.x += kin.vel.x * dt
            kin.pos.y += kin.vel.y * dt
        result.apply(kin.vel)

        kin.pos.z += kin.vel.z * dt
        if kin.pos.z < kin.eye_height:
            kin.vel.z = 0.0
            kin.pos.z = kin.eye_height
            kin.grounded = True

        return result
