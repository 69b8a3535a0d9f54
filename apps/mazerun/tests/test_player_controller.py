from __future__ import annotations

import pytest
from panda3d.core import LVector3f

from mazerun.common.aabb import AABB
from mazerun.game.input_system import IntentState
from mazerun.physics.collision_world import CollisionWorld
from mazerun.physics.player_controller import PlayerController, PlayerKinematics
from mazerun.physics.tuning import PhysicsTuning

DT = 1.0 / 60.0


def _grounded_kin() -> PlayerKinematics:
    return PlayerKinematics(pos=LVector3f(0, 0, 1.8), vel=LVector3f(0, 0, 0), eye_height=1.8, grounded=True)


@pytest.mark.parametrize("dt", [DT, 0.05, 0.1, 0.5])
def test_damping_never_reverses_velocity(dt: float) -> None:
    ctrl = PlayerController(tuning=PhysicsTuning())
    kin = _grounded_kin()
    kin.vel = LVector3f(10.0, -10.0, 0.0)

    ctrl.step(kin, IntentState(), dt=dt)

    assert 0.0 <= kin.vel.x < 10.0
    assert -10.0 < kin.vel.y <= 0.0


def test_large_step_stops_horizontal_motion_without_overshoot() -> None:
    ctrl = PlayerController(tuning=PhysicsTuning())
    kin = _grounded_kin()
    kin.vel = LVector3f(4.0, 3.0, 0.0)
    ctrl.step(kin, IntentState(), dt=0.5)
    assert kin.vel.x == 0.0
    assert kin.vel.y == 0.0


def test_fall_settles_at_eye_height() -> None:
    ctrl = PlayerController(tuning=PhysicsTuning())
    kin = PlayerKinematics(pos=LVector3f(0, 0, 10.0), eye_height=1.8, grounded=False)

    prev_z = kin.pos.z
    for _ in range(120):
        ctrl.step(kin, IntentState(), dt=DT)
        assert kin.pos.z >= 1.8 - 1e-5
        assert kin.pos.z <= prev_z + 1e-5
        prev_z = kin.pos.z

    assert kin.pos.z == pytest.approx(1.8, abs=1e-5)
    assert kin.vel.z == 0.0
    assert kin.grounded


def test_forward_acceleration_from_rest_matches_closed_form() -> None:
    ctrl = PlayerController(tuning=PhysicsTuning())
    kin = _grounded_kin()
    intent = IntentState(forward=True)

    prev_y = kin.pos.y
    for _ in range(60):
        ctrl.step(kin, intent, dt=DT)
        assert kin.pos.y > prev_y
        prev_y = kin.pos.y

    # v_n = (F/k) * (1 - (1 - k*dt)^n) with F=400, k=10.
    expected = 40.0 * (1.0 - (5.0 / 6.0) ** 60)
    assert kin.vel.y == pytest.approx(expected, abs=1e-2)
    assert kin.vel.x == pytest.approx(0.0, abs=1e-6)
    assert kin.pos.z == pytest.approx(1.8, abs=1e-5)


def test_jump_only_applies_when_grounded() -> None:
    ctrl = PlayerController(tuning=PhysicsTuning())
    kin = PlayerKinematics(pos=LVector3f(0, 0, 5.0), eye_height=1.8, grounded=False)
    intent = IntentState(jump_requested=True)

    ctrl.step(kin, intent, dt=DT)

    assert kin.vel.z == pytest.approx(-980.0 * DT, abs=1e-3)
    assert intent.jump_requested is False


def test_grounded_jump_leaves_floor_once() -> None:
    ctrl = PlayerController(tuning=PhysicsTuning())
    kin = _grounded_kin()
    intent = IntentState(jump_requested=True)

    ctrl.step(kin, intent, dt=DT)
    assert kin.vel.z == pytest.approx(350.0 - 980.0 * DT, abs=1e-3)
    assert kin.pos.z > 1.8
    assert not kin.grounded

    # Pressing again mid-air adds nothing.
    intent.jump_requested = True
    ctrl.step(kin, intent, dt=DT)
    assert kin.vel.z == pytest.approx(350.0 - 2.0 * 980.0 * DT, abs=1e-3)


def test_wall_hit_suppresses_whole_horizontal_move() -> None:
    wall = AABB(LVector3f(0.3, -2.0, 0.0), LVector3f(0.8, 2.0, 3.0))
    ctrl = PlayerController(
        tuning=PhysicsTuning(),
        collision=CollisionWorld(walls=[wall], collision_distance=0.5),
    )
    kin = _grounded_kin()
    kin.vel = LVector3f(3.0, 2.0, 0.0)

    result = ctrl.step(kin, IntentState(), dt=DT)

    assert result.blocked
    assert kin.pos.x == 0.0
    assert kin.pos.y == 0.0
    assert kin.vel.x == 0.0
    assert kin.vel.y != 0.0


def test_spawn_resets_kinematics() -> None:
    ctrl = PlayerController(tuning=PhysicsTuning())
    kin = PlayerKinematics(pos=LVector3f(5, 5, 9), vel=LVector3f(1, 2, 3), yaw_deg=45.0)
    ctrl.spawn(kin, x=1.0, y=2.0)
    assert (kin.pos.x, kin.pos.y, kin.pos.z) == pytest.approx((1.0, 2.0, 1.8))
    assert kin.vel.length() == 0.0
    assert kin.grounded
    assert kin.yaw_deg == 0.0


def test_wish_dir_follows_heading() -> None:
    ctrl = PlayerController(tuning=PhysicsTuning())
    wish = ctrl.wish_dir(IntentState(forward=True), yaw_deg=90.0)
    assert wish.x == pytest.approx(-1.0, abs=1e-6)
    assert wish.y == pytest.approx(0.0, abs=1e-6)

    diag = ctrl.wish_dir(IntentState(forward=True, right=True), yaw_deg=0.0)
    assert diag.length() == pytest.approx(1.0, abs=1e-6)


def test_mouse_look_turns_heading() -> None:
    ctrl = PlayerController(tuning=PhysicsTuning(mouse_sensitivity=0.5))
    kin = _grounded_kin()
    intent = IntentState(look_dx=20.0)
    ctrl.step(kin, intent, dt=DT)
    assert kin.yaw_deg == pytest.approx(350.0)
    assert intent.look_dx == 0.0
