from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PhysicsTuning:
    # Horizontal velocity decay rate (1/s). Applied as v -= v * damping * dt.
    damping: float = 10.0
    # Game-feel gravity (units/s^2).
    gravity: float = 980.0
    move_force: float = 400.0
    jump_impulse: float = 350.0
    eye_height: float = 1.8

    # Wall probes: a hit closer than this blocks the frame's horizontal move.
    collision_distance: float = 0.5
    # Avatar-centre to exit-marker distance that completes a level.
    exit_radius: float = 1.5

    # Upper bound on one frame's dt (s).
    max_frame_dt: float = 0.05

    mouse_sensitivity: float = 0.14

    # Chase camera offset in player-local space (behind and above the avatar).
    third_person_back: float = 5.0
    third_person_up: float = 2.0
