from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mazerun.app_config import LEVELS, Level
from mazerun.game.events import EventQueue
from mazerun.game.input_system import IntentState
from mazerun.game.presentation import NullPresentation, Presentation
from mazerun.game.state_machine import GameState, GameStateMachine
from mazerun.maps.maze_loader import LevelGeometry
from mazerun.physics.collision_world import NO_COLLISION, CollisionProbeResult, CollisionWorld
from mazerun.physics.player_controller import PlayerKinematics
from mazerun.physics.tuning import PhysicsTuning


class CameraMode(Enum):
    FIRST_PERSON = "first_person"
    THIRD_PERSON = "third_person"


@dataclass
class SimulationContext:
    """
    Everything one session mutates, passed explicitly to each frame stage.

    Ownership: `kin` belongs to the player controller, `intent` to the input stage,
    the game state to `machine`, `level_index`/`geometry` to level progression.
    """

    machine: GameStateMachine
    tuning: PhysicsTuning = field(default_factory=PhysicsTuning)
    levels: tuple[Level, ...] = LEVELS
    events: EventQueue = field(default_factory=EventQueue)
    intent: IntentState = field(default_factory=IntentState)
    kin: PlayerKinematics = field(default_factory=PlayerKinematics)
    camera_mode: CameraMode = CameraMode.FIRST_PERSON

    level_index: int = 0
    geometry: LevelGeometry | None = None
    collision: CollisionWorld | None = None
    # Level index whose asset request is in flight, if any.
    pending_load: int | None = None
    last_probe: CollisionProbeResult = NO_COLLISION

    @property
    def state(self) -> GameState:
        return self.machine.state

    def current_level(self) -> Level | None:
        if 0 <= self.level_index < len(self.levels):
            return self.levels[self.level_index]
        return None

    def level_ready(self) -> bool:
        return self.geometry is not None

    def toggle_camera(self) -> None:
        if self.camera_mode is CameraMode.FIRST_PERSON:
            self.camera_mode = CameraMode.THIRD_PERSON
        else:
            self.camera_mode = CameraMode.FIRST_PERSON


def new_context(
    *,
    presentation: Presentation | None = None,
    levels: tuple[Level, ...] | None = None,
    tuning: PhysicsTuning | None = None,
) -> SimulationContext:
    machine = GameStateMachine(presentation=presentation if presentation is not None else NullPresentation())
    ctx = SimulationContext(
        machine=machine,
        tuning=tuning if tuning is not None else PhysicsTuning(),
        levels=tuple(levels) if levels else LEVELS,
    )
    ctx.kin.eye_height = float(ctx.tuning.eye_height)
    ctx.kin.pos.z = ctx.kin.eye_height
    ctx.kin.grounded = True
    return ctx
