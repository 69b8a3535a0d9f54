from __future__ import annotations

import logging
from typing import Iterable, Protocol

from mazerun.app_config import Level
from mazerun.game.context import SimulationContext
from mazerun.game.presentation import Presentation, format_level_label
from mazerun.game.state_machine import GameState
from mazerun.maps.maze_loader import LevelGeometry
from mazerun.physics.collision_world import NO_COLLISION, CollisionWorld
from mazerun.physics.player_controller import PlayerController

logger = logging.getLogger(__name__)


class LevelLoader(Protocol):
    def request(self, level_index: int, level: Level) -> None: ...


class ScoreSink(Protocol):
    def add_score(self, level_name: str, seconds: float) -> None: ...
    def format_listing(self, level_names: Iterable[str]) -> str: ...


class LevelProgression:
    """
    Owns `ctx.level_index` and the installed level geometry.

    The index only moves forward during a run; `restart` is the one place it goes
    back to 0.
    """

    def __init__(
        self,
        *,
        controller: PlayerController,
        loader: LevelLoader,
        leaderboard: ScoreSink,
        presentation: Presentation,
    ) -> None:
        self._controller = controller
        self._loader = loader
        self._leaderboard = leaderboard
        self._presentation = presentation

    def level_names(self, ctx: SimulationContext) -> list[str]:
        return [lvl.name for lvl in ctx.levels]

    def refresh_leaderboard(self, ctx: SimulationContext) -> None:
        self._presentation.set_leaderboard_text(self._leaderboard.format_listing(self.level_names(ctx)))

    def request_current_level(self, ctx: SimulationContext) -> bool:
        level = ctx.current_level()
        if level is None:
            return False
        if ctx.pending_load == ctx.level_index:
            return False
        ctx.pending_load = ctx.level_index
        self._loader.request(ctx.level_index, level)
        return True

    def install_level(self, ctx: SimulationContext, *, level_index: int, geometry: LevelGeometry, now: float) -> bool:
        if level_index != ctx.level_index or ctx.pending_load != level_index:
            logger.info("dropping stale load for level %d (current %d)", level_index + 1, ctx.level_index + 1)
            return False
        level = ctx.current_level()
        if level is None:
            return False

        ctx.pending_load = None
        ctx.geometry = geometry
        ctx.collision = CollisionWorld(walls=list(geometry.walls), collision_distance=ctx.tuning.collision_distance)
        ctx.last_probe = NO_COLLISION
        self._controller.collision = ctx.collision
        self._controller.spawn(ctx.kin, x=geometry.spawn_xy[0], y=geometry.spawn_xy[1])
        ctx.intent.release_all()

        self._presentation.build_level(geometry)
        self._presentation.set_level_text(format_level_label(ctx.level_index, level.name))
        ctx.machine.begin_level(now=now)
        return True

    def load_failed(self, ctx: SimulationContext, *, level_index: int) -> None:
        if ctx.pending_load == level_index:
            ctx.pending_load = None
        # A run that was waiting for this level has nothing playable left.
        if ctx.geometry is None:
            if ctx.state is GameState.MAIN_MENU:
                # Restart path: the menus were hidden for the reload.
                self._presentation.show_main_menu(resume_available=False)
            else:
                ctx.machine.abandon_run()

    def clear_level(self, ctx: SimulationContext) -> None:
        ctx.geometry = None
        ctx.collision = None
        ctx.last_probe = NO_COLLISION
        self._controller.collision = None
        self._presentation.clear_level()

    def exit_reached(self, ctx: SimulationContext) -> bool:
        geometry = ctx.geometry
        if geometry is None or geometry.exit_point is None:
            return False
        d = ctx.kin.body_center() - geometry.exit_point
        return float(d.length()) < float(ctx.tuning.exit_radius)

    def check(self, ctx: SimulationContext, *, now: float) -> bool:
        """Run after a simulation step. Returns True when the current level was finished."""

        if not self.exit_reached(ctx):
            return False
        level = ctx.current_level()
        if level is None:
            return False

        elapsed = ctx.machine.timer.elapsed(now)
        logger.info("level %d (%s) completed in %.2f seconds", ctx.level_index + 1, level.name, elapsed)
        self._leaderboard.add_score(level.name, elapsed)
        self.refresh_leaderboard(ctx)

        ctx.level_index += 1
        self.clear_level(ctx)
        if ctx.level_index >= len(ctx.levels):
            logger.info("all levels completed")
            ctx.machine.complete()
            return True

        self._controller.spawn(ctx.kin)
        ctx.machine.timer.reset()
        self.request_current_level(ctx)
        return True

    def restart(self, ctx: SimulationContext) -> bool:
        if not ctx.machine.restart():
            return False
        ctx.level_index = 0
        ctx.pending_load = None
        self.clear_level(ctx)
        self._controller.spawn(ctx.kin)
        self.request_current_level(ctx)
        return True
