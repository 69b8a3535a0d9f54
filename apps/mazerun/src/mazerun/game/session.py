from __future__ import annotations

from dataclasses import dataclass

from mazerun.app_config import Level
from mazerun.common.error_log import ErrorLog
from mazerun.game.context import SimulationContext, new_context
from mazerun.game.events import AssetFailed, AssetLoaded
from mazerun.game.frame_loop import FrameLoop
from mazerun.game.presentation import NullPresentation, Presentation
from mazerun.maps.maze_loader import LevelGeometry, MazeLoader
from mazerun.modes.progression import LevelLoader, LevelProgression, ScoreSink
from mazerun.physics.player_controller import PlayerController
from mazerun.physics.tuning import PhysicsTuning
from mazerun.state import Leaderboard


@dataclass
class Session:
    ctx: SimulationContext
    loop: FrameLoop
    progression: LevelProgression
    loader: LevelLoader
    leaderboard: ScoreSink
    error_log: ErrorLog


def build_session(
    *,
    presentation: Presentation | None = None,
    levels: tuple[Level, ...] | None = None,
    tuning: PhysicsTuning | None = None,
    leaderboard: ScoreSink | None = None,
    loader: LevelLoader | None = None,
    error_log: ErrorLog | None = None,
    threaded_loading: bool = True,
) -> Session:
    """
    Wire one game session. Without an explicit loader, maze files are loaded by a
    `MazeLoader` whose callbacks post `AssetLoaded` / `AssetFailed` into the event queue.
    """

    view = presentation if presentation is not None else NullPresentation()
    ctx = new_context(presentation=view, levels=levels, tuning=tuning)
    board = leaderboard if leaderboard is not None else Leaderboard()
    log = error_log if error_log is not None else ErrorLog()

    if loader is None:

        def on_loaded(level_index: int, geometry: LevelGeometry) -> None:
            ctx.events.post(AssetLoaded(level_index=level_index, geometry=geometry))

        def on_failed(level_index: int, path: str, message: str) -> None:
            ctx.events.post(AssetFailed(level_index=level_index, path=path, message=message))

        loader = MazeLoader(on_loaded=on_loaded, on_failed=on_failed, threaded=threaded_loading)

    controller = PlayerController(tuning=ctx.tuning)
    progression = LevelProgression(controller=controller, loader=loader, leaderboard=board, presentation=view)
    loop = FrameLoop(ctx=ctx, controller=controller, progression=progression, presentation=view, error_log=log)
    progression.refresh_leaderboard(ctx)
    view.show_main_menu(resume_available=False)
    return Session(ctx=ctx, loop=loop, progression=progression, loader=loader, leaderboard=board, error_log=log)
