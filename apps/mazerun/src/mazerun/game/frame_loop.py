from __future__ import annotations

import logging

from mazerun.common.error_log import ErrorLog
from mazerun.game.context import SimulationContext
from mazerun.game.events import (
    AssetFailed,
    AssetLoaded,
    GameEvent,
    KeyDown,
    KeyUp,
    LookEvent,
    RestartRequested,
    ResumeRequested,
    StartRequested,
)
from mazerun.game.input_system import apply_key_down, apply_key_up, apply_look
from mazerun.game.presentation import Presentation, format_timer
from mazerun.game.state_machine import GameState
from mazerun.modes.progression import LevelProgression
from mazerun.physics.player_controller import PlayerController

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Per-frame driver. One `tick(now)` runs, in order:

    1. drain the event queue (input, menu requests, loader results)
    2. physics step + wall probe (only while PLAYING with a level installed)
    3. level progression (exit check, score, next level / completion)
    4. HUD timer text, then render

    `now` is the host clock in seconds. The previous-frame time is tracked on every
    tick, simulated or not, so leaving the menu never produces one huge step.
    """

    def __init__(
        self,
        *,
        ctx: SimulationContext,
        controller: PlayerController,
        progression: LevelProgression,
        presentation: Presentation,
        error_log: ErrorLog,
    ) -> None:
        self.ctx = ctx
        self.controller = controller
        self.progression = progression
        self.presentation = presentation
        self.error_log = error_log
        self._prev_now: float | None = None
        self.frames_simulated = 0

    def frame_dt(self, now: float) -> float:
        prev = self._prev_now
        self._prev_now = float(now)
        if prev is None:
            return 0.0
        return max(0.0, min(float(self.ctx.tuning.max_frame_dt), float(now) - prev))

    def tick(self, now: float) -> None:
        ctx = self.ctx
        dt = self.frame_dt(now)

        for event in ctx.events.drain():
            self.handle_event(event, now=now)

        if ctx.intent.consume_camera_toggle():
            ctx.toggle_camera()

        if ctx.machine.is_simulating() and ctx.level_ready():
            ctx.last_probe = self.controller.step(ctx.kin, ctx.intent, dt=dt)
            self.frames_simulated += 1
            self.progression.check(ctx, now=now)
        else:
            # Edge requests do not carry over into the next simulated frame.
            ctx.intent.consume_jump()

        if ctx.state in (GameState.PLAYING, GameState.PAUSED) and ctx.level_ready():
            self.presentation.set_timer_text(format_timer(ctx.machine.timer.elapsed(now)))
        self.presentation.render(ctx)

    def handle_event(self, event: GameEvent, *, now: float) -> None:
        ctx = self.ctx
        if isinstance(event, KeyDown):
            if apply_key_down(ctx.intent, event.key):
                ctx.machine.toggle_pause(now=now)
        elif isinstance(event, KeyUp):
            apply_key_up(ctx.intent, event.key)
        elif isinstance(event, LookEvent):
            if ctx.machine.is_simulating():
                apply_look(ctx.intent, event.dx)
        elif isinstance(event, StartRequested):
            if ctx.state is GameState.MAIN_MENU:
                self.progression.request_current_level(ctx)
        elif isinstance(event, ResumeRequested):
            ctx.machine.resume(now=now)
        elif isinstance(event, RestartRequested):
            self.progression.restart(ctx)
        elif isinstance(event, AssetLoaded):
            self.progression.install_level(ctx, level_index=event.level_index, geometry=event.geometry, now=now)
        elif isinstance(event, AssetFailed):
            self.error_log.log_message(
                context="maze.load",
                message=f"level {event.level_index + 1} ({event.path}): {event.message}",
            )
            self.progression.load_failed(ctx, level_index=event.level_index)
        else:
            logger.debug("unhandled event %r", event)
