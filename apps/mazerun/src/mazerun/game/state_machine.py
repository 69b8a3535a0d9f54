from __future__ import annotations

import logging
from enum import Enum

from mazerun.game.presentation import Presentation
from mazerun.game.timer import ElapsedTimer

logger = logging.getLogger(__name__)


class GameState(Enum):
    MAIN_MENU = "main_menu"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"


class GameStateMachine:
    """
    Authoritative game mode. Every transition goes through one of the methods below;
    each returns True when it was applied and False when the trigger is not
    legal from the current state (ignored).

    The machine also owns the level timer: it starts on `begin_level`, freezes on
    `pause` and thaws on `resume`. A level begun while paused starts its timer frozen.
    """

    def __init__(self, *, presentation: Presentation, timer: ElapsedTimer | None = None) -> None:
        self._state = GameState.MAIN_MENU
        self._presentation = presentation
        self.timer = timer if timer is not None else ElapsedTimer()

    @property
    def state(self) -> GameState:
        return self._state

    def is_simulating(self) -> bool:
        return self._state is GameState.PLAYING

    def _ignored(self, trigger: str) -> bool:
        logger.debug("ignoring %s in state %s", trigger, self._state.value)
        return False

    def begin_level(self, *, now: float) -> bool:
        # Entered from the menu (start/restart) or while a run waits for its next level.
        if self._state is GameState.PAUSED:
            # Next level arrived while paused between levels: armed but frozen until resume.
            self.timer.start(now)
            self.timer.pause(now)
            return True
        if self._state not in (GameState.MAIN_MENU, GameState.PLAYING):
            return self._ignored("begin_level")
        self._state = GameState.PLAYING
        self.timer.start(now)
        self._presentation.hide_menus()
        return True

    def pause(self, *, now: float) -> bool:
        if self._state is not GameState.PLAYING:
            return self._ignored("pause")
        self._state = GameState.PAUSED
        self.timer.pause(now)
        self._presentation.show_main_menu(resume_available=True)
        return True

    def resume(self, *, now: float) -> bool:
        if self._state is not GameState.PAUSED:
            return self._ignored("resume")
        self._state = GameState.PLAYING
        self.timer.resume(now)
        self._presentation.hide_menus()
        return True

    def toggle_pause(self, *, now: float) -> bool:
        if self._state is GameState.PLAYING:
            return self.pause(now=now)
        if self._state is GameState.PAUSED:
            return self.resume(now=now)
        return self._ignored("toggle_pause")

    def complete(self) -> bool:
        if self._state is not GameState.PLAYING:
            return self._ignored("complete")
        self._state = GameState.COMPLETED
        self.timer.reset()
        self._presentation.show_completion()
        return True

    def restart(self) -> bool:
        if self._state is not GameState.COMPLETED:
            return self._ignored("restart")
        self._state = GameState.MAIN_MENU
        self.timer.reset()
        self._presentation.hide_menus()
        return True

    def abandon_run(self) -> bool:
        """Back to the main menu when a run cannot continue (next level failed to load)."""
        if self._state not in (GameState.PLAYING, GameState.PAUSED):
            return self._ignored("abandon_run")
        self._state = GameState.MAIN_MENU
        self.timer.reset()
        self._presentation.show_main_menu(resume_available=False)
        return True
