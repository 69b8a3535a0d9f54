from __future__ import annotations

from direct.showbase.ShowBase import ShowBase
from direct.showbase.ShowBaseGlobal import globalClock
from direct.task import Task
from panda3d.core import ModifierButtons, WindowProperties, loadPrcFileData

from mazerun.app_config import RunConfig
from mazerun.common.error_log import ErrorLog
from mazerun.game.context import CameraMode
from mazerun.game.events import KeyDown, KeyUp, LookEvent, RestartRequested, ResumeRequested, StartRequested
from mazerun.game.session import build_session
from mazerun.game.state_machine import GameState
from mazerun.state import Leaderboard, critical_log_path
from mazerun.ui.maze_view import MazeView


class MazeApp(ShowBase):
    def __init__(self, cfg: RunConfig) -> None:
        # Keep audio from being a dependency for smoke runs / CI.
        loadPrcFileData("", "audio-library-name null")
        loadPrcFileData("", "window-title Maze Runner")
        if cfg.smoke:
            # Avoid flashing a window in quick verification runs.
            loadPrcFileData("", "window-type offscreen")

        super().__init__()

        self.cfg = cfg
        self.disableMouse()
        self.error_log = ErrorLog(persist_path=critical_log_path())
        self._pointer_locked = False

        self.view = MazeView(
            base=self,
            on_start=lambda: self.session.ctx.events.post(StartRequested()),
            on_resume=lambda: self.session.ctx.events.post(ResumeRequested()),
            on_restart=lambda: self.session.ctx.events.post(RestartRequested()),
            on_exit=self.userExit,
        )
        self.session = build_session(
            presentation=self.view,
            levels=cfg.level_table(),
            leaderboard=Leaderboard(),
            error_log=self.error_log,
        )
        if cfg.third_person:
            self.session.ctx.camera_mode = CameraMode.THIRD_PERSON

        self._setup_input()
        self.taskMgr.add(self._update, "frame-loop")

        if cfg.smoke:
            self.session.ctx.events.post(StartRequested())
            self._frames_left = 30
            self.taskMgr.add(self._smoke_task, "smoke-exit")

    def _setup_input(self) -> None:
        # Route every button through two generic events; the input mapper decides what
        # matters. Modifiers are cleared so "shift-w" still arrives as "w".
        bt = self.buttonThrowers[0].node()
        bt.setButtonDownEvent("button-down")
        bt.setButtonUpEvent("button-up")
        bt.setModifierButtons(ModifierButtons())
        self.mouseWatcherNode.setModifierButtons(ModifierButtons())
        self.accept("button-down", self._on_button_down)
        self.accept("button-up", self._on_button_up)

    def _on_button_down(self, key: str) -> None:
        self.session.ctx.events.post(KeyDown(key=str(key)))

    def _on_button_up(self, key: str) -> None:
        self.session.ctx.events.post(KeyUp(key=str(key)))

    def _set_pointer_lock(self, locked: bool) -> None:
        if self._pointer_locked == locked or self.win is None or self.cfg.smoke:
            return
        props = WindowProperties()
        props.setCursorHidden(locked)
        props.setMouseMode(WindowProperties.M_relative if locked else WindowProperties.M_absolute)
        self.win.requestProperties(props)
        self._pointer_locked = locked
        if locked:
            self._center_mouse()

    def _center_mouse(self) -> None:
        self.win.movePointer(0, self.win.getXSize() // 2, self.win.getYSize() // 2)

    def _poll_mouse_look(self) -> None:
        if not self._pointer_locked:
            return
        cx = self.win.getXSize() // 2
        pointer = self.win.getPointer(0)
        dx = float(pointer.getX() - cx)
        if dx != 0.0:
            self.session.ctx.events.post(LookEvent(dx=dx))
        self._center_mouse()

    def _update(self, task: Task.Task) -> int:
        ctx = self.session.ctx
        self._set_pointer_lock(ctx.state is GameState.PLAYING)
        self._poll_mouse_look()
        try:
            self.session.loop.tick(globalClock.getFrameTime())
        except Exception as e:
            self.error_log.log_exception(context="frame", exc=e)
        return Task.cont

    def _smoke_task(self, task: Task.Task) -> int:
        self._frames_left -= 1
        if self._frames_left <= 0:
            self.userExit()
            return Task.done
        return Task.cont


def run(*, smoke: bool = False, third_person: bool = False) -> None:
    app = MazeApp(RunConfig(smoke=smoke, third_person=third_person))
    app.run()
