from __future__ import annotations

import math
from typing import Callable

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectGui import DirectButton, DirectFrame, DirectLabel
from direct.gui.OnscreenText import OnscreenText
from panda3d.core import AmbientLight, DirectionalLight, LVector3f, LVector4, TextNode

from mazerun.game.context import CameraMode, SimulationContext
from mazerun.maps.maze_loader import LevelGeometry

WALL_COLOR = (0.55, 0.58, 0.62, 1.0)
FLOOR_COLOR = (0.20, 0.22, 0.24, 1.0)
EXIT_COLOR = (0.20, 0.85, 0.35, 1.0)
AVATAR_COLOR = (1.0, 0.1, 0.1, 1.0)

PANEL_COLOR = (0.06, 0.07, 0.09, 0.88)
BUTTON_COLOR = (0.20, 0.24, 0.30, 1.0)
TEXT_COLOR = (0.95, 0.95, 0.95, 1.0)


class MazeView:
    """
    Panda3D presentation: graybox maze, avatar, first/third-person camera, HUD text and
    the main menu / completion screens. Reads the simulation context, never writes it.
    """

    def __init__(
        self,
        *,
        base,
        on_start: Callable[[], None],
        on_resume: Callable[[], None],
        on_restart: Callable[[], None],
        on_exit: Callable[[], None],
    ) -> None:
        self._base = base
        self._world_root = base.render.attachNewNode("maze-root")
        self._setup_lighting()

        # Avatar sphere is only visible from the chase camera.
        self._avatar = base.loader.loadModel("models/misc/sphere")
        self._avatar.reparentTo(base.render)
        self._avatar.setScale(0.5)
        self._avatar.setColor(*AVATAR_COLOR)
        self._avatar.hide()

        self._timer_text = self._hud_text(pos=(-1.30, 0.90), align=TextNode.ALeft)
        self._level_text = self._hud_text(pos=(-1.30, 0.83), align=TextNode.ALeft)
        self._leaderboard_text = self._hud_text(pos=(1.30, 0.90), align=TextNode.ARight, scale=0.040)

        self._menu = DirectFrame(
            parent=base.aspect2d,
            frameColor=PANEL_COLOR,
            relief=DGG.FLAT,
            frameSize=(-0.55, 0.55, -0.50, 0.50),
        )
        DirectLabel(
            parent=self._menu,
            text="Maze Runner",
            text_scale=0.10,
            text_fg=TEXT_COLOR,
            frameColor=(0, 0, 0, 0),
            pos=(0.0, 0.0, 0.32),
        )
        self._start_button = self._button(self._menu, "Start Game", z=0.12, command=on_start)
        self._resume_button = self._button(self._menu, "Resume Game", z=-0.04, command=on_resume)
        self._button(self._menu, "Exit Game", z=-0.20, command=on_exit)

        self._completion = DirectFrame(
            parent=base.aspect2d,
            frameColor=PANEL_COLOR,
            relief=DGG.FLAT,
            frameSize=(-0.70, 0.70, -0.40, 0.40),
        )
        DirectLabel(
            parent=self._completion,
            text="Congratulations!",
            text_scale=0.10,
            text_fg=TEXT_COLOR,
            frameColor=(0, 0, 0, 0),
            pos=(0.0, 0.0, 0.20),
        )
        DirectLabel(
            parent=self._completion,
            text="You've completed all levels!",
            text_scale=0.055,
            text_fg=TEXT_COLOR,
            frameColor=(0, 0, 0, 0),
            pos=(0.0, 0.0, 0.05),
        )
        self._button(self._completion, "Play Again", z=-0.18, command=on_restart)
        self._completion.hide()

    def _setup_lighting(self) -> None:
        render = self._base.render
        ambient = AmbientLight("ambient")
        ambient.setColor(LVector4(0.5, 0.5, 0.5, 1))
        render.setLight(render.attachNewNode(ambient))

        sun = DirectionalLight("sun")
        sun.setColor(LVector4(0.5, 0.5, 0.5, 1))
        sun_np = render.attachNewNode(sun)
        sun_np.setHpr(45, -45, 0)
        render.setLight(sun_np)

    def _hud_text(self, *, pos: tuple[float, float], align, scale: float = 0.050) -> OnscreenText:
        return OnscreenText(
            text="",
            parent=self._base.aspect2d,
            pos=pos,
            align=align,
            scale=scale,
            fg=TEXT_COLOR,
            shadow=(0, 0, 0, 0.6),
            mayChange=True,
        )

    @staticmethod
    def _button(parent, text: str, *, z: float, command: Callable[[], None]) -> DirectButton:
        return DirectButton(
            parent=parent,
            text=text,
            text_scale=0.06,
            text_fg=TEXT_COLOR,
            frameColor=BUTTON_COLOR,
            relief=DGG.FLAT,
            frameSize=(-0.38, 0.38, -0.05, 0.08),
            pos=(0.0, 0.0, z),
            command=command,
        )

    # Presentation

    def show_main_menu(self, *, resume_available: bool) -> None:
        self._completion.hide()
        if resume_available:
            self._resume_button.show()
            self._start_button.hide()
        else:
            self._resume_button.hide()
            self._start_button.show()
        self._menu.show()

    def hide_menus(self) -> None:
        self._menu.hide()
        self._completion.hide()

    def show_completion(self) -> None:
        self._menu.hide()
        self._completion.show()
        self._timer_text.setText("")

    def set_timer_text(self, text: str) -> None:
        self._timer_text.setText(text)

    def set_level_text(self, text: str) -> None:
        self._level_text.setText(text)

    def set_leaderboard_text(self, text: str) -> None:
        self._leaderboard_text.setText(text)

    def build_level(self, geometry: LevelGeometry) -> None:
        self.clear_level()
        loader = self._base.loader
        for wall in geometry.walls:
            center = wall.center()
            half = wall.half_extents()
            model = loader.loadModel("models/box")
            model.reparentTo(self._world_root)
            model.setPos(center)
            model.setScale(max(0.01, half.x), max(0.01, half.y), max(0.01, half.z))
            model.setColor(*WALL_COLOR)

        floor_half = max(10.0, float(geometry.floor_half_size) + 2.0)
        floor = loader.loadModel("models/box")
        floor.reparentTo(self._world_root)
        floor.setPos(0.0, 0.0, -0.05)
        floor.setScale(floor_half, floor_half, 0.05)
        floor.setColor(*FLOOR_COLOR)

        if geometry.exit_point is not None:
            marker = loader.loadModel("models/misc/sphere")
            marker.reparentTo(self._world_root)
            marker.setPos(geometry.exit_point)
            marker.setScale(0.6)
            marker.setColor(*EXIT_COLOR)

    def clear_level(self) -> None:
        self._world_root.getChildren().detach()

    def render(self, ctx: SimulationContext) -> None:
        kin = ctx.kin
        camera = self._base.camera
        if ctx.camera_mode is CameraMode.THIRD_PERSON:
            body = kin.body_center()
            self._avatar.setPos(body)
            self._avatar.show()
            h = math.radians(kin.yaw_deg)
            back = LVector3f(math.sin(h), -math.cos(h), 0.0) * float(ctx.tuning.third_person_back)
            camera.setPos(body + back + LVector3f(0, 0, float(ctx.tuning.third_person_up)))
            camera.lookAt(body)
        else:
            self._avatar.hide()
            camera.setPos(kin.pos)
            camera.setHpr(kin.yaw_deg, 0.0, 0.0)
