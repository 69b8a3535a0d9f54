from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from mazerun.maps.maze_loader import LevelGeometry

if TYPE_CHECKING:
    from mazerun.game.context import SimulationContext


class Presentation(Protocol):
    """Write-only view the simulation drives (HUD, menus, scene, camera)."""

    def show_main_menu(self, *, resume_available: bool) -> None: ...
    def hide_menus(self) -> None: ...
    def show_completion(self) -> None: ...
    def set_timer_text(self, text: str) -> None: ...
    def set_level_text(self, text: str) -> None: ...
    def set_leaderboard_text(self, text: str) -> None: ...
    def build_level(self, geometry: LevelGeometry) -> None: ...
    def clear_level(self) -> None: ...
    def render(self, ctx: "SimulationContext") -> None: ...


class NullPresentation:
    """Presentation that draws nothing (headless runs, tests)."""

    def show_main_menu(self, *, resume_available: bool) -> None:
        pass

    def hide_menus(self) -> None:
        pass

    def show_completion(self) -> None:
        pass

    def set_timer_text(self, text: str) -> None:
        pass

    def set_level_text(self, text: str) -> None:
        pass

    def set_leaderboard_text(self, text: str) -> None:
        pass

    def build_level(self, geometry: LevelGeometry) -> None:
        pass

    def clear_level(self) -> None:
        pass

    def render(self, ctx: "SimulationContext") -> None:
        pass


def format_timer(seconds: float) -> str:
    return f"Time: {float(seconds):.2f}"


def format_level_label(level_index: int, level_name: str) -> str:
    return f"Level: {int(level_index) + 1} - {level_name}"
