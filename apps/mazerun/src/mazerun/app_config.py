from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Level:
    name: str
    # Maze asset path, relative to apps/mazerun/assets/ unless absolute.
    asset_ref: str


# Ordered from easiest to hardest. A run always starts at index 0.
LEVELS: tuple[Level, ...] = (
    Level(name="Easy", asset_ref="mazes/maze_easy.json"),
    Level(name="Medium", asset_ref="mazes/maze_medium.json"),
    Level(name="Hard", asset_ref="mazes/maze_hard.json"),
)


@dataclass(frozen=True)
class RunConfig:
    smoke: bool = False
    # Start with the chase camera instead of the eye camera (V toggles at runtime).
    third_person: bool = False
    # Level table override (tests / custom maze packs). None -> LEVELS.
    levels: tuple[Level, ...] | None = None

    def level_table(self) -> tuple[Level, ...]:
        return tuple(self.levels) if self.levels else LEVELS
