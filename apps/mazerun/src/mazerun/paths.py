from __future__ import annotations

from pathlib import Path

import mazerun


def app_root() -> Path:
    """
    Return the MAZERUN app root directory: <repo>/apps/mazerun.

    This is derived from the installed package location, so it stays correct even
    if the calling module lives in a deeper subpackage (e.g. mazerun/maps/...).
    """

    return Path(mazerun.__file__).resolve().parents[2]


def assets_root() -> Path:
    return app_root() / "assets"
