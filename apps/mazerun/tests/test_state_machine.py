from __future__ import annotations

import pytest

from mazerun.game.state_machine import GameState, GameStateMachine
from mazerun.game.timer import ElapsedTimer


class _RecordingView:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def show_main_menu(self, *, resume_available: bool) -> None:
        self.calls.append(("menu", resume_available))

    def hide_menus(self) -> None:
        self.calls.append(("hide",))

    def show_completion(self) -> None:
        self.calls.append(("completion",))


def test_full_run_transitions() -> None:
    view = _RecordingView()
    m = GameStateMachine(presentation=view)
    assert m.state is GameState.MAIN_MENU
    assert not m.is_simulating()

    assert m.begin_level(now=0.0)
    assert m.state is GameState.PLAYING
    assert m.is_simulating()

    assert m.complete()
    assert m.state is GameState.COMPLETED
    assert ("completion",) in view.calls

    assert m.restart()
    assert m.state is GameState.MAIN_MENU


def test_illegal_triggers_are_ignored() -> None:
    m = GameStateMachine(presentation=_RecordingView())
    assert not m.toggle_pause(now=1.0)
    assert not m.resume(now=1.0)
    assert not m.complete()
    assert not m.restart()
    assert m.state is GameState.MAIN_MENU

    m.begin_level(now=0.0)
    assert not m.restart()
    m.complete()
    assert not m.toggle_pause(now=2.0)
    assert not m.begin_level(now=2.0)
    assert m.state is GameState.COMPLETED


def test_pause_shows_resume_menu_and_freezes_timer() -> None:
    view = _RecordingView()
    m = GameStateMachine(presentation=view)
    m.begin_level(now=0.0)

    assert m.toggle_pause(now=5.0)
    assert m.state is GameState.PAUSED
    assert not m.is_simulating()
    assert view.calls[-1] == ("menu", True)
    assert m.timer.elapsed(5.0) == pytest.approx(5.0)
    assert m.timer.elapsed(100.0) == pytest.approx(5.0)

    assert m.toggle_pause(now=100.0)
    assert m.state is GameState.PLAYING
    assert view.calls[-1] == ("hide",)
    assert m.timer.elapsed(101.0) == pytest.approx(6.0)


def test_abandon_run_returns_to_menu_without_resume() -> None:
    view = _RecordingView()
    m = GameStateMachine(presentation=view)
    assert not m.abandon_run()
    m.begin_level(now=0.0)
    assert m.abandon_run()
    assert m.state is GameState.MAIN_MENU
    assert view.calls[-1] == ("menu", False)
    assert m.timer.elapsed(10.0) == 0.0


def test_timer_reset_and_idle() -> None:
    t = ElapsedTimer()
    assert t.elapsed(3.0) == 0.0
    t.pause(1.0)
    assert not t.is_paused()

    t.start(2.0)
    assert t.is_running()
    assert t.elapsed(4.5) == pytest.approx(2.5)
    t.reset()
    assert not t.is_running()
    assert t.elapsed(10.0) == 0.0


def test_level_begun_while_paused_stays_frozen_until_resume() -> None:
    view = _RecordingView()
    m = GameStateMachine(presentation=view)
    m.begin_level(now=0.0)
    m.timer.reset()
    m.pause(now=1.0)

    assert m.begin_level(now=2.0)
    assert m.state is GameState.PAUSED
    assert view.calls[-1] == ("menu", True)
    assert m.timer.elapsed(9.0) == 0.0

    m.resume(now=10.0)
    assert m.timer.elapsed(12.5) == pytest.approx(2.5)
