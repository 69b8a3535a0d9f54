from __future__ import annotations

from dataclasses import dataclass

# Panda3D button names -> held movement flag. Cyrillic WASD (RU layout: Ц/Ы/Ф/В) and the
# arrow keys map to the same flags.
MOVE_KEYS: dict[str, str] = {
    "w": "forward",
    "ц": "forward",
    "arrow_up": "forward",
    "s": "back",
    "ы": "back",
    "arrow_down": "back",
    "a": "left",
    "ф": "left",
    "arrow_left": "left",
    "d": "right",
    "в": "right",
    "arrow_right": "right",
}
JUMP_KEYS = frozenset({"space"})
CAMERA_TOGGLE_KEYS = frozenset({"v", "м"})
PAUSE_KEYS = frozenset({"escape"})


@dataclass
class IntentState:
    forward: bool = False
    back: bool = False
    left: bool = False
    right: bool = False
    # Edge-triggered requests, cleared by the consume_* readers.
    jump_requested: bool = False
    camera_toggle_requested: bool = False
    look_dx: float = 0.0

    def move_axes(self) -> tuple[int, int]:
        """(forward, right) in {-1, 0, 1}."""
        return (int(self.forward) - int(self.back), int(self.right) - int(self.left))

    def has_move_intent(self) -> bool:
        return self.forward or self.back or self.left or self.right

    def consume_jump(self) -> bool:
        requested = self.jump_requested
        self.jump_requested = False
        return requested

    def consume_camera_toggle(self) -> bool:
        requested = self.camera_toggle_requested
        self.camera_toggle_requested = False
        return requested

    def consume_look_dx(self) -> float:
        dx = float(self.look_dx)
        self.look_dx = 0.0
        return dx

    def release_all(self) -> None:
        self.forward = False
        self.back = False
        self.left = False
        self.right = False
        self.jump_requested = False
        self.camera_toggle_requested = False
        self.look_dx = 0.0


def normalize_key(key: str) -> str:
    return (key or "").strip().lower()


def apply_key_down(intent: IntentState, key: str) -> bool:
    """
    Update intent for a key press. Returns True when the key is the pause key; the
    caller decides whether a pause toggle is legal in the current game state.
    """

    k = normalize_key(key)
    flag = MOVE_KEYS.get(k)
    if flag is not None:
        setattr(intent, flag, True)
        return False
    if k in JUMP_KEYS:
        intent.jump_requested = True
        return False
    if k in CAMERA_TOGGLE_KEYS:
        intent.camera_toggle_requested = True
        return False
    return k in PAUSE_KEYS


def apply_key_up(intent: IntentState, key: str) -> None:
    flag = MOVE_KEYS.get(normalize_key(key))
    if flag is not None:
        setattr(intent, flag, False)


def apply_look(intent: IntentState, dx: float) -> None:
    intent.look_dx += float(dx)


__all__ = [
    "CAMERA_TOGGLE_KEYS",
    "IntentState",
    "JUMP_KEYS",
    "MOVE_KEYS",
    "PAUSE_KEYS",
    "apply_key_down",
    "apply_key_up",
    "apply_look",
    "normalize_key",
]
