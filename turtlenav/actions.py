from __future__ import annotations

from enum import IntEnum
from typing import Any

ACTION_DIM = 4


class Action(IntEnum):
    NOOP = 0
    FORWARD = 1  # Translate along current heading
    TURN_LEFT = 2  # Heading -= rotation_speed * dt
    TURN_RIGHT = 3  # Heading += rotation_speed * dt


def parse_action(code: Any) -> Action:
    """Map a raw policy output to an Action.

    Anything that is not one of the four integer codes is a no-op. Numpy
    integer scalars and single-element arrays are accepted.
    """
    if isinstance(code, bool):
        return Action.NOOP
    try:
        value = code.item() if hasattr(code, "item") else code
    except ValueError:
        # Multi-element array
        return Action.NOOP
    if isinstance(value, bool) or not isinstance(value, int):
        return Action.NOOP
    try:
        return Action(value)
    except ValueError:
        return Action.NOOP


def manual_action(up: bool = False, left: bool = False, right: bool = False) -> Action:
    """Directional key input -> action code. Priority is up > left > right."""
    if up:
        return Action.FORWARD
    if left:
        return Action.TURN_LEFT
    if right:
        return Action.TURN_RIGHT
    return Action.NOOP
