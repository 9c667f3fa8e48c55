"""
Held-keys input adapter.

Key handlers run between frames and only ever touch ``HeldKeys``. The loop
takes a ``snapshot()`` at the start of a frame, so a key event arriving
mid-step can never change what the step sees.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Hashable, Optional, Set


class Action(str, Enum):
    """Logical actions the simulation reacts to"""
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    FIRE = "fire"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"


class HeldKeys:
    """Set of currently held actions, fed by raw key events"""

    def __init__(self, bindings: Optional[Dict[Hashable, Action]] = None):
        self.bindings: Dict[Hashable, Action] = dict(bindings or {})
        self._held: Set[Action] = set()

    def press(self, key: Hashable) -> Optional[Action]:
        """Mark the action bound to ``key`` as held; unbound keys are ignored"""
        action = self.bindings.get(key)
        if action is not None:
            self._held.add(action)
        return action

    def release(self, key: Hashable) -> Optional[Action]:
        action = self.bindings.get(key)
        if action is not None:
            self._held.discard(action)
        return action

    def hold(self, *actions: Action):
        """Hold actions directly, bypassing the key bindings"""
        self._held.update(actions)

    def clear(self):
        self._held.clear()

    def snapshot(self) -> FrozenSet[Action]:
        return frozenset(self._held)

    def __contains__(self, action: object) -> bool:
        return action in self._held

    def __repr__(self) -> str:
        held = ", ".join(sorted(a.value for a in self._held))
        return f"HeldKeys({held})"
