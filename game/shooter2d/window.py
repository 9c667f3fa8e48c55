"""
Arcade window: draws projected frames and feeds key events to HeldKeys
"""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, Optional

import arcade

from .input import Action, HeldKeys
from .render import Box, Clear, Disc, DrawCall, Polygon, Text

DEFAULT_BINDINGS: Dict[Hashable, Action] = {
    arcade.key.LEFT: Action.MOVE_LEFT,
    arcade.key.RIGHT: Action.MOVE_RIGHT,
    arcade.key.SPACE: Action.FIRE,
    arcade.key.A: Action.ROTATE_LEFT,
    arcade.key.D: Action.ROTATE_RIGHT,
}

START_KEYS = (arcade.key.ENTER, arcade.key.RETURN)


class ShooterWindow(arcade.Window):
    """Arcade window for rendering the shooter and capturing keys"""

    def __init__(
        self,
        width: int,
        height: int,
        title: str = "Arcade Shooter",
        held_keys: Optional[HeldKeys] = None,
        on_start: Optional[Callable[[], object]] = None,
        on_exit: Optional[Callable[[], None]] = None,
    ):
        super().__init__(width, height, title)
        self.held_keys = held_keys if held_keys is not None else HeldKeys(DEFAULT_BINDINGS)
        self.on_start = on_start
        self.on_exit = on_exit

    # ----------------------------
    # Drawing
    # ----------------------------

    def present(self, calls: Iterable[DrawCall]):
        """Draw one frame of world-space calls and show it"""
        self.draw_calls(calls)
        self.flip()

    def draw_calls(self, calls: Iterable[DrawCall]):
        # World space is y-down from the top-left, arcade is y-up from the bottom-left
        h = self.height
        for call in calls:
            if isinstance(call, Clear):
                self.clear(color=call.color)
            elif isinstance(call, Polygon):
                arcade.draw_polygon_filled([(x, h - y) for x, y in call.points], call.color)
            elif isinstance(call, Disc):
                arcade.draw_circle_filled(call.x, h - call.y, call.radius, call.color)
            elif isinstance(call, Box):
                arcade.draw_lrbt_rectangle_filled(
                    call.x, call.x + call.width, h - call.y - call.height, h - call.y, call.color
                )
            elif isinstance(call, Text):
                arcade.draw_text(
                    call.text, call.x, h - call.y, call.color, call.size,
                    anchor_x=call.anchor_x,
                )

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.on_close()
            return
        if symbol in START_KEYS:
            if self.on_start is not None:
                self.on_start()
            return
        self.held_keys.press(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self.held_keys.release(symbol)

    def on_close(self):
        if self.on_exit is not None:
            self.on_exit()
        super().on_close()
