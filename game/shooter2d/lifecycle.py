"""
Menu -> running -> game over lifecycle.

``GameSession`` decides when the loop runs at all. It owns the current world
and driver and rebuilds both on every ``init_game``, which is how a finished
run is restarted.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Callable, List, Optional

from .entities import World
from .input import HeldKeys
from .loop import FrameScheduler, LoopDriver
from .render import DrawCall, build_frame, build_menu_frame
from .settings import GameSettings
from .simulation import create_world

Presenter = Callable[[List[DrawCall]], None]


class Phase(str, Enum):
    MENU = "menu"
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameSession:
    """Menu and restart handling around a LoopDriver"""

    def __init__(
        self,
        settings: GameSettings,
        scheduler: FrameScheduler,
        held_keys: Optional[HeldKeys] = None,
        present: Optional[Presenter] = None,
        rng=random,
        verbose: int = 0,
    ):
        self.settings = settings
        self.scheduler = scheduler
        self.held_keys = held_keys if held_keys is not None else HeldKeys()
        self.present = present
        self.rng = rng
        self.verbose = verbose

        self.phase: Optional[Phase] = None
        self.world: Optional[World] = None
        self.driver: Optional[LoopDriver] = None
        self.runs = 0
        self._start_armed = False

    def init_menu(self):
        """Show the menu and arm the start trigger; safe to call repeatedly"""
        if self.phase is Phase.MENU:
            return
        self._stop_driver()
        self.phase = Phase.MENU
        self._start_armed = True
        self._show(build_menu_frame(self.settings.width, self.settings.height))
        if self.verbose > 0:
            print("[GameSession] Menu")

    def init_game(self):
        """Reset every piece of run state and start the loop"""
        self._stop_driver()
        self.world = create_world(self.settings)
        self.driver = LoopDriver(
            self.world,
            self.scheduler,
            held_keys=self.held_keys,
            renderer=self._render_world,
            rng=self.rng,
            on_game_over=self._on_game_over,
            verbose=self.verbose,
        )
        self.phase = Phase.RUNNING
        self.runs += 1
        if self.verbose > 0:
            print(f"[GameSession] Run {self.runs} started")
        self.driver.start()

    def start_trigger(self) -> bool:
        """Start a run from the menu or the game over screen"""
        if not self._start_armed or self.phase is Phase.RUNNING:
            return False
        self.init_game()
        return True

    def _on_game_over(self, world: World):
        self.phase = Phase.GAME_OVER
        if self.verbose > 0:
            print(
                f"[GameSession] Run {self.runs} over: score {world.score}, "
                f"{world.elapsed_ms / 1000:.1f}s"
            )

    def _render_world(self, world: World):
        self._show(build_frame(world))

    def _show(self, calls: List[DrawCall]):
        if self.present is not None:
            self.present(calls)

    def _stop_driver(self):
        if self.driver is not None:
            self.driver.stop()
