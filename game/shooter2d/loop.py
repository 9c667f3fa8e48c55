"""
Clock / loop driver

The driver never sleeps or polls itself: it asks a ``FrameScheduler`` for the
next frame and receives a timestamp in milliseconds. ``ManualScheduler`` lets
tests and headless runs inject exact frame timings; ``RealtimeScheduler``
paces frames off the wall clock for the arcade window.
"""

from __future__ import annotations

import random
import time
from typing import Callable, List, Optional, Protocol

from .entities import RunStatus, World
from .input import HeldKeys
from .simulation import step

FrameCallback = Callable[[float], None]
Renderer = Callable[[World], None]


class FrameScheduler(Protocol):
    """Anything that can call back once per display frame with a ms timestamp"""

    def request_frame(self, callback: FrameCallback) -> None:
        ...


class ManualScheduler:
    """Scheduler driven by hand: each ``advance`` is one display frame"""

    def __init__(self, start_ms: float = 0.0):
        self.now_ms = start_ms
        self._pending: List[FrameCallback] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def advance(self, ms: float = 1000 / 60) -> int:
        """Move the clock forward and fire the callbacks queued so far"""
        self.now_ms += ms
        callbacks, self._pending = self._pending, []
        for cb in callbacks:
            cb(self.now_ms)
        return len(callbacks)

    def run(self, frames: int, frame_ms: float = 1000 / 60) -> int:
        """Advance up to ``frames`` times, stopping early once nothing is queued"""
        done = 0
        while done < frames and self._pending:
            self.advance(frame_ms)
            done += 1
        return done


class RealtimeScheduler:
    """
    Wall-clock scheduler at a target frame rate.

    ``pump`` runs once per tick whether or not a frame is pending, so a window
    can keep dispatching its events while the game sits in the menu or on the
    game over screen.
    """

    def __init__(
        self,
        fps: float = 60.0,
        pump: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        assert fps > 0, "fps must be positive"
        self.frame_s = 1.0 / fps
        self.pump = pump
        self._clock = clock
        self._sleep = sleep
        self._pending: Optional[FrameCallback] = None
        self._closed = False

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending = callback

    def close(self):
        self._closed = True

    def run(self):
        """Block until ``close`` is called"""
        next_tick = self._clock()
        while not self._closed:
            if self.pump is not None:
                self.pump()
                if self._closed:
                    break

            now = self._clock()
            if now < next_tick:
                self._sleep(next_tick - now)
            elif now - next_tick > self.frame_s:
                # Fell behind: drop the missed ticks instead of replaying them
                next_tick = now
            next_tick += self.frame_s

            cb, self._pending = self._pending, None
            if cb is not None:
                cb(self._clock() * 1000.0)


class LoopDriver:
    """
    Runs step + render once per scheduled frame while the world is running.

    The first frame of a run has a delta of 0. On the frame that ends the run
    the world is rendered once more and no further frame is requested.
    """

    def __init__(
        self,
        world: World,
        scheduler: FrameScheduler,
        held_keys: Optional[HeldKeys] = None,
        renderer: Optional[Renderer] = None,
        rng=random,
        on_game_over: Optional[Callable[[World], None]] = None,
        verbose: int = 0,
    ):
        self.world = world
        self.scheduler = scheduler
        self.held_keys = held_keys
        self.renderer = renderer
        self.rng = rng
        self.on_game_over = on_game_over
        self.verbose = verbose

        self.frames = 0
        self._last_ms: Optional[float] = None
        self._running = False
        # Frames requested by an earlier start() are ignored after a restart
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self):
        if self._running:
            return
        self._running = True
        self._generation += 1
        self._last_ms = None
        self.frames = 0
        if self.verbose > 0:
            print("[LoopDriver] Started")
        self._schedule()

    def stop(self):
        if self._running and self.verbose > 0:
            print(f"[LoopDriver] Stopped after {self.frames} frames")
        self._running = False
        self._generation += 1

    def _schedule(self):
        generation = self._generation
        self.scheduler.request_frame(lambda ts: self._on_frame(generation, ts))

    def _on_frame(self, generation: int, timestamp_ms: float):
        if not self._running or generation != self._generation:
            return

        if self._last_ms is None:
            delta = 0.0
        else:
            delta = max(0.0, timestamp_ms - self._last_ms)
        self._last_ms = timestamp_ms

        held = self.held_keys.snapshot() if self.held_keys is not None else frozenset()
        step(self.world, delta, held, self.rng)
        if self.renderer is not None:
            self.renderer(self.world)
        self.frames += 1

        if self.world.status is RunStatus.RUNNING:
            self._schedule()
            return

        self._running = False
        if self.verbose > 0:
            print(f"[LoopDriver] Game over after {self.frames} frames, score {self.world.score}")
        if self.on_game_over is not None:
            self.on_game_over(self.world)
