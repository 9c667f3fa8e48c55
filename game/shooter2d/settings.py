"""
Fixed game rules for one run.

Every tunable constant of the simulation lives on ``GameSettings``. The
defaults reproduce the first game generation (variant A): a non-rotating
ship and enemies that trickle in at random. ``GameSettings.variant("b")``
gives the second generation with a rotating ship, timed enemy waves, an
escape penalty and an on-screen timer.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict

SPAWN_MODES = ("random", "timed")


@dataclass(frozen=True)
class GameSettings:
    """Rules and viewport for a run"""

    # Viewport
    width: int = 480
    height: int = 640

    # Player
    player_size: float = 30.0
    player_speed: float = 5.0  # px/step
    player_bottom_offset: float = 50.0
    rotating: bool = False
    turn_speed: float = 0.05  # rad/step

    # Bullets
    bullet_radius: float = 5.0
    bullet_speed: float = 8.0  # px/step
    fire_delay_ms: float = 1000 / 6
    bullets_track_aim: bool = True
    bullet_render_scale: float = 1.04

    # Enemies
    enemy_width: float = 30.0
    enemy_height: float = 30.0
    enemy_speed: float = 2.0  # px/step
    enemy_spawn_y: float = -30.0
    spawn_mode: str = "random"
    spawn_chance: float = 0.02  # per step, "random" mode
    spawn_interval_ms: float = 4000.0  # "timed" mode
    spawn_batch: int = 4

    # Scoring
    hit_score: int = 10
    escape_penalty: int = 10
    penalize_escapes: bool = False

    # HUD
    show_elapsed: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must be positive, got {self.width}x{self.height}")
        for name in ("player_size", "bullet_radius", "enemy_width", "enemy_height"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.spawn_mode not in SPAWN_MODES:
            raise ValueError(
                f"unknown spawn_mode {self.spawn_mode!r}, expected one of {SPAWN_MODES}"
            )
        if not 0.0 <= self.spawn_chance <= 1.0:
            raise ValueError(f"spawn_chance must be in [0, 1], got {self.spawn_chance}")
        if self.spawn_batch < 0:
            raise ValueError(f"spawn_batch must be >= 0, got {self.spawn_batch}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        """Build settings from a config dict, ignoring keys that are not rules"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def variant(cls, name: str, **overrides) -> "GameSettings":
        """Preset for game generation ``"a"`` or ``"b"``"""
        name = name.lower()
        if name == "a":
            base = cls()
        elif name == "b":
            base = cls(
                rotating=True,
                spawn_mode="timed",
                penalize_escapes=True,
                show_elapsed=True,
                bullet_render_scale=1.08,
            )
        else:
            raise ValueError(f"unknown variant {name!r}, expected 'a' or 'b'")
        return replace(base, **overrides) if overrides else base

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
