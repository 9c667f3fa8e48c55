"""
Game entity dataclasses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .settings import GameSettings
from .utils import AABB, Circle


class RunStatus(str, Enum):
    """Status of a run; GAME_OVER is absorbing"""
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class Player:
    """Player ship, top-left anchored square hit box"""
    x: float
    y: float
    size: float = 30.0
    speed: float = 5.0  # px/step
    angle: float = 0.0  # radians, 0 = up; only changes when rotation is on
    turn_speed: float = 0.0  # rad/step

    @property
    def center_x(self) -> float:
        return self.x + self.size / 2

    @property
    def aabb(self) -> AABB:
        return AABB(self.x, self.y, self.size, self.size)


@dataclass
class Bullet:
    """Bullet projectile entity"""
    x: float
    y: float
    vx: float = 0.0  # px/step
    vy: float = -8.0
    radius: float = 5.0
    speed: float = 8.0
    alive: bool = True

    @property
    def hitbox(self) -> Circle:
        return Circle(self.x, self.y, self.radius)


@dataclass
class Enemy:
    """Enemy entity that falls towards the player"""
    x: float
    y: float
    width: float = 30.0
    height: float = 30.0
    speed: float = 2.0  # px/step
    alive: bool = True

    @property
    def aabb(self) -> AABB:
        return AABB(self.x, self.y, self.width, self.height)


def _empty_events() -> Dict[str, int]:
    return {"kills": 0, "escapes": 0, "shots": 0, "spawned": 0}


@dataclass
class World:
    """Complete mutable state of one run"""
    settings: GameSettings
    player: Player
    bullets: List[Bullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    score: int = 0
    elapsed_ms: float = 0.0
    cooldown_ms: float = 0.0
    last_spawn_ms: float = 0.0
    status: RunStatus = RunStatus.RUNNING
    step_count: int = 0
    # Per-step counters, reset at the start of every step
    events: Dict[str, int] = field(default_factory=_empty_events)

    @property
    def game_over(self) -> bool:
        return self.status is RunStatus.GAME_OVER

    def reset_events(self):
        self.events = _empty_events()
