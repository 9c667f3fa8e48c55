"""
Read-only projection of the world into draw calls.

Everything here is in world coordinates (top-left origin, y down) and never
touches a window, so the geometry can be checked against the collision math
without a display. ``window.ArcadeRenderer`` turns the calls into pixels.
"""

from __future__ import annotations

import math
from typing import List, NamedTuple, Tuple, Union

from .entities import Player, World

Color = Tuple[int, int, int]
Point = Tuple[float, float]

BG = (0, 0, 0)
WHITE = (255, 255, 255)
ENEMY_C = (0, 255, 0)

HUD_FONT_SIZE = 20
TITLE_FONT_SIZE = 48


class Clear(NamedTuple):
    color: Color


class Polygon(NamedTuple):
    points: Tuple[Point, ...]
    color: Color


class Disc(NamedTuple):
    x: float
    y: float
    radius: float
    color: Color


class Box(NamedTuple):
    x: float
    y: float
    width: float
    height: float
    color: Color


class Text(NamedTuple):
    text: str
    x: float
    y: float  # baseline
    color: Color
    size: int
    anchor_x: str = "left"


DrawCall = Union[Clear, Polygon, Disc, Box, Text]


def format_elapsed(ms: float) -> str:
    """Run time as zero-padded ``MM:SS``, seconds truncated"""
    total = int(max(0.0, ms) // 1000)
    minutes, seconds = divmod(total, 60)
    return f"{minutes:02d}:{seconds:02d}"


def player_triangle(player: Player, rotating: bool = False) -> Tuple[Point, ...]:
    """Triangle vertices: base corners then apex"""
    s = player.size
    ox, oy = player.x + s / 2, player.y

    if not rotating:
        return ((player.x, oy), (player.x + s, oy), (ox, oy - s))

    cos_a, sin_a = math.cos(player.angle), math.sin(player.angle)
    local = ((-s / 2, 0.0), (s / 2, 0.0), (0.0, -s))
    return tuple(
        (ox + lx * cos_a - ly * sin_a, oy + lx * sin_a + ly * cos_a)
        for lx, ly in local
    )


def build_frame(world: World) -> List[DrawCall]:
    """Draw calls for one frame, back to front"""
    settings = world.settings
    calls: List[DrawCall] = [Clear(BG)]

    calls.append(Polygon(player_triangle(world.player, settings.rotating), WHITE))

    scale = settings.bullet_render_scale
    for b in world.bullets:
        calls.append(Disc(b.x, b.y, b.radius * scale, WHITE))

    for e in world.enemies:
        calls.append(Box(e.x, e.y, e.width, e.height, ENEMY_C))

    calls.append(Text(f"Score: {world.score}", settings.width - 100, 30, WHITE, HUD_FONT_SIZE))
    if settings.show_elapsed:
        calls.append(Text(format_elapsed(world.elapsed_ms), 10, 30, WHITE, HUD_FONT_SIZE))

    if world.game_over:
        calls.append(Text(
            "Game Over", settings.width / 2, settings.height / 2,
            WHITE, TITLE_FONT_SIZE, anchor_x="center",
        ))

    return calls


def build_menu_frame(width: float, height: float, title: str = "Arcade Shooter") -> List[DrawCall]:
    """Title screen shown before the first run"""
    return [
        Clear(BG),
        Text(title, width / 2, height / 3, WHITE, TITLE_FONT_SIZE, anchor_x="center"),
        Text("Press ENTER to play", width / 2, height / 2, WHITE, HUD_FONT_SIZE, anchor_x="center"),
    ]
