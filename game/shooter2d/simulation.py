"""
Per-frame simulation step
-------------------------
- Input reaction (move, rotate, fire with cooldown)
- Bullet movement and culling
- Enemy spawning (random trickle or timed batches)
- Enemy movement, player collision and bottom escapes
- Bullet vs enemy hits and scoring

Movement is per step, not per millisecond: ``delta_ms`` only feeds the fire
cooldown, the spawn timer and the run clock.
"""

from __future__ import annotations

import math
import random
from typing import Collection

from .entities import Bullet, Enemy, Player, RunStatus, World
from .input import Action
from .settings import GameSettings
from .utils import circle_rect_overlap, rect_overlap


def create_world(settings: GameSettings) -> World:
    """Fresh world with the player at the bottom center and nothing else"""
    player = Player(
        x=settings.width / 2,
        y=settings.height - settings.player_bottom_offset,
        size=settings.player_size,
        speed=settings.player_speed,
        angle=0.0,
        turn_speed=settings.turn_speed if settings.rotating else 0.0,
    )
    return World(settings=settings, player=player)


def step(world: World, delta_ms: float, held: Collection[Action], rng=random) -> World:
    """
    Advance the world by one frame, in place.

    Args:
        world: World to mutate
        delta_ms: Time since the previous frame
        held: Actions held for this frame
        rng: Source of ``random()`` draws for spawning

    Returns:
        The same world, for chaining
    """
    if world.status is RunStatus.GAME_OVER:
        return world

    world.reset_events()
    world.elapsed_ms += delta_ms

    _apply_input(world, held)
    _fire(world, delta_ms, held)
    _update_bullets(world)
    _spawn_enemies(world, rng)
    _update_enemies(world)
    _handle_hits(world)

    world.step_count += 1
    return world


# ----------------------------
# Player
# ----------------------------

def _apply_input(world: World, held: Collection[Action]):
    player = world.player
    settings = world.settings

    max_x = settings.width - player.size
    if Action.MOVE_LEFT in held and player.x > 0:
        player.x = max(0.0, player.x - player.speed)
    if Action.MOVE_RIGHT in held and player.x < max_x:
        player.x = min(max_x, player.x + player.speed)

    if settings.rotating:
        # Unbounded accumulator, no wrapping
        if Action.ROTATE_LEFT in held:
            player.angle -= player.turn_speed
        if Action.ROTATE_RIGHT in held:
            player.angle += player.turn_speed


def _aim(player: Player, speed: float):
    return math.sin(player.angle) * speed, -math.cos(player.angle) * speed


def _fire(world: World, delta_ms: float, held: Collection[Action]):
    settings = world.settings
    player = world.player

    # Bounded at 0: any non-positive value fires, so the floor changes nothing else
    world.cooldown_ms = max(0.0, world.cooldown_ms - delta_ms)
    if Action.FIRE not in held or world.cooldown_ms > 0:
        return

    speed = settings.bullet_speed
    if settings.rotating:
        vx, vy = _aim(player, speed)
    else:
        vx, vy = 0.0, -speed

    world.bullets.append(Bullet(
        x=player.center_x,
        y=player.y,
        vx=vx,
        vy=vy,
        radius=settings.bullet_radius,
        speed=speed,
    ))
    world.cooldown_ms = settings.fire_delay_ms
    world.events["shots"] += 1


# ----------------------------
# Bullets
# ----------------------------

def _update_bullets(world: World):
    settings = world.settings
    player = world.player
    retarget = settings.rotating and settings.bullets_track_aim

    for b in world.bullets:
        if retarget:
            # Every live bullet follows the ship's current heading
            b.vx, b.vy = _aim(player, b.speed)
        b.x += b.vx
        b.y += b.vy

        if b.y <= 0:
            b.alive = False
        elif settings.rotating and (b.x < 0 or b.x > settings.width or b.y > settings.height):
            b.alive = False

    world.bullets = [b for b in world.bullets if b.alive]


# ----------------------------
# Enemies
# ----------------------------

def _new_enemy(settings: GameSettings, rng) -> Enemy:
    return Enemy(
        x=rng.random() * settings.width,
        y=settings.enemy_spawn_y,
        width=settings.enemy_width,
        height=settings.enemy_height,
        speed=settings.enemy_speed,
    )


def _spawn_enemies(world: World, rng):
    settings = world.settings

    if settings.spawn_mode == "random":
        if rng.random() < settings.spawn_chance:
            world.enemies.append(_new_enemy(settings, rng))
            world.events["spawned"] += 1
        return

    if world.elapsed_ms - world.last_spawn_ms >= settings.spawn_interval_ms:
        for _ in range(settings.spawn_batch):
            world.enemies.append(_new_enemy(settings, rng))
        world.events["spawned"] += settings.spawn_batch
        world.last_spawn_ms = world.elapsed_ms


def _update_enemies(world: World):
    settings = world.settings
    player_box = world.player.aabb

    for e in world.enemies:
        e.y += e.speed

        if rect_overlap(player_box, e.aabb):
            world.status = RunStatus.GAME_OVER

        # Independent of the player check above
        if e.y > settings.height:
            e.alive = False
            world.events["escapes"] += 1
            if settings.penalize_escapes:
                world.score -= settings.escape_penalty

    world.enemies = [e for e in world.enemies if e.alive]


def _handle_hits(world: World):
    hit_score = world.settings.hit_score

    for b in world.bullets:
        for e in world.enemies:
            if not e.alive:
                continue
            if circle_rect_overlap(b.hitbox, e.aabb):
                e.alive = False
                b.alive = False
                world.score += hit_score
                world.events["kills"] += 1
                # A dead bullet cannot match again
                break

    world.enemies = [e for e in world.enemies if e.alive]
    world.bullets = [b for b in world.bullets if b.alive]
