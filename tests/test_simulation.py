import math

import pytest

from conftest import ScriptedRng
from game.shooter2d import Action, Bullet, Enemy, GameSettings, RunStatus, create_world, step

FIRE = {Action.FIRE}
NONE = frozenset()


# ----------------------------
# World setup
# ----------------------------

def test_create_world(world_a):
    p = world_a.player
    assert (p.x, p.y) == (240, 590)
    assert p.size == 30
    assert p.speed == 5
    assert p.angle == 0.0
    assert world_a.bullets == []
    assert world_a.enemies == []
    assert world_a.score == 0
    assert world_a.status is RunStatus.RUNNING


# ----------------------------
# Player movement
# ----------------------------

def test_move_left_and_right(world_a, rng):
    world_a.player.x = 100
    step(world_a, 16, {Action.MOVE_LEFT}, rng)
    assert world_a.player.x == 95
    step(world_a, 16, {Action.MOVE_RIGHT}, rng)
    assert world_a.player.x == 100


def test_move_is_clamped_to_viewport(world_a, rng):
    world_a.player.x = 0
    step(world_a, 16, {Action.MOVE_LEFT}, rng)
    assert world_a.player.x == 0

    world_a.player.x = 3
    step(world_a, 16, {Action.MOVE_LEFT}, rng)
    assert world_a.player.x == 0

    world_a.player.x = 450
    step(world_a, 16, {Action.MOVE_RIGHT}, rng)
    assert world_a.player.x == 450

    world_a.player.x = 448
    step(world_a, 16, {Action.MOVE_RIGHT}, rng)
    assert world_a.player.x == 450


def test_rotation_is_ignored_without_rotating_ship(world_a, rng):
    step(world_a, 16, {Action.ROTATE_RIGHT}, rng)
    assert world_a.player.angle == 0.0


def test_rotation_accumulates_without_wrapping(world_b, rng):
    step(world_b, 16, {Action.ROTATE_RIGHT}, rng)
    assert world_b.player.angle == pytest.approx(0.05)

    for _ in range(3):
        step(world_b, 16, {Action.ROTATE_LEFT}, rng)
    assert world_b.player.angle == pytest.approx(-0.10)

    world_b.player.angle = 10.0
    step(world_b, 16, {Action.ROTATE_RIGHT}, rng)
    assert world_b.player.angle == pytest.approx(10.05)


# ----------------------------
# Fire control
# ----------------------------

def test_first_shot_on_first_frame(world_a, rng):
    step(world_a, 0, FIRE, rng)

    assert len(world_a.bullets) == 1
    b = world_a.bullets[0]
    # Spawned at (255, 590), then moved once in the same step
    assert b.x == 255
    assert b.y == 590 - 8
    assert b.radius == 5
    assert world_a.cooldown_ms == pytest.approx(1000 / 6)


def test_second_shot_after_cooldown(world_a, rng):
    step(world_a, 0, FIRE, rng)
    step(world_a, 200, FIRE, rng)
    assert len(world_a.bullets) == 2


def test_fire_rate_is_capped(world_a, rng):
    step(world_a, 0, FIRE, rng)
    step(world_a, 100, FIRE, rng)
    assert len(world_a.bullets) == 1
    step(world_a, 50, FIRE, rng)
    assert len(world_a.bullets) == 1
    step(world_a, 20, FIRE, rng)
    assert len(world_a.bullets) == 2


def test_no_shot_without_fire(world_a, rng):
    step(world_a, 1000, NONE, rng)
    assert world_a.bullets == []
    assert world_a.events["shots"] == 0


def test_cooldown_never_goes_negative(world_a, rng):
    step(world_a, 0, FIRE, rng)
    step(world_a, 10_000, NONE, rng)
    assert world_a.cooldown_ms == 0.0


# ----------------------------
# Bullets
# ----------------------------

def test_bullet_moves_up_and_is_culled(world_a, rng):
    world_a.bullets = [Bullet(x=100, y=20)]

    step(world_a, 16, NONE, rng)
    assert world_a.bullets[0].y == 12
    step(world_a, 16, NONE, rng)
    assert world_a.bullets[0].y == 4
    step(world_a, 16, NONE, rng)
    assert world_a.bullets == []


def test_bullet_at_top_edge_is_culled(world_a, rng):
    world_a.bullets = [Bullet(x=100, y=1)]
    step(world_a, 16, NONE, rng)
    assert world_a.bullets == []


def test_bullet_fired_along_heading(world_b, rng):
    world_b.player.angle = math.pi / 2
    step(world_b, 0, FIRE, rng)

    b = world_b.bullets[0]
    assert b.x == pytest.approx(255 + 8)
    assert b.y == pytest.approx(590)


def test_live_bullets_follow_heading(world_b, rng):
    step(world_b, 0, FIRE, rng)
    assert (world_b.bullets[0].x, world_b.bullets[0].y) == pytest.approx((255, 582))

    world_b.player.angle = math.pi / 2
    step(world_b, 16, NONE, rng)
    assert (world_b.bullets[0].x, world_b.bullets[0].y) == pytest.approx((263, 582))


def test_bullets_keep_heading_when_not_tracking(rng):
    world = create_world(GameSettings.variant("b", bullets_track_aim=False))
    step(world, 0, FIRE, rng)

    world.player.angle = math.pi / 2
    step(world, 16, NONE, rng)
    assert (world.bullets[0].x, world.bullets[0].y) == pytest.approx((255, 574))


def test_rotating_bullets_culled_at_side(world_b, rng):
    world_b.player.angle = math.pi / 2
    world_b.bullets = [Bullet(x=475, y=300, vx=8, vy=0)]
    step(world_b, 16, NONE, rng)
    assert world_b.bullets == []


# ----------------------------
# Spawning
# ----------------------------

def test_random_spawn(world_a):
    step(world_a, 16, NONE, ScriptedRng([0.01, 0.5]))

    assert len(world_a.enemies) == 1
    e = world_a.enemies[0]
    assert e.x == 240
    # Spawned at -30, advanced once in the same step
    assert e.y == -28
    assert (e.width, e.height, e.speed) == (30, 30, 2)
    assert world_a.events["spawned"] == 1


def test_random_spawn_miss(world_a):
    step(world_a, 16, NONE, ScriptedRng([0.02]))
    assert world_a.enemies == []


def test_timed_spawn_batches(world_b):
    rng = ScriptedRng(default=0.25)

    for _ in range(3):
        step(world_b, 1000, NONE, rng)
    assert world_b.enemies == []

    step(world_b, 1000, NONE, rng)
    assert len(world_b.enemies) == 4
    assert all(e.x == 120 for e in world_b.enemies)
    assert world_b.last_spawn_ms == 4000

    for _ in range(4):
        step(world_b, 1000, NONE, rng)
    assert len(world_b.enemies) == 8
    assert world_b.last_spawn_ms == 8000


def test_timed_spawn_fires_at_exact_interval(world_b):
    rng = ScriptedRng(default=0.25)
    step(world_b, 3999, NONE, rng)
    assert world_b.enemies == []
    step(world_b, 1, NONE, rng)
    assert len(world_b.enemies) == 4


# ----------------------------
# Enemies vs player
# ----------------------------

def test_enemy_reaching_player_ends_run(world_a, rng):
    world_a.enemies = [Enemy(x=245, y=570)]
    step(world_a, 16, NONE, rng)
    assert world_a.status is RunStatus.GAME_OVER


def test_enemy_descends_without_collision(world_a, rng):
    world_a.enemies = [Enemy(x=240, y=-30)]
    for _ in range(15):
        step(world_a, 16, NONE, rng)

    assert len(world_a.enemies) == 1
    assert world_a.enemies[0].y == 0
    assert world_a.status is RunStatus.RUNNING


def test_player_overlap_boundary(world_a, rng):
    world_a.player.y = 610
    world_a.enemies = [Enemy(x=240, y=578)]

    step(world_a, 16, NONE, rng)
    # Bottom edge at 610 only touches the player
    assert world_a.enemies[0].y == 580
    assert world_a.status is RunStatus.RUNNING

    step(world_a, 16, NONE, rng)
    assert world_a.status is RunStatus.GAME_OVER


def test_game_over_is_absorbing(world_a, rng):
    world_a.enemies = [Enemy(x=245, y=570)]
    step(world_a, 16, NONE, rng)
    assert world_a.game_over

    snapshot = (world_a.player.x, world_a.enemies[0].y, world_a.step_count, world_a.elapsed_ms)
    step(world_a, 16, {Action.MOVE_LEFT, Action.FIRE}, rng)
    assert (world_a.player.x, world_a.enemies[0].y, world_a.step_count, world_a.elapsed_ms) == snapshot
    assert world_a.bullets == []
    assert world_a.status is RunStatus.GAME_OVER


def test_hits_still_score_on_game_over_step(world_a, rng):
    world_a.enemies = [Enemy(x=245, y=570), Enemy(x=20, y=100)]
    world_a.bullets = [Bullet(x=35, y=140)]

    step(world_a, 16, NONE, rng)
    assert world_a.status is RunStatus.GAME_OVER
    assert world_a.score == 10


# ----------------------------
# Bottom escapes
# ----------------------------

def test_escape_costs_points_in_variant_b(world_b, rng):
    world_b.enemies = [Enemy(x=10, y=639), Enemy(x=60, y=638)]
    step(world_b, 16, NONE, rng)

    assert world_b.score == -10
    assert len(world_b.enemies) == 1
    assert world_b.enemies[0].y == 640
    assert world_b.events["escapes"] == 1


def test_escape_and_player_hit_in_same_step(world_b, rng):
    world_b.player.y = 630
    world_b.enemies = [Enemy(x=240, y=639)]
    step(world_b, 16, NONE, rng)

    assert world_b.status is RunStatus.GAME_OVER
    assert world_b.enemies == []
    assert world_b.score == -10


def test_score_may_go_negative(world_b, rng):
    world_b.enemies = [Enemy(x=10, y=639), Enemy(x=100, y=640)]
    step(world_b, 16, NONE, rng)
    assert world_b.score == -20


def test_escape_is_free_in_variant_a(world_a, rng):
    world_a.enemies = [Enemy(x=10, y=639)]
    step(world_a, 16, NONE, rng)
    assert world_a.enemies == []
    assert world_a.score == 0


# ----------------------------
# Bullets vs enemies
# ----------------------------

def test_bullet_hit_removes_both(world_a, rng):
    world_a.enemies = [Enemy(x=100, y=100)]
    world_a.bullets = [Bullet(x=115, y=140)]

    step(world_a, 16, NONE, rng)
    assert world_a.enemies == []
    assert world_a.bullets == []
    assert world_a.score == 10
    assert world_a.events["kills"] == 1


def test_disjoint_hits_score_per_pair(world_a, rng):
    xs = (20, 120, 320)
    world_a.enemies = [Enemy(x=x, y=100) for x in xs]
    world_a.bullets = [Bullet(x=x + 15, y=140) for x in xs]
    world_a.bullets.append(Bullet(x=400, y=300))

    step(world_a, 16, NONE, rng)
    assert world_a.score == 30
    assert world_a.enemies == []
    assert len(world_a.bullets) == 1


def test_bullet_hits_only_one_enemy(world_a, rng):
    world_a.enemies = [Enemy(x=100, y=100), Enemy(x=110, y=100)]
    world_a.bullets = [Bullet(x=125, y=140)]

    step(world_a, 16, NONE, rng)
    assert world_a.score == 10
    assert len(world_a.enemies) == 1
    assert world_a.enemies[0].x == 110
    assert world_a.bullets == []


def test_enemy_hit_only_once(world_a, rng):
    world_a.enemies = [Enemy(x=100, y=100)]
    world_a.bullets = [Bullet(x=110, y=140), Bullet(x=120, y=140)]

    step(world_a, 16, NONE, rng)
    assert world_a.score == 10
    assert world_a.enemies == []
    assert len(world_a.bullets) == 1
    assert world_a.bullets[0].x == 120


def test_render_scale_does_not_widen_hitbox(world_a, rng):
    world_a.enemies = [Enemy(x=100, y=100)]
    # Misses by 0.1px with the real radius, would hit with radius * 1.04
    world_a.bullets = [Bullet(x=135.1, y=140)]

    step(world_a, 16, NONE, rng)
    assert world_a.score == 0
    assert len(world_a.enemies) == 1


# ----------------------------
# Bookkeeping
# ----------------------------

def test_elapsed_time_and_step_count(world_a, rng):
    for delta in (0, 16, 17):
        step(world_a, delta, NONE, rng)
    assert world_a.elapsed_ms == 33
    assert world_a.step_count == 3
