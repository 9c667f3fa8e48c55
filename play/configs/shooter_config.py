"""
Game configuration presets for the arcade shooter
Both game generations plus window and headless environment settings
"""

from game.shooter2d import GameSettings

# Window parameters
WINDOW_CONFIG = {
    "width": 480,
    "height": 640,
    "title": "Arcade Shooter",
    "fps": 60,
}

# ==============================================================================
# GAME VARIANTS
# Rule sets of the two game generations
# ==============================================================================

# Variant A: fixed ship, enemies trickle in at random
VARIANT_A_CONFIG = {
    "name": "a",
    "description": "Fixed ship, random enemy trickle",
    "player_size": 30,
    "player_speed": 5,           # px per frame
    "bullet_radius": 5,
    "bullet_speed": 8,           # px per frame
    "fire_delay_ms": 1000 / 6,   # 6 shots per second
    "enemy_width": 30,
    "enemy_height": 30,
    "enemy_speed": 2,            # px per frame
    "spawn_mode": "random",
    "spawn_chance": 0.02,        # per frame
    "hit_score": 10,
    "bullet_render_scale": 1.04,
}

# Variant B: rotating ship, timed waves, escapes cost points, timer on screen
VARIANT_B_CONFIG = {
    **VARIANT_A_CONFIG,
    "name": "b",
    "description": "Rotating ship, timed enemy waves, escape penalty",
    "rotating": True,
    "turn_speed": 0.05,          # rad per frame
    "bullets_track_aim": True,   # live bullets follow the ship heading
    "spawn_mode": "timed",
    "spawn_interval_ms": 4000,
    "spawn_batch": 4,
    "penalize_escapes": True,
    "escape_penalty": 10,
    "show_elapsed": True,
    "bullet_render_scale": 1.08,
}

VARIANT_CONFIGS = {
    "a": VARIANT_A_CONFIG,
    "b": VARIANT_B_CONFIG,
}

# ==============================================================================
# HEADLESS ENVIRONMENT
# ==============================================================================

ENV_CONFIG = {
    "variant": "b",
    "frame_ms": 1000 / 60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 5,
}


def get_settings(variant: str = "a", **overrides) -> GameSettings:
    """
    Build GameSettings for a variant preset.
    Window size comes from WINDOW_CONFIG unless overridden.
    """
    if variant not in VARIANT_CONFIGS:
        raise ValueError(f"Unknown variant {variant!r}, expected one of {sorted(VARIANT_CONFIGS)}")

    config = {
        "width": WINDOW_CONFIG["width"],
        "height": WINDOW_CONFIG["height"],
        **VARIANT_CONFIGS[variant],
    }
    config.update({k: v for k, v in overrides.items() if v is not None})
    return GameSettings.from_dict(config)


# Print preset summary when loaded
if __name__ == "__main__":
    for name, cfg in VARIANT_CONFIGS.items():
        print(f"  {name}: {cfg['description']}")
