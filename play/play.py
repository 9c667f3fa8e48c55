"""
Play the arcade shooter in an arcade window

Usage:
    python -m play.play --variant b
"""

import argparse
from typing import Optional

from game.shooter2d import GameSession, HeldKeys, RealtimeScheduler
from game.shooter2d.utils import seed_everything
from game.shooter2d.window import DEFAULT_BINDINGS, ShooterWindow
from play.configs.shooter_config import WINDOW_CONFIG, get_settings


def play(
    variant: str = "a",
    width: Optional[int] = None,
    height: Optional[int] = None,
    fps: Optional[float] = None,
    seed: Optional[int] = None,
    track_aim: bool = True,
    verbose: int = 1,
):
    """Open the window on the menu and run until it is closed"""
    seed_everything(seed)

    settings = get_settings(
        variant,
        width=width,
        height=height,
        bullets_track_aim=None if track_aim else False,
    )

    if verbose > 0:
        print(f"\n{'='*60}")
        print(f"Arcade Shooter - variant {variant.upper()}")
        print(f"Viewport {settings.width}x{settings.height} @ {fps or WINDOW_CONFIG['fps']} FPS")
        print("Arrows move, SPACE fires" + (", A/D rotate" if settings.rotating else ""))
        print(f"{'='*60}\n")

    held_keys = HeldKeys(DEFAULT_BINDINGS)
    window = ShooterWindow(settings.width, settings.height, WINDOW_CONFIG["title"], held_keys=held_keys)
    scheduler = RealtimeScheduler(fps=fps or WINDOW_CONFIG["fps"], pump=window.dispatch_events)
    session = GameSession(
        settings,
        scheduler,
        held_keys=held_keys,
        present=window.present,
        verbose=verbose,
    )

    window.on_start = session.start_trigger
    window.on_exit = scheduler.close

    session.init_menu()
    scheduler.run()

    if verbose > 0:
        print(f"[play] Closed after {session.runs} run(s)")
    return session


def main():
    parser = argparse.ArgumentParser(description="Play the arcade shooter")
    parser.add_argument(
        "--variant",
        type=str,
        default="a",
        choices=["a", "b"],
        help="Game generation: a = fixed ship, b = rotating ship with waves (default: a)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help=f"Viewport width (default: {WINDOW_CONFIG['width']})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help=f"Viewport height (default: {WINDOW_CONFIG['height']})",
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=None,
        help=f"Target frame rate (default: {WINDOW_CONFIG['fps']})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for enemy spawns",
    )
    parser.add_argument(
        "--no-track-aim",
        action="store_true",
        help="Variant b: bullets keep the heading they were fired with",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print lifecycle messages",
    )

    args = parser.parse_args()

    play(
        variant=args.variant,
        width=args.width,
        height=args.height,
        fps=args.fps,
        seed=args.seed,
        track_aim=not args.no_track_aim,
        verbose=0 if args.quiet else 1,
    )


if __name__ == "__main__":
    main()
