"""2D Game module - Single-screen arcade shooter"""

from .entities import Player, Bullet, Enemy, World, RunStatus
from .input import Action, HeldKeys
from .lifecycle import GameSession, Phase
from .loop import LoopDriver, ManualScheduler, RealtimeScheduler
from .settings import GameSettings
from .shooter_env import ShooterEnv, run_random_episode
from .simulation import create_world, step

__all__ = [
    'Player', 'Bullet', 'Enemy', 'World', 'RunStatus',
    'Action', 'HeldKeys',
    'GameSession', 'Phase',
    'LoopDriver', 'ManualScheduler', 'RealtimeScheduler',
    'GameSettings',
    'ShooterEnv', 'run_random_episode',
    'create_world', 'step',
]
