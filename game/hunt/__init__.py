"""Duck Hunt game module - simulation core, round state machine and Gym env"""

from .entities import Bird, BirdType, FrameInput, GameState, LevelStats, LoseReason, RoundCounters
from .levels import LevelConfig, get_level_config
from .state import HuntState
from .session import HuntSession
from .loop import GameLoopDriver, ManualTickSource
from .hunt_env import HuntEnv, run_random_episode

__all__ = [
    'Bird', 'BirdType', 'FrameInput', 'GameState', 'LevelStats', 'LoseReason', 'RoundCounters',
    'LevelConfig', 'get_level_config',
    'HuntState', 'HuntSession',
    'GameLoopDriver', 'ManualTickSource',
    'HuntEnv', 'run_random_episode',
]
