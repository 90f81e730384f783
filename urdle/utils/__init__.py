"""
Utilities Package

Contains utility functions, decorators, the clock capability and the game logger.
"""

from .clock import ManualClock, SystemClock, TimerHandle
from .decorators import require_game_service, require_json_field
from .helpers import get_player_id, get_user_identity
from .game_logger import game_logger

__all__ = [
    'ManualClock', 'SystemClock', 'TimerHandle',
    'require_game_service', 'require_json_field',
    'get_player_id', 'get_user_identity', 'game_logger'
]
