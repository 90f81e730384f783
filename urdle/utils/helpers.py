"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict
from flask import request

PLAYER_HEADER = 'X-Player-Id'


def get_user_identity(request_obj=None) -> Dict[str, str]:
    """Extract player identity information from request."""
    if request_obj is None:
        request_obj = request

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'
    headers = getattr(request_obj, 'headers', None) or {}
    player_id = (headers.get(PLAYER_HEADER) or '').strip() or user_ip

    return {
        'player_id': player_id,
        'user_ip': user_ip
    }


def get_player_id(request_obj=None) -> str:
    return get_user_identity(request_obj)['player_id']
