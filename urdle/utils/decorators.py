"""
Endpoint Decorators

Contains decorators shared by the HTTP controllers.
"""

from functools import wraps
from flask import jsonify, request


def require_game_service(f):
    """
    Decorator for endpoints that need the game service.

    Responds with 500 when the service was not initialized, otherwise passes
    it to the view as the `game_service` keyword argument.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        kwargs['game_service'] = game_service
        return f(*args, **kwargs)

    return decorated_function


def require_json_field(field_name: str):
    """Decorator that rejects requests whose JSON body lacks `field_name`."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not data or field_name not in data:
                return jsonify({
                    'success': False,
                    'error': f'{field_name.capitalize()} is required'
                }), 400

            return f(*args, **kwargs)

        return decorated_function
    return decorator
