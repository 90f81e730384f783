"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..utils.decorators import require_game_service, require_json_field
from ..utils.helpers import get_player_id
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _game_not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _server_error(action, error, game_id=None):
    game_logger.log_error(request, error, action, game_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 500


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Create a game session for the route's word (daily by default)."""
    try:
        data = request.get_json(silent=True) or {}
        route = data.get('route', '#/')

        if not isinstance(route, str):
            return jsonify({
                'success': False,
                'error': 'Route must be a string'
            }), 400

        player_id = get_player_id(request)
        game_logger.log_user_action(request, 'new_game', extra_data={'route': route})

        game_id, resolved = game_service.create_new_game(route, player_id)
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'redirect': resolved.redirect,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            mode=state.mode, word_length=state.word_length
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('new_game', e)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game_service
def get_state(game_id, game_service):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _game_not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            status=state.status, elapsed_seconds=state.elapsed_seconds
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('get_state', e, game_id)


@game_bp.route('/game/<game_id>/letter', methods=['POST'])
@require_game_service
@require_json_field('letter')
def add_letter(game_id, game_service):
    """Type one letter into the current row."""
    try:
        letter = request.get_json()['letter']
        game_logger.log_user_action(request, 'add_letter', game_id)

        session = game_service.get_session(game_id)
        if session is None:
            return _game_not_found('add_letter', game_id)

        if not isinstance(letter, str) or len(letter) != 1 or not (letter.isascii() and letter.isalpha()):
            error_response = {
                'success': False,
                'error': 'Letter must be a single character a-z'
            }
            game_logger.log_server_response(request, 'add_letter', False, error_response, game_id)
            return jsonify(error_response), 400

        added = session.add_letter(letter)
        response_data = {
            'success': True,
            'added': added,
            'state': asdict(session.snapshot(game_id))
        }
        game_logger.log_server_response(request, 'add_letter', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('add_letter', e, game_id)


@game_bp.route('/game/<game_id>/delete', methods=['POST'])
@require_game_service
def delete_letter(game_id, game_service):
    """Remove the last typed letter."""
    try:
        game_logger.log_user_action(request, 'delete_letter', game_id)

        session = game_service.get_session(game_id)
        if session is None:
            return _game_not_found('delete_letter', game_id)

        deleted = session.delete_letter()
        response_data = {
            'success': True,
            'deleted': deleted,
            'state': asdict(session.snapshot(game_id))
        }
        game_logger.log_server_response(request, 'delete_letter', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('delete_letter', e, game_id)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game_service
def submit_guess(game_id, game_service):
    """Submit the typed row as a guess; an incomplete row only shakes."""
    try:
        session = game_service.get_session(game_id)
        game_logger.log_user_action(
            request, 'submit_guess', game_id,
            typed_length=len(session.current_input) if session else None
        )

        if session is None:
            return _game_not_found('submit_guess', game_id)

        accepted = session.submit_guess()
        state = session.snapshot(game_id)

        response_data = {
            'success': True,
            'accepted': accepted,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            accepted=accepted, round=len(state.guesses), status=state.status
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('submit_guess', e, game_id)


@game_bp.route('/game/<game_id>/share', methods=['GET'])
@require_game_service
def share(game_id, game_service):
    """Return the emoji summary for the clipboard."""
    try:
        game_logger.log_user_action(request, 'share', game_id)

        session = game_service.get_session(game_id)
        if session is None:
            return _game_not_found('share', game_id)

        response_data = {
            'success': True,
            'text': session.generate_share_text()
        }
        game_logger.log_server_response(request, 'share', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error('share', e, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game_service
def delete_game(game_id, game_service):
    """Delete a game session."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', get_player_id(request))

        return jsonify(response_data), (200 if success else 404)

    except Exception as e:
        return _server_error('delete_game', e, game_id)


@game_bp.route('/health', methods=['GET'])
@require_game_service
def health_check(game_service):
    """Health check endpoint."""
    try:
        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'log_stats': game_logger.get_log_stats(),
            **game_service.get_statistics()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
