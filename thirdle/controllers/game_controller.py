"""
Game Controller

Handles all game-related HTTP endpoints. The browser client sends raw key
presses here and polls for the letters and render queues to draw.
"""

from flask import Blueprint, request, jsonify
from ..models.errors import AnimationInFlightError, AnimationStateError
from ..models.game import SubmitOutcome, SubmitStatus
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _game_not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _serialize_outcome(outcome: SubmitOutcome) -> dict:
    return {
        'status': outcome.status.value,
        'guess': outcome.guess,
        'game_status': outcome.game_status.value,
        'message': outcome.message,
        'results': [
            None if result is None else {
                'type': result.result_type.value,
                'letters': [letter.name for letter in result.letters],
            }
            for result in outcome.results
        ],
        'updates': [
            None if update is None else {
                'slot': update.slot,
                'result': update.result.name,
                'color': update.result.color,
            }
            for update in outcome.updates
        ],
    }


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        seed = data.get('seed')
        if seed is not None and not isinstance(seed, int):
            return jsonify({
                'success': False,
                'error': 'Seed must be an integer'
            }), 400

        game_logger.log_user_action(request, 'new_game', seed=seed)

        game_id = game_service.create_new_game(seed)
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=state.word_length, max_tries=state.max_tries
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get current game state."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _game_not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            current_try=state.current_try, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/letter', methods=['POST'])
def append_letter(game_id):
    """Type one letter into the current guess."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        letter = data.get('letter') if isinstance(data, dict) else None
        if not isinstance(letter, str) or len(letter) != 1 or not letter.isalpha():
            error_response = {
                'success': False,
                'error': 'A single letter is required'
            }
            game_logger.log_server_response(request, 'append_letter', False, error_response, game_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'append_letter', game_id, letter=letter)

        accepted = game_service.append_letter(game_id, letter)
        if accepted is None:
            return _game_not_found('append_letter', game_id)

        return jsonify({
            'success': True,
            'accepted': accepted,
            'guess_buffer': game_service.get_game_state(game_id).guess_buffer
        })

    except Exception as e:
        game_logger.log_error(request, e, 'append_letter', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'append_letter', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/backspace', methods=['POST'])
def remove_last_letter(game_id):
    """Remove the last letter of the current guess."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'remove_last_letter', game_id)

        accepted = game_service.remove_last_letter(game_id)
        if accepted is None:
            return _game_not_found('remove_last_letter', game_id)

        return jsonify({
            'success': True,
            'accepted': accepted,
            'guess_buffer': game_service.get_game_state(game_id).guess_buffer
        })

    except Exception as e:
        game_logger.log_error(request, e, 'remove_last_letter', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'remove_last_letter', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/submit', methods=['POST'])
def submit_guess(game_id):
    """Submit the current guess for evaluation against every word."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'submit_guess', game_id)

        outcome = game_service.submit_guess(game_id)
        if outcome is None:
            return _game_not_found('submit_guess', game_id)

        if outcome.status is SubmitStatus.REJECTED:
            error_response = {
                'success': False,
                'error': outcome.message,
                'outcome': _serialize_outcome(outcome)
            }
            game_logger.log_server_response(
                request, 'submit_guess', False, error_response, game_id,
                attempted_guess=outcome.guess
            )
            return jsonify(error_response), 400

        response_data = {
            'success': True,
            'outcome': _serialize_outcome(outcome),
            'state': game_service.get_game_state(game_id).to_dict()
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            status=outcome.status.value, guess=outcome.guess
        )

        return jsonify(response_data)

    except AnimationInFlightError as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 409

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/animation_complete', methods=['POST'])
def animation_complete(game_id):
    """Acknowledge that the client finished playing the last render queue."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'animation_complete', game_id)

        state = game_service.complete_animation(game_id)
        if state is None:
            return _game_not_found('animation_complete', game_id)

        response_data = {
            'success': True,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'animation_complete', True, response_data, game_id,
            current_try=state.current_try, game_over=state.game_over
        )

        return jsonify(response_data)

    except AnimationStateError as e:
        game_logger.log_error(request, e, 'animation_complete', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'animation_complete', False, error_response, game_id)
        return jsonify(error_response), 409

    except Exception as e:
        game_logger.log_error(request, e, 'animation_complete', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'animation_complete', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/events', methods=['GET'])
def drain_events(game_id):
    """Return the letters and render queues waiting to be drawn."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        events = game_service.drain_events(game_id)
        if events is None:
            return _game_not_found('drain_events', game_id)

        return jsonify({
            'success': True,
            'events': events
        })

    except Exception as e:
        game_logger.log_error(request, e, 'drain_events', game_id)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

        return jsonify(response_data), (200 if success else 404)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'log_stats': game_logger.get_log_stats()
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
