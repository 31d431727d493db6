"""
Services Package

Contains the guess engine and the services built around it.
"""

from .game_service import GameService, get_game_service, initialize_game_service
from .guess_engine import GuessEngine
from .presenter import Presenter, QueuedPresenter

__all__ = [
    'GameService', 'get_game_service', 'initialize_game_service',
    'GuessEngine', 'Presenter', 'QueuedPresenter'
]
