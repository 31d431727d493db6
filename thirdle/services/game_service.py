"""
Game Service

Keeps the live game sessions of the HTTP server, one engine per game id,
each wired to a presenter that queues events for the browser client.
"""

import threading
import uuid
from typing import Dict, List, Optional

from ..config.game_settings import GameSettings, build_dictionary
from ..models.dictionary import WordDictionary
from ..models.game import GameState, SubmitOutcome
from .guess_engine import GuessEngine
from .presenter import QueuedPresenter


class GameSession:
    """An engine together with the presenter it renders through."""

    def __init__(self, engine: GuessEngine, presenter: QueuedPresenter):
        self.engine = engine
        self.presenter = presenter
        # One request at a time per game
        self.lock = threading.Lock()


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Secret word selection through the engine
    - Forwarding input to the engine and draining presenter events
    - Game state snapshots without exposing answers to clients
    """

    def __init__(self, settings: Optional[GameSettings] = None, dictionary: Optional[WordDictionary] = None):
        self.settings = settings or GameSettings()
        self.dictionary = dictionary or build_dictionary(self.settings.word_length)
        self.games: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create_new_game(self, seed: Optional[int] = None) -> str:
        """
        Creates a new game session with randomly selected secret words.

        Args:
            seed: Optional seed for reproducible word selection

        Returns:
            str: Unique game ID for this session
        """
        game_id = str(uuid.uuid4())
        presenter = QueuedPresenter()
        engine = GuessEngine(
            self.dictionary,
            presenter,
            settings=self.settings,
            seed=seed,
            game_id=game_id,
        )

        with self._lock:
            self.games[game_id] = GameSession(engine, presenter)
        return game_id

    def get_session(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self.games.get(game_id)

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """Returns the current game state, or None if the game is unknown."""
        session = self.get_session(game_id)
        if session is None:
            return None
        with session.lock:
            return session.engine.snapshot()

    def append_letter(self, game_id: str, letter: str) -> Optional[bool]:
        session = self.get_session(game_id)
        if session is None:
            return None
        with session.lock:
            return session.engine.append_letter(letter)

    def remove_last_letter(self, game_id: str) -> Optional[bool]:
        session = self.get_session(game_id)
        if session is None:
            return None
        with session.lock:
            return session.engine.remove_last_letter()

    def submit_guess(self, game_id: str) -> Optional[SubmitOutcome]:
        session = self.get_session(game_id)
        if session is None:
            return None
        with session.lock:
            return session.engine.submit_guess()

    def complete_animation(self, game_id: str) -> Optional[GameState]:
        """Acknowledges playback of the last render queue and advances the try."""
        session = self.get_session(game_id)
        if session is None:
            return None
        with session.lock:
            session.presenter.acknowledge()
            return session.engine.snapshot()

    def drain_events(self, game_id: str) -> Optional[List[Dict]]:
        session = self.get_session(game_id)
        if session is None:
            return None
        return session.presenter.drain()

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            return self.games.pop(game_id, None) is not None


# Global service instance
_game_service: Optional[GameService] = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(settings: Optional[GameSettings] = None,
                            dictionary: Optional[WordDictionary] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(settings, dictionary)
    return _game_service
