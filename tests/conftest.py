"""
Pytest configuration for the Thirdle server.

Points the game log at a throwaway directory and provides a small, fixed
dictionary so engine tests know every secret word.
"""

import os
import tempfile

# Keep test runs from writing logs into the working tree.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="thirdle-logs-"))

import pytest

from thirdle.config.game_settings import GameSettings
from thirdle.models.dictionary import WordDictionary
from thirdle.services.guess_engine import GuessEngine
from thirdle.services.presenter import QueuedPresenter


ANSWERS = ["SLATE", "BRICK", "MONEY", "PLUMB", "CRANE", "STEEP", "ERASE", "BONUS"]
ACCEPTED = ["SPEED", "RAISE", "SLEEK", "DROOL", "SOULS", "TRAIN", "GHOST", "PIXEL"]
SECRETS = ["SLATE", "BRICK", "MONEY", "PLUMB"]


@pytest.fixture
def dictionary():
    return WordDictionary(ANSWERS, ACCEPTED)


@pytest.fixture
def presenter():
    return QueuedPresenter()


@pytest.fixture
def make_engine(dictionary, presenter):
    def _make(secret_words=SECRETS, max_tries=12, num_words=None, presenter=presenter):
        settings = GameSettings(
            word_length=5,
            max_tries=max_tries,
            num_words=num_words or len(secret_words),
        )
        return GuessEngine(dictionary, presenter, settings=settings, secret_words=secret_words)
    return _make
