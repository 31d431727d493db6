"""
Data Models Package

Contains the game data models and the tower topology.
"""

from .dictionary import WordDictionary
from .errors import AnimationInFlightError, AnimationStateError, ThirdleError, TopologyError
from .game import (
    GameState,
    GameStatus,
    GuessResult,
    GuessResultType,
    LetterResult,
    SlotUpdate,
    SubmitOutcome,
    SubmitStatus,
)
from .tower import Face, FaceLetter, Slot, TowerLayout

__all__ = [
    'WordDictionary',
    'ThirdleError', 'TopologyError', 'AnimationInFlightError', 'AnimationStateError',
    'GameState', 'GameStatus', 'GuessResult', 'GuessResultType', 'LetterResult',
    'SlotUpdate', 'SubmitOutcome', 'SubmitStatus',
    'Face', 'FaceLetter', 'Slot', 'TowerLayout'
]
