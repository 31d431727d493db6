"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class LetterResult(Enum):
    """Letter evaluation status of one slot, valued by its display colour."""
    WRONG = "#111111"
    CLOSE = "#c8c100"
    MATCH = "#00c839"
    MIXED = "#6b00c8"  # Corner slot whose two faces disagree
    DEFAULT = "#00303c"  # Not revealed yet

    @property
    def color(self) -> str:
        return self.value


class GuessResultType(Enum):
    WIN = "win"
    VALID = "valid"
    ERROR = "error"


@dataclass(frozen=True)
class GuessResult:
    """Outcome of scoring one guess against one secret word."""
    result_type: GuessResultType
    letters: Tuple[LetterResult, ...] = ()

    @property
    def is_win(self) -> bool:
        return self.result_type is GuessResultType.WIN

    @property
    def is_error(self) -> bool:
        return self.result_type is GuessResultType.ERROR


@dataclass(frozen=True)
class SlotUpdate:
    """One entry of a render queue: recolour a tower-wide slot."""
    slot: int
    result: LetterResult


class SubmitStatus(Enum):
    PENDING = "pending"  # Buffer not full yet
    REJECTED = "rejected"  # Guess not in the accepted dictionary
    ACCEPTED = "accepted"
    INACTIVE = "inactive"  # Game already finished


class GameStatus(Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"

    @property
    def finished(self) -> bool:
        return self is not GameStatus.ACTIVE


@dataclass(frozen=True)
class SubmitOutcome:
    """What a submission produced."""
    status: SubmitStatus
    guess: str = ""
    results: Tuple[Optional[GuessResult], ...] = ()
    updates: Tuple[Optional[SlotUpdate], ...] = ()
    game_status: GameStatus = GameStatus.ACTIVE
    message: Optional[str] = None


@dataclass
class GameState:
    """Serializable view of one game, secrets hidden until it is over."""
    game_id: Optional[str]
    current_try: int
    max_tries: int
    word_length: int
    num_words: int
    status: str
    game_over: bool
    won: bool
    guess_buffer: str
    solved_words: List[int]
    animation_in_flight: bool
    guesses: List[str] = field(default_factory=list)
    guess_results: List[List[Optional[List[str]]]] = field(default_factory=list)  # Result names per word
    answers: Optional[List[str]] = None  # Only included when game is over

    def to_dict(self) -> Dict:
        return asdict(self)
