"""
Word Dictionary Model

Holds the two word lists a game is played with: the answer list secrets are
drawn from and the broader set of accepted guesses.
"""

import random
from typing import FrozenSet, Iterable, List, Optional, Tuple


class WordDictionary:
    """
    Immutable pair of word lists of one fixed word length.

    Every answer is also an accepted guess, so `accepted` is always a
    superset of `answers`.
    """

    def __init__(self, answers: Iterable[str], accepted: Iterable[str] = ()):
        answer_list = [word.strip().upper() for word in answers]
        if not answer_list:
            raise ValueError("Answer list cannot be empty")

        # Keep first occurrence order so seeded picks are reproducible
        self.answers: Tuple[str, ...] = tuple(dict.fromkeys(answer_list))
        self.accepted: FrozenSet[str] = frozenset(
            [word.strip().upper() for word in accepted]
        ) | frozenset(self.answers)

        lengths = {len(word) for word in self.accepted}
        if len(lengths) != 1:
            raise ValueError(f"All words must share one length, found lengths {sorted(lengths)}")
        self.word_length = lengths.pop()

        for word in self.accepted:
            if not word.isalpha():
                raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    def __contains__(self, word: str) -> bool:
        return word.upper() in self.accepted

    def __len__(self) -> int:
        return len(self.accepted)

    def is_accepted(self, word: str) -> bool:
        return word in self

    def pick_secrets(self, count: int, seed: Optional[int] = None) -> List[str]:
        """Picks `count` mutually distinct answers."""
        if count > len(self.answers):
            raise ValueError(f"Cannot pick {count} distinct secrets from {len(self.answers)} answers")
        return random.Random(seed).sample(self.answers, count)
