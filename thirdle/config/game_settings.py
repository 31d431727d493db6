"""
Game Configuration Constants Module

Defines the game shape (word length, tries, simultaneous words) and loads the
two word lists a game is played with. All game parameters are centralized
here to enable easy modification.
"""

import json
import os
from dataclasses import dataclass
from typing import Dict, List, Final

from .app_config import Config
from ..models.dictionary import WordDictionary
from ..models.tower import NUM_FACES


WORD_LENGTH: Final[int] = Config.WORD_LENGTH
MAX_TRIES: Final[int] = Config.MAX_TRIES
NUM_WORDS: Final[int] = Config.NUM_WORDS


@dataclass(frozen=True)
class GameSettings:
    """
    Shape of one game, validated on construction.

    Attributes:
        word_length: Letters per word, also the side of the tower ring (L >= 2)
        max_tries: Layers of the tower (>= 1)
        num_words: Simultaneous secret words, one per face (1..4)
    """
    word_length: int = WORD_LENGTH
    max_tries: int = MAX_TRIES
    num_words: int = NUM_WORDS

    def __post_init__(self):
        if self.word_length < 2:
            raise ValueError(f"Word length must be at least 2, got {self.word_length}")
        if self.max_tries < 1:
            raise ValueError(f"Max tries must be at least 1, got {self.max_tries}")
        if not 1 <= self.num_words <= NUM_FACES:
            raise ValueError(f"Number of words must be between 1 and {NUM_FACES}, got {self.num_words}")


def _load_word_list(filename: str) -> List[str]:
    """
    Load a word list from a JSON file in this directory.

    Returns:
        List[str]: Uppercase words

    Raises:
        FileNotFoundError: If the file is not found
        ValueError: If the list is empty, malformed or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, filename)

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {filename}: {e}") from e

    if not isinstance(word_list, list):
        raise ValueError(f"{filename} must contain an array of words")

    if not word_list:
        raise ValueError(f"{filename} cannot be empty")

    uppercase_words = [word.upper() for word in word_list]

    for word in uppercase_words:
        if not word.isalpha():
            raise ValueError(f"Word '{word}' in {filename} contains non-alphabetic characters")

    return uppercase_words


# Candidate secrets and the broader list of accepted guesses
ANSWER_WORDS: Final[List[str]] = _load_word_list('answers.json')
ACCEPTED_WORDS: Final[List[str]] = _load_word_list('accepted.json')


def build_dictionary(word_length: int = WORD_LENGTH) -> WordDictionary:
    """
    Builds the game dictionary for one word length.

    Raises:
        ValueError: If no answer of that length exists
    """
    answers = [word for word in ANSWER_WORDS if len(word) == word_length]
    if not answers:
        raise ValueError(f"No answer words of length {word_length}")
    accepted = [word for word in ACCEPTED_WORDS if len(word) == word_length]
    return WordDictionary(answers, accepted)


def validate_word_list_integrity(word_length: int = WORD_LENGTH, num_words: int = NUM_WORDS) -> bool:
    """
    Validates the integrity and consistency of the word lists.

    Only words of `word_length` take part in a game, so the lists may mix
    lengths. This function checks that:
    1. Both lists are non-empty
    2. No list contains duplicate entries
    3. There are enough answers of the configured length to fill every word

    Returns:
        bool: True if the word lists pass all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    for name, words in (('answers', ANSWER_WORDS), ('accepted', ACCEPTED_WORDS)):
        if not words:
            raise ValueError(f"Word list '{name}' cannot be empty")

        if len(words) != len(set(words)):
            duplicates = sorted({word for word in words if words.count(word) > 1})
            raise ValueError(f"Duplicate words found in '{name}': {duplicates}")

    playable = [word for word in ANSWER_WORDS if len(word) == word_length]
    if len(playable) < num_words:
        raise ValueError(
            f"Need at least {num_words} answers of {word_length} letters, found {len(playable)}"
        )

    return True


def get_word_statistics() -> Dict:
    """
    Analyzes the answer list and returns statistics for game balancing.

    Returns:
        dict: total_words, accepted_words, avg_vowel_count, letter_frequency
        and most_common_letters
    """
    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in ANSWER_WORDS)

    letter_frequency: Dict[str, int] = {}
    for word in ANSWER_WORDS:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(ANSWER_WORDS),
        "accepted_words": len(set(ANSWER_WORDS) | set(ACCEPTED_WORDS)),
        "avg_vowel_count": round(total_vowels / len(ANSWER_WORDS), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        print(" Word list validation passed")

        stats = get_word_statistics()
        print(f" Game statistics: {stats}")

        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
