"""
Guess Scoring

Scores a guess against one secret word and turns the per-face results of a
try into a render queue of tower slots.
"""

from typing import Collection, List, Optional, Sequence

from ..models.game import GuessResult, GuessResultType, LetterResult, SlotUpdate
from ..models.tower import NUM_FACES, Face, TowerLayout


def evaluate_guess(guess: str, secret: str, accepted: Collection[str]) -> GuessResult:
    """
    Implements the Wordle letter evaluation algorithm.

    Args:
        guess: Uppercase guess, same length as the secret
        secret: Uppercase secret word
        accepted: Words a guess must belong to

    Returns:
        GuessResult of type WIN, ERROR (unknown word) or VALID
    """
    if len(guess) != len(secret):
        raise ValueError(f"Guess '{guess}' and secret differ in length")

    if guess == secret:
        return GuessResult(GuessResultType.WIN, (LetterResult.MATCH,) * len(secret))

    if guess not in accepted:
        return GuessResult(GuessResultType.ERROR)

    letters = [LetterResult.WRONG] * len(guess)

    # Working copies track which letters have been claimed
    secret_chars: List[Optional[str]] = list(secret)
    guess_chars: List[Optional[str]] = list(guess)

    # First pass: exact positions
    for i, char in enumerate(guess):
        if secret_chars[i] == char:
            letters[i] = LetterResult.MATCH
            secret_chars[i] = None
            guess_chars[i] = None

    # Second pass: each remaining secret letter claims one unclaimed guess letter
    for char in secret_chars:
        if char is None or char not in guess_chars:
            continue
        guess_index = guess_chars.index(char)
        letters[guess_index] = LetterResult.CLOSE
        guess_chars[guess_index] = None

    return GuessResult(GuessResultType.VALID, tuple(letters))


def reconcile_corner(previous: Optional[GuessResult], current: GuessResult) -> LetterResult:
    """
    Colour of the corner shared by the previous face's last letter and the
    current face's first letter.
    """
    first = current.letters[0]
    if previous is None or previous.is_error:
        return first
    return first if previous.letters[-1] == first else LetterResult.MIXED


def build_render_queue(
    results: Sequence[Optional[GuessResult]],
    try_index: int,
    layout: TowerLayout,
) -> List[Optional[SlotUpdate]]:
    """
    Builds the ordered slot updates of one try.

    Each face contributes word_length - 1 entries: its corner first, then
    its interior letters. Faces without a result (already solved) contribute
    placeholders so positions stay aligned.

    With fewer than four words the ring is open: the first corner is not
    shared with the last face, and one extra entry closes the queue with the
    last face's final letter.
    """
    num_words = len(results)
    if not 1 <= num_words <= NUM_FACES:
        raise ValueError(f"Expected 1 to {NUM_FACES} results, got {num_words}")

    closed_ring = num_words == NUM_FACES
    per_face = layout.word_length - 1
    queue: List[Optional[SlotUpdate]] = []

    for face_index, result in enumerate(results):
        if result is None:
            queue.extend([None] * per_face)
            continue

        if result.is_error or len(result.letters) != layout.word_length:
            raise ValueError(f"Face {face_index} has no renderable result: {result}")

        face = Face(face_index)
        if face_index > 0 or closed_ring:
            previous = results[face_index - 1]
        else:
            previous = None

        queue.append(SlotUpdate(
            slot=layout.tower_index(try_index, face, 0),
            result=reconcile_corner(previous, result),
        ))
        for letter in range(1, per_face):
            queue.append(SlotUpdate(
                slot=layout.tower_index(try_index, face, letter),
                result=result.letters[letter],
            ))

    if not closed_ring:
        last = results[-1]
        queue.append(None if last is None else SlotUpdate(
            slot=layout.tower_index(try_index, Face(num_words - 1), per_face),
            result=last.letters[-1],
        ))

    return queue
