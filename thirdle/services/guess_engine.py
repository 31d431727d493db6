"""
Guess Engine

Owns the state of one game: the secret words, the current try, the guess
buffer and the set of solved words. It scores submissions, builds the render
queue for each try and advances once the presenter has played it back.
"""

import asyncio
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from ..config.game_settings import GameSettings
from ..models.dictionary import WordDictionary
from ..models.errors import AnimationInFlightError, AnimationStateError
from ..models.game import (
    GameState,
    GameStatus,
    GuessResult,
    SubmitOutcome,
    SubmitStatus,
)
from ..models.tower import get_layout
from ..utils.game_logger import game_logger
from .presenter import CompletionCallback, Presenter
from .scoring import build_render_queue, evaluate_guess


class GuessEngine:
    """
    State machine over ACTIVE, WON and LOST.

    The engine keeps a single guess buffer; the per-word buffers every face
    is scored from are derived views of it and cannot drift apart.

    Attributes:
        dictionary: Answer list and accepted guesses
        settings: Word length, tries and number of words
        presenter: Collaborator that displays letters and plays render queues
        layout: Tower topology used to turn face letters into slots
        secret_words: One uppercase secret per face
        current_try: Completed tries, 0..max_tries
        solved_words: Indices of words guessed correctly
        status: Current GameStatus
    """

    def __init__(
        self,
        dictionary: WordDictionary,
        presenter: Presenter,
        settings: Optional[GameSettings] = None,
        secret_words: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
        game_id: Optional[str] = None,
    ):
        self.settings = settings or GameSettings(word_length=dictionary.word_length)
        if dictionary.word_length != self.settings.word_length:
            raise ValueError(
                f"Dictionary words have {dictionary.word_length} letters, "
                f"settings expect {self.settings.word_length}"
            )

        self.dictionary = dictionary
        self.presenter = presenter
        self.game_id = game_id
        self.layout = get_layout(self.settings.word_length, self.settings.max_tries)

        if secret_words is None:
            secret_words = dictionary.pick_secrets(self.settings.num_words, seed)
        self.secret_words: Tuple[str, ...] = self._validate_secrets(secret_words)

        self.current_try = 0
        self.solved_words = set()
        self.status = GameStatus.ACTIVE
        self.history: List[Tuple[str, Tuple[Optional[GuessResult], ...]]] = []

        self._buffer = ""
        self._animation_in_flight = False
        # Each emitted render queue gets a token; only its own callback may complete it
        self._queue_token = 0
        self._pending_token: Optional[int] = None
        self._completion_waiters: List[Tuple[asyncio.AbstractEventLoop, asyncio.Future]] = []

        game_logger.log_game_event(
            game_id, 'game_started',
            word_length=self.settings.word_length,
            max_tries=self.settings.max_tries,
            num_words=self.settings.num_words,
        )

    def _validate_secrets(self, secret_words: Sequence[str]) -> Tuple[str, ...]:
        secrets = tuple(word.upper() for word in secret_words)
        if len(secrets) != self.settings.num_words:
            raise ValueError(f"Expected {self.settings.num_words} secret words, got {len(secrets)}")
        if len(set(secrets)) != len(secrets):
            raise ValueError("Secret words must be mutually distinct")
        for word in secrets:
            if word not in self.dictionary.answers:
                raise ValueError(f"Secret word '{word}' is not in the answer list")
        return secrets

    @property
    def word_length(self) -> int:
        return self.settings.word_length

    @property
    def max_tries(self) -> int:
        return self.settings.max_tries

    @property
    def num_words(self) -> int:
        return self.settings.num_words

    @property
    def active(self) -> bool:
        return self.status is GameStatus.ACTIVE

    @property
    def animation_in_flight(self) -> bool:
        return self._animation_in_flight

    @property
    def guess_buffer(self) -> str:
        return self._buffer

    def buffer_views(self) -> List[str]:
        """The guess as seen by each word."""
        return [self._buffer] * self.num_words

    def _accepts_input(self) -> bool:
        return self.active and not self._animation_in_flight

    def append_letter(self, char: str) -> bool:
        """
        Appends one letter to the guess.

        Returns:
            bool: False when the letter was ignored (game over, animation
            playing or buffer full)

        Raises:
            ValueError: If `char` is not a single letter
        """
        if not isinstance(char, str) or len(char) != 1 or not char.isalpha():
            raise ValueError(f"Expected a single letter, got {char!r}")

        if not self._accepts_input() or len(self._buffer) >= self.word_length:
            return False

        letter = char.upper()
        offset = len(self._buffer)
        self._buffer += letter
        self.presenter.show_letter(self.current_try, offset, letter)
        return True

    def remove_last_letter(self) -> bool:
        """Removes the last letter of the guess; False when nothing changed."""
        if not self._accepts_input() or not self._buffer:
            return False

        self._buffer = self._buffer[:-1]
        self.presenter.clear_letter(self.current_try, len(self._buffer))
        return True

    def submit_guess(self) -> SubmitOutcome:
        """
        Scores the buffer against every unsolved word.

        A guess outside the accepted dictionary is rejected as a whole and
        leaves the game untouched. An accepted guess is turned into a render
        queue handed to the presenter; the try only advances once the
        presenter calls back. If the presenter refuses the queue, the
        submission is undone and its error propagates.

        Raises:
            AnimationInFlightError: If the previous render queue is still playing
        """
        if not self.active:
            return SubmitOutcome(SubmitStatus.INACTIVE, game_status=self.status)

        if self._animation_in_flight:
            raise AnimationInFlightError("Cannot submit while the previous guess is still being rendered")

        guess = self._buffer
        if len(guess) < self.word_length:
            return SubmitOutcome(SubmitStatus.PENDING, guess=guess, game_status=self.status)

        results: List[Optional[GuessResult]] = []
        for index, secret in enumerate(self.secret_words):
            if index in self.solved_words:
                results.append(None)
                continue

            result = evaluate_guess(guess, secret, self.dictionary.accepted)
            if result.is_error:
                game_logger.log_game_event(self.game_id, 'guess_rejected', guess=guess, try_index=self.current_try)
                return SubmitOutcome(
                    SubmitStatus.REJECTED,
                    guess=guess,
                    game_status=self.status,
                    message=f'Your guess "{guess}" was not in the game dictionary.',
                )
            results.append(result)

        updates = build_render_queue(results, self.current_try, self.layout)

        newly_solved = [index for index, result in enumerate(results) if result is not None and result.is_win]
        previously_solved = set(self.solved_words)
        self.solved_words.update(newly_solved)
        self.history.append((guess, tuple(results)))
        self._buffer = ""
        self._animation_in_flight = True
        self._queue_token += 1
        token = self._pending_token = self._queue_token
        try_index = self.current_try

        try:
            self.presenter.play_updates(updates, self._completion_callback(token))
        except Exception:
            # Presenter refused the queue: undo the submission unless it already completed
            if self._pending_token == token:
                self.solved_words = previously_solved
                self.history.pop()
                self._buffer = guess
                self._animation_in_flight = False
                self._pending_token = None
                game_logger.log_game_event(self.game_id, 'guess_rolled_back', guess=guess, try_index=try_index)
            raise

        game_logger.log_game_event(
            self.game_id, 'guess_accepted',
            guess=guess, try_index=try_index, newly_solved=newly_solved,
        )

        return SubmitOutcome(
            SubmitStatus.ACCEPTED,
            guess=guess,
            results=tuple(results),
            updates=tuple(updates),
            game_status=self.status,
        )

    def _completion_callback(self, token: int) -> CompletionCallback:
        called = False

        def on_complete() -> None:
            nonlocal called
            if called:
                raise AnimationStateError("Render queue completion signalled twice")
            called = True
            if token != self._pending_token:
                raise AnimationStateError(f"Render queue #{token} is no longer in flight")
            self.complete_animation()

        return on_complete

    def complete_animation(self) -> GameStatus:
        """
        Advances to the next try once the render queue has played.

        Completing directly retires the queue in flight, so the callback
        issued for it is refused afterwards.

        Raises:
            AnimationStateError: If no render queue is in flight
        """
        if not self._animation_in_flight:
            raise AnimationStateError("No render queue is in flight")

        self._animation_in_flight = False
        self._pending_token = None
        self.current_try += 1

        if len(self.solved_words) == self.num_words:
            self.status = GameStatus.WON
            game_logger.log_game_event(self.game_id, 'game_won', tries_used=self.current_try)
        elif self.current_try == self.max_tries:
            self.status = GameStatus.LOST
            game_logger.log_game_event(
                self.game_id, 'game_lost',
                tries_used=self.current_try, solved_words=sorted(self.solved_words),
            )

        waiters, self._completion_waiters = self._completion_waiters, []
        for loop, done in waiters:
            loop.call_soon_threadsafe(_resolve, done)

        return self.status

    async def submit_guess_async(self) -> SubmitOutcome:
        """
        Submits the guess and waits until its render queue has been played.

        The presenter's completion callback resolves a future, so callers
        await one signal instead of chaining their own continuation.
        """
        outcome = self.submit_guess()
        if outcome.status is not SubmitStatus.ACCEPTED:
            return outcome

        if self._animation_in_flight:
            loop = asyncio.get_running_loop()
            done = loop.create_future()
            self._completion_waiters.append((loop, done))
            await done

        return replace(outcome, game_status=self.status)

    def snapshot(self) -> GameState:
        """Serializable state; secret words are only revealed once the game is over."""
        return GameState(
            game_id=self.game_id,
            current_try=self.current_try,
            max_tries=self.max_tries,
            word_length=self.word_length,
            num_words=self.num_words,
            status=self.status.value,
            game_over=self.status.finished,
            won=self.status is GameStatus.WON,
            guess_buffer=self._buffer,
            solved_words=sorted(self.solved_words),
            animation_in_flight=self._animation_in_flight,
            guesses=[guess for guess, _ in self.history],
            guess_results=[
                [None if result is None else [letter.name for letter in result.letters] for result in results]
                for _, results in self.history
            ],
            answers=list(self.secret_words) if self.status.finished else None,
        )


def _resolve(done: asyncio.Future) -> None:
    if not done.done():
        done.set_result(None)
