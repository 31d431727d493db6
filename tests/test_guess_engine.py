"""
Tests for thirdle.services.guess_engine.
"""

import asyncio

import pytest

from thirdle.config.game_settings import GameSettings
from thirdle.models.errors import AnimationInFlightError, AnimationStateError
from thirdle.models.game import GameStatus, LetterResult, SlotUpdate, SubmitStatus
from thirdle.models.tower import Face
from thirdle.services.guess_engine import GuessEngine
from thirdle.services.presenter import QueuedPresenter


class CapturingPresenter:
    """Holds on to completion callbacks so tests decide when playback ends."""

    def __init__(self):
        self.letters = []
        self.queues = []
        self.callbacks = []

    def show_letter(self, try_index, letter_offset, letter):
        self.letters.append(('show', try_index, letter_offset, letter))

    def clear_letter(self, try_index, letter_offset):
        self.letters.append(('clear', try_index, letter_offset))

    def play_updates(self, updates, on_complete):
        self.queues.append(list(updates))
        self.callbacks.append(on_complete)


def type_word(engine, word):
    for letter in word:
        engine.append_letter(letter)


def play_guess(engine, presenter, word):
    type_word(engine, word)
    outcome = engine.submit_guess()
    if outcome.status is SubmitStatus.ACCEPTED:
        presenter.acknowledge()
    return outcome


def test_append_letter_displays_and_fills_buffer(make_engine, presenter):
    engine = make_engine()

    assert engine.append_letter("c")
    assert engine.append_letter("R")

    assert engine.guess_buffer == "CR"
    assert presenter.drain() == [
        {'type': 'show_letter', 'try': 0, 'letter_offset': 0, 'letter': 'C'},
        {'type': 'show_letter', 'try': 0, 'letter_offset': 1, 'letter': 'R'},
    ]


def test_append_letter_ignored_when_buffer_full(make_engine, presenter):
    engine = make_engine()
    type_word(engine, "CRANE")
    presenter.drain()

    assert not engine.append_letter("S")
    assert engine.guess_buffer == "CRANE"
    assert presenter.drain() == []


def test_append_letter_rejects_non_letters(make_engine):
    engine = make_engine()

    for bad in ["", "AB", "1", " ", None]:
        with pytest.raises(ValueError):
            engine.append_letter(bad)


def test_remove_last_letter(make_engine, presenter):
    engine = make_engine()

    assert not engine.remove_last_letter()

    type_word(engine, "CRA")
    presenter.drain()
    assert engine.remove_last_letter()

    assert engine.guess_buffer == "CR"
    assert presenter.drain() == [{'type': 'clear_letter', 'try': 0, 'letter_offset': 2}]


def test_buffer_views_stay_in_lockstep(make_engine):
    engine = make_engine()
    edits = ["S", "L", "<", "T", "<", "<", "<", "<", "B", "R", "I", "C", "K", "X", "<"]

    for edit in edits:
        if edit == "<":
            engine.remove_last_letter()
        else:
            engine.append_letter(edit)

        views = engine.buffer_views()
        assert len(views) == 4
        assert len(set(views)) == 1
        assert views[0] == engine.guess_buffer

    assert engine.guess_buffer == "BRIC"


def test_short_guess_is_pending(make_engine, presenter):
    engine = make_engine()
    type_word(engine, "CRAN")

    outcome = engine.submit_guess()

    assert outcome.status is SubmitStatus.PENDING
    assert engine.guess_buffer == "CRAN"
    assert not engine.animation_in_flight


def test_unknown_guess_is_rejected_without_state_change(make_engine, presenter):
    engine = make_engine()
    type_word(engine, "QXZVW")
    presenter.drain()

    outcome = engine.submit_guess()

    assert outcome.status is SubmitStatus.REJECTED
    assert "QXZVW" in outcome.message
    assert engine.current_try == 0
    assert engine.guess_buffer == "QXZVW"
    assert engine.solved_words == set()
    assert engine.history == []
    assert not engine.animation_in_flight
    assert presenter.drain() == []

    # The player can correct the guess
    assert engine.remove_last_letter()
    assert engine.guess_buffer == "QXZV"


def test_accepted_guess_emits_reconciled_render_queue(make_engine, presenter):
    engine = make_engine()
    type_word(engine, "CRANE")
    presenter.drain()

    outcome = engine.submit_guess()

    W, C, M, X = LetterResult.WRONG, LetterResult.CLOSE, LetterResult.MATCH, LetterResult.MIXED
    assert outcome.status is SubmitStatus.ACCEPTED
    assert [result.letters for result in outcome.results] == [
        (W, W, M, W, M),
        (C, M, W, W, W),
        (W, W, W, C, C),
        (W, W, W, W, W),
    ]
    assert list(outcome.updates) == [
        SlotUpdate(0, W), SlotUpdate(1, W), SlotUpdate(2, M), SlotUpdate(3, W),
        SlotUpdate(4, X), SlotUpdate(6, M), SlotUpdate(8, W), SlotUpdate(10, W),
        SlotUpdate(15, W), SlotUpdate(14, W), SlotUpdate(13, W), SlotUpdate(12, C),
        SlotUpdate(11, X), SlotUpdate(9, W), SlotUpdate(7, W), SlotUpdate(5, W),
    ]

    events = presenter.drain()
    assert len(events) == 1
    assert events[0]['type'] == 'play_updates'
    assert events[0]['updates'][4] == {'slot': 4, 'result': 'MIXED', 'color': LetterResult.MIXED.color}


def test_try_advances_only_after_playback(make_engine, presenter):
    engine = make_engine()
    type_word(engine, "CRANE")
    engine.submit_guess()

    assert engine.current_try == 0
    assert engine.animation_in_flight
    assert engine.guess_buffer == ""

    # Input is locked while the queue plays
    assert not engine.append_letter("S")
    assert not engine.remove_last_letter()
    with pytest.raises(AnimationInFlightError):
        engine.submit_guess()

    presenter.acknowledge()

    assert engine.current_try == 1
    assert not engine.animation_in_flight
    assert engine.status is GameStatus.ACTIVE
    assert engine.append_letter("S")
    assert presenter.drain()[-1] == {'type': 'show_letter', 'try': 1, 'letter_offset': 0, 'letter': 'S'}


def test_completion_without_queue_is_an_error(make_engine, presenter):
    engine = make_engine()

    with pytest.raises(AnimationStateError):
        engine.complete_animation()
    with pytest.raises(AnimationStateError):
        presenter.acknowledge()


def test_completion_callback_is_single_use(dictionary):
    presenter = CapturingPresenter()
    engine = GuessEngine(dictionary, presenter, settings=GameSettings(5, 12, 4), secret_words=["SLATE", "BRICK", "MONEY", "PLUMB"])
    type_word(engine, "CRANE")
    engine.submit_guess()

    callback = presenter.callbacks[0]
    callback()
    with pytest.raises(AnimationStateError):
        callback()
    assert engine.current_try == 1


def test_solved_words_skip_later_tries(make_engine, presenter):
    engine = make_engine()

    outcome = play_guess(engine, presenter, "SLATE")
    assert outcome.results[0].is_win
    assert engine.solved_words == {0}

    outcome = play_guess(engine, presenter, "CRANE")
    assert outcome.results[0] is None
    assert outcome.updates[:4] == (None,) * 4
    assert all(update is not None for update in outcome.updates[4:])
    # Face 1's corner has no scored neighbour and keeps its own colour
    assert outcome.updates[4] == SlotUpdate(16 + 4, LetterResult.CLOSE)
    assert engine.solved_words == {0}


def test_all_words_solved_wins(make_engine, presenter):
    engine = make_engine()

    for word in ["PLUMB", "SLATE", "MONEY"]:
        play_guess(engine, presenter, word)
        assert engine.status is GameStatus.ACTIVE

    play_guess(engine, presenter, "BRICK")

    assert engine.status is GameStatus.WON
    assert engine.current_try == 4
    assert engine.solved_words == {0, 1, 2, 3}
    assert engine.submit_guess().status is SubmitStatus.INACTIVE


def test_running_out_of_tries_loses(make_engine, presenter):
    engine = make_engine(max_tries=2)

    play_guess(engine, presenter, "CRANE")
    assert engine.status is GameStatus.ACTIVE

    play_guess(engine, presenter, "STEEP")
    assert engine.status is GameStatus.LOST
    assert engine.current_try == 2

    assert not engine.append_letter("A")
    assert engine.submit_guess().status is SubmitStatus.INACTIVE


def test_win_on_last_try_is_a_win(dictionary):
    presenter = QueuedPresenter(auto_complete=True)
    engine = GuessEngine(dictionary, presenter, settings=GameSettings(5, 1, 1), secret_words=["CRANE"])

    type_word(engine, "CRANE")
    outcome = engine.submit_guess()

    assert outcome.game_status is GameStatus.WON
    assert engine.status is GameStatus.WON


def test_open_ring_closes_with_last_letter(dictionary):
    presenter = QueuedPresenter(auto_complete=True)
    engine = GuessEngine(dictionary, presenter, settings=GameSettings(5, 6, 1), secret_words=["SLATE"])

    type_word(engine, "STEEP")
    outcome = engine.submit_guess()

    W, C, M = LetterResult.WRONG, LetterResult.CLOSE, LetterResult.MATCH
    # The first corner has no neighbour and keeps its own colour
    assert list(outcome.updates) == [
        SlotUpdate(0, M), SlotUpdate(1, C), SlotUpdate(2, C), SlotUpdate(3, W), SlotUpdate(4, W),
    ]


@pytest.mark.parametrize("num_words", [1, 2, 3, 4])
def test_every_letter_of_every_word_is_rendered(make_engine, num_words):
    engine = make_engine(secret_words=["SLATE", "BRICK", "MONEY", "PLUMB"][:num_words])
    type_word(engine, "CRANE")

    outcome = engine.submit_guess()

    slots = [update.slot for update in outcome.updates]
    assert len(slots) == len(set(slots))
    for face in list(Face)[:num_words]:
        for letter in range(5):
            assert engine.layout.tower_index(0, face, letter) in slots

    if num_words < 4:
        assert outcome.updates[-1].result is outcome.results[-1].letters[-1]
        assert outcome.updates[0].result is outcome.results[0].letters[0]


def test_stale_callback_cannot_complete_a_later_queue(make_engine):
    presenter = CapturingPresenter()
    engine = make_engine(presenter=presenter)

    type_word(engine, "CRANE")
    engine.submit_guess()
    engine.complete_animation()

    type_word(engine, "STEEP")
    engine.submit_guess()

    with pytest.raises(AnimationStateError):
        presenter.callbacks[0]()
    assert engine.animation_in_flight
    assert engine.current_try == 1

    presenter.callbacks[1]()
    assert engine.current_try == 2
    assert not engine.animation_in_flight


def test_refused_queue_leaves_state_untouched(make_engine, presenter):
    engine = make_engine()

    type_word(engine, "CRANE")
    engine.submit_guess()
    # Completed directly, so the presenter still holds the first callback
    engine.complete_animation()

    type_word(engine, "SLATE")
    with pytest.raises(AnimationStateError):
        engine.submit_guess()

    assert engine.guess_buffer == "SLATE"
    assert engine.solved_words == set()
    assert [guess for guess, _ in engine.history] == ["CRANE"]
    assert not engine.animation_in_flight
    assert engine.current_try == 1

    with pytest.raises(AnimationStateError):
        presenter.acknowledge()

    assert engine.submit_guess().status is SubmitStatus.ACCEPTED
    presenter.acknowledge()
    assert engine.current_try == 2
    assert engine.solved_words == {0}


def test_snapshot_hides_answers_until_finished(make_engine, presenter):
    engine = make_engine(max_tries=1)
    type_word(engine, "CRA")

    state = engine.snapshot()
    assert state.answers is None
    assert state.guess_buffer == "CRA"
    assert state.status == "active"

    type_word(engine, "NE")
    engine.submit_guess()
    presenter.acknowledge()

    state = engine.snapshot().to_dict()
    assert state['game_over'] is True
    assert state['won'] is False
    assert state['answers'] == ["SLATE", "BRICK", "MONEY", "PLUMB"]
    assert state['guesses'] == ["CRANE"]
    assert state['guess_results'][0][0] == ['WRONG', 'WRONG', 'MATCH', 'WRONG', 'MATCH']


def test_secret_word_validation(dictionary, presenter):
    settings = GameSettings(5, 12, 2)

    with pytest.raises(ValueError):
        GuessEngine(dictionary, presenter, settings=settings, secret_words=["SLATE", "SLATE"])
    with pytest.raises(ValueError):
        GuessEngine(dictionary, presenter, settings=settings, secret_words=["SLATE"])
    with pytest.raises(ValueError):
        # Accepted guesses are not candidate secrets
        GuessEngine(dictionary, presenter, settings=settings, secret_words=["SLATE", "SPEED"])
    with pytest.raises(ValueError):
        GuessEngine(dictionary, presenter, settings=GameSettings(4, 12, 2))


def test_seeded_secrets_are_distinct_and_reproducible(dictionary, presenter):
    first = GuessEngine(dictionary, presenter, seed=7)
    second = GuessEngine(dictionary, QueuedPresenter(), seed=7)

    assert first.secret_words == second.secret_words
    assert len(set(first.secret_words)) == first.num_words == 4
    assert all(word in dictionary.answers for word in first.secret_words)


def test_submit_guess_async_waits_for_playback(make_engine):
    presenter = CapturingPresenter()
    engine = make_engine(presenter=presenter)
    type_word(engine, "CRANE")

    async def scenario():
        task = asyncio.ensure_future(engine.submit_guess_async())
        await asyncio.sleep(0)

        assert not task.done()
        assert engine.animation_in_flight
        assert engine.current_try == 0

        presenter.callbacks[0]()
        return await task

    outcome = asyncio.run(scenario())

    assert outcome.status is SubmitStatus.ACCEPTED
    assert engine.current_try == 1
    assert not engine.animation_in_flight


def test_submit_guess_async_with_immediate_playback(dictionary):
    presenter = QueuedPresenter(auto_complete=True)
    engine = GuessEngine(dictionary, presenter, settings=GameSettings(5, 12, 1), secret_words=["CRANE"])
    type_word(engine, "CRANE")

    outcome = asyncio.run(engine.submit_guess_async())

    assert outcome.game_status is GameStatus.WON
    assert engine.current_try == 1


def test_submit_guess_async_returns_rejections(make_engine):
    engine = make_engine()
    type_word(engine, "QXZVW")

    outcome = asyncio.run(engine.submit_guess_async())

    assert outcome.status is SubmitStatus.REJECTED
    assert engine.guess_buffer == "QXZVW"
