import pytest

from urdle.services.evaluator import revealed_positions
from urdle.services.hints import (
    hint_state,
    letter_hint_positions,
    letter_hint_threshold,
    next_hint_progress,
    unlocked_definition_count,
    unlocked_letter_count,
)


@pytest.mark.parametrize("guess_count, elapsed, expected", [
    (0, 0, 1),
    (1, 29, 1),
    (2, 0, 1),
    (0, 30, 1),
    (2, 30, 2),
    (3, 59, 2),
    (4, 59, 2),
    (0, 60, 1),
    (4, 60, 3),
])
def test_definitions_need_both_guesses_and_time(guess_count, elapsed, expected):
    assert unlocked_definition_count(guess_count, elapsed, False) == expected


def test_game_over_unlocks_everything():
    assert unlocked_definition_count(0, 0, True) == 3
    assert unlocked_letter_count(0, 0, True, 4) == 4
    assert next_hint_progress(0, 0, True, 4) is None


def test_letter_hint_positions_keep_one_open_slot():
    assert letter_hint_positions("cat", revealed_positions("cat")) == [0, 1]
    assert letter_hint_positions("algorithm", revealed_positions("algorithm")) == [1, 2, 4, 6, 7]
    assert letter_hint_positions("no cap", revealed_positions("no cap")) == [0, 1, 3, 4]


def test_letter_hints_follow_time_thresholds():
    assert [letter_hint_threshold(i) for i in range(3)] == [120, 180, 240]
    assert unlocked_letter_count(4, 119, False, 2) == 0
    assert unlocked_letter_count(0, 120, False, 2) == 0
    assert unlocked_letter_count(4, 120, False, 2) == 1
    assert unlocked_letter_count(4, 180, False, 2) == 2
    assert unlocked_letter_count(4, 1000, False, 2) == 2
    assert unlocked_letter_count(4, 1000, False, 0) == 0


@pytest.mark.parametrize("guess_count, elapsed, expected", [
    (0, 0, 0.0),
    (0, 15, 0.5),
    (2, 45, 0.5),
    (0, 90, 1.0),
    (4, 10, 1 / 3),
    (4, 90, 0.5),
    (4, 150, 0.5),
])
def test_progress_toward_next_locked_slot(guess_count, elapsed, expected):
    assert next_hint_progress(guess_count, elapsed, False, 2) == pytest.approx(expected)


def test_progress_is_none_when_everything_is_unlocked():
    assert next_hint_progress(4, 180, False, 2) is None


def test_unlocks_are_monotonic():
    slots = 3
    for game_over in (False, True):
        for guess_count in range(7):
            previous = None
            for elapsed in range(0, 400, 5):
                state = hint_state(guess_count, elapsed, game_over, slots)
                if previous is not None:
                    assert state.definitions_unlocked >= previous.definitions_unlocked
                    assert state.letters_unlocked >= previous.letters_unlocked
                if guess_count > 0:
                    earlier = hint_state(guess_count - 1, elapsed, game_over, slots)
                    assert state.used >= earlier.used
                if game_over:
                    assert state.used == state.total
                previous = state


def test_hint_state_totals():
    state = hint_state(2, 30, False, 2)
    assert state.definitions_unlocked == 2
    assert state.letters_unlocked == 0
    assert state.used == 2
    assert state.total == 5
