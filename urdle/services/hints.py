"""
Hint Unlock Scheduler

Pure functions deciding how many definition and letter hints are unlocked
for a given guess count, elapsed time and game-over flag.

Definition slot s unlocks once the player has made DEFINITION_GUESS_THRESHOLDS[s]
guesses and DEFINITION_TIME_THRESHOLDS[s] seconds have passed. Letter hints
start after every definition is visible and arrive every LETTER_HINT_INTERVAL
seconds after the last definition time threshold.
"""

from typing import AbstractSet, List, Optional

from ..config.game_settings import (
    DEFINITION_GUESS_THRESHOLDS,
    DEFINITION_SLOTS,
    DEFINITION_TIME_THRESHOLDS,
    LETTER_HINT_INTERVAL,
)
from ..models.game import HintState


def unlocked_definition_count(guess_count: int, elapsed_seconds: int, game_over: bool) -> int:
    if game_over:
        return DEFINITION_SLOTS

    unlocked = 0
    for guess_threshold, time_threshold in zip(DEFINITION_GUESS_THRESHOLDS, DEFINITION_TIME_THRESHOLDS):
        if guess_count >= guess_threshold and elapsed_seconds >= time_threshold:
            unlocked += 1
        else:
            break
    return unlocked


def letter_hint_positions(target: str, revealed: AbstractSet[int]) -> List[int]:
    """
    Positions the letter-hint track may reveal, in unlock order.

    The last open position is never offered so the player always types at
    least one letter.
    """
    open_positions = [i for i in range(len(target)) if i not in revealed]
    return open_positions[:-1]


def letter_hint_threshold(index: int) -> int:
    """Elapsed seconds needed for the letter hint at `index` (0-based)."""
    return DEFINITION_TIME_THRESHOLDS[-1] + LETTER_HINT_INTERVAL * (index + 1)


def unlocked_letter_count(guess_count: int, elapsed_seconds: int, game_over: bool,
                          letter_slots: int) -> int:
    if game_over:
        return letter_slots
    if unlocked_definition_count(guess_count, elapsed_seconds, game_over) < DEFINITION_SLOTS:
        return 0

    unlocked = 0
    while unlocked < letter_slots and elapsed_seconds >= letter_hint_threshold(unlocked):
        unlocked += 1
    return unlocked


def _progress(elapsed_seconds: int, previous: int, threshold: int) -> float:
    if threshold <= previous:
        return 1.0
    return min(max((elapsed_seconds - previous) / (threshold - previous), 0.0), 1.0)


def next_hint_progress(guess_count: int, elapsed_seconds: int, game_over: bool,
                       letter_slots: int) -> Optional[float]:
    """
    Time progress toward the next locked hint slot, in [0, 1].

    Returns None when every slot is unlocked.
    """
    if game_over:
        return None

    definitions = unlocked_definition_count(guess_count, elapsed_seconds, game_over)
    if definitions < DEFINITION_SLOTS:
        return _progress(elapsed_seconds,
                         DEFINITION_TIME_THRESHOLDS[definitions - 1],
                         DEFINITION_TIME_THRESHOLDS[definitions])

    letters = unlocked_letter_count(guess_count, elapsed_seconds, game_over, letter_slots)
    if letters >= letter_slots:
        return None

    previous = DEFINITION_TIME_THRESHOLDS[-1] if letters == 0 else letter_hint_threshold(letters - 1)
    return _progress(elapsed_seconds, previous, letter_hint_threshold(letters))


def hint_state(guess_count: int, elapsed_seconds: int, game_over: bool,
               letter_slots: int) -> HintState:
    return HintState(
        definitions_unlocked=unlocked_definition_count(guess_count, elapsed_seconds, game_over),
        definition_slots=DEFINITION_SLOTS,
        letters_unlocked=unlocked_letter_count(guess_count, elapsed_seconds, game_over, letter_slots),
        letter_slots=letter_slots,
        next_progress=next_hint_progress(guess_count, elapsed_seconds, game_over, letter_slots),
    )
