"""
Guess Evaluation

Reveal policy, duplicate-safe guess scoring and keyboard state folding.
All functions are pure.
"""

import re
from typing import AbstractSet, Dict, Iterable, List, Optional, Set

from ..config.game_settings import LONG_WORD_THRESHOLD, VOWELS
from ..models.game import EvaluatedLetter, LetterState


def is_long_word(target: str) -> bool:
    return len(target) > LONG_WORD_THRESHOLD


def revealed_positions(target: str) -> Set[int]:
    """
    Positions shown before the player types anything.

    Spaces are always revealed; words longer than the threshold also get
    every vowel revealed.
    """
    long_word = is_long_word(target)
    positions = set()
    for i, char in enumerate(target):
        if char == ' ' or (long_word and char.lower() in VOWELS):
            positions.add(i)
    return positions


def evaluate_guess(guess: str, target: str,
                   revealed: Optional[AbstractSet[int]] = None) -> List[EvaluatedLetter]:
    """
    Implements the Wordle letter evaluation algorithm.

    Revealed positions always score CORRECT and consume their target letter,
    so a repeat of that letter elsewhere cannot claim PRESENT from it.

    Raises:
        ValueError: If guess and target lengths differ
    """
    if len(guess) != len(target):
        raise ValueError(f"Guess length {len(guess)} does not match target length {len(target)}")

    revealed = revealed or frozenset()
    states: List[Optional[LetterState]] = [None] * len(guess)

    # Letters still available for PRESENT matches
    remaining: List[Optional[str]] = list(target)

    # First pass: revealed positions and exact matches
    for i, letter in enumerate(guess):
        if i in revealed or letter == target[i]:
            states[i] = LetterState.CORRECT
            remaining[i] = None

    # Second pass: present letters and misses
    for i, letter in enumerate(guess):
        if states[i] is not None:
            continue
        if letter in remaining:
            states[i] = LetterState.PRESENT
            remaining[remaining.index(letter)] = None
        else:
            states[i] = LetterState.ABSENT

    return [EvaluatedLetter(letter, state) for letter, state in zip(guess, states)]


def keyboard_states(guesses: Iterable[str], target: str,
                    revealed: Optional[AbstractSet[int]] = None) -> Dict[str, LetterState]:
    """
    Fold every guess into a single best-known state per letter.

    Letters that only occur at revealed positions start as REVEALED, and for
    long words all vowels do. A letter's state never moves to a lower priority.
    """
    revealed = revealed or frozenset()
    states: Dict[str, LetterState] = {}

    for letter in set(target) - {' '}:
        occurrences = [i for i, char in enumerate(target) if char == letter]
        if all(i in revealed for i in occurrences):
            states[letter] = LetterState.REVEALED

    if revealed and is_long_word(target):
        for vowel in VOWELS:
            states.setdefault(vowel, LetterState.REVEALED)

    for guess in guesses:
        for i, evaluated in enumerate(evaluate_guess(guess, target, revealed)):
            if i in revealed or evaluated.letter == ' ':
                continue
            current = states.get(evaluated.letter)
            if current is None or evaluated.state.priority > current.priority:
                states[evaluated.letter] = evaluated.state

    return states


def censor_word(text: str, word: str) -> str:
    """Replace every case-insensitive occurrence of `word` with underscores."""
    if not word:
        return text
    return re.sub(re.escape(word), '_' * len(word), text, flags=re.IGNORECASE)
