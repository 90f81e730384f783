from collections import Counter
from itertools import product

import pytest

from urdle.models.game import LetterState
from urdle.services.evaluator import (
    censor_word, evaluate_guess, keyboard_states, revealed_positions
)


def states(evaluation):
    return [letter.state for letter in evaluation]


def test_exact_guess_is_all_correct():
    assert states(evaluate_guess("cat", "cat")) == [LetterState.CORRECT] * 3


def test_anagram_is_all_present():
    assert states(evaluate_guess("tarb", "brat")) == [LetterState.PRESENT] * 4


def test_repeated_letters_are_credited_once_per_occurrence():
    assert states(evaluate_guess("pep", "eel")) == [
        LetterState.ABSENT, LetterState.CORRECT, LetterState.ABSENT
    ]
    assert states(evaluate_guess("lee", "eel")) == [
        LetterState.PRESENT, LetterState.CORRECT, LetterState.PRESENT
    ]
    assert states(evaluate_guess("eee", "eel")) == [
        LetterState.CORRECT, LetterState.CORRECT, LetterState.ABSENT
    ]


def test_marks_never_exceed_target_letter_counts():
    targets = ["eel", "brat", "cat", "tee"]
    for target in targets:
        for guess in map(''.join, product("etlab", repeat=len(target))):
            evaluation = evaluate_guess(guess, target)
            credited = Counter(l.letter for l in evaluation
                               if l.state in (LetterState.CORRECT, LetterState.PRESENT))
            for letter, count in credited.items():
                assert count <= target.count(letter)
            for i, letter in enumerate(evaluation):
                assert (letter.state == LetterState.CORRECT) == (guess[i] == target[i])


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        evaluate_guess("ca", "cat")


def test_revealed_positions_short_and_long_words():
    assert revealed_positions("cat") == set()
    assert revealed_positions("no cap") == {2}
    assert revealed_positions("algorithm") == {0, 3, 5}
    assert revealed_positions("ALGORITHM") == {0, 3, 5}
    assert revealed_positions("main character") == {1, 2, 4, 7, 9, 12}


def test_revealed_positions_is_idempotent():
    for word in ["situationship", "vibe check", "rizz"]:
        first = revealed_positions(word)
        assert revealed_positions(word) == first
        assert all(0 <= i < len(word) for i in first)


def test_revealed_positions_score_correct_and_consume_their_letter():
    revealed = revealed_positions("algorithm")
    evaluation = evaluate_guess("aagorithm", "algorithm", revealed)
    assert evaluation[0].state == LetterState.CORRECT
    assert evaluation[1].state == LetterState.ABSENT
    assert all(l.state == LetterState.CORRECT for l in evaluation[2:])


def test_keyboard_reveals_all_vowels_for_long_words():
    keyboard = keyboard_states([], "algorithm", revealed_positions("algorithm"))
    for vowel in "aeiou":
        assert keyboard[vowel] == LetterState.REVEALED
    assert "l" not in keyboard


def test_keyboard_keeps_best_state():
    keyboard = keyboard_states(["tarb", "boxy"], "brat")
    assert keyboard["b"] == LetterState.CORRECT
    assert keyboard["t"] == LetterState.PRESENT
    assert keyboard["o"] == LetterState.ABSENT

    keyboard = keyboard_states(["boxy", "tarb"], "brat")
    assert keyboard["b"] == LetterState.CORRECT


def test_keyboard_never_downgrades_as_history_grows():
    target = "brat"
    history = ["tarb", "boxy", "trab", "brat"]
    previous = {}
    for n in range(1, len(history) + 1):
        current = keyboard_states(history[:n], target)
        for letter, state in previous.items():
            assert current[letter].priority >= state.priority
        previous = current


def test_keyboard_skips_revealed_positions():
    revealed = revealed_positions("algorithm")
    keyboard = keyboard_states(["aagorithm"], "algorithm", revealed)
    assert keyboard["e"] == LetterState.REVEALED
    assert keyboard["a"] == LetterState.ABSENT
    assert keyboard["g"] == LetterState.CORRECT


def test_censor_word_is_case_insensitive():
    assert censor_word("Rizz is rizz", "rizz") == "____ is ____"
    assert censor_word("Nothing here", "rizz") == "Nothing here"
    assert censor_word("a.b and axb", "a.b") == "___ and axb"
