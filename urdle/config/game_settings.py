"""
Game Configuration Constants Module

This module defines the Urdle game rules and the loading/validation of the
word catalog file. All game parameters are centralized here to enable easy
modification.
"""

import json
import os
from datetime import date
from typing import Dict, Final, List, Optional

MAX_GUESSES: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

EPOCH: Final[date] = date(2025, 1, 1)
"""Calendar day zero of the daily word sequence."""

XOR_KEY: Final[int] = 0x5A3C
"""Obfuscation key applied to catalog indexes in share links."""

DEFAULT_QUALITY: Final[int] = 2

# Copies of an entry in the daily pool, keyed by quality
QUALITY_REPEATS: Final[Dict[int, int]] = {3: 5, 2: 2, 1: 1}

# Words longer than this get their vowels pre-revealed
LONG_WORD_THRESHOLD: Final[int] = 7
VOWELS: Final[frozenset] = frozenset('aeiou')

# Definition hint slots and their unlock thresholds (slot 0 is always visible)
DEFINITION_SLOTS: Final[int] = 3
DEFINITION_GUESS_THRESHOLDS: Final[tuple] = (0, 2, 4)
DEFINITION_TIME_THRESHOLDS: Final[tuple] = (0, 30, 60)

# Seconds between letter hints once all definitions are unlocked
LETTER_HINT_INTERVAL: Final[int] = 60

# Sessions with no requests for this many seconds are removed
SESSION_IDLE_TIMEOUT: Final[int] = 30 * 60

DEFAULT_WORDS_FILE: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'words.json'
)


def load_word_records(json_file_path: Optional[str] = None) -> List[dict]:
    """
    Load the raw word catalog records from a JSON file.

    Args:
        json_file_path: Path of the catalog file, defaults to the bundled words.json

    Returns:
        List[dict]: Validated catalog records in file order

    Raises:
        FileNotFoundError: If the catalog file is not found
        ValueError: If the JSON is malformed or any record is invalid
    """
    json_file_path = json_file_path or DEFAULT_WORDS_FILE

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word catalog file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {json_file_path}: {e}")

    if not isinstance(records, list):
        raise ValueError("JSON file must contain an array of word entries")

    validate_word_records(records)
    return records


def validate_word_records(records: List[dict]) -> bool:
    """
    Validates the integrity and consistency of the word catalog.

    This function performs validation to ensure:
    1. The catalog is not empty
    2. Every word is lowercase ASCII letters (spaces allowed between words)
    3. Every entry has a list of string definitions
    4. Quality, when present, is 1, 2 or 3
    5. No duplicate words

    Returns:
        bool: True if the catalog passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not records:
        raise ValueError("Word catalog cannot be empty")

    seen = set()
    for index, record in enumerate(records):
        if not isinstance(record, dict) or 'word' not in record:
            raise ValueError(f"Entry at index {index} has no word")

        word = record['word']
        if not isinstance(word, str) or not word.strip():
            raise ValueError(f"Entry at index {index} has an empty word")

        if not all(ch == ' ' or ('a' <= ch <= 'z') for ch in word.lower()):
            raise ValueError(f"Word at index {index} '{word}' contains non a-z characters")

        definitions = record.get('definitions', [])
        if not isinstance(definitions, list) or not all(isinstance(d, str) for d in definitions):
            raise ValueError(f"Word at index {index} '{word}' has invalid definitions")

        quality = record.get('quality')
        if quality is not None and quality not in QUALITY_REPEATS:
            raise ValueError(f"Word at index {index} '{word}' has invalid quality {quality!r}")

        key = word.lower()
        if key in seen:
            raise ValueError(f"Duplicate word found in catalog: '{word}'")
        seen.add(key)

    return True


def get_word_statistics(words: List[str]) -> dict:
    """
    Analyzes the catalog words and returns statistical information.

    Returns:
        dict: total_words, avg_length, long_words (vowels pre-revealed),
              multi_word entries and the most common letters
    """
    if not words:
        return {"error": "Word catalog is empty"}

    letter_frequency = {}
    for word in words:
        for char in word:
            if char != ' ':
                letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(words),
        "avg_length": round(sum(len(word) for word in words) / len(words), 2),
        "long_words": len([word for word in words if len(word) > LONG_WORD_THRESHOLD]),
        "multi_word": len([word for word in words if ' ' in word]),
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        catalog_records = load_word_records()
        print(" Word catalog validation passed")

        stats = get_word_statistics([record['word'] for record in catalog_records])
        print(f" Catalog statistics: {stats}")
    except (ValueError, FileNotFoundError) as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
