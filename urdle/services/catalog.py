"""
Word Catalog

Ordered, read-only collection of playable word entries. The position of an
entry is its identity in share links, so the catalog order must not change
within a deployed version.
"""

import re
from typing import Iterator, List, Optional, Sequence

from ..config.game_settings import XOR_KEY, load_word_records, validate_word_records
from ..models.game import WordEntry

_BASE36_DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'
_BASE36_PREFIX = re.compile(r'\s*([+-]?)([0-9a-z]+)', re.IGNORECASE | re.ASCII)


def _to_base36(number: int) -> str:
    if number < 0:
        return '-' + _to_base36(-number)
    digits = []
    while True:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
        if number == 0:
            return ''.join(reversed(digits))


def encode_word_id(index: int) -> str:
    """Obfuscate a catalog index for share links (not a security measure)."""
    return _to_base36(index ^ XOR_KEY)


def decode_word_id(word_id: str, catalog_size: int) -> Optional[int]:
    """
    Reverse encode_word_id.

    Like a browser's parseInt(id, 36), leading whitespace and a sign are
    accepted and parsing stops at the first non-base-36 character.

    Returns:
        The catalog index, or None for garbled or out-of-range ids
    """
    if not isinstance(word_id, str):
        return None
    match = _BASE36_PREFIX.match(word_id)
    if match is None:
        return None

    number = int(match.group(2), 36)
    if match.group(1) == '-':
        number = -number

    index = number ^ XOR_KEY
    if index < 0 or index >= catalog_size:
        return None
    return index


class Catalog:
    """
    Immutable, index-addressable list of WordEntry objects.

    Lookups that miss return None so callers can fall back to the daily word.
    """

    def __init__(self, entries: Sequence[WordEntry]):
        entries = tuple(entries)
        validate_word_records([entry.to_dict() for entry in entries])
        self._entries = entries

    @classmethod
    def from_records(cls, records: List[dict]) -> 'Catalog':
        validate_word_records(records)
        return cls([WordEntry.from_dict(record) for record in records])

    @classmethod
    def from_json(cls, json_file_path: Optional[str] = None) -> 'Catalog':
        """Load a catalog file (the bundled words.json when no path is given)."""
        return cls.from_records(load_word_records(json_file_path))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> WordEntry:
        return self._entries[index]

    @property
    def words(self) -> List[str]:
        return [entry.word for entry in self._entries]

    def word_by_index(self, index: int) -> Optional[WordEntry]:
        if index < 0 or index >= len(self._entries):
            return None
        return self._entries[index]

    def word_index(self, entry: WordEntry) -> Optional[int]:
        for index, candidate in enumerate(self._entries):
            if candidate.word == entry.word:
                return index
        return None

    def word_by_name(self, name: str) -> Optional[WordEntry]:
        lower = name.lower()
        for entry in self._entries:
            if entry.word == lower:
                return entry
        return None

    def encode_word_id(self, entry: WordEntry) -> Optional[str]:
        index = self.word_index(entry)
        return None if index is None else encode_word_id(index)

    def decode_word_id(self, word_id: str) -> Optional[WordEntry]:
        index = decode_word_id(word_id, len(self._entries))
        return None if index is None else self._entries[index]
