"""
Word Selector

Chooses the daily word (a stable, seeded permutation of a quality-weighted
pool) and random practice words.
"""

import random
from datetime import date
from typing import List, Optional

from ..config.game_settings import EPOCH, QUALITY_REPEATS
from ..models.game import WordEntry
from ..utils.clock import SystemClock
from ..utils.game_logger import game_logger
from .catalog import Catalog


def _int32(value: int) -> int:
    """Wrap to a signed 32-bit integer."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def day_index_for(today: date) -> int:
    """Whole calendar days elapsed since the epoch."""
    return (today - EPOCH).days


def date_key_for(today: date) -> str:
    return today.isoformat()


def build_weighted_pool(catalog: Catalog) -> List[WordEntry]:
    pool = []
    for entry in catalog:
        repeats = QUALITY_REPEATS.get(entry.quality, QUALITY_REPEATS[1])
        pool.extend([entry] * repeats)
    return pool


def catalog_seed(catalog: Catalog) -> int:
    """Fold the character codes of every catalog word into one 32-bit seed."""
    seed = 0
    for entry in catalog:
        for char in entry.word:
            seed = _int32(seed * 31 + ord(char))
    return seed


def seeded_shuffle(pool: List[WordEntry], seed: int) -> List[WordEntry]:
    """Fisher-Yates shuffle driven by a linear congruential generator."""
    result = list(pool)
    for i in range(len(result) - 1, 0, -1):
        # Product is rounded to double precision before wrapping to 32 bits
        seed = _int32(int(float(seed) * 1103515245 + 12345))
        j = (((seed & 0xFFFFFFFF) >> 16) & 0x7FFF) % (i + 1)
        result[i], result[j] = result[j], result[i]
    return result


class WordSelector:
    """
    Derives the word to play from the catalog.

    This class handles:
    - Daily word selection, identical for everyone on the same calendar day
    - Random word selection that never repeats the previous word
    - Day index and storage key derivation from the injected clock
    """

    def __init__(self, catalog: Catalog, clock=None, rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        self.daily_pool = seeded_shuffle(build_weighted_pool(catalog), catalog_seed(catalog))

    def _today(self, today: Optional[date] = None) -> date:
        return today or self.clock.now().date()

    def day_index(self, today: Optional[date] = None) -> int:
        return day_index_for(self._today(today))

    def today_key(self, today: Optional[date] = None) -> str:
        return date_key_for(self._today(today))

    def daily_word(self, today: Optional[date] = None) -> WordEntry:
        return self.daily_pool[self.day_index(today) % len(self.daily_pool)]

    def random_word(self, exclude: Optional[str] = None) -> WordEntry:
        """
        Draw uniformly from the de-duplicated catalog, skipping `exclude`.

        Args:
            exclude: Word text of the previous round, if any

        Returns:
            WordEntry different from `exclude` whenever the catalog allows it
        """
        unique = []
        seen = set()
        for entry in self.catalog:
            if entry.word not in seen:
                seen.add(entry.word)
                unique.append(entry)

        excluded = exclude.lower() if exclude else None
        if excluded is not None and all(entry.word == excluded for entry in unique):
            game_logger.logger.warning(
                f"Random word requested excluding '{exclude}' but the catalog has no other word"
            )
            return unique[0]

        while True:
            entry = self.rng.choice(unique)
            if entry.word != excluded:
                return entry
