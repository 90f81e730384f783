"""
Route Resolution

Maps a hash fragment to the word to play:
    #/          daily word
    #/random    random word, redirected to its #/w/<id> link
    #/w/<id>    specific word by share id (daily word when the id is invalid)
"""

from dataclasses import dataclass
from typing import Optional

from ..models.game import GameMode, WordEntry
from .word_selector import WordSelector

RANDOM_ROUTE = '#/random'
WORD_ROUTE_PREFIX = '#/w/'


@dataclass(frozen=True)
class Route:
    mode: GameMode
    entry: WordEntry
    redirect: Optional[str] = None


def word_route(word_id: str) -> str:
    return f"{WORD_ROUTE_PREFIX}{word_id}"


def resolve_route(fragment: Optional[str], selector: WordSelector,
                  previous_word: Optional[str] = None) -> Route:
    """
    Resolve a hash fragment; anything unrecognised falls back to the daily word.

    Args:
        fragment: Hash fragment such as '#/w/5a3f'
        selector: Word selector bound to the catalog
        previous_word: Word of the player's last round, never repeated by '#/random'
    """
    fragment = (fragment or '').strip()
    if fragment and not fragment.startswith('#'):
        fragment = '#' + fragment

    catalog = selector.catalog

    if fragment == RANDOM_ROUTE:
        entry = selector.random_word(exclude=previous_word)
        return Route(GameMode.RANDOM, entry, redirect=word_route(catalog.encode_word_id(entry)))

    if fragment.startswith(WORD_ROUTE_PREFIX):
        entry = catalog.decode_word_id(fragment[len(WORD_ROUTE_PREFIX):])
        if entry is not None:
            return Route(GameMode.WORD, entry)

    return Route(GameMode.DAILY, selector.daily_word())
