"""
Services Package

Contains the game engine and the service classes built on it.
"""

from .catalog import Catalog, decode_word_id, encode_word_id
from .evaluator import censor_word, evaluate_guess, keyboard_states, revealed_positions
from .game_service import GameService, get_game_service, initialize_game_service
from .routing import Route, resolve_route
from .session import GameSession
from .storage import KeyValueStore, MemoryStore, MongoKeyValueStore, NamespacedStore
from .word_selector import WordSelector

__all__ = [
    'Catalog', 'decode_word_id', 'encode_word_id',
    'censor_word', 'evaluate_guess', 'keyboard_states', 'revealed_positions',
    'GameService', 'get_game_service', 'initialize_game_service',
    'Route', 'resolve_route',
    'GameSession',
    'KeyValueStore', 'MemoryStore', 'MongoKeyValueStore', 'NamespacedStore',
    'WordSelector'
]
