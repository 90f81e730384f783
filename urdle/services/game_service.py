"""
Game Service

Keeps the active game sessions of every player and creates new ones from
routes (daily, random, or a shared word link).
"""

import threading
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from ..config.game_settings import MAX_GUESSES, SESSION_IDLE_TIMEOUT, get_word_statistics
from ..models.game import GameMode, GameState
from ..utils.clock import SystemClock
from ..utils.game_logger import game_logger
from .catalog import Catalog
from .routing import Route, resolve_route
from .session import DEFAULT_SHARE_BASE_URL, GameSession
from .storage import KeyValueStore, MemoryStore, NamespacedStore
from .word_selector import WordSelector


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - One active session per player (a new game replaces the old one)
    - Per-player namespacing of the daily progress store
    - Remembering each player's last word so random rounds do not repeat
    - Expiring sessions nobody has touched within the idle timeout
    """

    def __init__(self,
                 catalog: Catalog,
                 store: Optional[KeyValueStore] = None,
                 clock=None,
                 selector: Optional[WordSelector] = None,
                 share_base_url: str = DEFAULT_SHARE_BASE_URL,
                 max_guesses: int = MAX_GUESSES,
                 idle_timeout: int = SESSION_IDLE_TIMEOUT):
        self.catalog = catalog
        self.store = store if store is not None else MemoryStore()
        self.clock = clock or SystemClock()
        self.selector = selector or WordSelector(catalog, clock=self.clock)
        self.share_base_url = share_base_url
        self.max_guesses = max_guesses
        self.idle_timeout = idle_timeout

        self.games: Dict[str, GameSession] = {}  # Active sessions by game_id
        self.player_games: Dict[str, str] = {}  # player_id -> game_id
        self.last_words: Dict[str, str] = {}  # player_id -> word of the last round
        self.last_activity: Dict[str, datetime] = {}  # game_id -> last request time
        self._lock = threading.RLock()

    def create_new_game(self, route: Optional[str] = None, player_id: str = 'local') -> Tuple[str, Route]:
        """
        Creates a new game session for the word the route points at.

        Args:
            route: Hash fragment ('#/', '#/random', '#/w/<id>')
            player_id: Player identifier used for storage and history

        Returns:
            Tuple of (game_id, resolved Route)
        """
        with self._lock:
            resolved = resolve_route(route, self.selector, self.last_words.get(player_id))

            previous_game = self.player_games.get(player_id)
            if previous_game:
                self.delete_game(previous_game)

            game_id = str(uuid.uuid4())
            store = NamespacedStore(self.store, player_id) if resolved.mode == GameMode.DAILY else None

            session = GameSession(
                resolved.entry,
                self.catalog,
                mode=resolved.mode,
                clock=self.clock,
                store=store,
                date_key=self.selector.today_key(),
                day_index=self.selector.day_index(),
                max_guesses=self.max_guesses,
                share_base_url=self.share_base_url,
                game_id=game_id,
                player_id=player_id,
            )

            self.games[game_id] = session
            self.player_games[player_id] = game_id
            self.last_words[player_id] = resolved.entry.word
            self.last_activity[game_id] = self.clock.now()

        game_logger.log_game_event(
            game_id, 'game_started', player_id,
            mode=resolved.mode.value, word_length=session.word_length,
            restored_guesses=len(session.guesses)
        )
        return game_id, resolved

    def get_session(self, game_id: str) -> Optional[GameSession]:
        """Look up a session and mark it as recently used."""
        session = self.games.get(game_id)
        if session is not None:
            self.last_activity[game_id] = self.clock.now()
        return session

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a session (answer only after game over).
        """
        session = self.get_session(game_id)
        if session is None:
            return None
        return session.snapshot(game_id)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session and stops its timer.

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            session = self.games.pop(game_id, None)
            self.last_activity.pop(game_id, None)
            if session is None:
                return False

            session.close()
            if self.player_games.get(session.player_id) == game_id:
                del self.player_games[session.player_id]
            return True

    def cleanup_idle_sessions(self) -> dict:
        """
        Delete sessions idle for longer than the idle timeout.

        Players left without a session also lose their last-word history.

        Returns:
            dict: cleaned_count and the expired sessions (game_id, player_id, idle_seconds)
        """
        now = self.clock.now()
        cutoff = now - timedelta(seconds=self.idle_timeout)
        expired = []

        with self._lock:
            for game_id, last_seen in list(self.last_activity.items()):
                if last_seen > cutoff:
                    continue
                session = self.games.get(game_id)
                if session is None or not self.delete_game(game_id):
                    continue
                if session.player_id not in self.player_games:
                    self.last_words.pop(session.player_id, None)
                expired.append({
                    'game_id': game_id,
                    'player_id': session.player_id,
                    'idle_seconds': int((now - last_seen).total_seconds()),
                })

        for info in expired:
            game_logger.log_game_event(
                info['game_id'], 'game_expired', info['player_id'],
                idle_seconds=info['idle_seconds']
            )
        return {'cleaned_count': len(expired), 'expired_games': expired}

    def get_statistics(self) -> dict:
        return {
            'active_games': len(self.games),
            'catalog': get_word_statistics(self.catalog.words)
        }


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(catalog: Catalog, store: Optional[KeyValueStore] = None,
                            clock=None, share_base_url: str = DEFAULT_SHARE_BASE_URL,
                            idle_timeout: int = SESSION_IDLE_TIMEOUT) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(catalog, store=store, clock=clock, share_base_url=share_base_url,
                                idle_timeout=idle_timeout)
    return _game_service
