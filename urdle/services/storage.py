"""
Key-Value Storage

String key/value stores used to persist daily progress. Reads and writes are
best effort: backend failures are logged and reported as missing data.
"""

from typing import Dict, Optional

from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..utils.game_logger import game_logger


class KeyValueStore:
    """Interface for the persistence capability injected into sessions."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Process-local store, used when no database is configured and in tests."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class NamespacedStore(KeyValueStore):
    """Prefixes keys so several players can share one backing store."""

    def __init__(self, store: KeyValueStore, namespace: str):
        self.store = store
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        return self.store.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self.store.set(self._key(key), value)


class MongoKeyValueStore(KeyValueStore):
    """
    MongoDB-backed store keeping one document per key.
    """

    def __init__(self, mongo_uri: str, db_name: str = 'urdle',
                 collection_name: str = 'saved_games', client: Optional[MongoClient] = None):
        """
        Initialize the store with a MongoDB connection.

        Args:
            mongo_uri: MongoDB connection string
            db_name: Database holding the saved games
            collection_name: Collection with one document per key
            client: Existing client to reuse instead of connecting
        """
        self.client = client or MongoClient(mongo_uri, server_api=ServerApi('1'))
        self.collection = self.client[db_name][collection_name]

        try:
            self.client.admin.command('ping')
            game_logger.logger.info("Successfully connected to MongoDB")
        except PyMongoError as e:
            game_logger.logger.error(f"MongoDB connection error: {e}")
            raise

        self.collection.create_index("key", unique=True)

    def get(self, key: str) -> Optional[str]:
        try:
            document = self.collection.find_one({"key": key})
        except PyMongoError as e:
            game_logger.logger.warning(f"Failed to read saved game '{key}': {e}")
            return None
        return document.get("value") if document else None

    def set(self, key: str, value: str) -> None:
        try:
            self.collection.replace_one({"key": key}, {"key": key, "value": value}, upsert=True)
        except PyMongoError as e:
            game_logger.logger.warning(f"Failed to save game '{key}': {e}")

    def close_connection(self):
        """Close the MongoDB connection."""
        if self.client:
            self.client.close()
