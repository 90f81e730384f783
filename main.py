"""
Urdle Game Server - Main Entry Point

This is the main entry point for the Urdle game server.
It loads the word catalog, initializes the game service, starts the idle
session cleanup worker and runs the Flask application.
"""

import threading
import time

from urdle import create_app
from urdle.config import Config
from urdle.services.catalog import Catalog
from urdle.services.game_service import get_game_service, initialize_game_service
from urdle.services.storage import MemoryStore, MongoKeyValueStore
from urdle.utils.game_logger import game_logger


def session_cleanup_worker(interval):
    """
    Background worker that periodically removes idle game sessions.
    Stops their elapsed-time threads and forgets their players' history.
    """
    print("Session cleanup worker started")
    while True:
        try:
            game_service = get_game_service()
            if game_service:
                cleanup_result = game_service.cleanup_idle_sessions()
                if cleanup_result["cleaned_count"] > 0:
                    game_logger.logger.info(
                        f"Session cleanup: Removed {cleanup_result['cleaned_count']} idle sessions"
                    )
        except Exception as e:
            print(f"Error in session cleanup worker: {e}")
            game_logger.logger.error(f"Error in session cleanup worker: {e}")

        time.sleep(interval)


def create_store():
    """MongoDB when MONGO_URI is configured, otherwise an in-memory store."""
    if Config.MONGO_URI:
        try:
            store = MongoKeyValueStore(Config.MONGO_URI, Config.MONGO_DB, Config.MONGO_COLLECTION)
            print("✓ MongoDB progress store initialized successfully")
            return store
        except Exception as e:
            print(f"✗ Failed to connect to MongoDB, progress will not survive restarts: {e}")
            game_logger.logger.error(f"MongoDB store unavailable: {e}")
    else:
        print("✗ MongoDB URI not configured, using in-memory progress store")
    return MemoryStore()


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        catalog = Catalog.from_json(Config.WORDS_FILE)
        print(f"✓ Word catalog loaded ({len(catalog)} words)")

        game_service = initialize_game_service(
            catalog, store=create_store(), share_base_url=Config.SHARE_BASE_URL,
            idle_timeout=Config.SESSION_IDLE_TIMEOUT
        )
        if game_service:
            print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        cleanup_thread = threading.Thread(
            target=session_cleanup_worker, args=(Config.SESSION_CLEANUP_INTERVAL,), daemon=True
        )
        cleanup_thread.start()
        print(f"✓ Session cleanup worker started - checking every {Config.SESSION_CLEANUP_INTERVAL} seconds")

        game_logger.logger.info("Urdle Server Starting")

        print(f"\nStarting Urdle Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Urdle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
