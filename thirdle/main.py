"""
Thirdle Game Server - Main Entry Point

Initializes the game service and starts the Flask application.
"""

from . import create_app
from .config import Config, GameSettings, validate_word_list_integrity
from .services.game_service import initialize_game_service
from .utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        settings = GameSettings(
            word_length=Config.WORD_LENGTH,
            max_tries=Config.MAX_TRIES,
            num_words=Config.NUM_WORDS,
        )
        validate_word_list_integrity(settings.word_length, settings.num_words)
        initialize_game_service(settings)
        print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info(
            f"Thirdle Server Starting - {settings.num_words} words of {settings.word_length} letters, "
            f"{settings.max_tries} tries"
        )

        print(f"\nStarting Thirdle Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Thirdle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
