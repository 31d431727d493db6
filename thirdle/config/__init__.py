"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game shape and word lists (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ACCEPTED_WORDS,
    ANSWER_WORDS,
    MAX_TRIES,
    NUM_WORDS,
    WORD_LENGTH,
    GameSettings,
    build_dictionary,
    get_word_statistics,
    validate_word_list_integrity,
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_LENGTH', 'MAX_TRIES', 'NUM_WORDS', 'ANSWER_WORDS', 'ACCEPTED_WORDS',
    'GameSettings', 'build_dictionary', 'validate_word_list_integrity', 'get_word_statistics'
]
