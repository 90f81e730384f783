"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    EvaluatedLetter, GameMode, GameState, GameStatus, HintState, LetterState, WordEntry
)

__all__ = [
    'EvaluatedLetter', 'GameMode', 'GameState', 'GameStatus', 'HintState',
    'LetterState', 'WordEntry'
]
