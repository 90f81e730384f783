"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import DEFAULT_QUALITY


class LetterState(Enum):
    """Letter evaluation state shown on tiles and keyboard keys."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    EMPTY = "empty"
    REVEALED = "revealed"

    @property
    def priority(self) -> int:
        """Informativeness used when merging states for the keyboard."""
        return _LETTER_PRIORITY[self]


_LETTER_PRIORITY = {
    LetterState.CORRECT: 3,
    LetterState.PRESENT: 2,
    LetterState.ABSENT: 1,
    LetterState.REVEALED: 0,
    LetterState.EMPTY: 0,
}


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class GameMode(Enum):
    DAILY = "daily"
    RANDOM = "random"
    WORD = "word"


@dataclass(frozen=True)
class WordEntry:
    """A catalog entry: the word plus the hints shown while guessing it."""
    word: str
    definitions: Tuple[str, ...] = ()
    example: Optional[str] = None
    quality: int = DEFAULT_QUALITY

    @classmethod
    def from_dict(cls, data: Dict) -> 'WordEntry':
        quality = data.get('quality')
        return cls(
            word=data['word'].lower(),
            definitions=tuple(data.get('definitions', [])),
            example=data.get('example'),
            quality=DEFAULT_QUALITY if quality is None else quality,
        )

    def to_dict(self) -> Dict:
        data = {'word': self.word, 'definitions': list(self.definitions), 'quality': self.quality}
        if self.example is not None:
            data['example'] = self.example
        return data


@dataclass(frozen=True)
class EvaluatedLetter:
    letter: str
    state: LetterState


@dataclass(frozen=True)
class HintState:
    """Unlock progress of the definition and letter hint tracks."""
    definitions_unlocked: int
    definition_slots: int
    letters_unlocked: int
    letter_slots: int
    next_progress: Optional[float] = None

    @property
    def used(self) -> int:
        return self.definitions_unlocked + self.letters_unlocked

    @property
    def total(self) -> int:
        return self.definition_slots + self.letter_slots


@dataclass
class GameState:
    """Render-ready snapshot of a session (strings only for JSON serialization)."""
    game_id: str
    mode: str
    word_length: int
    max_guesses: int
    status: str
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]
    current_input: str
    input_length: int
    revealed_positions: List[int]
    hinted_positions: List[int]
    keyboard: Dict[str, str]
    definitions: List[Optional[str]]
    hints: Dict
    elapsed_seconds: int
    shake: bool = False
    share_id: Optional[str] = None
    day_index: Optional[int] = None
    example: Optional[str] = None  # Only included when game is over
    answer: Optional[str] = None  # Only included when game is over
    current_row: List[Optional[str]] = field(default_factory=list)
