"""
Game Session

State machine for one attempt at one target word: typed input, guess
submission, win/loss detection, hint unlocks, daily persistence and the
shareable result text.
"""

import json
import threading
from dataclasses import asdict
from typing import List, Optional, Set

from ..config.game_settings import DEFINITION_SLOTS, MAX_GUESSES
from ..models.game import (
    EvaluatedLetter, GameMode, GameState, GameStatus, HintState, LetterState, WordEntry
)
from ..utils.clock import SystemClock
from ..utils.game_logger import game_logger
from . import hints
from .catalog import Catalog
from .evaluator import censor_word, evaluate_guess, keyboard_states, revealed_positions
from .storage import KeyValueStore
from .word_selector import date_key_for, day_index_for

DEFAULT_SHARE_BASE_URL = 'https://gisenberg.github.io/urdle/'

SHARE_GLYPHS = {
    LetterState.CORRECT: '🟩',
    LetterState.PRESENT: '🟨',
    LetterState.ABSENT: '⬛',
}
BLANK_GLYPH = '⬜'


class GameSession:
    """
    One player's attempt at one target word.

    This class handles:
    - Typed input against the positions the player still has to fill
    - Guess construction, evaluation and the playing -> won/lost transitions
    - The elapsed-time counter and the letter hints it unlocks
    - Saving and restoring daily progress through a KeyValueStore
    """

    def __init__(self,
                 entry: WordEntry,
                 catalog: Catalog,
                 mode: GameMode = GameMode.DAILY,
                 clock=None,
                 store: Optional[KeyValueStore] = None,
                 date_key: Optional[str] = None,
                 day_index: Optional[int] = None,
                 max_guesses: int = MAX_GUESSES,
                 share_base_url: str = DEFAULT_SHARE_BASE_URL,
                 game_id: Optional[str] = None,
                 player_id: str = 'local'):
        self.entry = entry
        self.catalog = catalog
        self.mode = mode
        self.clock = clock or SystemClock()
        self.store = store
        self.max_guesses = max_guesses
        self.share_base_url = share_base_url
        self.game_id = game_id
        self.player_id = player_id

        today = self.clock.now().date()
        self.date_key = date_key or date_key_for(today)
        self.day_index = day_index if day_index is not None else day_index_for(today)

        self.target = entry.word.lower()
        self.revealed_positions = frozenset(revealed_positions(self.target))
        self.letter_hint_positions = hints.letter_hint_positions(self.target, self.revealed_positions)
        self.hinted_positions: Set[int] = set()

        self.guesses: List[str] = []
        self.current_input = ''
        self.status = GameStatus.PLAYING
        self.elapsed_seconds = 0
        self.shake = False

        # Letters of the revealed run before the next slot already typed through
        self._run_consumed = 0
        self._lock = threading.RLock()
        self._timer = None

        if self.mode == GameMode.DAILY:
            self._restore()
        self._apply_letter_hints()

        if self.status == GameStatus.PLAYING:
            self._timer = self.clock.schedule_every(1, self.tick)

    # Derived state

    @property
    def word_length(self) -> int:
        return len(self.target)

    @property
    def game_over(self) -> bool:
        return self.status != GameStatus.PLAYING

    @property
    def all_revealed_positions(self) -> Set[int]:
        return set(self.revealed_positions) | self.hinted_positions

    @property
    def open_positions(self) -> List[int]:
        revealed = self.all_revealed_positions
        return [i for i in range(self.word_length) if i not in revealed]

    @property
    def input_length(self) -> int:
        return len(self.open_positions)

    def _pending_run(self, open_positions: List[int]) -> List[str]:
        """Revealed letters sitting between the last filled slot and the next one."""
        next_slot = open_positions[len(self.current_input)]
        previous = open_positions[len(self.current_input) - 1] if self.current_input else -1
        return [self.target[i] for i in range(previous + 1, next_slot) if self.target[i] != ' ']

    # Player input

    def add_letter(self, char: str) -> bool:
        """
        Type one letter into the next open slot.

        Returns:
            bool: True if the letter was added to the typed input
        """
        with self._lock:
            if self.status != GameStatus.PLAYING:
                return False
            if not isinstance(char, str) or len(char) != 1 or not (char.isascii() and char.isalpha()):
                return False

            open_positions = self.open_positions
            if len(self.current_input) >= len(open_positions):
                return False

            letter = char.lower()
            self.shake = False

            run = self._pending_run(open_positions)
            if self._run_consumed < len(run) and letter == run[self._run_consumed]:
                self._run_consumed += 1
                return False

            self.current_input += letter
            self._run_consumed = 0
            return True

    def delete_letter(self) -> bool:
        with self._lock:
            if self.status != GameStatus.PLAYING or not self.current_input:
                return False
            self.current_input = self.current_input[:-1]
            self._run_consumed = 0
            self.shake = False
            return True

    def build_guess(self, typed: str) -> str:
        """Interleave typed letters with the target letters at revealed positions."""
        chars = list(self.target)
        for position, letter in zip(self.open_positions, typed):
            chars[position] = letter
        return ''.join(chars)

    def submit_guess(self) -> bool:
        """
        Submit the typed input as a full guess.

        Returns:
            bool: False (and the shake flag set) when the input is incomplete
        """
        with self._lock:
            if self.status != GameStatus.PLAYING:
                return False

            if len(self.current_input) != self.input_length:
                self.shake = True
                return False

            guess = self.build_guess(self.current_input)
            self.guesses.append(guess)
            self.current_input = ''
            self._run_consumed = 0
            self.shake = False

            if guess == self.target:
                self.status = GameStatus.WON
            elif len(self.guesses) >= self.max_guesses:
                self.status = GameStatus.LOST

            if self.game_over:
                self._stop_timer()
                game_logger.log_game_event(
                    self.game_id, f'game_{self.status.value}', self.player_id,
                    mode=self.mode.value, rounds_used=len(self.guesses),
                    target_word=self.target, elapsed_seconds=self.elapsed_seconds
                )
            else:
                self._apply_letter_hints()

            self._save()
            return True

    # Time and hints

    def tick(self):
        """Advance the elapsed counter by one second while playing."""
        with self._lock:
            if self.status != GameStatus.PLAYING:
                return
            unlocked_before = self.hint_state().used
            self.elapsed_seconds += 1
            self._apply_letter_hints()
            # Saved elapsed time must cover every unlocked hint
            if self.hint_state().used != unlocked_before:
                self._save()

    def hint_state(self) -> HintState:
        return hints.hint_state(len(self.guesses), self.elapsed_seconds, self.game_over,
                                len(self.letter_hint_positions))

    def hints_used(self) -> HintState:
        """Hints that were unlocked while the player was still guessing."""
        guess_count = len(self.guesses)
        if self.game_over:
            guess_count = max(guess_count - 1, 0)
        return hints.hint_state(guess_count, self.elapsed_seconds, False,
                                len(self.letter_hint_positions))

    def _apply_letter_hints(self):
        if self.status != GameStatus.PLAYING:
            return

        unlocked = hints.unlocked_letter_count(len(self.guesses), self.elapsed_seconds, False,
                                               len(self.letter_hint_positions))
        newly_hinted = [position for position in self.letter_hint_positions[:unlocked]
                        if position not in self.hinted_positions]
        if not newly_hinted:
            return

        self.hinted_positions.update(newly_hinted)
        # Slots shift once positions become read-only
        self.current_input = ''
        self._run_consumed = 0
        game_logger.log_game_event(
            self.game_id, 'hint_unlocked', self.player_id,
            positions=newly_hinted, elapsed_seconds=self.elapsed_seconds
        )

    def _stop_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def close(self):
        """Stop the elapsed-time ticks; called when the session is replaced."""
        with self._lock:
            self._stop_timer()

    # Views

    def evaluated_guesses(self) -> List[List[EvaluatedLetter]]:
        return [evaluate_guess(guess, self.target, self.revealed_positions) for guess in self.guesses]

    def keyboard(self):
        return keyboard_states(self.guesses, self.target, self.revealed_positions)

    def definition_slots(self) -> List[Optional[str]]:
        """Definition texts by slot; None for locked or empty slots."""
        unlocked = self.hint_state().definitions_unlocked
        definitions = self.entry.definitions
        slots = []
        for i in range(max(len(definitions), DEFINITION_SLOTS)):
            text = definitions[i] if i < len(definitions) else None
            if i < unlocked and text:
                slots.append(text if self.game_over else censor_word(text, self.target))
            else:
                slots.append(None)
        return slots

    def current_row(self) -> List[Optional[str]]:
        revealed = self.all_revealed_positions
        typed = dict(zip(self.open_positions, self.current_input))
        return [self.target[i] if i in revealed else typed.get(i) for i in range(self.word_length)]

    def share_id(self) -> Optional[str]:
        return self.catalog.encode_word_id(self.entry)

    def generate_share_text(self) -> str:
        label = f"Urdle #{self.day_index}" if self.mode == GameMode.DAILY else "Urdle"
        if self.status == GameStatus.WON:
            score = f"{len(self.guesses)}/{self.max_guesses}"
        else:
            score = f"X/{self.max_guesses}"
        usage = self.hints_used()

        rows = []
        for evaluation in self.evaluated_guesses():
            rows.append(''.join(
                '  ' if letter.letter == ' ' else SHARE_GLYPHS.get(letter.state, BLANK_GLYPH)
                for letter in evaluation
            ))

        share_url = f"{self.share_base_url}#/w/{self.share_id()}"
        return f"{label} {score} (hints {usage.used}/{usage.total})\n\n" + '\n'.join(rows) + f"\n\n{share_url}"

    def snapshot(self, game_id: Optional[str] = None) -> GameState:
        with self._lock:
            hint_state = self.hint_state()
            hints_view = asdict(hint_state)
            hints_view.update(used=hint_state.used, total=hint_state.total)

            return GameState(
                game_id=game_id or self.game_id,
                mode=self.mode.value,
                word_length=self.word_length,
                max_guesses=self.max_guesses,
                status=self.status.value,
                guesses=list(self.guesses),
                guess_results=[[(letter.letter, letter.state.value) for letter in evaluation]
                               for evaluation in self.evaluated_guesses()],
                current_input=self.current_input,
                input_length=self.input_length,
                revealed_positions=sorted(self.revealed_positions),
                hinted_positions=sorted(self.hinted_positions),
                keyboard={letter: state.value for letter, state in sorted(self.keyboard().items())},
                definitions=self.definition_slots(),
                hints=hints_view,
                elapsed_seconds=self.elapsed_seconds,
                shake=self.shake,
                share_id=self.share_id(),
                day_index=self.day_index if self.mode == GameMode.DAILY else None,
                example=self.entry.example if self.game_over else None,
                answer=self.target if self.game_over else None,
                current_row=self.current_row(),
            )

    # Persistence

    def _save(self):
        if self.mode != GameMode.DAILY or self.store is None:
            return

        payload = json.dumps({
            'guesses': self.guesses,
            'gameStatus': self.status.value,
            'target': self.target,
            'elapsedSeconds': self.elapsed_seconds,
        })
        try:
            self.store.set(self.date_key, payload)
        except Exception as e:
            game_logger.logger.warning(f"Failed to save progress for {self.date_key}: {e}")

    def _status_for(self, guesses: List[str]) -> Optional[GameStatus]:
        """Status implied by a guess history; None when play went past a win."""
        if self.target in guesses[:-1]:
            return None
        if guesses and guesses[-1] == self.target:
            return GameStatus.WON
        if len(guesses) >= self.max_guesses:
            return GameStatus.LOST
        return GameStatus.PLAYING

    def _restore(self):
        if self.store is None:
            return

        try:
            raw = self.store.get(self.date_key)
        except Exception as e:
            game_logger.logger.warning(f"Failed to load progress for {self.date_key}: {e}")
            return
        if raw is None:
            return

        try:
            saved = json.loads(raw)
            guesses = list(saved['guesses'])
            status = GameStatus(saved['gameStatus'])
            target = saved['target']
            elapsed_seconds = int(saved.get('elapsedSeconds', 0))
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            game_logger.logger.warning(f"Discarding malformed saved game for {self.date_key}: {e}")
            return

        if target != self.target:
            game_logger.logger.info(f"Discarding saved game for {self.date_key}: target changed")
            return

        if any(not isinstance(guess, str) or len(guess) != self.word_length for guess in guesses):
            game_logger.logger.warning(f"Discarding saved game for {self.date_key}: invalid guesses")
            return

        if len(guesses) > self.max_guesses or status != self._status_for(guesses):
            game_logger.logger.warning(f"Discarding saved game for {self.date_key}: status does not match guesses")
            return

        self.guesses = guesses
        self.status = status
        self.elapsed_seconds = max(elapsed_seconds, 0)
