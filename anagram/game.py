"""Core game logic for Anagram Rush."""

import logging
import random
import time
import uuid
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from anagram.scheduler import DeferredScheduler, ScheduledTask
from anagram.scoring import Scorer
from anagram.scrambler import Scrambler
from anagram.word_bank import WordBank, WordEntry
from shared import controllog as cl

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle states of a game session."""
    IDLE = "idle"            # Created, not started
    ACTIVE = "active"        # Timer running, accepting guesses
    GAME_OVER = "game_over"  # Timer expired, input locked


class Feedback(Enum):
    """Outcome of a submitted guess. Validation outcomes, not errors."""
    CORRECT = "correct"
    EMPTY_GUESS = "empty_guess"
    LENGTH_MISMATCH = "length_mismatch"
    WRONG_GUESS = "wrong_guess"
    IGNORED = "ignored"  # Session not accepting guesses right now


@dataclass(frozen=True)
class SessionSnapshot:
    """Observable state handed to the presentation layer after each event."""
    score: int
    time_left: int
    scrambled_word: str
    clue: str
    active: bool
    state: SessionState
    feedback: Optional[Feedback] = None
    message: Optional[str] = None


@dataclass
class GuessRecord:
    """One submitted guess, as kept in the session log."""
    guess: str
    target: str
    feedback: str
    time_left: int


class GameSession:
    """A single timed playthrough: scrambled words, guesses, score, countdown.

    - start() picks a word and begins the countdown
    - tick() takes one second off the clock; at zero the game ends
    - submit_guess() validates and scores a guess
    - reset() starts over with a fresh score and clock

    With a scheduler, the session registers its own one-second tick and
    defers the next word (and the wrong-guess input clear) by a short delay.
    Without one, ticks are driven by the caller and the next word loads
    immediately after a correct guess.
    """

    # Version for tracking rule changes
    VERSION = "1.0.0"

    # Timing (seconds / milliseconds)
    TIME_BUDGET = 60
    TICK_INTERVAL_MS = 1000
    RELOAD_DELAY_MS = 1000
    CLEAR_DELAY_MS = 500
    LOW_TIME_THRESHOLD = 10

    def __init__(
        self,
        word_bank: WordBank,
        scrambler: Optional[Scrambler] = None,
        scheduler: Optional[DeferredScheduler] = None,
        time_budget: Optional[int] = None,
        seed: Optional[int] = None,
        on_input_clear: Optional[Callable[[], None]] = None,
    ):
        # Set seed if provided for reproducibility
        if seed is not None:
            random.seed(seed)
        self.seed = seed

        # Fatal precondition, checked once before any session can start
        word_bank.validate()

        self.word_bank = word_bank
        self.scrambler = scrambler or Scrambler()
        self.scheduler = scheduler
        self.on_input_clear = on_input_clear

        self.time_budget = self.TIME_BUDGET if time_budget is None else int(time_budget)
        if self.time_budget <= 0:
            raise ValueError(f"Time budget must be positive, got {time_budget}")

        # Session state
        self.state = SessionState.IDLE
        self.current_word: Optional[WordEntry] = None
        self.scrambled: str = ""
        self.score: int = 0
        self.time_left: int = self.time_budget
        self.feedback: Optional[Feedback] = None
        self.message: Optional[str] = None
        self.guesses: List[GuessRecord] = []
        self.words_seen: int = 0

        # Deferred-callback bookkeeping
        self._generation = 0
        self._tick_task: Optional[ScheduledTask] = None
        self._awaiting_next_word = False

        # Track game statistics
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.game_id = str(uuid.uuid4())[:8]

        # Controllog state
        self._controllog_initialized = False
        self._run_id: Optional[str] = None
        self._task_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Controllog
    # ------------------------------------------------------------------

    def init_controllog(self, log_path: Path, run_id: str) -> None:
        """Initialize controllog SDK for unified analytics."""
        try:
            cl.init(project_id="anagram", log_dir=log_path)
            self._controllog_initialized = True
            self._run_id = run_id
            logger.info(f"Controllog initialized for run {run_id}")
        except Exception as e:
            logger.warning(f"Failed to initialize controllog: {e}")
            self._controllog_initialized = False

    def _emit_state_move(self, from_state: str, to_state: str, payload: Optional[Dict] = None) -> None:
        """Emit a state transition event via controllog."""
        if not self._controllog_initialized:
            return
        try:
            cl.state_move(
                task_id=self._task_id,
                from_=from_state,
                to=to_state,
                project_id="anagram",
                agent_id="agent:anagram",
                run_id=self._run_id,
                payload=payload or {"game_id": self.game_id},
            )
        except Exception as e:
            logger.debug(f"Failed to emit state move: {e}")

    def _emit_game_complete(self) -> None:
        """Emit the end-of-game summary via controllog."""
        if not self._controllog_initialized:
            return
        try:
            wall_ms = int(((self.end_time or time.time()) - (self.start_time or time.time())) * 1000)
            cl.game_complete(
                task_id=self._task_id,
                project_id="anagram",
                game_id=self.game_id,
                score=self.score,
                words_solved=self.score,
                total_guesses=len(self.guesses),
                time_budget=self.time_budget,
                wall_ms=wall_ms,
                run_id=self._run_id,
                final_message=self.get_final_message(),
                payload={"version": self.VERSION, "seed": self.seed},
            )
            cl.utility(
                task_id=self._task_id,
                project_id="anagram",
                agent_id="agent:anagram:player",
                amount=self.score,
                run_id=self._run_id,
                payload={"game_id": self.game_id},
            )
        except Exception as e:
            logger.debug(f"Failed to emit game complete: {e}")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> SessionSnapshot:
        """Begin a fresh session: score 0, full clock, new word."""
        self._cancel_tick()
        self._invalidate_deferred()

        self.game_id = str(uuid.uuid4())[:8]
        self._task_id = f"game:{self.game_id}"
        self.score = 0
        self.time_left = self.time_budget
        self.guesses = []
        self.words_seen = 0
        self.start_time = time.time()
        self.end_time = None
        self.state = SessionState.ACTIVE

        self.load_word()

        if self.scheduler is not None:
            self._tick_task = self.scheduler.call_every(
                self.TICK_INTERVAL_MS, self.tick, name=f"tick:{self.game_id}"
            )

        logger.info(f"Started game {self.game_id} ({self.time_budget}s)")
        self._emit_state_move("NEW", "WIP", {
            "game_id": self.game_id,
            "time_budget": self.time_budget,
        })
        return self.snapshot()

    def tick(self) -> SessionSnapshot:
        """Take one second off the clock. Ends the game at zero."""
        if self.state is not SessionState.ACTIVE:
            return self.snapshot()

        self.time_left = max(0, self.time_left - 1)
        if self.time_left == 0:
            self.end()
        return self.snapshot()

    def submit_guess(self, raw: str) -> SessionSnapshot:
        """Validate and score a guess against the current word."""
        if self.state is not SessionState.ACTIVE:
            return self.snapshot(Feedback.IGNORED, "The game is not running.")
        if self._awaiting_next_word:
            return self.snapshot(Feedback.IGNORED, "Next word is on its way.")

        guess = self.normalize_guess(raw)
        target = self.current_word.word

        if not guess:
            return self._reject(guess, Feedback.EMPTY_GUESS, "Please enter a guess!")

        if len(guess) != len(target):
            return self._reject(guess, Feedback.LENGTH_MISMATCH, f"Word must be {len(target)} letters!")

        if guess == target:
            return self._handle_correct_guess(guess)
        return self._handle_incorrect_guess(guess)

    def load_word(self) -> WordEntry:
        """Pick a new word and scramble it, clearing any pending feedback."""
        entry = self.word_bank.pick_random()
        self.current_word = entry
        self.scrambled = self.scrambler.scramble(entry.word)
        self.words_seen += 1
        self.feedback = None
        self.message = None
        self._awaiting_next_word = False
        logger.debug(f"Loaded word #{self.words_seen}: {self.scrambled}")
        return entry

    def end(self) -> SessionSnapshot:
        """Stop the clock and lock input. No-op unless the game is running."""
        if self.state is not SessionState.ACTIVE:
            return self.snapshot()

        self.state = SessionState.GAME_OVER
        self._cancel_tick()
        self._invalidate_deferred()
        self._awaiting_next_word = False
        self.end_time = time.time()

        logger.info(f"Game {self.game_id} over: score={self.score} guesses={len(self.guesses)}")
        self._emit_state_move("WIP", "DONE", {
            "game_id": self.game_id,
            "score": self.score,
        })
        self._emit_game_complete()
        return self.snapshot()

    def reset(self) -> SessionSnapshot:
        """Throw away the current session and start a new one."""
        logger.info(f"Resetting game {self.game_id}")
        return self.start()

    # ------------------------------------------------------------------
    # Guess handling
    # ------------------------------------------------------------------

    @staticmethod
    def normalize_guess(raw: Optional[str]) -> str:
        """Keep ASCII letters only, lowercased."""
        return "".join(ch for ch in (raw or "") if ch.isascii() and ch.isalpha()).lower()

    def _record(self, guess: str, feedback: Feedback) -> None:
        self.guesses.append(GuessRecord(
            guess=guess,
            target=self.current_word.word,
            feedback=feedback.value,
            time_left=self.time_left,
        ))

    def _reject(self, guess: str, feedback: Feedback, message: str) -> SessionSnapshot:
        self._record(guess, feedback)
        self.feedback = feedback
        self.message = message
        return self.snapshot()

    def _handle_correct_guess(self, guess: str) -> SessionSnapshot:
        self._record(guess, Feedback.CORRECT)
        self.score += 1
        self.feedback = Feedback.CORRECT
        self.message = "Correct!"
        logger.info(f"Correct guess '{guess}' (score: {self.score})")

        result = self.snapshot()
        if self.scheduler is None:
            self.load_word()
        else:
            self._awaiting_next_word = True
            generation = self._generation
            self.scheduler.call_later(
                self.RELOAD_DELAY_MS,
                lambda: self._deferred_load_word(generation),
                name="reload-word",
            )
        return result

    def _handle_incorrect_guess(self, guess: str) -> SessionSnapshot:
        self._record(guess, Feedback.WRONG_GUESS)
        self.feedback = Feedback.WRONG_GUESS
        self.message = "Try again!"

        if self.scheduler is not None:
            generation = self._generation
            self.scheduler.call_later(
                self.CLEAR_DELAY_MS,
                lambda: self._deferred_clear_input(generation),
                name="clear-input",
            )
        return self.snapshot()

    # ------------------------------------------------------------------
    # Deferred callbacks
    # ------------------------------------------------------------------

    def _invalidate_deferred(self) -> None:
        """Make every callback scheduled so far a no-op."""
        self._generation += 1

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation or self.state is not SessionState.ACTIVE

    def _deferred_load_word(self, generation: int) -> None:
        if self._is_stale(generation):
            logger.debug("Skipping stale word reload")
            return
        self.load_word()

    def _deferred_clear_input(self, generation: int) -> None:
        if self._is_stale(generation):
            logger.debug("Skipping stale input clear")
            return
        if self.feedback is Feedback.WRONG_GUESS:
            self.feedback = None
            self.message = None
        if self.on_input_clear is not None:
            self.on_input_clear()

    def _cancel_tick(self) -> None:
        if self._tick_task is not None:
            self.scheduler.cancel(self._tick_task)
            self._tick_task = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_score(self) -> int:
        return self.score

    def get_time_left(self) -> int:
        return self.time_left

    def get_scrambled_word(self) -> str:
        return self.scrambled

    def get_clue(self) -> str:
        return self.current_word.clue if self.current_word else ""

    def get_word_length(self) -> int:
        return len(self.current_word.word) if self.current_word else 0

    def get_tiles(self) -> List[Tuple[str, int]]:
        return Scorer.tiles(self.scrambled)

    def get_state(self) -> SessionState:
        return self.state

    def get_feedback(self) -> Optional[Feedback]:
        return self.feedback

    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def is_time_low(self) -> bool:
        return self.is_active() and self.time_left <= self.LOW_TIME_THRESHOLD

    def get_final_message(self) -> Optional[str]:
        """End-of-game message; only available once the game is over."""
        if self.state is not SessionState.GAME_OVER:
            return None
        return Scorer.score_message(self.score)

    def snapshot(self, feedback: Optional[Feedback] = None, message: Optional[str] = None) -> SessionSnapshot:
        """Current observable state, optionally overriding the feedback shown."""
        if feedback is None:
            feedback, message = self.feedback, self.message
        return SessionSnapshot(
            score=self.score,
            time_left=self.time_left,
            scrambled_word=self.scrambled,
            clue=self.get_clue(),
            active=self.is_active(),
            state=self.state,
            feedback=feedback,
            message=message,
        )

    def get_summary(self) -> Dict[str, Any]:
        """Results of the session so far, for logging and display."""
        duration = None
        if self.start_time is not None:
            duration = (self.end_time or time.time()) - self.start_time

        return {
            "game_id": self.game_id,
            "version": self.VERSION,
            "seed": self.seed,
            "state": self.state.value,
            "score": self.score,
            "words_seen": self.words_seen,
            "total_guesses": len(self.guesses),
            "wrong_guesses": sum(1 for g in self.guesses if g.feedback == Feedback.WRONG_GUESS.value),
            "time_budget": self.time_budget,
            "time_left": self.time_left,
            "duration": duration,
            "final_message": self.get_final_message(),
            "guesses": [asdict(g) for g in self.guesses],
        }
