"""Anagram Rush: a timed word-unscrambling game.

A word is scrambled and shown with a clue. The player has a fixed time budget
(60 seconds by default) to guess as many words as possible:
- Each correct guess scores 1 point and brings up the next word
- Wrong or malformed guesses cost nothing but time
- When the clock hits zero the game ends and a message rates the final score
"""

from anagram.game import Feedback, GameSession, SessionSnapshot, SessionState
from anagram.scheduler import DeferredScheduler, ManualClock
from anagram.scoring import Scorer
from anagram.scrambler import Scrambler
from anagram.word_bank import ConfigurationError, WordBank, WordEntry

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DeferredScheduler",
    "Feedback",
    "GameSession",
    "ManualClock",
    "Scorer",
    "Scrambler",
    "SessionSnapshot",
    "SessionState",
    "WordBank",
    "WordEntry",
]
