"""Letter scrambling for Anagram Rush."""

import logging
import random
from typing import Any, Optional

from anagram.word_bank import is_plain_word

logger = logging.getLogger(__name__)


class Scrambler:
    """Produces random letter permutations that differ from the original word."""

    def __init__(self, rng: Optional[Any] = None):
        self.rng = rng or random

    def scramble(self, word: str) -> str:
        """Scramble ``word`` and return it uppercased for display.

        Reshuffles until the arrangement differs from the input (ignoring
        case). Single letters and words made of one repeated letter have no
        other arrangement and are returned as-is.
        """
        if not is_plain_word(word):
            raise ValueError(f"Can only scramble non-empty, ASCII letters-only words: {word!r}")

        original = word.lower()
        if len(set(original)) == 1:
            return word.upper()

        letters = list(original)
        attempts = 0
        while True:
            self.rng.shuffle(letters)
            attempts += 1
            if "".join(letters) != original:
                break

        if attempts > 1:
            logger.debug(f"Scrambled {word!r} after {attempts} shuffles")
        return "".join(letters).upper()
