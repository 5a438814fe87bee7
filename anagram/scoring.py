"""Letter values and end-of-game messages for Anagram Rush.

Letter values are shown on the tiles only; the session score is the number
of words solved.
"""

from typing import Dict, List, Tuple


class Scorer:
    """Lookup tables for tile points and final score messages."""

    # Standard Scrabble tile values
    LETTER_POINTS: Dict[str, int] = {
        **dict.fromkeys("AEIOULNSTR", 1),
        **dict.fromkeys("DG", 2),
        **dict.fromkeys("BCMP", 3),
        **dict.fromkeys("FHVWY", 4),
        "K": 5,
        **dict.fromkeys("JX", 8),
        **dict.fromkeys("QZ", 10),
    }

    # (minimum score, message), highest threshold first
    MESSAGE_TIERS: List[Tuple[int, str]] = [
        (20, "Incredible! You're an anagram master!"),
        (15, "Excellent work! You're really good at this!"),
        (10, "Great job! You've got solid anagram skills!"),
        (5, "Good effort! Keep practicing!"),
    ]
    ENCOURAGEMENT = "Don't give up! Try again to improve!"

    @classmethod
    def letter_value(cls, letter: str) -> int:
        """Point value of a single letter (0 for anything else)."""
        return cls.LETTER_POINTS.get(letter.upper(), 0)

    @classmethod
    def score_message(cls, score: int) -> str:
        """Pick the message for a final score; first matching tier wins."""
        for threshold, message in cls.MESSAGE_TIERS:
            if score >= threshold:
                return message
        return cls.ENCOURAGEMENT

    @classmethod
    def tiles(cls, scrambled: str) -> List[Tuple[str, int]]:
        """Letter tiles for display as (letter, points) pairs."""
        return [(letter, cls.letter_value(letter)) for letter in scrambled.upper()]
