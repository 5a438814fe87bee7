#!/usr/bin/env python3
"""Basic test of an Anagram Rush session without a terminal."""

import random

from anagram.game import Feedback, GameSession, SessionState
from anagram.word_bank import WordBank, default_words_file


def test_game_session():
    """Test a full session: start, guesses, timeout, reset."""
    print("Testing Anagram Rush session...")

    # Set seed for reproducible test
    random.seed(42)

    word_bank = WordBank.from_yaml(default_words_file())
    session = GameSession(word_bank)

    session.start()
    print(f"Scrambled: {session.get_scrambled_word()}")
    print(f"Clue: {session.get_clue()}")

    assert session.is_active()
    assert session.get_score() == 0
    assert session.get_time_left() == 60

    # Solve three words, with a miss in between
    for _ in range(3):
        miss = session.submit_guess("x" * session.get_word_length())
        assert miss.feedback is Feedback.WRONG_GUESS
        hit = session.submit_guess(session.current_word.word.upper())
        assert hit.feedback is Feedback.CORRECT

    print(f"Score: {session.get_score()}")
    assert session.get_score() == 3

    # Run the clock out
    for _ in range(60):
        session.tick()

    assert session.get_state() is SessionState.GAME_OVER
    assert session.get_time_left() == 0
    print(f"Final message: {session.get_final_message()}")

    session.reset()
    assert session.is_active()
    assert session.get_score() == 0

    print("✓ Session test passed!")


if __name__ == "__main__":
    test_game_session()
