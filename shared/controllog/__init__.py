"""Controllable logging SDK (events + balanced postings).

Designed to be embedded now and easily extracted into a standalone library.
This provides double-entry accounting for:
- State transitions (truth.state)
- Utility/reward (value.utility)
- Game summaries (game_complete events)
"""

from .sdk import init, event, post, new_id
from .builders import (
    state_move,
    utility,
    game_complete,
)

__all__ = [
    "init",
    "event",
    "post",
    "new_id",
    "state_move",
    "utility",
    "game_complete",
]
