"""Session-related schemas and the selections a player can make."""

from enum import IntEnum

from pydantic import BaseModel


class Selection(IntEnum):
    """Outcome of asking the player for a level's answer."""
    NONE = 0  # timeout or invalid input
    OPTION_1 = 1
    OPTION_2 = 2


class PlayMode(IntEnum):
    SINGLE = 1  # one chosen leader
    SEQUENTIAL = 2  # all leaders in order
    RANDOMIZED = 3  # all leaders, shuffled levels and choices
    QUIT = 4


class PostRoundOption(IntEnum):
    PLAY_AGAIN = 1
    SWITCH_USER = 2
    VIEW_STATS = 3
    QUIT = 4


class SessionResult(BaseModel):
    score: int
    total: int
    elapsed_millis: int
    sequential: bool

    model_config = {"frozen": True}
