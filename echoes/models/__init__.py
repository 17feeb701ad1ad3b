"""Database models package."""

from echoes.models.player import PlayerRow
from echoes.models.history import HistoryRow

__all__ = ["PlayerRow", "HistoryRow"]
