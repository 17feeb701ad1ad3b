"""History (archive) schemas."""

from pydantic import BaseModel


class HistoryEntry(BaseModel):
    """One played level, as remembered by the archive."""
    leader_name: str
    level_number: int
    description: str
    historical_choice: str = ""  # empty when the level flags no correct choice
    summary: str = ""

    model_config = {"frozen": True}

    def matches(self, keyword: str) -> bool:
        """Case-insensitive substring match on leader name or description."""
        needle = keyword.lower()
        return needle in self.leader_name.lower() or needle in self.description.lower()
