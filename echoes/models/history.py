"""History model - one row per played level, in play order."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from echoes.db.database import Base
from echoes.schemas.history import HistoryEntry


class HistoryRow(Base):
    __tablename__ = "history_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    position: Mapped[int] = mapped_column(Integer, unique=True)  # index in the log
    leader_name: Mapped[str] = mapped_column(String(200))
    level_number: Mapped[int] = mapped_column(Integer)
    description: Mapped[str] = mapped_column(Text)
    historical_choice: Mapped[str] = mapped_column(Text, default="")
    summary: Mapped[str] = mapped_column(Text, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    @classmethod
    def from_entry(cls, position: int, entry: HistoryEntry) -> "HistoryRow":
        return cls(position=position, **entry.model_dump())

    def to_entry(self) -> HistoryEntry:
        return HistoryEntry(
            leader_name=self.leader_name,
            level_number=self.level_number,
            description=self.description,
            historical_choice=self.historical_choice,
            summary=self.summary,
        )
