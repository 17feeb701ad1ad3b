"""Player model - persisted best results, login history and statistics."""

from datetime import datetime

from sqlalchemy import JSON, BigInteger, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from echoes.db.database import Base
from echoes.schemas.player import MAX_TIME_MILLIS, PlayerRecord


class PlayerRow(Base):
    __tablename__ = "players"

    username: Mapped[str] = mapped_column(String(100), primary_key=True)

    # Best results per mode; times are 64-bit milliseconds
    best_single_score: Mapped[int] = mapped_column(Integer, default=0)
    best_single_time_millis: Mapped[int] = mapped_column(BigInteger, default=MAX_TIME_MILLIS)
    best_sequential_score: Mapped[int] = mapped_column(Integer, default=0)
    best_sequential_time_millis: Mapped[int] = mapped_column(BigInteger, default=MAX_TIME_MILLIS)

    login_history: Mapped[list] = mapped_column(JSON, default=list)

    total_levels_played: Mapped[int] = mapped_column(Integer, default=0)
    total_correct_choices: Mapped[int] = mapped_column(Integer, default=0)
    total_time_millis: Mapped[int] = mapped_column(BigInteger, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    def to_record(self) -> PlayerRecord:
        return PlayerRecord(
            username=self.username,
            best_single_score=self.best_single_score,
            best_single_time_millis=self.best_single_time_millis,
            best_sequential_score=self.best_sequential_score,
            best_sequential_time_millis=self.best_sequential_time_millis,
            login_history=list(self.login_history or []),
            total_levels_played=self.total_levels_played,
            total_correct_choices=self.total_correct_choices,
            total_time_millis=self.total_time_millis,
        )

    def update_from(self, record: PlayerRecord) -> None:
        """Copy every mutable field of a record onto this row."""
        self.best_single_score = record.best_single_score
        self.best_single_time_millis = record.best_single_time_millis
        self.best_sequential_score = record.best_sequential_score
        self.best_sequential_time_millis = record.best_sequential_time_millis
        self.login_history = list(record.login_history)
        self.total_levels_played = record.total_levels_played
        self.total_correct_choices = record.total_correct_choices
        self.total_time_millis = record.total_time_millis
