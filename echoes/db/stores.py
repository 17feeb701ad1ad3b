"""Storage collaborators for the player registry and the history log.

Each store exposes `load()` returning the full state. The player store
persists with `save(records)`; the history store, being append-only, writes
each new entry once with `append(entry)`. Failures surface as
PersistenceUnavailableError; deciding whether to carry on is left to the
caller.
"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from echoes.core.exceptions import PersistenceUnavailableError
from echoes.models.history import HistoryRow
from echoes.models.player import PlayerRow
from echoes.schemas.history import HistoryEntry
from echoes.schemas.player import PlayerRecord

logger = logging.getLogger(__name__)


class PlayerStore(ABC):
    @abstractmethod
    async def load(self) -> dict[str, PlayerRecord]:
        ...

    @abstractmethod
    async def save(self, records: dict[str, PlayerRecord]) -> None:
        ...


class HistoryStore(ABC):
    @abstractmethod
    async def load(self) -> list[HistoryEntry]:
        ...

    @abstractmethod
    async def append(self, entry: HistoryEntry) -> None:
        ...


class SqlPlayerStore(PlayerStore):
    """Keeps one `players` row per username, updated in place."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def load(self) -> dict[str, PlayerRecord]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(PlayerRow))
                return {row.username: row.to_record() for row in result.scalars()}
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceUnavailableError(f"Could not load player records: {e}") from e

    async def save(self, records: dict[str, PlayerRecord]) -> None:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(PlayerRow))
                rows = {row.username: row for row in result.scalars()}
                for username, record in records.items():
                    row = rows.get(username)
                    if row is None:
                        row = PlayerRow(username=username)
                        session.add(row)
                    row.update_from(record)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceUnavailableError(f"Failed to save player records: {e}") from e
        logger.debug("Saved %d player records", len(records))


class SqlHistoryStore(HistoryStore):
    """One `history_entries` row per entry; stored rows never change."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def load(self) -> list[HistoryEntry]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(HistoryRow).order_by(HistoryRow.position))
                return [row.to_entry() for row in result.scalars()]
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceUnavailableError(f"Could not load history: {e}") from e

    async def append(self, entry: HistoryEntry) -> None:
        """Write one entry after every stored row."""
        try:
            async with self.session_factory() as session:
                last = await session.scalar(select(func.max(HistoryRow.position)))
                position = 0 if last is None else last + 1
                session.add(HistoryRow.from_entry(position, entry))
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceUnavailableError(f"Failed to save history: {e}") from e
