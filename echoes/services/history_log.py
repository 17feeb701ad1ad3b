"""Play-history log - the archive of every level played, searchable by keyword."""

import logging

from echoes.core.exceptions import PersistenceUnavailableError
from echoes.db.stores import HistoryStore
from echoes.schemas.content import Level
from echoes.schemas.history import HistoryEntry

logger = logging.getLogger(__name__)


class PlayHistoryLog:
    """Append-only: entries are never edited or removed once added."""

    def __init__(self, store: HistoryStore, entries: list[HistoryEntry] | None = None):
        self.store = store
        self._entries: list[HistoryEntry] = list(entries or [])

    @classmethod
    async def open(cls, store: HistoryStore) -> "PlayHistoryLog":
        try:
            entries = await store.load()
        except PersistenceUnavailableError as e:
            logger.warning("%s. Starting with an empty archive.", e)
            entries = []
        return cls(store, entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    async def append(self, leader_name: str, level: Level) -> HistoryEntry:
        """Record a played level and persist the log."""
        historical = level.historical_choice()
        entry = HistoryEntry(
            leader_name=leader_name,
            level_number=level.number,
            description=level.description,
            historical_choice=historical.text if historical else "",
            summary=level.summary,
        )
        self._entries.append(entry)
        try:
            await self.store.append(entry)
        except PersistenceUnavailableError as e:
            logger.error("%s", e)
        return entry

    def search(self, keyword: str) -> list[HistoryEntry]:
        """Entries whose leader name or description contains the keyword, any case."""
        return [entry for entry in self._entries if entry.matches(keyword)]
