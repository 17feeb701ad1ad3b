"""Player registry - unique usernames, best-result records and the leaderboard."""

import logging
import time

from echoes.core.exceptions import DuplicateUsernameError, PersistenceUnavailableError
from echoes.db.stores import PlayerStore
from echoes.schemas.player import PlayerRecord

logger = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


class PlayerRegistry:
    """Maps usernames to player records.

    State is best-effort durable: a failed load starts empty, a failed save is
    logged and play continues.
    """

    def __init__(self, store: PlayerStore, records: dict[str, PlayerRecord] | None = None):
        self.store = store
        self._records: dict[str, PlayerRecord] = records if records is not None else {}

    @classmethod
    async def open(cls, store: PlayerStore) -> "PlayerRegistry":
        """Build a registry from whatever the store holds."""
        try:
            records = await store.load()
        except PersistenceUnavailableError as e:
            logger.warning("%s. Using empty records.", e)
            records = {}
        return cls(store, records)

    def __contains__(self, username: str) -> bool:
        return username in self._records

    def __len__(self) -> int:
        return len(self._records)

    def get(self, username: str) -> PlayerRecord | None:
        return self._records.get(username)

    async def register(self, username: str) -> PlayerRecord:
        """Create a record for a new username. Existing records are never replaced."""
        if username in self._records:
            raise DuplicateUsernameError(username)
        record = PlayerRecord(username=username)
        record.record_login(_now_millis())
        self._records[username] = record
        logger.info("Registered player %s", username)
        await self.save()
        return record

    async def login(self, username: str) -> PlayerRecord:
        """Return the player's record, creating it on first login."""
        record = self._records.get(username)
        if record is None:
            record = PlayerRecord(username=username)
            self._records[username] = record
        record.record_login(_now_millis())
        await self.save()
        return record

    async def save(self) -> None:
        try:
            await self.store.save(self._records)
        except PersistenceUnavailableError as e:
            logger.error("%s", e)

    def leaderboard(self) -> list[PlayerRecord]:
        """Records by best score (highest first), then best time (fastest first)."""
        return sorted(
            self._records.values(),
            key=lambda r: (-r.best_score, r.best_time_millis),
        )
