"""Shared test fixtures - uses a throwaway async SQLite file per test."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from echoes.core.exceptions import PersistenceUnavailableError
from echoes.db.database import init_db
from echoes.db.stores import HistoryStore, PlayerStore, SqlHistoryStore, SqlPlayerStore
from echoes.schemas.content import Choice, Leader, Level


@pytest.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh database with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await init_db(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def player_store(session_factory):
    return SqlPlayerStore(session_factory)


@pytest.fixture
def history_store(session_factory):
    return SqlHistoryStore(session_factory)


class BrokenPlayerStore(PlayerStore):
    """Fails every load and save, like an unreachable database."""

    def __init__(self):
        self.save_attempts = 0

    async def load(self):
        raise PersistenceUnavailableError("Could not load player records: disk on fire")

    async def save(self, records):
        self.save_attempts += 1
        raise PersistenceUnavailableError("Failed to save player records: disk on fire")


class BrokenHistoryStore(HistoryStore):
    def __init__(self):
        self.save_attempts = 0

    async def load(self):
        raise PersistenceUnavailableError("Could not load history: disk on fire")

    async def append(self, entry):
        self.save_attempts += 1
        raise PersistenceUnavailableError("Failed to save history: disk on fire")


@pytest.fixture
def broken_player_store():
    return BrokenPlayerStore()


@pytest.fixture
def broken_history_store():
    return BrokenHistoryStore()


def make_level(number: int, description: str = "", correct: int | None = 1) -> Level:
    """Level whose choice `correct` (1 or 2) is historical; None flags neither."""
    return Level(
        number=number,
        description=description or f"Decision {number}",
        choices=[
            Choice(text=f"Option A{number}", historical=correct == 1),
            Choice(text=f"Option B{number}", historical=correct == 2),
        ],
        summary=f"Summary {number}",
    )


def make_leader(name: str, levels: int = 3) -> Leader:
    return Leader(
        name=name,
        backstory=f"Backstory of {name}",
        levels=[make_level(n, f"{name} decision {n}") for n in range(1, levels + 1)],
    )


class FakeClock:
    """Monotonic clock that advances a fixed step per reading."""

    def __init__(self, step: float = 1.5):
        self.now = 100.0
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value
