"""Tests for the play-history log - appending, searching and persistence."""

import logging

from conftest import make_level

from echoes.core.exceptions import PersistenceUnavailableError
from echoes.db.stores import SqlHistoryStore
from echoes.schemas.content import Choice, Level
from echoes.services.history_log import PlayHistoryLog


async def test_append_records_the_historical_choice(history_store):
    log = await PlayHistoryLog.open(history_store)
    entry = await log.append("Julius Caesar", make_level(2, "Crossing the Rubicon", correct=2))

    assert entry.leader_name == "Julius Caesar"
    assert entry.level_number == 2
    assert entry.description == "Crossing the Rubicon"
    assert entry.historical_choice == "Option B2"
    assert entry.summary == "Summary 2"
    assert log.entries == [entry]


async def test_append_without_historical_choice_uses_empty_text(history_store):
    log = await PlayHistoryLog.open(history_store)
    entry = await log.append("Nobody", make_level(1, correct=None))
    assert entry.historical_choice == ""


async def test_append_with_two_historical_choices_uses_the_first(history_store):
    level = Level(
        number=1,
        description="Both true",
        choices=[Choice(text="First", historical=True), Choice(text="Second", historical=True)],
    )
    log = await PlayHistoryLog.open(history_store)
    entry = await log.append("Somebody", level)
    assert entry.historical_choice == "First"


async def test_search_is_case_insensitive_on_leader_and_description(history_store):
    log = await PlayHistoryLog.open(history_store)
    await log.append("Julius Caesar", make_level(1, "The Ides of March"))
    await log.append("Napoleon Bonaparte", make_level(1, "Invade Russia"))
    await log.append("Abraham Lincoln", make_level(1, "Fort Sumter is running low on march rations"))

    by_leader = log.search("caesar")
    assert [e.leader_name for e in by_leader] == ["Julius Caesar"]

    by_description = log.search("MARCH")
    assert [e.leader_name for e in by_description] == ["Julius Caesar", "Abraham Lincoln"]

    by_substring = log.search("napo")
    assert [e.leader_name for e in by_substring] == ["Napoleon Bonaparte"]


async def test_search_returns_matches_in_insertion_order(history_store):
    log = await PlayHistoryLog.open(history_store)
    for n in (3, 1, 2):
        await log.append("Julius Caesar", make_level(n))

    assert [e.level_number for e in log.search("julius")] == [3, 1, 2]


async def test_search_without_matches_is_empty(history_store):
    log = await PlayHistoryLog.open(history_store)
    assert log.is_empty
    assert log.search("anything") == []

    await log.append("Julius Caesar", make_level(1))
    assert not log.is_empty
    assert log.search("Cleopatra") == []


async def test_entries_is_a_copy(history_store):
    log = await PlayHistoryLog.open(history_store)
    await log.append("Julius Caesar", make_level(1))

    log.entries.clear()
    assert len(log) == 1


async def test_entries_survive_reopening(history_store):
    log = await PlayHistoryLog.open(history_store)
    await log.append("Julius Caesar", make_level(1))
    await log.append("Napoleon Bonaparte", make_level(2, correct=2))

    reopened = await PlayHistoryLog.open(history_store)
    assert reopened.entries == log.entries

    await reopened.append("Abraham Lincoln", make_level(3))
    again = await PlayHistoryLog.open(history_store)
    assert [e.leader_name for e in again.entries] == [
        "Julius Caesar", "Napoleon Bonaparte", "Abraham Lincoln",
    ]


async def test_load_failure_starts_empty(broken_history_store, caplog):
    with caplog.at_level(logging.WARNING):
        log = await PlayHistoryLog.open(broken_history_store)
    assert log.is_empty
    assert "empty archive" in caplog.text


async def test_save_failure_keeps_the_entry(broken_history_store, caplog):
    log = await PlayHistoryLog.open(broken_history_store)
    with caplog.at_level(logging.ERROR):
        await log.append("Julius Caesar", make_level(1))

    assert len(log) == 1
    assert broken_history_store.save_attempts == 1
    assert "Failed to save history" in caplog.text


async def test_append_after_failed_load_is_still_saved(session_factory, history_store):
    log = await PlayHistoryLog.open(history_store)
    await log.append("Julius Caesar", make_level(1))
    await log.append("Julius Caesar", make_level(2))

    class FlakyLoadStore(SqlHistoryStore):
        async def load(self):
            raise PersistenceUnavailableError("Could not load history: timeout")

    fresh = await PlayHistoryLog.open(FlakyLoadStore(session_factory))
    assert fresh.is_empty
    await fresh.append("Abraham Lincoln", make_level(1))

    reopened = await PlayHistoryLog.open(history_store)
    assert [e.leader_name for e in reopened.entries] == [
        "Julius Caesar", "Julius Caesar", "Abraham Lincoln",
    ]
