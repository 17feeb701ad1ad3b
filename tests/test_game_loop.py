"""Tests for the play loop and the console input parsing."""

import pytest
from conftest import make_leader

from echoes.main import run_game
from echoes.schemas.player import MAX_TIME_MILLIS
from echoes.schemas.session import PlayMode, PostRoundOption, Selection
from echoes.services.content_service import ContentService
from echoes.services.history_log import PlayHistoryLog
from echoes.services.player_registry import PlayerRegistry
from echoes.ui.console import parse_selection
from echoes.ui.scripted import ScriptedUI


class StaticContent(ContentService):
    def __init__(self, leaders):
        super().__init__()
        self.leaders = leaders

    def load_leaders(self, source=None):
        return self.leaders


@pytest.fixture
def content():
    return StaticContent([make_leader("Caesar", levels=2), make_leader("Lincoln", levels=1)])


@pytest.fixture
async def registry(player_store):
    return await PlayerRegistry.open(player_store)


@pytest.fixture
async def log(history_store):
    return await PlayHistoryLog.open(history_store)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", Selection.OPTION_1),
        (" 2 \n", Selection.OPTION_2),
        ("3", Selection.NONE),
        ("yes", Selection.NONE),
        ("", Selection.NONE),
        (None, Selection.NONE),
    ],
)
def test_parse_selection(text, expected):
    assert parse_selection(text) is expected


async def test_single_leader_round_then_quit(registry, log, content):
    ui = ScriptedUI(
        usernames=["Alice"],
        play_modes=[PlayMode.SINGLE],
        leader_names=["Lincoln"],
        choices=[1],
        search_keywords=["linc"],
        post_round=[PostRoundOption.VIEW_STATS, PostRoundOption.QUIT],
    )

    await run_game(ui, registry, log, content)

    alice = registry.get("Alice")
    assert alice.best_single_score == 1
    assert alice.best_sequential_score == 0
    assert ui.events_of("search_results") == [("search_results", ["Lincoln"])]
    assert ui.events_of("stats") == [("stats", "Alice", 1)]
    assert ui.events_of("leaderboard") == [("leaderboard", ["Alice"])]
    assert ui.events[-1] == ("goodbye",)


async def test_duplicate_username_is_reprompted(registry, log, content):
    await registry.register("Alice")
    ui = ScriptedUI(usernames=["Alice", "Bob"], play_modes=[PlayMode.QUIT])

    await run_game(ui, registry, log, content)

    (error,) = ui.events_of("error")
    assert "already exists" in error[1]
    assert "Bob" in registry
    assert ui.events_of("welcome_player") == [("welcome_player", "Bob")]


async def test_sequential_round_then_switch_user(registry, log, content):
    ui = ScriptedUI(
        usernames=["Alice", "Bob"],
        play_modes=[PlayMode.SEQUENTIAL, PlayMode.QUIT],
        choices=[1, 1, 2],
        search_keywords=["nobody"],
        post_round=[PostRoundOption.SWITCH_USER],
        view_login_history=True,
    )

    await run_game(ui, registry, log, content)

    assert registry.get("Alice").best_sequential_score == 2
    assert ui.events_of("no_results") == [("no_results",)]
    assert ui.events_of("login_history") == [
        ("login_history", "Alice", 1), ("login_history", "Bob", 1),
    ]
    assert ui.events_of("leaderboard") == [
        ("leaderboard", ["Alice"]), ("leaderboard", ["Alice", "Bob"]),
    ]
    assert len(log) == 3


async def test_randomized_round_counts_as_sequential(registry, log, content):
    ui = ScriptedUI(
        usernames=["Alice"],
        play_modes=[PlayMode.RANDOMIZED],
        choices=[None, None, None],
        search_keywords=[None],
        post_round=[PostRoundOption.QUIT],
    )

    await run_game(ui, registry, log, content)

    alice = registry.get("Alice")
    assert alice.best_sequential_score == 0
    assert alice.total_levels_played == 3
    assert len(ui.events_of("skip")) == 3
    assert ui.events_of("search_results") == []


async def test_archive_search_on_empty_log(registry, log):
    ui = ScriptedUI(
        usernames=["Alice"],
        play_modes=[PlayMode.SEQUENTIAL],
        search_keywords=["caesar"],
        post_round=[PostRoundOption.QUIT],
    )

    await run_game(ui, registry, log, StaticContent([make_leader("Caesar", levels=0)]))

    assert ui.events_of("archive_empty") == [("archive_empty",)]


async def test_no_content_reports_an_error_and_asks_again(registry, log):
    ui = ScriptedUI(
        usernames=["Alice"],
        play_modes=[PlayMode.SINGLE, PlayMode.QUIT],
    )

    await run_game(ui, registry, log, StaticContent([]))

    assert ui.events_of("error") == [("error", "No leaders are available to play.")]
    assert ui.events_of("level") == []
    assert registry.get("Alice").best_single_time_millis == MAX_TIME_MILLIS
    assert ui.events[-1] == ("goodbye",)
