"""Scripted UI - replays canned answers and records what would have been shown.

Used to drive sessions and the game loop without a terminal, e.g. in tests:

    ui = ScriptedUI(choices=[1, 2, None])
    result = await run_session([leader], ui, player, log)
    assert ("progress", 1, 3) in ui.events
"""

from collections import deque
from collections.abc import Iterable

from echoes.schemas.content import Leader, Level
from echoes.schemas.history import HistoryEntry
from echoes.schemas.player import PlayerRecord
from echoes.schemas.session import PlayMode, PostRoundOption, Selection
from echoes.ui.base import GameUI


class ScriptExhausted(LookupError):
    """The game asked for more answers than were scripted."""


class ScriptedUI(GameUI):
    def __init__(
        self,
        choices: Iterable[int | None] = (),
        usernames: Iterable[str] = (),
        play_modes: Iterable[PlayMode] = (),
        leader_names: Iterable[str] = (),
        post_round: Iterable[PostRoundOption] = (),
        search_keywords: Iterable[str | None] = (),
        view_login_history: bool = False,
    ):
        # None in choices stands for a timed-out level
        self._choices = deque(choices)
        self._usernames = deque(usernames)
        self._play_modes = deque(play_modes)
        self._leader_names = deque(leader_names)
        self._post_round = deque(post_round)
        # None means "decline the archive search"
        self._search_keywords = deque(search_keywords)
        self._view_login_history = view_login_history
        self.events: list[tuple] = []

    @staticmethod
    def _next(queue: deque, what: str):
        if not queue:
            raise ScriptExhausted(f"No scripted {what} left")
        return queue.popleft()

    def events_of(self, kind: str) -> list[tuple]:
        return [event for event in self.events if event[0] == kind]

    # --- Session flow ---

    def display_leader_sequence(self, leader_name: str, index: int, total: int) -> None:
        self.events.append(("leader", leader_name, index, total))

    def display_level(self, leader_name: str, level: Level) -> None:
        self.events.append(("level", leader_name, level.number))

    async def get_player_choice(self) -> Selection:
        answer = self._next(self._choices, "choices")
        return Selection.NONE if answer is None else Selection(answer)

    def display_timeout_skip(self) -> None:
        self.events.append(("skip",))

    def display_result(self, correct: bool, summary: str) -> None:
        self.events.append(("result", correct, summary))

    def show_progress(self, score: int, total: int) -> None:
        self.events.append(("progress", score, total))

    def display_end_of_round(self, score: int, total: int, elapsed_millis: int) -> None:
        self.events.append(("end", score, total, elapsed_millis))

    # --- Game loop ---

    def display_welcome_message(self) -> None:
        self.events.append(("welcome",))

    async def prompt_username(self) -> str:
        return self._next(self._usernames, "usernames")

    def display_error(self, message: str) -> None:
        self.events.append(("error", message))

    def display_welcome_for_player(self, player: PlayerRecord) -> None:
        self.events.append(("welcome_player", player.username))

    async def prompt_view_login_history(self) -> bool:
        return self._view_login_history

    def display_login_history(self, player: PlayerRecord) -> None:
        self.events.append(("login_history", player.username, len(player.login_history)))

    def search_disabled_notice(self) -> None:
        self.events.append(("search_disabled",))

    async def prompt_play_mode(self) -> PlayMode:
        return PlayMode(self._next(self._play_modes, "play modes"))

    async def select_leader(self, leaders: list[Leader]) -> Leader:
        name = self._next(self._leader_names, "leader names")
        return next(leader for leader in leaders if leader.name == name)

    async def prompt_archive_search(self) -> bool:
        if self._search_keywords and self._search_keywords[0] is None:
            self._search_keywords.popleft()
            return False
        return bool(self._search_keywords)

    async def prompt_search_keyword(self) -> str:
        return self._next(self._search_keywords, "search keywords")

    def display_empty_archive(self) -> None:
        self.events.append(("archive_empty",))

    def display_no_results(self) -> None:
        self.events.append(("no_results",))

    def display_search_results(self, entries: list[HistoryEntry]) -> None:
        self.events.append(("search_results", [entry.leader_name for entry in entries]))

    async def prompt_post_round_option(self) -> PostRoundOption:
        return PostRoundOption(self._next(self._post_round, "post-round options"))

    def display_player_stats(self, player: PlayerRecord) -> None:
        self.events.append(("stats", player.username, player.total_levels_played))

    def display_leaderboard(self, records: list[PlayerRecord]) -> None:
        self.events.append(("leaderboard", [record.username for record in records]))

    def display_goodbye_message(self) -> None:
        self.events.append(("goodbye",))
