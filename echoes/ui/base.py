"""Interaction surface contract shared by the console and scripted UIs.

Display methods are synchronous. Methods that wait for the player are
coroutines so an implementation can enforce timeouts.
"""

from abc import ABC, abstractmethod

from echoes.schemas.content import Leader, Level
from echoes.schemas.history import HistoryEntry
from echoes.schemas.player import PlayerRecord
from echoes.schemas.session import PlayMode, PostRoundOption, Selection


class GameUI(ABC):
    # --- Session flow ---

    @abstractmethod
    def display_leader_sequence(self, leader_name: str, index: int, total: int) -> None:
        ...

    @abstractmethod
    def display_level(self, leader_name: str, level: Level) -> None:
        ...

    @abstractmethod
    async def get_player_choice(self) -> Selection:
        """Selection.NONE when the player gave no valid answer in time."""

    @abstractmethod
    def display_timeout_skip(self) -> None:
        ...

    @abstractmethod
    def display_result(self, correct: bool, summary: str) -> None:
        ...

    @abstractmethod
    def show_progress(self, score: int, total: int) -> None:
        ...

    @abstractmethod
    def display_end_of_round(self, score: int, total: int, elapsed_millis: int) -> None:
        ...

    # --- Game loop ---

    @abstractmethod
    def display_welcome_message(self) -> None:
        ...

    @abstractmethod
    async def prompt_username(self) -> str:
        ...

    @abstractmethod
    def display_error(self, message: str) -> None:
        ...

    @abstractmethod
    def display_welcome_for_player(self, player: PlayerRecord) -> None:
        ...

    @abstractmethod
    async def prompt_view_login_history(self) -> bool:
        ...

    @abstractmethod
    def display_login_history(self, player: PlayerRecord) -> None:
        ...

    @abstractmethod
    def search_disabled_notice(self) -> None:
        ...

    @abstractmethod
    async def prompt_play_mode(self) -> PlayMode:
        ...

    @abstractmethod
    async def select_leader(self, leaders: list[Leader]) -> Leader:
        ...

    @abstractmethod
    async def prompt_archive_search(self) -> bool:
        ...

    @abstractmethod
    async def prompt_search_keyword(self) -> str:
        ...

    @abstractmethod
    def display_empty_archive(self) -> None:
        ...

    @abstractmethod
    def display_no_results(self) -> None:
        ...

    @abstractmethod
    def display_search_results(self, entries: list[HistoryEntry]) -> None:
        ...

    @abstractmethod
    async def prompt_post_round_option(self) -> PostRoundOption:
        ...

    @abstractmethod
    def display_player_stats(self, player: PlayerRecord) -> None:
        ...

    @abstractmethod
    def display_leaderboard(self, records: list[PlayerRecord]) -> None:
        ...

    @abstractmethod
    def display_goodbye_message(self) -> None:
        ...
