"""Console UI - plays the game in a terminal."""

import asyncio
import re
import sys
from datetime import datetime

from echoes.config import settings
from echoes.schemas.content import Leader, Level
from echoes.schemas.history import HistoryEntry
from echoes.schemas.player import PlayerRecord
from echoes.schemas.session import PlayMode, PostRoundOption, Selection
from echoes.ui.base import GameUI

# --- ANSI Colors ---
RESET = "\033[0m"
DIM = "\033[90m"
BOLD = "\033[1m"
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_selection(text: str | None) -> Selection:
    """Map raw input to a selection; anything but 1 or 2 is no selection."""
    if text is None:
        return Selection.NONE
    text = text.strip()
    if text == "1":
        return Selection.OPTION_1
    if text == "2":
        return Selection.OPTION_2
    return Selection.NONE


def format_timestamp(millis: int) -> str:
    return datetime.fromtimestamp(millis / 1000).strftime(TIMESTAMP_FORMAT)


class ConsoleUI(GameUI):
    def __init__(self, choice_timeout: float | None = None, username_pattern: str | None = None):
        self.choice_timeout = (
            settings.CHOICE_TIMEOUT_SECONDS if choice_timeout is None else choice_timeout
        )
        self._username_re = re.compile(username_pattern or settings.USERNAME_PATTERN)
        # A read that outlived its prompt's timeout
        self._pending: asyncio.Future | None = None

    async def _read_line(self, prompt: str, timeout: float | None = None) -> str | None:
        """Read one line from stdin. Returns None on timeout, raises EOFError at end of input."""
        print(prompt, end="", flush=True)
        if self._pending is not None and self._pending.done():
            # Typed after an earlier prompt gave up; it does not answer this one.
            stale, self._pending = self._pending, None
            if not stale.cancelled():
                stale.exception()
        if self._pending is None:
            self._pending = asyncio.ensure_future(asyncio.to_thread(sys.stdin.readline))
        try:
            line = await asyncio.wait_for(asyncio.shield(self._pending), timeout or None)
        except asyncio.TimeoutError:
            print()
            return None
        self._pending = None
        if line == "":
            raise EOFError
        return line.strip()

    async def _read_int(self, prompt: str, low: int, high: int, retry: str) -> int:
        text = await self._read_line(prompt)
        while True:
            try:
                value = int(text or "")
                if low <= value <= high:
                    return value
            except ValueError:
                pass
            text = await self._read_line(retry)

    # --- Session flow ---

    def display_leader_sequence(self, leader_name: str, index: int, total: int) -> None:
        print(f"\n{BOLD}=== Leader {index} of {total}: {leader_name} ==={RESET}")

    def display_level(self, leader_name: str, level: Level) -> None:
        print(f"\n--- Level {level.number} (Leader: {leader_name}) ---")
        print(level.description)
        for i, choice in enumerate(level.choices, start=1):
            print(f"{i}) {choice.text}")

    async def get_player_choice(self) -> Selection:
        hint = f" {DIM}[{self.choice_timeout:g}s]{RESET}" if self.choice_timeout else ""
        text = await self._read_line(f"Your choice (1 or 2){hint}: ", self.choice_timeout)
        return parse_selection(text)

    def display_timeout_skip(self) -> None:
        print(f"{YELLOW}[No valid input - skipping level]{RESET}")

    def display_result(self, correct: bool, summary: str) -> None:
        print(f"{GREEN}Correct!{RESET}" if correct else f"{RED}Incorrect{RESET}")
        print(summary)

    def show_progress(self, score: int, total: int) -> None:
        print(f"Progress: {score}/{total}")

    def display_end_of_round(self, score: int, total: int, elapsed_millis: int) -> None:
        print(f"\n{BOLD}=== Round Complete ==={RESET}")
        print(f"Score: {score} out of {total}")
        print(f"Total Time: {elapsed_millis / 1000:.2f} seconds")

    # --- Game loop ---

    def display_welcome_message(self) -> None:
        print(f"{BOLD}=== Echoes of Command ==={RESET}")

    async def prompt_username(self) -> str:
        while True:
            username = await self._read_line("Enter your username: ") or ""
            if not username:
                self.display_error("Username cannot be empty.")
            elif not self._username_re.match(username):
                self.display_error("Username can only contain letters, numbers, or underscores.")
            else:
                return username

    def display_error(self, message: str) -> None:
        print(f"{RED}Error: {message}{RESET}")

    def display_welcome_for_player(self, player: PlayerRecord) -> None:
        print()
        if len(player.login_history) <= 1:
            print(f"Welcome, {player.username}! You're new to Echoes of Command!")
        else:
            previous = player.login_history[-2]
            print(f"Welcome back, {player.username}! Last login: {format_timestamp(previous)}")

    async def prompt_view_login_history(self) -> bool:
        answer = await self._read_line("View login history? (yes/no): ")
        return (answer or "").lower() == "yes"

    def display_login_history(self, player: PlayerRecord) -> None:
        print(f"\n=== Login History for {player.username} ===")
        if not player.login_history:
            print("No login history available.")
            return
        for i, millis in enumerate(player.login_history, start=1):
            print(f"{i}) {format_timestamp(millis)}")

    def search_disabled_notice(self) -> None:
        print(f"{DIM}[Note] Archive-search disabled until after play.{RESET}")

    async def prompt_play_mode(self) -> PlayMode:
        print("\nHow do you want to play?")
        print("  1) Play ONE leader")
        print("  2) Play ALL leaders in sequence")
        print("  3) Play ALL leaders with randomized levels and choices")
        print("  4) Quit")
        mode = await self._read_int(
            "Enter choice (1, 2, 3, or 4): ", 1, 4, "Invalid. Please enter 1, 2, 3, or 4: "
        )
        return PlayMode(mode)

    async def select_leader(self, leaders: list[Leader]) -> Leader:
        ordered = sorted(leaders, key=lambda leader: leader.name)
        print("\n=== Select a Leader ===")
        for i, leader in enumerate(ordered, start=1):
            print(f"  {i}) {leader.name}  -  {leader.backstory}")
        index = await self._read_int(
            f"Enter your choice (1-{len(ordered)}): ", 1, len(ordered),
            "Invalid. Please enter a valid number: ",
        )
        selected = ordered[index - 1]
        print(f'You chose "{selected.name}"\n')
        return selected

    async def prompt_archive_search(self) -> bool:
        answer = await self._read_line("Search your archive now? (yes/no): ")
        return (answer or "").lower() == "yes"

    async def prompt_search_keyword(self) -> str:
        return await self._read_line("Enter keyword to search: ") or ""

    def display_empty_archive(self) -> None:
        print("[Your archive is empty. Complete levels to build your archive!]")

    def display_no_results(self) -> None:
        print("[No results found. Try a different keyword or play more levels.]")

    def display_search_results(self, entries: list[HistoryEntry]) -> None:
        print(f"\n{BOLD}=== Archive Search Results ==={RESET}")
        for entry in entries:
            print(f"Leader: {entry.leader_name}")
            print(f"Level {entry.level_number}: {entry.description}")
            print(f"Historical Decision: {entry.historical_choice}")
            print(f"Summary: {entry.summary}\n")

    async def prompt_post_round_option(self) -> PostRoundOption:
        print("\nWhat next?")
        print("  1) Play again")
        print("  2) Switch user")
        print("  3) View player statistics")
        print("  4) Quit")
        option = await self._read_int(
            "Enter choice (1-4): ", 1, 4, "Invalid. Please enter 1, 2, 3, or 4: "
        )
        return PostRoundOption(option)

    def display_player_stats(self, player: PlayerRecord) -> None:
        print(f"\n=== Player Statistics for {player.username} ===")
        print(f"Total Levels Played: {player.total_levels_played}")
        print(f"Accuracy: {player.accuracy:.2f}%")
        print(f"Average Time per Level: {player.average_time_per_level:.2f} seconds")

    def display_leaderboard(self, records: list[PlayerRecord]) -> None:
        print(f"\n{BOLD}=== Single-Leader Best Scores ==={RESET}")
        print(f"{'Player':<15}  {'Score':<5}  {'Time(s)':<6}")
        for record in records:
            if record.best_single_score > 0:
                print(
                    f"{record.username:<15}  {record.best_single_score:<5d}  "
                    f"{record.best_single_time_millis / 1000:<6.2f}"
                )

        print(f"\n{BOLD}=== Sequential (All Leaders) Best Scores ==={RESET}")
        print(f"{'Player':<15}  {'Score':<5}  {'Time(s)':<6}")
        for record in records:
            if record.best_sequential_score > 0:
                print(
                    f"{record.username:<15}  {record.best_sequential_score:<5d}  "
                    f"{record.best_sequential_time_millis / 1000:<6.2f}"
                )

    def display_goodbye_message(self) -> None:
        print("\nThanks for playing!")
