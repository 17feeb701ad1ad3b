"""Session engine - plays leaders level by level, scores answers and records results."""

import logging
import time
from collections.abc import Callable

from echoes.schemas.content import Leader
from echoes.schemas.player import PlayerRecord
from echoes.schemas.session import Selection, SessionResult
from echoes.services.history_log import PlayHistoryLog
from echoes.services.player_registry import PlayerRegistry
from echoes.ui.base import GameUI

logger = logging.getLogger(__name__)


class SessionEngine:
    """Runs one session for one player.

    Playing more than one leader makes the session sequential; the mode is
    never passed in. Elapsed time is a single wall-clock span from the start
    of the session to the last recorded level.
    """

    def __init__(
        self,
        leaders: list[Leader],
        ui: GameUI,
        player: PlayerRecord,
        log: PlayHistoryLog,
        registry: PlayerRegistry | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.leaders = leaders
        self.ui = ui
        self.player = player
        self.log = log
        self.registry = registry
        self.clock = clock
        self.sequential = len(leaders) > 1

    @property
    def total_levels(self) -> int:
        return sum(len(leader.levels) for leader in self.leaders)

    async def run(self) -> SessionResult:
        score = 0
        total = self.total_levels
        if total == 0:
            # Nothing was played, so there is no result to record
            logger.info("No levels to play for %s", self.player.username)
            return SessionResult(score=0, total=0, elapsed_millis=0, sequential=self.sequential)
        started = self.clock()

        for index, leader in enumerate(self.leaders, start=1):
            if self.sequential:
                self.ui.display_leader_sequence(leader.name, index, len(self.leaders))

            for level in leader.levels:
                self.ui.display_level(leader.name, level)
                selection = await self.ui.get_player_choice()

                if selection is Selection.NONE:
                    self.ui.display_timeout_skip()
                else:
                    # A malformed level may lack the selected choice: count it as wrong
                    choice = level.choice_at(int(selection))
                    correct = choice is not None and choice.historical
                    if correct:
                        score += 1
                    self.ui.display_result(correct, level.summary)

                await self.log.append(leader.name, level)
                self.ui.show_progress(score, total)

        elapsed = int((self.clock() - started) * 1000)
        self.ui.display_end_of_round(score, total, elapsed)

        improved = self.player.record_session(score, elapsed, self.sequential)
        self.player.update_statistics(total, score, elapsed)
        logger.info(
            "Session finished for %s: %d/%d in %d ms (%s, new best: %s)",
            self.player.username, score, total, elapsed,
            "sequential" if self.sequential else "single", improved,
        )
        if self.registry is not None:
            await self.registry.save()

        return SessionResult(
            score=score, total=total, elapsed_millis=elapsed, sequential=self.sequential
        )


async def run_session(
    leaders: list[Leader],
    ui: GameUI,
    player: PlayerRecord,
    log: PlayHistoryLog,
    registry: PlayerRegistry | None = None,
) -> SessionResult:
    """Play one session with the default wall clock."""
    return await SessionEngine(leaders, ui, player, log, registry).run()
