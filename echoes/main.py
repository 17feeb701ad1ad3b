"""Game entry point - wires storage, content and the UI into the play loop."""

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError

from echoes.config import settings
from echoes.core.exceptions import DuplicateUsernameError, MalformedLevelError
from echoes.core.session_engine import SessionEngine
from echoes.db.database import async_session, engine, init_db
from echoes.db.stores import SqlHistoryStore, SqlPlayerStore
from echoes.schemas.player import PlayerRecord
from echoes.schemas.session import PlayMode, PostRoundOption
from echoes.services.content_service import ContentService, content_service
from echoes.services.history_log import PlayHistoryLog
from echoes.services.player_registry import PlayerRegistry
from echoes.ui.base import GameUI
from echoes.ui.console import ConsoleUI

logger = logging.getLogger(__name__)


async def _register(ui: GameUI, registry: PlayerRegistry) -> PlayerRecord:
    """Ask for usernames until one is free."""
    while True:
        username = await ui.prompt_username()
        try:
            return await registry.register(username)
        except DuplicateUsernameError as e:
            ui.display_error(str(e))


async def _archive_search(ui: GameUI, log: PlayHistoryLog) -> None:
    if not await ui.prompt_archive_search():
        return
    if log.is_empty:
        ui.display_empty_archive()
        return
    results = log.search(await ui.prompt_search_keyword())
    if results:
        ui.display_search_results(results)
    else:
        ui.display_no_results()


async def _post_round(ui: GameUI, player: PlayerRecord) -> PostRoundOption:
    """Ask what to do next; viewing statistics asks again afterwards."""
    while True:
        option = await ui.prompt_post_round_option()
        if option is not PostRoundOption.VIEW_STATS:
            return option
        ui.display_player_stats(player)


async def play_user(
    ui: GameUI,
    registry: PlayerRegistry,
    log: PlayHistoryLog,
    content: ContentService,
    player: PlayerRecord,
) -> bool:
    """Play rounds for one player. Returns False once the player quits the game."""
    while True:
        ui.search_disabled_notice()
        mode = await ui.prompt_play_mode()
        if mode is PlayMode.QUIT:
            return False

        leaders = content.load_leaders()
        if not leaders:
            ui.display_error("No leaders are available to play.")
            continue
        if mode is PlayMode.SINGLE:
            leaders = [await ui.select_leader(leaders)]
        elif mode is PlayMode.RANDOMIZED:
            leaders = content.randomized(leaders)

        await SessionEngine(leaders, ui, player, log, registry).run()
        await _archive_search(ui, log)

        option = await _post_round(ui, player)
        if option is PostRoundOption.SWITCH_USER:
            return True
        if option is PostRoundOption.QUIT:
            return False


async def run_game(
    ui: GameUI,
    registry: PlayerRegistry,
    log: PlayHistoryLog,
    content: ContentService = content_service,
) -> None:
    """The interactive loop: register a player, play rounds, show the leaderboard."""
    running = True
    while running:
        ui.display_welcome_message()
        player = await _register(ui, registry)
        ui.display_welcome_for_player(player)
        if await ui.prompt_view_login_history():
            ui.display_login_history(player)

        running = await play_user(ui, registry, log, content, player)
        ui.display_leaderboard(registry.leaderboard())
    ui.display_goodbye_message()


async def main() -> None:
    try:
        await init_db(engine)
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database unavailable, progress will not be saved: %s", e)
    registry = await PlayerRegistry.open(SqlPlayerStore(async_session))
    log = await PlayHistoryLog.open(SqlHistoryStore(async_session))
    try:
        await run_game(ConsoleUI(), registry, log)
    finally:
        await engine.dispose()


def run() -> None:
    """Console script entry point."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame exited.")
    except (FileNotFoundError, MalformedLevelError) as e:
        logger.error("%s", e)


if __name__ == "__main__":
    run()
