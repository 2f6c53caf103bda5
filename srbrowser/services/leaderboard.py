from collections.abc import Iterable, Sequence
from typing import Annotated

from fastapi import Depends
from loguru import logger

from srbrowser.schemas.game import Category, Game, Level
from srbrowser.schemas.leaderboard import Leaderboard, LeaderboardView, ResolvedRunEntry
from srbrowser.schemas.speedrun import LeaderboardRunEntry, User
from srbrowser.schemas.variable import Variable, VariableSelections
from srbrowser.utils.middleware_api import SpeedrunMiddlewareClient, get_middleware_client


def leaderboard_key(category_id: str | None, level_id: str | None = None) -> str:
    """Build the id the middleware stores a leaderboard under.

    The key is the category id, suffixed with ``_<level id>`` for per-level leaderboards.
    An empty string is returned when the key would be incomplete; it must never be loaded.
    """
    if not category_id:
        return ""
    if level_id is None:
        return category_id
    if not level_id:
        return ""
    return f"{category_id}_{level_id}"


def leaderboard_key_for(category: Category, level: Level | None = None) -> str:
    return leaderboard_key(category.id, level.id if level is not None else None)


def resolve_player(leaderboard: Leaderboard, player_ref: User) -> User:
    """Find the directory record for a run's player reference.

    Guests have no id and unknown ids are not in the directory; both fall back to the
    reference embedded in the run.
    """
    if player_ref.id is None:
        return player_ref
    return leaderboard.players.get(player_ref.id, player_ref)


def resolve_entry(leaderboard: Leaderboard, entry: LeaderboardRunEntry) -> ResolvedRunEntry:
    return ResolvedRunEntry(
        place=entry.place,
        place_name=entry.place_name(),
        time=entry.run.times.format_time(),
        entry=entry,
        players=tuple(resolve_player(leaderboard, ref) for ref in entry.run.players),
    )


def filter_runs(
    leaderboard: Leaderboard,
    selections: VariableSelections | None,
    variables: Iterable[Variable] | None = None,
) -> Sequence[LeaderboardRunEntry]:
    """Keep the runs matching every selected variable value, in leaderboard order.

    With no selections the leaderboard's own run list is returned, so the result must be
    treated as read-only. Runs that did not record a selected variable are left out.
    """
    if not selections:
        return leaderboard.runs

    if variables is not None:
        known = {variable.id for variable in variables}
        unknown = [variable_id for variable_id in selections.selections if variable_id not in known]
        if unknown:
            logger.debug(f"Filtering {leaderboard.category} on undefined variables: {unknown}")

    return [entry for entry in leaderboard.runs if selections.matches(entry.run)]


def build_leaderboard_view(
    leaderboard: Leaderboard,
    selections: VariableSelections | None = None,
    variables: Iterable[Variable] | None = None,
    *,
    key: str | None = None,
) -> LeaderboardView:
    runs = filter_runs(leaderboard, selections, variables)
    if key is None:
        key = leaderboard_key(leaderboard.category, leaderboard.level)

    return LeaderboardView(
        key=key,
        selections=dict(selections.selections) if selections else {},
        total_runs=len(leaderboard.runs),
        runs=tuple(resolve_entry(leaderboard, entry) for entry in runs),
    )


class LeaderboardService:
    def __init__(
        self, client: Annotated[SpeedrunMiddlewareClient, Depends(get_middleware_client)]
    ) -> None:
        self.client = client

    async def get_leaderboard(self, key: str) -> Leaderboard | None:
        leaderboards = await self.client.list_leaderboards(key)
        if not leaderboards:
            logger.info(f"Leaderboard not found: {key}")
            return None

        leaderboard = leaderboards[0]
        logger.debug(f"Downloaded {len(leaderboard.runs)} runs!")
        return leaderboard

    async def get_game(self, game_id: str) -> Game | None:
        games = await self.client.list_games(game_id)
        return games[0] if games else None

    async def get_leaderboard_view(
        self,
        category_id: str,
        level_id: str | None = None,
        selections: VariableSelections | None = None,
        variables: Iterable[Variable] | None = None,
    ) -> LeaderboardView | None:
        """Load a leaderboard and narrow it to the selected variable values.

        Raises:
            ValueError: If the leaderboard key would be empty.
        """
        key = leaderboard_key(category_id, level_id)
        if not key:
            msg = "A category id is required to load a leaderboard"
            raise ValueError(msg)

        leaderboard = await self.get_leaderboard(key)
        if leaderboard is None:
            return None

        return build_leaderboard_view(leaderboard, selections, variables, key=key)
