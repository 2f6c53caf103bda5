from collections.abc import Mapping
from functools import cmp_to_key
from typing import Annotated

from fastapi import Depends
from loguru import logger

from srbrowser.core.config import settings
from srbrowser.schemas.personal_best import (
    GameBestsSection,
    PersonalBestRow,
    PlayerProfile,
    SocialLinks,
)
from srbrowser.schemas.speedrun import (
    GameAssets,
    LeaderboardRunEntry,
    User,
    UserCategoryBest,
    UserGameBests,
)
from srbrowser.utils.middleware_api import SpeedrunMiddlewareClient, get_middleware_client


def compare_runs_newest_first(
    first: LeaderboardRunEntry | None, second: LeaderboardRunEntry | None
) -> int:
    """Order runs by date, newest first.

    A missing run or a missing date compares equal to anything, so undated runs are
    never pushed to either end and the comparison can not fail.
    """
    if first is None or second is None:
        return 0

    first_date, second_date = first.run.date, second.run.date
    if first_date is None or second_date is None:
        return 0

    if first_date > second_date:
        return -1
    if first_date < second_date:
        return 1
    return 0


def _make_row(label: str, entry: LeaderboardRunEntry, assets: GameAssets) -> PersonalBestRow:
    return PersonalBestRow(
        label=label,
        run_id=entry.run.id,
        place=entry.place,
        place_name=entry.place_name(),
        time=entry.run.times.format_time(),
        date=entry.run.date,
        trophy=assets.trophy_for_place(entry.place),
        entry=entry,
    )


def flatten_category(category: UserCategoryBest, assets: GameAssets) -> list[PersonalBestRow]:
    if category.levels:
        return [
            _make_row(f"{category.name} - {level.name}", level.run, assets)
            for level in category.levels.values()
            if level.run is not None
        ]

    if category.run is not None:
        return [_make_row(category.name, category.run, assets)]

    logger.debug(f"Category {category.id} has neither a best run nor level bests, skipping")
    return []


def build_game_section(game_bests: UserGameBests) -> GameBestsSection:
    rows = [
        row
        for category in game_bests.categories.values()
        for row in flatten_category(category, game_bests.assets)
    ]
    rows.sort(key=cmp_to_key(lambda a, b: compare_runs_newest_first(a.entry, b.entry)))

    return GameBestsSection(
        game_id=game_bests.id,
        game_name=game_bests.get_name(),
        cover=game_bests.assets.cover_large,
        rows=tuple(rows),
    )


def build_personal_bests_view(bests: Mapping[str, UserGameBests] | None) -> list[GameBestsSection]:
    """Flatten a player's bests into one section per game, most recently active game first."""
    if not bests:
        return []

    newest_runs = [(game_bests.get_newest_run(), game_bests) for game_bests in bests.values()]
    newest_runs.sort(key=cmp_to_key(lambda a, b: compare_runs_newest_first(a[0], b[0])))
    return [build_game_section(game_bests) for _, game_bests in newest_runs]


def build_player_profile(player: User) -> PlayerProfile:
    avatar_url = None
    if not player.is_guest() and player.names.get("international"):
        avatar_url = settings.avatar_url_template.format(name=player.names["international"])

    return PlayerProfile(
        id=player.id,
        name=player.get_name(),
        is_guest=player.is_guest(),
        avatar_url=avatar_url,
        links=SocialLinks(
            twitch=player.twitch.uri if player.twitch else None,
            twitter=player.twitter.uri if player.twitter else None,
            youtube=player.youtube.uri if player.youtube else None,
            speedrunslive=player.speedrunslive.uri if player.speedrunslive else None,
        ),
        bests=() if player.is_guest() else tuple(build_personal_bests_view(player.bests)),
    )


class PlayerService:
    def __init__(
        self, client: Annotated[SpeedrunMiddlewareClient, Depends(get_middleware_client)]
    ) -> None:
        self.client = client

    async def get_player(self, player_id: str) -> User | None:
        players = await self.client.list_players(player_id)
        if not players:
            logger.info(f"Player not found: {player_id}")
            return None
        return players[0]

    async def get_player_profile(self, player_id: str) -> PlayerProfile | None:
        player = await self.get_player(player_id)
        if player is None:
            return None
        return build_player_profile(player)

    async def get_personal_bests(self, player_id: str) -> list[GameBestsSection] | None:
        player = await self.get_player(player_id)
        if player is None:
            return None
        return build_personal_bests_view(player.bests)
