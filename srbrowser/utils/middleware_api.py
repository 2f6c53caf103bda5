from collections.abc import AsyncGenerator
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, TypeAdapter

from srbrowser.core.config import settings
from srbrowser.schemas.game import Game
from srbrowser.schemas.leaderboard import Leaderboard
from srbrowser.schemas.speedrun import User


class MiddlewareConnectionError(Exception):
    """The speedrun middleware could not be reached or answered with a failure status."""


class MiddlewareAPIError(Exception):
    """The middleware answered but reported an error in its response envelope."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class SpeedrunMiddlewareClient:
    """Thin async client for the speedrun browser middleware.

    Every listing endpoint answers with ``{"data": [...], "error": {...}, "more": {...}}``.
    An empty list means nothing was found, which callers treat as a normal outcome.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def _get_list[T: BaseModel](self, path: str, model: type[T]) -> list[T]:
        try:
            response = await self.client.get(path)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise MiddlewareConnectionError(f"GET {path} failed: {e}") from e

        body: dict[str, Any] = response.json()

        error = body.get("error")
        if error:
            msg = error.get("msg") if isinstance(error, dict) else str(error)
            raise MiddlewareAPIError(msg or f"GET {path} failed")

        data = [item for item in body.get("data") or [] if item is not None]
        return TypeAdapter(list[model]).validate_python(data)

    async def list_leaderboards(self, leaderboard_key: str) -> list[Leaderboard]:
        logger.debug(f"Loading leaderboard: {leaderboard_key}")
        return await self._get_list(f"leaderboards/{leaderboard_key}", Leaderboard)

    async def list_players(self, *player_ids: str) -> list[User]:
        logger.debug(f"Loading players: {player_ids}")
        return await self._get_list(f"users/{','.join(player_ids)}", User)

    async def list_games(self, *game_ids: str) -> list[Game]:
        logger.debug(f"Loading games: {game_ids}")
        return await self._get_list(f"games/{','.join(game_ids)}", Game)


async def get_middleware_client() -> AsyncGenerator[SpeedrunMiddlewareClient]:
    async with httpx.AsyncClient(
        base_url=settings.api_base_url, timeout=settings.request_timeout
    ) as client:
        yield SpeedrunMiddlewareClient(client)
