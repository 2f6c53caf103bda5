from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from srbrowser.schemas.common import APIResponse
from srbrowser.schemas.game import Category, Game
from srbrowser.schemas.leaderboard import LeaderboardView
from srbrowser.schemas.variable import VariableSelections
from srbrowser.services.leaderboard import LeaderboardService, leaderboard_key_for

from .leaderboard import parse_selections

router = APIRouter(prefix="/games", tags=["games"])


async def _get_game_category(
    service: LeaderboardService, game_id: str, category_id: str
) -> tuple[Game, Category]:
    game = await service.get_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")

    category = game.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Category not found: {category_id}")

    return game, category


@router.get("/{game_id}")
async def get_game(
    game_id: str, service: Annotated[LeaderboardService, Depends()]
) -> APIResponse[Game]:
    game = await service.get_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")
    return APIResponse(data=game)


@router.get("/{game_id}/categories/{category_id}/rules")
async def get_category_rules(
    game_id: str, category_id: str, service: Annotated[LeaderboardService, Depends()]
) -> APIResponse[str]:
    _, category = await _get_game_category(service, game_id, category_id)

    rules = category.rules_text()
    if rules is None:
        raise HTTPException(status_code=404, detail="No rules have been written for this category")
    return APIResponse(data=rules)


@router.get("/{game_id}/categories/{category_id}/leaderboard")
async def get_category_leaderboard(
    game_id: str,
    category_id: str,
    service: Annotated[LeaderboardService, Depends()],
    selections: Annotated[VariableSelections, Depends(parse_selections)],
    level_id: str | None = None,
    defaults: bool = False,
) -> APIResponse[LeaderboardView]:
    """Leaderboard of a category, filtered with the category's own variables.

    With ``defaults`` the sub-category variables start at their default value; explicit
    filters override them.
    """
    game, category = await _get_game_category(service, game_id, category_id)

    level = None
    if level_id is not None:
        level = game.get_level(level_id)
        if level is None:
            raise HTTPException(status_code=404, detail=f"Level not found: {level_id}")

    if defaults:
        selections = VariableSelections.from_defaults(category.variables).merge(
            selections.selections
        )

    view = await service.get_leaderboard_view(
        category.id, level.id if level else None, selections, category.variables
    )
    if view is None:
        key = leaderboard_key_for(category, level)
        raise HTTPException(status_code=404, detail=f"Leaderboard not found: {key}")

    message = "No runs match the selected filters" if view.is_empty else None
    return APIResponse(data=view, message=message)
