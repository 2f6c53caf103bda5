from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from srbrowser.schemas.common import APIResponse
from srbrowser.schemas.personal_best import GameBestsSection, PlayerProfile
from srbrowser.services.personal_bests import PlayerService

router = APIRouter(prefix="/players", tags=["players"])


@router.get("/{player_id}")
async def get_player(
    player_id: str, service: Annotated[PlayerService, Depends()]
) -> APIResponse[PlayerProfile]:
    profile = await service.get_player_profile(player_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    return APIResponse(data=profile)


@router.get("/{player_id}/bests")
async def get_player_bests(
    player_id: str, service: Annotated[PlayerService, Depends()]
) -> APIResponse[list[GameBestsSection]]:
    """Personal bests of a player, one section per game, most recently active first."""
    bests = await service.get_personal_bests(player_id)
    if bests is None:
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    return APIResponse(data=bests)
