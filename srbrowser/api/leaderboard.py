from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from srbrowser.schemas.common import APIResponse
from srbrowser.schemas.leaderboard import LeaderboardView
from srbrowser.schemas.variable import VariableSelections
from srbrowser.services.leaderboard import LeaderboardService, leaderboard_key

router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])


def parse_selections(
    filters: Annotated[list[str], Query(alias="filter")] = [],  # noqa: B006
) -> VariableSelections:
    """Read ``?filter=variableId:valueId`` query parameters."""
    try:
        return VariableSelections.from_query(filters)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/{category_id}")
async def get_leaderboard(
    category_id: str,
    service: Annotated[LeaderboardService, Depends()],
    selections: Annotated[VariableSelections, Depends(parse_selections)],
    level_id: str | None = None,
) -> APIResponse[LeaderboardView]:
    try:
        view = await service.get_leaderboard_view(category_id, level_id, selections)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if view is None:
        key = leaderboard_key(category_id, level_id)
        raise HTTPException(status_code=404, detail=f"Leaderboard not found: {key}")

    message = "No runs match the selected filters" if view.is_empty else None
    return APIResponse(data=view, message=message)
