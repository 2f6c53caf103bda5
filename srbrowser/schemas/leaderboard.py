from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .common import WireModel
from .speedrun import LeaderboardRunEntry, User


class Leaderboard(WireModel):
    weblink: str | None = None
    game: str | None = None
    category: str | None = None
    level: str | None = None

    platform: str | None = None
    region: str | None = None
    emulators: str | None = None
    video_only: bool = False
    timing: str | None = None

    runs: list[LeaderboardRunEntry] = Field(default_factory=list)
    """Rank order as delivered by the middleware."""
    players: dict[str, User] = Field(default_factory=dict)
    """Player directory keyed by player id."""

    @field_validator("players", mode="before")
    @classmethod
    def index_players(cls, value: Any) -> Any:
        """Accept the directory as a list too. Records sharing an id collapse, last one wins."""
        if value is None:
            return {}
        if isinstance(value, list):
            directory: dict[str, Any] = {}
            for player in value:
                if player is None:
                    continue
                player_id = player.get("id") if isinstance(player, dict) else player.id
                if player_id is not None:
                    directory[player_id] = player
            return directory
        return value


class ResolvedRunEntry(BaseModel):
    """A leaderboard entry together with the directory records of its players."""

    model_config = ConfigDict(frozen=True)

    place: int | None
    place_name: str
    time: str
    entry: LeaderboardRunEntry
    players: tuple[User, ...]


class LeaderboardView(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    selections: dict[str, str]
    total_runs: int
    """Number of runs before filtering."""
    runs: tuple[ResolvedRunEntry, ...]

    @computed_field
    @property
    def is_empty(self) -> bool:
        return not self.runs
