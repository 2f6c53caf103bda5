from __future__ import annotations

import datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from srbrowser.utils.misc import format_duration, ordinal

from .common import WireModel

UNKNOWN_NAME = "? Unknown Name ?"


class Asset(WireModel):
    uri: str
    width: int | None = None
    height: int | None = None


class MediaLink(WireModel):
    uri: str


class GameAssets(WireModel):
    cover_large: Asset | None = None
    trophy_1st: Asset | None = None
    trophy_2nd: Asset | None = None
    trophy_3rd: Asset | None = None
    trophy_4th: Asset | None = None

    def trophy_for_place(self, place: int | None) -> Asset | None:
        """Trophy image for places 1 to 4, None for any other place or a missing asset."""
        trophies = {1: self.trophy_1st, 2: self.trophy_2nd, 3: self.trophy_3rd, 4: self.trophy_4th}
        return trophies.get(place) if place is not None else None


class RunTimes(WireModel):
    # Time fields keep their underscores on the wire
    model_config = ConfigDict(alias_generator=None)

    primary: str | None = None
    primary_t: float | None = None
    realtime: str | None = None
    realtime_t: float | None = None
    realtime_noloads: str | None = None
    realtime_noloads_t: float | None = None
    ingame: str | None = None
    ingame_t: float | None = None

    def format_time(self) -> str:
        if self.primary_t is None:
            return ""
        return format_duration(self.primary_t)


class RunSystem(WireModel):
    platform: str | None = None
    emulated: bool = False
    region: str | None = None


class Run(WireModel):
    id: str
    weblink: str | None = None
    date: datetime.date | None = None
    submitted: str | None = None
    comment: str | None = None
    times: RunTimes = Field(default_factory=RunTimes)
    system: RunSystem = Field(default_factory=RunSystem)
    players: list[User] = Field(default_factory=list)
    values: dict[str, str] = Field(default_factory=dict)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        """Runs without a usable date are kept, with no date."""
        if not value:
            return None
        if isinstance(value, str):
            try:
                return datetime.date.fromisoformat(value[:10])
            except ValueError:
                return None
        return value


class LeaderboardRunEntry(WireModel):
    place: int | None = None
    run: Run

    def place_name(self) -> str:
        if self.place is None or self.place <= 0:
            return "-"
        return ordinal(self.place)


class UserLevelBest(WireModel):
    id: str | None = None
    name: str = ""
    run: LeaderboardRunEntry | None = None


class UserCategoryBest(WireModel):
    id: str | None = None
    name: str = ""
    type: str | None = None
    run: LeaderboardRunEntry | None = None
    levels: dict[str, UserLevelBest] | None = None

    def iter_runs(self) -> list[LeaderboardRunEntry]:
        if self.levels:
            return [level.run for level in self.levels.values() if level.run is not None]
        return [self.run] if self.run is not None else []


class UserGameBests(WireModel):
    id: str | None = None
    names: dict[str, str] = Field(default_factory=dict)
    assets: GameAssets = Field(default_factory=GameAssets)
    categories: dict[str, UserCategoryBest] = Field(default_factory=dict)

    def get_name(self) -> str:
        return self.names.get("international") or UNKNOWN_NAME

    def get_newest_run(self) -> LeaderboardRunEntry | None:
        """The most recently dated best run among every category and level of this game."""
        dated = [
            entry
            for category in self.categories.values()
            for entry in category.iter_runs()
            if entry.run.date is not None
        ]
        return max(dated, key=lambda entry: entry.run.date, default=None)  # type: ignore[arg-type]


class User(WireModel):
    id: str | None = None
    rel: str | None = None
    names: dict[str, str] = Field(default_factory=dict)
    name: str | None = None
    role: str | None = None
    weblink: str | None = None

    twitch: MediaLink | None = None
    twitter: MediaLink | None = None
    youtube: MediaLink | None = None
    speedrunslive: MediaLink | None = None

    bests: dict[str, UserGameBests] = Field(default_factory=dict)

    def is_guest(self) -> bool:
        return self.id is None or self.role == "guest" or self.rel == "guest"

    def get_name(self) -> str:
        return self.names.get("international") or self.name or UNKNOWN_NAME


for _model in (Run, LeaderboardRunEntry, UserLevelBest, UserCategoryBest, UserGameBests, User):
    _model.model_rebuild()
