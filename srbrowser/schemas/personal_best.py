import datetime

from pydantic import BaseModel, ConfigDict

from .speedrun import Asset, LeaderboardRunEntry


class PersonalBestRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    run_id: str
    place: int | None
    place_name: str
    time: str
    date: datetime.date | None
    trophy: Asset | None
    entry: LeaderboardRunEntry


class GameBestsSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    game_id: str | None
    game_name: str
    cover: Asset | None
    rows: tuple[PersonalBestRow, ...]


class SocialLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    twitch: str | None = None
    twitter: str | None = None
    youtube: str | None = None
    speedrunslive: str | None = None


class PlayerProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None
    name: str
    is_guest: bool
    avatar_url: str | None
    links: SocialLinks
    bests: tuple[GameBestsSection, ...]
