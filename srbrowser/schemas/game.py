from typing import Any

from pydantic import Field, field_validator

from .common import WireModel
from .speedrun import UNKNOWN_NAME, GameAssets
from .variable import Variable


class GameRuleset(WireModel):
    show_milliseconds: bool = False
    require_verification: bool = False
    require_video: bool = False
    run_times: list[str] = Field(default_factory=list)
    default_time: str | None = None
    emulators_allowed: bool = False


class Level(WireModel):
    id: str
    name: str = ""
    weblink: str | None = None
    rules: str | None = None


class Category(WireModel):
    id: str
    name: str = ""
    weblink: str | None = None
    type: str | None = None
    rules: str | None = None
    miscellaneous: bool = False
    variables: list[Variable] = Field(default_factory=list)

    @field_validator("variables", mode="before")
    @classmethod
    def unwrap_variables(cls, value: Any) -> Any:
        return _unwrap_data(value)

    def rules_text(self) -> str | None:
        rules = (self.rules or "").strip()
        return rules or None


class Game(WireModel):
    id: str
    names: dict[str, str] = Field(default_factory=dict)
    abbreviation: str | None = None
    weblink: str | None = None
    released: int | None = None
    release_date: str | None = None
    ruleset: GameRuleset = Field(default_factory=GameRuleset)
    romhack: bool = False
    platforms: list[Any] = Field(default_factory=list)
    regions: list[Any] = Field(default_factory=list)
    genres: list[Any] = Field(default_factory=list)
    created: str | None = None
    assets: GameAssets = Field(default_factory=GameAssets)
    categories: list[Category] = Field(default_factory=list)
    levels: list[Level] = Field(default_factory=list)

    @field_validator("categories", "levels", mode="before")
    @classmethod
    def unwrap_embeds(cls, value: Any) -> Any:
        return _unwrap_data(value)

    def get_name(self) -> str:
        return self.names.get("international") or UNKNOWN_NAME

    def get_category(self, category_id: str) -> Category | None:
        return next((category for category in self.categories if category.id == category_id), None)

    def get_level(self, level_id: str) -> Level | None:
        return next((level for level in self.levels if level.id == level_id), None)


def _unwrap_data(value: Any) -> Any:
    """Embedded collections arrive either as a bare list or as ``{"data": [...]}``."""
    if value is None:
        return []
    if isinstance(value, dict) and "data" in value:
        return value["data"] or []
    return value
