from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from srbrowser.utils.misc import get_utc_iso_now


def to_dashed(field_name: str) -> str:
    return field_name.replace("_", "-")


class WireModel(BaseModel):
    """Immutable value parsed from the middleware, which names fields with dashes."""

    model_config = ConfigDict(alias_generator=to_dashed, populate_by_name=True, frozen=True)


class APIResponse[T](BaseModel):
    status: Literal["success", "error"] = "success"
    data: T | None = None
    message: str | None = None
    timestamp: str = Field(default_factory=get_utc_iso_now)
