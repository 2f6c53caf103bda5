from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .common import WireModel
from .speedrun import Run


class VariableValue(WireModel):
    id: str
    label: str
    rules: str | None = None


class Variable(WireModel):
    id: str
    name: str = ""
    category: str | None = None
    scope: dict[str, Any] | None = None
    mandatory: bool = False
    is_subcategory: bool = False
    values: list[VariableValue] = Field(default_factory=list)
    default: str | None = None

    @model_validator(mode="before")
    @classmethod
    def flatten_values(cls, data: Any) -> Any:
        """Unpack ``{"values": {id: {label, rules}}, "default": id}`` into an ordered list."""
        if not isinstance(data, dict):
            return data

        values = data.get("values")
        if not isinstance(values, dict):
            return data

        data = dict(data)
        choices = values.get("values", {})
        data["values"] = [
            {"id": value_id, "label": choice.get("label", value_id), "rules": choice.get("rules")}
            for value_id, choice in choices.items()
        ]
        data.setdefault("default", values.get("default"))
        return data

    def get_value(self, value_id: str) -> VariableValue | None:
        return next((value for value in self.values if value.id == value_id), None)


class VariableSelections(BaseModel):
    """A chosen value per variable. No selections means the leaderboard is not filtered."""

    model_config = ConfigDict(frozen=True)

    selections: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_defaults(cls, variables: Iterable[Variable]) -> "VariableSelections":
        """Preselect the default value of every sub-category variable."""
        return cls(
            selections={
                variable.id: variable.default
                for variable in variables
                if variable.is_subcategory and variable.default is not None
            }
        )

    @classmethod
    def from_query(cls, items: Iterable[str]) -> "VariableSelections":
        """Parse ``variableId:valueId`` pairs.

        Raises:
            ValueError: If an item is not a ``variableId:valueId`` pair.
        """
        selections: dict[str, str] = {}
        for item in items:
            variable_id, sep, value_id = item.partition(":")
            if not sep or not variable_id or not value_id:
                msg = f"Invalid filter {item!r}, expected variableId:valueId"
                raise ValueError(msg)
            selections[variable_id] = value_id
        return cls(selections=selections)

    def __bool__(self) -> bool:
        return bool(self.selections)

    def __len__(self) -> int:
        return len(self.selections)

    def select(self, variable_id: str, value_id: str) -> "VariableSelections":
        return VariableSelections(selections={**self.selections, variable_id: value_id})

    def deselect(self, variable_id: str) -> "VariableSelections":
        return VariableSelections(
            selections={k: v for k, v in self.selections.items() if k != variable_id}
        )

    def merge(self, other: Mapping[str, str]) -> "VariableSelections":
        return VariableSelections(selections={**self.selections, **other})

    def matches(self, run: Run) -> bool:
        """Whether the run recorded the selected value for every selected variable."""
        return all(
            run.values.get(variable_id) == value_id
            for variable_id, value_id in self.selections.items()
        )
