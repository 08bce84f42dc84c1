"""Pydantic models for substitution plan data.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Records are frozen: they are built once by a parser and never mutated.
"""

from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    TypeAdapter,
    model_serializer,
)

# Dropped from the serialized substitution when empty
_OPTIONAL_SUBSTITUTION_FIELDS = ("substitute", "room", "info")


class Absence(BaseModel):
    """A class that is absent for a span of periods.

    One row of the absence table (table.K): the row header is the class,
    the single data cell is the span, e.g. "1.-11.".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    class_: str = Field(alias="class")  # "8E"
    periods: str  # "1.-11."


class Substitution(BaseModel):
    """A single lesson-level change from the substitution table (table.k)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    class_: str = Field(alias="class")  # From the group's row-spanning th.k
    teacher: str = ""  # Original teacher, e.g. "MÜL"
    period: str = ""  # Lesson, e.g. "3"
    substitute: str = ""  # Replacement teacher, empty when cancelled
    room: str = ""
    info: str = ""  # Free-text remark, e.g. "entfällt"

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in _OPTIONAL_SUBSTITUTION_FIELDS:
            if not data.get(key):
                data.pop(key, None)
        return data


class Plan(BaseModel):
    """One day's substitution bulletin.

    `date` is the name of the day-marker anchor, kept verbatim as the external
    key. `created_at` is None when the creation heading could not be parsed.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    date: str = ""
    created_at: datetime | None = None
    absent: tuple[Absence, ...] = ()
    infos: tuple[str, ...] = ()
    substitutions: tuple[Substitution, ...] = ()


_PLANS_ADAPTER = TypeAdapter(list[Plan])


def dump_plans(plans: list[Plan], *, indent: int | None = None) -> str:
    """Serialize plans to a JSON array using the external field names."""
    return _PLANS_ADAPTER.dump_json(list(plans), by_alias=True, indent=indent).decode(
        "utf-8"
    )
