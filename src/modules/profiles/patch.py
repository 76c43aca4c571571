"""Partial update values where "leave alone" differs from "set to null"."""

from dataclasses import dataclass, field, fields
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Keep:
    """Field absent from the update: keep the stored value."""

    _instance: "Keep | None" = None

    def __new__(cls) -> "Keep":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Keep()"


KEEP = Keep()


@dataclass(frozen=True)
class Set(Generic[T]):
    """Field present in the update, possibly ``None``."""

    value: T


FieldPatch = Keep | Set[T]


@dataclass(frozen=True)
class ProfilePatch:
    drone_image_url: FieldPatch[str | None] = field(default=KEEP)
    drone_model: FieldPatch[str | None] = field(default=KEEP)
    specialization: FieldPatch[str | None] = field(default=KEEP)
    offers_ground_imaging: FieldPatch[bool] = field(default=KEEP)
    ground_imaging_types: FieldPatch[list[str] | None] = field(default=KEEP)
    bio: FieldPatch[str | None] = field(default=KEEP)

    @classmethod
    def from_fields(cls, values: dict[str, Any]) -> "ProfilePatch":
        """Build a patch from the fields actually sent by the client."""
        names = {f.name for f in fields(cls)}
        return cls(**{name: Set(value) for name, value in values.items() if name in names})

    def updates(self) -> dict[str, Any]:
        """Only the fields that should be written."""
        return {
            f.name: getattr(self, f.name).value
            for f in fields(self)
            if isinstance(getattr(self, f.name), Set)
        }
