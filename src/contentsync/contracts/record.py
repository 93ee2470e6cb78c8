"""Canonical record contracts."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class Side(StrEnum):
    FRONTEND = "FRONTEND"
    BACKEND = "BACKEND"


# Order matters: field diffs are reported in this order.
COMPARABLE_FIELDS: tuple[str, ...] = (
    "name",
    "title",
    "bio",
    "email",
    "phone",
    "specialties",
    "certifications",
    "is_founder",
    "is_visible",
    "image",
    "display_order",
)

ARRAY_FIELDS: frozenset[str] = frozenset({"specialties", "certifications"})


class Record(BaseModel):
    """A team member as held by one side, with its comparable fields defaulted."""

    id: str | None = None
    key: str
    name: str = ""
    title: str = ""
    bio: str = ""
    email: str = ""
    phone: str = ""
    specialties: tuple[str, ...] = Field(default_factory=tuple)
    certifications: tuple[str, ...] = Field(default_factory=tuple)
    is_founder: bool = False
    is_visible: bool = True
    image: str = ""
    # None: the source does not order its records, so the backend order stands.
    display_order: int | None = None

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return self.name or self.key

    def comparable(self) -> dict[str, Any]:
        """Field values used for equality, with arrays in canonical order."""
        values: dict[str, Any] = {}
        for field in COMPARABLE_FIELDS:
            value = getattr(self, field)
            if field in ARRAY_FIELDS:
                value = tuple(sorted(value))
            values[field] = value
        return values

    def to_payload(self, *, include_id: bool = False) -> dict[str, Any]:
        """Backend wire shape.

        Updates address the record by URL, so the id is only included on
        request (creates that must keep the frontend's identity).
        """
        payload: dict[str, Any] = {}
        if include_id and self.id is not None:
            payload["id"] = self.id
        for field in COMPARABLE_FIELDS:
            value = getattr(self, field)
            if value is None:
                continue
            payload[field] = list(value) if field in ARRAY_FIELDS else value
        return payload
