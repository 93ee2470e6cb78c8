"""Record normalization.

Both sides describe the same team member with slightly different field names
and loose JSON typing. ``normalize`` maps either shape onto :class:`Record` so
the differ only ever compares canonical, fully-defaulted values. Anything not
listed in ``FIELD_ALIASES`` (timestamps, upload markers) is dropped.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from contentsync.contracts.exceptions import ShapeError
from contentsync.contracts.record import ARRAY_FIELDS, Record, Side

# Canonical field -> accepted source-specific aliases, checked in order.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("full_name", "fullName"),
    "title": ("role", "position_title", "job_title"),
    "bio": ("biography", "description"),
    "email": ("mail",),
    "phone": ("telephone", "phone_number"),
    "specialties": ("skills", "expertise"),
    "certifications": ("certificates",),
    "is_founder": ("isFounder", "founder"),
    "is_visible": ("isVisible", "visible", "is_active"),
    "image": ("image_url", "imageUrl", "photo", "avatar"),
    "display_order": ("order", "position", "displayOrder"),
}

ID_FIELDS: tuple[str, ...] = ("id", "_id")

_STRING_FIELDS = ("name", "title", "bio", "email", "phone", "image")
# Canonical bool field -> value when the source leaves it out. The site lists a
# member unless it is explicitly hidden.
_BOOL_DEFAULTS: dict[str, bool] = {"is_founder": False, "is_visible": True}
_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", ""})


def name_key(name: str) -> str:
    """Case-folded, whitespace-collapsed name used when no id is available."""
    return " ".join(name.split()).casefold()


def normalize(raw: Any, side: Side) -> Record:
    if isinstance(raw, Record):
        return raw
    if not isinstance(raw, Mapping):
        raise ShapeError(f"{side.value.lower()} record must be an object, got {type(raw).__name__}")

    record_id = _coerce_id(_first_present(raw, ID_FIELDS))
    values: dict[str, Any] = {}
    for field in _STRING_FIELDS:
        values[field] = _coerce_str(_lookup(raw, field))
    for field in ARRAY_FIELDS:
        values[field] = _coerce_array(_lookup(raw, field), field=field, side=side)
    for field, default in _BOOL_DEFAULTS.items():
        values[field] = _coerce_bool(_lookup(raw, field), default=default, field=field, side=side)
    values["display_order"] = _coerce_int(_lookup(raw, "display_order"), side=side)

    key = record_id if record_id is not None else name_key(values["name"])
    return Record(id=record_id, key=key, **values)


def normalize_collection(raw_records: Any, side: Side) -> list[Record]:
    if isinstance(raw_records, (str, bytes, Mapping)) or not isinstance(raw_records, Iterable):
        raise ShapeError(f"{side.value.lower()} collection must be a list, got {type(raw_records).__name__}")
    return [normalize(raw, side) for raw in raw_records]


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    return _first_present(raw, (field, *FIELD_ALIASES.get(field, ())))


def _first_present(raw: Mapping[str, Any], names: Iterable[str]) -> Any:
    for name in names:
        value = raw.get(name)
        if value is not None:
            return value
    return None


def _coerce_id(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def _coerce_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _coerce_array(value: Any, *, field: str, side: Side) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            try:
                value = json.loads(stripped)
            except json.JSONDecodeError as exc:
                raise ShapeError(f"{side.value.lower()} field '{field}' is not a valid JSON array") from exc
        else:
            value = stripped.split(",")
    if not isinstance(value, (list, tuple)):
        raise ShapeError(f"{side.value.lower()} field '{field}' must be a list, got {type(value).__name__}")
    items = (_coerce_str(item).strip() for item in value if item is not None)
    return tuple(item for item in items if item)


def _coerce_bool(value: Any, *, default: bool, field: str, side: Side) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ShapeError(f"{side.value.lower()} field '{field}' is not a boolean: {value!r}")


def _coerce_int(value: Any, *, side: Side) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ShapeError(f"{side.value.lower()} field 'display_order' is not an integer: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ShapeError(f"{side.value.lower()} field 'display_order' is not an integer: {value!r}") from exc
