from __future__ import annotations

import pytest

from contentsync.contracts.exceptions import ShapeError
from contentsync.contracts.record import Record, Side
from contentsync.engine.normalizer import name_key, normalize, normalize_collection


def test_missing_fields_take_defaults() -> None:
    record = normalize({"id": 3, "name": "Ada"}, Side.BACKEND)

    assert record.id == "3"
    assert record.key == "3"
    assert record.title == ""
    assert record.specialties == ()
    assert record.is_founder is False
    assert record.is_visible is True
    assert record.display_order is None


def test_aliases_map_onto_canonical_fields() -> None:
    record = normalize(
        {
            "id": "a1",
            "name": "Ada",
            "role": "CTO",
            "imageUrl": "/ada.png",
            "isVisible": True,
            "order": "2",
            "skills": ["python"],
        },
        Side.FRONTEND,
    )

    assert record.title == "CTO"
    assert record.image == "/ada.png"
    assert record.is_visible is True
    assert record.display_order == 2
    assert record.specialties == ("python",)


def test_canonical_name_wins_over_alias() -> None:
    record = normalize({"name": "Ada", "title": "CTO", "role": "Engineer"}, Side.FRONTEND)
    assert record.title == "CTO"


def test_volatile_fields_are_dropped() -> None:
    record = normalize({"id": 1, "name": "Ada", "updated_at": "2024-01-01", "_uploaded": True}, Side.BACKEND)
    assert "updated_at" not in record.model_dump()


def test_record_without_id_is_keyed_by_normalized_name() -> None:
    record = normalize({"name": "  Ada   LOVELACE "}, Side.FRONTEND)

    assert record.id is None
    assert record.key == "ada lovelace"


def test_name_key_collapses_whitespace_and_case() -> None:
    assert name_key("Jean  Dupont") == name_key("jean dupont") == "jean dupont"


def test_underscore_id_is_accepted() -> None:
    assert normalize({"_id": "abc", "name": "Ada"}, Side.BACKEND).key == "abc"


def test_array_fields_accept_json_strings_and_comma_lists() -> None:
    from_json = normalize({"id": 1, "specialties": '["a", "b"]'}, Side.BACKEND)
    from_csv = normalize({"id": 1, "certifications": "x, y,,"}, Side.BACKEND)

    assert from_json.specialties == ("a", "b")
    assert from_csv.certifications == ("x", "y")


def test_boolean_strings_are_coerced() -> None:
    record = normalize({"id": 1, "is_founder": "true", "is_visible": "0"}, Side.BACKEND)

    assert record.is_founder is True
    assert record.is_visible is False


def test_records_pass_through_unchanged() -> None:
    record = Record(id="1", key="1", name="Ada")
    assert normalize(record, Side.BACKEND) is record


@pytest.mark.parametrize(
    "raw",
    [
        "not an object",
        42,
        {"id": 1, "specialties": 7},
        {"id": 1, "is_founder": "maybe"},
        {"id": 1, "display_order": "first"},
        {"id": 1, "specialties": "[broken"},
    ],
)
def test_malformed_records_raise_shape_error(raw: object) -> None:
    with pytest.raises(ShapeError):
        normalize(raw, Side.BACKEND)


def test_collection_must_be_a_list() -> None:
    with pytest.raises(ShapeError, match="frontend collection must be a list"):
        normalize_collection({"team": []}, Side.FRONTEND)


def test_collection_preserves_order() -> None:
    records = normalize_collection([{"id": 2}, {"id": 1}], Side.BACKEND)
    assert [record.key for record in records] == ["2", "1"]


def test_explicitly_hidden_record_stays_hidden() -> None:
    assert normalize({"id": 1, "visible": False}, Side.BACKEND).is_visible is False
    assert normalize({"id": 1, "is_visible": None}, Side.BACKEND).is_visible is True
