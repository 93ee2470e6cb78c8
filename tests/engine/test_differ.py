from __future__ import annotations

import pytest

from contentsync.contracts.diff import DifferenceKind, FieldDiff, Severity
from contentsync.contracts.exceptions import ShapeError
from contentsync.contracts.record import Side
from contentsync.engine.differ import compare_records, diff
from contentsync.engine.normalizer import normalize


def test_frontend_only_record_is_missing_in_backend() -> None:
    report = diff([{"id": "x", "name": "Alice", "title": "CTO"}], [])

    assert report.total_differences == 1
    (difference,) = report.differences
    assert difference.kind == DifferenceKind.MISSING_IN_BACKEND
    assert difference.key == "x"
    assert difference.label == "Alice"
    assert difference.frontend_record is not None
    assert difference.backend_record is None
    assert difference.severity == Severity.HIGH


def test_frontend_only_record_without_id_uses_name_key() -> None:
    report = diff([{"name": "Alice", "title": "CTO"}], [])
    assert report.keys() == ["alice"]


def test_title_mismatch_carries_single_field_diff() -> None:
    report = diff([{"id": "x", "name": "Alice", "title": "CTO"}], [{"id": "x", "name": "Alice", "title": "CIO"}])

    (difference,) = report.differences
    assert difference.kind == DifferenceKind.MISMATCH
    assert difference.field_diffs == (FieldDiff(field="title", frontend_value="CTO", backend_value="CIO"),)
    assert difference.severity == Severity.MEDIUM


def test_backend_only_record_is_missing_in_frontend() -> None:
    report = diff([], [{"id": 9, "name": "Bob"}])

    (difference,) = report.differences
    assert difference.kind == DifferenceKind.MISSING_IN_FRONTEND
    assert difference.key == "9"
    assert difference.backend_record is not None
    assert difference.frontend_record is None


def test_empty_collections_yield_empty_report() -> None:
    report = diff([], [])

    assert report.total_differences == 0
    assert report.by_type == {kind: 0 for kind in DifferenceKind}
    assert report.differences == []


def test_mismatch_groups_all_differing_fields_in_canonical_order() -> None:
    frontend = [{"id": 1, "name": "Ada", "email": "ada@example.com", "title": "CTO", "is_founder": True}]
    backend = [{"id": 1, "name": "Ada", "email": "ada@old.example.com", "title": "CEO"}]

    (difference,) = diff(frontend, backend).differences

    assert [field_diff.field for field_diff in difference.field_diffs] == ["title", "email", "is_founder"]


def test_arrays_compare_order_insensitively() -> None:
    frontend = [{"id": 1, "name": "Ada", "specialties": ["tax", "audit"]}]
    backend = [{"id": 1, "name": "Ada", "specialties": ["audit", "tax"]}]

    assert diff(frontend, backend).total_differences == 0


def test_array_field_diff_keeps_original_order_for_display() -> None:
    frontend = [{"id": 1, "specialties": ["tax", "audit"]}]
    backend = [{"id": 1, "specialties": ["audit"]}]

    (difference,) = diff(frontend, backend).differences

    assert difference.field_diffs[0].frontend_value == ["tax", "audit"]
    assert difference.field_diffs[0].backend_value == ["audit"]


def test_absent_and_empty_values_are_equal() -> None:
    frontend = [{"id": 1, "name": "Ada", "bio": None, "specialties": []}]
    backend = [{"id": 1, "name": "Ada", "bio": "", "is_founder": False}]

    assert diff(frontend, backend).total_differences == 0


def test_content_file_member_matches_backoffice_member() -> None:
    member = {
        "id": 2,
        "name": "Aissatou Diallo",
        "title": "Consultante Cloud",
        "is_founder": False,
        "specialties": ["Cloud"],
    }
    backoffice = {**member, "is_visible": True, "display_order": 4, "created_at": "2024-05-01T10:00:00Z"}

    assert diff([member], [backoffice]).total_differences == 0


def test_hidden_backend_member_differs_from_listed_frontend_member() -> None:
    report = diff([{"id": 2, "name": "Ada"}], [{"id": 2, "name": "Ada", "is_visible": False}])

    (difference,) = report.differences
    assert difference.field_diffs == (FieldDiff(field="is_visible", frontend_value=True, backend_value=False),)


def test_frontend_display_order_is_compared_when_present() -> None:
    report = diff([{"id": 2, "name": "Ada", "order": 1}], [{"id": 2, "name": "Ada", "display_order": 4}])

    (difference,) = report.differences
    assert difference.field_diffs == (FieldDiff(field="display_order", frontend_value=1, backend_value=4),)


def test_id_less_frontend_record_matches_backend_by_name() -> None:
    frontend = [{"name": "Jean  Dupont", "title": "Partner"}]
    backend = [{"id": 7, "name": "Jean  Dupont", "title": "Associate"}]

    report = diff(frontend, backend)

    (difference,) = report.differences
    assert difference.kind == DifferenceKind.MISMATCH
    assert difference.key == "jean dupont"
    assert difference.backend_record is not None
    assert difference.backend_record.id == "7"


def test_name_match_is_case_insensitive() -> None:
    report = diff([{"name": "ALICE"}], [{"id": 1, "name": "alice"}])

    (difference,) = report.differences
    assert difference.kind == DifferenceKind.MISMATCH
    assert difference.field_diffs == (FieldDiff(field="name", frontend_value="ALICE", backend_value="alice"),)


def test_frontend_record_with_id_does_not_fall_back_to_name() -> None:
    report = diff([{"id": "a", "name": "Ada"}], [{"id": "b", "name": "Ada"}])

    assert report.keys(DifferenceKind.MISSING_IN_BACKEND) == ["a"]
    assert report.keys(DifferenceKind.MISSING_IN_FRONTEND) == ["b"]


def test_output_order_is_by_kind_then_source_order() -> None:
    frontend = [{"id": "a"}, {"id": "m", "title": "new"}, {"id": "b"}]
    backend = [{"id": "m", "title": "old"}, {"id": "z"}, {"id": "y"}]

    report = diff(frontend, backend)

    assert report.keys() == ["a", "b", "z", "y", "m"]
    assert report.by_type == {
        DifferenceKind.MISSING_IN_BACKEND: 2,
        DifferenceKind.MISSING_IN_FRONTEND: 2,
        DifferenceKind.MISMATCH: 1,
    }
    assert report.by_severity[Severity.HIGH] == 2
    assert report.by_severity[Severity.MEDIUM] == 3
    assert report.frontend_count == 3
    assert report.backend_count == 3


def test_diff_is_idempotent() -> None:
    frontend = [{"id": "a", "name": "Ada"}, {"id": "m", "title": "new", "specialties": ["x", "y"]}]
    backend = [{"id": "m", "title": "old", "specialties": ["y"]}, {"id": "z"}]

    assert diff(frontend, backend) == diff(frontend, backend)


def test_no_key_is_classified_twice() -> None:
    frontend = [{"id": "a"}, {"id": "m", "title": "new"}, {"id": "same"}]
    backend = [{"id": "m", "title": "old"}, {"id": "z"}, {"id": "same"}]

    keys = diff(frontend, backend).keys()

    assert sorted(keys) == sorted(set(keys))
    assert "same" not in keys


def test_duplicate_frontend_keys_are_each_compared() -> None:
    frontend = [{"id": "1", "name": "Ada", "title": "A"}, {"id": "1", "name": "Ada", "title": "B"}]
    backend = [{"id": "1", "name": "Ada", "title": "A"}]

    report = diff(frontend, backend)

    (difference,) = report.differences
    assert difference.kind == DifferenceKind.MISMATCH
    assert difference.field_diffs[0].frontend_value == "B"
    assert report.duplicate_keys == ["1"]


def test_duplicate_frontend_keys_missing_in_backend_repeat() -> None:
    report = diff([{"id": "1", "name": "Ada"}, {"id": "1", "name": "Ada Bis"}], [])

    assert report.keys() == ["1", "1"]
    assert [difference.label for difference in report.differences] == ["Ada", "Ada Bis"]


def test_duplicate_backend_keys_first_occurrence_wins(caplog: pytest.LogCaptureFixture) -> None:
    backend = [{"id": "2", "name": "Bo"}, {"id": "2", "name": "Bob"}]

    report = diff([{"id": "2", "name": "Bo"}], backend)

    assert report.total_differences == 0
    assert report.duplicate_keys == ["2"]
    assert "Duplicate record keys found: 2" in caplog.text


def test_duplicate_backend_keys_reported_missing_once() -> None:
    report = diff([], [{"id": "2", "name": "Bo"}, {"id": "2", "name": "Bob"}])

    (difference,) = report.differences
    assert difference.label == "Bo"


def test_malformed_collection_raises_shape_error() -> None:
    with pytest.raises(ShapeError):
        diff([{"id": 1}], "not a list")


def test_compare_records_returns_nothing_for_equal_records() -> None:
    left = normalize({"id": 1, "name": "Ada", "certifications": ["b", "a"]}, Side.FRONTEND)
    right = normalize({"id": 1, "name": "Ada", "certifications": ["a", "b"]}, Side.BACKEND)

    assert compare_records(left, right) == ()
