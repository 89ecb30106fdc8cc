"""Unit tests for project/task filtering and sorting."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest

from sunboard.core.services.query_engine import (
    RecordKind,
    apply_query,
    filter_records,
    sort_records,
    to_datetime,
)
from sunboard.utils.exceptions import InvalidSortKeyError

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _project(title, **fields):
    record = {
        "id": str(uuid4()),
        "title": title,
        "status": "idea",
        "priority": "medium",
        "difficulty": "medium",
        "pillar_id": None,
        "owner_team_id": None,
        "progress_percentage": 0,
        "created_at": BASE_TIME,
        "updated_at": None,
    }
    record.update(fields)
    return record


def _titles(records):
    return [r["title"] for r in records]


class TestFilterRecords:
    def test_conjunction_of_filters(self):
        records = [
            _project("A", status="planning", priority="high"),
            _project("B", status="planning", priority="low"),
            _project("C", status="idea", priority="high"),
        ]
        result = filter_records(
            records, RecordKind.PROJECT, {"status": "planning", "priority": "high"}
        )
        assert _titles(result) == ["A"]

    def test_every_result_satisfies_every_filter(self):
        statuses = ["idea", "planning", "in_progress"]
        priorities = ["critical", "high", "medium", "low"]
        records = [
            _project(f"P{i}", status=statuses[i % 3], priority=priorities[i % 4])
            for i in range(24)
        ]
        filters = {"status": "planning", "priority": "low"}
        result = filter_records(records, RecordKind.PROJECT, filters)

        assert result
        assert all(r["status"] == "planning" and r["priority"] == "low" for r in result)
        expected = [r for r in records if r["status"] == "planning" and r["priority"] == "low"]
        assert result == expected

    def test_all_sentinel_disables_filter(self):
        records = [_project("A", status="planning"), _project("B", status="idea")]
        result = filter_records(records, RecordKind.PROJECT, {"status": "all", "priority": None})
        assert _titles(result) == ["A", "B"]

    def test_unknown_filter_field_is_ignored(self):
        records = [_project("A"), _project("B")]
        result = filter_records(records, RecordKind.PROJECT, {"colour": "blue"})
        assert _titles(result) == ["A", "B"]

    def test_task_only_field_is_ignored_for_projects(self):
        records = [_project("A", phase="testing")]
        assert filter_records(records, RecordKind.PROJECT, {"phase": "discovery"}) == records

    def test_uuid_matches_string_filter(self):
        team_id = uuid4()
        records = [_project("A", owner_team_id=team_id), _project("B")]
        result = filter_records(records, RecordKind.PROJECT, {"owner_team_id": str(team_id)})
        assert _titles(result) == ["A"]

    def test_search_matches_title_case_insensitively(self):
        records = [_project("SDR Portal"), _project("Reporting Hub")]
        result = filter_records(records, RecordKind.PROJECT, search="  portal ")
        assert _titles(result) == ["SDR Portal"]

    def test_attribute_records(self):
        records = [
            SimpleNamespace(title="A", phase="testing"),
            SimpleNamespace(title="B", phase="discovery"),
        ]
        result = filter_records(records, RecordKind.TASK, {"phase": "discovery"})
        assert [r.title for r in result] == ["B"]

    def test_input_is_not_mutated(self):
        records = [_project("A", status="planning"), _project("B")]
        snapshot = list(records)
        filter_records(records, RecordKind.PROJECT, {"status": "planning"})
        assert records == snapshot


class TestSortRecords:
    def test_priority_sorts_by_rank_not_alphabet(self):
        records = [
            _project("low", priority="low"),
            _project("critical", priority="critical"),
            _project("medium", priority="medium"),
            _project("high", priority="high"),
        ]
        result = sort_records(records, RecordKind.PROJECT, "priority", "asc")
        assert [r["priority"] for r in result] == ["critical", "high", "medium", "low"]

    def test_desc_is_exact_reverse_of_asc(self):
        records = [
            _project("A", priority="high"),
            _project("B", priority="low"),
            _project("C", priority="high"),
            _project("D", priority="critical"),
            _project("E", priority="low"),
        ]
        asc = sort_records(records, RecordKind.PROJECT, "priority", "asc")
        desc = sort_records(records, RecordKind.PROJECT, "priority", "desc")
        assert desc == list(reversed(asc))

    def test_equal_keys_keep_input_order(self):
        records = [_project(f"P{i}", priority="high") for i in range(6)]
        result = sort_records(records, RecordKind.PROJECT, "priority", "asc")
        assert _titles(result) == _titles(records)

    def test_stable_within_groups(self):
        records = [
            _project("A1", priority="low"),
            _project("B1", priority="high"),
            _project("A2", priority="low"),
            _project("B2", priority="high"),
        ]
        result = sort_records(records, RecordKind.PROJECT, "priority", "asc")
        assert _titles(result) == ["B1", "B2", "A1", "A2"]

    def test_phase_order(self):
        phases = ["rollout", "discovery", "testing", "planning"]
        records = [{"title": p, "phase": p} for p in phases]
        result = sort_records(records, RecordKind.TASK, "phase", "asc")
        assert _titles(result) == ["discovery", "planning", "testing", "rollout"]

    def test_title_sort_ignores_case(self):
        records = [_project("beta"), _project("Alpha"), _project("gamma")]
        result = sort_records(records, RecordKind.PROJECT, "title", "asc")
        assert _titles(result) == ["Alpha", "beta", "gamma"]

    def test_title_sort_places_accented_letters_with_their_base(self):
        records = [_project("Zebra rollout"), _project("Éclair pricing"), _project("apple")]
        result = sort_records(records, RecordKind.PROJECT, "title", "asc")
        assert _titles(result) == ["apple", "Éclair pricing", "Zebra rollout"]

    def test_missing_values_go_last_ascending(self):
        records = [
            _project("none", progress_percentage=None),
            _project("fifty", progress_percentage=50),
            _project("ten", progress_percentage=10),
        ]
        result = sort_records(records, RecordKind.PROJECT, "progress_percentage", "asc")
        assert _titles(result) == ["ten", "fifty", "none"]

    def test_updated_at_falls_back_to_created_at(self):
        records = [
            _project("edited", created_at=BASE_TIME, updated_at=BASE_TIME + timedelta(days=3)),
            _project("untouched", created_at=BASE_TIME + timedelta(days=1), updated_at=None),
        ]
        result = sort_records(records, RecordKind.PROJECT, "updated_at", "asc")
        assert _titles(result) == ["untouched", "edited"]

    def test_mixed_naive_and_aware_timestamps(self):
        records = [
            _project("aware", created_at=BASE_TIME + timedelta(hours=1)),
            _project("naive", created_at=datetime(2025, 1, 1)),
            _project("string", created_at="2024-12-31T23:00:00Z"),
        ]
        result = sort_records(records, RecordKind.PROJECT, "created_at", "asc")
        assert _titles(result) == ["string", "naive", "aware"]

    def test_empty_input(self):
        assert sort_records([], RecordKind.PROJECT, "priority", "desc") == []

    def test_unknown_sort_key_raises(self):
        with pytest.raises(InvalidSortKeyError):
            sort_records([_project("A")], RecordKind.PROJECT, "phase", "asc")

    def test_unknown_direction_raises(self):
        with pytest.raises(InvalidSortKeyError):
            sort_records([_project("A")], RecordKind.PROJECT, "title", "sideways")


class TestApplyQuery:
    def test_filter_then_sort(self):
        records = [
            _project("A", status="planning", priority="low"),
            _project("B", status="idea", priority="critical"),
            _project("C", status="planning", priority="critical"),
        ]
        result = apply_query(
            records,
            RecordKind.PROJECT,
            filters={"status": "planning"},
            sort_key="priority",
            direction="asc",
        )
        assert _titles(result) == ["C", "A"]

    def test_bad_sort_key_fails_even_when_nothing_matches(self):
        with pytest.raises(InvalidSortKeyError):
            apply_query([], RecordKind.TASK, sort_key="priority")


def test_to_datetime_handles_dates_and_garbage():
    assert to_datetime("not a date") is None
    assert to_datetime(None) is None
    assert to_datetime(datetime(2025, 1, 1).date()) == BASE_TIME
