"""Tests for reviewer preference persistence and streaks."""

import json
from datetime import date

from sunboard.review.preferences import ReviewerPreferences


def test_load_missing_file_gives_defaults(tmp_path):
    prefs = ReviewerPreferences.load(tmp_path / "missing.json")
    assert prefs == ReviewerPreferences()


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "reviewer.json"
    ReviewerPreferences("product_tech", streak=3, last_review_date="2025-03-01").save(path)

    loaded = ReviewerPreferences.load(path)
    assert loaded.reviewer_area == "product_tech"
    assert loaded.streak == 3
    assert loaded.last_review_date == "2025-03-01"


def test_load_ignores_unknown_area(tmp_path):
    path = tmp_path / "reviewer.json"
    path.write_text(json.dumps({"reviewer_area": "finance", "streak": 2}))
    prefs = ReviewerPreferences.load(path)
    assert prefs.reviewer_area is None
    assert prefs.streak == 2


def test_load_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "reviewer.json"
    path.write_text("{not json")
    assert ReviewerPreferences.load(path) == ReviewerPreferences()


def test_first_completion_starts_streak():
    prefs = ReviewerPreferences()
    assert prefs.record_completion(date(2025, 3, 1)) == 1
    assert prefs.last_review_date == "2025-03-01"


def test_same_day_keeps_streak():
    prefs = ReviewerPreferences(streak=4, last_review_date="2025-03-01")
    assert prefs.record_completion(date(2025, 3, 1)) == 4


def test_consecutive_day_extends_streak():
    prefs = ReviewerPreferences(streak=4, last_review_date="2025-03-01")
    assert prefs.record_completion(date(2025, 3, 2)) == 5


def test_gap_resets_streak():
    prefs = ReviewerPreferences(streak=4, last_review_date="2025-03-01")
    assert prefs.record_completion(date(2025, 3, 5)) == 1


def test_load_non_object_gives_defaults(tmp_path):
    path = tmp_path / "reviewer.json"
    path.write_text("[]")
    assert ReviewerPreferences.load(path) == ReviewerPreferences()


def test_load_non_numeric_streak_gives_defaults(tmp_path):
    path = tmp_path / "reviewer.json"
    path.write_text(json.dumps({"reviewer_area": "management", "streak": "lots"}))
    assert ReviewerPreferences.load(path) == ReviewerPreferences()


def test_load_bad_review_date_gives_defaults(tmp_path):
    path = tmp_path / "reviewer.json"
    path.write_text(
        json.dumps({"reviewer_area": "management", "streak": 3, "last_review_date": "yesterday"})
    )
    prefs = ReviewerPreferences.load(path)
    assert prefs == ReviewerPreferences()
    assert prefs.record_completion(date(2025, 3, 1)) == 1


def test_bad_review_date_restarts_streak():
    prefs = ReviewerPreferences(streak=4, last_review_date="yesterday")
    assert prefs.record_completion(date(2025, 3, 1)) == 1
    assert prefs.last_review_date == "2025-03-01"
