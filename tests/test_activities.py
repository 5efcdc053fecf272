"""Tests for activity conversion helpers."""
from __future__ import annotations

import pytest

from nexo.models.backend import ApiActivity
from nexo.services.backend.activities import (
    normalize_sport_type,
    to_candidate,
    to_iso_date,
    to_iso_datetime,
)


@pytest.mark.parametrize(
    ("sport", "expected"),
    [("Running", "Running"), ("Cycling", "Cycling"), ("Tennis", "Football"), ("running", "Football")],
)
def test_normalize_sport_type(sport, expected):
    assert normalize_sport_type(sport) == expected


def test_to_iso_date():
    assert to_iso_date("2025-11-13") == "2025-11-13T00:00:00.000Z"
    assert to_iso_date("13/11/2025") == "2000-01-01T00:00:00.000Z"


@pytest.mark.parametrize(
    ("time", "expected"),
    [
        ("6:30 PM", "2025-11-13T18:30:00.000Z"),
        ("12:05 AM", "2025-11-13T00:05:00.000Z"),
        ("07:45", "2025-11-13T07:45:00.000Z"),
        ("soon", "2000-01-01T12:00:00.000Z"),
    ],
)
def test_to_iso_datetime(time, expected):
    assert to_iso_datetime("2025-11-13", time) == expected


def test_to_iso_datetime_bad_date():
    assert to_iso_datetime("tomorrow", "6:30 PM") == "2000-01-01T12:00:00.000Z"


def test_to_candidate_defaults():
    activity = ApiActivity.model_validate(
        {
            "_id": "a1",
            "creator": "u9",
            "sportType": "Padel",
            "title": "Evening Padel",
            "date": "next week",
            "time": "",
            "participants": 4,
            "level": "Advanced",
        }
    )

    candidate = to_candidate(activity)

    assert candidate.host_name == "Unknown User"
    assert candidate.host_avatar == "https://api.dicebear.com/7.x/avataaars/svg?seed=Unknown%20User"
    assert candidate.sport_icon == "🏃"
    assert candidate.date == "TBD"
    assert candidate.time == "TBD"
    assert candidate.distance == "0.0 mi"
    assert candidate.spots_left == 3
