"""Tests for candidate selection and prompt context helpers."""
from __future__ import annotations

import pytest

from nexo.config import DEFAULT_PROMPT_CONFIG
from nexo.models.recommendation import CandidateActivity, HealthMetrics, RecommendationRequest
from nexo.services.prompt_builder import PromptBuilder
from nexo.services.recommendation_context import (
    WeatherSnapshot,
    describe_weather,
    most_popular_sport,
    select_activities_for_recommendation,
    summarize_activities,
    with_weather,
)


def _activity(
    id: str,
    sport_type: str = "Football",
    level: str = "Intermediate",
    spots_total: int = 10,
    spots_taken: int = 1,
    date: str = "Nov 13",
) -> CandidateActivity:
    return CandidateActivity(
        id=id,
        title=f"Activity {id}",
        sport_type=sport_type,
        level=level,
        spots_total=spots_total,
        spots_taken=spots_taken,
        date=date,
    )


def test_selection_filters_by_preference_level_and_capacity():
    activities = [
        _activity("football"),
        _activity("running", sport_type="Running"),
        _activity("advanced", level="Advanced"),
        _activity("full", spots_total=4, spots_taken=4),
    ]

    picked = select_activities_for_recommendation(activities, ["Football"], user_level="Beginner")

    assert [a.id for a in picked] == ["football"]


def test_selection_without_preferences_orders_by_open_spots():
    activities = [
        _activity("few", spots_total=3),
        _activity("many", spots_total=20),
        _activity("some", spots_total=8),
        _activity("also-few", spots_total=3),
    ]

    picked = select_activities_for_recommendation(activities)

    assert [a.id for a in picked] == ["many", "some", "few", "also-few"]


def test_selection_limit_and_unknown_level():
    activities = [_activity(str(i), level="Advanced") for i in range(15)]

    picked = select_activities_for_recommendation(activities, user_level="Expert", limit=10)

    assert len(picked) == 10


def test_summarize_activities():
    activities = [
        _activity("a", sport_type="Running", date="Today"),
        _activity("b", sport_type="Football"),
        _activity("c", sport_type="Running", spots_total=2, spots_taken=2),
    ]

    assert summarize_activities(activities) == (
        "Available Activities Summary:\n"
        "- Total activities: 3\n"
        "- Available to join: 2\n"
        "- Sport types: Football, Running\n"
        "- Most popular: Running\n"
        "- Today's activities: 1"
    )


def test_most_popular_sport_defaults_to_football():
    assert most_popular_sport([]) == "Football"


def test_describe_weather_without_data():
    assert describe_weather(None) == "Weather data not available"


@pytest.mark.parametrize(
    ("temperature", "raining", "advisory"),
    [
        (75, False, "- Perfect weather for outdoor activities"),
        (40, False, "- Cold weather - consider indoor workouts or warm clothing for outdoor activities"),
        (75, True, "- Rainy conditions - indoor activities recommended"),
        (92, False, "- Hot weather - stay hydrated and consider early morning or evening workouts"),
    ],
)
def test_describe_weather_advisories(temperature, raining, advisory):
    snapshot = WeatherSnapshot(
        temperature_f=temperature,
        condition="Clear",
        humidity=0.5,
        wind_speed_mph=8.6,
        is_raining=raining,
    )

    lines = describe_weather(snapshot).splitlines()

    assert lines[:5] == [
        "Current Weather Conditions:",
        f"- Temperature: {temperature}°F",
        "- Condition: Clear",
        "- Humidity: 50%",
        "- Wind Speed: 8 mph",
    ]
    assert lines[5] == advisory


def test_mild_weather_has_no_advisory():
    snapshot = WeatherSnapshot(temperature_f=62.4, condition="Cloudy", humidity=0.7, wind_speed_mph=3)

    assert len(describe_weather(snapshot).splitlines()) == 5


def test_with_weather_feeds_the_prompt():
    request = RecommendationRequest(health_metrics=HealthMetrics(steps=4000), weather_analysis="stale")
    snapshot = WeatherSnapshot(temperature_f=45, condition="Drizzle", humidity=0.9, wind_speed_mph=12, is_raining=True)

    updated = with_weather(request, snapshot)

    assert request.weather_analysis == "stale"
    assert updated.weather_analysis.startswith("Current Weather Conditions:")
    assert "- Condition: Drizzle" in updated.weather_analysis
    assert updated.weather_analysis in PromptBuilder(DEFAULT_PROMPT_CONFIG).build(updated)
    assert with_weather(request, None).weather_analysis == "Weather data not available"
