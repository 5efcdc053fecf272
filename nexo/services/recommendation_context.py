"""Helpers that prepare the candidate list and free-text context for the coach prompt."""
from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from pydantic import BaseModel

from nexo.models.recommendation import CandidateActivity, RecommendationRequest

DEFAULT_USER_LEVEL = "Intermediate"
DEFAULT_POPULAR_SPORT = "Football"

_ALL_LEVELS = ("Beginner", "Intermediate", "Advanced")
COMPATIBLE_LEVELS: dict[str, tuple[str, ...]] = {
    "Beginner": ("Beginner", "Intermediate"),
    "Intermediate": _ALL_LEVELS,
    "Advanced": ("Intermediate", "Advanced"),
}


def select_activities_for_recommendation(
    activities: Iterable[CandidateActivity],
    sport_preferences: Sequence[str] = (),
    user_level: str = DEFAULT_USER_LEVEL,
    limit: int = 10,
) -> list[CandidateActivity]:
    """
    Pick the activities offered to the model.

    Filters by sport preference (when any are given) and by skill levels
    compatible with ``user_level``, drops full activities, then orders by open
    spots (most first, stable) and keeps the first ``limit``.
    """
    levels = COMPATIBLE_LEVELS.get(user_level, _ALL_LEVELS)
    selected = [
        activity
        for activity in activities
        if (not sport_preferences or activity.sport_type in sport_preferences)
        and activity.level in levels
        and activity.spots_taken < activity.spots_total
    ]
    selected.sort(key=lambda activity: activity.spots_left, reverse=True)
    return selected[:limit]


def most_popular_sport(activities: Sequence[CandidateActivity]) -> str:
    counts = Counter(activity.sport_type for activity in activities)
    if not counts:
        return DEFAULT_POPULAR_SPORT
    return max(counts, key=counts.__getitem__)


def summarize_activities(activities: Sequence[CandidateActivity], today_label: str = "Today") -> str:
    open_count = sum(1 for activity in activities if activity.spots_taken < activity.spots_total)
    sport_types = sorted({activity.sport_type for activity in activities})
    todays = sum(1 for activity in activities if activity.date == today_label)
    return "\n".join(
        [
            "Available Activities Summary:",
            f"- Total activities: {len(activities)}",
            f"- Available to join: {open_count}",
            f"- Sport types: {', '.join(sport_types)}",
            f"- Most popular: {most_popular_sport(activities)}",
            f"- Today's activities: {todays}",
        ]
    )


class WeatherSnapshot(BaseModel):
    """Current conditions as reported by the device's weather provider."""

    temperature_f: float
    condition: str
    humidity: float  # fraction, 0-1
    wind_speed_mph: float
    is_raining: bool = False


def describe_weather(snapshot: WeatherSnapshot | None) -> str:
    if snapshot is None:
        return "Weather data not available"

    temperature = int(snapshot.temperature_f)
    lines = [
        "Current Weather Conditions:",
        f"- Temperature: {temperature}°F",
        f"- Condition: {snapshot.condition}",
        f"- Humidity: {int(snapshot.humidity * 100)}%",
        f"- Wind Speed: {int(snapshot.wind_speed_mph)} mph",
    ]

    if 70 <= temperature <= 85 and not snapshot.is_raining:
        lines.append("- Perfect weather for outdoor activities")
    elif temperature < 50:
        lines.append("- Cold weather - consider indoor workouts or warm clothing for outdoor activities")
    elif snapshot.is_raining:
        lines.append("- Rainy conditions - indoor activities recommended")
    elif temperature > 85:
        lines.append("- Hot weather - stay hydrated and consider early morning or evening workouts")

    return "\n".join(lines)


def with_weather(request: RecommendationRequest, snapshot: WeatherSnapshot | None) -> RecommendationRequest:
    """Return a copy of ``request`` whose weather section describes ``snapshot``."""
    return request.model_copy(update={"weather_analysis": describe_weather(snapshot)})
