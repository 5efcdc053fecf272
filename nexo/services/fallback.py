"""Deterministic defaults used when a completion yields nothing usable."""
from __future__ import annotations

from nexo.models.recommendation import (
    Intensity,
    Priority,
    RecommendationResponse,
    Suggestion,
    Tip,
)

DEFAULT_MOTIVATIONAL_MESSAGE = "Keep pushing forward! 💪"
DEFAULT_ANALYSIS = "Your fitness journey is progressing well."
DEFAULT_RECOMMENDATIONS: tuple[str, ...] = (
    "Stay consistent with your workouts",
    "Focus on proper form",
    "Get adequate rest",
)

# Shown before any analysis has completed.
QUICK_RECOMMENDATIONS: tuple[str, ...] = (
    "Start with a 20-minute walk today",
    "Try a new sport this week",
    "Connect with friends for a workout",
)

_DEFAULT_SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion(
        title="Morning Walk",
        description="Start your day with a refreshing 30-minute walk",
        activity_type="Walking",
        duration=30,
        intensity=Intensity.LOW,
        match_score=85,
        reasoning="Great for building daily activity habits",
        icon="🚶",
        time="Morning",
        participants=1,
    ),
    Suggestion(
        title="Strength Training",
        description="Build muscle with a focused strength session",
        activity_type="Strength",
        duration=45,
        intensity=Intensity.MEDIUM,
        match_score=78,
        reasoning="Important for overall fitness balance",
        icon="💪",
        time="Evening",
        participants=1,
    ),
)

_DEFAULT_TIPS: tuple[Tip, ...] = (
    Tip(
        title="Stay Hydrated",
        description="Drink water before, during, and after workouts",
        category="Health",
        priority=Priority.HIGH,
        icon="💧",
        actionable=True,
    ),
    Tip(
        title="Warm Up Properly",
        description="Always start with 5-10 minutes of light activity",
        category="Safety",
        priority=Priority.HIGH,
        icon="🔥",
        actionable=True,
    ),
)


def default_suggestions() -> list[Suggestion]:
    return list(_DEFAULT_SUGGESTIONS)


def default_tips() -> list[Tip]:
    return list(_DEFAULT_TIPS)


def default_recommendations() -> list[str]:
    return list(DEFAULT_RECOMMENDATIONS)


def fallback_response() -> RecommendationResponse:
    """Full response built only from defaults."""

    return RecommendationResponse(
        suggestions=default_suggestions(),
        tips=default_tips(),
        motivational_message=DEFAULT_MOTIVATIONAL_MESSAGE,
        analysis=DEFAULT_ANALYSIS,
        recommendations=default_recommendations(),
    )
