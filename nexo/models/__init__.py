"""Pydantic models for the recommendation pipeline and backend DTOs."""

from nexo.models.recommendation import (
    CandidateActivity,
    HealthMetrics,
    Intensity,
    Priority,
    RecommendationRequest,
    RecommendationResponse,
    Suggestion,
    Tip,
    WorkoutSession,
)

__all__ = [
    "CandidateActivity",
    "HealthMetrics",
    "Intensity",
    "Priority",
    "RecommendationRequest",
    "RecommendationResponse",
    "Suggestion",
    "Tip",
    "WorkoutSession",
]
