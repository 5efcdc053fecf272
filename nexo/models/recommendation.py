"""Value objects flowing through the recommendation pipeline."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Intensity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def coerce(cls, value: object) -> "Intensity":
        """Case-insensitive lookup; anything unrecognised becomes Medium."""

        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.MEDIUM


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def coerce(cls, value: object) -> "Priority":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.MEDIUM


# --- Request side -----------------------------------------------------------


class HealthMetrics(BaseModel):
    """Health snapshot for a single day. Optional values are rendered as N/A."""

    steps: int = 0
    active_calories: int = 0
    workout_minutes: int = 0
    heart_rate: float | None = None
    sleep_hours: float | None = None
    body_weight: float | None = None
    resting_heart_rate: float | None = None
    vo2_max: float | None = None
    date: datetime = Field(default_factory=datetime.now)


class WorkoutSession(BaseModel):
    activity_type: str
    start: datetime
    end: datetime
    duration_seconds: float
    calories: float = 0.0
    distance_meters: float | None = None
    average_heart_rate: float | None = None
    max_heart_rate: float | None = None


class CandidateActivity(BaseModel):
    """An activity offered to the model as something it may recommend."""

    id: str
    title: str
    sport_type: str
    sport_icon: str = "🏃"
    host_name: str = "Unknown User"
    host_avatar: str | None = None
    date: str = "TBD"
    time: str = "TBD"
    location: str = ""
    distance: str = "0.0 mi"
    spots_total: int = 0
    spots_taken: int = 0
    level: str = "Intermediate"

    @property
    def spots_left(self) -> int:
        return self.spots_total - self.spots_taken


class RecommendationRequest(BaseModel):
    health_metrics: HealthMetrics
    recent_workouts: list[WorkoutSession] = Field(default_factory=list)
    weekly_trends: list[HealthMetrics] = Field(default_factory=list)
    user_preferences: list[str] = Field(default_factory=list)
    weather_analysis: str = ""
    available_activities: list[CandidateActivity] = Field(default_factory=list)
    activity_summary: str = ""


# --- Response side ----------------------------------------------------------


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    activity_type: str
    duration: int
    intensity: Intensity
    match_score: int
    reasoning: str
    icon: str
    time: str
    participants: int

    @field_validator("intensity", mode="before")
    @classmethod
    def _coerce_intensity(cls, value: object) -> Intensity:
        return Intensity.coerce(value)


class Tip(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    category: str
    priority: Priority
    icon: str
    actionable: bool

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value: object) -> Priority:
        return Priority.coerce(value)


class RecommendationResponse(BaseModel):
    """Parsed completion. Suggestions and tips are never empty."""

    model_config = ConfigDict(frozen=True)

    suggestions: list[Suggestion]
    tips: list[Tip]
    motivational_message: str
    analysis: str
    recommendations: list[str]
