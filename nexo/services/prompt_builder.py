"""Assemble the AI coach prompt from a recommendation request."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

import yaml

from nexo.config import get_settings
from nexo.models.recommendation import (
    CandidateActivity,
    HealthMetrics,
    RecommendationRequest,
    WorkoutSession,
)


logger = logging.getLogger(__name__)

MISSING_VALUE = "N/A"


def format_measurement(value: float | None, unit: str, decimals: int = 1) -> str:
    """Format an optional measurement with its unit.

    Example:
        >>> format_measurement(61.6, "bpm", decimals=0)
        '62 bpm'
        >>> format_measurement(None, "kg")
        'N/A'
    """
    if value is None:
        return MISSING_VALUE
    return f"{value:.{decimals}f} {unit}"


def format_short_date(value: datetime) -> str:
    return value.strftime("%b %d")


class PromptBuilder:
    """Pure string assembly; no network or file I/O after construction."""

    def __init__(self, prompt_config_path: Path | None = None) -> None:
        path = prompt_config_path or get_settings().prompt_config_path
        config = self._load_prompt_config(path)
        self.preamble: str = config["preamble"].strip()
        self.instructions: str = config["instructions"].strip()
        self.considerations: list[str] = list(config.get("considerations", []))
        self.closing: str = config.get("closing", "").strip()

        placeholders = config.get("placeholders", {})
        self.no_workouts = placeholders.get("no_workouts", "No recent workouts")
        self.no_trends = placeholders.get("no_trends", "No trend data available")
        self.no_preferences = placeholders.get("no_preferences", "No specific preferences")
        self.no_activities = placeholders.get("no_activities", "No activities currently available.")

        limits = config.get("limits", {})
        self.recent_workout_limit = int(limits.get("recent_workouts", 5))

    @staticmethod
    def _load_prompt_config(path: Path) -> dict[str, Any]:
        with Path(path).open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)

    def build(self, request: RecommendationRequest) -> str:
        """Build the full prompt text for a single analysis cycle."""

        sections = [
            self.preamble,
            "User's Health Data:\n" + self.format_health_metrics(request.health_metrics),
            "Recent Workouts (Last 7 days):\n" + self.format_recent_workouts(request.recent_workouts),
            self.format_trends(request.weekly_trends),
            "User Preferences: " + self.format_preferences(request.user_preferences),
        ]
        if request.weather_analysis.strip():
            sections.append(request.weather_analysis.strip())
        if request.activity_summary.strip():
            sections.append(request.activity_summary.strip())
        sections.append(
            "Available Activities to Recommend:\n" + self.format_activities(request.available_activities)
        )
        sections.append(self.instructions)
        if self.considerations:
            sections.append("Consider:\n" + "\n".join(f"- {item}" for item in self.considerations))
        if self.closing:
            sections.append(self.closing)

        prompt = "\n\n".join(sections)
        logger.debug(
            "Built coach prompt (%d chars, %d workouts, %d candidate activities)",
            len(prompt),
            len(request.recent_workouts),
            len(request.available_activities),
        )
        return prompt

    @staticmethod
    def format_health_metrics(metrics: HealthMetrics) -> str:
        lines = [
            "Current Health Metrics (Today):",
            f"- Steps: {metrics.steps}",
            f"- Active Calories: {metrics.active_calories} kcal",
            f"- Workout Minutes: {metrics.workout_minutes} min",
            f"- Heart Rate: {format_measurement(metrics.heart_rate, 'bpm', decimals=0)}",
            f"- Sleep: {format_measurement(metrics.sleep_hours, 'hours')}",
            f"- Weight: {format_measurement(metrics.body_weight, 'kg')}",
            f"- Resting HR: {format_measurement(metrics.resting_heart_rate, 'bpm', decimals=0)}",
            f"- VO2 Max: {format_measurement(metrics.vo2_max, 'ml/kg/min')}",
        ]
        return "\n".join(lines)

    def format_recent_workouts(self, workouts: Sequence[WorkoutSession]) -> str:
        if not workouts:
            return self.no_workouts

        newest_first = sorted(workouts, key=lambda workout: workout.start, reverse=True)
        lines = []
        for workout in newest_first[: self.recent_workout_limit]:
            minutes = int(workout.duration_seconds // 60)
            calories = int(workout.calories)
            lines.append(
                f"- {format_short_date(workout.start)}: {workout.activity_type}, {minutes} min, {calories} kcal"
            )
        return "\n".join(lines)

    def format_trends(self, trends: Sequence[HealthMetrics]) -> str:
        if not trends:
            return self.no_trends

        lines = ["Weekly Trends:"]
        for day in trends:
            lines.append(
                f"- {format_short_date(day.date)}: {day.steps} steps, "
                f"{day.active_calories} kcal, {day.workout_minutes} min"
            )
        return "\n".join(lines)

    def format_preferences(self, preferences: Sequence[str]) -> str:
        cleaned = [item.strip() for item in preferences if item.strip()]
        return ", ".join(cleaned) if cleaned else self.no_preferences

    def format_activities(self, activities: Sequence[CandidateActivity]) -> str:
        if not activities:
            return self.no_activities

        blocks = []
        for index, activity in enumerate(activities, start=1):
            blocks.append(
                "\n".join(
                    [
                        f"{index}. {activity.title}",
                        f"   - Sport: {activity.sport_type} {activity.sport_icon}",
                        f"   - Host: {activity.host_name}",
                        f"   - When: {activity.date} at {activity.time}",
                        f"   - Where: {activity.location} ({activity.distance})",
                        f"   - Level: {activity.level}",
                        f"   - Spots: {activity.spots_left}/{activity.spots_total} available",
                    ]
                )
            )
        return "\n\n".join(blocks)
