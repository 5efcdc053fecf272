"""Activity endpoints: listing, creating and deleting hosted activities."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence
from urllib.parse import quote

from nexo.errors import NexoError
from nexo.models.backend import ApiActivity, CreateActivityRequest
from nexo.models.recommendation import CandidateActivity
from nexo.services.backend.base import BackendClient
from nexo.services.recommendation_context import (
    DEFAULT_USER_LEVEL,
    select_activities_for_recommendation,
    summarize_activities,
)


logger = logging.getLogger(__name__)

VALID_SPORT_TYPES = ("Football", "Basketball", "Running", "Cycling")
SPORT_ICONS = {
    "Football": "⚽",
    "Basketball": "🏀",
    "Running": "🏃",
    "Cycling": "🚴",
}
DEFAULT_SPORT_ICON = "🏃"

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
FALLBACK_ISO_DATE = "2000-01-01T00:00:00.000Z"
FALLBACK_ISO_DATETIME = "2000-01-01T12:00:00.000Z"


def normalize_sport_type(sport_type: str) -> str:
    """Map to a sport the backend accepts; anything else becomes Football."""

    return sport_type if sport_type in VALID_SPORT_TYPES else VALID_SPORT_TYPES[0]


def _iso(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def to_iso_date(date_text: str) -> str:
    """``yyyy-mm-dd`` to midnight UTC in ISO-8601 with milliseconds."""

    try:
        parsed = datetime.strptime(date_text.strip(), "%Y-%m-%d")
    except ValueError:
        return FALLBACK_ISO_DATE
    return _iso(parsed)


def _parse_clock(time_text: str) -> datetime | None:
    for fmt in ("%I:%M %p", "%H:%M"):
        try:
            return datetime.strptime(time_text.strip(), fmt)
        except ValueError:
            continue
    return None


def to_iso_datetime(date_text: str, time_text: str) -> str:
    """Combine ``yyyy-mm-dd`` with ``h:mm AM`` or ``HH:mm`` into an ISO-8601 UTC timestamp."""

    try:
        day = datetime.strptime(date_text.strip(), "%Y-%m-%d")
    except ValueError:
        return FALLBACK_ISO_DATETIME
    clock = _parse_clock(time_text)
    if clock is None:
        return FALLBACK_ISO_DATETIME
    return _iso(day.replace(hour=clock.hour, minute=clock.minute, second=0))


def _display(value: str, fmt: str) -> str:
    try:
        parsed = datetime.strptime(value, ISO_FORMAT)
    except ValueError:
        return "TBD"
    return parsed.strftime(fmt).lstrip("0")


def to_candidate(activity: ApiActivity) -> CandidateActivity:
    """Convert a backend activity into the shape shown to users and the coach."""

    host_name = activity.creator.name or "Unknown User"
    host_avatar = activity.creator.profile_image_url or (
        f"https://api.dicebear.com/7.x/avataaars/svg?seed={quote(host_name)}"
    )
    return CandidateActivity(
        id=activity.id,
        title=activity.title,
        sport_type=activity.sport_type,
        sport_icon=SPORT_ICONS.get(activity.sport_type, DEFAULT_SPORT_ICON),
        host_name=host_name,
        host_avatar=host_avatar,
        date=_display(activity.date, "%b %d"),
        time=_display(activity.time, "%I:%M %p"),
        location=activity.location,
        distance="0.0 mi",
        spots_total=activity.participants,
        spots_taken=1,
        level=activity.level,
    )


class ActivityService(BackendClient):
    """Keeps the all-activities and my-activities lists in sync with the backend."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.activities: list[CandidateActivity] = []
        self.my_activities: list[CandidateActivity] = []

    async def fetch_all_activities(self) -> list[CandidateActivity]:
        response = await self._send("GET", "activities", auth=False)
        self.activities = [to_candidate(item) for item in self._decode_list(ApiActivity, response)]
        logger.info("Fetched %d activities", len(self.activities))
        return self.activities

    async def fetch_my_activities(self) -> list[CandidateActivity]:
        response = await self._send("GET", "activities/my-activities")
        self.my_activities = [to_candidate(item) for item in self._decode_list(ApiActivity, response)]
        logger.info("Fetched %d of the user's activities", len(self.my_activities))
        return self.my_activities

    async def refresh(self) -> None:
        await self.fetch_all_activities()
        await self.fetch_my_activities()

    async def _refresh_after_write(self, action: str) -> None:
        # The write already went through; a failed reload only leaves the lists stale.
        try:
            await self.refresh()
        except NexoError as e:
            logger.warning("Activity refresh after %s failed: %s", action, e.user_message)

    async def create_activity(
        self,
        title: str,
        sport_type: str,
        location: str,
        date: str,
        time: str,
        participants: int,
        level: str,
        description: str | None = None,
        visibility: str = "public",
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> None:
        """Create an activity, then refresh both lists."""

        body = CreateActivityRequest(
            sport_type=normalize_sport_type(sport_type),
            title=title,
            description=description,
            location=location,
            latitude=latitude,
            longitude=longitude,
            date=to_iso_date(date),
            time=to_iso_datetime(date, time),
            participants=participants,
            level=level,
            visibility=visibility,
        )
        response = await self._send("POST", "activities", json=body.to_payload())
        logger.info("Created activity %r (status %d)", title, response.status_code)
        await self._refresh_after_write("create")

    async def delete_activity(self, activity_id: str) -> None:
        await self._send("DELETE", f"activities/{activity_id}", failure_message="Failed to delete activity")
        logger.info("Deleted activity %s", activity_id)
        await self._refresh_after_write("delete")

    def candidates_for_recommendation(
        self,
        sport_preferences: Sequence[str] = (),
        user_level: str = DEFAULT_USER_LEVEL,
    ) -> list[CandidateActivity]:
        return select_activities_for_recommendation(self.activities, sport_preferences, user_level)

    def activity_summary(self) -> str:
        return summarize_activities(self.activities)
