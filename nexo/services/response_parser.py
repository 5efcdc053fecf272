"""Parse the coach completion's line grammar into a RecommendationResponse.

Grammar (one record per line, fields separated by ``" | "``)::

    SUGGESTION: Title | Description | ActivityType | DurationMinutes | Intensity | MatchScore | Reasoning | Icon | Time | Participants
    TIP: Title | Description | Category | Priority | Icon | Actionable
    MOTIVATIONAL_MESSAGE: <text>
    ANALYSIS: <text>
    RECOMMENDATIONS:
    - <text>

Parsing is line-local and never raises. Short records are dropped. Fields
cannot contain the separator itself; a value with ``" | "`` in it shifts the
remaining fields.
"""
from __future__ import annotations

import logging
import re

from nexo.models.recommendation import RecommendationResponse, Suggestion, Tip
from nexo.services.fallback import (
    DEFAULT_ANALYSIS,
    DEFAULT_MOTIVATIONAL_MESSAGE,
    default_recommendations,
    default_suggestions,
    default_tips,
)


logger = logging.getLogger(__name__)

FIELD_SEPARATOR = " | "

SUGGESTION_PREFIX = "SUGGESTION:"
TIP_PREFIX = "TIP:"
MOTIVATIONAL_PREFIX = "MOTIVATIONAL_MESSAGE:"
ANALYSIS_PREFIX = "ANALYSIS:"
RECOMMENDATIONS_PREFIX = "RECOMMENDATIONS:"
BULLET_PREFIX = "- "

SUGGESTION_FIELD_COUNT = 10
TIP_FIELD_COUNT = 6

DEFAULT_DURATION = 30
DEFAULT_MATCH_SCORE = 80
DEFAULT_PARTICIPANTS = 1

_INT_PATTERN = re.compile(r"[+-]?\d+")


def parse_int(text: str, default: int) -> int:
    """Parse a plain integer literal, returning ``default`` for anything else."""

    candidate = text.strip()
    if _INT_PATTERN.fullmatch(candidate):
        return int(candidate)
    return default


def _fields(line: str, prefix: str) -> list[str]:
    return line[len(prefix):].strip().split(FIELD_SEPARATOR)


def parse_suggestion_line(line: str) -> Suggestion | None:
    fields = _fields(line, SUGGESTION_PREFIX)
    if len(fields) < SUGGESTION_FIELD_COUNT:
        return None
    return Suggestion(
        title=fields[0],
        description=fields[1],
        activity_type=fields[2],
        duration=parse_int(fields[3], DEFAULT_DURATION),
        intensity=fields[4],
        match_score=parse_int(fields[5], DEFAULT_MATCH_SCORE),
        reasoning=fields[6],
        icon=fields[7],
        time=fields[8],
        participants=parse_int(fields[9], DEFAULT_PARTICIPANTS),
    )


def parse_tip_line(line: str) -> Tip | None:
    fields = _fields(line, TIP_PREFIX)
    if len(fields) < TIP_FIELD_COUNT:
        return None
    return Tip(
        title=fields[0],
        description=fields[1],
        category=fields[2],
        priority=fields[3],
        icon=fields[4],
        actionable=fields[5].lower() == "true",
    )


def parse_completion(text: str) -> RecommendationResponse:
    """Scan ``text`` line by line and build a never-empty response."""

    suggestions: list[Suggestion] = []
    tips: list[Tip] = []
    recommendations: list[str] = []
    motivational_message = DEFAULT_MOTIVATIONAL_MESSAGE
    analysis = DEFAULT_ANALYSIS
    dropped = 0

    for raw_line in text.splitlines():
        line = raw_line.strip()

        if line.startswith(SUGGESTION_PREFIX):
            suggestion = parse_suggestion_line(line)
            if suggestion is None:
                dropped += 1
            else:
                suggestions.append(suggestion)
        elif line.startswith(TIP_PREFIX):
            tip = parse_tip_line(line)
            if tip is None:
                dropped += 1
            else:
                tips.append(tip)
        elif line.startswith(MOTIVATIONAL_PREFIX):
            motivational_message = line[len(MOTIVATIONAL_PREFIX):].strip()
        elif line.startswith(ANALYSIS_PREFIX):
            analysis = line[len(ANALYSIS_PREFIX):].strip()
        elif line.startswith(RECOMMENDATIONS_PREFIX):
            continue
        elif (
            line.startswith(BULLET_PREFIX)
            and SUGGESTION_PREFIX not in line
            and TIP_PREFIX not in line
        ):
            recommendation = line[len(BULLET_PREFIX):].strip()
            if recommendation:
                recommendations.append(recommendation)

    if dropped:
        logger.debug("Dropped %d malformed SUGGESTION/TIP line(s)", dropped)

    if not suggestions:
        logger.info("No suggestions parsed from completion; using defaults")
        suggestions = default_suggestions()
    if not tips:
        logger.info("No tips parsed from completion; using defaults")
        tips = default_tips()
    if not recommendations:
        recommendations = default_recommendations()

    return RecommendationResponse(
        suggestions=suggestions,
        tips=tips,
        motivational_message=motivational_message,
        analysis=analysis,
        recommendations=recommendations,
    )
