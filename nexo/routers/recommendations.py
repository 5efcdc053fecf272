"""API endpoints for AI-powered activity recommendations."""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from nexo.errors import MissingCredential, NexoError, TransportError, UpstreamError
from nexo.models.recommendation import RecommendationRequest, RecommendationResponse
from nexo.services.ai_coach import AICoach
from nexo.services.fallback import QUICK_RECOMMENDATIONS, fallback_response
from nexo.services.response_parser import parse_completion


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


class ParseRequest(BaseModel):
    text: str


def _status_for(error: NexoError) -> int:
    if isinstance(error, MissingCredential):
        return 503
    if isinstance(error, TransportError):
        return 504
    if isinstance(error, UpstreamError):
        return 502
    return 500


@router.post("", response_model=RecommendationResponse)
async def create_recommendations(request: RecommendationRequest) -> RecommendationResponse:
    """
    Generate personalised suggestions, tips and a motivational message.

    Builds a prompt from the user's health data, workouts, preferences and
    the activities available to join, then asks Gemini for a reply in the
    line-oriented recommendation format.

    Returns:
        RecommendationResponse: parsed (or fallback) recommendations
    """

    logger.info(
        "Handling recommendation request | workouts=%d activities=%d",
        len(request.recent_workouts),
        len(request.available_activities),
    )
    try:
        coach = AICoach()
        return await coach.analyze(request)
    except NexoError as e:
        status_code = _status_for(e)
        logger.warning("Recommendation request failed (%d): %s", status_code, e.user_message)
        raise HTTPException(status_code=status_code, detail=e.user_message)


@router.post("/parse", response_model=RecommendationResponse)
async def parse_recommendations(body: ParseRequest) -> RecommendationResponse:
    """Parse a saved completion without calling the model."""
    return parse_completion(body.text)


@router.get("/fallback", response_model=RecommendationResponse)
async def get_fallback_recommendations() -> RecommendationResponse:
    """Return the defaults served when the model produces nothing usable."""
    return fallback_response()


@router.get("/quick")
async def get_quick_recommendations() -> dict[str, list[str]]:
    """Starter recommendations for users with no analysis yet."""
    return {"recommendations": list(QUICK_RECOMMENDATIONS)}
