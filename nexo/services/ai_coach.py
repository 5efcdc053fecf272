"""Gemini-powered activity recommendations."""
from __future__ import annotations

import logging

from nexo.config import Settings, get_settings
from nexo.errors import EmptyCompletion
from nexo.models.recommendation import RecommendationRequest, RecommendationResponse
from nexo.services.fallback import fallback_response
from nexo.services.gemini_client import GeminiClient
from nexo.services.prompt_builder import PromptBuilder
from nexo.services.response_parser import parse_completion


logger = logging.getLogger(__name__)


class AICoach:
    """Runs one analysis cycle: build prompt, call the model, parse the reply."""

    def __init__(
        self,
        settings: Settings | None = None,
        completion_client: GeminiClient | None = None,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.completion_client = completion_client or GeminiClient(self.settings)
        self.prompt_builder = prompt_builder or PromptBuilder(self.settings.prompt_config_path)

    async def analyze(self, request: RecommendationRequest) -> RecommendationResponse:
        """
        Generate recommendations for ``request``.

        An empty completion falls back to the default response. Missing
        credentials, transport failures and upstream errors are raised once,
        without retry.
        """
        prompt = self.prompt_builder.build(request)
        logger.info(
            "Starting coach analysis | workouts=%d activities=%d preferences=%d",
            len(request.recent_workouts),
            len(request.available_activities),
            len(request.user_preferences),
        )

        try:
            completion = await self.completion_client.generate(prompt)
        except EmptyCompletion:
            logger.warning("Gemini returned no usable text; serving fallback recommendations")
            return fallback_response()
        except Exception:
            logger.exception("Gemini analysis failed")
            raise

        result = parse_completion(completion)
        logger.info(
            "Coach analysis complete | suggestions=%d tips=%d recommendations=%d",
            len(result.suggestions),
            len(result.tips),
            len(result.recommendations),
        )
        return result
