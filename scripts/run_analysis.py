"""Run one coach analysis from the command line."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from nexo.config import get_settings
from nexo.errors import NexoError
from nexo.logging_config import configure_logging
from nexo.models.recommendation import RecommendationRequest
from nexo.services.ai_coach import AICoach
from nexo.services.prompt_builder import PromptBuilder
from nexo.services.recommendation_context import WeatherSnapshot, with_weather
from nexo.services.response_parser import parse_completion


logger = logging.getLogger("scripts.run_analysis")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate activity recommendations with Gemini",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full analysis (needs GEMINI_API_KEY)
  python scripts/run_analysis.py request.json

  # Show the prompt that would be sent
  python scripts/run_analysis.py request.json --prompt-only

  # Add current conditions from a weather JSON file
  python scripts/run_analysis.py request.json --weather weather.json

  # Parse a completion saved earlier
  python scripts/run_analysis.py --parse completion.txt
        """
    )
    parser.add_argument(
        "request",
        nargs="?",
        type=Path,
        help="JSON file holding a recommendation request"
    )
    parser.add_argument(
        "--prompt-only",
        action="store_true",
        help="Print the prompt and exit without calling Gemini"
    )
    parser.add_argument(
        "--parse",
        type=Path,
        metavar="FILE",
        help="Parse a saved completion instead of calling Gemini"
    )
    parser.add_argument(
        "--weather",
        type=Path,
        metavar="FILE",
        help="JSON file with current conditions (temperature_f, condition, humidity, wind_speed_mph, is_raining)"
    )
    args = parser.parse_args()
    if args.parse is None and args.request is None:
        parser.error("a request file is required unless --parse is given")
    return args


def load_request(path: Path) -> RecommendationRequest:
    with path.open("r", encoding="utf-8") as fh:
        return RecommendationRequest.model_validate(json.load(fh))


def load_weather(path: Path) -> WeatherSnapshot:
    with path.open("r", encoding="utf-8") as fh:
        return WeatherSnapshot.model_validate(json.load(fh))


def main() -> None:
    args = parse_args()

    configure_logging()
    settings = get_settings()

    if args.parse is not None:
        result = parse_completion(args.parse.read_text(encoding="utf-8"))
        print(result.model_dump_json(indent=2))
        return

    try:
        request = load_request(args.request)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("❌ Could not read request %s: %s", args.request, e)
        sys.exit(1)

    if args.weather is not None:
        try:
            request = with_weather(request, load_weather(args.weather))
        except (OSError, ValueError, ValidationError) as e:
            logger.error("❌ Could not read weather %s: %s", args.weather, e)
            sys.exit(1)

    if args.prompt_only:
        print(PromptBuilder(settings.prompt_config_path).build(request))
        return

    try:
        result = asyncio.run(AICoach(settings).analyze(request))
    except NexoError as e:
        logger.error("❌ Analysis failed: %s", e.user_message)
        sys.exit(1)

    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
