"""Exercise classification: model-backed detection with offline fallback.

detect() sanitizes the description, asks the classification provider for a
structured record, validates and clamps the reply, and falls back to the
offline matcher on any provider failure. Only invalid caller input is raised.
"""
import asyncio
import logging
from typing import Optional

from workout_tracker_api.config import settings
from workout_tracker_api.errors import (
    ExternalCapabilityError,
    InvalidExerciseDescriptionError,
)
from workout_tracker_api.models import ClassificationResult
from workout_tracker_api.services.classification_capability import (
    ClassificationCapability,
    create_capability,
)
from workout_tracker_api.services.input_sanitizer import clean
from workout_tracker_api.services.offline_matcher import match_offline
from workout_tracker_api.services.prompts import build_classification_prompt
from workout_tracker_api.services.response_parser import (
    normalize_response,
    parse_capability_response,
)


logger = logging.getLogger(__name__)

# Coarse prompt-injection guard; also rejects some legitimate text ("ignore the pain")
INJECTION_TRIGGER_WORDS = ("ignore", "forget", "system")


def check_prompt_injection(sanitized: str) -> None:
    """Raise InvalidExerciseDescriptionError if a trigger word appears."""
    lowered = sanitized.lower()
    for word in INJECTION_TRIGGER_WORDS:
        if word in lowered:
            raise InvalidExerciseDescriptionError("Invalid exercise description")


class ExerciseClassifier:
    """Turns free-text exercise descriptions into ClassificationResults."""

    def __init__(
        self,
        capability: Optional[ClassificationCapability] = None,
        timeout_seconds: float = 15.0,
    ):
        self.capability = capability
        self.timeout_seconds = timeout_seconds

    async def detect(self, text: str) -> ClassificationResult:
        """
        Classify a description, degrading to the offline matcher on failure.

        Raises:
            InvalidInputError: description is empty after sanitization
            InvalidExerciseDescriptionError: description trips the injection guard
        """
        sanitized = clean(text)
        check_prompt_injection(sanitized)

        if self.capability is None:
            logger.info("No classification provider configured, using offline matcher")
            return match_offline(sanitized)

        prompt = build_classification_prompt(sanitized)

        try:
            raw = await asyncio.wait_for(
                self.capability.classify(prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Exercise classification timed out after {self.timeout_seconds}s, "
                "using offline matcher"
            )
            return match_offline(sanitized)
        except Exception as e:
            logger.warning(f"Exercise classification failed: {e}. Using offline matcher")
            return match_offline(sanitized)

        try:
            payload = parse_capability_response(raw)
            return normalize_response(payload, sanitized)
        except ExternalCapabilityError as e:
            logger.warning(f"Malformed classification response: {e}. Using offline matcher")
            return match_offline(sanitized)
        except Exception as e:
            logger.exception(f"Could not normalize classification response: {e}. Using offline matcher")
            return match_offline(sanitized)

    def match_offline(self, text: str) -> ClassificationResult:
        """Classify without calling the provider ("manual mode")."""
        return match_offline(text)


def get_classifier(user_id: Optional[str] = None) -> ExerciseClassifier:
    """Build a classifier from settings.

    Without an API key for the configured provider the classifier has no
    capability and always uses the offline matcher.
    """
    capability: Optional[ClassificationCapability] = None
    if settings.detection_api_key:
        try:
            capability = create_capability(
                settings.EXERCISE_DETECTION_PROVIDER,
                model=settings.EXERCISE_DETECTION_MODEL,
                max_attempts=settings.EXERCISE_DETECTION_MAX_ATTEMPTS,
                user_id=user_id,
            )
        except ValueError as e:
            logger.warning(f"Could not create classification provider: {e}")

    return ExerciseClassifier(
        capability=capability,
        timeout_seconds=settings.EXERCISE_DETECTION_TIMEOUT,
    )


async def detect_exercise(text: str, user_id: Optional[str] = None) -> ClassificationResult:
    """Shortcut for get_classifier(user_id).detect(text)."""
    return await get_classifier(user_id).detect(text)
