"""Pick the exercise name and category for a new workout log entry."""
import logging
from dataclasses import dataclass
from typing import Optional

from workout_tracker_api.errors import InvalidExerciseDescriptionError
from workout_tracker_api.models import ExerciseCategory
from workout_tracker_api.services.exercise_classifier import (
    ExerciseClassifier,
    get_classifier,
)
from workout_tracker_api.services.input_sanitizer import clean
from workout_tracker_api.services.offline_matcher import match_offline


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedExercise:
    exercise_name: str
    category: ExerciseCategory
    ai_confidence: Optional[float] = None


async def resolve_exercise(
    description: str,
    category: Optional[ExerciseCategory] = None,
    use_ai: bool = True,
    classifier: Optional[ExerciseClassifier] = None,
) -> ResolvedExercise:
    """
    Resolve a workout description to an exercise name and category.

    A caller-supplied category is trusted as is. Otherwise the model-backed
    classifier runs when ``use_ai`` is set, and the offline matcher when not.
    A description rejected by the injection guard is still logged through
    the offline matcher so the workout is never blocked.

    Raises:
        InvalidInputError: description is empty after sanitization
    """
    sanitized = clean(description)

    if category is not None:
        return ResolvedExercise(exercise_name=sanitized, category=ExerciseCategory.coerce(category))

    if not use_ai:
        fallback = match_offline(sanitized)
        return ResolvedExercise(exercise_name=fallback.exerciseName, category=fallback.category)

    classifier = classifier or get_classifier()
    try:
        detection = await classifier.detect(sanitized)
    except InvalidExerciseDescriptionError:
        logger.warning("AI detection rejected description, using offline fallback")
        detection = match_offline(sanitized)

    return ResolvedExercise(
        exercise_name=detection.exerciseName,
        category=detection.category,
        ai_confidence=detection.confidence,
    )
