"""Deterministic exercise lookup used when the classification provider is unavailable."""
from typing import Optional, Tuple

from workout_tracker_api.models import (
    ClassificationResult,
    ExerciseCategory,
    muscle_group_for,
)
from workout_tracker_api.services.input_sanitizer import clean

OFFLINE_MATCH_CONFIDENCE = 0.8
OFFLINE_DEFAULT_CONFIDENCE = 0.1

# Order matters: the first substring found in the description wins.
COMMON_EXERCISES: Tuple[Tuple[str, ExerciseCategory], ...] = (
    ("bench press", ExerciseCategory.CHEST),
    ("squat", ExerciseCategory.LEGS),
    ("deadlift", ExerciseCategory.BACK),
    ("pull up", ExerciseCategory.BACK),
    ("push up", ExerciseCategory.CHEST),
    ("bicep curl", ExerciseCategory.ARMS),
    ("overhead press", ExerciseCategory.SHOULDERS),
    ("plank", ExerciseCategory.CORE),
    ("running", ExerciseCategory.CARDIO),
    ("leg press", ExerciseCategory.LEGS),
    ("lat pulldown", ExerciseCategory.BACK),
    ("shoulder press", ExerciseCategory.SHOULDERS),
    ("tricep extension", ExerciseCategory.ARMS),
    ("leg curl", ExerciseCategory.LEGS),
    ("calf raise", ExerciseCategory.LEGS),
)


def _title_case(phrase: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in phrase.split(" "))


def _find_match(lowered: str) -> Optional[Tuple[str, ExerciseCategory]]:
    for phrase, category in COMMON_EXERCISES:
        if phrase in lowered:
            return phrase, category
    return None


def match_offline(text: str) -> ClassificationResult:
    """Classify a description by substring lookup against COMMON_EXERCISES.

    Never extracts quantities. Raises InvalidInputError only when the
    description is empty after sanitization.
    """
    sanitized = clean(text)
    match = _find_match(sanitized.lower())

    if match:
        phrase, category = match
        return ClassificationResult(
            exerciseName=_title_case(phrase),
            category=category,
            muscleGroup=muscle_group_for(category),
            confidence=OFFLINE_MATCH_CONFIDENCE,
            suggestions=[],
        )

    return ClassificationResult(
        exerciseName=sanitized,
        category=ExerciseCategory.OTHER,
        muscleGroup=muscle_group_for(ExerciseCategory.OTHER),
        confidence=OFFLINE_DEFAULT_CONFIDENCE,
        suggestions=[],
    )
