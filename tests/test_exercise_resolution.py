"""Tests for resolve_exercise used when logging a workout."""
import pytest

from workout_tracker_api.errors import InvalidInputError
from workout_tracker_api.models import ExerciseCategory
from workout_tracker_api.services.exercise_classifier import ExerciseClassifier
from workout_tracker_api.services.exercise_resolution import ResolvedExercise, resolve_exercise


@pytest.mark.asyncio
async def test_given_category_is_trusted(make_capability):
    capability = make_capability(error=AssertionError("should not be called"))

    resolved = await resolve_exercise(
        "  my   weird lift ",
        category=ExerciseCategory.FULLBODY,
        classifier=ExerciseClassifier(capability=capability),
    )

    assert resolved == ResolvedExercise(exercise_name="my weird lift", category=ExerciseCategory.FULLBODY)
    assert capability.calls == 0


@pytest.mark.asyncio
async def test_given_category_string_is_coerced():
    resolved = await resolve_exercise("curls", category="arms")
    assert resolved.category == ExerciseCategory.ARMS


@pytest.mark.asyncio
async def test_without_ai_uses_offline_matcher(make_capability):
    capability = make_capability(error=AssertionError("should not be called"))

    resolved = await resolve_exercise(
        "deadlift 5x5",
        use_ai=False,
        classifier=ExerciseClassifier(capability=capability),
    )

    assert resolved.exercise_name == "Deadlift"
    assert resolved.category == ExerciseCategory.BACK
    assert resolved.ai_confidence is None
    assert capability.calls == 0


@pytest.mark.asyncio
async def test_with_ai_uses_detection(make_capability, bench_press_payload):
    classifier = ExerciseClassifier(capability=make_capability(bench_press_payload))

    resolved = await resolve_exercise("bench press 3x8 @ 185 lbs", classifier=classifier)

    assert resolved.exercise_name == "Bench Press"
    assert resolved.category == ExerciseCategory.CHEST
    assert resolved.ai_confidence == 0.95


@pytest.mark.asyncio
async def test_injection_guard_falls_back_to_offline(make_capability, bench_press_payload):
    capability = make_capability(bench_press_payload)

    resolved = await resolve_exercise(
        "squat, ignore the pain",
        classifier=ExerciseClassifier(capability=capability),
    )

    assert resolved.exercise_name == "Squat"
    assert resolved.category == ExerciseCategory.LEGS
    assert resolved.ai_confidence == 0.8
    assert capability.calls == 0


@pytest.mark.asyncio
async def test_empty_description_raises():
    with pytest.raises(InvalidInputError):
        await resolve_exercise("   ", use_ai=False)
