"""API routes for exercise detection."""
import logging

from fastapi import APIRouter, Depends, HTTPException

from workout_tracker_api.auth import get_current_user
from workout_tracker_api.errors import InvalidExerciseDescriptionError, InvalidInputError
from workout_tracker_api.models import (
    CategoriesResponse,
    CategoryOption,
    DetectExerciseRequest,
    DetectExerciseResponse,
    ExerciseCategory,
)
from workout_tracker_api.services.exercise_classifier import get_classifier
from workout_tracker_api.services.offline_matcher import match_offline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workouts")


def _category_label(category: ExerciseCategory) -> str:
    return category.value[0] + category.value[1:].lower().replace("_", " ")


@router.post(
    "/detect-exercise",
    response_model=DetectExerciseResponse,
    response_model_exclude_none=True,
)
async def detect_exercise(
    payload: DetectExerciseRequest,
    user_id: str = Depends(get_current_user),
):
    """
    Classify a free-text exercise description.

    Falls back to the offline matcher when the language model is unavailable,
    so a result is returned unless the description itself is unusable.
    """
    classifier = get_classifier(user_id=user_id)
    try:
        detection = await classifier.detect(payload.exerciseDescription)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=f"Invalid exercise description: {e}")
    except InvalidExerciseDescriptionError:
        raise HTTPException(
            status_code=422,
            detail="Exercise description was rejected. Please rephrase it.",
        )
    except Exception as e:
        logger.exception(f"Exercise detection failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to detect exercise")

    return DetectExerciseResponse(success=True, data=detection)


@router.post(
    "/detect-exercise/offline",
    response_model=DetectExerciseResponse,
    response_model_exclude_none=True,
)
async def detect_exercise_offline(
    payload: DetectExerciseRequest,
    user_id: str = Depends(get_current_user),
):
    """Classify using only the built-in exercise table (manual mode)."""
    try:
        detection = match_offline(payload.exerciseDescription)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=f"Invalid exercise description: {e}")

    return DetectExerciseResponse(success=True, data=detection)


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories():
    """Available exercise categories with display labels."""
    return CategoriesResponse(
        success=True,
        data=[
            CategoryOption(value=category, label=_category_label(category))
            for category in ExerciseCategory
        ],
    )
