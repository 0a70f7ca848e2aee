"""Validation and normalization of classification provider responses.

The provider's JSON is untrusted. Structural problems (not JSON, not an
object, required fields missing or mistyped) raise ExternalCapabilityError so
the caller can fall back. Individually bad optional fields are clamped,
coerced or dropped without failing the whole response.
"""
import json
import logging
import math
import re
from typing import Any, Dict, List, Optional, Tuple

from workout_tracker_api.errors import ExternalCapabilityError, InvalidInputError
from workout_tracker_api.models import (
    DISTANCE_UNITS,
    PERCEIVED_EFFORTS,
    ClassificationResult,
    ExerciseCategory,
    muscle_group_for,
)
from workout_tracker_api.services.input_sanitizer import clean
from workout_tracker_api.services.units import reconcile_distance, reconcile_weight


logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5
MAX_PACE_LENGTH = 20

# field -> (min, max, integer)
NUMERIC_BOUNDS: Dict[str, Tuple[float, float, bool]] = {
    "sets": (1, 50, True),
    "reps": (1, 1000, True),
    "weight": (0, 2000, False),
    "duration": (1, 3600, True),
    "distance": (0.1, 100, False),
    "laps": (1, 1000, True),
    "heartRate": (60, 220, True),
    "heartRateMax": (60, 220, True),
    "lapTime": (30, 3600, True),
    "estimatedCalories": (1, 2000, True),
}

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def parse_capability_response(raw: Optional[str]) -> Dict[str, Any]:
    """Decode the provider's reply into a JSON object.

    Tolerates markdown fences or prose around the object.
    """
    if not raw or not isinstance(raw, str) or not raw.strip():
        raise ExternalCapabilityError("Empty response from classification provider")

    payload: Any = None
    json_match = _JSON_OBJECT_RE.search(raw)
    if json_match:
        try:
            payload = json.loads(json_match.group(0))
        except json.JSONDecodeError:
            payload = None
    if payload is None:
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ExternalCapabilityError(f"Response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ExternalCapabilityError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    return payload


def _is_real_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return not math.isnan(value)
    except OverflowError:
        # int too large for a float
        return False


def validate_required_fields(payload: Dict[str, Any]) -> None:
    """Require exerciseName, category and a numeric confidence."""
    name = payload.get("exerciseName")
    if not isinstance(name, str) or not name.strip():
        raise ExternalCapabilityError("Response missing exerciseName")

    category = payload.get("category")
    if not isinstance(category, str) or not category.strip():
        raise ExternalCapabilityError("Response missing category")

    if not _is_real_number(payload.get("confidence")):
        raise ExternalCapabilityError("Response confidence is not a number")


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (OverflowError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def clamp_numeric(field_name: str, value: Any) -> Optional[float]:
    """Clamp a bounded field; None when the value is missing, NaN or zero."""
    minimum, maximum, integer = NUMERIC_BOUNDS[field_name]
    number = _to_number(value)
    if not number:
        return None

    clamped = max(minimum, min(maximum, number))
    if integer:
        clamped = int(math.floor(clamped))
    return clamped or None


def _standardize_name(name: str) -> str:
    if name.islower():
        return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))
    return name


def _normalize_suggestions(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return []

    suggestions: List[str] = []
    for item in raw:
        if not isinstance(item, str) or not item:
            continue
        try:
            suggestions.append(clean(item))
        except InvalidInputError:
            continue
        if len(suggestions) == MAX_SUGGESTIONS:
            break
    return suggestions


def _normalize_effort(raw: Any) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    effort = raw.strip().lower()
    return effort if effort in PERCEIVED_EFFORTS else None


def _normalize_distance_unit(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    return raw if raw in DISTANCE_UNITS else "miles"


def _normalize_pace(raw: Any) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    try:
        return clean(raw)[:MAX_PACE_LENGTH].strip() or None
    except InvalidInputError:
        return None


def normalize_response(payload: Dict[str, Any], source_text: str) -> ClassificationResult:
    """Build a ClassificationResult from a provider payload.

    Args:
        payload: Decoded provider JSON
        source_text: Sanitized description the payload was produced from,
            used to catch unconverted metric units

    Raises:
        ExternalCapabilityError: if required fields are missing or the
            exercise name is empty once sanitized
    """
    validate_required_fields(payload)

    try:
        exercise_name = _standardize_name(clean(payload["exerciseName"]))
    except InvalidInputError as e:
        raise ExternalCapabilityError("exerciseName empty after sanitization") from e

    category = ExerciseCategory.coerce(payload["category"])
    if category.value != str(payload["category"]).strip().upper():
        logger.info(f"Unrecognized category {payload['category']!r} coerced to OTHER")

    numbers: Dict[str, Any] = {}
    for field_name in NUMERIC_BOUNDS:
        raw = payload.get(field_name)
        if field_name == "weight":
            raw = reconcile_weight(_to_number(raw), source_text)
        elif field_name == "distance":
            raw = reconcile_distance(_to_number(raw), source_text)
        numbers[field_name] = clamp_numeric(field_name, raw)

    return ClassificationResult(
        exerciseName=exercise_name,
        category=category,
        muscleGroup=muscle_group_for(category),
        confidence=max(0.0, min(1.0, float(payload["confidence"]))),
        suggestions=_normalize_suggestions(payload.get("suggestions")),
        distanceUnit=_normalize_distance_unit(payload.get("distanceUnit")),
        perceivedEffort=_normalize_effort(payload.get("perceivedEffort")),
        pace=_normalize_pace(payload.get("pace")),
        **numbers,
    )
