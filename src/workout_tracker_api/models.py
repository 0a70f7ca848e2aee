"""Data models for exercise detection."""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExerciseCategory(str, Enum):
    """Closed set of muscle-group / activity buckets."""

    CHEST = "CHEST"
    BACK = "BACK"
    LEGS = "LEGS"
    ARMS = "ARMS"
    SHOULDERS = "SHOULDERS"
    CORE = "CORE"
    CARDIO = "CARDIO"
    FULLBODY = "FULLBODY"
    OTHER = "OTHER"

    @classmethod
    def coerce(cls, value: Any) -> "ExerciseCategory":
        """Map an arbitrary value onto the enum, defaulting to OTHER."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
        return cls.OTHER


MUSCLE_GROUP_NAMES: Dict[ExerciseCategory, str] = {
    ExerciseCategory.CHEST: "Chest",
    ExerciseCategory.BACK: "Back",
    ExerciseCategory.LEGS: "Legs",
    ExerciseCategory.ARMS: "Arms",
    ExerciseCategory.SHOULDERS: "Shoulders",
    ExerciseCategory.CORE: "Core",
    ExerciseCategory.CARDIO: "Cardio",
    ExerciseCategory.FULLBODY: "Full Body",
    ExerciseCategory.OTHER: "Other",
}

PERCEIVED_EFFORTS = ("very easy", "easy", "moderate", "hard", "very hard")
DISTANCE_UNITS = ("miles", "km")


def muscle_group_for(category: ExerciseCategory) -> str:
    """Human-readable muscle group label for a category."""
    return MUSCLE_GROUP_NAMES.get(category, "Other")


class ClassificationResult(BaseModel):
    """Structured exercise record produced by the detection pipeline.

    Optional numeric fields are ``None`` when not detected; zero is never used
    as a stand-in for "unknown". Weight is in pounds, distance in miles,
    durations and lap times in seconds.
    """

    model_config = ConfigDict(frozen=True)

    exerciseName: str = Field(..., min_length=1, max_length=200)
    category: ExerciseCategory
    muscleGroup: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    suggestions: List[str] = Field(default_factory=list, max_length=5)

    sets: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    duration: Optional[int] = None

    # Cardio metrics
    distance: Optional[float] = None
    distanceUnit: Optional[str] = None
    laps: Optional[int] = None
    heartRate: Optional[int] = None
    heartRateMax: Optional[int] = None
    perceivedEffort: Optional[str] = None
    lapTime: Optional[int] = None
    estimatedCalories: Optional[int] = None
    pace: Optional[str] = Field(default=None, max_length=20)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with absent optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# HTTP request/response models
# ---------------------------------------------------------------------------


class DetectExerciseRequest(BaseModel):
    """Request model for POST /api/workouts/detect-exercise"""
    exerciseDescription: str = Field(..., min_length=1, max_length=200)


class DetectExerciseResponse(BaseModel):
    success: bool = True
    data: ClassificationResult


class CategoryOption(BaseModel):
    value: ExerciseCategory
    label: str


class CategoriesResponse(BaseModel):
    success: bool = True
    data: List[CategoryOption]
