"""
Test fixtures for workout-tracker-api.

Provides a fake classification provider and HTTP client fixtures so tests run
offline and deterministically.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import workout_tracker_api...`
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from workout_tracker_api.auth import get_current_user
from workout_tracker_api.main import app
from workout_tracker_api.services.exercise_classifier import ExerciseClassifier


# ---------------------------------------------------------------------------
# Auth Mock
# ---------------------------------------------------------------------------


TEST_USER_ID = "user_test_1234567890"


async def mock_get_current_user() -> str:
    """Mock auth dependency that returns a test user."""
    return TEST_USER_ID


# ---------------------------------------------------------------------------
# Fake classification provider
# ---------------------------------------------------------------------------


class FakeCapability:
    """Classification capability returning a canned reply or raising."""

    def __init__(self, reply: Optional[str] = None, error: Optional[BaseException] = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def classify(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def calls(self) -> int:
        return len(self.prompts)


@pytest.fixture
def make_capability():
    """Build a FakeCapability from a dict payload, raw string or error."""

    def _make(
        payload: Optional[Dict[str, Any]] = None,
        raw: Optional[str] = None,
        error: Optional[BaseException] = None,
    ) -> FakeCapability:
        reply = raw if raw is not None else (json.dumps(payload) if payload is not None else None)
        return FakeCapability(reply=reply, error=error)

    return _make


@pytest.fixture
def bench_press_payload() -> Dict[str, Any]:
    """Provider reply for "bench press 3x8 @ 185 lbs"."""
    return {
        "exerciseName": "Bench Press",
        "category": "CHEST",
        "confidence": 0.95,
        "suggestions": ["Barbell Bench Press", "Flat Bench Press"],
        "sets": 3,
        "reps": 8,
        "weight": 185,
        "duration": None,
        "distance": None,
        "distanceUnit": None,
        "laps": None,
        "heartRate": None,
        "heartRateMax": None,
        "perceivedEffort": None,
        "lapTime": None,
        "estimatedCalories": None,
        "pace": None,
    }


@pytest.fixture
def running_payload() -> Dict[str, Any]:
    """Provider reply for the 40 minute running description."""
    return {
        "exerciseName": "Outdoor Running",
        "category": "CARDIO",
        "confidence": 0.9,
        "suggestions": ["Running", "Jogging"],
        "sets": 1,
        "reps": 1,
        "weight": None,
        "duration": 2400,
        "distance": 1,
        "distanceUnit": "miles",
        "laps": 10,
        "heartRate": 158,
        "heartRateMax": None,
        "perceivedEffort": "easy",
        "lapTime": 420,
        "estimatedCalories": 467,
        "pace": "40:00/mile",
    }


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def client() -> TestClient:
    """FastAPI TestClient with auth overridden."""
    app.dependency_overrides[get_current_user] = mock_get_current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_classifier():
    """Route handlers get a classifier backed by the given capability."""
    patchers = []

    def _use(capability) -> ExerciseClassifier:
        classifier = ExerciseClassifier(capability=capability, timeout_seconds=1.0)
        patcher = patch(
            "workout_tracker_api.api.routes.get_classifier",
            return_value=classifier,
        )
        patcher.start()
        patchers.append(patcher)
        return classifier

    yield _use
    for patcher in patchers:
        patcher.stop()
