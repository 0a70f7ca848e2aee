"""Tests for the offline exercise matcher."""
import pytest

from workout_tracker_api.errors import InvalidInputError
from workout_tracker_api.models import ExerciseCategory
from workout_tracker_api.services.offline_matcher import COMMON_EXERCISES, match_offline


class TestMatchOffline:

    def test_bench_press(self):
        result = match_offline("bench press 3x8")

        assert result.category == ExerciseCategory.CHEST
        assert result.confidence == 0.8
        assert result.exerciseName == "Bench Press"
        assert result.muscleGroup == "Chest"
        assert result.suggestions == []

    def test_never_extracts_quantities(self):
        result = match_offline("squat 5x5 @ 100kg")

        assert result.category == ExerciseCategory.LEGS
        assert result.sets is None
        assert result.reps is None
        assert result.weight is None
        assert result.duration is None

    def test_case_insensitive(self):
        result = match_offline("Overhead PRESS heavy")
        assert result.exerciseName == "Overhead Press"
        assert result.category == ExerciseCategory.SHOULDERS

    def test_first_table_entry_wins(self):
        # "squat" is listed before "leg press"
        result = match_offline("leg press then squat")
        assert result.exerciseName == "Squat"
        assert result.category == ExerciseCategory.LEGS

    def test_deadlift_before_running(self):
        result = match_offline("running warmup and deadlift")
        assert result.exerciseName == "Deadlift"
        assert result.category == ExerciseCategory.BACK

    def test_unknown_exercise_defaults_to_other(self):
        result = match_offline("xyzzy nonsense quux")

        assert result.category == ExerciseCategory.OTHER
        assert result.confidence == 0.1
        assert result.muscleGroup == "Other"
        assert result.exerciseName == "xyzzy nonsense quux"

    def test_unknown_exercise_name_is_sanitized(self):
        result = match_offline('  <b>kettlebell   swing</b> ')
        assert result.exerciseName == "bkettlebell swing/b"

    def test_deterministic(self):
        assert match_offline("plank 60 seconds") == match_offline("plank 60 seconds")

    def test_empty_input_raises(self):
        with pytest.raises(InvalidInputError):
            match_offline("   ")

    @pytest.mark.parametrize("phrase,category", COMMON_EXERCISES)
    def test_every_table_entry_matches_itself(self, phrase, category):
        assert match_offline(phrase).category == category
