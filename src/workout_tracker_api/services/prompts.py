"""Prompt policy for exercise classification.

Every extraction rule the provider is asked to follow lives here: category
vocabulary, naming standardization, unit conversion factors and calorie MET
coefficients. Bump PROMPT_VERSION whenever the rendered instructions change.
"""
import json
from typing import Dict, Tuple

from workout_tracker_api.models import ExerciseCategory, PERCEIVED_EFFORTS

PROMPT_VERSION = "2024-06-exercise-v3"

KG_TO_LB = 2.2
KM_TO_MILES = 0.621371
DEFAULT_BODY_WEIGHT_KG = 70
DEFAULT_BODY_WEIGHT_LB = 154

MET_VALUES: Dict[str, float] = {
    "walking": 3.5,
    "jogging": 7,
    "running": 10,
    "cycling": 8,
    "swimming": 8,
}

CATEGORY_DESCRIPTIONS: Dict[ExerciseCategory, str] = {
    ExerciseCategory.CHEST: "chest, pectorals, bench press, push-ups, dips, flies",
    ExerciseCategory.BACK: "back, lats, rhomboids, pull-ups, rows, deadlifts, lat pulldowns",
    ExerciseCategory.LEGS: "legs, quadriceps, hamstrings, glutes, squats, lunges, leg press, calf raises",
    ExerciseCategory.ARMS: "arms, biceps, triceps, forearms, curls, extensions, hammer curls",
    ExerciseCategory.SHOULDERS: "shoulders, deltoids, overhead press, lateral raises, shrugs",
    ExerciseCategory.CORE: "core, abs, obliques, planks, crunches, leg raises, russian twists",
    ExerciseCategory.CARDIO: "cardio, running, cycling, treadmill, elliptical, rowing, walking",
    ExerciseCategory.FULLBODY: "full body, compound movements, burpees, mountain climbers, thrusters",
    ExerciseCategory.OTHER: "other exercises not clearly fitting other categories",
}

# Shorthand the provider should expand to a standard name
NAME_STANDARDIZATION: Tuple[Tuple[str, str], ...] = (
    ('"bench" or "bp"', "Bench Press"),
    ('"squat"', "Back Squat"),
    ('"dead" or "deadlift"', "Deadlift"),
    ('"pullup" or "pull up"', "Pull-up"),
    ('"pushup" or "push up"', "Push-up"),
)

# ClassificationResult fields the provider fills in; muscleGroup is derived locally
REQUESTED_FIELDS: Dict[str, object] = {
    "exerciseName": "standardized exercise name",
    "category": "CATEGORY_FROM_LIST",
    "confidence": 0.95,
    "suggestions": ["alternative name 1", "alternative name 2"],
    "sets": None,
    "reps": None,
    "weight": None,
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

PARSING_EXAMPLES: Tuple[Tuple[str, str], ...] = (
    (
        "bench press 3x8 @ 185 lbs",
        "Bench Press, 3 sets, 8 reps, 185 lbs weight",
    ),
    (
        "running 40 minutes 10 laps 1 mile heart rate 158 bpm effort easy lap time 7 min",
        "Running, 40min duration, 10 laps, 1 mile distance, 158 bpm heart rate, easy effort, 7min lap time",
    ),
    (
        "30 minute bike ride moderate intensity",
        "Stationary Bike, 30min duration, moderate effort",
    ),
    (
        "treadmill 5k in 25 minutes",
        "Treadmill Run, 25min duration, 3.1 miles distance",
    ),
)


def _schema_block() -> str:
    return json.dumps(REQUESTED_FIELDS, indent=2)


def _category_block() -> str:
    return "\n".join(f"{cat.value}: {desc}" for cat, desc in CATEGORY_DESCRIPTIONS.items())


def _standardization_block() -> str:
    return "\n".join(f"  * {alias} → \"{name}\"" for alias, name in NAME_STANDARDIZATION)


def _met_block() -> str:
    return ", ".join(f"{activity} = {met:g}" for activity, met in MET_VALUES.items())


def _examples_block() -> str:
    return "\n".join(f'- "{text}"\n  → {summary}' for text, summary in PARSING_EXAMPLES)


def build_classification_prompt(description: str) -> str:
    """Render the classification instructions for a sanitized description."""
    valid_categories = ", ".join(cat.value for cat in ExerciseCategory)
    efforts = ", ".join(f'"{effort}"' for effort in PERCEIVED_EFFORTS)

    return f"""You are an exercise classification and parsing expert. Analyze the following exercise description and extract the exercise name, category, and workout details. Return ONLY a JSON object with the exact format:

{_schema_block()}

Instructions:
- Extract standardized exercise name (e.g., "Bench Press", "Back Squat", "Barbell Curl", "Treadmill Run", "Outdoor Running", "Stationary Bike")
- Use proper capitalization and standardized naming (e.g., "Dumbbell Bench Press" not "db bench press")
- Classify into the correct muscle group category

STRENGTH TRAINING:
- If sets/reps/weight are mentioned, extract them as numbers
- Common formats: "3x10", "3 sets of 10", "4x8 @ 185", "225 lbs 5x5", "80kg 3x5"
- Weight conversion: ALWAYS convert kg to pounds (1kg = {KG_TO_LB:g}lbs)
  * "60kg 3x8" = {60 * KG_TO_LB:g} lbs
  * If both kg and lbs mentioned, prioritize the kg value and convert

CARDIO EXERCISES:
- If duration is mentioned (seconds, minutes), convert to seconds and set duration field
- Extract distance if mentioned (miles, km, meters) - convert to miles (1 km = {KM_TO_MILES} miles)
- Extract laps if mentioned as a number
- Extract heart rate if mentioned (e.g., "158 bpm", "heart rate 140")
- Extract perceived effort, one of: {efforts}
- Extract lap time if mentioned (e.g., "7 min lap", "8:30 per mile") - convert to seconds
- Calculate estimated calories for cardio:
  * Calories = MET_value × body_weight_kg × duration_hours
  * Use {DEFAULT_BODY_WEIGHT_KG}kg ({DEFAULT_BODY_WEIGHT_LB} lbs) as default body weight
  * MET values: {_met_block()}
  * For pace-based estimation: slower pace = lower MET, faster = higher MET
- Calculate pace if distance and duration are both available (e.g., "7:30/mile")

PARSING EXAMPLES:
{_examples_block()}

Time formats: "30 seconds", "1 minute", "7 min", "25 minutes"
- Duration should be in seconds (convert minutes: 1 minute = 60 seconds)
- For time-based exercises, often reps will be 1 and duration will be the time
- If no sets/reps/weight/duration mentioned, set them to null
- Be confident about exercise names and muscle groups, less confident about partial info
- Standardize common exercise variations:
{_standardization_block()}

Valid categories: {valid_categories}

Category descriptions (muscle groups):
{_category_block()}

Exercise description: "{description}"

Return ONLY the JSON object, no other text."""
