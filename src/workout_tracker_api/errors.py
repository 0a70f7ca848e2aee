"""Exceptions raised by the exercise detection pipeline."""


class ExerciseDetectionError(RuntimeError):
    """Base class for exercise detection failures."""


class InvalidInputError(ExerciseDetectionError):
    """Raised when an exercise description is empty or not a string."""


class InvalidExerciseDescriptionError(ExerciseDetectionError):
    """Raised when a description is rejected by the prompt-injection guard."""


class ExternalCapabilityError(ExerciseDetectionError):
    """Raised when the classification provider fails or returns unusable data.

    Never leaves the classifier: it always triggers the offline fallback.
    """
