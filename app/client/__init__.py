from .api import FitnessCoachAPIError, FitnessCoachClient
from .narration import diet_narration_text, workout_narration_text
from .storage import STORAGE_KEY, PlanStorage

__all__ = [
    "FitnessCoachAPIError",
    "FitnessCoachClient",
    "PlanStorage",
    "STORAGE_KEY",
    "diet_narration_text",
    "workout_narration_text",
]
