from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Literal, Optional


Gender = Literal["Male", "Female", "Other"]
FitnessGoal = Literal["Weight Loss", "Muscle Gain", "Endurance", "General Fitness", "Flexibility"]
FitnessLevel = Literal["Beginner", "Intermediate", "Advanced"]
WorkoutLocation = Literal["Home", "Gym", "Outdoor"]
DietaryPreference = Literal["Vegetarian", "Non-Vegetarian", "Vegan", "Keto"]
StressLevel = Literal["Low", "Medium", "High"]


class CamelModel(BaseModel):
    """Модель с camelCase-алиасами для JSON и snake_case-атрибутами в Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _to_text(value):
    # Модель иногда отдаёт числа там, где ждём строку ("reps": 12).
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _round_number(value):
    if isinstance(value, float):
        return round(value)
    return value


class UserDetails(CamelModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    age: int = Field(ge=10, le=100)
    gender: Gender
    height: float = Field(ge=100, le=250)
    weight: float = Field(ge=30, le=300)
    fitness_goal: FitnessGoal
    fitness_level: FitnessLevel
    workout_location: WorkoutLocation
    dietary_preferences: DietaryPreference
    medical_history: Optional[str] = None
    stress_level: Optional[StressLevel] = None


class Exercise(CamelModel):
    name: str
    sets: int
    reps: str
    rest: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("reps", "rest", mode="before")
    @classmethod
    def reps_to_text(cls, value):
        return _to_text(value)


class DailyRoutine(CamelModel):
    day: str
    exercises: list[Exercise] = Field(default_factory=list)
    rest_time: str = ""
    total_duration: str = ""

    @field_validator("total_duration", mode="before")
    @classmethod
    def duration_to_text(cls, value):
        return _to_text(value)


class WorkoutPlan(CamelModel):
    daily_routines: list[DailyRoutine] = Field(min_length=1)
    tips: list[str] = Field(default_factory=list)
    motivation: str = ""


class MealItem(CamelModel):
    name: str
    quantity: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_to_text(cls, value):
        return _to_text(value)


class MealPlan(CamelModel):
    items: list[MealItem] = Field(default_factory=list)
    calories: int = 0
    timing: str = ""

    @field_validator("calories", mode="before")
    @classmethod
    def round_calories(cls, value):
        return _round_number(value)


class DailyMealPlan(CamelModel):
    day: str
    breakfast: Optional[MealPlan] = None
    lunch: Optional[MealPlan] = None
    dinner: Optional[MealPlan] = None
    snacks: Optional[list[MealPlan]] = None

    def meal_plans(self) -> list[tuple[str, MealPlan]]:
        """Все приёмы пищи дня по порядку: (название, план)."""
        result = []
        for label, meal in (("Breakfast", self.breakfast), ("Lunch", self.lunch), ("Dinner", self.dinner)):
            if meal is not None:
                result.append((label, meal))
        for i, snack in enumerate(self.snacks or [], 1):
            result.append((f"Snack {i}", snack))
        return result


class Macros(CamelModel):
    protein: int
    carbs: int
    fats: int

    @field_validator("protein", "carbs", "fats", mode="before")
    @classmethod
    def round_grams(cls, value):
        return _round_number(value)


class DietPlan(CamelModel):
    meals: list[DailyMealPlan] = Field(min_length=1)
    tips: list[str] = Field(default_factory=list)
    daily_calories: int
    macros: Macros

    @field_validator("daily_calories", mode="before")
    @classmethod
    def round_calories(cls, value):
        return _round_number(value)
