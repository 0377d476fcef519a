"""Шаблоны промптов для генерации плана тренировок, питания и мотивационной цитаты."""

from typing import Literal

from .schemas import UserDetails

OtherGenderFormula = Literal["female", "male", "average"]

WORKOUT_SYSTEM_PROMPT = (
    "You are an expert fitness coach. Always respond with valid JSON only, no markdown formatting."
)
DIET_SYSTEM_PROMPT = (
    "You are an expert nutritionist. Always respond with valid JSON only, no markdown formatting."
)

# Множитель калорий по цели; для остальных целей 1.0
GOAL_CALORIE_MULTIPLIERS = {
    "Weight Loss": 0.85,
    "Muscle Gain": 1.15,
}

WORKOUT_JSON_EXAMPLE = """{
  "dailyRoutines": [
    {
      "day": "Day 1",
      "exercises": [
        {
          "name": "Exercise Name",
          "sets": 3,
          "reps": "10-12",
          "rest": "60 seconds",
          "description": "Brief description"
        }
      ],
      "restTime": "Rest day or active recovery",
      "totalDuration": "45 minutes"
    }
  ],
  "tips": ["tip1", "tip2", "tip3"],
  "motivation": "Motivational message"
}"""

DIET_JSON_EXAMPLE = """{
  "meals": [
    {
      "day": "Day 1",
      "breakfast": {
        "items": [
          {
            "name": "Food Item",
            "quantity": "200g",
            "description": "Brief description"
          }
        ],
        "calories": 400,
        "timing": "8:00 AM"
      },
      "lunch": { ... },
      "dinner": { ... },
      "snacks": [
        { "items": [...], "calories": 150, "timing": "10:00 AM" },
        { "items": [...], "calories": 200, "timing": "4:00 PM" }
      ]
    }
  ],
  "dailyCalories": %(daily_calories)d,
  "macros": {
    "protein": 120,
    "carbs": 200,
    "fats": 60
  },
  "tips": ["tip1", "tip2", "tip3"]
}"""

MOTIVATION_QUOTE_PROMPT = (
    "Generate a short, inspiring fitness motivation quote (1-2 sentences). "
    "Make it unique and encouraging. Return only the quote text, no JSON."
)


def _format_number(value: float) -> str:
    return f"{value:g}"


def _male_bmr(user: UserDetails) -> float:
    return 88.362 + (13.397 * user.weight) + (4.799 * user.height) - (5.677 * user.age)


def _female_bmr(user: UserDetails) -> float:
    return 447.593 + (9.247 * user.weight) + (3.098 * user.height) - (4.330 * user.age)


def calculate_bmr(user: UserDetails, other_gender_formula: OtherGenderFormula = "female") -> float:
    """
    Базовый обмен веществ по формуле Харриса-Бенедикта.

    Для gender="Other" отдельной формулы нет, поэтому коэффициенты выбираются
    настройкой: female (по умолчанию), male или среднее двух формул.
    """
    if user.gender == "Male":
        return _male_bmr(user)
    if user.gender == "Female":
        return _female_bmr(user)

    if other_gender_formula == "male":
        return _male_bmr(user)
    if other_gender_formula == "average":
        return (_male_bmr(user) + _female_bmr(user)) / 2
    return _female_bmr(user)


def goal_calorie_multiplier(fitness_goal: str) -> float:
    return GOAL_CALORIE_MULTIPLIERS.get(fitness_goal, 1.0)


def calculate_target_calories(
    user: UserDetails,
    other_gender_formula: OtherGenderFormula = "female"
) -> int:
    """Целевая дневная калорийность с поправкой на цель, округлённая до целого."""
    bmr = calculate_bmr(user, other_gender_formula)
    return round(bmr * goal_calorie_multiplier(user.fitness_goal))


def _profile_lines(user: UserDetails, *fields: str) -> list[str]:
    labels = {
        "name": ("Name", lambda u: u.name),
        "age": ("Age", lambda u: str(u.age)),
        "gender": ("Gender", lambda u: u.gender),
        "height": ("Height", lambda u: f"{_format_number(u.height)} cm"),
        "weight": ("Weight", lambda u: f"{_format_number(u.weight)} kg"),
        "fitness_goal": ("Fitness Goal", lambda u: u.fitness_goal),
        "fitness_level": ("Fitness Level", lambda u: u.fitness_level),
        "workout_location": ("Workout Location", lambda u: u.workout_location),
        "dietary_preferences": ("Dietary Preferences", lambda u: u.dietary_preferences),
    }
    return [f"{labels[field][0]}: {labels[field][1](user)}" for field in fields]


def build_workout_prompt(user: UserDetails) -> str:
    lines = _profile_lines(
        user,
        "name", "age", "gender", "height", "weight",
        "fitness_goal", "fitness_level", "workout_location",
    )
    if user.medical_history:
        lines.append(f"Medical History: {user.medical_history}")
    if user.stress_level:
        lines.append(f"Stress Level: {user.stress_level}")
    profile = "\n".join(lines)

    return f"""You are an expert fitness coach. Generate a personalized 7-day workout plan for the following user:

{profile}

Please generate a comprehensive 7-day workout plan with:
1. Daily exercise routines with specific exercises
2. Sets and reps for each exercise
3. Rest time between sets
4. Total workout duration for each day
5. Fitness tips (3-5 tips)
6. A motivational message

Format the response as JSON with this structure:
{WORKOUT_JSON_EXAMPLE}

Make sure exercises are appropriate for {user.workout_location} and {user.fitness_level} level."""


def build_diet_prompt(
    user: UserDetails,
    other_gender_formula: OtherGenderFormula = "female"
) -> str:
    target_calories = calculate_target_calories(user, other_gender_formula)

    lines = _profile_lines(
        user,
        "name", "age", "gender", "height", "weight",
        "fitness_goal", "dietary_preferences",
    )
    lines.append(f"Target Daily Calories: ~{target_calories} calories")
    if user.medical_history:
        lines.append(f"Medical History: {user.medical_history}")
    profile = "\n".join(lines)
    schema = DIET_JSON_EXAMPLE % {"daily_calories": target_calories}

    return f"""You are an expert nutritionist. Generate a personalized 7-day diet plan for the following user:

{profile}

Please generate a comprehensive 7-day meal plan with:
1. Breakfast, Lunch, Dinner, and 2 Snacks for each day
2. Specific quantities for each food item
3. Calorie count for each meal
4. Meal timing recommendations
5. Daily macro breakdown (protein, carbs, fats in grams)
6. Nutrition tips (3-5 tips)

Format the response as JSON with this structure:
{schema}

Make sure all meals are {user.dietary_preferences} and align with {user.fitness_goal} goal."""


def build_motivation_quote_prompt() -> str:
    return MOTIVATION_QUOTE_PROMPT


def with_system_prompt(system_prompt: str, prompt: str) -> str:
    """Добавляет системную инструкцию перед промптом."""
    return f"{system_prompt}\n\n{prompt}"
