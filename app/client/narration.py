"""Текст для озвучки разделов плана."""

from app.ai.schemas import MealPlan
from app.plans.schemas import FitnessPlan


def _meal_sentence(label: str, meal: MealPlan) -> str:
    items = ", ".join(
        f"{item.quantity} {item.name}".strip() for item in meal.items
    ) or "no items"
    timing = f" at {meal.timing}" if meal.timing else ""
    return f"{label}{timing}: {items}, {meal.calories} calories."


def workout_narration_text(plan: FitnessPlan) -> str:
    workout = plan.workout_plan
    parts = [f"Your 7-day workout plan, {plan.user_details.name}."]

    for routine in workout.daily_routines:
        if routine.exercises:
            exercises = "; ".join(
                f"{exercise.name}, {exercise.sets} sets of {exercise.reps}, rest {exercise.rest}"
                for exercise in routine.exercises
            )
            parts.append(f"{routine.day}, {routine.total_duration}: {exercises}.")
        else:
            parts.append(f"{routine.day}: {routine.rest_time or 'rest'}.")

    if workout.tips:
        parts.append("Tips: " + " ".join(workout.tips))
    if workout.motivation:
        parts.append(workout.motivation)
    return "\n".join(parts)


def diet_narration_text(plan: FitnessPlan) -> str:
    diet = plan.diet_plan
    parts = [
        f"Your 7-day diet plan: about {diet.daily_calories} calories a day, "
        f"{diet.macros.protein} grams of protein, {diet.macros.carbs} grams of carbs "
        f"and {diet.macros.fats} grams of fats."
    ]

    for daily in diet.meals:
        meals = " ".join(_meal_sentence(label, meal) for label, meal in daily.meal_plans())
        parts.append(f"{daily.day}. {meals}".strip())

    if diet.tips:
        parts.append("Tips: " + " ".join(diet.tips))
    return "\n".join(parts)
