import io
import re
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side
from app.plans.schemas import FitnessPlan

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _apply_table_styles(ws, header_row: int = 1) -> None:
	header_font = Font(bold=True)
	align_left = Alignment(horizontal="left", vertical="top", wrap_text=True)
	thin_border = Border(
		left=Side(style="thin"),
		right=Side(style="thin"),
		top=Side(style="thin"),
		bottom=Side(style="thin"),
	)
	for cell in ws[header_row]:
		cell.font = header_font
		cell.alignment = align_left
		cell.border = thin_border
	for row in ws.iter_rows(min_row=header_row + 1, max_row=ws.max_row):
		for cell in row:
			cell.alignment = align_left
			cell.border = thin_border


def _append_row(ws, values: list) -> None:
	"""Добавить строку; текст, начинающийся с "=", остаётся текстом, а не формулой."""
	ws.append(values)
	for cell in ws[ws.max_row]:
		if isinstance(cell.value, str) and cell.value.startswith("="):
			cell.data_type = "s"


def _set_widths(ws, widths: dict[str, int]) -> None:
	for column, width in widths.items():
		ws.column_dimensions[column].width = width


def export_filename(plan: FitnessPlan) -> str:
	safe_name = re.sub(r"[^A-Za-z0-9_-]+", "-", plan.user_details.name).strip("-") or "user"
	return f"fitness-plan-{safe_name}.xlsx"


def _fill_summary(ws, plan: FitnessPlan) -> None:
	user = plan.user_details
	diet = plan.diet_plan
	ws.title = "Summary"
	_append_row(ws, ["Field", "Value"])
	rows = [
		("Name", user.name),
		("Age", user.age),
		("Gender", user.gender),
		("Height, cm", user.height),
		("Weight, kg", user.weight),
		("Fitness goal", user.fitness_goal),
		("Fitness level", user.fitness_level),
		("Workout location", user.workout_location),
		("Dietary preferences", user.dietary_preferences),
		("Medical history", user.medical_history or "—"),
		("Stress level", user.stress_level or "—"),
		("Daily calories", diet.daily_calories),
		("Protein, g", diet.macros.protein),
		("Carbs, g", diet.macros.carbs),
		("Fats, g", diet.macros.fats),
		("Motivation", plan.motivation_quote),
		("Generated at", plan.generated_at.isoformat()),
	]
	for row in rows:
		_append_row(ws, list(row))
	_apply_table_styles(ws)
	_set_widths(ws, {"A": 22, "B": 70})


def _fill_workout(ws, plan: FitnessPlan) -> None:
	ws.title = "Workout"
	_append_row(ws, ["Day", "Exercise", "Sets", "Reps", "Rest", "Description", "Duration"])
	for routine in plan.workout_plan.daily_routines:
		if not routine.exercises:
			_append_row(ws, [routine.day, routine.rest_time or "—", "", "", "", "", routine.total_duration])
			continue
		for exercise in routine.exercises:
			_append_row(
				ws,
				[
					routine.day,
					exercise.name,
					exercise.sets,
					exercise.reps,
					exercise.rest,
					exercise.description or "",
					routine.total_duration,
				]
			)
	for tip in plan.workout_plan.tips:
		_append_row(ws, ["Tip", tip])
	_apply_table_styles(ws)
	_set_widths(ws, {"A": 12, "B": 30, "C": 8, "D": 10, "E": 14, "F": 50, "G": 14})


def _fill_diet(ws, plan: FitnessPlan) -> None:
	ws.title = "Diet"
	_append_row(ws, ["Day", "Meal", "Item", "Quantity", "Calories", "Timing"])
	for daily in plan.diet_plan.meals:
		for label, meal in daily.meal_plans():
			for item in meal.items:
				_append_row(ws, [daily.day, label, item.name, item.quantity, meal.calories, meal.timing])
	for tip in plan.diet_plan.tips:
		_append_row(ws, ["Tip", tip])
	_apply_table_styles(ws)
	_set_widths(ws, {"A": 12, "B": 12, "C": 36, "D": 14, "E": 10, "F": 12})


def export_plan_xlsx(plan: FitnessPlan) -> bytes:
	wb = Workbook()
	_fill_summary(wb.active, plan)
	_fill_workout(wb.create_sheet(), plan)
	_fill_diet(wb.create_sheet(), plan)

	buf = io.BytesIO()
	wb.save(buf)
	return buf.getvalue()
