import io
from datetime import datetime, timezone

import pytest
from openpyxl import load_workbook

from app.export.service import XLSX_MEDIA_TYPE, export_filename, export_plan_xlsx
from app.plans.schemas import FitnessPlan
from tests.conftest import ANA, DIET_PLAN, QUOTE, WORKOUT_PLAN


@pytest.fixture
def plan_payload() -> dict:
    return {
        "userDetails": {**ANA, "medicalHistory": "Asthma"},
        "workoutPlan": WORKOUT_PLAN,
        "dietPlan": DIET_PLAN,
        "generatedAt": "2026-10-19T08:30:00+00:00",
        "motivationQuote": QUOTE,
    }


def test_workbook_contents(plan_payload):
    plan = FitnessPlan.model_validate(plan_payload)

    wb = load_workbook(io.BytesIO(export_plan_xlsx(plan)))

    assert wb.sheetnames == ["Summary", "Workout", "Diet"]

    summary = {row[0]: row[1] for row in wb["Summary"].iter_rows(min_row=2, values_only=True)}
    assert summary["Name"] == "Ana"
    assert summary["Daily calories"] == 1176
    assert summary["Medical history"] == "Asthma"
    assert summary["Motivation"] == QUOTE

    workout_rows = list(wb["Workout"].iter_rows(min_row=2, values_only=True))
    assert workout_rows[0][:5] == ("Day 1", "Push-ups", 3, "10-12", "60 seconds")
    assert ("Day 7", "Rest day") == workout_rows[12][:2]
    assert workout_rows[-1][:2] == ("Tip", "Sleep well")

    diet_rows = list(wb["Diet"].iter_rows(min_row=2, values_only=True))
    assert diet_rows[0] == ("Day 1", "Breakfast", "Oatmeal", "80g", 350, "8:00 AM")
    assert ("Day 1", "Snack 1", "Greek yogurt", "150g", 106, "4:00 PM") in diet_rows


def test_export_filename_is_safe(plan_payload):
    plan_payload["userDetails"]["name"] = "Ana María / Test"
    plan = FitnessPlan.model_validate(plan_payload)

    assert export_filename(plan) == "fitness-plan-Ana-Mar-a-Test.xlsx"


def test_export_endpoint(client, plan_payload):
    response = client.post("/api/export-plan", json=plan_payload)

    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_MEDIA_TYPE
    assert response.headers["content-disposition"] == 'attachment; filename="fitness-plan-Ana.xlsx"'
    wb = load_workbook(io.BytesIO(response.content))
    assert wb["Summary"]["B2"].value == "Ana"


def test_generated_at_is_exported_as_iso(plan_payload):
    plan = FitnessPlan.model_validate(plan_payload)
    assert plan.generated_at == datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)

    wb = load_workbook(io.BytesIO(export_plan_xlsx(plan)))
    summary = {row[0]: row[1] for row in wb["Summary"].iter_rows(min_row=2, values_only=True)}
    assert summary["Generated at"] == "2026-10-19T08:30:00+00:00"


def test_formula_like_text_stays_text(plan_payload):
    plan_payload["userDetails"]["name"] = '=HYPERLINK("http://evil.test","x")'
    plan_payload["userDetails"]["medicalHistory"] = "=1+1"
    plan_payload["motivationQuote"] = "=2*3"
    plan_payload["workoutPlan"] = {**WORKOUT_PLAN, "tips": ["=SUM(1,2)"]}
    plan = FitnessPlan.model_validate(plan_payload)

    wb = load_workbook(io.BytesIO(export_plan_xlsx(plan)))

    cells = {row[0].value: row[1] for row in wb["Summary"].iter_rows(min_row=2)}
    for field, text in [
        ("Name", '=HYPERLINK("http://evil.test","x")'),
        ("Medical history", "=1+1"),
        ("Motivation", "=2*3"),
    ]:
        assert cells[field].data_type == "s"
        assert cells[field].value == text

    tip = list(wb["Workout"].iter_rows(min_row=2))[-1][1]
    assert tip.data_type == "s"
    assert tip.value == "=SUM(1,2)"
