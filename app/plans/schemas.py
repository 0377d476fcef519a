from datetime import datetime

from pydantic import ValidationError

from app.ai.schemas import CamelModel, DietPlan, UserDetails, WorkoutPlan
from app.errors import (
    USER_DETAILS_INVALID,
    USER_DETAILS_REQUIRED,
    UserDetailsValidationError,
    format_validation_errors,
)
from app.utils import extract_user_details_payload, missing_required_fields


class GeneratePlanResponse(CamelModel):
    workout_plan: WorkoutPlan
    diet_plan: DietPlan
    motivation_quote: str


class FitnessPlan(CamelModel):
    user_details: UserDetails
    workout_plan: WorkoutPlan
    diet_plan: DietPlan
    generated_at: datetime
    motivation_quote: str


class ValidationErrorDetail(CamelModel):
    field: str
    message: str


class ErrorResponse(CamelModel):
    error: str
    details: list[ValidationErrorDetail] | None = None


def parse_user_details(body: object) -> UserDetails:
    """
    Единственная точка валидации входящих данных пользователя.

    Raises:
        UserDetailsValidationError: со списком всех незаполненных и некорректных полей
    """
    payload = extract_user_details_payload(body)

    try:
        return UserDetails.model_validate(payload)
    except ValidationError as e:
        details = format_validation_errors(e.errors())
        message = USER_DETAILS_REQUIRED if missing_required_fields(payload) else USER_DETAILS_INVALID
        raise UserDetailsValidationError(message, details) from e
