from typing import Any

from fastapi import APIRouter, Body, Depends

from app.dependencies import get_plan_service
from app.errors import DEFAULT_GENERATE_PLAN_ERROR, AppError
from app.logging_config import get_logger
from .schemas import ErrorResponse, GeneratePlanResponse, parse_user_details
from .service import PlanService

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["plans"])


@router.post(
    "/generate-plan",
    response_model=GeneratePlanResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_plan(
    body: Any = Body(...),
    plan_service: PlanService = Depends(get_plan_service),
):
    """
    Сгенерировать план тренировок и питания.
    Тело: {"userDetails": {...}} или сами данные пользователя.
    """
    user = parse_user_details(body)

    try:
        result = await plan_service.generate_fitness_plan(user)
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"Error generating fitness plan: {e}")
        raise AppError(str(e) or DEFAULT_GENERATE_PLAN_ERROR) from e

    return GeneratePlanResponse(
        workout_plan=result.workout_plan,
        diet_plan=result.diet_plan,
        motivation_quote=result.motivation_quote.value,
    )
