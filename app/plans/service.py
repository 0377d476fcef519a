import asyncio
from dataclasses import dataclass

from app.ai import GenerativeClient, GenerativeModel, parse_json_response
from app.ai.prompts import (
    DIET_SYSTEM_PROMPT,
    WORKOUT_SYSTEM_PROMPT,
    build_diet_prompt,
    build_motivation_quote_prompt,
    build_workout_prompt,
    with_system_prompt,
)
from app.ai.schemas import DietPlan, UserDetails, WorkoutPlan
from app.config import Settings
from app.logging_config import get_logger
from app.results import FallbackResult

logger = get_logger(__name__)

DEFAULT_MOTIVATION_QUOTE = (
    "Every expert was once a beginner. Every pro was once an amateur. Keep going!"
)


@dataclass(frozen=True)
class GeneratedPlan:
    workout_plan: WorkoutPlan
    diet_plan: DietPlan
    motivation_quote: FallbackResult[str]


class PlanService:
    """Генерация плана: тренировки и питание обязательны, цитата нет."""

    def __init__(self, settings: Settings, ai_client: GenerativeClient) -> None:
        self.settings = settings
        self.ai_client = ai_client

    async def generate_workout_plan(self, model: GenerativeModel, user: UserDetails) -> WorkoutPlan:
        prompt = with_system_prompt(WORKOUT_SYSTEM_PROMPT, build_workout_prompt(user))
        response_text = await model.generate(prompt)
        return parse_json_response(response_text, WorkoutPlan, "Failed to parse workout plan")

    async def generate_diet_plan(self, model: GenerativeModel, user: UserDetails) -> DietPlan:
        prompt = with_system_prompt(
            DIET_SYSTEM_PROMPT,
            build_diet_prompt(user, self.settings.bmr_other_gender_formula),
        )
        response_text = await model.generate(prompt)
        return parse_json_response(response_text, DietPlan, "Failed to parse diet plan")

    async def generate_motivation_quote(self, model: GenerativeModel) -> FallbackResult[str]:
        """Цитата или DEFAULT_MOTIVATION_QUOTE; исключения не пробрасываются."""
        try:
            quote_text = (await model.generate(build_motivation_quote_prompt())).strip()
        except Exception as e:
            logger.warning(f"Failed to generate motivation quote, using default: {e}")
            return FallbackResult.fallback(DEFAULT_MOTIVATION_QUOTE, reason=str(e) or type(e).__name__)

        if not quote_text:
            logger.warning("Empty motivation quote from AI, using default")
            return FallbackResult.fallback(DEFAULT_MOTIVATION_QUOTE, reason="empty response")

        return FallbackResult.ok(quote_text)

    async def generate_fitness_plan(self, user: UserDetails) -> GeneratedPlan:
        """
        Сгенерировать план тренировок, питания и мотивационную цитату.

        Три запроса к модели выполняются параллельно. Ошибка тренировок или
        питания отменяет остальные задачи и пробрасывается наверх; ошибка
        цитаты заменяется цитатой по умолчанию.

        Raises:
            AIConfigurationError: ключ API не задан или некорректен (до сетевых запросов)
            AIUpstreamError: ошибка запроса к модели
            AIResponseParseError: ответ модели не разобран
        """
        plan_model = self.ai_client.model(temperature=self.settings.ai_temperature_plan)
        quote_model = self.ai_client.model(
            temperature=self.settings.ai_temperature_quote,
            max_tokens=self.settings.ai_max_tokens_quote,
        )

        logger.info(
            f"Generating fitness plan for {user.name}: "
            f"goal={user.fitness_goal}, level={user.fitness_level}, location={user.workout_location}"
        )

        workout_task = asyncio.create_task(self.generate_workout_plan(plan_model, user))
        diet_task = asyncio.create_task(self.generate_diet_plan(plan_model, user))
        quote_task = asyncio.create_task(self.generate_motivation_quote(quote_model))
        tasks = (workout_task, diet_task, quote_task)

        try:
            workout_plan, diet_plan = await asyncio.gather(workout_task, diet_task)
            motivation_quote = await quote_task
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        if motivation_quote.degraded:
            logger.info(f"Fitness plan for {user.name} uses default quote ({motivation_quote.reason})")

        return GeneratedPlan(
            workout_plan=workout_plan,
            diet_plan=diet_plan,
            motivation_quote=motivation_quote,
        )
