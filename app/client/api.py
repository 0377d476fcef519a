from datetime import datetime, timezone
from typing import Literal

import httpx

from app.ai.schemas import UserDetails
from app.logging_config import get_logger
from app.plans.schemas import FitnessPlan, GeneratePlanResponse
from app.speech.schemas import TTSResponse
from .storage import PlanStorage

logger = get_logger(__name__)

ImageKind = Literal["exercise", "food"]


class FitnessCoachAPIError(Exception):
    """Ошибка API; message содержит текст ошибки сервера как есть."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class FitnessCoachClient:
    """
    Клиент API фитнес-коуча.

    Хранит последний сгенерированный план в PlanStorage и обновляет его
    при регенерации, очистке и добавлении картинок.
    """

    def __init__(
        self,
        base_url: str,
        storage: PlanStorage,
        http_client: httpx.AsyncClient | None = None
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self._client = http_client
        self.plan: FitnessPlan | None = storage.load()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FitnessCoachClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _post(self, path: str, payload: dict, default_error: str) -> httpx.Response:
        client = await self._get_client()
        response = await client.post(path, json=payload)
        if response.is_success:
            return response

        try:
            message = response.json().get("error") or default_error
        except (ValueError, AttributeError):
            message = default_error
        raise FitnessCoachAPIError(message, response.status_code)

    def load_saved_plan(self) -> FitnessPlan | None:
        """Восстановить план из хранилища."""
        self.plan = self.storage.load()
        return self.plan

    async def generate_plan(self, user_details: UserDetails) -> FitnessPlan:
        """Сгенерировать новый план и заменить им сохранённый."""
        response = await self._post(
            "/api/generate-plan",
            {"userDetails": user_details.model_dump(mode="json", by_alias=True, exclude_none=True)},
            "Failed to generate plan",
        )
        data = GeneratePlanResponse.model_validate(response.json())

        plan = FitnessPlan(
            user_details=user_details,
            workout_plan=data.workout_plan,
            diet_plan=data.diet_plan,
            generated_at=datetime.now(timezone.utc),
            motivation_quote=data.motivation_quote,
        )
        self.storage.save(plan)
        self.plan = plan
        logger.info(f"Fitness plan generated for {user_details.name}")
        return plan

    async def regenerate(self) -> FitnessPlan:
        """Сгенерировать план заново с теми же данными пользователя."""
        if self.plan is None:
            raise FitnessCoachAPIError("No saved plan to regenerate")
        return await self.generate_plan(self.plan.user_details)

    def clear_plan(self) -> None:
        self.plan = None
        self.storage.clear()

    def _existing_image_url(self, item_name: str, kind: ImageKind) -> str | None:
        if kind == "exercise":
            items = (
                exercise
                for routine in self.plan.workout_plan.daily_routines
                for exercise in routine.exercises
            )
        else:
            items = (
                item
                for daily in self.plan.diet_plan.meals
                for _, meal in daily.meal_plans()
                for item in meal.items
            )
        for item in items:
            if item.name == item_name and item.image_url:
                return item.image_url
        return None

    def _attach_image_url(self, item_name: str, kind: ImageKind, image_url: str) -> int:
        """Проставить image_url всем элементам плана с таким именем."""
        updated = 0
        if kind == "exercise":
            for routine in self.plan.workout_plan.daily_routines:
                for exercise in routine.exercises:
                    if exercise.name == item_name:
                        exercise.image_url = image_url
                        updated += 1
        else:
            for daily in self.plan.diet_plan.meals:
                for _, meal in daily.meal_plans():
                    for item in meal.items:
                        if item.name == item_name:
                            item.image_url = image_url
                            updated += 1
        return updated

    async def attach_image(self, item_name: str, kind: ImageKind) -> str:
        """Запросить картинку для упражнения или блюда и сохранить её URL в плане."""
        if self.plan is None:
            raise FitnessCoachAPIError("No saved plan to attach an image to")

        existing_url = self._existing_image_url(item_name, kind)
        if existing_url:
            return existing_url

        response = await self._post(
            "/api/generate-image",
            {"prompt": item_name, "type": kind},
            "Failed to generate image",
        )
        image_url = response.json().get("imageUrl")
        if not image_url:
            raise FitnessCoachAPIError("No image URL returned from API", response.status_code)

        updated = self._attach_image_url(item_name, kind, image_url)
        if updated:
            self.storage.save(self.plan)
        else:
            logger.warning(f"No {kind} named {item_name!r} in the current plan")
        return image_url

    async def narrate(self, text: str) -> TTSResponse:
        """
        Получить озвучку текста.

        Ошибки сервера не пробрасываются: при любом сбое возвращается
        useBrowserTTS=True, и текст озвучивается локально.
        """
        client = await self._get_client()
        try:
            response = await client.post("/api/text-to-speech", json={"text": text})
            result = TTSResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Narration request failed, using browser speech: {e}")
            return TTSResponse(use_browser_tts=True, text=text)

        if result.use_browser_tts:
            # Сервер кладёт в text сообщение об ошибке; озвучивать нужно исходный текст.
            return TTSResponse(use_browser_tts=True, text=text)
        return result

    async def export_plan(self) -> bytes:
        """Скачать текущий план в виде xlsx."""
        if self.plan is None:
            raise FitnessCoachAPIError("No saved plan to export")
        response = await self._post(
            "/api/export-plan",
            self.plan.model_dump(mode="json", by_alias=True, exclude_none=True),
            "Failed to export plan",
        )
        return response.content
