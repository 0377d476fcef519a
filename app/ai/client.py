import httpx
from openai import AsyncOpenAI, APIError, RateLimitError, APIConnectionError

from app.config import Settings
from app.errors import AIConfigurationError, AIUpstreamError
from app.logging_config import get_logger

logger = get_logger(__name__)

OPENAI_ERRORS = (APIError, RateLimitError, APIConnectionError)

API_KEY_ENV_NAME = "GOOGLE_AI_API_KEY"
API_KEY_HELP_URL = "https://makersuite.google.com/app/apikey"
MIN_API_KEY_LENGTH = 20
PLACEHOLDER_MARKERS = ("your_", "example", "placeholder")


def validate_api_key(api_key: str | None) -> str:
    """
    Проверить ключ API до любого сетевого запроса.

    Returns:
        Ключ без пробелов по краям

    Raises:
        AIConfigurationError: ключ не задан, слишком короткий или похож на заглушку
    """
    if not api_key or not api_key.strip():
        raise AIConfigurationError(
            "Google AI API key is not configured. "
            f"Please add {API_KEY_ENV_NAME} to your .env file in the project root and restart the server."
        )

    if len(api_key.strip()) < MIN_API_KEY_LENGTH:
        raise AIConfigurationError(
            "Google AI API key appears to be invalid. "
            f"Please check that your {API_KEY_ENV_NAME} in .env is correct and restart the server."
        )

    if any(marker in api_key for marker in PLACEHOLDER_MARKERS):
        raise AIConfigurationError(
            "Google AI API key appears to be a placeholder. "
            f"Please replace it with your actual API key from {API_KEY_HELP_URL}"
        )

    return api_key.strip()


class GenerativeModel:
    """Модель с фиксированными параметрами генерации: один вызов на один промпт."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        temperature: float,
        max_tokens: int | None = None
    ) -> None:
        self._client = client
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(self, prompt: str) -> str:
        """Вернуть сырой текст ответа модели (пустая строка, если ответа нет)."""
        params = {
            "model": self.model_name,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }
        if self.max_tokens:
            params["max_tokens"] = self.max_tokens

        try:
            response = await self._client.chat.completions.create(**params)
        except OPENAI_ERRORS as e:
            logger.error(f"Generative API request failed ({self.model_name}): {e}")
            raise AIUpstreamError(f"AI service request failed: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


class GenerativeClient:
    """
    Клиент генеративной модели (OpenAI-совместимый API, по умолчанию Gemini).

    SDK-клиент создаётся лениво и только после проверки ключа.
    """

    def __init__(
        self,
        settings: Settings,
        openai_client: AsyncOpenAI | None = None,
        http_client: httpx.AsyncClient | None = None
    ) -> None:
        self.settings = settings
        self._client = openai_client
        self._http_client = http_client

    def _get_client(self) -> AsyncOpenAI:
        api_key = validate_api_key(self.settings.google_ai_api_key)
        if self._client is None:
            # Один запрос на вызов: встроенные повторы SDK отключены.
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=self.settings.ai_base_url,
                max_retries=0,
                http_client=self._http_client
            )
            logger.debug(f"Created generative API client for {self.settings.ai_base_url}")
        return self._client

    def model(self, temperature: float, max_tokens: int | None = None) -> GenerativeModel:
        return GenerativeModel(
            client=self._get_client(),
            model_name=self.settings.ai_model,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
