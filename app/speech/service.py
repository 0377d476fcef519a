import base64

import httpx

from app.config import Settings
from app.logging_config import get_logger
from app.results import FallbackResult
from .schemas import TTSResponse

logger = get_logger(__name__)

AUDIO_MIME_TYPE = "audio/mpeg"
NO_TEXT_MESSAGE = "No text provided for text-to-speech conversion"


class SpeechService:
    """
    Озвучка текста через ElevenLabs.

    Любая ошибка (нет ключа, сеть, не-2xx ответ) превращается в сигнал
    useBrowserTTS=True: клиент озвучит текст сам.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self._client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать HTTP клиент."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    self.settings.elevenlabs_timeout,
                    connect=self.settings.elevenlabs_connect_timeout
                )
            )
            logger.debug("Created new HTTP client for ElevenLabs")
        return self._client

    async def close(self) -> None:
        """Закрыть HTTP клиент."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @property
    def api_url(self) -> str:
        return f"{self.settings.elevenlabs_api_url}/{self.settings.elevenlabs_voice_id}"

    async def generate_elevenlabs_audio(self, text: str) -> bytes:
        """
        Запросить аудио у ElevenLabs.

        Raises:
            httpx.HTTPError: сетевая ошибка или не-2xx статус
        """
        client = await self._get_client()
        response = await client.post(
            self.api_url,
            headers={
                "Accept": AUDIO_MIME_TYPE,
                "Content-Type": "application/json",
                "xi-api-key": self.settings.elevenlabs_api_key,
            },
            json={
                "text": text,
                "model_id": self.settings.elevenlabs_model_id,
                "voice_settings": {
                    "stability": self.settings.elevenlabs_stability,
                    "similarity_boost": self.settings.elevenlabs_similarity_boost,
                },
            },
        )
        response.raise_for_status()
        return response.content

    async def convert_to_speech(self, text: str | None) -> FallbackResult[TTSResponse]:
        if not text or not text.strip():
            return FallbackResult.fallback(
                TTSResponse(use_browser_tts=True, text=NO_TEXT_MESSAGE),
                reason="empty text",
            )

        browser_fallback = TTSResponse(use_browser_tts=True, text=text.strip())

        if not self.settings.elevenlabs_api_key:
            return FallbackResult.fallback(browser_fallback, reason="ElevenLabs API key is not configured")

        try:
            audio = await self.generate_elevenlabs_audio(text)
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"ElevenLabs API request failed: {e.response.status_code} {e.response.reason_phrase}"
            )
            return FallbackResult.fallback(browser_fallback, reason=f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"ElevenLabs API error: {e}")
            return FallbackResult.fallback(browser_fallback, reason=str(e) or type(e).__name__)

        if not audio:
            logger.warning("ElevenLabs returned empty audio")
            return FallbackResult.fallback(browser_fallback, reason="empty audio")

        return FallbackResult.ok(
            TTSResponse(
                use_browser_tts=False,
                audio=base64.b64encode(audio).decode("ascii"),
                mime_type=AUDIO_MIME_TYPE,
            )
        )
