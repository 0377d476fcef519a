from urllib.parse import quote

from app.config import Settings
from app.errors import InvalidImagePromptError
from app.logging_config import get_logger
from app.results import FallbackResult
from .schemas import ImageType

logger = get_logger(__name__)


def calculate_seed(prompt: str) -> int:
    """Детерминированный seed: сумма кодов символов промпта."""
    return abs(sum(ord(char) for char in prompt))


class ImageService:
    """
    Картинки-заглушки вместо настоящей генерации.

    Один и тот же промпт всегда даёт один и тот же URL.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def generate_picsum_url(self, prompt: str) -> str:
        seed = calculate_seed(prompt)
        size = self.settings.image_seed_size
        return f"{self.settings.image_seed_base_url}/{seed}/{size}/{size}"

    def generate_placeholder_url(self, prompt: str) -> str:
        encoded_text = quote(prompt or "Image", safe="-_.!~*'()")
        return (
            f"{self.settings.placeholder_base_url}/{self.settings.placeholder_size}/"
            f"{self.settings.placeholder_color}/{self.settings.placeholder_text_color}"
            f"?text={encoded_text}"
        )

    def generate_image(self, prompt: object, image_type: ImageType | None = None) -> FallbackResult[str]:
        """
        Получить URL картинки для упражнения или блюда.

        Raises:
            InvalidImagePromptError: промпт пустой или не строка
        """
        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidImagePromptError()

        original_prompt = prompt.strip()
        logger.info(f"Image requested: prompt={original_prompt!r}, type={image_type}")

        try:
            url = self.generate_picsum_url(original_prompt)
        except Exception as e:
            logger.error(f"Image generation failed for {original_prompt!r}: {e}")
            return FallbackResult.fallback(self.generate_placeholder_url(original_prompt), reason=str(e))

        logger.debug(f"Generated image URL for {original_prompt!r}: {url}")
        return FallbackResult.ok(url)
