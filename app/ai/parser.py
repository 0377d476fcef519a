import json
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from app.errors import AIResponseParseError
from app.logging_config import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_LEADING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(raw_text: str) -> str:
    """Убрать обёртку ```json ... ``` (или просто ``` ... ```) вокруг ответа модели."""
    text = raw_text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_json_response(raw_text: str, model: type[ModelT], error_message: str) -> ModelT:
    """
    Разобрать ответ модели как JSON заданной структуры.

    Args:
        raw_text: Сырой текст ответа
        model: Pydantic-модель ожидаемой структуры
        error_message: Начало текста ошибки для пользователя

    Raises:
        AIResponseParseError: ответ не является JSON нужной структуры
    """
    cleaned_text = strip_code_fences(raw_text or "{}")

    try:
        data = json.loads(cleaned_text)
        return model.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"{error_message}: {e}")
        logger.error(f"Raw AI response: {raw_text}")
        raise AIResponseParseError(
            f"{error_message}. The AI response may not be valid JSON. Please try again."
        ) from e
