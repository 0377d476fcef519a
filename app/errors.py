"""Ошибки приложения и их HTTP-обработчики."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_GENERATE_PLAN_ERROR = (
    "An unexpected error occurred while generating your fitness plan. Please try again."
)
DEFAULT_TEXT_TO_SPEECH_ERROR = "Unable to process text-to-speech request"
IMAGE_PROMPT_REQUIRED = "Please provide a description of the image you want to generate"
USER_DETAILS_REQUIRED = "User details are required to generate a fitness plan"
USER_DETAILS_INVALID = "Invalid user details"

# Эндпоинты, клиенты которых всегда ждут флаг useBrowserTTS в ответе.
BROWSER_TTS_PATHS = {"/api/text-to-speech"}


class AppError(Exception):
    """Базовая ошибка приложения со статусом HTTP."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_content(self) -> dict:
        return {"error": self.message}


class AIConfigurationError(AppError):
    """Ключ API генеративной модели не задан или некорректен."""


class AIUpstreamError(AppError):
    """Запрос к генеративной модели завершился ошибкой."""


class AIResponseParseError(AppError):
    """Ответ модели не удалось разобрать как JSON нужной структуры."""


class InvalidImagePromptError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = IMAGE_PROMPT_REQUIRED) -> None:
        super().__init__(message)


class UserDetailsValidationError(AppError):
    """Данные пользователя не прошли валидацию; содержит список всех проблемных полей."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: list[dict[str, str]]) -> None:
        super().__init__(message)
        self.details = details

    def to_content(self) -> dict:
        return {"error": self.message, "details": self.details}


def format_validation_errors(errors) -> list[dict[str, str]]:
    """Преобразовать ошибки pydantic в список {field, message}."""
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return details


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Ошибки валидации тела запроса отдаём как 400 вместо 422."""
    if request.url.path in BROWSER_TTS_PATHS:
        content = {"useBrowserTTS": True, "text": DEFAULT_TEXT_TO_SPEECH_ERROR}
    else:
        content = {
            "error": "Invalid request body",
            "details": format_validation_errors(exc.errors()),
        }
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)
