from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.ai import GenerativeClient
from app.config import Settings, get_settings
from app.errors import AppError, app_error_handler, request_validation_error_handler
from app.logging_config import get_logger, setup_logging
from app.plans import plans_router
from app.plans.service import PlanService
from app.images import images_router
from app.images.service import ImageService
from app.speech import speech_router
from app.speech.service import SpeechService
from app.export import export_router

logger = get_logger(__name__)

APP_NAME = "AI Fitness Coach API"
APP_VERSION = "1.0.0"


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Собрать приложение.

    Настройки читаются один раз и передаются во все сервисы через app.state.
    """
    settings = settings or get_settings()
    setup_logging(level="DEBUG" if settings.debug else settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=APP_NAME,
        description="Personalized workout and diet plans with narration, images and export",
        version=APP_VERSION,
        debug=settings.debug
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    ai_client = GenerativeClient(settings)
    app.state.settings = settings
    app.state.ai_client = ai_client
    app.state.plan_service = PlanService(settings, ai_client)
    app.state.image_service = ImageService(settings)
    app.state.speech_service = SpeechService(settings)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(plans_router)
    app.include_router(images_router)
    app.include_router(speech_router)
    app.include_router(export_router)

    @app.on_event("shutdown")
    async def _close_clients():
        await app.state.ai_client.close()
        await app.state.speech_service.close()
        logger.info("HTTP clients closed")

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    @app.get("/")
    async def root():
        return {
            "app": APP_NAME,
            "version": APP_VERSION,
            "docs": "/docs"
        }

    if not settings.elevenlabs_api_key:
        logger.info("ELEVENLABS_API_KEY is not set, narration will use browser fallback")

    return app


app = create_app()
