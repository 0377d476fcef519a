from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.dependencies import get_speech_service
from app.errors import DEFAULT_TEXT_TO_SPEECH_ERROR
from app.logging_config import get_logger
from .schemas import TTSRequest, TTSResponse
from .service import NO_TEXT_MESSAGE, SpeechService

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["speech"])


@router.post("/text-to-speech", response_model=TTSResponse, response_model_exclude_none=True)
async def text_to_speech(
    data: TTSRequest,
    speech_service: SpeechService = Depends(get_speech_service),
):
    """Озвучить текст; при любой проблеме клиент получает useBrowserTTS=true."""
    if not data.text or not data.text.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"useBrowserTTS": True, "text": NO_TEXT_MESSAGE},
        )

    try:
        result = await speech_service.convert_to_speech(data.text)
    except Exception as e:
        logger.exception(f"TTS API error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"useBrowserTTS": True, "text": str(e) or DEFAULT_TEXT_TO_SPEECH_ERROR},
        )

    if result.degraded:
        logger.info(f"Text-to-speech falls back to browser: {result.reason}")

    return result.value
