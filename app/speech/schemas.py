from typing import Optional

from pydantic import Field

from app.ai.schemas import CamelModel


class TTSRequest(CamelModel):
    text: Optional[str] = None


class TTSResponse(CamelModel):
    use_browser_tts: bool = Field(alias="useBrowserTTS")
    audio: Optional[str] = None
    mime_type: Optional[str] = None
    text: Optional[str] = None
