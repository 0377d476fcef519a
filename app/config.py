from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal

from app.logging_config import LogLevel


class Settings(BaseSettings):
    # Google AI (Gemini через OpenAI-совместимый эндпоинт)
    google_ai_api_key: str = ""
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    ai_model: str = "gemini-2.0-flash"
    ai_temperature_plan: float = 0.7
    ai_temperature_quote: float = 0.9
    ai_max_tokens_quote: int = 100

    # Формула BMR для gender="Other"
    bmr_other_gender_formula: Literal["female", "male", "average"] = "female"

    # ElevenLabs (optional)
    elevenlabs_api_key: str | None = None
    elevenlabs_api_url: str = "https://api.elevenlabs.io/v1/text-to-speech"
    elevenlabs_voice_id: str = "21m00Tcm4TlvDq8ikWAM"
    elevenlabs_model_id: str = "eleven_monolingual_v1"
    elevenlabs_stability: float = 0.5
    elevenlabs_similarity_boost: float = 0.5
    elevenlabs_timeout: float = 60.0
    elevenlabs_connect_timeout: float = 10.0

    # Картинки-заглушки
    image_seed_base_url: str = "https://picsum.photos/seed"
    image_seed_size: int = 800
    placeholder_base_url: str = "https://via.placeholder.com"
    placeholder_size: str = "1024x1024"
    placeholder_color: str = "4F46E5"
    placeholder_text_color: str = "FFFFFF"

    # App settings
    debug: bool = False
    log_level: LogLevel = "INFO"
    log_json: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
