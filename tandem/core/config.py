# tandem/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    ENV: str = "dev"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    LOG_LEVEL: str = "INFO"

    # Feedback LLM (OpenAI-compatible chat completions)
    OPENAI_API_KEY: str = ""
    OPENAI_URL: str = "https://api.openai.com/v1/chat/completions"
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_MAX_TOKENS: int = 500
    OPENAI_TEMPERATURE: float = 0.7
    LLM_TIMEOUT: float = 30.0
    LLM_MAX_RETRIES: int = 1

    # Google Cloud Text-to-Speech (REST, API key)
    GOOGLE_TTS_API_KEY: str = ""
    GOOGLE_TTS_URL: str = "https://texttospeech.googleapis.com/v1/text:synthesize"
    TTS_TIMEOUT: float = 15.0

    # Empty -> the session API calls the feedback service in-process.
    FEEDBACK_SERVICE_URL: str = ""

    SET_CHOICES: List[int] = [2, 4, 6]
    DEFAULT_SETS: int = 2

    # idle sessions are dropped after this many seconds
    SESSION_TTL_SECONDS: int = 3600
    SESSION_MAX: int = 1024

    # pydantic v2 settings
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",   # ignore unknown env vars instead of raising errors
    )

settings = Settings()
