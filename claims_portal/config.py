from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Upstream workflow entry point (the n8n webhook that opens a new claim)
    START_WEBHOOK_URL: str = "https://n8n-dq6g.onrender.com/webhook-test/2f1d759a-da2d-422a-9c7b-acb647f5823d"

    # The workflow may run OCR/LLM steps before answering
    REQUEST_TIMEOUT_SECONDS: float = 60.0

    # Empty list means any host may be used as a resume URL
    RESUME_URL_ALLOWED_HOSTS: List[str] = []

    # Portal
    SESSION_COOKIE_NAME: str = "portal_session"
    SESSION_TTL_SECONDS: float = 2 * 60 * 60
    SESSION_MAX_COUNT: int = 1000

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
