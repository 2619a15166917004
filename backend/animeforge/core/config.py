import os
from typing import Optional

from pydantic_settings import BaseSettings

from dotenv import load_dotenv
load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "AnimeForge Studio API"
    API_V1_PREFIX: str = "/api/v1"

    # For local dev you can use sqlite:
    # SQLALCHEMY_DATABASE_URI: str = "sqlite:///./animeforge.db"
    SQLALCHEMY_DATABASE_URI: str = os.getenv(
        "DATABASE_URL", "sqlite:///./animeforge.db"
    )

    # Tokens come from the hosted auth provider; an empty secret skips
    # signature checks (development only).
    SUPABASE_JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    AI_GATEWAY_API_KEY: Optional[str] = None
    AI_GATEWAY_MODEL: str = "google/gemini-3-flash-preview"
    AI_GATEWAY_TIMEOUT_SECONDS: float = 60

    OPENAI_API_KEY: Optional[str] = None
    DRAFTER_MODEL: str = "gpt-4o"

    MEDIA_ROOT: str = "media"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
