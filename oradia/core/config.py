# oradia/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.0-flash-lite"

    # "fragments" keeps the report layout server-side, "full_text" lets the model write it
    NARRATIVE_MODE: str = "fragments"
    GENERATION_TIMEOUT_SECONDS: float = 25.0
    TEMPERATURE: float = 0.6
    MAX_OUTPUT_TOKENS: int = 1100

    ALLOWED_ORIGINS: List[str] = ["https://oradia.fr"]
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        extra = "allow"


settings = Settings()
