import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    google_api_key: Optional[str] = None
    moderation_model: str = "gemini-2.0-flash"
    registration_delay_seconds: float = 1.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            google_api_key=os.getenv("GOOGLE_API_KEY") or None,
            moderation_model=os.getenv("MODERATION_MODEL", "gemini-2.0-flash"),
            registration_delay_seconds=float(os.getenv("REGISTRATION_DELAY_SECONDS", "1.0")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
