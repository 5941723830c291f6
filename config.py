"""Configuration management using Pydantic settings"""

import os
from typing import Literal, Optional

from pydantic_settings import BaseSettings


def get_env_file() -> Optional[str]:
    """Get the .env file to load, honouring VIPACCESS_ENV_FILE if set"""
    env_file = os.environ.get("VIPACCESS_ENV_FILE")
    if env_file:
        return env_file
    return ".env"


class Settings(BaseSettings):
    """Application settings"""

    # Access resolution
    # Trial length is also the window used to estimate a grant's start when
    # the store never recorded one.
    TRIAL_DURATION_DAYS: int = 3
    EXPIRING_SOON_HOURS: int = 24
    ACCESS_PRECEDENCE: Literal["trial_first", "subscription_first"] = "trial_first"

    # Live countdown refresh (watcher + websocket)
    REFRESH_INTERVAL_SECONDS: float = 1.0

    # Presentation
    DEFAULT_LOCALE: str = "en"

    # Server
    ACCESS_HOST: str = "localhost"
    ACCESS_PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = get_env_file()
        case_sensitive = True

    def resolver_options(self) -> dict:
        """Keyword arguments for resolve_access derived from these settings"""
        return {
            "precedence": self.ACCESS_PRECEDENCE,
            "trial_days": self.TRIAL_DURATION_DAYS,
            "expiring_soon_hours": self.EXPIRING_SOON_HOURS,
        }


# Global settings instance
settings = Settings()
