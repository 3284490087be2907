"""
Limit service configuration settings.
"""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class LimitServiceSettings(BaseSettings):
    """Limit service settings."""

    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # Evaluate every loaded limit at once in check_if_any_over_limit
    CONCURRENT_CHECKS: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"


limit_settings = LimitServiceSettings()
