"""
Kernel configuration.

Centralized configuration management with environment variables.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Kernel settings"""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    # Recurring decimals
    MAX_RECURRING_PERIOD: int = 10000  # longest cycle tracked exactly

    # Exact results
    MAX_RESULT_DIGITS: int = 100000  # digit ceiling for exact powers and exp

    # Display
    SCIENTIFIC_THRESHOLD: int = 50  # decimal exponent where output turns scientific

    class Config:
        env_prefix = "NUMKERNEL_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
