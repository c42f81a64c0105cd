import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GameSettings(BaseModel):
    """Runtime settings for a game session, read from WAR_* environment variables."""
    seed: Optional[int] = Field(None, description="Seed for the default combat dice")
    log_level: str = Field("INFO", description="Console log level")
    log_file: Optional[str] = Field(None, description="Optional path for a detailed log file")
    color: bool = Field(True, description="Colored console output")
    max_territories: int = Field(1024, ge=1, description="Territory registry capacity")
    max_neighbors: int = Field(64, ge=1, description="Neighbor slots per territory")
    max_missions: int = Field(256, ge=1, description="Mission registry capacity")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator('log_file')
    @classmethod
    def empty_log_file_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def load_settings(**overrides) -> GameSettings:
    """
    Build settings from the environment (and a .env file if present).
    Keyword overrides win over the environment; None overrides are ignored.
    """
    load_dotenv()

    values = {}
    seed = os.getenv('WAR_SEED')
    if seed:
        values['seed'] = seed
    if os.getenv('WAR_LOG_LEVEL'):
        values['log_level'] = os.getenv('WAR_LOG_LEVEL')
    if os.getenv('WAR_LOG_FILE') is not None:
        values['log_file'] = os.getenv('WAR_LOG_FILE')
    if os.getenv('WAR_COLOR'):
        values['color'] = _env_bool(os.getenv('WAR_COLOR'))
    for key in ('max_territories', 'max_neighbors', 'max_missions'):
        env_value = os.getenv(f'WAR_{key.upper()}')
        if env_value:
            values[key] = env_value

    values.update({k: v for k, v in overrides.items() if v is not None})
    return GameSettings(**values)
