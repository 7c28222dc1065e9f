from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = {"DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    # General
    log_level: str = Field(default="ERROR")
    run_once: bool = Field(default=False)
    label_prefix: str = Field(default="consul")

    # Consul
    consul_agent_endpoint: str = Field(default="http://localhost:8500")
    consul_token: Optional[str] = Field(default=None)

    # Docker
    docker_socket: str = Field(default="unix:///var/run/docker.sock")

    # Loop timing
    sync_interval: float = Field(default=30.0, gt=0)
    reconnect_delay: float = Field(default=5.0, gt=0)
    startup_retries: int = Field(default=3, ge=1)

    model_config = SettingsConfigDict(env_prefix="DCB_", env_file=".env", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        if level == "WARN":
            return "WARNING"
        return level


def load_settings(**overrides: Any) -> Settings:
    """Build settings from env and .env, letting explicit overrides win."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
