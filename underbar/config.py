"""
Runtime settings for underbar's ambient services (logging, metrics).

Settings are read from UNDERBAR_* environment variables and validated
with pydantic. The functional API itself takes no configuration.

Environment Variables:
    UNDERBAR_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL - default: INFO
    UNDERBAR_LOG_FORMAT: json, text - default: json
    UNDERBAR_METRICS_ENABLED: true/false - default: false
    UNDERBAR_METRICS_PORT: HTTP port for /metrics - default: 8080
"""

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_PREFIX = "UNDERBAR_"


class UnderbarSettings(BaseModel):
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    metrics_enabled: bool = False
    metrics_port: int = Field(default=8080, ge=1, le=65535)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_format(cls, value: str) -> str:
        return str(value).lower()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "UnderbarSettings":
        """
        Build settings from UNDERBAR_* variables; unset ones keep defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw
        return cls(**values)
