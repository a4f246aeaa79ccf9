"""Application configuration and settings management."""

from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRIP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Trip Route Optimizer API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the service.")
    max_improvement_passes: int = Field(
        default=100,
        ge=1,
        description="Upper bound on full 2-opt passes per optimization.",
    )
    improvement_time_budget_seconds: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Wall-clock budget for 2-opt refinement. None means unbounded.",
    )
    comfortable_max_locations_per_day: int = Field(default=4, ge=1)
    packed_max_locations_per_day: int = Field(default=6, ge=1)
    max_number_of_days: int = Field(
        default=365,
        ge=1,
        description="Largest numberOfDays accepted by the optimize endpoint.",
    )
    result_cache_size: int = Field(
        default=128,
        ge=0,
        description="Number of optimization results kept in memory. 0 disables caching.",
    )
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper()

    @model_validator(mode="after")
    def _check_feasibility_thresholds(self) -> "Settings":
        if self.comfortable_max_locations_per_day > self.packed_max_locations_per_day:
            raise ValueError(
                "comfortable_max_locations_per_day must not exceed packed_max_locations_per_day"
            )
        return self


settings = Settings()
