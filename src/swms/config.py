"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SWMS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Smart Waste Management API"
    api_prefix: str = "/api"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    sensor_key: str = Field(
        default="dev_sensor_key",
        description="Shared secret expected in the X-Sensor-Key header of sensor reports.",
    )

    # Bin thresholds (percent full)
    bin_full_threshold: int = Field(default=80, ge=0, le=100)
    bin_overflow_threshold: int = Field(default=95, ge=0, le=100)
    route_fill_threshold: int = Field(default=80, ge=0, le=100)
    bin_alert_mode: Literal["level", "edge"] = Field(
        default="level",
        description=(
            "'level' emits bin:alert on every report at or above the full threshold; "
            "'edge' only when the level crosses the threshold upwards."
        ),
    )

    # Complaint priority scoring
    priority_base_score: int = Field(default=1, ge=0)
    priority_keyword_bonus: int = Field(default=2, ge=0)
    priority_proximity_bonus: int = Field(default=3, ge=0)
    priority_proximity_radius_m: float = Field(default=300.0, ge=0.0)
    priority_keywords: tuple[str, ...] = Field(
        default=("school", "hospital", "market", "temple", "mosque", "church"),
        description="Words marking a sensitive zone in a complaint description.",
    )

    eco_points_per_complaint: int = Field(default=10, ge=0)

    # Chat assistant
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = Field(default=20.0, gt=0.0)

    @field_validator("frontend_allowed_origins", "priority_keywords", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        # Return empty tuple if value is None or empty
        return tuple()


settings = Settings()
