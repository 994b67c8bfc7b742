"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SALESTRAIL_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "SalesTrail Route Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for the file-backed store.")
    log_level: str = Field(default="INFO", description="Root logging level.")

    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps Geocoding API key. Geocoding is disabled when unset.",
    )
    geocode_base_url: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Google Geocoding endpoint.",
    )
    geocode_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocode_max_retries: int = Field(default=2, ge=0)
    geocode_backoff_seconds: float = Field(default=0.5, ge=0.0)
    geocode_max_concurrency: int = Field(default=5, ge=1)

    two_opt_max_passes: int = Field(default=50, ge=0, description="Upper bound on 2-opt improvement passes.")
    weight_distance: float = Field(default=0.4, ge=0.0)
    weight_time: float = Field(default=0.2, ge=0.0)
    weight_quality: float = Field(default=0.3, ge=0.0)
    weight_weather: float = Field(default=0.05, ge=0.0)
    weight_favorites: float = Field(default=0.05, ge=0.0)

    store_backend: Literal["file", "supabase"] = Field(
        default="file",
        description="Backend used for preferences, favorites and saved routes.",
    )
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    supabase_table: str = Field(default="kv_store", description="Table holding key/value rows.")

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

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


settings = Settings()
