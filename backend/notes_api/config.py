"""
Notes API — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked again during app startup.

The two Supabase values locate and authenticate against the hosted store.
The service role key bypasses row-level security, so every query issued with
it MUST carry an explicit `user_id` filter (see services/note_service.py).
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, model_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults except the Supabase credentials,
    which are empty until configured. Attributes are grouped by concern.
    """

    # ── Supabase ──────────────────────────────────────────────────────────
    # Format: https://<project-ref>.supabase.co
    supabase_url: str = Field(
        default="",
        description="Base URL of the Supabase project",
    )

    # Privileged key; never sent to clients and never logged
    supabase_service_role_key: str = Field(
        default="",
        description="Supabase service role key used by the server-side client",
    )

    notes_table: str = Field(default="notes", min_length=1)

    # ── Pagination ────────────────────────────────────────────────────────
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1, le=1000)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @model_validator(mode="after")
    def check_page_sizes(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) cannot exceed "
                f"max_page_size ({self.max_page_size})"
            )
        return self

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # SUPABASE_URL and supabase_url both work
        "extra": "ignore",
    }

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every missing value and raises one ValueError listing them.
        """
        errors = []
        if not self.supabase_url:
            errors.append("SUPABASE_URL is not set.")
        if not self.supabase_service_role_key:
            errors.append(
                "SUPABASE_SERVICE_ROLE_KEY is not set. "
                "Find it under Project Settings → API in the Supabase dashboard."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
