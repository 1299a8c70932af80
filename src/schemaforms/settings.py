"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemaforms.exceptions import SettingsError

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMA_DRAFTS = ("draft4", "draft6", "draft7", "draft2019-09", "draft2020-12")


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "schemaforms"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    data_dir: str = Field(
        default="data",
        validation_alias="DATA_DIR",
        description="Directory holding the schema and submission stores.",
    )
    submitted_display_seconds: float = Field(
        default=3.0,
        ge=0.0,
        validation_alias="SUBMITTED_DISPLAY_SECONDS",
        description="How long a form session stays in the submitted state.",
    )
    default_schema_draft: str = Field(
        default="draft7",
        validation_alias="DEFAULT_SCHEMA_DRAFT",
        description="JSON Schema draft used when a schema declares no `$schema`.",
    )

    @field_validator("default_schema_draft")
    @classmethod
    def _validate_schema_draft(cls, value: str) -> str:
        """Ensure the default draft is one the document validator knows.

        Args:
            value (str): Raw draft name.

        Raises:
            ValueError: If the draft is not supported.

        Returns:
            str: Normalized draft name.
        """
        normalized = value.strip().lower()
        if normalized not in SUPPORTED_SCHEMA_DRAFTS:
            supported = ", ".join(SUPPORTED_SCHEMA_DRAFTS)
            raise ValueError(f"Unsupported schema draft '{value}'. Expected one of: {supported}")  # noqa: TRY003
        return normalized

    @property
    def schemas_path(self) -> Path:
        """Return the JSON file backing the schema store."""
        return Path(self.data_dir) / "schemas.json"

    @property
    def submissions_path(self) -> Path:
        """Return the JSON file backing the submission store."""
        return Path(self.data_dir) / "submissions.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            ensure_env_file_exists()
            try:
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
