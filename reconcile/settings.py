"""
Run settings using pydantic-settings for type-safe configuration.

Every value can be set through a RECONCILE_-prefixed environment variable or
a .env file; CLI flags override them per run. Defaults match the column
names of the registration form export and the check-in log export.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reconcile.core.models import FieldMap


class Settings(BaseSettings):
    """
    Reconciliation settings loaded from environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECONCILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Registration (reference) columns ===
    reference_first_name_field: str = Field(
        default="First Name",
        description="Registration column holding the first name",
    )
    reference_last_name_field: str = Field(
        default="Last Name (Surname)",
        description="Registration column holding the last name",
    )
    reference_email_field: str = Field(
        default="Email",
        description="Registration column holding the email (empty to disable email keys)",
    )

    # === Check-in (input) columns ===
    input_first_name_field: str = Field(
        default="camper_firstName",
        description="Check-in column holding the first name",
    )
    input_last_name_field: str = Field(
        default="camper_lastName",
        description="Check-in column holding the last name",
    )
    input_email_field: str = Field(
        default="camper_email",
        description="Check-in column holding the email (empty to disable email lookup)",
    )

    # === Partitioning ===
    partition_flag_field: str = Field(
        default="Are you camping?",
        description="Column whose 'yes' value puts a row in the positive partition",
    )
    partition_flag_value: str = Field(
        default="yes",
        description="Flag value (case-insensitive) selecting the positive partition",
    )
    positive_partition: str = Field(default="campers")
    negative_partition: str = Field(default="non-campers")

    # === Output ===
    output_dir: str = Field(
        default="uploads",
        description="Directory receiving CSV artifacts",
    )
    log_level: str | None = Field(
        default=None,
        description="TRACE, DEBUG, INFO, WARNING or ERROR (falls back to LOG_LEVEL)",
    )

    # === PocketBase Configuration ===
    pocketbase_url: str = Field(
        default="http://127.0.0.1:8090",
        description="PocketBase server URL",
    )
    pocketbase_admin_email: str = Field(default="")
    pocketbase_admin_password: str = Field(default="")

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str | None:
        """Validate and normalize log_level."""
        if v is None:
            return v
        v = v.upper()
        if v not in ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Invalid log level: {v}")
        return v

    @property
    def reference_fields(self) -> FieldMap:
        return FieldMap(
            first_name=self.reference_first_name_field,
            last_name=self.reference_last_name_field,
            email=self.reference_email_field or None,
        )

    @property
    def input_fields(self) -> FieldMap:
        return FieldMap(
            first_name=self.input_first_name_field,
            last_name=self.input_last_name_field,
            email=self.input_email_field or None,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once per process.
    """
    return Settings()
