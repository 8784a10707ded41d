"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from reconcile.core.models import FieldMap
from reconcile.settings import Settings, get_settings


@pytest.mark.usefixtures("clean_settings")
class TestSettings:
    def test_defaults_match_form_exports(self):
        settings = Settings()

        assert settings.reference_fields == FieldMap("First Name", "Last Name (Surname)", "Email")
        assert settings.input_fields == FieldMap("camper_firstName", "camper_lastName", "camper_email")
        assert settings.partition_flag_field == "Are you camping?"
        assert settings.output_dir == "uploads"
        assert settings.log_level is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RECONCILE_INPUT_FIRST_NAME_FIELD", "first")
        monkeypatch.setenv("RECONCILE_OUTPUT_DIR", "out")

        settings = Settings()

        assert settings.input_fields.first_name == "first"
        assert settings.output_dir == "out"

    def test_empty_email_field_disables_email(self, monkeypatch):
        monkeypatch.setenv("RECONCILE_REFERENCE_EMAIL_FIELD", "")

        assert Settings().reference_fields.email is None

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("RECONCILE_POSITIVE_PARTITION=staying\n", encoding="utf-8")

        assert Settings().positive_partition == "staying"

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("RECONCILE_LOG_LEVEL", "debug")

        assert Settings().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("RECONCILE_LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
