"""Tests for settings loading."""
import pytest
from pydantic import ValidationError

from manifest.config import DEFAULT_AUTH_TOKEN, ManifestSettings, load_settings


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_from_empty_environment(self) -> None:
        """An empty mapping yields the defaults."""
        settings = load_settings({})
        assert settings == ManifestSettings()
        assert settings.log_level == "WARNING"
        assert settings.log_file is None
        assert settings.auth_token == DEFAULT_AUTH_TOKEN

    def test_reads_manifest_variables(self) -> None:
        """MANIFEST_* variables populate the settings."""
        settings = load_settings(
            {
                "MANIFEST_LOG_LEVEL": "debug",
                "MANIFEST_LOG_FILE": "/tmp/manifest.log",  # noqa: S108
                "MANIFEST_AUTH_TOKEN": "secret",
            },
        )
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "/tmp/manifest.log"  # noqa: S108
        assert settings.auth_token == "secret"

    def test_blank_values_keep_defaults(self) -> None:
        """Whitespace-only variables are ignored."""
        settings = load_settings({"MANIFEST_AUTH_TOKEN": "  "})
        assert settings.auth_token == DEFAULT_AUTH_TOKEN

    def test_invalid_log_level(self) -> None:
        """Unknown log levels fail validation."""
        with pytest.raises(ValidationError):
            load_settings({"MANIFEST_LOG_LEVEL": "chatty"})

    def test_reads_process_environment(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Without a mapping, os.environ is used."""
        monkeypatch.setenv("MANIFEST_AUTH_TOKEN", "from-env")
        assert load_settings().auth_token == "from-env"

    def test_settings_are_frozen(self) -> None:
        """Settings cannot be reassigned."""
        settings = ManifestSettings()
        with pytest.raises(ValidationError):
            settings.auth_token = "other"  # type: ignore[misc]
