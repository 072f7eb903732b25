"""Unit tests for configuration defaults, overrides and validation."""

from __future__ import annotations

import platformdirs
import pytest
from pydantic import ValidationError

from typeindex.config import (
    _DEFAULT_CONFIG_DIR,
    ClientSettings,
    RegistrySettings,
    Settings,
)


class TestDefaults:
    def test_config_dir_matches_platformdirs(self) -> None:
        assert platformdirs.user_config_dir("typeindex") == _DEFAULT_CONFIG_DIR

    def test_client_defaults_ask_for_turtle(self) -> None:
        settings = Settings()
        assert settings.client.accept == "text/turtle"
        assert settings.client.timeout_seconds == 30.0

    def test_registry_slugs(self) -> None:
        settings = RegistrySettings()
        assert settings.public_index_slug == "publicTypeIndex.ttl"
        assert settings.private_index_slug == "privateTypeIndex.ttl"


class TestEnvironmentOverrides:
    def test_nested_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TYPEINDEX__CLIENT__ACCEPT", "application/ld+json")
        monkeypatch.setenv("TYPEINDEX__LOGGING__FORMAT", "text")
        settings = Settings()
        assert settings.client.accept == "application/ld+json"
        assert settings.logging.format == "text"

    def test_init_args_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TYPEINDEX__REGISTRY__FRAGMENT_LENGTH", "12")
        settings = Settings(registry={"fragment_length": 8})
        assert settings.registry.fragment_length == 8


class TestConfigValidation:
    def test_wrong_type_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(client={"timeout_seconds": "soon"})  # type: ignore[arg-type]

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClientSettings(timeout_seconds=0)

    def test_unknown_top_level_field_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(completely_unknown_field="oops")  # type: ignore[call-arg]

    def test_unknown_nested_field_raises_validation_error(self) -> None:
        """A typo like 'acept' is caught instead of silently using the default."""
        with pytest.raises(ValidationError):
            ClientSettings(acept="text/n3")  # type: ignore[call-arg]

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(logging={"level": "CHATTY"})
