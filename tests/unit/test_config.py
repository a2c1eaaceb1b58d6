"""Tests for hairstudio.core.config: configuration management.

Tests cover:
- Default values for all configuration fields.
- Environment variable overrides via the HAIRSTUDIO_ prefix.
- Legacy unprefixed variables (PORT, ACCESS_KEY, GEMINI_API_KEY).
- Pydantic validation constraints (port range, log level literals).
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from hairstudio.core.config import DEFAULT_STATIC_DIR, HairStudioConfig

_ENV_VARS = [
    "HAIRSTUDIO_SERVER_HOST",
    "HAIRSTUDIO_SERVER_PORT",
    "PORT",
    "HAIRSTUDIO_ACCESS_KEY",
    "ACCESS_KEY",
    "HAIRSTUDIO_GEMINI_API_KEY",
    "GEMINI_API_KEY",
    "HAIRSTUDIO_GEMINI_MODEL",
    "HAIRSTUDIO_STATIC_DIR",
    "HAIRSTUDIO_LOG_LEVEL",
    "HAIRSTUDIO_LOG_TO_STDOUT",
    "HAIRSTUDIO_LOG_FILE",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the configuration reads."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigDefaults:
    """Verify that HairStudioConfig provides sensible defaults."""

    def test_server_defaults(self, clean_env):
        cfg = HairStudioConfig(_env_file=None)
        assert cfg.server_host == "0.0.0.0"
        assert cfg.server_port == 3000

    def test_access_key_unset(self, clean_env):
        """No default secret: the gate is closed."""
        cfg = HairStudioConfig(_env_file=None)
        assert cfg.access_key is None
        assert cfg.access_gate_enabled is False

    def test_provider_defaults(self, clean_env):
        cfg = HairStudioConfig(_env_file=None)
        assert cfg.gemini_api_key is None
        assert cfg.gemini_model == "gemini-3-pro-image-preview"

    def test_static_dir_is_packaged_bundle(self, clean_env):
        cfg = HairStudioConfig(_env_file=None)
        assert cfg.static_dir == DEFAULT_STATIC_DIR
        assert (DEFAULT_STATIC_DIR / "index.html").is_file()

    def test_logging_defaults(self, clean_env):
        cfg = HairStudioConfig(_env_file=None)
        assert cfg.log_level == "INFO"
        assert cfg.log_to_stdout is True
        assert cfg.log_file is None


class TestConfigEnvironment:
    """Environment variable overrides."""

    def test_prefixed_variables(self, clean_env, tmp_path):
        clean_env.setenv("HAIRSTUDIO_SERVER_PORT", "8080")
        clean_env.setenv("HAIRSTUDIO_ACCESS_KEY", "s3cret")
        clean_env.setenv("HAIRSTUDIO_GEMINI_MODEL", "gemini-2.5-flash-image")
        clean_env.setenv("HAIRSTUDIO_LOG_FILE", str(tmp_path / "server.log"))
        cfg = HairStudioConfig(_env_file=None)
        assert cfg.server_port == 8080
        assert cfg.access_key == "s3cret"
        assert cfg.gemini_model == "gemini-2.5-flash-image"
        assert cfg.log_file == tmp_path / "server.log"

    def test_legacy_variables(self, clean_env):
        """PORT, ACCESS_KEY and GEMINI_API_KEY from the original deployment work."""
        clean_env.setenv("PORT", "5000")
        clean_env.setenv("ACCESS_KEY", "legacy")
        clean_env.setenv("GEMINI_API_KEY", "AIza-test")
        cfg = HairStudioConfig(_env_file=None)
        assert cfg.server_port == 5000
        assert cfg.access_key == "legacy"
        assert cfg.gemini_api_key == "AIza-test"
        assert cfg.access_gate_enabled is True

    def test_prefixed_wins_over_legacy(self, clean_env):
        clean_env.setenv("ACCESS_KEY", "legacy")
        clean_env.setenv("HAIRSTUDIO_ACCESS_KEY", "prefixed")
        cfg = HairStudioConfig(_env_file=None)
        assert cfg.access_key == "prefixed"

    def test_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("HAIRSTUDIO_ACCESS_KEY=from-file\n", encoding="utf-8")
        cfg = HairStudioConfig(_env_file=env_file)
        assert cfg.access_key == "from-file"

    def test_keyword_overrides(self, clean_env):
        cfg = HairStudioConfig(_env_file=None, access_key="kw", server_port=4000)
        assert cfg.access_key == "kw"
        assert cfg.server_port == 4000

    def test_empty_access_key_keeps_gate_closed(self, clean_env):
        cfg = HairStudioConfig(_env_file=None, access_key="")
        assert cfg.access_gate_enabled is False


class TestConfigValidation:
    """Pydantic validation constraints."""

    def test_port_out_of_range(self, clean_env):
        with pytest.raises(ValidationError):
            HairStudioConfig(_env_file=None, server_port=70000)

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ValidationError):
            HairStudioConfig(_env_file=None, log_level="CHATTY")

    def test_log_file_coerced_to_path(self, clean_env):
        cfg = HairStudioConfig(_env_file=None, log_file="logs/server.log")
        assert cfg.log_file == Path("logs/server.log")
