"""
Notes API - Settings Tests
==========================

What we test:
    ✅ PORT defaults to 3000 and follows the environment
    ✅ Invalid PORT values fail at construction
    ✅ log_level normalization and validation
    ✅ CORS origin parsing
"""

import pytest
from pydantic import ValidationError

from notes_api.config import Settings


class TestPort:

    def test_defaults_to_3000(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert Settings(_env_file=None).port == 3000

    def test_empty_port_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("PORT", "")
        assert Settings(_env_file=None).port == 3000

    def test_reads_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).port == 8080

    def test_zero_requests_an_ephemeral_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "0")
        assert Settings(_env_file=None).port == 0

    @pytest.mark.parametrize("value", ["abc", "70000", "-1"])
    def test_invalid_port_is_rejected(self, monkeypatch, value):
        monkeypatch.setenv("PORT", value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_host_defaults_to_dual_stack_wildcard(self, monkeypatch):
        monkeypatch.delenv("HOST", raising=False)
        assert Settings(_env_file=None).host == "::"


class TestLogLevel:

    def test_lowercase_is_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_level_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")


class TestCors:

    def test_comma_separated_origins(self):
        settings = Settings(
            _env_file=None,
            cors_origins="http://localhost:3000, https://notes.example.com,",
        )
        assert settings.cors_origins_list == [
            "http://localhost:3000",
            "https://notes.example.com",
        ]


def test_sqlite_detection():
    assert Settings(_env_file=None, database_url="sqlite+aiosqlite:///./x.db").is_sqlite
    assert not Settings(
        _env_file=None, database_url="postgresql+asyncpg://u:p@localhost/db"
    ).is_sqlite
