"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from pkg_merge.config import DEFAULT_CHUNK_SIZE, Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("PKG_MERGE_PACKAGE_EXTENSION", "PKG_MERGE_MERGED_MARKER",
                    "PKG_MERGE_CHUNK_SIZE", "PKG_MERGE_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings()
        assert settings.package_extension == ".pkg"
        assert settings.merged_marker == "-merged"
        assert settings.chunk_size == DEFAULT_CHUNK_SIZE == 512 * 1024
        assert settings.log_level == "INFO"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PKG_MERGE_CHUNK_SIZE", "1024")
        monkeypatch.setenv("PKG_MERGE_LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.chunk_size == 1024
        assert settings.log_level == "DEBUG"

    def test_chunk_size_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("PKG_MERGE_CHUNK_SIZE", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_empty_merged_marker_is_rejected(self, monkeypatch):
        monkeypatch.setenv("PKG_MERGE_MERGED_MARKER", "")
        with pytest.raises(ValidationError):
            Settings()

    def test_extension_needs_leading_dot(self, monkeypatch):
        monkeypatch.setenv("PKG_MERGE_PACKAGE_EXTENSION", "pkg")
        with pytest.raises(ValidationError):
            Settings()

    def test_compound_extension_is_rejected(self, monkeypatch):
        monkeypatch.setenv("PKG_MERGE_PACKAGE_EXTENSION", ".tar.gz")
        with pytest.raises(ValidationError):
            Settings()

    def test_other_extension_is_accepted(self, monkeypatch):
        monkeypatch.setenv("PKG_MERGE_PACKAGE_EXTENSION", ".img")
        assert Settings().package_extension == ".img"
