"""Tests for recognizer options."""

from pathlib import Path

import pytest

from stackprobe import __version__
from stackprobe.config import (
    DEFAULT_CACHE_ROOT,
    ENV_ARCHITECTURE_FORMAT,
    ENV_CACHE_ROOT,
    ENV_INCLUDE_INACTIVE,
    RecognizerOptions,
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (ENV_CACHE_ROOT, ENV_ARCHITECTURE_FORMAT, ENV_INCLUDE_INACTIVE):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestRecognizerOptions:
    """Tests for RecognizerOptions defaults and normalization."""

    def test_defaults(self) -> None:
        options = RecognizerOptions()
        assert options.cache_root == str(Path(".stackprobe") / "cache" / "recognizer")
        assert options.architecture_format == "json"
        assert options.recognizer_version == __version__
        assert options.include_inactive_files is True

    def test_empty_values_fall_back(self) -> None:
        options = RecognizerOptions(cache_root="", architecture_format="", recognizer_version="")
        assert options.cache_root == DEFAULT_CACHE_ROOT
        assert options.architecture_format == "json"
        assert options.recognizer_version == __version__

    def test_format_lowercased(self) -> None:
        assert RecognizerOptions(architecture_format="JSON").architecture_format == "json"


class TestFromEnv:
    """Tests for RecognizerOptions.from_env."""

    def test_reads_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv(ENV_CACHE_ROOT, "/var/cache/stackprobe")
        clean_env.setenv(ENV_INCLUDE_INACTIVE, "false")
        options = RecognizerOptions.from_env()
        assert options.cache_root == "/var/cache/stackprobe"
        assert options.include_inactive_files is False

    def test_overrides_win(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv(ENV_CACHE_ROOT, "/var/cache/stackprobe")
        options = RecognizerOptions.from_env(cache_root="/tmp/override")
        assert options.cache_root == "/tmp/override"

    def test_none_overrides_ignored(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv(ENV_INCLUDE_INACTIVE, "0")
        options = RecognizerOptions.from_env(cache_root=None, include_inactive_files=None)
        assert options.cache_root == DEFAULT_CACHE_ROOT
        assert options.include_inactive_files is False
