"""Tests for the cache directory layout."""

from pathlib import Path

from plumb.cache.directories import (
    CacheCategory,
    CacheDirectoriesProvider,
    default_cache_root,
)


class TestDefaultCacheRoot:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PLUMB_CACHE_DIR", str(tmp_path / "custom"))
        assert default_cache_root() == tmp_path / "custom"

    def test_xdg_cache_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("PLUMB_CACHE_DIR", raising=False)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        assert default_cache_root() == tmp_path / "plumb"

    def test_home_fallback(self, monkeypatch):
        monkeypatch.delenv("PLUMB_CACHE_DIR", raising=False)
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        assert default_cache_root() == Path.home() / ".cache" / "plumb"


class TestCacheDirectoriesProvider:
    def test_explicit_root_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PLUMB_CACHE_DIR", "/elsewhere")
        provider = CacheDirectoriesProvider(tmp_path)
        assert provider.cache_root == tmp_path

    def test_plugin_paths(self, tmp_path):
        provider = CacheDirectoriesProvider(tmp_path)
        assert provider.cache_directory(CacheCategory.PLUGINS) == tmp_path / "plugins"
        assert provider.plugin_directory("abc") == tmp_path / "plugins" / "abc"
        assert provider.repository_directory("abc") == tmp_path / "plugins" / "abc" / "repository"
        assert provider.release_directory("abc") == tmp_path / "plugins" / "abc" / "release"

    def test_queries_do_not_create(self, tmp_path):
        provider = CacheDirectoriesProvider(tmp_path / "cache")
        provider.repository_directory("abc")
        provider.release_directory("abc")
        assert not (tmp_path / "cache").exists()

    def test_ensure_directory(self, tmp_path):
        target = tmp_path / "cache" / "plugins" / "abc"
        assert CacheDirectoriesProvider.ensure_directory(target) == target
        assert target.is_dir()
        # Idempotent
        CacheDirectoriesProvider.ensure_directory(target)
        assert target.is_dir()
