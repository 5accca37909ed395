"""Tests for settings and client wiring."""

import pytest

from sheetkeeper.client import create_store
from sheetkeeper.config import DATA_DIR, Settings, get_settings
from sheetkeeper.store import StoreState
from sheetkeeper.sync.http import HttpSyncGateway


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch) -> None:
        """Defaults point at the packaged data and a local authority."""
        monkeypatch.delenv("SHEETKEEPER_PORT", raising=False)
        settings = Settings()
        assert settings.port == 8080
        assert settings.local_recompute is False
        assert settings.request_timeout is None
        assert settings.skills_file == DATA_DIR / "skills.yaml"

    def test_env_prefix(self, monkeypatch) -> None:
        """SHEETKEEPER_ variables override defaults."""
        monkeypatch.setenv("SHEETKEEPER_PORT", "9001")
        monkeypatch.setenv("SHEETKEEPER_LOCAL_RECOMPUTE", "true")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.port == 9001
        assert settings.local_recompute is True
        assert settings.log_level == "DEBUG"

    def test_get_settings_cached(self) -> None:
        """get_settings returns one shared instance."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestCreateStore:
    """Tests for client store wiring."""

    @pytest.mark.asyncio
    async def test_http_store(self) -> None:
        """The store talks to the configured server URL."""
        store = create_store(Settings(server_url="http://authority:9000/", request_timeout=5))
        assert isinstance(store.gateway, HttpSyncGateway)
        assert store.gateway.base_url == "http://authority:9000"
        assert store.state == StoreState.UNLOADED
        assert store.skill_map is None
        await store.gateway.close()

    @pytest.mark.asyncio
    async def test_local_recompute_loads_skill_map(self) -> None:
        """Enabling local recomputation loads and validates the skill map."""
        store = create_store(Settings(local_recompute=True))
        assert store.local_recompute is True
        assert len(store.skill_map) == 18
        await store.gateway.close()
