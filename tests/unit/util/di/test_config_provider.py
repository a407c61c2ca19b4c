"""Tests for the settings sections exposed through DI."""

import pytest

from pickme.config import (
    AuthSettings,
    DatabaseSettings,
    MatchingSettings,
    SafetySettings,
    Settings,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestConfigProvider:
    @pytest.mark.asyncio
    async def test_sections_come_from_the_loaded_settings(self, unit_env):
        settings = await unit_env.get(Settings)

        assert await unit_env.get(AuthSettings) is settings.auth
        assert await unit_env.get(DatabaseSettings) is settings.database
        assert await unit_env.get(MatchingSettings) is settings.matching
        assert await unit_env.get(SafetySettings) is settings.safety

    @pytest.mark.asyncio
    async def test_settings_are_loaded_once_per_container(self, unit_env):
        assert await unit_env.get(Settings) is await unit_env.get(Settings)
