"""Settings domain: typed store settings over app_settings rows."""
from typing import Any

from core.logging import get_logger
from core.services.app_settings import SETTING_KEYS, AppSettings
from core.services.repositories import SettingsRepository
from core.services.result import Result

logger = get_logger(__name__)


class SettingsDomain:
    """Keeps the last loaded AppSettings; defaults until the first fetch succeeds."""

    def __init__(self, repo: SettingsRepository):
        self.repo = repo
        self.settings = AppSettings()

    async def fetch(self) -> Result[AppSettings]:
        try:
            rows = await self.repo.get_rows()
        except Exception as e:
            logger.error(f"Failed to load settings: {e}", exc_info=True)
            return Result.fail(str(e))
        self.settings = AppSettings.from_rows(rows)
        return Result.ok(self.settings)

    async def update_setting(self, key: str, value: Any) -> Result[AppSettings]:
        if key not in SETTING_KEYS:
            return Result.fail(f"Configuración desconocida: {key}")

        text = str(value).lower() if isinstance(value, bool) else str(value)
        try:
            await self.repo.upsert(key, text)
        except Exception as e:
            logger.error(f"Failed to update setting {key}: {e}", exc_info=True)
            return Result.fail(str(e))
        self.settings = self.settings.with_value(key, text)
        return Result.ok(self.settings)
