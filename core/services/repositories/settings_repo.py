"""Settings Repository - app_settings key/value rows."""
from datetime import datetime, timezone
from typing import Any, Dict, List

from core.db import Tables
from .base import BaseRepository


class SettingsRepository(BaseRepository):

    async def get_rows(self) -> List[Dict[str, Any]]:
        result = await self.client.table(Tables.APP_SETTINGS).select("key, value").execute()
        return result.data or []

    async def upsert(self, key: str, value: str) -> List[Dict[str, Any]]:
        result = await (
            self.client.table(Tables.APP_SETTINGS)
            .upsert(
                {"key": key, "value": value, "updated_at": datetime.now(timezone.utc).isoformat()},
                on_conflict="key",
            )
            .execute()
        )
        return result.data or []
