"""
Toast notifications.

The storefront and admin panel show short success/error messages after each
action. Services push them into a `Notifier`; routers return the collected
messages in the response body under `notifications`. Nothing is persisted.
"""
from dataclasses import dataclass, field
from typing import Literal

from core.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)

Level = Literal["success", "error"]


@dataclass(frozen=True)
class Notification:
    level: Level
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level, "message": self.message}


@dataclass
class Notifier:
    """Collects notifications raised while handling one request."""

    messages: list[Notification] = field(default_factory=list)

    def success(self, message: str) -> None:
        self._push("success", message)

    def error(self, message: str) -> None:
        self._push("error", message)

    def _push(self, level: Level, message: str) -> None:
        self.messages.append(Notification(level, message))
        logger.debug(f"Toast [{level}]: {sanitize_string_for_logging(message, 80)}")

    def drain(self) -> list[dict]:
        """Return pending notifications as dicts and forget them."""
        drained = [n.to_dict() for n in self.messages]
        self.messages.clear()
        return drained
