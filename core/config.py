"""
Runtime configuration.

All values come from environment variables; a local `.env` file is loaded
first when present so `uvicorn api.index:app` works without exporting
anything by hand.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"

# Cart storage key; the storefront appends ":<session>" per visitor
CART_STORAGE_KEY = "ventafacil_cart"

DEFAULT_CART_TTL_SECONDS = 7 * 86400  # one week for abandoned carts


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class Config:
    """Process-wide settings read once at startup."""

    supabase_url: str = ""
    supabase_key: str = ""
    redis_url: str = ""
    redis_token: str = ""
    cart_ttl_seconds: int = DEFAULT_CART_TTL_SECONDS
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def has_redis(self) -> bool:
        return bool(self.redis_url and self.redis_token)

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Config":
        if load_env_file and _ENV_FILE.exists():
            load_dotenv(_ENV_FILE, override=False)

        ttl_raw = os.environ.get("CART_TTL_SECONDS", "")
        try:
            cart_ttl = int(ttl_raw) if ttl_raw else DEFAULT_CART_TTL_SECONDS
        except ValueError:
            cart_ttl = DEFAULT_CART_TTL_SECONDS

        return cls(
            supabase_url=os.environ.get("SUPABASE_URL", ""),
            # The anon key is enough: row level security guards the admin tables
            supabase_key=os.environ.get("SUPABASE_KEY") or os.environ.get("SUPABASE_ANON_KEY", ""),
            redis_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
            redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
            cart_ttl_seconds=cart_ttl,
            cors_origins=_split_csv(os.environ.get("CORS_ORIGINS", "*")) or ["*"],
            environment=os.environ.get("ENVIRONMENT", "development"),
        )
