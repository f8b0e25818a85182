"""
Application context.

One AppContext per process, built in the FastAPI lifespan and kept on
`app.state.ctx`. Handlers receive it through `core.routers.deps` instead of
reaching for module-level singletons.
"""
from dataclasses import dataclass

from core.cart import CartStore, MemoryCartStore, RedisCartStore
from core.config import Config
from core.db import create_redis
from core.logging import get_logger
from core.services.database import Database

logger = get_logger(__name__)


@dataclass
class AppContext:
    config: Config
    db: Database
    cart_store: CartStore

    @classmethod
    async def create(cls, config: Config) -> "AppContext":
        db = await Database.create(config)

        if config.has_redis:
            cart_store: CartStore = RedisCartStore(create_redis(config), ttl=config.cart_ttl_seconds)
        else:
            logger.warning("Upstash Redis not configured; carts are kept in process memory")
            cart_store = MemoryCartStore()

        ctx = cls(config=config, db=db, cart_store=cart_store)
        await ctx.warm_up()
        return ctx

    async def warm_up(self) -> None:
        """Load settings and start order change tracking; failures are logged only."""
        await self.db.settings.fetch()
        await self.db.orders.fetch_pending_count()
        await self.db.orders.subscribe(self.db.client)

    async def close(self) -> None:
        await self.db.close()
