"""
Supabase Database Service

Groups the repositories and domains that share one Supabase client.

Usage:
    db = await Database.create(config)
    result = await db.products.list()
"""

from supabase._async.client import AsyncClient

from core.config import Config
from core.db import create_supabase
from core.logging import get_logger
from core.services.domains import OnlineOrdersDomain, ProductsDomain, SalesDomain, SettingsDomain
from core.services.repositories import (
    OrderRepository,
    ProductRepository,
    SaleRepository,
    SettingsRepository,
)

logger = get_logger(__name__)


class Database:
    """
    Supabase-backed data access.

    Build with `Database.create()` at startup, or pass an existing client
    (tests hand in a mock).
    """

    def __init__(self, client: AsyncClient):
        self.client = client

        self.products = ProductsDomain(ProductRepository(client))
        self.sales = SalesDomain(SaleRepository(client))
        self.orders = OnlineOrdersDomain(OrderRepository(client))
        self.settings = SettingsDomain(SettingsRepository(client))

    @classmethod
    async def create(cls, config: Config) -> "Database":
        """Async factory: creates the Supabase client and wires the domains."""
        client = await create_supabase(config)
        return cls(client)

    async def close(self) -> None:
        await self.orders.unsubscribe()
