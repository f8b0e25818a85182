"""
Database Module - Supabase and Redis client factories.

Builds:
- Async Supabase client for tables, RPCs, storage, realtime and auth
- Async Upstash Redis client backing the storefront carts

Clients are created once in the FastAPI lifespan and handed around inside
`AppContext`; nothing here keeps module-level instances.
"""

from supabase._async.client import AsyncClient, create_client as acreate_client
from upstash_redis.asyncio import Redis as AsyncRedis

from core.config import Config
from core.logging import get_logger

logger = get_logger(__name__)


async def create_supabase(config: Config) -> AsyncClient:
    """Create the async Supabase client."""
    if not config.has_supabase:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")
    client = await acreate_client(config.supabase_url, config.supabase_key)
    logger.info("Supabase client created")
    return client


def create_redis(config: Config) -> AsyncRedis:
    """
    Create the async Upstash Redis client.

    Uses the standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    if not config.has_redis:
        raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
    return AsyncRedis(url=config.redis_url, token=config.redis_token)


# Table and RPC names used across repositories
class Tables:
    PRODUCTS = "products"
    SALES = "sales"
    SALE_ITEMS = "sale_items"
    ONLINE_ORDERS = "online_orders"
    ORDER_ITEMS = "order_items"
    APP_SETTINGS = "app_settings"


class Rpc:
    UPDATE_PRODUCT_STOCK = "update_product_stock"
    CONVERT_ORDER_TO_SALE = "convert_order_to_sale"


PRODUCT_IMAGES_BUCKET = "product-images"
