"""
VentaFacil Core Module

- config: environment settings
- db: Supabase and Redis client factories
- context: per-process dependency container
- cart: cart reducer, storage and service
- services: repositories, domains, checkout, reports, labels
- routers: storefront and admin HTTP endpoints

Note: Imports are lazy so `import core` stays cheap.
"""

__all__ = [
    "AppContext",
    "Config",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "AppContext":
        from core.context import AppContext
        return AppContext
    elif name == "Config":
        from core.config import Config
        return Config
    raise AttributeError(f"module 'core' has no attribute '{name}'")
