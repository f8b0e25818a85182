"""Base repository with shared Supabase client."""

from supabase._async.client import AsyncClient


class BaseRepository:
    """Base class for all repositories.

    Repositories issue exactly one backend call per method and let
    postgrest errors propagate; domains decide what a failure means.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client
