"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test_key")
os.environ.setdefault("ENVIRONMENT", "test")

from core.cart import CartService, MemoryCartStore
from core.notifications import Notifier
from core.services.database import Database


def execute_result(data=None, count=None):
    """Shape of a postgrest APIResponse as far as repositories read it."""
    return Mock(data=data, count=count)


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client"""
    client = Mock()

    # Mock table operations; every builder method returns the same chain
    table_mock = Mock()
    for method in (
        "select", "insert", "update", "delete", "upsert",
        "eq", "in_", "limit", "order", "gte", "lte", "lt",
    ):
        getattr(table_mock, method).return_value = table_mock
    table_mock.execute = AsyncMock(return_value=execute_result([]))

    client.table.return_value = table_mock
    client.rpc.return_value = table_mock

    # Storage bucket
    bucket = Mock()
    bucket.upload = AsyncMock(return_value=None)
    bucket.get_public_url = AsyncMock(return_value="https://test.supabase.co/storage/product-1.jpg")
    bucket.remove = AsyncMock(return_value=None)
    client.storage.from_.return_value = bucket

    # Edge functions and auth
    client.functions.invoke = AsyncMock(return_value={"ok": True})
    client.auth.get_user = AsyncMock(return_value=Mock(user=Mock(id="admin-1", email="admin@test.com")))
    client.auth.sign_in_with_password = AsyncMock()
    client.auth.sign_up = AsyncMock()

    # Realtime channel
    channel = Mock()
    channel.subscribe = AsyncMock(return_value=channel)
    channel.unsubscribe = AsyncMock(return_value=None)
    client.channel.return_value = channel

    return client


@pytest.fixture
def table(mock_supabase_client):
    """The query chain returned by client.table()/client.rpc()"""
    return mock_supabase_client.table.return_value


@pytest.fixture
def database(mock_supabase_client):
    """Database wired to the mocked client"""
    return Database(mock_supabase_client)


@pytest.fixture
def sample_product():
    """Sample product row"""
    return {
        "id": 1,
        "code": "P001",
        "name": "Widget",
        "price": 10.0,
        "stock": 5,
        "category": "Herramientas",
        "description": "Widget de prueba",
        "image_url": None,
        "image_name": None,
        "created_at": "2025-01-01T00:00:00+00:00",
    }


@pytest.fixture
def sample_order():
    """Sample online order row"""
    return {
        "id": 42,
        "customer_name": "Ana Pérez",
        "customer_email": "ana@example.com",
        "customer_phone": "5512345678",
        "customer_address": "Calle 1 #23",
        "notes": "",
        "total": 20.0,
        "status": "pending",
        "created_at": "2025-01-01T10:00:00+00:00",
    }


@pytest.fixture
def sample_sale():
    """Sample sale row"""
    return {
        "id": 7,
        "total": 23.0,
        "items": [
            {"code": "P001", "name": "Widget", "price": 10.0, "quantity": 2},
            {"code": "P002", "name": "Gadget", "price": 3.0, "quantity": 1},
        ],
        "created_at": "2025-01-15T14:30:00+00:00",
    }


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def cart_store():
    return MemoryCartStore()


@pytest.fixture
def cart_service(cart_store, notifier):
    """Cart service over an in-memory store"""
    return CartService(cart_store, notifier, session_id="test-session")
