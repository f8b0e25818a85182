"""
Tests for CartService: persistence, toasts and stock checks
"""

import json
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from core.cart import CartService, MemoryCartStore, cart_key
from core.errors import OutOfStockError, ValidationError
from core.notifications import Notifier


def product(id=1, name="Widget", price=10.0, stock=5, category=None):
    return {"id": id, "name": name, "price": price, "stock": stock, "category": category}


def test_cart_key():
    assert cart_key() == "ventafacil_cart"
    assert cart_key("abc123") == "ventafacil_cart:abc123"


class TestInitialize:

    @pytest.mark.asyncio
    async def test_empty_store_gives_empty_cart(self, cart_service):
        state = await cart_service.initialize()

        assert state.is_empty

    @pytest.mark.asyncio
    async def test_restores_persisted_cart(self, cart_store, notifier):
        payload = {"items": [{"id": 1, "name": "Widget", "price": 45.5, "quantity": 1}], "total": 45.5}
        await cart_store.set(cart_key("s1"), json.dumps(payload))

        service = CartService(cart_store, notifier, session_id="s1")
        state = await service.initialize()

        assert state.total == Decimal("45.5")
        assert service.get_item_quantity(1) == 1

    @pytest.mark.asyncio
    async def test_corrupted_json_gives_empty_cart(self, cart_store, notifier):
        await cart_store.set(cart_key("s1"), "{not json")

        service = CartService(cart_store, notifier, session_id="s1")
        state = await service.initialize()

        assert state.is_empty

    @pytest.mark.asyncio
    async def test_read_failure_gives_empty_cart(self, notifier):
        store = MemoryCartStore()
        store.get = AsyncMock(side_effect=ConnectionError("redis down"))

        service = CartService(store, notifier)
        state = await service.initialize()

        assert state.is_empty


class TestMutations:

    @pytest.mark.asyncio
    async def test_add_persists_and_notifies(self, cart_service, cart_store, notifier):
        await cart_service.add_to_cart(product())
        await cart_service.add_to_cart(product())

        stored = json.loads(await cart_store.get(cart_service.key))
        assert stored == {
            "items": [{"id": 1, "name": "Widget", "price": 10.0, "quantity": 2}],
            "total": 20.0,
        }
        assert notifier.drain() == [
            {"level": "success", "message": "Widget agregado al carrito"},
            {"level": "success", "message": "Widget agregado al carrito"},
        ]

    @pytest.mark.asyncio
    async def test_add_out_of_stock(self, cart_service, notifier):
        with pytest.raises(OutOfStockError) as exc_info:
            await cart_service.add_to_cart(product(stock=0))

        assert "sin stock" in str(exc_info.value)
        assert cart_service.cart.is_empty
        assert notifier.drain() == []

    @pytest.mark.asyncio
    async def test_add_beyond_stock(self, cart_service):
        await cart_service.add_to_cart(product(stock=1))

        with pytest.raises(OutOfStockError) as exc_info:
            await cart_service.add_to_cart(product(stock=1))

        assert str(exc_info.value) == "Solo hay 1 unidades disponibles"
        assert cart_service.get_item_quantity(1) == 1

    @pytest.mark.asyncio
    async def test_add_negative_price_keeps_cart(self, cart_service, cart_store, notifier):
        await cart_service.add_to_cart(product())

        with pytest.raises(ValidationError):
            await cart_service.add_to_cart(product(id=2, price=-5))

        assert notifier.drain() == [{"level": "success", "message": "Widget agregado al carrito"}]
        reloaded = CartService(cart_store, Notifier(), session_id="test-session")
        state = await reloaded.initialize()
        assert [item.id for item in state.items] == [1]
        assert state.total == Decimal("10.0")

    @pytest.mark.asyncio
    async def test_remove_notifies_with_name(self, cart_service, notifier):
        await cart_service.add_to_cart(product())
        notifier.drain()

        await cart_service.remove_from_cart(1)

        assert cart_service.cart.is_empty
        assert notifier.drain() == [{"level": "success", "message": "Widget eliminado del carrito"}]

    @pytest.mark.asyncio
    async def test_remove_absent_is_silent(self, cart_service, cart_store, notifier):
        await cart_service.remove_from_cart(1)

        assert notifier.drain() == []
        assert await cart_store.get(cart_service.key) is None

    @pytest.mark.asyncio
    async def test_update_quantity_zero_removes_silently(self, cart_service, cart_store, notifier):
        await cart_service.add_to_cart(product(id=1, price=10.0))
        await cart_service.add_to_cart(product(id=2, name="Gadget", price=3.0))
        notifier.drain()

        await cart_service.update_quantity(1, 0)

        assert cart_service.cart.total == Decimal("3")
        assert not cart_service.is_in_cart(1)
        assert notifier.drain() == []
        stored = json.loads(await cart_store.get(cart_service.key))
        assert stored["total"] == 3.0

    @pytest.mark.asyncio
    async def test_clear(self, cart_service, cart_store, notifier):
        await cart_service.add_to_cart(product())
        notifier.drain()

        await cart_service.clear_cart()

        assert cart_service.get_item_count() == 0
        assert json.loads(await cart_store.get(cart_service.key)) == {"items": [], "total": 0.0}
        assert notifier.drain() == [{"level": "success", "message": "Carrito vaciado"}]

    @pytest.mark.asyncio
    async def test_write_failure_keeps_memory_state(self, notifier):
        store = MemoryCartStore()
        store.set = AsyncMock(side_effect=ConnectionError("redis down"))
        service = CartService(store, notifier)

        await service.add_to_cart(product())

        assert service.get_item_quantity(1) == 1
        assert notifier.drain() == [{"level": "success", "message": "Widget agregado al carrito"}]

    @pytest.mark.asyncio
    async def test_sessions_are_isolated(self, cart_store):
        first = CartService(cart_store, Notifier(), session_id="visitor-one")
        second = CartService(cart_store, Notifier(), session_id="visitor-two")

        await first.add_to_cart(product())
        await second.initialize()

        assert second.cart.is_empty
