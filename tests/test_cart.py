"""
Tests for the cart reducer and models
"""

import random

import pytest
from decimal import Decimal

from core.errors import ValidationError
from core.cart import (
    AddItem,
    CartDecodeError,
    CartItem,
    CartState,
    ClearCart,
    LoadCart,
    ProductSnapshot,
    RemoveItem,
    SetQuantity,
    reduce_cart,
)


def snapshot(id=1, name="Widget", price="10.00", category=None):
    return ProductSnapshot(id=id, name=name, price=Decimal(price), category=category)


class TestCartItem:
    """Tests for CartItem dataclass."""

    def test_price_is_decimal(self):
        item = CartItem(id=1, name="Widget", price=10.5, quantity=2)

        assert item.price == Decimal("10.5")
        assert item.subtotal == Decimal("21.0")

    def test_to_dict_omits_missing_category(self):
        item = CartItem(id=1, name="Widget", price=Decimal("10"), quantity=1)

        assert item.to_dict() == {"id": 1, "name": "Widget", "price": 10.0, "quantity": 1}

    def test_to_dict_keeps_category(self):
        item = CartItem(id="a", name="Widget", price=Decimal("1"), quantity=1, category="Tools")

        assert item.to_dict()["category"] == "Tools"

    @pytest.mark.parametrize("raw", [
        {"id": 1, "name": "W", "price": 1, "quantity": 0},
        {"id": 1, "name": "W", "price": -1, "quantity": 1},
        {"id": 1, "name": "W", "price": "abc", "quantity": 1},
        {"id": 1, "name": "W", "quantity": 1},
        {"id": None, "name": "W", "price": 1, "quantity": 1},
        {"id": 1, "name": "W", "price": 1, "quantity": "2"},
        "not a dict",
    ])
    def test_from_dict_rejects_bad_items(self, raw):
        with pytest.raises(CartDecodeError):
            CartItem.from_dict(raw)

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            CartItem(id=1, name="Widget", price=Decimal("-5"), quantity=1)


class TestProductSnapshot:

    def test_from_dict(self, sample_product):
        snap = ProductSnapshot.from_product(sample_product)

        assert snap.id == 1
        assert snap.name == "Widget"
        assert snap.price == Decimal("10.0")
        assert snap.category == "Herramientas"

    @pytest.mark.parametrize("price", [Decimal("-5"), None, "abc"])
    def test_invalid_price_rejected(self, price):
        with pytest.raises(ValidationError):
            ProductSnapshot(id=1, name="Widget", price=price)


class TestReducer:
    """Tests for reduce_cart."""

    def test_add_new_item(self):
        state = reduce_cart(CartState.empty(), AddItem(snapshot()))

        assert len(state.items) == 1
        assert state.items[0].quantity == 1
        assert state.total == Decimal("10.00")

    def test_add_twice_increments_quantity(self):
        """Adding Widget twice gives one line with quantity 2 and total 20."""
        state = CartState.empty()
        state = reduce_cart(state, AddItem(snapshot()))
        state = reduce_cart(state, AddItem(snapshot()))

        assert len(state.items) == 1
        assert state.items[0].quantity == 2
        assert state.total == Decimal("20.00")

    def test_add_keeps_insertion_order(self):
        state = CartState.empty()
        state = reduce_cart(state, AddItem(snapshot(id=2, name="B")))
        state = reduce_cart(state, AddItem(snapshot(id=1, name="A")))
        state = reduce_cart(state, AddItem(snapshot(id=2, name="B")))

        assert [item.id for item in state.items] == [2, 1]

    def test_add_keeps_snapshot_price(self):
        """A later price change does not touch lines already in the cart."""
        state = reduce_cart(CartState.empty(), AddItem(snapshot(price="10.00")))
        state = reduce_cart(state, AddItem(snapshot(price="99.00")))

        assert state.items[0].price == Decimal("10.00")
        assert state.total == Decimal("20.00")

    def test_set_quantity_zero_removes_item(self):
        """Widget + Gadget, then Widget to 0: only Gadget remains."""
        state = CartState.empty()
        state = reduce_cart(state, AddItem(snapshot(id=1, name="Widget", price="10")))
        state = reduce_cart(state, AddItem(snapshot(id=2, name="Gadget", price="3")))

        state = reduce_cart(state, SetQuantity(1, 0))

        assert [item.id for item in state.items] == [2]
        assert state.total == Decimal("3")

    def test_set_negative_quantity_removes_item(self):
        state = reduce_cart(CartState.empty(), AddItem(snapshot()))

        state = reduce_cart(state, SetQuantity(1, -5))

        assert state.is_empty
        assert state.total == Decimal("0")

    def test_set_quantity(self):
        state = reduce_cart(CartState.empty(), AddItem(snapshot(price="2.50")))

        state = reduce_cart(state, SetQuantity(1, 4))

        assert state.items[0].quantity == 4
        assert state.total == Decimal("10.00")

    def test_set_quantity_unknown_id_is_noop(self):
        state = reduce_cart(CartState.empty(), AddItem(snapshot()))

        assert reduce_cart(state, SetQuantity(99, 3)) == state

    def test_remove_item(self):
        state = reduce_cart(CartState.empty(), AddItem(snapshot()))

        state = reduce_cart(state, RemoveItem(1))

        assert state.is_empty
        assert state.total == Decimal("0")

    def test_remove_unknown_id_is_noop(self):
        state = reduce_cart(CartState.empty(), AddItem(snapshot()))

        assert reduce_cart(state, RemoveItem("missing")) == state

    def test_clear(self):
        state = reduce_cart(CartState.empty(), AddItem(snapshot()))
        state = reduce_cart(state, AddItem(snapshot(id=2)))

        state = reduce_cart(state, ClearCart())

        assert state == CartState.empty()

    def test_total_has_no_float_drift(self):
        state = CartState.empty()
        for i in range(3):
            state = reduce_cart(state, AddItem(snapshot(id=i, price="0.10")))

        assert state.total == Decimal("0.30")

    def test_item_count_sums_quantities(self):
        state = CartState.empty()
        state = reduce_cart(state, AddItem(snapshot(id=1)))
        state = reduce_cart(state, SetQuantity(1, 3))
        state = reduce_cart(state, AddItem(snapshot(id=2)))

        assert state.item_count == 4


class TestLoadCart:
    """Tests for rehydrating persisted carts."""

    def test_round_trip(self):
        """A persisted single-line 45.50 cart loads back identical."""
        state = reduce_cart(CartState.empty(), AddItem(snapshot(price="45.50", category="Tools")))

        loaded = reduce_cart(CartState.empty(), LoadCart(state.to_dict()))

        assert loaded == state
        assert loaded.total == Decimal("45.5")

    def test_total_is_recomputed(self):
        payload = {
            "items": [{"id": 1, "name": "Widget", "price": 10, "quantity": 2}],
            "total": 999,
        }

        state = reduce_cart(CartState.empty(), LoadCart(payload))

        assert state.total == Decimal("20")

    @pytest.mark.parametrize("payload", [
        None,
        "garbage",
        [],
        {"items": []},
        {"total": 0},
        {"items": "nope", "total": 0},
        {"items": [{"id": 1, "name": "W", "price": 1, "quantity": 0}], "total": 0},
        {
            "items": [
                {"id": 1, "name": "W", "price": 1, "quantity": 1},
                {"id": 1, "name": "W", "price": 1, "quantity": 2},
            ],
            "total": 3,
        },
    ])
    def test_malformed_payload_gives_empty_cart(self, payload):
        state = reduce_cart(reduce_cart(CartState.empty(), AddItem(snapshot())), LoadCart(payload))

        assert state == CartState.empty()



class TestActionSequences:
    """Random ADD/REMOVE/SET_QUANTITY sequences keep the cart consistent."""

    PRODUCTS = [
        snapshot(id=1, name="Widget", price="10.00"),
        snapshot(id=2, name="Gadget", price="0.10", category="Otros"),
        snapshot(id="p-3", name="Tornillo", price="45.50"),
        snapshot(id=4, name="Tuerca", price="0.00"),
        snapshot(id=5, name="Cable", price="1999.99", category="Herramientas"),
    ]

    def random_action(self, rng):
        product = rng.choice(self.PRODUCTS)
        kind = rng.randrange(3)
        if kind == 0:
            return AddItem(product)
        if kind == 1:
            return RemoveItem(product.id)
        return SetQuantity(product.id, rng.randint(-2, 6))

    @pytest.mark.parametrize("seed", range(5))
    def test_invariants_hold_after_every_step(self, seed):
        rng = random.Random(seed)

        for _ in range(60):
            state = CartState.empty()
            for _ in range(rng.randint(1, 25)):
                state = reduce_cart(state, self.random_action(rng))

                assert state.total == sum((i.price * i.quantity for i in state.items), Decimal("0"))
                assert all(item.quantity >= 1 for item in state.items)
                ids = [item.id for item in state.items]
                assert len(ids) == len(set(ids))
                assert reduce_cart(CartState.empty(), LoadCart(state.to_dict())) == state
