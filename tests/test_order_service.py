"""Order submission: validation, snapshotting, persistence and cart reset."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from core import order_service
from core.cart_store import CartStore
from core.errors import TransientConnectivityError, ValidationError, ValidationReason
from core.order_service import (
    OrderItemRequest,
    build_order_request,
    create_order,
    submit_order,
)
from core.order_workflow import order_total
from core.table_service import create_table
from models.order import Order


class StubCreate:
    """Persistence stand-in that records calls."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls = []
        self.error = error

    def __call__(self, db, request):
        self.calls.append(request)
        if self.error:
            raise self.error
        return Order(id=len(self.calls), table_number=request.table_number, status=request.status)


@pytest.fixture
def cart(menu) -> CartStore:
    rice, soup, _ = menu
    store = CartStore()
    store.add_item(rice)
    store.add_item(rice)
    store.add_item(soup)
    return store


class TestValidation:
    def test_empty_cart_never_reaches_persistence(self, db) -> None:
        stub = StubCreate()
        with pytest.raises(ValidationError) as exc:
            submit_order(db, CartStore(), 5, create=stub)
        assert exc.value.reason is ValidationReason.EMPTY_CART
        assert len(stub.calls) == 0

    @pytest.mark.parametrize("table_number", [0, -3, "5", 2.5, None, True])
    def test_invalid_table_number(self, db, cart: CartStore, table_number) -> None:
        stub = StubCreate()
        with pytest.raises(ValidationError) as exc:
            submit_order(db, cart, table_number, create=stub)
        assert exc.value.reason is ValidationReason.INVALID_TABLE_NUMBER
        assert len(stub.calls) == 0
        assert cart.total_items() == 3

    def test_unknown_table_when_registry_checked(self, db, cart: CartStore) -> None:
        stub = StubCreate()
        with pytest.raises(ValidationError) as exc:
            submit_order(db, cart, 5, create=stub, validate_table=True)
        assert exc.value.reason is ValidationReason.UNKNOWN_TABLE
        assert len(stub.calls) == 0

    def test_registered_table_passes_registry_check(self, db, cart: CartStore) -> None:
        create_table(db, 5)
        stub = StubCreate()
        submit_order(db, cart, 5, create=stub, validate_table=True)
        assert len(stub.calls) == 1


class TestBuildOrderRequest:
    def test_items_keep_only_id_and_quantity(self, menu, cart: CartStore) -> None:
        rice, soup, _ = menu
        request = build_order_request(cart, 5)
        assert [(i.item_id, i.quantity) for i in request.items] == [(rice.id, 2), (soup.id, 1)]
        assert request.table_number == 5
        assert request.status == "pending"

    def test_snapshot_ignores_later_cart_changes(self, menu, cart: CartStore) -> None:
        rice, soup, drink = menu
        request = build_order_request(cart, 5)
        cart.add_item(drink)
        cart.update_quantity(rice.id, 0)
        assert [(i.item_id, i.quantity) for i in request.items] == [(rice.id, 2), (soup.id, 1)]

    def test_unit_price_is_snapshotted(self, menu, cart: CartStore) -> None:
        request = build_order_request(cart, 5)
        assert request.items[0] == OrderItemRequest(item_id=menu[0].id, quantity=2, unit_price=Decimal("3500.00"))

    def test_blank_notes_become_none(self, cart: CartStore) -> None:
        assert build_order_request(cart, 5, "   ").notes is None
        assert build_order_request(cart, 5, " no pepper ").notes == "no pepper"

    def test_payload_shape(self, menu, cart: CartStore) -> None:
        payload = build_order_request(cart, 5, "extra napkins").to_payload()
        assert payload == {
            "table_number": 5,
            "items": [{"item_id": menu[0].id, "quantity": 2}, {"item_id": menu[1].id, "quantity": 1}],
            "status": "pending",
            "notes": "extra napkins",
        }

    def test_payload_without_notes(self, cart: CartStore) -> None:
        assert "notes" not in build_order_request(cart, 5).to_payload()


class TestSubmitOrder:
    def test_round_trip(self, db, menu, cart: CartStore) -> None:
        rice, soup, _ = menu
        order = submit_order(db, cart, 5)

        stored = db.query(Order).filter(Order.id == order.id).one()
        assert stored.table_number == 5
        assert stored.status == "pending"
        assert stored.version == 1
        assert stored.created_at is not None
        assert [(i.item_id, i.quantity) for i in stored.items] == [(rice.id, 2), (soup.id, 1)]

    def test_success_clears_cart_and_notes(self, db, cart: CartStore) -> None:
        cart.notes = "no onions"
        token = cart.checkout_token
        submit_order(db, cart, 5, cart.notes)
        assert cart.lines() == ()
        assert cart.notes == ""
        assert cart.checkout_token != token

    def test_notes_are_stored(self, db, cart: CartStore) -> None:
        order = submit_order(db, cart, 3, "birthday candle please")
        assert db.get(Order, order.id).notes == "birthday candle please"

    def test_failure_keeps_cart_for_retry(self, db, cart: CartStore) -> None:
        cart.notes = "no onions"
        token = cart.checkout_token
        stub = StubCreate(error=TransientConnectivityError())

        with pytest.raises(TransientConnectivityError):
            submit_order(db, cart, 5, cart.notes, create=stub)

        assert cart.total_items() == 3
        assert cart.notes == "no onions"
        assert cart.checkout_token == token
        assert stub.calls[0].idempotency_key == token

    def test_total_uses_price_at_submission(self, db, menu, catalog, cart: CartStore) -> None:
        order = submit_order(db, cart, 5)
        menu[0].price = Decimal("9999.00")
        db.commit()

        assert order_total(order, catalog) == Decimal("11200.00")
        assert order_total(order, catalog, live=True) == Decimal("9999.00") * 2 + Decimal("4200.00")


class TestCreateOrder:
    def test_same_idempotency_key_returns_existing_order(self, db, cart: CartStore) -> None:
        request = build_order_request(cart, 5, idempotency_key="abc123")
        first = create_order(db, request)
        second = create_order(db, request)
        assert first.id == second.id
        assert db.query(Order).count() == 1

    def test_without_key_every_call_creates(self, db, cart: CartStore) -> None:
        request = build_order_request(cart, 5)
        create_order(db, request)
        create_order(db, request)
        assert db.query(Order).count() == 2

    def test_unreachable_store_maps_to_transient_error(self, cart: CartStore) -> None:
        session = MagicMock()
        session.query.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        request = build_order_request(cart, 5, idempotency_key="abc123")

        with pytest.raises(TransientConnectivityError):
            create_order(session, request)
        session.rollback.assert_called_once()
        session.commit.assert_not_called()

    def test_concurrent_duplicate_returns_stored_order(self, db, cart: CartStore, monkeypatch) -> None:
        request = build_order_request(cart, 5, idempotency_key="tok")
        first = create_order(db, request)

        # the second submission looked the key up before the first one committed
        real = order_service.find_by_idempotency_key
        lookups = []

        def lookup_before_commit(session, key):
            lookups.append(key)
            return None if len(lookups) == 1 else real(session, key)

        monkeypatch.setattr(order_service, "find_by_idempotency_key", lookup_before_commit)

        second = create_order(db, request)

        assert second.id == first.id
        assert db.query(Order).count() == 1
