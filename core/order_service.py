# core/order_service.py
"""
Order submission: the only way a cart becomes an Order.

`build_order_request` validates and snapshots a cart, `create_order` persists a
request, and `submit_order` ties the two together and clears the cart once the
order is stored.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from sqlalchemy.exc import DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from core import config
from core.cart_store import CartStore, to_decimal
from core.errors import TransientConnectivityError, ValidationError, ValidationReason
from core.table_service import is_valid_table_number, table_exists
from models.order import Order, OrderItem, OrderStatus


@dataclass(frozen=True)
class OrderItemRequest:
    item_id: int
    quantity: int
    unit_price: Optional[Decimal] = None


@dataclass(frozen=True)
class OrderRequest:
    table_number: int
    items: Tuple[OrderItemRequest, ...]
    notes: Optional[str] = None
    status: str = OrderStatus.PENDING.value
    idempotency_key: Optional[str] = None

    def to_payload(self):
        """Wire form: {table_number, items: [{item_id, quantity}], notes?, status}."""
        payload = {
            "table_number": self.table_number,
            "items": [{"item_id": i.item_id, "quantity": i.quantity} for i in self.items],
            "status": self.status,
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload


def validate_table_number(table_number):
    if not is_valid_table_number(table_number):
        raise ValidationError(ValidationReason.INVALID_TABLE_NUMBER)


def build_order_request(cart: CartStore, table_number: int, notes: str = None, idempotency_key: str = None) -> OrderRequest:
    """Validate the input and snapshot the cart into an immutable request."""
    validate_table_number(table_number)

    lines = cart.lines()  # one snapshot; later cart edits cannot leak into the request
    items = tuple(
        OrderItemRequest(item_id=line.item_id, quantity=line.quantity, unit_price=to_decimal(line.item.price))
        for line in lines
        if line.quantity > 0
    )
    if not items:
        raise ValidationError(ValidationReason.EMPTY_CART)

    notes = (notes or "").strip() or None
    return OrderRequest(table_number=table_number, items=items, notes=notes, idempotency_key=idempotency_key)


def find_by_idempotency_key(db: Session, key: str):
    if not key:
        return None
    return db.query(Order).filter(Order.idempotency_key == key).first()


def create_order(db: Session, request: OrderRequest) -> Order:
    """
    Persist an order request.

    A request whose idempotency key is already stored returns the existing
    order instead of creating a duplicate.
    """
    try:
        existing = find_by_idempotency_key(db, request.idempotency_key)
        if existing:
            print(f"Duplicate submission for table {request.table_number}, returning order #{existing.id}")
            return existing

        order = Order(
            table_number=request.table_number,
            notes=request.notes,
            status=request.status,
            idempotency_key=request.idempotency_key,
        )
        order.items = [
            OrderItem(position=index, item_id=item.item_id, quantity=item.quantity, unit_price=item.unit_price)
            for index, item in enumerate(request.items)
        ]
        db.add(order)
        db.commit()
        db.refresh(order)
        return order
    except IntegrityError:
        # a concurrent submission with the same key committed first
        db.rollback()
        existing = find_by_idempotency_key(db, request.idempotency_key)
        if existing is None:
            raise
        print(f"Duplicate submission for table {request.table_number}, returning order #{existing.id}")
        return existing
    except (OperationalError, DisconnectionError) as e:
        db.rollback()
        raise TransientConnectivityError() from e


def submit_order(
    db: Session,
    cart: CartStore,
    table_number: int,
    notes: str = None,
    *,
    create=create_order,
    validate_table: bool = None,
) -> Order:
    """
    Turn the cart into a pending order for `table_number`.

    Args:
        db: Database session handed to `create`
        cart: The customer's cart
        table_number: Table the order is for
        notes: Optional free text for the kitchen
        create: Persistence call, `create(db, request) -> Order`
        validate_table: Check the table registry; defaults to VALIDATE_TABLE_NUMBERS

    Returns:
        Order: The stored order

    The cart is cleared and its notes reset only after `create` succeeds, so a
    failed submission can be retried with the same cart and checkout token.
    """
    request = build_order_request(cart, table_number, notes, idempotency_key=cart.checkout_token)

    if validate_table is None:
        validate_table = config.VALIDATE_TABLE_NUMBERS
    if validate_table and not table_exists(db, table_number):
        raise ValidationError(ValidationReason.UNKNOWN_TABLE)

    order = create(db, request)

    cart.clear_cart()
    cart.notes = ""
    cart.rotate_checkout_token()
    return order
