# core/order_workflow.py
from decimal import Decimal
from sqlalchemy.exc import DisconnectionError, OperationalError
from sqlalchemy.orm import Session

from core import config
from core.cart_store import to_decimal
from core.errors import ConflictError, NotFoundError, TransientConnectivityError, ValidationError, ValidationReason
from core.logger import log_action
from models.order import Order, OrderStatus

STATUS_FLOW = [OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.SERVED]
UNKNOWN_ITEM = "Unknown Item"


def parse_status(value) -> OrderStatus:
    """Accept an OrderStatus or its (case-insensitive) string value."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError(ValidationReason.INVALID_STATUS, f"Unknown order status: {value!r}") from None


def next_status(status):
    """The next forward status, or None once an order is served."""
    current = parse_status(status)
    index = STATUS_FLOW.index(current)
    return STATUS_FLOW[index + 1] if index + 1 < len(STATUS_FLOW) else None


def is_forward_transition(current, target) -> bool:
    return STATUS_FLOW.index(parse_status(target)) > STATUS_FLOW.index(parse_status(current))


def get_order(db: Session, order_id: int) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError(order_id)
    return order


def list_orders(db: Session, status=None):
    """All orders newest first; `status` of None or "all" means no filter"""
    query = db.query(Order)
    if status not in (None, "", "all"):
        query = query.filter(Order.status == parse_status(status).value)
    try:
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    except (OperationalError, DisconnectionError) as e:
        db.rollback()
        raise TransientConnectivityError() from e


def _invalid_transition(order_id, current, target: OrderStatus) -> ValidationError:
    return ValidationError(
        ValidationReason.INVALID_TRANSITION,
        f"Order #{order_id} cannot go from {current} to {target.value}.",
    )


def update_status(db: Session, order_id: int, new_status, *, actor: str = None, expected_version: int = None, strict: bool = None) -> Order:
    """
    Move an order to `new_status` on behalf of a staff member.

    Args:
        db: Database session
        order_id: Order to change
        new_status: Target status (OrderStatus or its string value)
        actor: Name written to the audit log (defaults to STAFF_NAME)
        expected_version: When set, only update if the order is still at this version
        strict: Forward-only transitions; defaults to STRICT_STATUS_TRANSITIONS

    Returns:
        Order: The updated order

    Without `strict` any status may follow any other, and concurrent updates
    are last-write-wins unless `expected_version` is supplied.
    """
    target = parse_status(new_status)
    if strict is None:
        strict = config.STRICT_STATUS_TRANSITIONS

    try:
        # re-read so the strict check sees the stored status, not a cached one
        order = db.query(Order).populate_existing().filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError(order_id)

        seen_status, seen_version = order.status, order.version

        if strict:
            if seen_status == target.value:
                if expected_version is not None and seen_version != expected_version:
                    raise ConflictError(order_id, expected_version, seen_version)
                return order
            if not is_forward_transition(seen_status, target):
                raise _invalid_transition(order_id, seen_status, target)

        query = db.query(Order).filter(Order.id == order_id)
        if expected_version is not None:
            query = query.filter(Order.version == expected_version)
        if strict:
            # the forward check only holds while the status is still the one we read
            query = query.filter(Order.status == seen_status)
        updated = query.update(
            {Order.status: target.value, Order.version: Order.version + 1},
            synchronize_session=False,
        )

        if not updated:
            db.rollback()
            current = db.query(Order.status, Order.version).filter(Order.id == order_id).first()
            if current is None:
                raise NotFoundError(order_id)
            if strict and not is_forward_transition(current.status, target):
                raise _invalid_transition(order_id, current.status, target)
            raise ConflictError(order_id, expected_version if expected_version is not None else seen_version, current.version)

        db.commit()
        db.refresh(order)
    except (OperationalError, DisconnectionError) as e:
        db.rollback()
        raise TransientConnectivityError() from e

    log_action(actor or config.STAFF_NAME, f"Updated order #{order.id} to {target.value}", db=db)
    return order


# ===================== READ HELPERS =====================

def item_name(catalog, item_id) -> str:
    item = catalog.get(item_id) if catalog else None
    return item.name if item else UNKNOWN_ITEM


def line_price(order_item, catalog=None, live: bool = False) -> Decimal:
    """Unit price for one order line: the submission snapshot, or the current menu price"""
    if not live and order_item.unit_price is not None:
        return to_decimal(order_item.unit_price)
    menu_item = catalog.get(order_item.item_id) if catalog else None
    return to_decimal(menu_item.price if menu_item else None)


def order_total(order, catalog=None, live: bool = False) -> Decimal:
    """
    Sum of price x quantity over an order's items.

    Prices come from the snapshot taken at submission. With `live=True` they
    are re-read from `catalog` (item id -> MenuItem), so the total follows
    later menu price changes. Items that cannot be priced count as 0.
    """
    if live and catalog is None:
        raise ValueError("live totals need a catalog")
    return sum((line_price(i, catalog, live) * i.quantity for i in order.items), Decimal("0"))
