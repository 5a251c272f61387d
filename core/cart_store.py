# core/cart_store.py
"""
Session-scoped shopping cart.

One CartStore belongs to one customer session. The UI creates it, keeps it in
the Flet session and passes it to every view that needs it.
"""
import threading
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class CartLine:
    item: object  # MenuItem (or anything with id, name, price)
    quantity: int

    @property
    def item_id(self):
        return self.item.id

    @property
    def subtotal(self) -> Decimal:
        return to_decimal(self.item.price) * self.quantity


class CartStore:
    def __init__(self):
        self._lines = []
        self._lock = threading.Lock()
        self._checkout_token: Optional[str] = None
        self.notes = ""

    # ===================== MUTATIONS =====================

    def add_item(self, item):
        """Add one of `item`, bumping its line if it is already in the cart."""
        with self._lock:
            for index, line in enumerate(self._lines):
                if line.item_id == item.id:
                    self._lines[index] = replace(line, quantity=line.quantity + 1)
                    return
            self._lines.append(CartLine(item=item, quantity=1))

    def update_quantity(self, item_id, new_quantity: int):
        """Set a line's quantity; zero or less removes the line. Unknown ids are ignored."""
        with self._lock:
            for index, line in enumerate(self._lines):
                if line.item_id != item_id:
                    continue
                if new_quantity <= 0:
                    del self._lines[index]
                else:
                    self._lines[index] = replace(line, quantity=int(new_quantity))
                return

    def adjust_quantity(self, item_id, delta: int):
        """Change a line's quantity by `delta` against its current value; dropping to zero removes it."""
        with self._lock:
            for index, line in enumerate(self._lines):
                if line.item_id != item_id:
                    continue
                quantity = line.quantity + int(delta)
                if quantity <= 0:
                    del self._lines[index]
                else:
                    self._lines[index] = replace(line, quantity=quantity)
                return

    def remove_item(self, item_id):
        self.update_quantity(item_id, 0)

    def clear_cart(self):
        with self._lock:
            self._lines = []

    # ===================== QUERIES =====================

    def lines(self):
        """Immutable snapshot of the current lines."""
        with self._lock:
            return tuple(self._lines)

    def is_empty(self) -> bool:
        return not self.lines()

    def quantity_of(self, item_id) -> int:
        for line in self.lines():
            if line.item_id == item_id:
                return line.quantity
        return 0

    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines())

    def total_price(self) -> Decimal:
        return sum((line.subtotal for line in self.lines()), Decimal("0"))

    # ===================== CHECKOUT TOKEN =====================

    @property
    def checkout_token(self) -> str:
        """Idempotency key for the next submission; stable until it succeeds."""
        with self._lock:
            if self._checkout_token is None:
                self._checkout_token = uuid.uuid4().hex
            return self._checkout_token

    def rotate_checkout_token(self):
        with self._lock:
            self._checkout_token = None

    # ===================== LOCAL STORAGE =====================

    def to_storage(self):
        """JSON-friendly form for Flet client storage."""
        return [{"item_id": line.item_id, "quantity": line.quantity} for line in self.lines()]

    @classmethod
    def from_storage(cls, data, catalog):
        """
        Rebuild a cart saved with `to_storage`.

        Args:
            data: list of {"item_id", "quantity"} dicts (None is treated as empty)
            catalog: mapping of item id -> current MenuItem

        Lines for items no longer on the menu, or with a non-positive quantity,
        are dropped.
        """
        store = cls()
        for entry in data or []:
            try:
                item = catalog.get(entry["item_id"])
                quantity = int(entry["quantity"])
            except (KeyError, TypeError, ValueError):
                continue
            if item is None or quantity <= 0:
                continue
            store.add_item(item)
            store.update_quantity(item.id, quantity)
        return store
