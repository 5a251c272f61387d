"""pytest fixtures: in-memory database and a small menu."""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.catalog_service import menu_index
from core.db import create_tables
from models.menu_item import MenuItem
from models.order import Order, OrderItem


@pytest.fixture
def engine():
    """One shared in-memory SQLite connection per test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    create_tables(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture
def db(engine) -> Generator[Session, None, None]:
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def menu(db: Session) -> list[MenuItem]:
    items = [
        MenuItem(name="Jollof Rice", category="Rice", price=Decimal("3500.00")),
        MenuItem(name="Pepper Soup", category="Soups", price=Decimal("4200.00")),
        MenuItem(name="Zobo", category="Drinks", price=Decimal("1200.00")),
    ]
    db.add_all(items)
    db.commit()
    return items


@pytest.fixture
def catalog(menu: list[MenuItem]) -> dict[int, MenuItem]:
    return menu_index(menu)


@pytest.fixture
def make_order(db: Session):
    """Insert an order directly, bypassing the submission boundary."""

    def _make(table_number: int, items=((1, 1),), status: str = "pending", created_at: datetime | None = None) -> Order:
        order = Order(
            table_number=table_number,
            status=status,
            created_at=created_at or datetime.now(timezone.utc),
        )
        order.items = [
            OrderItem(position=i, item_id=item_id, quantity=qty) for i, (item_id, qty) in enumerate(items)
        ]
        db.add(order)
        db.commit()
        return order

    return _make
