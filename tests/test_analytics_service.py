"""Read projections over orders: per table, per day, per status."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from core.analytics_service import (
    count_by_status,
    daily_order_counts,
    get_dashboard_summary,
    local_created_at,
    orders_created_on,
    orders_for_table,
    orders_frame,
    orders_per_table,
    recent_orders,
    status_breakdown,
)
from core.table_service import create_table


def _order(id: int, table: int, status: str = "pending", created_at: datetime | None = None, items=()):
    return SimpleNamespace(
        id=id,
        table_number=table,
        status=status,
        created_at=created_at or datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc),
        items=[SimpleNamespace(item_id=i, quantity=q, unit_price=Decimal(p)) for i, q, p in items],
    )


class TestOrdersForTable:
    def test_filters_by_table_number_keeping_order(self) -> None:
        a, b, c = _order(1, 5), _order(2, 7), _order(3, 5)
        assert orders_for_table([a, b, c], 5) == [a, c]

    def test_no_match(self) -> None:
        assert orders_for_table([_order(1, 5)], 9) == []


class TestOrdersCreatedOn:
    def test_same_utc_day(self) -> None:
        morning = _order(1, 1, created_at=datetime(2026, 10, 17, 8, 0, tzinfo=timezone.utc))
        yesterday = _order(2, 1, created_at=datetime(2026, 10, 16, 23, 59, tzinfo=timezone.utc))
        assert orders_created_on([morning, yesterday], date(2026, 10, 17), tz="UTC") == [morning]

    def test_day_boundary_follows_time_zone(self) -> None:
        # 23:30 UTC is already the next day in Lagos (UTC+1)
        late = _order(1, 1, created_at=datetime(2026, 10, 17, 23, 30, tzinfo=timezone.utc))
        assert orders_created_on([late], date(2026, 10, 18), tz="Africa/Lagos") == [late]
        assert orders_created_on([late], date(2026, 10, 17), tz="Africa/Lagos") == []

    def test_naive_timestamps_are_utc(self) -> None:
        naive = _order(1, 1, created_at=datetime(2026, 10, 17, 23, 30))
        assert local_created_at(naive, "Africa/Lagos").date() == date(2026, 10, 18)

    def test_accepts_datetime_as_day(self) -> None:
        order = _order(1, 1)
        assert orders_created_on([order], datetime(2026, 10, 17, 20, 0), tz="UTC") == [order]


class TestStatusCounts:
    def test_count_by_status(self) -> None:
        orders = [_order(1, 1), _order(2, 1, "served"), _order(3, 2)]
        assert count_by_status(orders, "pending") == 2
        assert count_by_status(orders, "preparing") == 0

    def test_breakdown_lists_every_status(self) -> None:
        assert status_breakdown([_order(1, 1, "served")]) == {"pending": 0, "preparing": 0, "served": 1}


class TestRecentOrders:
    def test_newest_first_with_limit(self) -> None:
        orders = [
            _order(i, 1, created_at=datetime(2026, 10, 17, i, 0, tzinfo=timezone.utc))
            for i in range(1, 8)
        ]
        assert [o.id for o in recent_orders(orders, limit=5)] == [7, 6, 5, 4, 3]


class TestFrames:
    @pytest.fixture
    def orders(self):
        return [
            _order(1, 5, created_at=datetime(2026, 10, 16, 12, tzinfo=timezone.utc), items=[(1, 2, "100.00")]),
            _order(2, 5, created_at=datetime(2026, 10, 17, 12, tzinfo=timezone.utc), items=[(1, 1, "100.00"), (2, 1, "50.00")]),
            _order(3, 7, "served", created_at=datetime(2026, 10, 17, 13, tzinfo=timezone.utc), items=[(2, 3, "50.00")]),
        ]

    def test_orders_frame(self, orders) -> None:
        frame = orders_frame(orders, tz="UTC")
        assert list(frame["id"]) == [1, 2, 3]
        assert list(frame["items"]) == [2, 2, 3]
        assert list(frame["total"]) == [200.0, 150.0, 150.0]

    def test_daily_counts(self, orders) -> None:
        daily = daily_order_counts(orders, tz="UTC")
        assert list(daily["date"]) == [date(2026, 10, 16), date(2026, 10, 17)]
        assert list(daily["orders"]) == [1, 2]
        assert list(daily["revenue"]) == [200.0, 300.0]

    def test_per_table(self, orders) -> None:
        per_table = orders_per_table(orders)
        assert list(per_table["table_number"]) == [5, 7]
        assert list(per_table["orders"]) == [2, 1]

    def test_empty_frames(self) -> None:
        assert daily_order_counts([]).empty
        assert orders_per_table([]).empty
        assert orders_frame([]).empty


class TestDashboardSummary:
    def test_counts(self, db, menu, make_order) -> None:
        create_table(db, 1)
        create_table(db, 2)
        make_order(1, created_at=datetime(2026, 10, 17, 9, tzinfo=timezone.utc))
        make_order(2, status="served", created_at=datetime(2026, 10, 17, 10, tzinfo=timezone.utc))
        make_order(2, created_at=datetime(2026, 10, 15, 10, tzinfo=timezone.utc))

        summary = get_dashboard_summary(db, today=date(2026, 10, 17), tz="UTC")

        assert summary == {
            "total_menu_items": 3,
            "total_tables": 2,
            "pending_orders": 2,
            "today_orders": 2,
        }
