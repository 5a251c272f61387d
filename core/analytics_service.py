from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Session
import pandas as pd

from core import config
from core.order_workflow import order_total, parse_status
from models.dining_table import DiningTable
from models.menu_item import MenuItem
from models.order import Order, OrderStatus

FRAME_COLUMNS = ["id", "table_number", "status", "created_at", "date", "items", "total"]


def _zone(tz=None):
    tz = tz or config.ORDER_TIMEZONE
    return ZoneInfo(tz) if isinstance(tz, str) else tz


def local_created_at(order, tz=None) -> datetime:
    """created_at in the dashboard's time zone; naive timestamps are taken as UTC"""
    created = order.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created.astimezone(_zone(tz))


# ===================== PROJECTIONS =====================

def orders_for_table(orders, table_number: int):
    """Orders placed at `table_number`, in their original order"""
    return [o for o in orders if o.table_number == table_number]


def orders_created_on(orders, day, tz=None):
    """Orders whose local calendar day is `day`"""
    if isinstance(day, datetime):
        day = day.date()
    return [o for o in orders if local_created_at(o, tz).date() == day]


def count_by_status(orders, status) -> int:
    target = parse_status(status).value
    return sum(1 for o in orders if o.status == target)


def status_breakdown(orders):
    """Count per status, every status present even at zero"""
    return {s.value: count_by_status(orders, s) for s in OrderStatus}


def recent_orders(orders, limit: int = None):
    limit = config.RECENT_ORDERS_LIMIT if limit is None else limit
    ordered = sorted(orders, key=lambda o: (local_created_at(o, timezone.utc), o.id or 0), reverse=True)
    return ordered[:limit]


# ===================== DATAFRAMES (charts) =====================

def orders_frame(orders, catalog=None, tz=None) -> pd.DataFrame:
    """One row per order with its local date, item count and total"""
    rows = []
    for o in orders:
        created = local_created_at(o, tz)
        rows.append({
            "id": o.id,
            "table_number": o.table_number,
            "status": o.status,
            "created_at": created,
            "date": created.date(),
            "items": sum(i.quantity for i in o.items),
            "total": float(order_total(o, catalog)),
        })
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def daily_order_counts(orders, catalog=None, tz=None) -> pd.DataFrame:
    """Orders and revenue per local day, oldest first"""
    frame = orders_frame(orders, catalog, tz)
    if frame.empty:
        return pd.DataFrame(columns=["date", "orders", "revenue"])
    grouped = frame.groupby("date").agg(orders=("id", "count"), revenue=("total", "sum"))
    return grouped.reset_index().sort_values("date").reset_index(drop=True)


def orders_per_table(orders, catalog=None) -> pd.DataFrame:
    """Orders and revenue per table number"""
    frame = orders_frame(orders, catalog)
    if frame.empty:
        return pd.DataFrame(columns=["table_number", "orders", "revenue"])
    grouped = frame.groupby("table_number").agg(orders=("id", "count"), revenue=("total", "sum"))
    return grouped.reset_index().sort_values("table_number").reset_index(drop=True)


# ===================== DASHBOARD =====================

def get_dashboard_summary(db: Session, today: date = None, tz=None):
    """
    Headline numbers for the staff dashboard
    Returns: dict with menu, table, pending and today's order counts
    """
    orders = db.query(Order).all()
    if today is None:
        today = datetime.now(_zone(tz)).date()

    return {
        "total_menu_items": db.query(MenuItem).count(),
        "total_tables": db.query(DiningTable).count(),
        "pending_orders": count_by_status(orders, OrderStatus.PENDING),
        "today_orders": len(orders_created_on(orders, today, tz)),
    }
