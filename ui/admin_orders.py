"""
Orders Management Tab for Admin Panel
"""
import flet as ft
from core.analytics_service import local_created_at
from core.config import STAFF_NAME
from core.errors import OrderingError
from core.order_workflow import item_name, list_orders, next_status, order_total, update_status
from core.utils import format_price
from models.order import OrderStatus
from ui.admin_constants import (
    DESKTOP_COLUMNS, GRID_SPACING, GRID_RUN_SPACING,
    STATUS_COLORS, STATUS_FILTERS
)

def build_orders_tab(page: ft.Page, db, catalog, is_desktop: bool, on_changed=None):
    """
    Build the Orders management tab

    Args:
        page: Flet page object
        db: Database session
        catalog: item id -> MenuItem, for names and live prices
        is_desktop: True if desktop layout, False if mobile
        on_changed: Called after a status change (refreshes the dashboard)

    Returns:
        ft.Tab: Complete orders tab with all functionality
    """
    filter_state = {"status": "all"}

    # ===================== CARD BUILDER =====================

    def build_order_card(order):
        """Build a single order card - same design for mobile & desktop"""
        bg, fg = STATUS_COLORS.get(order.status, ("grey200", "grey900"))
        created = local_created_at(order)
        upcoming = next_status(order.status)

        return ft.Card(
            content=ft.Container(
                content=ft.Column([
                    ft.Row([
                        ft.Text(f"Table {order.table_number}  ·  #{order.id}", weight="bold", size=14, color="black"),
                        ft.Container(
                            content=ft.Text(order.status.capitalize(), color=fg, size=12),
                            bgcolor=bg,
                            padding=5,
                            border_radius=5
                        )
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    ft.Text(created.strftime("%Y-%m-%d %H:%M"), size=11, color="grey700"),
                    *[
                        ft.Text(f"{i.quantity}x {item_name(catalog, i.item_id)}", size=12, color="black")
                        for i in order.items
                    ],
                    ft.Text(f"Notes: {order.notes}", size=11, color="grey700", italic=True) if order.notes else ft.Container(),
                    ft.Row([
                        ft.Text(f"Total: {format_price(order_total(order, catalog))}", size=14, weight="bold", color="green"),
                        ft.Row([
                            ft.ElevatedButton(
                                status.value.capitalize(),
                                on_click=lambda e, o=order, s=status: change_status(o, s),
                                disabled=order.status == status.value,
                                style=ft.ButtonStyle(
                                    padding=8,
                                    color="white" if status == upcoming else "blue700",
                                    bgcolor="#D97706" if status == upcoming else "grey200"
                                ),
                                height=35
                            ) for status in OrderStatus
                        ], spacing=5)
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN)
                ], spacing=3),
                padding=10,
                bgcolor='white',
                border_radius=12
            )
        )

    # ===================== GRID/LIST CONTAINERS =====================

    orders_grid = ft.GridView(
        runs_count=DESKTOP_COLUMNS,
        max_extent=500,
        child_aspect_ratio=1.6,
        spacing=GRID_SPACING,
        run_spacing=GRID_RUN_SPACING,
        expand=True
    )
    orders_list = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)
    container = orders_grid if is_desktop else orders_list

    # ===================== LOAD DATA =====================

    def load_orders(e=None):
        db.expire_all()  # pick up changes made by other staff sessions
        container.controls.clear()
        orders = list_orders(db, filter_state["status"])
        if not orders:
            label = "No orders yet" if filter_state["status"] == "all" else f"No {filter_state['status']} orders"
            container.controls.append(ft.Text(label, size=14, color="grey700"))
        for order in orders:
            container.controls.append(build_order_card(order))
        page.update()

    def on_filter_change(e):
        filter_state["status"] = e.control.value
        load_orders()

    # ===================== UPDATE ORDER STATUS =====================

    def change_status(order, status):
        try:
            updated = update_status(db, order.id, status, actor=STAFF_NAME, expected_version=order.version)
        except OrderingError as ex:
            page.snack_bar = ft.SnackBar(ft.Text(ex.message), bgcolor=ft.Colors.RED_400, open=True)
            load_orders()
            return

        load_orders()
        if on_changed:
            on_changed()
        page.snack_bar = ft.SnackBar(ft.Text(f"Order #{updated.id} → {updated.status}"), bgcolor=ft.Colors.GREEN, open=True)
        page.update()

    # ===================== BUILD TAB =====================

    load_orders()

    return ft.Tab(
        text="Orders",
        icon=ft.Icons.RECEIPT_LONG,
        content=ft.Column([
            ft.Container(
                content=ft.Row([
                    ft.Text("Manage Orders", size=20, weight="bold", color='black'),
                    ft.Row([
                        ft.Dropdown(
                            value="all",
                            width=150,
                            options=[ft.dropdown.Option(s, s.capitalize()) for s in STATUS_FILTERS],
                            on_change=on_filter_change
                        ),
                        ft.IconButton(icon=ft.Icons.REFRESH, tooltip="Refresh", on_click=load_orders)
                    ], spacing=5)
                ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                padding=10
            ),
            ft.Container(content=container, expand=True, padding=10)
        ], expand=True, spacing=0)
    )
