import flet as ft
from core.analytics_service import local_created_at, orders_for_table
from core.db import session_scope
from core.errors import OrderingError
from core.order_workflow import item_name, list_orders, order_total
from core.utils import format_price
from ui.admin_constants import STATUS_COLORS

def table_orders_widget(page, table_number, catalog, on_nav):
    """Orders placed at this table, newest first, with a manual refresh."""
    order_column = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)

    def status_badge(status):
        bg, fg = STATUS_COLORS.get(status, ("grey200", "grey900"))
        return ft.Container(
            content=ft.Text(status.capitalize(), color=fg, size=12),
            bgcolor=bg,
            padding=5,
            border_radius=5
        )

    def build_order_card(order):
        created = local_created_at(order)
        return ft.Card(
            content=ft.Container(
                content=ft.Column([
                    ft.Row([
                        ft.Text(f"Order #{order.id}", weight="bold", size=14, color="black"),
                        status_badge(order.status)
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    ft.Text(created.strftime("%Y-%m-%d %H:%M"), size=11, color="grey700"),
                    *[
                        ft.Text(f"{i.quantity}x {item_name(catalog, i.item_id)}", size=13, color="black")
                        for i in order.items
                    ],
                    ft.Text(f"Notes: {order.notes}", size=11, color="grey700", italic=True) if order.notes else ft.Container(),
                    ft.Text(f"Total: {format_price(order_total(order, catalog))}", size=14, weight="bold", color="green"),
                ], spacing=3),
                padding=10,
                bgcolor="white",
                border_radius=12
            )
        )

    def load_orders(e=None):
        order_column.controls.clear()
        try:
            with session_scope() as db:
                orders = orders_for_table(list_orders(db), table_number)
        except OrderingError as ex:
            order_column.controls.append(ft.Text(ex.message, color="red"))
            page.update()
            return

        if not orders:
            order_column.controls.append(
                ft.Container(
                    content=ft.Column([
                        ft.Icon(ft.Icons.RECEIPT_LONG_OUTLINED, size=80, color="grey"),
                        ft.Text("No orders yet", size=18, color="black", weight="bold"),
                        ft.Text("Orders for this table will appear here", size=12, color="grey700"),
                        ft.ElevatedButton(
                            "Browse menu",
                            on_click=lambda e: on_nav("menu"),
                            style=ft.ButtonStyle(bgcolor="#D97706", color="white")
                        )
                    ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=8),
                    padding=40,
                    alignment=ft.alignment.center
                )
            )
        for order in orders:
            order_column.controls.append(build_order_card(order))
        page.update()

    load_orders()

    return ft.Column([
        ft.Container(
            content=ft.Row([
                ft.Text(f"Table {table_number} Orders", size=20, weight="bold", color="black"),
                ft.IconButton(icon=ft.Icons.REFRESH, tooltip="Refresh", on_click=load_orders)
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
            padding=ft.padding.only(top=10, left=15, right=5, bottom=4),
            bgcolor="white"
        ),
        ft.Container(content=order_column, expand=True, padding=10, bgcolor="grey100")
    ], expand=True, spacing=0)
