"""
Admin Panel - dashboard and orders board
"""
import flet as ft
from core.analytics_service import get_dashboard_summary, recent_orders
from core.catalog_service import get_menu_index
from core.config import RESTAURANT_NAME
from core.db import SessionLocal
from core.order_workflow import list_orders
from ui.admin_constants import BREAKPOINT, STATUS_COLORS
from ui.admin_orders import build_orders_tab

def build_dashboard_tab(page: ft.Page, db):
    """Headline counts plus the latest orders; rebuilt in place by refresh()."""
    stats_row = ft.Row(wrap=True, spacing=10)
    recent_column = ft.Column(spacing=6)

    def stat_card(label, value, icon):
        return ft.Container(
            content=ft.Column([
                ft.Row([ft.Icon(icon, size=18, color="grey700"), ft.Text(label, size=12, color="grey700")], spacing=6),
                ft.Text(str(value), size=24, weight="bold", color="black"),
            ], spacing=4),
            width=170,
            padding=12,
            bgcolor="white",
            border_radius=12
        )

    def refresh():
        db.expire_all()
        summary = get_dashboard_summary(db)
        stats_row.controls = [
            stat_card("Menu items", summary["total_menu_items"], ft.Icons.RESTAURANT_MENU),
            stat_card("Tables", summary["total_tables"], ft.Icons.TABLE_RESTAURANT),
            stat_card("Pending orders", summary["pending_orders"], ft.Icons.SCHEDULE),
            stat_card("Orders today", summary["today_orders"], ft.Icons.TODAY),
        ]
        recent_column.controls.clear()
        latest = recent_orders(list_orders(db))
        if not latest:
            recent_column.controls.append(ft.Text("No orders yet", color="grey700"))
        for order in latest:
            bg, fg = STATUS_COLORS.get(order.status, ("grey200", "grey900"))
            count = len(order.items)
            recent_column.controls.append(
                ft.Container(
                    content=ft.Row([
                        ft.Text(f"Table {order.table_number}", weight="bold", color="black"),
                        ft.Text(f"{count} item{'s' if count != 1 else ''}", size=12, color="grey700"),
                        ft.Container(content=ft.Text(order.status, color=fg, size=12), bgcolor=bg, padding=5, border_radius=5),
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    padding=10,
                    bgcolor="white",
                    border_radius=8
                )
            )
        page.update()

    tab = ft.Tab(
        text="Dashboard",
        icon=ft.Icons.DASHBOARD,
        content=ft.Column([
            ft.Container(content=ft.Text("Dashboard", size=20, weight="bold", color="black"), padding=10),
            ft.Container(content=stats_row, padding=10),
            ft.Container(content=ft.Text("Recent Orders", size=16, weight="bold", color="black"), padding=10),
            ft.Container(content=recent_column, padding=10),
        ], scroll=ft.ScrollMode.AUTO, expand=True, spacing=0)
    )
    return tab, refresh


def admin_view(page: ft.Page):
    """
    Main admin panel view - orchestrates all tabs
    """
    db = SessionLocal()
    page.title = f"Admin Panel - {RESTAURANT_NAME}"

    is_desktop = (page.window.width or 400) > BREAKPOINT
    catalog = get_menu_index(db)

    # ===================== BUILD TABS =====================

    dashboard_tab, refresh_dashboard = build_dashboard_tab(page, db)

    tabs = ft.Tabs(
        selected_index=0,
        animation_duration=300,
        tabs=[
            dashboard_tab,
            build_orders_tab(page, db, catalog, is_desktop, on_changed=refresh_dashboard),
        ],
        expand=True,
        label_color="#D97706",
        unselected_label_color="black",
        indicator_color="#D97706",
        indicator_border_radius=0,
        divider_color="grey300"
    )

    # ===================== BUILD UI =====================

    page.clean()
    page.add(
        ft.Container(
            content=ft.Column([
                ft.Container(
                    content=ft.Column([
                        ft.Container(
                            content=ft.Row([
                                ft.Text("Admin Panel", size=20, weight="bold", color="black"),
                                ft.IconButton(
                                    icon=ft.Icons.ANALYTICS,
                                    icon_color="black",
                                    tooltip="Analytics",
                                    on_click=lambda e: page.go("/analytics")
                                ),
                            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                            padding=ft.padding.only(top=15, left=15, right=15, bottom=8)
                        ),
                        ft.Divider(height=1, color="grey300", thickness=1)
                    ], spacing=0),
                    bgcolor="white",
                    padding=0
                ),
                ft.Container(content=tabs, expand=True, bgcolor="grey100")
            ], expand=True, spacing=0),
            width=page.window.width if is_desktop else 400,
            expand=True,
            padding=0
        )
    )
    refresh_dashboard()
