import flet as ft
from flet.plotly_chart import PlotlyChart
import plotly.graph_objects as go
import plotly.express as px
from core.db import SessionLocal
from core.analytics_service import daily_order_counts, orders_per_table, status_breakdown
from core.catalog_service import get_menu_index
from core.config import CURRENCY_SYMBOL
from core.order_workflow import list_orders
from ui.admin_constants import BREAKPOINT

def analytics_view(page: ft.Page):
    page.title = "Analytics Dashboard"

    current_width = page.window.width or 400
    is_desktop = current_width >= BREAKPOINT
    chart_height = 350 if is_desktop else 250

    db = SessionLocal()
    try:
        catalog = get_menu_index(db)
        orders = list_orders(db)
    finally:
        db.close()

    def empty(text):
        return ft.Container(
            content=ft.Text(text, size=14, color="grey"),
            alignment=ft.alignment.center,
            padding=30
        )

    def create_daily_chart():
        """Orders and revenue per day"""
        data = daily_order_counts(orders, catalog)
        if data.empty:
            return empty("No orders yet")

        fig = go.Figure()
        fig.add_trace(go.Bar(x=data["date"], y=data["orders"], name="Orders", marker_color="#D97706"))
        fig.add_trace(go.Scatter(
            x=data["date"],
            y=data["revenue"],
            name="Revenue",
            mode="lines+markers",
            yaxis="y2",
            line=dict(color="#2196F3", width=2)
        ))
        fig.update_layout(
            title=dict(text="Orders per Day", font=dict(size=14)),
            yaxis=dict(title="Orders"),
            yaxis2=dict(title=f"Revenue ({CURRENCY_SYMBOL})", overlaying="y", side="right"),
            height=chart_height,
            margin=dict(l=40, r=40, t=40, b=40),
            font=dict(size=10)
        )
        return PlotlyChart(fig, expand=True)

    def create_table_chart():
        """Orders per table"""
        data = orders_per_table(orders, catalog)
        if data.empty:
            return empty("No table data")

        fig = px.bar(data, x="table_number", y="orders", hover_data=["revenue"], labels={"table_number": "Table", "orders": "Orders"})
        fig.update_traces(marker_color="#4CAF50")
        fig.update_layout(
            title=dict(text="Orders per Table", font=dict(size=14)),
            height=chart_height,
            margin=dict(l=40, r=20, t=40, b=40),
            font=dict(size=10)
        )
        return PlotlyChart(fig, expand=True)

    def create_status_chart():
        """Current status mix"""
        counts = status_breakdown(orders)
        if not any(counts.values()):
            return empty("No orders yet")

        fig = go.Figure(data=[go.Pie(labels=list(counts.keys()), values=list(counts.values()), hole=0.4)])
        fig.update_layout(
            title=dict(text="Order Status", font=dict(size=14)),
            height=chart_height,
            margin=dict(l=20, r=20, t=40, b=20),
            font=dict(size=10)
        )
        return PlotlyChart(fig, expand=True)

    page.clean()
    page.add(
        ft.Container(
            content=ft.Column([
                ft.Column([
                    ft.Container(
                        content=ft.Row([
                            ft.IconButton(
                                icon=ft.Icons.ARROW_BACK,
                                tooltip="Back to Admin",
                                on_click=lambda e: page.go("/admin"),
                                icon_color="black"
                            ),
                            ft.Text("Analytics Dashboard", size=20, weight="bold", color="black"),
                        ]),
                        padding=ft.padding.only(left=5, right=15, top=10, bottom=8)
                    ),
                    ft.Divider(height=1, color="grey300", thickness=1)
                ], spacing=0),
                ft.Column([
                    ft.Container(content=create_daily_chart(), bgcolor="white", border_radius=12, padding=10),
                    ft.Container(content=create_table_chart(), bgcolor="white", border_radius=12, padding=10),
                    ft.Container(content=create_status_chart(), bgcolor="white", border_radius=12, padding=10),
                ], spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)
            ], expand=True, spacing=0),
            width=current_width if is_desktop else 400,
            expand=True,
            bgcolor="grey100"
        )
    )
    page.update()
