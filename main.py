from urllib.parse import urlparse, parse_qs
from dotenv import load_dotenv
import flet as ft

# Load environment variables
load_dotenv()

from core.config import DEFAULT_TABLE_NUMBER, RESTAURANT_NAME
from core.db import create_tables
from core.table_service import is_valid_table_number

# Import views
from ui.home_view import home_view
from ui.admin_view import admin_view
from ui.analytics_view import analytics_view


def table_from_route(route: str) -> int:
    """Table number from a `/?table=N` route; falls back to DEFAULT_TABLE_NUMBER."""
    values = parse_qs(urlparse(route or "/").query).get("table")
    if values:
        try:
            number = int(values[0])
        except ValueError:
            number = None
        if is_valid_table_number(number):
            return number
    return DEFAULT_TABLE_NUMBER


def main(page: ft.Page):
    page.window.width = 400
    page.window.height = 700
    page.padding = 0
    page.spacing = 0

    page.title = RESTAURANT_NAME
    page.horizontal_alignment = ft.CrossAxisAlignment.CENTER
    page.vertical_alignment = ft.MainAxisAlignment.START

    def route_change(e):
        page.clean()
        path = urlparse(page.route or "/").path

        if path == "/admin":
            admin_view(page)
        elif path == "/analytics":
            analytics_view(page)
        else:
            home_view(page, table_from_route(page.route))

    page.on_route_change = route_change
    page.go(page.route or "/")


if __name__ == "__main__":
    create_tables()
    ft.app(target=main, view=ft.AppView.WEB_BROWSER, port=8550)
