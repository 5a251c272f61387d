import flet as ft
from core.cart_store import CartStore
from core.catalog_service import get_menu, menu_index
from core.config import RESTAURANT_NAME
from core.db import session_scope
from ui.cart_view import cart_view
from ui.menu_view import menu_view
from ui.order_history_view import table_orders_widget

CART_SESSION_KEY = "cart"
CART_STORAGE_KEY = "cart"


def get_session_cart(page: ft.Page, catalog) -> CartStore:
    """The CartStore owned by this page session, restored from client storage on first use."""
    cart = page.session.get(CART_SESSION_KEY)
    if cart is None:
        saved = None
        try:
            saved = page.client_storage.get(CART_STORAGE_KEY)
        except Exception as ex:
            print(f"Cart restore skipped: {ex}")
        cart = CartStore.from_storage(saved, catalog)
        page.session.set(CART_SESSION_KEY, cart)
    return cart


def home_view(page: ft.Page, table_number: int):
    page.title = f"{RESTAURANT_NAME} - Table {table_number}"

    with session_scope() as db:
        menu_items = get_menu(db)
    catalog = menu_index(menu_items)
    cart = get_session_cart(page, catalog)

    # State
    nav_state = {"tab": "menu"}  # "menu", "cart", "orders"
    cart_count_text = ft.Text("", color="white", size=10, weight="bold")
    cart_badge_container = ft.Container(
        content=cart_count_text,
        bgcolor="#D97706",
        border_radius=10,
        padding=ft.padding.symmetric(horizontal=6, vertical=3),
        right=5,
        top=5,
        visible=False
    )
    content_container = ft.Container(expand=True)

    # --- CART BADGE + LOCAL STORAGE ---
    def on_cart_changed():
        total_items = cart.total_items()
        cart_count_text.value = str(total_items) if total_items > 0 else ""
        cart_badge_container.visible = total_items > 0
        try:
            page.client_storage.set(CART_STORAGE_KEY, cart.to_storage())
        except Exception as ex:
            print(f"Cart save skipped: {ex}")
        page.update()

    # --- FOOTER NAVIGATION ---
    def nav_icon(icon, label, tab):
        is_active = tab == nav_state["tab"]
        return ft.Column([
            ft.IconButton(
                icon=icon,
                tooltip=label,
                icon_color="#D97706" if is_active else "black",
                on_click=lambda e: switch_tab(tab)
            ),
            ft.Text(label, size=8, text_align=ft.TextAlign.CENTER, color="black")
        ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=0)

    def footer_row():
        return ft.Row([
            nav_icon(ft.Icons.RESTAURANT_MENU, "Menu", "menu"),
            ft.Stack([nav_icon(ft.Icons.SHOPPING_CART, "Cart", "cart"), cart_badge_container], width=50, height=50),
            nav_icon(ft.Icons.RECEIPT_LONG, "My Orders", "orders"),
        ], alignment=ft.MainAxisAlignment.SPACE_AROUND)

    footer = ft.Container(
        content=footer_row(),
        bgcolor="white",
        padding=ft.padding.symmetric(vertical=6),
        border=ft.border.only(top=ft.BorderSide(1, "grey300")),
        height=60
    )

    def switch_tab(tab):
        nav_state["tab"] = tab
        footer.content = footer_row()
        render_main_content()

    # --- MAIN CONTENT RENDERERS ---
    def render_main_content():
        tab = nav_state["tab"]
        if tab == "menu":
            content_container.content = menu_view(page, menu_items, cart, on_cart_changed)
        elif tab == "cart":
            content_container.content = cart_view(
                page,
                cart,
                table_number,
                on_cart_changed=on_cart_changed,
                switch_tab=switch_tab,
                refresh_cart=render_main_content
            )
        elif tab == "orders":
            content_container.content = table_orders_widget(page, table_number, catalog, switch_tab)
        page.update()

    header = ft.Container(
        content=ft.Column([
            ft.Row([
                ft.Icon(ft.Icons.HOTEL, color="#D97706"),
                ft.Column([
                    ft.Text(RESTAURANT_NAME, size=18, weight="bold", color="black"),
                    ft.Text(f"Table {table_number}", size=12, color="grey700"),
                ], spacing=0)
            ], spacing=8),
        ]),
        padding=ft.padding.only(left=15, right=15, top=10, bottom=8),
        bgcolor="white",
        border=ft.border.only(bottom=ft.BorderSide(1, "grey300"))
    )

    # --- INITIAL RENDER ---
    page.clean()
    page.add(
        ft.Container(
            content=ft.Column([header, content_container, footer], expand=True, spacing=0),
            width=400,
            expand=True,
            padding=0,
            bgcolor="white"
        )
    )
    on_cart_changed()
    render_main_content()
