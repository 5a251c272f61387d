import flet as ft
from core.catalog_service import ALL_CATEGORIES, filter_menu, list_categories
from core.utils import format_price

def menu_view(page, menu_items, cart, on_cart_changed):
    """
    Customer menu: search box, category chips and one card per item.

    Args:
        page: Flet page object
        menu_items: MenuItem list loaded for this session
        cart: The session's CartStore
        on_cart_changed: Called after every add so the badge and storage follow
    """
    items_column = ft.Column(spacing=3)
    state = {"search": "", "category": ALL_CATEGORIES}

    def add_item(item):
        cart.add_item(item)
        on_cart_changed()
        page.snack_bar = ft.SnackBar(
            content=ft.Row([
                ft.Icon(ft.Icons.CHECK_CIRCLE, color="white"),
                ft.Text(f"{item.name} added to cart!", color="white", weight="bold")
            ]),
            bgcolor="green700",
            duration=2000
        )
        page.snack_bar.open = True
        page.update()

    def build_item_card(item):
        return ft.Card(
            content=ft.Container(
                padding=10,
                content=ft.Row([
                    ft.Container(
                        content=ft.Image(
                            src=item.image_url,
                            width=80,
                            height=80,
                            fit=ft.ImageFit.COVER,
                            border_radius=8
                        ) if item.image_url else ft.Container(width=80, height=80, bgcolor="grey300", border_radius=8),
                        border=ft.border.all(1, "grey300"),
                        border_radius=8
                    ),
                    ft.Column([
                        ft.Text(item.name, weight="bold", size=14, color="black"),
                        ft.Text(item.category, size=10, color="grey700"),
                        ft.Text(format_price(item.price), color="green", size=14, weight="bold"),
                    ], spacing=3, expand=True),
                    ft.IconButton(
                        icon=ft.Icons.ADD_CIRCLE,
                        icon_color="#D97706",
                        icon_size=28,
                        tooltip="Add to cart",
                        on_click=lambda e, it=item: add_item(it)
                    )
                ], spacing=8, alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                bgcolor='white',
                border_radius=12
            )
        )

    def render_items():
        items_column.controls.clear()
        for item in filter_menu(menu_items, state["search"], state["category"]):
            items_column.controls.append(
                ft.Container(content=build_item_card(item), padding=ft.padding.symmetric(horizontal=10))
            )
        if not items_column.controls:
            items_column.controls.append(
                ft.Container(
                    content=ft.Text("No items found", size=14, color="grey", italic=True),
                    padding=20,
                    alignment=ft.alignment.center
                )
            )
        page.update()

    def on_search(e):
        state["search"] = e.control.value
        render_items()

    def on_category(category):
        state["category"] = category
        for chip in category_row.controls:
            chip.style.bgcolor = "#D97706" if chip.data == category else "white"
        render_items()

    category_row = ft.Row(
        [
            ft.ElevatedButton(
                cat.capitalize(),
                data=cat,
                on_click=lambda e, c=cat: on_category(c),
                style=ft.ButtonStyle(
                    padding=ft.padding.symmetric(horizontal=16, vertical=8),
                    shape=ft.RoundedRectangleBorder(radius=20),
                    bgcolor="#D97706" if cat == ALL_CATEGORIES else "white",
                    color="black"
                )
            ) for cat in list_categories(menu_items)
        ],
        spacing=8,
        scroll=ft.ScrollMode.AUTO
    )

    render_items()

    return ft.Column([
        ft.Container(
            content=ft.TextField(
                label="Search menu...",
                on_change=on_search,
                prefix_icon=ft.Icons.SEARCH,
                text_size=13,
                height=40,
                border_radius=8
            ),
            padding=ft.padding.only(left=10, right=10, top=8),
            bgcolor="white"
        ),
        ft.Container(
            content=ft.Column([
                ft.Container(content=category_row, padding=10, height=60),
                ft.Column([items_column], scroll=ft.ScrollMode.AUTO, expand=True),
            ], spacing=0, expand=True),
            expand=True,
            padding=ft.padding.only(bottom=10),
            bgcolor="grey100"
        ),
    ], expand=True, spacing=0)
