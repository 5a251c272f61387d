import flet as ft
from core.db import session_scope
from core.errors import OrderingError
from core.order_service import submit_order
from core.utils import format_price, hide_loading, show_loading

def cart_view(page, cart, table_number, on_cart_changed, switch_tab, refresh_cart):
    """Cart for one table: quantity controls, kitchen notes and the Place Order button."""
    lines = cart.lines()
    cart_column = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO)

    def adjust_quantity(item_id, delta):
        cart.adjust_quantity(item_id, delta)
        on_cart_changed()
        refresh_cart()

    def change_quantity(item_id, new_quantity):
        cart.update_quantity(item_id, new_quantity)
        on_cart_changed()
        refresh_cart()

    def on_notes_change(e):
        cart.notes = e.control.value

    def place_order(e=None):
        show_loading(page, "Placing your order...")
        try:
            with session_scope() as db:
                order = submit_order(db, cart, table_number, cart.notes)
        except OrderingError as ex:
            hide_loading(page)
            page.snack_bar = ft.SnackBar(ft.Text(ex.message), bgcolor=ft.Colors.RED_400, open=True)
            page.update()
            return

        hide_loading(page)
        on_cart_changed()
        page.snack_bar = ft.SnackBar(
            ft.Text(f"Order #{order.id} placed! We'll prepare it shortly."),
            bgcolor="green700",
            open=True
        )
        switch_tab("orders")

    if not lines:
        cart_column.controls.append(
            ft.Container(
                content=ft.Column([
                    ft.Icon(ft.Icons.SHOPPING_CART, size=80, color="grey"),
                    ft.Text("Your cart is empty", size=22, weight="bold", color="black"),
                    ft.ElevatedButton(
                        "Browse menu",
                        on_click=lambda e: switch_tab("menu"),
                        style=ft.ButtonStyle(bgcolor="#D97706", color="white"),
                        width=140,
                        height=35
                    )
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=10),
                padding=40,
                alignment=ft.alignment.center
            )
        )
    else:
        for line in lines:
            item = line.item
            button_row = ft.Row([
                ft.IconButton(
                    icon=ft.Icons.REMOVE,
                    icon_size=16,
                    tooltip="Decrease",
                    on_click=lambda e, iid=line.item_id: adjust_quantity(iid, -1)
                ),
                ft.Text(str(line.quantity), size=14, weight="bold"),
                ft.IconButton(
                    icon=ft.Icons.ADD,
                    icon_size=16,
                    tooltip="Increase",
                    on_click=lambda e, iid=line.item_id: adjust_quantity(iid, 1)
                ),
                ft.IconButton(
                    icon=ft.Icons.DELETE,
                    icon_color="red",
                    icon_size=18,
                    tooltip="Remove",
                    on_click=lambda e, iid=line.item_id: change_quantity(iid, 0)
                ),
            ], spacing=2, alignment=ft.MainAxisAlignment.CENTER)

            cart_column.controls.append(
                ft.Card(
                    content=ft.Container(
                        padding=10,
                        content=ft.Row([
                            ft.Column([
                                ft.Text(item.name, weight="bold", size=14),
                                ft.Text(f"{format_price(item.price)} each", size=11, color="grey700"),
                                ft.Text(f"Subtotal: {format_price(line.subtotal)}", size=12, weight="bold", color="green"),
                            ], spacing=2, expand=True),
                            button_row
                        ], spacing=8)
                    )
                )
            )

        cart_column.controls.append(
            ft.TextField(
                label="Notes for the kitchen (optional)",
                value=cart.notes,
                on_change=on_notes_change,
                multiline=True,
                min_lines=2,
                max_lines=4,
                text_size=13
            )
        )

    return ft.Column([
        ft.Container(
            content=ft.Column([
                ft.Container(
                    content=ft.Text(f"Your Order - Table {table_number}", size=20, weight="bold", color="black"),
                    padding=ft.padding.only(top=15, left=15, right=15, bottom=8)
                ),
                ft.Divider(height=1, color="grey300", thickness=1)
            ], spacing=0),
            bgcolor="white"
        ),
        ft.Container(content=cart_column, expand=True, padding=10, bgcolor="grey100"),
        ft.Container(
            content=ft.Column([
                ft.Divider(height=1, color="grey300", thickness=1),
                ft.Row([
                    ft.Text(f"Total ({cart.total_items()} items)", size=16, weight="bold", color="black"),
                    ft.Text(format_price(cart.total_price()), size=18, weight="bold", color="black"),
                ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                ft.ElevatedButton(
                    "Place Order",
                    on_click=place_order,
                    disabled=len(lines) == 0,
                    style=ft.ButtonStyle(bgcolor="#D97706" if lines else "grey", color="white"),
                    width=350,
                    height=45
                )
            ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=12),
            bgcolor="white",
            padding=ft.padding.only(left=25, right=25, top=0, bottom=12),
            shadow=ft.BoxShadow(blur_radius=10, color="grey300")
        )
    ], expand=True, spacing=0)
