# core/utils.py
from decimal import Decimal
from typing import Optional
import flet as ft
from core.config import CURRENCY_SYMBOL

_loading_ctrl: Optional[ft.AlertDialog] = None

def format_price(amount) -> str:
    """Format a price as e.g. ₦1,250.00"""
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount or 0))
    return f"{CURRENCY_SYMBOL}{value:,.2f}"

def show_snack(page: ft.Page, message: str, error: bool = False):
    page.snack_bar = ft.SnackBar(ft.Text(message), bgcolor=ft.Colors.RED_400 if error else ft.Colors.GREEN, open=True)
    page.update()

def show_loading(page: ft.Page, text: str = "Please wait..."):
    """Show a small modal loading indicator."""
    global _loading_ctrl
    if _loading_ctrl is None:
        _loading_ctrl = ft.AlertDialog(
            modal=True,
            content=ft.Row([ft.ProgressRing(), ft.Text(text)], alignment=ft.MainAxisAlignment.CENTER),
            actions=[]
        )
    if _loading_ctrl not in page.overlay:
        page.overlay.append(_loading_ctrl)
    _loading_ctrl.open = True
    page.update()

def hide_loading(page: ft.Page):
    """Hide loading indicator."""
    global _loading_ctrl
    if _loading_ctrl:
        _loading_ctrl.open = False
        page.update()
