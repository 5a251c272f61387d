# core/config.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///table_orders.db")
RESTAURANT_NAME = os.getenv("RESTAURANT_NAME", "Amber Hotels")
MENU_BASE_URL = os.getenv("MENU_BASE_URL", "http://localhost:8550").rstrip("/")
DEFAULT_TABLE_NUMBER = int(os.getenv("DEFAULT_TABLE_NUMBER", "1"))
VALIDATE_TABLE_NUMBERS = _flag("VALIDATE_TABLE_NUMBERS")
STRICT_STATUS_TRANSITIONS = _flag("STRICT_STATUS_TRANSITIONS")
ORDER_TIMEZONE = os.getenv("ORDER_TIMEZONE", "UTC")
RECENT_ORDERS_LIMIT = int(os.getenv("RECENT_ORDERS_LIMIT", "5"))
STAFF_NAME = os.getenv("STAFF_NAME", "staff")
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₦")
