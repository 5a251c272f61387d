# core/catalog_service.py
from sqlalchemy.orm import Session
from models.menu_item import MenuItem

ALL_CATEGORIES = "all"


def get_menu(db: Session):
    """All menu items in catalog order"""
    return db.query(MenuItem).order_by(MenuItem.id).all()


def get_menu_item(db: Session, item_id: int):
    return db.query(MenuItem).filter(MenuItem.id == item_id).first()


def menu_index(items):
    """Map item id -> MenuItem for price and name lookups"""
    return {item.id: item for item in items}


def get_menu_index(db: Session):
    return menu_index(get_menu(db))


def list_categories(items):
    """'all' followed by each distinct category in the order it first appears"""
    categories = [ALL_CATEGORIES]
    for item in items:
        if item.category and item.category not in categories:
            categories.append(item.category)
    return categories


def filter_menu(items, search: str = "", category: str = ALL_CATEGORIES):
    """Case-insensitive name search combined with a category filter"""
    needle = (search or "").strip().lower()
    return [
        item for item in items
        if needle in item.name.lower()
        and (category in (None, "", ALL_CATEGORIES) or item.category == category)
    ]
