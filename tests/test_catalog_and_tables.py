"""Menu helpers and the table registry."""

from __future__ import annotations

from core.catalog_service import ALL_CATEGORIES, filter_menu, get_menu, get_menu_item, list_categories
from core.config import MENU_BASE_URL
from core.order_workflow import list_orders
from core.table_service import (
    create_table,
    delete_table,
    is_valid_table_number,
    list_tables,
    table_exists,
    table_qr_url,
)


class TestCatalog:
    def test_get_menu_in_id_order(self, db, menu) -> None:
        assert [item.name for item in get_menu(db)] == ["Jollof Rice", "Pepper Soup", "Zobo"]

    def test_get_menu_item(self, db, menu) -> None:
        assert get_menu_item(db, menu[2].id).name == "Zobo"
        assert get_menu_item(db, 404) is None

    def test_categories_all_first_then_first_seen(self, menu) -> None:
        assert list_categories(menu) == [ALL_CATEGORIES, "Rice", "Soups", "Drinks"]

    def test_filter_by_search_is_case_insensitive(self, menu) -> None:
        assert [i.name for i in filter_menu(menu, "SOUP")] == ["Pepper Soup"]

    def test_filter_by_category(self, menu) -> None:
        assert [i.name for i in filter_menu(menu, category="Drinks")] == ["Zobo"]
        assert len(filter_menu(menu, category=ALL_CATEGORIES)) == 3

    def test_filter_search_and_category_combined(self, menu) -> None:
        assert filter_menu(menu, "rice", "Drinks") == []


class TestTableRegistry:
    def test_create_and_list(self, db) -> None:
        assert create_table(db, 3) == (True, "Table 3 created")
        assert create_table(db, 1)[0]
        assert [t.table_number for t in list_tables(db)] == [1, 3]
        assert list_tables(db)[1].qr_code == f"{MENU_BASE_URL}/?table=3"

    def test_duplicate_rejected(self, db) -> None:
        create_table(db, 3)
        ok, message = create_table(db, 3)
        assert not ok
        assert "already exists" in message

    def test_invalid_number_rejected(self, db) -> None:
        assert create_table(db, 0)[0] is False
        assert list_tables(db) == []

    def test_delete_keeps_historical_orders(self, db, make_order) -> None:
        create_table(db, 4)
        make_order(4)
        assert delete_table(db, 4) == (True, "Table 4 deleted")
        assert not table_exists(db, 4)
        assert [o.table_number for o in list_orders(db)] == [4]

    def test_delete_missing(self, db) -> None:
        assert delete_table(db, 8) == (False, "Table 8 not found")

    def test_qr_url(self) -> None:
        assert table_qr_url(12) == f"{MENU_BASE_URL}/?table=12"

    def test_is_valid_table_number(self) -> None:
        assert is_valid_table_number(1)
        assert not is_valid_table_number(0)
        assert not is_valid_table_number(True)
        assert not is_valid_table_number("2")
