# core/table_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from models.dining_table import DiningTable
from core.config import MENU_BASE_URL


def is_valid_table_number(value) -> bool:
    """Positive int; bools and numeric strings are rejected."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def table_qr_url(table_number: int) -> str:
    """Link encoded in the QR code printed for a table"""
    return f"{MENU_BASE_URL}/?table={table_number}"


def list_tables(db: Session):
    return db.query(DiningTable).order_by(DiningTable.table_number).all()


def table_exists(db: Session, table_number: int) -> bool:
    return db.query(DiningTable).filter(DiningTable.table_number == table_number).first() is not None


def create_table(db: Session, table_number: int):
    """
    Register a table.
    Returns (success: bool, message: str)
    """
    if not is_valid_table_number(table_number):
        return False, "Table number must be a positive whole number"

    if table_exists(db, table_number):
        return False, f"Table {table_number} already exists"

    try:
        db.add(DiningTable(table_number=table_number, qr_code=table_qr_url(table_number)))
        db.commit()
        return True, f"Table {table_number} created"
    except IntegrityError:
        db.rollback()
        return False, f"Table {table_number} already exists"


def delete_table(db: Session, table_number: int):
    """
    Remove a table from the registry. Its historical orders are kept.
    Returns (success: bool, message: str)
    """
    table = db.query(DiningTable).filter(DiningTable.table_number == table_number).first()
    if not table:
        return False, f"Table {table_number} not found"

    db.delete(table)
    db.commit()
    return True, f"Table {table_number} deleted"
