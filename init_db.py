from decimal import Decimal
from core.db import Base, engine, SessionLocal, create_tables
from core.table_service import create_table
from models.menu_item import MenuItem
from models.order import Order, OrderItem  # noqa: F401
from models.dining_table import DiningTable  # noqa: F401
from models.audit_log import AuditLog  # noqa: F401

SEED_TABLES = range(1, 11)

def seed_menu_items(db):
    existing = db.query(MenuItem).first()
    if not existing:
        sample_items = [
            MenuItem(name="Jollof Rice", category="Rice", price=Decimal("3500.00"), image_url="assets/jollof.jpg"),
            MenuItem(name="Fried Rice", category="Rice", price=Decimal("3500.00"), image_url="assets/fried_rice.jpg"),
            MenuItem(name="Egusi Soup & Pounded Yam", category="Soups", price=Decimal("5000.00"), image_url="assets/egusi.jpg"),
            MenuItem(name="Pepper Soup", category="Soups", price=Decimal("4200.00"), image_url="assets/pepper_soup.jpg"),
            MenuItem(name="Suya Platter", category="Grills", price=Decimal("6000.00"), image_url="assets/suya.jpg"),
            MenuItem(name="Grilled Chicken", category="Grills", price=Decimal("5500.00"), image_url="assets/chicken.jpg"),
            MenuItem(name="Chapman", category="Drinks", price=Decimal("2000.00"), image_url="assets/chapman.jpg"),
            MenuItem(name="Zobo", category="Drinks", price=Decimal("1200.00"), image_url="assets/zobo.jpg"),
        ]
        db.add_all(sample_items)
        db.commit()
        print("Sample menu items seeded.")
    else:
        print("Menu items already seeded.")

def seed_tables(db):
    for number in SEED_TABLES:
        ok, message = create_table(db, number)
        if not ok:
            print(message)
    print(f"Tables {SEED_TABLES.start}-{SEED_TABLES.stop - 1} registered.")

def init_db():
    print("Rebuilding database (drop/create)...")
    Base.metadata.drop_all(bind=engine)
    create_tables()
    print("All tables created:")
    for table in Base.metadata.sorted_tables:
        print(f"   - {table.name}")

    db = SessionLocal()
    try:
        seed_menu_items(db)
        seed_tables(db)
    finally:
        db.close()
    print("\nDatabase initialization complete!")

if __name__ == "__main__":
    init_db()
