# models/menu_item.py
from sqlalchemy import Column, Integer, String, Numeric
from core.db import Base

class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String, nullable=False)  # Rice, Soups, Grills, Drinks ...
    image_url = Column(String, nullable=True)

    def __repr__(self):
        return f"<MenuItem {self.id} {self.name!r} {self.price}>"
