from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone
from core.db import Base

class DiningTable(Base):
    __tablename__ = "dining_tables"

    id = Column(Integer, primary_key=True, index=True)
    table_number = Column(Integer, unique=True, nullable=False, index=True)
    qr_code = Column(String, nullable=True)  # URL the printed QR code points at
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
