from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from pharmacy_pos.db.base import Base


class StorageSlot(Base):
    """
    Key-value slot holding one serialized document.

    The application keeps its whole state in a single row, keyed by
    settings.STORAGE_KEY. Last writer wins.
    """
    __tablename__ = "storage_slots"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
