from sqlalchemy import Column, Integer, Text, DateTime, func
from .base import Base

class Product(Base):
    __tablename__ = "products"
    # ids are never reused, even after the newest row is deleted (SQLite needs this spelled out)
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    # Opaque display string ("9.99", "$10 / kg"); never used for arithmetic
    price = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    badge = Column(Text, nullable=True)
    image = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
