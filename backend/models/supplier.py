# backend/models/supplier.py
from sqlalchemy import Column, Integer, String, Float, ForeignKey, JSON
from database import Base


# Supplier contact card with the list of product names it delivers
class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    contact = Column(String, nullable=True)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=False)
    products = Column(JSON, nullable=False, default=list)
    rating = Column(Float, nullable=False, default=4.0)
    status = Column(String, nullable=False, default="Active")
