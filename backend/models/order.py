from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, JSON, func
from database import Base

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default="Processing")
    total = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Customer contact details
    customer = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    shipping = Column(String, nullable=False, default="Standard")

    # Ordered lines as [{"name", "quantity", "price"}]; orders do not reserve stock
    items = Column(JSON, nullable=False, default=list)
