# backend/models/product.py
import uuid

from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, CheckConstraint, func
from database import Base


def _new_product_id() -> str:
    return uuid.uuid4().hex


# Model Product
# A single inventory item held by one store. The id is either chosen by the
# caller (catalog items bought for the first time) or generated by the server.
# Stock is changed only through utils.stock_ledger; `version` lets the ORM
# detect a concurrent write between reading and updating a row.
class Product(Base):
    __tablename__ = "products"

    store_id = Column(Integer, ForeignKey("stores.id"), primary_key=True)
    id = Column(String(64), primary_key=True, default=_new_product_id)

    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=True)
    supplier = Column(String, nullable=True)

    # Purchase price and optional selling price.
    price = Column(Float, CheckConstraint("price >= 0"), nullable=False, default=0)
    selling_price = Column(Float, CheckConstraint("selling_price >= 0"), nullable=True)

    # Inventory data.
    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=False, default=0)
    amount_bought = Column(Integer, CheckConstraint("amount_bought >= 0"), nullable=False, default=0)
    amount_sold = Column(Integer, CheckConstraint("amount_sold >= 0"), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
