# backend/schemas/product.py
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict, computed_field, model_validator

from config import settings


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Shared base attributes for product entities
class ProductBase(ORMBase):
    name: str
    category: Optional[str] = None
    supplier: Optional[str] = None
    price: float = Field(default=0, ge=0)
    selling_price: Optional[float] = Field(default=None, ge=0)


# Schema for the manual add-product form
class ProductCreate(ProductBase):
    id: Optional[str] = Field(default=None, min_length=1, max_length=64)
    price: float = Field(gt=0)
    stock: int = Field(default=0, ge=0)


# Schema for partial product updates; stock is changed through /stock only
class ProductEditRequest(ORMBase):
    """Schema for PATCH requests - all fields optional."""
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    supplier: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)


class ProductOut(ProductBase):
    """Normalised product as every route returns it.

    Missing counters and stock read as 0 and a missing selling price falls
    back to the purchase price, so no caller has to re-derive defaults.
    """
    id: str
    stock: Optional[int] = 0
    amount_bought: Optional[int] = 0
    amount_sold: Optional[int] = 0
    created_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _apply_defaults(self):
        self.price = self.price or 0
        self.stock = self.stock or 0
        self.amount_bought = self.amount_bought or 0
        self.amount_sold = self.amount_sold or 0
        if self.selling_price is None:
            self.selling_price = self.price
        return self

    @computed_field
    @property
    def low_stock(self) -> bool:
        return 0 < self.stock < settings.LOW_STOCK_THRESHOLD

    @computed_field
    @property
    def out_of_stock(self) -> bool:
        return self.stock == 0

    @computed_field
    @property
    def high_demand(self) -> bool:
        return self.amount_sold >= settings.HIGH_DEMAND_THRESHOLD

    @computed_field
    @property
    def potential_profit(self) -> float:
        return round((self.selling_price - self.price) * self.stock, 2)


# Paginated response for product listings
class ProductListPage(ORMBase):
    items: List[ProductOut]
    total: int
    page: int
    page_size: int
