# backend/schemas/sale.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


class SaleItemCreate(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    # Optional per-unit override; defaults to the product's selling price
    unit_price: Optional[float] = Field(default=None, gt=0)


class SaleCreate(BaseModel):
    customer: Optional[str] = None
    items: List[SaleItemCreate] = Field(min_length=1)


class SaleUpdate(BaseModel):
    customer: Optional[str] = None
    status: Optional[str] = None


class SaleItemOut(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float

    model_config = ConfigDict(from_attributes=True)


class SaleOut(BaseModel):
    id: int
    customer: Optional[str] = None
    total: float
    status: str
    created_at: datetime
    items: List[SaleItemOut]

    model_config = ConfigDict(from_attributes=True)


class SalePage(BaseModel):
    items: List[SaleOut]
    total: int
    page: int
    page_size: int
