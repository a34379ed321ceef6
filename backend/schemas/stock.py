# backend/schemas/stock.py
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import List, Optional


# Manual stock correction; positive restocks, negative removes
class StockAdjustRequest(BaseModel):
    product_id: str = Field(min_length=1)
    change_qty: int = Field(alias="quantity_change")

    model_config = ConfigDict(populate_by_name=True)


class RestockRequest(BaseModel):
    quantity: int = Field(gt=0)
    price: Optional[float] = Field(default=None, ge=0)
    supplier: Optional[str] = None


# Result of a committed stock change
class StockAdjustmentResponse(BaseModel):
    product_id: str
    name: str
    previous_stock: int
    new_stock: int
    change_qty: int

    model_config = ConfigDict(from_attributes=True)


# Single catalog item bought from a supplier
class PurchaseItem(BaseModel):
    id: Optional[str] = None
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(gt=0)


class PurchaseCreate(BaseModel):
    items: List[PurchaseItem] = Field(min_length=1)
    supplier: Optional[str] = None


class PurchaseResponse(BaseModel):
    id: int
    product_id: str
    product_name: str
    quantity: int
    unit_price: Optional[float] = None
    supplier: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PurchasePage(BaseModel):
    items: List[PurchaseResponse]
    total: int
    page: int
    page_size: int


class PurchaseResult(BaseModel):
    adjustments: List[StockAdjustmentResponse]
    purchases: List[PurchaseResponse]
