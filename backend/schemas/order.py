from pydantic import BaseModel, Field, EmailStr, ConfigDict
from typing import List, Optional, Literal
from datetime import datetime


OrderStatus = Literal["Processing", "Shipped", "Delivered", "Cancelled"]


# A single ordered line
class OrderItem(BaseModel):
    name: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)


# Input schema for creating a new order
class OrderCreate(BaseModel):
    customer: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None
    shipping: Literal["Standard", "Express"] = "Standard"
    items: List[OrderItem] = Field(min_length=1)


# Output schema representing the full order details
class OrderResponse(BaseModel):
    id: int
    customer: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    shipping: str
    items: List[OrderItem]
    total: float
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Schema for paginated order lists
class OrdersPage(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int

# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: OrderStatus
