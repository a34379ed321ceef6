# backend/schemas/supplier.py
from typing import List, Optional, Literal

from pydantic import BaseModel, Field, ConfigDict, EmailStr


SupplierStatus = Literal["Active", "Inactive"]


class SupplierBase(BaseModel):
    name: str = Field(min_length=1)
    contact: Optional[str] = None
    email: EmailStr
    phone: Optional[str] = None
    address: str = Field(min_length=1)
    products: List[str] = []
    rating: float = Field(default=4.0, ge=0, le=5)
    status: SupplierStatus = "Active"


class SupplierCreate(SupplierBase):
    pass


class SupplierOut(SupplierBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
