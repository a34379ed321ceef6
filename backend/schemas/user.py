from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for sign-up requests; creates the account and its store
class UserCreate(UserBase):
    password: str = Field(min_length=6)
    username: str = Field(min_length=1)
    mobile: Optional[str] = None
    store_name: str = Field(min_length=1)

# Output schema for user profile details
class UserResponse(UserBase):
    id: int
    role: str
    username: Optional[str] = None
    mobile: Optional[str] = None
    store_id: Optional[int] = None

    class Config:
        from_attributes = True

class StoreResponse(BaseModel):
    id: int
    store_name: str
    owner_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Current session: the caller and the store it works in
class SessionResponse(BaseModel):
    user: UserResponse
    store: StoreResponse

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
