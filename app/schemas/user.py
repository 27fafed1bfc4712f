from pydantic import ConfigDict, EmailStr, field_validator
from typing import Optional
from datetime import datetime

from app.core.constants import RoleEnum
from app.schemas.base import CamelModel

class UserBase(CamelModel):
    """Base user schema with common fields."""
    name: str
    email: EmailStr

class UserCreate(UserBase):
    """Signup body. Any role sent by the client is dropped."""
    password: str

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    def name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("password")
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password cannot be empty or contain only whitespace.")
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes.")
        return v

class User(CamelModel):
    """Public user representation; never carries the password hash."""
    id: int
    name: str
    email: str
    role: RoleEnum
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
