from pydantic import BaseModel, EmailStr
from app.core.constants import RoleEnum
from app.schemas.base import CamelModel
from app.schemas.user import User

class TokenPayload(BaseModel):
    user_id: int
    email: str
    role: RoleEnum
    exp: int | None = None

class AuthResponse(CamelModel):
    """Response for signup and login."""
    token: str
    user: User

class LoginRequest(BaseModel):
    email: EmailStr
    password: str
