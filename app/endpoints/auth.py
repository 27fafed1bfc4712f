from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.contract import api
from app.schemas.token import AuthResponse, LoginRequest, TokenPayload
from app.schemas.user import User, UserCreate
from app.services.auth import auth_service
from app.utils import deps

router = APIRouter()


@router.post(api.auth.signup.path, response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    *,
    db: Session = Depends(deps.get_db),
    user_in: UserCreate
):
    """Register a new account. New accounts always get the `user` role."""
    return auth_service.signup(db, user_in=user_in)


@router.post(api.auth.login.path, response_model=AuthResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(deps.get_db)
):
    return auth_service.login(db, email=request.email, password=request.password)


@router.get(api.auth.me.path, response_model=User)
def read_me(
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user)
):
    return auth_service.get_me(db, user_id=current_user.user_id)
