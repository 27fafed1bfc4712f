import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.core.constants import RoleEnum
from app.core.security import get_password_hash, verify_password, create_access_token
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.token import AuthResponse
from app.schemas.user import UserCreate, User as UserSchema

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    role = user.role.value if isinstance(user.role, RoleEnum) else user.role
    return create_access_token(data={"user_id": user.id, "email": user.email, "role": role})


class AuthService:
    def signup(self, db: Session, *, user_in: UserCreate) -> AuthResponse:
        if crud_user.get_by_email(db, email=user_in.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

        try:
            new_user = crud_user.create_user(
                db,
                obj_in={
                    "name": user_in.name,
                    "email": user_in.email,
                    "hashed_password": get_password_hash(user_in.password),
                    "role": RoleEnum.USER,
                },
            )
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

        logger.info(f"User {new_user.id} signed up")
        return AuthResponse(token=issue_token(new_user), user=UserSchema.model_validate(new_user))

    def login(self, db: Session, *, email: str, password: str) -> AuthResponse:
        user = crud_user.get_by_email(db, email=email)
        if not user or not verify_password(password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        return AuthResponse(token=issue_token(user), user=UserSchema.model_validate(user))

    def get_me(self, db: Session, *, user_id: int) -> User:
        user = crud_user.get(db, id=user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user


auth_service = AuthService()
