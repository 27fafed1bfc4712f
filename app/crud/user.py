from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from app.crud.base import CRUDBase
from app.models.user import User
from app.schemas.user import UserCreate


class CRUDUser(CRUDBase[User, UserCreate, UserCreate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def create_user(self, db: Session, *, obj_in: Dict[str, Any], commit: bool = True) -> User:
        """Insert a user. `obj_in` carries an already-hashed password and an explicit role."""
        return self.create(db, obj_in=obj_in, commit=commit)

    def get_all(self, db: Session) -> List[User]:
        return db.query(User).order_by(desc(User.created_at), desc(User.id)).all()


user = CRUDUser(User)
