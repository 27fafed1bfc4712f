from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.contract import api
from app.schemas.report import StatsSchema
from app.schemas.token import TokenPayload
from app.schemas.user import User
from app.services.report import report_service
from app.utils import deps

router = APIRouter()


@router.get(api.admin.users.path, response_model=List[User])
def list_users(
    db: Session = Depends(deps.get_db),
    admin: TokenPayload = Depends(deps.require_admin)
):
    """All users, newest first."""
    return report_service.get_all_users(db)


@router.get(api.admin.stats.path, response_model=StatsSchema)
def get_stats(
    db: Session = Depends(deps.get_db),
    admin: TokenPayload = Depends(deps.require_admin)
):
    return report_service.get_stats(db)
