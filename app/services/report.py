from typing import List
from sqlalchemy.orm import Session

from app.crud.report import get_stats
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.report import StatsSchema


class ReportService:
    def get_stats(self, db: Session) -> StatsSchema:
        return StatsSchema(**get_stats(db))

    def get_all_users(self, db: Session) -> List[User]:
        return crud_user.get_all(db)


report_service = ReportService()
