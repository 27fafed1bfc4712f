from sqlalchemy.orm import Session, selectinload
from typing import Dict, List, Optional

from app.crud.base import CRUDBase
from app.models.enrollment import Enrollment
from app.schemas.enrollment import EnrollmentCreate

class CRUDEnrollment(CRUDBase[Enrollment, EnrollmentCreate, EnrollmentCreate]):

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> Optional[Enrollment]:
        return (
            db.query(Enrollment)
            .filter(Enrollment.user_id == user_id)
            .filter(Enrollment.course_id == course_id)
            .first()
        )

    def get_by_user(self, db: Session, *, user_id: int) -> List[Enrollment]:
        return (
            db.query(Enrollment)
            .options(selectinload(Enrollment.course))
            .filter(Enrollment.user_id == user_id)
            .order_by(Enrollment.id)
            .all()
        )

    def create_for_user(self, db: Session, *, user_id: int, course_id: int) -> Enrollment:
        """Raises sqlalchemy IntegrityError if the pair is already enrolled."""
        return self.create(db, obj_in={"user_id": user_id, "course_id": course_id, "progress": {}})

    def replace_progress(self, db: Session, *, id: int, progress: Dict[str, bool]) -> Optional[Enrollment]:
        enrollment = self.get(db, id=id)
        if not enrollment:
            return None
        # Assign a fresh dict so the JSON column is flagged dirty
        return self.update(db, db_obj=enrollment, obj_in={"progress": dict(progress)})


enrollment = CRUDEnrollment(Enrollment)
