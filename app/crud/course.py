from sqlalchemy.orm import Session, selectinload
from typing import Any, Dict, List, Optional, Sequence

from app.crud.base import CRUDBase
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.lesson import Lesson
from app.schemas.course import CourseCreate, CourseUpdate


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):

    def _query_with_lessons(self, db: Session):
        return db.query(Course).options(selectinload(Course.lessons))

    def get(self, db: Session, id: int) -> Optional[Course]:
        return self._query_with_lessons(db).filter(Course.id == id).first()

    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Course]:
        return self._query_with_lessons(db).filter(Course.slug == slug).first()

    def get_filtered(
        self, db: Session, *, category: Optional[str] = None, search: Optional[str] = None
    ) -> List[Course]:
        query = self._query_with_lessons(db)
        if category:
            query = query.filter(Course.category == category)
        if search:
            query = query.filter(Course.title.ilike(f"%{_escape_like(search)}%", escape="\\"))
        return query.order_by(Course.id).all()

    def _add_with_lessons(
        self, db: Session, course_data: Dict[str, Any], lessons: Sequence[Dict[str, Any]]
    ) -> Course:
        db_course = Course(**course_data)
        db.add(db_course)
        db.flush()
        for lesson_data in lessons:
            db.add(Lesson(**lesson_data, course_id=db_course.id))
            db.flush()
        return db_course

    def create_with_lessons(
        self,
        db: Session,
        *,
        course_data: Dict[str, Any],
        lessons: Sequence[Dict[str, Any]],
        commit: bool = True
    ) -> Course:
        """Insert a course and its lessons in one transaction.

        With `commit=False` the rows are only flushed; the caller commits or rolls back.
        """
        if not commit:
            return self._add_with_lessons(db, course_data, lessons)
        try:
            db_course = self._add_with_lessons(db, course_data, lessons)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(db_course)
        return self.get(db, id=db_course.id)

    def update_scalars(self, db: Session, *, id: int, obj_in: Dict[str, Any]) -> Optional[Course]:
        course = self.get(db, id=id)
        if not course:
            return None
        obj_in = {k: v for k, v in obj_in.items() if k != "lessons"}
        return self.update(db, db_obj=course, obj_in=obj_in)

    def delete_cascade(self, db: Session, *, id: int) -> bool:
        """Delete a course with its lessons and enrollments in one transaction."""
        try:
            db.query(Lesson).filter(Lesson.course_id == id).delete(synchronize_session="fetch")
            db.query(Enrollment).filter(Enrollment.course_id == id).delete(synchronize_session="fetch")
            deleted = db.query(Course).filter(Course.id == id).delete(synchronize_session="fetch")
            db.commit()
        except Exception:
            db.rollback()
            raise
        return deleted > 0


course = CRUDCourse(Course)
