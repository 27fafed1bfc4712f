import logging
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.middleware.exceptions import FieldValidationError
from app.models.enrollment import Enrollment
from app.schemas.enrollment import ProgressUpdate

logger = logging.getLogger(__name__)


class EnrollmentService:

    def enroll(self, db: Session, *, user_id: int, course_id: int) -> Enrollment:
        if not crud_course.get(db, id=course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

        if crud_enrollment.get_by_user_and_course(db, user_id=user_id, course_id=course_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Already enrolled")

        try:
            enrollment = crud_enrollment.create_for_user(db, user_id=user_id, course_id=course_id)
        except IntegrityError:
            # The unique (user_id, course_id) constraint caught a concurrent enroll
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Already enrolled")

        logger.info(f"User {user_id} enrolled in course {course_id}")
        return enrollment

    def get_user_enrollments(self, db: Session, *, user_id: int) -> List[Enrollment]:
        return crud_enrollment.get_by_user(db, user_id=user_id)

    def update_progress(self, db: Session, *, enrollment_id: int, user_id: int, progress_in: ProgressUpdate) -> Enrollment:
        enrollment = crud_enrollment.get(db, id=enrollment_id)
        if not enrollment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment not found")
        if enrollment.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")

        course = crud_course.get(db, id=enrollment.course_id)
        lesson_ids = {lesson.id for lesson in course.lessons} if course else set()
        if progress_in.lesson_id not in lesson_ids:
            raise FieldValidationError(field="lessonId", message="Lesson does not belong to this course")

        progress = dict(enrollment.progress or {})
        progress[str(progress_in.lesson_id)] = progress_in.completed
        return crud_enrollment.replace_progress(db, id=enrollment.id, progress=progress)


enrollment_service = EnrollmentService()
