import logging
from typing import List, Optional, Union
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud.course import course as crud_course
from app.models.course import Course
from app.schemas.course import CourseCreate, CourseUpdate

logger = logging.getLogger(__name__)

NULLABLE_COURSE_FIELDS = {"thumbnail_url"}


def parse_course_identifier(id_or_slug: str) -> Union[int, str]:
    """Integer-looking path parameters address a course by id, anything else by slug."""
    try:
        return int(id_or_slug)
    except ValueError:
        return id_or_slug


class CourseService:

    def _get_or_404(self, db: Session, course_id: int) -> Course:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        return course

    def _ensure_slug_free(self, db: Session, slug: str, course_id: Optional[int] = None) -> None:
        existing = crud_course.get_by_slug(db, slug=slug)
        if existing and existing.id != course_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Slug already exists")

    def list_courses(self, db: Session, *, category: Optional[str] = None, search: Optional[str] = None) -> List[Course]:
        return crud_course.get_filtered(db, category=category, search=search)

    def get_course(self, db: Session, *, id_or_slug: str) -> Course:
        identifier = parse_course_identifier(id_or_slug)
        if isinstance(identifier, int):
            course = crud_course.get(db, id=identifier)
        else:
            course = crud_course.get_by_slug(db, slug=identifier)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        return course

    def create_course(self, db: Session, *, course_in: CourseCreate) -> Course:
        self._ensure_slug_free(db, course_in.slug)

        course_data = course_in.model_dump(exclude={"lessons"})
        lessons = [lesson.model_dump() for lesson in course_in.lessons]
        try:
            new_course = crud_course.create_with_lessons(db, course_data=course_data, lessons=lessons)
        except IntegrityError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Slug already exists")

        logger.info(f"Course {new_course.id} ({new_course.slug}) created with {len(lessons)} lessons")
        return new_course

    def update_course(self, db: Session, *, course_id: int, course_in: CourseUpdate) -> Course:
        self._get_or_404(db, course_id)
        update_data = {
            field: value
            for field, value in course_in.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_COURSE_FIELDS
        }
        if update_data.get("slug"):
            self._ensure_slug_free(db, update_data["slug"], course_id=course_id)

        try:
            updated = crud_course.update_scalars(db, id=course_id, obj_in=update_data)
        except IntegrityError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Slug already exists")
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        return updated

    def delete_course(self, db: Session, *, course_id: int) -> None:
        self._get_or_404(db, course_id)
        crud_course.delete_cascade(db, id=course_id)
        logger.info(f"Course {course_id} deleted with its lessons and enrollments")


course_service = CourseService()
