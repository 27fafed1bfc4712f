from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.contract import api
from app.schemas.course import Course, CourseCreate, CourseUpdate, CourseWithLessons
from app.schemas.token import TokenPayload
from app.services.course import course_service
from app.utils import deps

router = APIRouter()


@router.get(api.courses.list.path, response_model=List[CourseWithLessons])
def list_courses(
    db: Session = Depends(deps.get_db),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None)
):
    return course_service.list_courses(db, category=category, search=search)


@router.get(api.courses.get.path, response_model=CourseWithLessons)
def read_course(
    *,
    db: Session = Depends(deps.get_db),
    id: str
):
    """Look a course up by numeric id or by slug."""
    return course_service.get_course(db, id_or_slug=id)


@router.post(api.courses.create.path, response_model=CourseWithLessons, status_code=status.HTTP_201_CREATED)
def create_course(
    *,
    db: Session = Depends(deps.get_db),
    course_in: CourseCreate,
    admin: TokenPayload = Depends(deps.require_admin)
):
    return course_service.create_course(db, course_in=course_in)


@router.put(api.courses.update.path, response_model=Course)
def update_course(
    *,
    db: Session = Depends(deps.get_db),
    id: int,
    course_in: CourseUpdate,
    admin: TokenPayload = Depends(deps.require_admin)
):
    return course_service.update_course(db, course_id=id, course_in=course_in)


@router.delete(api.courses.delete.path, status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_course(
    *,
    db: Session = Depends(deps.get_db),
    id: int,
    admin: TokenPayload = Depends(deps.require_admin)
):
    course_service.delete_course(db, course_id=id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
