from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.contract import api
from app.schemas.enrollment import Enrollment, EnrollmentCreate, EnrollmentWithCourse, ProgressUpdate
from app.schemas.token import TokenPayload
from app.services.enrollment import enrollment_service
from app.utils import deps

router = APIRouter()


@router.post(api.enrollments.enroll.path, response_model=Enrollment, status_code=status.HTTP_201_CREATED)
def enroll(
    *,
    db: Session = Depends(deps.get_db),
    enrollment_in: EnrollmentCreate,
    current_user: TokenPayload = Depends(deps.get_current_user)
):
    return enrollment_service.enroll(db, user_id=current_user.user_id, course_id=enrollment_in.course_id)


@router.get(api.enrollments.list.path, response_model=List[EnrollmentWithCourse])
def read_my_enrollments(
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user)
):
    return enrollment_service.get_user_enrollments(db, user_id=current_user.user_id)


@router.put(api.enrollments.update_progress.path, response_model=Enrollment)
def update_progress(
    *,
    db: Session = Depends(deps.get_db),
    id: int,
    progress_in: ProgressUpdate,
    current_user: TokenPayload = Depends(deps.get_current_user)
):
    """Mark one lesson complete or incomplete, keeping the rest of the progress map."""
    return enrollment_service.update_progress(
        db, enrollment_id=id, user_id=current_user.user_id, progress_in=progress_in
    )
