from typing import Dict
from sqlalchemy.orm import Session

from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.user import user as crud_user


def get_stats(db: Session) -> Dict[str, int]:
    return {
        "total_users": crud_user.count(db),
        "total_courses": crud_course.count(db),
        "total_enrollments": crud_enrollment.count(db),
    }
